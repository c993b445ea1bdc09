"""Repository for folder database operations."""

from typing import Optional
from ..models import Folder
from ..exceptions import FolderNotFoundError
from ..schemas.folder import FolderCreate
from .base import BaseRepository


class FolderRepository(BaseRepository[Folder]):
    """Data access layer for folders."""

    model_class = Folder
    not_found_error = FolderNotFoundError

    def create(self, data: FolderCreate) -> Folder:
        """Create a new folder with an empty document count."""
        folder = Folder(
            name=data.name,
            parent_id=data.parent_id,
            external_ref=data.external_ref,
            document_count=0,
        )
        self.db.add(folder)
        self.db.flush()
        self.db.refresh(folder)
        return folder

    def get_by_external_ref(self, external_ref: str) -> Optional[Folder]:
        """Get folder by its id in the external file source."""
        return self._base_query().filter(Folder.external_ref == external_ref).first()

    def set_document_count(self, folder_id: int, count: int) -> bool:
        """Overwrite the cached count. Returns False if the folder is missing."""
        folder = self.get_by_id_optional(folder_id)
        if folder is None:
            return False
        folder.document_count = count
        self.db.flush()
        return True
