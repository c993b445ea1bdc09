"""Deep module for folder operations: CRUD and approved-count maintenance.

recompute_document_count is the single place where a folder's cached
document_count is derived from the documents table.  DocumentService and
ModerationService call it after every mutation that can change folder
membership or approval status; nothing else computes the number.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..exceptions import ValidationError
from ..models import Folder
from ..repositories.document_repository import DocumentRepository
from ..repositories.folder_repository import FolderRepository
from ..schemas.folder import FolderCreate

logger = logging.getLogger(__name__)


class FolderService:
    """Folder operations behind a simple interface.

    Public methods:
        list_folders        -- all folders, id order
        get_folder          -- lookup by id
        get_folder_by_external_ref
        create_folder       -- parent must exist, count starts at 0
        set_document_count  -- raw override of the cached count
        recompute_document_count / recompute_all
    """

    def __init__(self, db: Session):
        self.db = db
        self.folder_repo = FolderRepository(db)
        self.doc_repo = DocumentRepository(db)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_folders(self) -> List[Folder]:
        return self.folder_repo.get_all()

    def get_folder(self, folder_id: int) -> Optional[Folder]:
        return self.folder_repo.get_by_id_optional(folder_id)

    def get_folder_by_external_ref(self, external_ref: str) -> Optional[Folder]:
        return self.folder_repo.get_by_external_ref(external_ref)

    def create_folder(self, data: FolderCreate, commit: bool = True) -> Folder:
        """Create a folder under an existing parent (or at the root).

        Parents must already exist, and ids only grow, so a folder can never
        become its own ancestor.
        """
        if data.parent_id is not None and self.folder_repo.get_by_id_optional(data.parent_id) is None:
            raise ValidationError(f"Parent folder does not exist: {data.parent_id}", field="parentId")

        folder = self.folder_repo.create(data)
        if commit:
            self.db.commit()
        logger.info("Folder created", extra={"folder_id": folder.id, "parent_id": folder.parent_id})
        return folder

    def set_document_count(self, folder_id: int, count: int, commit: bool = True) -> None:
        """Overwrite the cached count. Silently ignores unknown folders."""
        updated = self.folder_repo.set_document_count(folder_id, count)
        if not updated:
            logger.debug("Ignoring count update for missing folder %s", folder_id)
            return
        if commit:
            self.db.commit()

    def recompute_document_count(self, folder_id: Optional[int]) -> Optional[int]:
        """Set the folder's count to its number of approved documents.

        Does not commit: callers run it inside their own unit of work.
        Returns the new count, or None when there is nothing to recompute.
        """
        if folder_id is None:
            return None
        count = self.doc_repo.count_approved_in_folder(folder_id)
        if not self.folder_repo.set_document_count(folder_id, count):
            return None
        logger.debug("Recomputed folder %s document_count=%d", folder_id, count)
        return count

    def recompute_all(self, commit: bool = True) -> int:
        """Recompute every folder's count. Returns the number of folders touched."""
        folders = self.folder_repo.get_all()
        for folder in folders:
            self.recompute_document_count(folder.id)
        if commit:
            self.db.commit()
        return len(folders)
