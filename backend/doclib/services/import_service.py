"""Import of external (Drive) file listings as library documents.

The external source is only ever described to us: callers hand in the file
metadata they listed, and each new PDF becomes an approved document through
DocumentService.create_document, the same path as a direct upload.  Files
already present (same external reference) are skipped, which makes repeated
syncs idempotent.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from ..models.document import DEFAULT_MIME_TYPE
from ..schemas.document import DocumentCreate, DriveFile, DriveSyncResult, DocumentResponse
from .document_service import DocumentService
from .folder_service import FolderService

logger = logging.getLogger(__name__)


def title_from_file_name(name: str) -> str:
    """'giao-trinh_toan.pdf' -> 'giao-trinh toan'."""
    stem = name.rsplit(".", 1)[0] if "." in name else name
    return stem.replace("_", " ").strip() or name


class ImportService:

    def __init__(self, db: Session):
        self.db = db
        self.document_service = DocumentService(db)
        self.folder_service = FolderService(db)

    def import_drive_files(
        self,
        files: Iterable[DriveFile],
        folder_id: Optional[int] = None,
        commit: bool = True,
    ) -> DriveSyncResult:
        """Create an approved document for every new PDF in *files*.

        The target folder is *folder_id* when given, otherwise the first
        parent whose id matches a folder's external_ref (or none).  The
        file's createdTime, when listed, becomes the upload time.
        """
        imported = []
        skipped = 0

        for drive_file in files:
            if drive_file.mime_type != DEFAULT_MIME_TYPE:
                logger.debug("Skipping non-PDF file %s (%s)", drive_file.id, drive_file.mime_type)
                skipped += 1
                continue
            if self.document_service.get_document_by_external_ref(drive_file.id) is not None:
                skipped += 1
                continue

            document = DocumentCreate(
                title=title_from_file_name(drive_file.name),
                file_name=drive_file.name,
                file_size=drive_file.size or 0,
                mime_type=drive_file.mime_type,
                external_ref=drive_file.id,
                download_url=drive_file.web_content_link or drive_file.web_view_link,
                folder_id=folder_id if folder_id is not None else self._folder_for(drive_file),
                uploader_name="Google Drive",
            )
            db_document = self.document_service.create_document(
                document, commit=False, uploaded_at=drive_file.created_time
            )
            imported.append(DocumentResponse.model_validate(db_document))

        if commit:
            self.db.commit()
        logger.info("Drive import finished", extra={"imported": len(imported), "skipped": skipped})
        return DriveSyncResult(imported=len(imported), skipped=skipped, documents=imported)

    def _folder_for(self, drive_file: DriveFile) -> Optional[int]:
        for parent in drive_file.parents:
            folder = self.folder_service.get_folder_by_external_ref(parent)
            if folder is not None:
                return folder.id
        return None
