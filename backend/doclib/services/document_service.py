"""Document service: deep module for the document lifecycle.

Owns document CRUD, the catalogue queries, search, download counting and
favorites.  Every mutation that can change which approved documents a folder
holds ends with FolderService.recompute_document_count for the affected
folder(s), inside the same transaction.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..exceptions import ConflictError, ValidationError
from ..models import Document, DocumentStatus
from ..models.document import DEFAULT_MIME_TYPE
from ..repositories import DocumentRepository, FolderRepository, UserRepository
from ..schemas.document import DocumentCreate, DocumentUpdate
from .folder_service import FolderService

logger = logging.getLogger(__name__)


class DocumentService:
    """Deep module for document operations.

    Lookups return None for unknown ids; the route layer decides whether
    that is a 404.  Uniqueness of external_ref is enforced here and
    surfaces as ConflictError.
    """

    def __init__(self, db: Session):
        self.db = db
        self.doc_repo = DocumentRepository(db)
        self.folder_repo = FolderRepository(db)
        self.user_repo = UserRepository(db)
        self.folder_service = FolderService(db)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_approved_documents(self) -> List[Document]:
        return self.doc_repo.get_by_status(DocumentStatus.APPROVED)

    def list_documents_by_folder(self, folder_id: int) -> List[Document]:
        return self.doc_repo.get_by_folder(folder_id, DocumentStatus.APPROVED)

    def list_favorite_documents(self) -> List[Document]:
        return self.doc_repo.get_favorites()

    def get_document(self, doc_id: int) -> Optional[Document]:
        return self.doc_repo.get_by_id_optional(doc_id)

    def get_document_by_external_ref(self, external_ref: str) -> Optional[Document]:
        return self.doc_repo.get_by_external_ref(external_ref)

    def search_documents(self, query: str) -> List[Document]:
        """Title/description search across every moderation status."""
        results = self.doc_repo.search(query)
        logger.debug("Search %r matched %d documents", query, len(results))
        return results

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_document(
        self,
        document: DocumentCreate,
        commit: bool = True,
        uploaded_at: Optional[datetime] = None,
    ) -> Document:
        """Create an approved document and refresh its folder's count.

        *uploaded_at* overrides the upload timestamp (imports keep the
        source's creation time); it defaults to now.
        """
        fields = {
            "title": document.title,
            "description": document.description,
            "file_name": document.file_name,
            "file_size": document.file_size,
            "page_count": document.page_count,
            "mime_type": document.mime_type or DEFAULT_MIME_TYPE,
            "external_ref": document.external_ref,
            "download_url": document.download_url if document.download_url is not None else "",
            "folder_id": document.folder_id,
            "is_favorite": document.is_favorite,
            "uploaded_by": document.uploaded_by,
            "uploader_name": document.uploader_name,
            "status": DocumentStatus.APPROVED.value,
        }
        if uploaded_at is not None:
            fields["uploaded_at"] = uploaded_at
        return self.insert_document(fields, commit=commit)

    def insert_document(self, fields: Dict[str, Any], commit: bool = True) -> Document:
        """Persist a document from column values (shared by every intake path).

        Fills download_count, moderator_notes and (unless given) uploaded_at,
        validates the folder, uploader and external reference, and recomputes
        the folder count when the new document is approved.
        """
        self._check_folder(fields.get("folder_id"))
        self._check_user(fields.get("uploaded_by"))
        self._check_external_ref(fields["external_ref"])

        fields = {
            **fields,
            "download_count": 0,
            "moderator_notes": None,
            "uploaded_at": fields.get("uploaded_at") or datetime.now(timezone.utc),
        }
        db_document = self.doc_repo.create(fields)

        if db_document.is_approved:
            self.folder_service.recompute_document_count(db_document.folder_id)

        if commit:
            self.db.commit()
        logger.info(
            "Document created",
            extra={"doc_id": db_document.id, "folder_id": db_document.folder_id, "status": db_document.status},
        )
        return db_document

    def update_document(self, doc_id: int, update_data: DocumentUpdate, commit: bool = True) -> Optional[Document]:
        """Shallow-merge the provided fields into the document.

        When the folder or the status changes, both the previous and the new
        folder are recounted.
        """
        db_document = self.doc_repo.get_by_id_optional(doc_id)
        if db_document is None:
            return None

        changes = update_data.changes()
        if "title" in changes and changes["title"] is None:
            raise ValidationError("Title cannot be null", field="title")
        if "external_ref" in changes:
            if not changes["external_ref"]:
                raise ValidationError("External reference cannot be empty", field="externalRef")
            if changes["external_ref"] != db_document.external_ref:
                self._check_external_ref(changes["external_ref"])
        if "folder_id" in changes and changes["folder_id"] != db_document.folder_id:
            self._check_folder(changes["folder_id"])
        for column in ("file_name", "file_size", "mime_type", "is_favorite", "status"):
            if column in changes and changes[column] is None:
                raise ValidationError(f"{column} cannot be null", field=column)

        old_folder_id = db_document.folder_id
        old_status = db_document.status

        updated = self.doc_repo.update(db_document, changes)

        if updated.folder_id != old_folder_id or updated.status != old_status:
            self.folder_service.recompute_document_count(old_folder_id)
            if updated.folder_id != old_folder_id:
                self.folder_service.recompute_document_count(updated.folder_id)

        if commit:
            self.db.commit()
        logger.info("Document updated", extra={"doc_id": doc_id, "fields": sorted(changes)})
        return updated

    def delete_document(self, doc_id: int, commit: bool = True) -> bool:
        """Remove the document. Returns False if it did not exist."""
        db_document = self.doc_repo.get_by_id_optional(doc_id)
        if db_document is None:
            return False

        folder_id = db_document.folder_id
        self.doc_repo.delete(db_document)
        self.folder_service.recompute_document_count(folder_id)

        if commit:
            self.db.commit()
        logger.info("Document deleted", extra={"doc_id": doc_id, "folder_id": folder_id})
        return True

    def increment_download_count(self, doc_id: int, commit: bool = True) -> bool:
        incremented = self.doc_repo.increment_download_count(doc_id)
        if incremented and commit:
            self.db.commit()
        return incremented

    def toggle_favorite(self, doc_id: int, commit: bool = True) -> Optional[Document]:
        db_document = self.doc_repo.toggle_favorite(doc_id)
        if db_document is not None and commit:
            self.db.commit()
        return db_document

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _check_folder(self, folder_id: Optional[int]) -> None:
        if folder_id is not None and self.folder_repo.get_by_id_optional(folder_id) is None:
            raise ValidationError(f"Folder does not exist: {folder_id}", field="folderId")

    def _check_user(self, user_id: Optional[int]) -> None:
        if user_id is not None and self.user_repo.get_by_id_optional(user_id) is None:
            raise ValidationError(f"User does not exist: {user_id}", field="uploadedBy")

    def _check_external_ref(self, external_ref: str) -> None:
        if self.doc_repo.get_by_external_ref(external_ref) is not None:
            raise ConflictError("externalRef", external_ref)
