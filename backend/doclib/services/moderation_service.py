"""Contribution intake and moderation.

State machine for contributed documents:

    pending --approve--> approved
    pending --reject---> rejected

Directly created and imported documents start approved and never pass
through here.  approve_document does not guard the source state, so an
already approved or rejected document can be (re-)approved; reject only
changes status and notes.  Non-empty rejection notes are a boundary-layer
rule: this module stores whatever string it is given.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models import Document, DocumentStatus
from ..models.document import DEFAULT_MIME_TYPE
from ..repositories import DocumentRepository
from ..schemas.document import ContributionCreate
from .document_service import DocumentService
from .folder_service import FolderService
from .user_service import UserService

# Prefix of the placeholder external reference given to contributions
# until the file is hosted in the external source.
PENDING_REF_PREFIX = "pending_"

logger = logging.getLogger(__name__)


def generate_pending_ref() -> str:
    """Unique placeholder external reference for a not-yet-hosted file."""
    return f"{PENDING_REF_PREFIX}{uuid.uuid4().hex}"


class ModerationService:
    """Public contribution path plus the moderator's approve/reject actions."""

    def __init__(self, db: Session):
        self.db = db
        self.doc_repo = DocumentRepository(db)
        self.document_service = DocumentService(db)
        self.folder_service = FolderService(db)
        self.user_service = UserService(db)

    def submit_contribution(self, contribution: ContributionCreate, commit: bool = True) -> Document:
        """Record a contribution as a pending document.

        Finds or creates the contributor by email.  Pending documents are
        not counted, so no folder count changes here.
        """
        user, created = self.user_service.get_or_create(
            contribution.uploader_name, contribution.uploader_email
        )
        if created:
            logger.info("New contributor registered", extra={"user_id": user.id})

        fields = {
            "title": contribution.title,
            "description": contribution.description,
            "file_name": contribution.file_name,
            "file_size": contribution.file_size,
            "page_count": contribution.page_count,
            "mime_type": contribution.mime_type or DEFAULT_MIME_TYPE,
            "external_ref": generate_pending_ref(),
            "download_url": None,
            "folder_id": contribution.folder_id,
            "is_favorite": False,
            "uploaded_by": user.id,
            "uploader_name": contribution.uploader_name,
            "status": DocumentStatus.PENDING.value,
        }
        db_document = self.document_service.insert_document(fields, commit=commit)
        logger.info(
            "Contribution submitted",
            extra={"doc_id": db_document.id, "user_id": user.id},
        )
        return db_document

    def list_pending_documents(self) -> List[Document]:
        return self.doc_repo.get_by_status(DocumentStatus.PENDING)

    def approve_document(
        self, doc_id: int, moderator_notes: Optional[str] = None, commit: bool = True
    ) -> Optional[Document]:
        """Approve and count the document in its folder. None if missing."""
        db_document = self.doc_repo.get_by_id_optional(doc_id)
        if db_document is None:
            return None

        previous = db_document.status
        db_document = self.doc_repo.update(db_document, {
            "status": DocumentStatus.APPROVED.value,
            "moderator_notes": moderator_notes or None,
        })
        self.folder_service.recompute_document_count(db_document.folder_id)

        if commit:
            self.db.commit()
        logger.info(
            "Document approved",
            extra={"doc_id": doc_id, "previous_status": previous, "folder_id": db_document.folder_id},
        )
        return db_document

    def reject_document(self, doc_id: int, moderator_notes: str, commit: bool = True) -> Optional[Document]:
        """Reject the document. Folder counts are left untouched."""
        db_document = self.doc_repo.get_by_id_optional(doc_id)
        if db_document is None:
            return None

        previous = db_document.status
        db_document = self.doc_repo.update(db_document, {
            "status": DocumentStatus.REJECTED.value,
            "moderator_notes": moderator_notes,
        })

        if commit:
            self.db.commit()
        logger.info("Document rejected", extra={"doc_id": doc_id, "previous_status": previous})
        return db_document
