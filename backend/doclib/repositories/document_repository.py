"""Document repository for database operations.

Owns all document query logic.  Every read is ordered by id so listings come
back in insertion order.  Status filtering is explicit: the public catalogue
only shows approved documents, moderation works on pending ones, and search
deliberately spans every status.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func, not_

from ..models import Document, DocumentStatus
from ..exceptions import DocumentNotFoundError
from .base import BaseRepository


class DocumentRepository(BaseRepository[Document]):
    """Repository for document CRUD operations."""

    model_class = Document
    not_found_error = DocumentNotFoundError

    def create(self, fields: Dict[str, Any]) -> Document:
        """Insert a document from a complete column mapping."""
        db_document = Document(**fields)
        self.db.add(db_document)
        self.db.flush()
        self.db.refresh(db_document)
        return db_document

    def get_by_external_ref(self, external_ref: str) -> Optional[Document]:
        """Exact match on the external reference (unique)."""
        return self._base_query().filter(Document.external_ref == external_ref).first()

    def get_by_status(self, status: DocumentStatus) -> List[Document]:
        return self._base_query().filter(Document.status == status.value).all()

    def get_by_folder(self, folder_id: int, status: DocumentStatus = DocumentStatus.APPROVED) -> List[Document]:
        """Documents directly inside *folder_id* (no descent into child folders)."""
        return self._base_query().filter(
            Document.folder_id == folder_id,
            Document.status == status.value,
        ).all()

    def get_favorites(self) -> List[Document]:
        """Approved documents flagged as favorite."""
        return self._base_query().filter(
            Document.is_favorite.is_(True),
            Document.status == DocumentStatus.APPROVED.value,
        ).all()

    def count_approved_in_folder(self, folder_id: int) -> int:
        return self.db.query(Document).filter(
            Document.folder_id == folder_id,
            Document.status == DocumentStatus.APPROVED.value,
        ).count()

    def count_by_status(self) -> Dict[str, int]:
        """Map of status value -> number of documents."""
        rows = (
            self.db.query(Document.status, func.count(Document.id))
            .group_by(Document.status)
            .all()
        )
        return {status: count for status, count in rows}

    def total_downloads(self) -> int:
        return self.db.query(func.coalesce(func.sum(Document.download_count), 0)).scalar() or 0

    def search(self, query: str) -> List[Document]:
        """Case-insensitive substring match on title or description, any status.

        SQLite's lower()/LIKE only fold ASCII, which breaks on Vietnamese
        titles ("TOÁN" vs "toán"), so matching happens in Python over an
        id-ordered scan.
        """
        needle = query.lower()
        return [
            doc for doc in self._base_query().all()
            if needle in doc.title.lower()
            or (doc.description is not None and needle in doc.description.lower())
        ]

    def update(self, db_document: Document, changes: Dict[str, Any]) -> Document:
        """Shallow merge: provided fields overwrite, the rest is kept."""
        for key, value in changes.items():
            setattr(db_document, key, value)
        self.db.flush()
        self.db.refresh(db_document)
        return db_document

    def delete(self, db_document: Document) -> None:
        self.db.delete(db_document)
        self.db.flush()

    def increment_download_count(self, doc_id: int) -> bool:
        """Add one to the counter in a single UPDATE. False if the document is missing."""
        rowcount = (
            self.db.query(Document)
            .filter(Document.id == doc_id)
            .update(
                {Document.download_count: Document.download_count + 1},
                synchronize_session=False,
            )
        )
        if rowcount:
            # Refresh any instance already in the identity map.
            self.db.expire_all()
        return rowcount > 0

    def toggle_favorite(self, doc_id: int) -> Optional[Document]:
        """Flip is_favorite in a single UPDATE and return the fresh row."""
        rowcount = (
            self.db.query(Document)
            .filter(Document.id == doc_id)
            .update(
                {Document.is_favorite: not_(Document.is_favorite)},
                synchronize_session=False,
            )
        )
        if not rowcount:
            return None
        self.db.expire_all()
        return self.get_by_id(doc_id)
