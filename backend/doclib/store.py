"""The Library Store: the single owner of folder, document and user state.

A LibraryStore is an explicit object, built once by the composition root
(``create_app``) and handed to the route layer through ``app.state``.  It owns
its own engine, so every store has a private database and private id
sequences.

Every public method runs under one re-entrant lock and inside one session,
and returns pydantic snapshots rather than live ORM rows.  Read-modify-write
sequences (create then recount, increment, toggle) are therefore mutually
exclusive and never observed half-done, even when the host serves requests
from a thread pool.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .database import IN_MEMORY_URL, create_session_factory, create_store_engine, create_tables
from .repositories import DocumentRepository, FolderRepository
from .schemas.document import (
    ContributionCreate,
    DocumentCreate,
    DocumentResponse,
    DocumentUpdate,
    DriveFile,
    DriveSyncResult,
    LibraryStats,
)
from .schemas.folder import FolderCreate, FolderResponse
from .schemas.user import UserCreate, UserResponse
from .services import DocumentService, FolderService, ImportService, ModerationService, UserService
from .services import stats_service

logger = logging.getLogger(__name__)


def _documents(rows) -> List[DocumentResponse]:
    return [DocumentResponse.model_validate(row) for row in rows]


def _document(row) -> Optional[DocumentResponse]:
    return DocumentResponse.model_validate(row) if row is not None else None


def _folder(row) -> Optional[FolderResponse]:
    return FolderResponse.model_validate(row) if row is not None else None


def _user(row) -> Optional[UserResponse]:
    return UserResponse.model_validate(row) if row is not None else None


class LibraryStore:
    """In-process repository for folders, documents and contributors.

    Lookups by id return None when the entity is absent, and delete /
    increment return False; they never raise for a missing id.  Unique-key
    violations raise ConflictError and references to unknown folders or
    users raise ValidationError.
    """

    def __init__(self, database_url: str = IN_MEMORY_URL, engine: Optional[Engine] = None):
        self.engine = engine if engine is not None else create_store_engine(database_url)
        create_tables(self.engine)
        self._session_factory = create_session_factory(self.engine)
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Exclusive session; rolled back on error, always closed."""
        with self._lock:
            db = self._session_factory()
            try:
                yield db
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def close(self) -> None:
        self.engine.dispose()

    def is_empty(self) -> bool:
        """True when the store holds no folders and no documents."""
        with self.session() as db:
            return FolderRepository(db).count() == 0 and DocumentRepository(db).count() == 0

    # ------------------------------------------------------------------
    # Folders
    # ------------------------------------------------------------------

    def list_folders(self) -> List[FolderResponse]:
        with self.session() as db:
            return [FolderResponse.model_validate(f) for f in FolderService(db).list_folders()]

    def get_folder(self, folder_id: int) -> Optional[FolderResponse]:
        with self.session() as db:
            return _folder(FolderService(db).get_folder(folder_id))

    def create_folder(
        self, name: str, parent_id: Optional[int] = None, external_ref: Optional[str] = None
    ) -> FolderResponse:
        data = FolderCreate(name=name, parent_id=parent_id, external_ref=external_ref)
        with self.session() as db:
            return _folder(FolderService(db).create_folder(data))

    def set_folder_document_count(self, folder_id: int, count: int) -> None:
        with self.session() as db:
            FolderService(db).set_document_count(folder_id, count)

    def get_folder_by_external_ref(self, external_ref: str) -> Optional[FolderResponse]:
        with self.session() as db:
            return _folder(FolderService(db).get_folder_by_external_ref(external_ref))

    def recompute_folder_count(self, folder_id: Optional[int]) -> Optional[int]:
        """Re-derive one folder's approved count. None for unknown folders."""
        with self.session() as db:
            count = FolderService(db).recompute_document_count(folder_id)
            db.commit()
            return count

    def recompute_all_folder_counts(self) -> int:
        with self.session() as db:
            return FolderService(db).recompute_all()

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def list_users(self) -> List[UserResponse]:
        with self.session() as db:
            return [UserResponse.model_validate(u) for u in UserService(db).list_users()]

    def get_user(self, user_id: int) -> Optional[UserResponse]:
        with self.session() as db:
            return _user(UserService(db).get_user(user_id))

    def get_user_by_email(self, email: str) -> Optional[UserResponse]:
        with self.session() as db:
            return _user(UserService(db).get_user_by_email(email))

    def create_user(self, name: str, email: str) -> UserResponse:
        data = UserCreate(name=name, email=email)
        with self.session() as db:
            return _user(UserService(db).create_user(data.name, data.email))

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def list_approved_documents(self) -> List[DocumentResponse]:
        with self.session() as db:
            return _documents(DocumentService(db).list_approved_documents())

    def list_approved_documents_by_folder(self, folder_id: int) -> List[DocumentResponse]:
        with self.session() as db:
            return _documents(DocumentService(db).list_documents_by_folder(folder_id))

    def list_favorite_documents(self) -> List[DocumentResponse]:
        with self.session() as db:
            return _documents(DocumentService(db).list_favorite_documents())

    def get_document(self, doc_id: int) -> Optional[DocumentResponse]:
        with self.session() as db:
            return _document(DocumentService(db).get_document(doc_id))

    def get_document_by_external_ref(self, external_ref: str) -> Optional[DocumentResponse]:
        with self.session() as db:
            return _document(DocumentService(db).get_document_by_external_ref(external_ref))

    def search_documents(self, query: str) -> List[DocumentResponse]:
        with self.session() as db:
            return _documents(DocumentService(db).search_documents(query))

    def create_document(self, document: Union[DocumentCreate, Dict[str, Any]]) -> DocumentResponse:
        if not isinstance(document, DocumentCreate):
            document = DocumentCreate.model_validate(document)
        with self.session() as db:
            return _document(DocumentService(db).create_document(document))

    def update_document(
        self, doc_id: int, changes: Union[DocumentUpdate, Dict[str, Any]]
    ) -> Optional[DocumentResponse]:
        if not isinstance(changes, DocumentUpdate):
            changes = DocumentUpdate.model_validate(changes)
        with self.session() as db:
            return _document(DocumentService(db).update_document(doc_id, changes))

    def delete_document(self, doc_id: int) -> bool:
        with self.session() as db:
            return DocumentService(db).delete_document(doc_id)

    def increment_download_count(self, doc_id: int) -> bool:
        with self.session() as db:
            return DocumentService(db).increment_download_count(doc_id)

    def record_download(self, doc_id: int) -> Optional[DocumentResponse]:
        """Count a download and return the document as it was fetched.

        Lookup and increment happen under one lock acquisition; None if the
        document does not exist.
        """
        with self.session() as db:
            service = DocumentService(db)
            document = _document(service.get_document(doc_id))
            if document is not None:
                service.increment_download_count(doc_id)
            return document

    def toggle_favorite(self, doc_id: int) -> Optional[DocumentResponse]:
        with self.session() as db:
            return _document(DocumentService(db).toggle_favorite(doc_id))

    # ------------------------------------------------------------------
    # Contribution & moderation
    # ------------------------------------------------------------------

    def submit_contribution(
        self, contribution: Union[ContributionCreate, Dict[str, Any]]
    ) -> DocumentResponse:
        if not isinstance(contribution, ContributionCreate):
            contribution = ContributionCreate.model_validate(contribution)
        with self.session() as db:
            return _document(ModerationService(db).submit_contribution(contribution))

    def list_pending_documents(self) -> List[DocumentResponse]:
        with self.session() as db:
            return _documents(ModerationService(db).list_pending_documents())

    def approve_document(self, doc_id: int, moderator_notes: Optional[str] = None) -> Optional[DocumentResponse]:
        with self.session() as db:
            return _document(ModerationService(db).approve_document(doc_id, moderator_notes))

    def reject_document(self, doc_id: int, moderator_notes: str) -> Optional[DocumentResponse]:
        with self.session() as db:
            return _document(ModerationService(db).reject_document(doc_id, moderator_notes))

    # ------------------------------------------------------------------
    # External source & statistics
    # ------------------------------------------------------------------

    def import_drive_files(
        self, files: Iterable[Union[DriveFile, Dict[str, Any]]], folder_id: Optional[int] = None
    ) -> DriveSyncResult:
        drive_files = [f if isinstance(f, DriveFile) else DriveFile.model_validate(f) for f in files]
        with self.session() as db:
            return ImportService(db).import_drive_files(drive_files, folder_id)

    def get_stats(self) -> LibraryStats:
        with self.session() as db:
            return stats_service.collect(db)
