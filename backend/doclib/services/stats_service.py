"""Library-wide counters for the header summary and the health probe.

Usage:
    stats = stats_service.collect(db)
"""

from sqlalchemy.orm import Session

from ..models import DocumentStatus
from ..repositories import DocumentRepository, FolderRepository, UserRepository
from ..schemas.document import LibraryStats


def collect(db: Session) -> LibraryStats:
    """Count folders, documents per status, users and downloads."""
    doc_repo = DocumentRepository(db)
    by_status = doc_repo.count_by_status()
    return LibraryStats(
        folders=FolderRepository(db).count(),
        approved_documents=by_status.get(DocumentStatus.APPROVED.value, 0),
        pending_documents=by_status.get(DocumentStatus.PENDING.value, 0),
        rejected_documents=by_status.get(DocumentStatus.REJECTED.value, 0),
        users=UserRepository(db).count(),
        total_downloads=doc_repo.total_downloads(),
    )
