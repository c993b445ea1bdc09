"""Document model."""

from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from ..database import Base

DEFAULT_MIME_TYPE = "application/pdf"


class DocumentStatus(str, Enum):
    """Moderation lifecycle: pending -> approved | rejected."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Document(Base):
    """Main documents table.

    Binary content never lives here: external_ref identifies the file in the
    external source and download_url is the retrieval pointer (NULL until the
    file is hosted).
    """

    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_folder_status", "folder_id", "status"),
        Index("ix_documents_status", "status"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)

    # File info
    file_name = Column(Text, nullable=False)
    file_size = Column(Integer, nullable=False)
    page_count = Column(Integer, nullable=True)
    mime_type = Column(String(100), nullable=False, default=DEFAULT_MIME_TYPE)

    # External source
    external_ref = Column(String(255), nullable=False, unique=True)
    download_url = Column(Text, nullable=True)

    folder_id = Column(Integer, ForeignKey("folders.id"), nullable=True)

    is_favorite = Column(Boolean, nullable=False, default=False)
    download_count = Column(Integer, nullable=False, default=0)

    # Attribution; uploader_name is a snapshot independent of later user edits
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    uploader_name = Column(Text, nullable=True)
    uploaded_at = Column(DateTime(timezone=True), nullable=False)

    # Moderation
    status = Column(String(20), nullable=False, default=DocumentStatus.APPROVED.value)
    moderator_notes = Column(Text, nullable=True)

    @property
    def is_approved(self) -> bool:
        return self.status == DocumentStatus.APPROVED.value
