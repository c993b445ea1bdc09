"""Folder model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from ..database import Base


class Folder(Base):
    """Folders form a tree through parent_id.

    document_count is a cache of the number of approved documents whose
    folder_id points here.  FolderService.recompute_document_count is the
    only writer besides explicit overrides.
    """

    __tablename__ = "folders"
    # AUTOINCREMENT: ids are never reused after a delete.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    parent_id = Column(Integer, ForeignKey("folders.id"), nullable=True)

    # Folder id in the external file source (e.g. a Drive folder id)
    external_ref = Column(String(255), nullable=True, index=True)

    document_count = Column(Integer, nullable=False, default=0)
