"""Database models."""

from .folder import Folder
from .document import Document, DocumentStatus
from .user import User

__all__ = ["Folder", "Document", "DocumentStatus", "User"]
