"""Data access repositories."""

from .base import BaseRepository
from .document_repository import DocumentRepository
from .folder_repository import FolderRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "DocumentRepository",
    "FolderRepository",
    "UserRepository",
]
