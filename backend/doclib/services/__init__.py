"""Business logic services."""

from .document_service import DocumentService
from .folder_service import FolderService
from .import_service import ImportService
from .moderation_service import ModerationService
from .user_service import UserService

__all__ = ["DocumentService", "FolderService", "ImportService", "ModerationService", "UserService"]
