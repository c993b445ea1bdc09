"""Pydantic schemas for API validation."""

from .folder import FolderCreate, FolderResponse
from .user import UserCreate, UserResponse
from .document import (
    DocumentCreate,
    DocumentUpdate,
    DocumentResponse,
    DownloadResponse,
    ContributionCreate,
    ApproveRequest,
    RejectRequest,
    DriveFile,
    DriveSyncRequest,
    DriveSyncResult,
    DriveSyncResponse,
    LibraryStats,
)

__all__ = [
    "FolderCreate",
    "FolderResponse",
    "UserCreate",
    "UserResponse",
    "DocumentCreate",
    "DocumentUpdate",
    "DocumentResponse",
    "DownloadResponse",
    "ContributionCreate",
    "ApproveRequest",
    "RejectRequest",
    "DriveFile",
    "DriveSyncRequest",
    "DriveSyncResult",
    "DriveSyncResponse",
    "LibraryStats",
]
