"""API routes."""

from .documents import router as documents_router
from .folders import router as folders_router
from .library import router as library_router
from .moderation import router as moderation_router

__all__ = [
    "documents_router",
    "folders_router",
    "library_router",
    "moderation_router",
]
