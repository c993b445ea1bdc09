"""Drive synchronisation and library statistics."""

import logging

from fastapi import APIRouter, Depends

from ..schemas.document import DriveSyncRequest, DriveSyncResponse, LibraryStats
from ..store import LibraryStore
from .deps import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["library"])


@router.post("/sync-drive", response_model=DriveSyncResponse)
def sync_drive(request: DriveSyncRequest, store: LibraryStore = Depends(get_store)):
    """Import a Drive file listing. Already known files are skipped."""
    result = store.import_drive_files(request.files, request.folder_id)
    return DriveSyncResponse(
        message="Google Drive sync completed",
        imported=result.imported,
        skipped=result.skipped,
        documents=result.documents,
    )


@router.get("/stats", response_model=LibraryStats)
def get_stats(store: LibraryStore = Depends(get_store)):
    return store.get_stats()
