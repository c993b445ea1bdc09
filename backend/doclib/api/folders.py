"""Folder API: list, get and create.

Thin mapping onto the LibraryStore; document counts in responses are the
cached approved counts.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from ..exceptions import FolderNotFoundError
from ..schemas.folder import FolderCreate, FolderResponse
from ..store import LibraryStore
from .deps import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/folders", tags=["folders"])


@router.get("", response_model=List[FolderResponse])
def list_folders(store: LibraryStore = Depends(get_store)):
    return store.list_folders()


@router.get("/{folder_id}", response_model=FolderResponse)
def get_folder(folder_id: int, store: LibraryStore = Depends(get_store)):
    folder = store.get_folder(folder_id)
    if folder is None:
        raise FolderNotFoundError(folder_id)
    return folder


@router.post("", response_model=FolderResponse, status_code=201)
def create_folder(data: FolderCreate, store: LibraryStore = Depends(get_store)):
    """Create a folder. The parent, when given, must exist."""
    return store.create_folder(data.name, data.parent_id, data.external_ref)
