"""Document API endpoints.

Endpoints are thin: the LibraryStore handles the full lifecycle (CRUD,
folder counts, counters).  Public listings only contain approved documents;
``?search=`` deliberately searches every moderation status.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response

from ..exceptions import DocumentNotFoundError
from ..schemas.document import DocumentCreate, DocumentResponse, DocumentUpdate, DownloadResponse
from ..store import LibraryStore
from .deps import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.get("", response_model=List[DocumentResponse])
def list_documents(
    search: Optional[str] = Query(None),
    folder_id: Optional[int] = Query(None, alias="folderId"),
    store: LibraryStore = Depends(get_store),
):
    """Approved documents, optionally narrowed to one folder; or a search over all statuses."""
    if search:
        return store.search_documents(search)
    if folder_id is not None:
        return store.list_approved_documents_by_folder(folder_id)
    return store.list_approved_documents()


@router.post("", response_model=DocumentResponse, status_code=201)
def create_document(document: DocumentCreate, store: LibraryStore = Depends(get_store)):
    """Create an approved document (direct upload). 409 on a duplicate external reference."""
    return store.create_document(document)


# --- Fixed-path endpoints (must be before /{doc_id} to avoid route shadowing) ---


@router.get("/favorites", response_model=List[DocumentResponse])
def list_favorites(store: LibraryStore = Depends(get_store)):
    return store.list_favorite_documents()


# --- Parameterized endpoints (/{doc_id} and /{doc_id}/...) ---


@router.get("/{doc_id}", response_model=DocumentResponse)
def get_document(doc_id: int, store: LibraryStore = Depends(get_store)):
    """Any document by id, whatever its moderation status."""
    document = store.get_document(doc_id)
    if document is None:
        raise DocumentNotFoundError(doc_id)
    return document


@router.patch("/{doc_id}", response_model=DocumentResponse)
def update_document(
    doc_id: int,
    changes: DocumentUpdate = Body(...),
    store: LibraryStore = Depends(get_store),
):
    """Partial update; omitted fields keep their value."""
    document = store.update_document(doc_id, changes)
    if document is None:
        raise DocumentNotFoundError(doc_id)
    return document


@router.delete("/{doc_id}", status_code=204)
def delete_document(doc_id: int, store: LibraryStore = Depends(get_store)):
    if not store.delete_document(doc_id):
        raise DocumentNotFoundError(doc_id)
    return Response(status_code=204)


@router.post("/{doc_id}/download", response_model=DownloadResponse)
def download_document(doc_id: int, store: LibraryStore = Depends(get_store)):
    """Count a download and hand back the retrieval pointer."""
    document = store.record_download(doc_id)
    if document is None:
        raise DocumentNotFoundError(doc_id)
    return DownloadResponse(download_url=document.download_url)


@router.post("/{doc_id}/favorite", response_model=DocumentResponse)
def toggle_favorite(doc_id: int, store: LibraryStore = Depends(get_store)):
    document = store.toggle_favorite(doc_id)
    if document is None:
        raise DocumentNotFoundError(doc_id)
    return document
