"""Contribution intake and the moderator endpoints.

``POST /api/contribute`` is the public upload form; the ``/api/admin``
routes drive the pending -> approved / rejected transitions.  Rejections
without notes never reach the store: RejectRequest refuses blank notes.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends

from ..exceptions import DocumentNotFoundError
from ..schemas.document import ApproveRequest, ContributionCreate, DocumentResponse, RejectRequest
from ..schemas.user import UserResponse
from ..store import LibraryStore
from .deps import get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["moderation"])


@router.post("/api/contribute", response_model=DocumentResponse, status_code=201)
def submit_contribution(contribution: ContributionCreate, store: LibraryStore = Depends(get_store)):
    """Submit a document for review. It stays pending until a moderator acts."""
    return store.submit_contribution(contribution)


@router.get("/api/admin/pending", response_model=List[DocumentResponse])
def list_pending(store: LibraryStore = Depends(get_store)):
    return store.list_pending_documents()


@router.post("/api/admin/approve/{doc_id}", response_model=DocumentResponse)
def approve_document(
    doc_id: int,
    data: Optional[ApproveRequest] = Body(None),
    store: LibraryStore = Depends(get_store),
):
    notes = data.moderator_notes if data is not None else None
    document = store.approve_document(doc_id, notes)
    if document is None:
        raise DocumentNotFoundError(doc_id)
    return document


@router.post("/api/admin/reject/{doc_id}", response_model=DocumentResponse)
def reject_document(
    doc_id: int,
    data: RejectRequest = Body(...),
    store: LibraryStore = Depends(get_store),
):
    document = store.reject_document(doc_id, data.moderator_notes)
    if document is None:
        raise DocumentNotFoundError(doc_id)
    return document


@router.get("/api/admin/users", response_model=List[UserResponse])
def list_users(store: LibraryStore = Depends(get_store)):
    """Contributors, in registration order."""
    return store.list_users()
