"""FastAPI dependencies shared by the routers."""

from fastapi import Request

from ..store import LibraryStore


def get_store(request: Request) -> LibraryStore:
    """The LibraryStore owned by the running application."""
    return request.app.state.store
