"""FastAPI application factory (the composition root).

``create_app`` builds the one LibraryStore of the process, attaches it to
``app.state.store`` and wires routers, middleware and exception handlers.
Run with ``uvicorn doclib.main:create_app --factory`` or ``doclib-server``.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import documents_router, folders_router, library_router, moderation_router
from .api.deps import get_store
from .core.config import ConfigurationError, Environment, Settings, get_settings
from .core.logging_config import setup_logging
from .core.seeder import seed_library
from .database import is_in_memory
from .exceptions import LibraryException
from .middleware.exception_handler import library_exception_handler, request_validation_handler
from .middleware.request_context import RequestContextMiddleware
from .store import LibraryStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[LibraryStore] = None) -> FastAPI:
    """Build the API around *store* (a new store from settings when omitted)."""
    settings = settings or get_settings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)

    if store is None:
        store = LibraryStore(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup / shutdown lifecycle for the library API."""
        logger.info(f"Environment: {settings.environment.value}")
        try:
            settings.validate_production_config()
        except ConfigurationError as e:
            logger.critical(f"STARTUP BLOCKED: {e}")
            raise SystemExit(1) from e

        if settings.environment == Environment.DEVELOPMENT:
            origins = settings.get_cors_origins()
            localhost_origins = [o for o in origins if "localhost" in o or "127.0.0.1" in o]
            if localhost_origins:
                logger.warning(
                    "CORS allows localhost origins: %s. Remove these for production.",
                    localhost_origins,
                )

        if is_in_memory(settings.database_url):
            logger.warning("Library store is in-memory: all data is lost when the process exits")

        # --- Seed folders and sample documents (empty store only) ---
        if settings.seed_on_startup:
            folders, documents = seed_library(store)
            if folders or documents:
                logger.info(f"First startup: seeded {folders} folders and {documents} documents")

        yield  # App runs here

        # No flush step: the store has no durability contract.

    app = FastAPI(
        title="Document Library API",
        description=(
            "REST API for a PDF document library: folders, approved documents, search, "
            "favorites and download counts, plus a moderation queue for public contributions."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.started_at = time.monotonic()

    # Middleware stack: the last one added runs outermost.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(RequestContextMiddleware)

    # Register exception handlers
    app.add_exception_handler(LibraryException, library_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include routers
    app.include_router(folders_router)
    app.include_router(documents_router)
    app.include_router(moderation_router)
    app.include_router(library_router)

    @app.get("/")
    def root():
        """Root endpoint."""
        return {
            "name": "Document Library API",
            "version": __version__,
            "status": "running"
        }

    @app.get("/health")
    def health_check(store: LibraryStore = Depends(get_store)):
        """Health check returning store status, uptime, and document count.

        Never raises: returns a degraded status on store failure so load
        balancers can still probe without receiving 5xx.
        """
        store_status = "ok"
        document_count = 0
        pending_count = 0
        try:
            stats = store.get_stats()
            document_count = stats.approved_documents
            pending_count = stats.pending_documents
        except Exception:
            logger.exception("Health check could not read the store")
            store_status = "error"

        return {
            "status": "healthy" if store_status == "ok" else "degraded",
            "store": store_status,
            "uptime_seconds": round(time.monotonic() - app.state.started_at),
            "version": __version__,
            "document_count": document_count,
            "pending_count": pending_count,
        }

    logger.info(
        "Document Library API created | env=%s | store=%s | cors=%s",
        settings.environment.value,
        "in-memory" if is_in_memory(settings.database_url) else "database",
        ",".join(settings.get_cors_origins()),
    )
    return app


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("doclib.main:create_app", factory=True, host="0.0.0.0", port=5000)
