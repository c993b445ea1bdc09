"""Seed the library store on startup.

Loads a JSON fixture of folders and sample documents into an empty store so
the catalogue is not blank on first run.  Idempotent: skips if the store
already holds folders or documents.

Fixture layout: folders reference their parent by ``externalRef``, and
documents reference their folder the same way through ``folder``.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import LibraryException

logger = logging.getLogger(__name__)

_FIXTURE_PATH = Path(__file__).parent.parent / "fixtures" / "seed_library.json"


def load_fixture(path: Optional[Path] = None) -> dict:
    """Read the seed fixture. Returns an empty dict if it is missing or unreadable."""
    fixture_path = path or _FIXTURE_PATH
    if not fixture_path.exists():
        logger.debug("No seed fixture at %s", fixture_path)
        return {}
    try:
        with open(fixture_path, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to read seed fixture: %s", e)
        return {}


def seed_library(store, fixture: Optional[dict] = None) -> tuple[int, int]:
    """Load seed folders and documents if the store is empty.

    Args:
        store: The LibraryStore to fill.
        fixture: Parsed fixture; defaults to the bundled seed_library.json.

    Returns:
        (folders seeded, documents seeded); (0, 0) if skipped.
    """
    from ..schemas.document import DocumentCreate
    from ..schemas.folder import FolderCreate
    from ..services import DocumentService, FolderService

    if not store.is_empty():
        logger.debug("Store already populated, skipping seed")
        return 0, 0

    if fixture is None:
        fixture = load_fixture()
    folders = fixture.get("folders", [])
    documents = fixture.get("documents", [])
    if not folders and not documents:
        return 0, 0

    folder_ids: dict[str, int] = {}
    seeded_folders = 0
    seeded_documents = 0

    with store.session() as db:
        folder_service = FolderService(db)
        document_service = DocumentService(db)

        for folder_data in folders:
            parent_key = folder_data.get("parent")
            try:
                folder = folder_service.create_folder(
                    FolderCreate(
                        name=folder_data["name"],
                        parent_id=folder_ids.get(parent_key) if parent_key else None,
                        external_ref=folder_data.get("externalRef"),
                    ),
                    commit=False,
                )
            except (KeyError, PydanticValidationError, LibraryException) as e:
                logger.warning("Failed to seed folder '%s': %s", folder_data.get("name", "?"), e)
                continue
            if folder.external_ref:
                folder_ids[folder.external_ref] = folder.id
            seeded_folders += 1

        for doc_data in documents:
            doc_data = dict(doc_data)
            folder_key = doc_data.pop("folder", None)
            uploader_name = doc_data.pop("uploaderName", "Admin")
            try:
                document = DocumentCreate(
                    **doc_data,
                    folder_id=folder_ids.get(folder_key) if folder_key else None,
                    uploader_name=uploader_name,
                )
                document_service.create_document(document, commit=False)
            except (TypeError, PydanticValidationError, LibraryException) as e:
                logger.warning("Failed to seed '%s': %s", doc_data.get("title", "?"), e)
                continue
            seeded_documents += 1

        folder_service.recompute_all(commit=False)
        db.commit()

    logger.info(
        "Seeded library from fixture",
        extra={"folders": seeded_folders, "documents": seeded_documents},
    )
    return seeded_folders, seeded_documents
