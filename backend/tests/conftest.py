"""Shared test fixtures for the document library test suite.

Every test gets its own LibraryStore backed by a private in-memory SQLite
database, so there is nothing to truncate between tests: a new store is a
clean library with ids starting at 1.
"""

import os

# Plain-text logs and no startup seeding unless a test asks for them.
os.environ["LOG_FORMAT"] = "text"
os.environ["SEED_ON_STARTUP"] = "false"

import pytest
from fastapi.testclient import TestClient

from doclib.core.config import Settings
from doclib.core.seeder import seed_library
from doclib.main import create_app
from doclib.store import LibraryStore


@pytest.fixture()
def store():
    """Empty library store."""
    library = LibraryStore()
    yield library
    library.close()


@pytest.fixture()
def seeded_store(store):
    """Store loaded with the bundled seed fixture (6 folders, 8 documents)."""
    seed_library(store)
    return store


@pytest.fixture()
def db(store):
    """Session on the test store, for exercising services directly."""
    with store.session() as session:
        yield session


@pytest.fixture()
def settings() -> Settings:
    return Settings(seed_on_startup=False, log_format="text")


@pytest.fixture()
def client(store, settings):
    """FastAPI TestClient over an app wired to the test store."""
    app = create_app(settings=settings, store=store)
    with TestClient(app) as c:
        yield c


def make_document(
    title: str = "Test Document",
    external_ref: str = "drive-file-1",
    **overrides,
) -> dict:
    """Factory for document creation payloads (camelCase, as the client sends them)."""
    payload = {
        "title": title,
        "description": "A test document",
        "fileName": "test-document.pdf",
        "fileSize": 1024,
        "pageCount": 10,
        "externalRef": external_ref,
        "downloadUrl": f"https://drive.example/{external_ref}",
    }
    payload.update(overrides)
    return payload


def make_contribution(
    title: str = "Contributed Document",
    uploader_email: str = "contributor@example.com",
    **overrides,
) -> dict:
    """Factory for public contribution payloads."""
    payload = {
        "title": title,
        "description": "Shared by a reader",
        "fileName": "contribution.pdf",
        "fileSize": 2048,
        "pageCount": 5,
        "uploaderName": "Nguyen Van A",
        "uploaderEmail": uploader_email,
    }
    payload.update(overrides)
    return payload
