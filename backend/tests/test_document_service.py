"""Unit tests for DocumentService, the deep module owning the document lifecycle.

Tests the service layer directly against the store's in-memory database,
bypassing the HTTP stack.  Covers creation defaults, uniqueness, partial
updates, folder-count maintenance, download counting and favorites.
"""

import pytest

from doclib.exceptions import ConflictError, ValidationError
from doclib.models import DocumentStatus
from doclib.schemas.document import DocumentCreate, DocumentUpdate
from doclib.schemas.folder import FolderCreate
from doclib.services.document_service import DocumentService
from doclib.services.folder_service import FolderService


def _make_create(
    title: str = "Test Doc",
    external_ref: str = "ref-1",
    **overrides,
) -> DocumentCreate:
    defaults = {
        "file_name": "test-doc.pdf",
        "file_size": 1000,
    }
    defaults.update(overrides)
    return DocumentCreate(title=title, external_ref=external_ref, **defaults)


def _make_folder(db, name: str = "Folder") -> int:
    return FolderService(db).create_folder(FolderCreate(name=name)).id


class TestCreateDocument:

    def test_create_assigns_defaults(self, db):
        doc = DocumentService(db).create_document(_make_create())
        assert doc.id == 1
        assert doc.status == DocumentStatus.APPROVED.value
        assert doc.download_count == 0
        assert doc.mime_type == "application/pdf"
        assert doc.download_url == ""
        assert doc.moderator_notes is None
        assert doc.uploaded_at is not None

    def test_ids_increase(self, db):
        svc = DocumentService(db)
        first = svc.create_document(_make_create(external_ref="a"))
        second = svc.create_document(_make_create(external_ref="b"))
        assert second.id == first.id + 1

    def test_title_is_trimmed(self, db):
        doc = DocumentService(db).create_document(_make_create(title="  Spaced  "))
        assert doc.title == "Spaced"

    def test_duplicate_external_ref_conflicts(self, db):
        svc = DocumentService(db)
        svc.create_document(_make_create(external_ref="same"))
        with pytest.raises(ConflictError):
            svc.create_document(_make_create(title="Other", external_ref="same"))

    def test_unknown_folder_rejected(self, db):
        with pytest.raises(ValidationError):
            DocumentService(db).create_document(_make_create(folder_id=99))

    def test_create_recounts_folder(self, db):
        folder_id = _make_folder(db)
        svc = DocumentService(db)
        svc.create_document(_make_create(external_ref="a", folder_id=folder_id))
        svc.create_document(_make_create(external_ref="b", folder_id=folder_id))
        assert FolderService(db).get_folder(folder_id).document_count == 2


class TestUpdateDocument:

    def test_partial_update_keeps_other_fields(self, db):
        svc = DocumentService(db)
        doc = svc.create_document(_make_create(description="before"))
        updated = svc.update_document(doc.id, DocumentUpdate(title="After"))
        assert updated.title == "After"
        assert updated.description == "before"
        assert updated.file_name == "test-doc.pdf"

    def test_update_missing_returns_none(self, db):
        assert DocumentService(db).update_document(42, DocumentUpdate(title="x")) is None

    def test_move_recounts_both_folders(self, db):
        source = _make_folder(db, "Source")
        target = _make_folder(db, "Target")
        svc = DocumentService(db)
        doc = svc.create_document(_make_create(folder_id=source))

        svc.update_document(doc.id, DocumentUpdate(folder_id=target))

        folders = FolderService(db)
        assert folders.get_folder(source).document_count == 0
        assert folders.get_folder(target).document_count == 1

    def test_status_change_recounts_folder(self, db):
        folder_id = _make_folder(db)
        svc = DocumentService(db)
        doc = svc.create_document(_make_create(folder_id=folder_id))

        svc.update_document(doc.id, DocumentUpdate(status=DocumentStatus.PENDING))

        assert FolderService(db).get_folder(folder_id).document_count == 0

    def test_update_to_taken_external_ref_conflicts(self, db):
        svc = DocumentService(db)
        svc.create_document(_make_create(external_ref="a"))
        doc = svc.create_document(_make_create(external_ref="b"))
        with pytest.raises(ConflictError):
            svc.update_document(doc.id, DocumentUpdate(external_ref="a"))

    def test_update_keeping_own_external_ref_is_allowed(self, db):
        svc = DocumentService(db)
        doc = svc.create_document(_make_create(external_ref="a"))
        updated = svc.update_document(doc.id, DocumentUpdate(external_ref="a", title="Same ref"))
        assert updated.title == "Same ref"

    def test_update_to_unknown_folder_rejected(self, db):
        svc = DocumentService(db)
        doc = svc.create_document(_make_create())
        with pytest.raises(ValidationError):
            svc.update_document(doc.id, DocumentUpdate(folder_id=7))


class TestDeleteDocument:

    def test_delete_recounts_folder(self, db):
        folder_id = _make_folder(db)
        svc = DocumentService(db)
        doc = svc.create_document(_make_create(folder_id=folder_id))

        assert svc.delete_document(doc.id) is True
        assert svc.get_document(doc.id) is None
        assert FolderService(db).get_folder(folder_id).document_count == 0

    def test_delete_missing_returns_false(self, db):
        assert DocumentService(db).delete_document(5) is False


class TestCounters:

    def test_increment_download_count(self, db):
        svc = DocumentService(db)
        doc = svc.create_document(_make_create())
        assert svc.increment_download_count(doc.id) is True
        assert svc.increment_download_count(doc.id) is True
        assert svc.get_document(doc.id).download_count == 2

    def test_increment_missing_returns_false(self, db):
        assert DocumentService(db).increment_download_count(3) is False

    def test_toggle_favorite_flips_twice(self, db):
        svc = DocumentService(db)
        doc = svc.create_document(_make_create())
        assert svc.toggle_favorite(doc.id).is_favorite is True
        assert svc.toggle_favorite(doc.id).is_favorite is False

    def test_toggle_missing_returns_none(self, db):
        assert DocumentService(db).toggle_favorite(3) is None


class TestQueries:

    def test_search_is_case_insensitive_for_vietnamese(self, db):
        svc = DocumentService(db)
        svc.create_document(_make_create(title="Giáo Trình TOÁN Học", external_ref="a"))
        svc.create_document(_make_create(title="Vật Lý", external_ref="b"))
        results = svc.search_documents("toán")
        assert [d.title for d in results] == ["Giáo Trình TOÁN Học"]

    def test_search_matches_description(self, db):
        svc = DocumentService(db)
        svc.create_document(_make_create(title="Plain", description="Python basics"))
        assert len(svc.search_documents("PYTHON")) == 1

    def test_search_includes_every_status(self, db):
        svc = DocumentService(db)
        doc = svc.create_document(_make_create(title="Hidden draft"))
        svc.update_document(doc.id, DocumentUpdate(status=DocumentStatus.REJECTED))
        assert len(svc.search_documents("draft")) == 1
        assert svc.list_approved_documents() == []

    def test_favorites_only_approved(self, db):
        svc = DocumentService(db)
        shown = svc.create_document(_make_create(external_ref="a", is_favorite=True))
        hidden = svc.create_document(_make_create(external_ref="b", is_favorite=True))
        svc.update_document(hidden.id, DocumentUpdate(status=DocumentStatus.PENDING))
        assert [d.id for d in svc.list_favorite_documents()] == [shown.id]

    def test_list_by_folder_is_direct_children_only(self, db):
        parent = FolderService(db).create_folder(FolderCreate(name="Parent"))
        child = FolderService(db).create_folder(FolderCreate(name="Child", parent_id=parent.id))
        svc = DocumentService(db)
        svc.create_document(_make_create(external_ref="a", folder_id=child.id))
        assert svc.list_documents_by_folder(parent.id) == []
        assert len(svc.list_documents_by_folder(child.id)) == 1
