"""Tests for contribution intake and the approve / reject transitions."""

import pytest

from doclib.exceptions import ValidationError
from doclib.models import DocumentStatus
from doclib.schemas.document import ContributionCreate
from doclib.schemas.folder import FolderCreate
from doclib.services.folder_service import FolderService
from doclib.services.moderation_service import PENDING_REF_PREFIX, ModerationService, generate_pending_ref
from doclib.services.user_service import UserService

from tests.conftest import make_contribution


def _contribution(**overrides) -> ContributionCreate:
    return ContributionCreate.model_validate(make_contribution(**overrides))


class TestSubmitContribution:

    def test_contribution_is_pending(self, db):
        doc = ModerationService(db).submit_contribution(_contribution())
        assert doc.status == DocumentStatus.PENDING.value
        assert doc.external_ref.startswith(PENDING_REF_PREFIX)
        assert doc.download_url is None
        assert doc.is_favorite is False
        assert doc.download_count == 0
        assert doc.uploader_name == "Nguyen Van A"

    def test_registers_contributor_once(self, db):
        svc = ModerationService(db)
        first = svc.submit_contribution(_contribution(title="One"))
        second = svc.submit_contribution(_contribution(title="Two", uploaderName="Other Name"))

        users = UserService(db).list_users()
        assert len(users) == 1
        assert users[0].name == "Nguyen Van A"
        assert first.uploaded_by == second.uploaded_by == users[0].id

    def test_contribution_does_not_change_folder_count(self, db):
        folder = FolderService(db).create_folder(FolderCreate(name="F"))
        ModerationService(db).submit_contribution(_contribution(folderId=folder.id))
        assert FolderService(db).get_folder(folder.id).document_count == 0

    def test_contribution_to_unknown_folder_rejected(self, db):
        with pytest.raises(ValidationError):
            ModerationService(db).submit_contribution(_contribution(folderId=12))

    @pytest.mark.parametrize("email", ["not-an-email", "a@@x.com", "a b@x.com", "a@x", "@x.com"])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(ValueError):
            _contribution(uploaderEmail=email)

    def test_email_kept_as_typed(self, db):
        ModerationService(db).submit_contribution(_contribution(uploaderEmail="  Le.Van.C@Example.COM "))
        users = UserService(db).list_users()
        assert users[0].email == "Le.Van.C@Example.COM"
        assert UserService(db).get_user_by_email("le.van.c@example.com") is None

    def test_pending_refs_are_unique(self):
        assert generate_pending_ref() != generate_pending_ref()

    def test_list_pending(self, db):
        svc = ModerationService(db)
        svc.submit_contribution(_contribution(title="One"))
        svc.submit_contribution(_contribution(title="Two"))
        assert [d.title for d in svc.list_pending_documents()] == ["One", "Two"]


class TestApproveReject:

    def test_approve_counts_document(self, db):
        folder = FolderService(db).create_folder(FolderCreate(name="F"))
        svc = ModerationService(db)
        doc = svc.submit_contribution(_contribution(folderId=folder.id))

        approved = svc.approve_document(doc.id, "Looks good")

        assert approved.status == DocumentStatus.APPROVED.value
        assert approved.moderator_notes == "Looks good"
        assert FolderService(db).get_folder(folder.id).document_count == 1
        assert svc.list_pending_documents() == []

    def test_approve_without_notes(self, db):
        svc = ModerationService(db)
        doc = svc.submit_contribution(_contribution())
        assert svc.approve_document(doc.id).moderator_notes is None

    def test_approve_missing_returns_none(self, db):
        assert ModerationService(db).approve_document(77) is None

    def test_reject_stores_notes(self, db):
        svc = ModerationService(db)
        doc = svc.submit_contribution(_contribution())
        rejected = svc.reject_document(doc.id, "Duplicate upload")
        assert rejected.status == DocumentStatus.REJECTED.value
        assert rejected.moderator_notes == "Duplicate upload"

    def test_reject_missing_returns_none(self, db):
        assert ModerationService(db).reject_document(77, "nope") is None

    def test_rejected_document_can_be_approved(self, db):
        svc = ModerationService(db)
        doc = svc.submit_contribution(_contribution())
        svc.reject_document(doc.id, "Blurry scan")
        assert svc.approve_document(doc.id).status == DocumentStatus.APPROVED.value

    def test_reject_leaves_folder_count(self, db):
        folder = FolderService(db).create_folder(FolderCreate(name="F"))
        svc = ModerationService(db)
        doc = svc.submit_contribution(_contribution(folderId=folder.id))
        svc.approve_document(doc.id)

        svc.reject_document(doc.id, "Withdrawn")

        # Rejection does not recount; recompute_all repairs the cache.
        folders = FolderService(db)
        assert folders.get_folder(folder.id).document_count == 1
        folders.recompute_all()
        assert folders.get_folder(folder.id).document_count == 0
