"""
Tests for ProjectNoteService in rehearsal/domains/project_notes/service.py
"""

from unittest.mock import Mock

import pytest
from prisma.enums import TeamRole

from rehearsal.domains.project_notes.models import ProjectNoteCreate, ProjectNoteUpdate
from rehearsal.domains.project_notes.service import ProjectNoteService
from rehearsal.shared.exceptions import AccessDeniedError
from tests.fixtures.auth_fixtures import OTHER_PROFILE_ID, PROFILE_ID
from tests.fixtures.team_fixtures import (
    PROJECT_ID,
    PROJECT_NOTE_ID,
    make_project_note,
)
from tests.utils.permission_testing import member_as


@pytest.fixture
def note_db(mock_prisma: Mock, mock_project: Mock):
    def _as(role, note: Mock = None) -> Mock:
        mock_prisma.project.find_unique.return_value = mock_project
        mock_prisma.projectnote.find_unique.return_value = note
        member_as(mock_prisma, role)
        return mock_prisma

    return _as


class TestListProjectNotes:
    @pytest.mark.asyncio
    async def test_pinned_first_then_newest(self, note_db, mock_profile: Mock):
        db = note_db(TeamRole.dancer)
        db.projectnote.find_many.return_value = [
            make_project_note(note_id="pinned", is_pinned=True),
            make_project_note(),
        ]

        notes = await ProjectNoteService(db).list_project_notes(PROJECT_ID, mock_profile)

        assert [n.is_pinned for n in notes] == [True, False]
        assert db.projectnote.find_many.call_args[1]["order"] == [
            {"isPinned": "desc"},
            {"createdAt": "desc"},
        ]


class TestCreateProjectNote:
    @pytest.mark.asyncio
    async def test_director_creates(self, note_db, mock_profile: Mock):
        db = note_db(TeamRole.director)
        db.projectnote.create.return_value = make_project_note()

        result = await ProjectNoteService(db).create_project_note(
            PROJECT_ID, ProjectNoteCreate(content=" Spacing ", title=""), mock_profile
        )

        data = db.projectnote.create.call_args[1]["data"]
        assert data["content"] == "Spacing"
        assert data["title"] is None
        assert data["createdById"] == PROFILE_ID
        assert result.id == PROJECT_NOTE_ID

    @pytest.mark.asyncio
    async def test_dancer_cannot_create(self, note_db, mock_profile: Mock):
        db = note_db(TeamRole.dancer)

        with pytest.raises(AccessDeniedError) as exc_info:
            await ProjectNoteService(db).create_project_note(
                PROJECT_ID, ProjectNoteCreate(content="Hi"), mock_profile
            )

        assert exc_info.value.detail == (
            "Only owners and directors can create project notes"
        )


class TestMutateProjectNote:
    @pytest.mark.asyncio
    async def test_pin_and_clear_title(self, note_db, mock_profile: Mock):
        note = make_project_note(created_by=OTHER_PROFILE_ID)
        db = note_db(TeamRole.owner, note)
        db.projectnote.update.return_value = note

        await ProjectNoteService(db).update_project_note(
            PROJECT_NOTE_ID, ProjectNoteUpdate(is_pinned=True, title=None), mock_profile
        )

        assert db.projectnote.update.call_args[1]["data"] == {
            "title": None,
            "isPinned": True,
        }

    @pytest.mark.asyncio
    async def test_untouched_title_is_kept(self, note_db, mock_profile: Mock):
        note = make_project_note()
        db = note_db(TeamRole.director, note)
        db.projectnote.update.return_value = note

        await ProjectNoteService(db).update_project_note(
            PROJECT_NOTE_ID, ProjectNoteUpdate(content="New"), mock_profile
        )

        assert db.projectnote.update.call_args[1]["data"] == {"content": "New"}

    @pytest.mark.asyncio
    async def test_dancer_cannot_edit_others_note(self, note_db, mock_profile: Mock):
        db = note_db(TeamRole.dancer, make_project_note(created_by=OTHER_PROFILE_ID))

        with pytest.raises(AccessDeniedError) as exc_info:
            await ProjectNoteService(db).update_project_note(
                PROJECT_NOTE_ID, ProjectNoteUpdate(content="x"), mock_profile
            )

        assert exc_info.value.detail == "Only owners and directors can edit project notes"

    @pytest.mark.asyncio
    async def test_director_deletes(self, note_db, mock_profile: Mock):
        db = note_db(TeamRole.director, make_project_note(created_by=OTHER_PROFILE_ID))

        await ProjectNoteService(db).delete_project_note(PROJECT_NOTE_ID, mock_profile)

        db.projectnote.delete.assert_called_once_with(where={"id": PROJECT_NOTE_ID})

    @pytest.mark.asyncio
    async def test_non_member_cannot_delete(self, note_db, mock_profile: Mock):
        db = note_db(None, make_project_note())

        with pytest.raises(AccessDeniedError) as exc_info:
            await ProjectNoteService(db).delete_project_note(
                PROJECT_NOTE_ID, mock_profile
            )

        assert exc_info.value.detail == (
            "Only owners and directors can delete project notes"
        )
        db.projectnote.delete.assert_not_called()
