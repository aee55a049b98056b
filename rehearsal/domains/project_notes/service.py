# rehearsal/domains/project_notes/service.py
import logging
from typing import List

from prisma.errors import PrismaError
from prisma.models import Profile, ProjectNote

from prisma import Prisma
from rehearsal.domains.project_notes.models import (
    ProjectNoteCreate,
    ProjectNoteResponse,
    ProjectNoteUpdate,
)
from rehearsal.shared.exceptions import AccessDeniedError, UpstreamFailureError
from rehearsal.shared.permissions import (
    AccessControl,
    Capability,
    ResourceRef,
    can_mutate_note,
)

logger = logging.getLogger(__name__)


class ProjectNoteService:
    def __init__(self, db: Prisma):
        self.db = db
        self.access = AccessControl(db)

    async def list_project_notes(
        self, project_id: str, profile: Profile
    ) -> List[ProjectNoteResponse]:
        """
        Get a project's notes: pinned first, then newest first.
        """
        await self.access.require(
            ResourceRef.project(project_id), profile.id, Capability.VIEW
        )

        try:
            notes = await self.db.projectnote.find_many(
                where={"projectId": project_id},
                order=[{"isPinned": "desc"}, {"createdAt": "desc"}],
            )
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        return [ProjectNoteResponse.model_validate(note) for note in notes]

    async def get_project_note(
        self, note_id: str, profile: Profile
    ) -> ProjectNoteResponse:
        await self.access.require(
            ResourceRef.project_note(note_id), profile.id, Capability.VIEW
        )
        note = await self._find_note(note_id, AccessDeniedError.message)
        return ProjectNoteResponse.model_validate(note)

    async def create_project_note(
        self, project_id: str, data: ProjectNoteCreate, profile: Profile
    ) -> ProjectNoteResponse:
        await self.access.require(
            ResourceRef.project(project_id),
            profile.id,
            Capability.EDIT,
            "Only owners and directors can create project notes",
        )

        try:
            note = await self.db.projectnote.create(
                data={
                    "projectId": project_id,
                    "title": data.title or None,
                    "content": data.content,
                    "createdById": profile.id,
                }
            )
        except PrismaError as e:
            logger.error(f"Failed to create note in project {project_id}: {e}")
            raise UpstreamFailureError(str(e))

        logger.info(f"Project note {note.id} added to project {project_id}")
        return ProjectNoteResponse.model_validate(note)

    async def update_project_note(
        self, note_id: str, updates: ProjectNoteUpdate, profile: Profile
    ) -> ProjectNoteResponse:
        message = "Only owners and directors can edit project notes"
        await self._require_mutation(note_id, profile, message)

        data = {}
        if updates.content is not None:
            data["content"] = updates.content
        if "title" in updates.model_fields_set:
            data["title"] = updates.title or None
        if updates.is_pinned is not None:
            data["isPinned"] = updates.is_pinned

        try:
            note = await self.db.projectnote.update(where={"id": note_id}, data=data)
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        if not note:
            raise AccessDeniedError(message)
        return ProjectNoteResponse.model_validate(note)

    async def delete_project_note(self, note_id: str, profile: Profile) -> None:
        await self._require_mutation(
            note_id, profile, "Only owners and directors can delete project notes"
        )

        try:
            await self.db.projectnote.delete(where={"id": note_id})
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        logger.info(f"Project note {note_id} deleted by profile {profile.id}")

    async def _require_mutation(
        self, note_id: str, profile: Profile, message: str
    ) -> ProjectNote:
        grant = await self.access.require(
            ResourceRef.project_note(note_id), profile.id, Capability.VIEW, message
        )
        note = await self._find_note(note_id, message)

        if not can_mutate_note(grant.role, note.createdById == profile.id):
            raise AccessDeniedError(message)
        return note

    async def _find_note(self, note_id: str, message: str) -> ProjectNote:
        try:
            note = await self.db.projectnote.find_unique(where={"id": note_id})
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        if not note:
            raise AccessDeniedError(message)
        return note
