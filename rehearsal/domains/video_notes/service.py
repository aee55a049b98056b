# rehearsal/domains/video_notes/service.py
import logging
from typing import List, Optional

from prisma.enums import NoteType
from prisma.errors import PrismaError
from prisma.models import Profile, VideoNote

from prisma import Prisma
from rehearsal.domains.video_notes.models import (
    VideoNoteCreate,
    VideoNoteResponse,
    VideoNoteUpdate,
)
from rehearsal.shared.exceptions import AccessDeniedError, UpstreamFailureError
from rehearsal.shared.permissions import (
    AccessControl,
    Capability,
    ResourceRef,
    can_mutate_note,
    capability_for_note_kind,
)

logger = logging.getLogger(__name__)

NOTE_KIND_DENIED = {
    NoteType.comment: AccessDeniedError.message,
    NoteType.timestamp: "Only owners and directors can add timestamp notes",
}


class VideoNoteService:
    def __init__(self, db: Prisma):
        self.db = db
        self.access = AccessControl(db)

    async def list_video_notes(
        self, video_id: str, profile: Profile, note_type: Optional[NoteType] = None
    ) -> List[VideoNoteResponse]:
        """
        Get the notes on a video.

        Timestamp notes are ordered by their time offset; comments and
        unfiltered lists are newest first.
        """
        await self.access.require(ResourceRef.video(video_id), profile.id, Capability.VIEW)

        where: dict = {"videoId": video_id}
        if note_type is not None:
            where["noteType"] = note_type

        if note_type == NoteType.timestamp:
            order = {"timestampSeconds": "asc"}
        else:
            order = {"createdAt": "desc"}

        try:
            notes = await self.db.videonote.find_many(where=where, order=order)
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        return [VideoNoteResponse.model_validate(note) for note in notes]

    async def get_video_note(self, note_id: str, profile: Profile) -> VideoNoteResponse:
        await self.access.require(
            ResourceRef.video_note(note_id), profile.id, Capability.VIEW
        )
        note = await self._find_note(note_id, AccessDeniedError.message)
        return VideoNoteResponse.model_validate(note)

    async def create_video_note(
        self, video_id: str, data: VideoNoteCreate, profile: Profile
    ) -> VideoNoteResponse:
        """
        Add a comment or a timestamp note to a video.

        Any member may comment; timestamp notes need edit rights.
        """
        await self.access.require(
            ResourceRef.video(video_id),
            profile.id,
            capability_for_note_kind(data.note_type),
            NOTE_KIND_DENIED[data.note_type],
        )

        try:
            note = await self.db.videonote.create(
                data={
                    "videoId": video_id,
                    "noteType": data.note_type,
                    "content": data.content,
                    "timestampSeconds": data.timestamp_seconds,
                    "screenshotUrl": data.screenshot_url,
                    "createdById": profile.id,
                }
            )
        except PrismaError as e:
            logger.error(f"Failed to create note on video {video_id}: {e}")
            raise UpstreamFailureError(str(e))

        logger.info(
            f"{data.note_type.value} note {note.id} added to video {video_id} "
            f"by {profile.id}"
        )
        return VideoNoteResponse.model_validate(note)

    async def update_video_note(
        self, note_id: str, updates: VideoNoteUpdate, profile: Profile
    ) -> VideoNoteResponse:
        message = "You can only edit your own notes"
        await self._require_mutation(note_id, profile, message)

        try:
            note = await self.db.videonote.update(
                where={"id": note_id}, data={"content": updates.content}
            )
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        if not note:
            raise AccessDeniedError(message)
        return VideoNoteResponse.model_validate(note)

    async def delete_video_note(self, note_id: str, profile: Profile) -> None:
        await self._require_mutation(
            note_id, profile, "You can only delete your own notes"
        )

        try:
            await self.db.videonote.delete(where={"id": note_id})
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        logger.info(f"Video note {note_id} deleted by profile {profile.id}")

    async def _require_mutation(
        self, note_id: str, profile: Profile, message: str
    ) -> VideoNote:
        """Authors and editors may change a note; both must be team members."""
        grant = await self.access.require(
            ResourceRef.video_note(note_id), profile.id, Capability.VIEW, message
        )
        note = await self._find_note(note_id, message)

        if not can_mutate_note(grant.role, note.createdById == profile.id):
            raise AccessDeniedError(message)
        return note

    async def _find_note(self, note_id: str, message: str) -> VideoNote:
        try:
            note = await self.db.videonote.find_unique(where={"id": note_id})
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        if not note:
            raise AccessDeniedError(message)
        return note
