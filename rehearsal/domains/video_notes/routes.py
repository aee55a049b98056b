# rehearsal/domains/video_notes/routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from prisma.enums import NoteType
from prisma.models import Profile

from prisma import Prisma
from rehearsal.core.database import get_db
from rehearsal.domains.auth.dependencies import get_current_profile
from rehearsal.domains.video_notes.models import (
    VideoNoteCreate,
    VideoNoteResponse,
    VideoNoteUpdate,
)
from rehearsal.domains.video_notes.service import VideoNoteService
from rehearsal.shared.models import DeleteResponse

router = APIRouter(tags=["Video Notes"])


@router.get(
    "/videos/{video_id}/notes",
    response_model=List[VideoNoteResponse],
    operation_id="getVideoNotes",
)
async def list_video_notes(
    video_id: str,
    note_type: Optional[NoteType] = Query(None),
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> List[VideoNoteResponse]:
    service = VideoNoteService(db)
    return await service.list_video_notes(video_id, profile, note_type)


@router.post(
    "/videos/{video_id}/notes",
    response_model=VideoNoteResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createVideoNote",
)
async def create_video_note(
    video_id: str,
    data: VideoNoteCreate,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> VideoNoteResponse:
    """
    Add a comment (any member) or a timestamp note (owners and directors).
    """
    service = VideoNoteService(db)
    return await service.create_video_note(video_id, data, profile)


@router.get(
    "/video-notes/{note_id}",
    response_model=VideoNoteResponse,
    operation_id="getVideoNote",
)
async def get_video_note(
    note_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> VideoNoteResponse:
    service = VideoNoteService(db)
    return await service.get_video_note(note_id, profile)


@router.patch(
    "/video-notes/{note_id}",
    response_model=VideoNoteResponse,
    operation_id="updateVideoNote",
)
async def update_video_note(
    note_id: str,
    updates: VideoNoteUpdate,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> VideoNoteResponse:
    service = VideoNoteService(db)
    return await service.update_video_note(note_id, updates, profile)


@router.delete(
    "/video-notes/{note_id}",
    response_model=DeleteResponse,
    operation_id="deleteVideoNote",
)
async def delete_video_note(
    note_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> DeleteResponse:
    service = VideoNoteService(db)
    await service.delete_video_note(note_id, profile)
    return DeleteResponse()
