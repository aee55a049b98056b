# rehearsal/domains/project_notes/routes.py
from typing import List

from fastapi import APIRouter, Depends, status
from prisma.models import Profile

from prisma import Prisma
from rehearsal.core.database import get_db
from rehearsal.domains.auth.dependencies import get_current_profile
from rehearsal.domains.project_notes.models import (
    ProjectNoteCreate,
    ProjectNoteResponse,
    ProjectNoteUpdate,
)
from rehearsal.domains.project_notes.service import ProjectNoteService
from rehearsal.shared.models import DeleteResponse

router = APIRouter(tags=["Project Notes"])


@router.get(
    "/projects/{project_id}/notes",
    response_model=List[ProjectNoteResponse],
    operation_id="getProjectNotes",
)
async def list_project_notes(
    project_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> List[ProjectNoteResponse]:
    service = ProjectNoteService(db)
    return await service.list_project_notes(project_id, profile)


@router.post(
    "/projects/{project_id}/notes",
    response_model=ProjectNoteResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createProjectNote",
)
async def create_project_note(
    project_id: str,
    data: ProjectNoteCreate,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> ProjectNoteResponse:
    service = ProjectNoteService(db)
    return await service.create_project_note(project_id, data, profile)


@router.get(
    "/project-notes/{note_id}",
    response_model=ProjectNoteResponse,
    operation_id="getProjectNote",
)
async def get_project_note(
    note_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> ProjectNoteResponse:
    service = ProjectNoteService(db)
    return await service.get_project_note(note_id, profile)


@router.patch(
    "/project-notes/{note_id}",
    response_model=ProjectNoteResponse,
    operation_id="updateProjectNote",
)
async def update_project_note(
    note_id: str,
    updates: ProjectNoteUpdate,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> ProjectNoteResponse:
    """
    Edit, retitle, pin or unpin a project note.
    """
    service = ProjectNoteService(db)
    return await service.update_project_note(note_id, updates, profile)


@router.delete(
    "/project-notes/{note_id}",
    response_model=DeleteResponse,
    operation_id="deleteProjectNote",
)
async def delete_project_note(
    note_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> DeleteResponse:
    service = ProjectNoteService(db)
    await service.delete_project_note(note_id, profile)
    return DeleteResponse()
