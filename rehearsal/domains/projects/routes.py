# rehearsal/domains/projects/routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from prisma.models import Profile

from prisma import Prisma
from rehearsal.core.database import get_db
from rehearsal.core.storage import StorageService, get_optional_storage
from rehearsal.domains.auth.dependencies import get_current_profile
from rehearsal.domains.projects.models import (
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from rehearsal.domains.projects.service import ProjectService
from rehearsal.shared.models import DeleteResponse

router = APIRouter(tags=["Projects"])


@router.post(
    "/teams/{team_id}/projects",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createProject",
)
async def create_project(
    team_id: str,
    data: ProjectCreate,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> ProjectResponse:
    service = ProjectService(db)
    return await service.create_project(team_id, data, profile)


@router.get(
    "/teams/{team_id}/projects",
    response_model=List[ProjectResponse],
    operation_id="getProjects",
)
async def list_projects(
    team_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> List[ProjectResponse]:
    service = ProjectService(db)
    return await service.list_projects(team_id, profile)


@router.get(
    "/projects/{project_id}", response_model=ProjectResponse, operation_id="getProject"
)
async def get_project(
    project_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> ProjectResponse:
    service = ProjectService(db)
    return await service.get_project(project_id, profile)


@router.patch(
    "/projects/{project_id}",
    response_model=ProjectResponse,
    operation_id="updateProject",
)
async def update_project(
    project_id: str,
    updates: ProjectUpdate,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> ProjectResponse:
    service = ProjectService(db)
    return await service.update_project(project_id, updates, profile)


@router.delete(
    "/projects/{project_id}",
    response_model=DeleteResponse,
    operation_id="deleteProject",
)
async def delete_project(
    project_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
    storage: Optional[StorageService] = Depends(get_optional_storage),
) -> DeleteResponse:
    """
    Delete a project and its videos and notes. Restricted to owners.
    """
    service = ProjectService(db, storage)
    await service.delete_project(project_id, profile)
    return DeleteResponse()
