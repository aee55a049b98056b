# rehearsal/domains/teams/routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from prisma.models import Profile

from prisma import Prisma
from rehearsal.core.database import get_db
from rehearsal.core.storage import StorageService, get_optional_storage
from rehearsal.domains.auth.dependencies import get_current_profile
from rehearsal.domains.teams.models import (
    TeamCreate,
    TeamResponse,
    TeamUpdate,
    TeamWithRoleResponse,
)
from rehearsal.domains.teams.service import TeamService
from rehearsal.shared.models import DeleteResponse

router = APIRouter(prefix="/teams", tags=["Teams"])


@router.post(
    "",
    response_model=TeamWithRoleResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createTeam",
)
async def create_team(
    team_data: TeamCreate,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> TeamWithRoleResponse:
    """
    Create a new team and add the current user as owner.
    """
    service = TeamService(db)
    return await service.create_team(team_data, profile)


@router.get("", response_model=List[TeamWithRoleResponse], operation_id="getTeams")
async def list_teams(
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> List[TeamWithRoleResponse]:
    service = TeamService(db)
    return await service.list_teams(profile)


@router.get(
    "/{team_id}", response_model=TeamWithRoleResponse, operation_id="getTeam"
)
async def get_team(
    team_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> TeamWithRoleResponse:
    service = TeamService(db)
    return await service.get_team(team_id, profile)


@router.patch("/{team_id}", response_model=TeamResponse, operation_id="updateTeam")
async def update_team(
    team_id: str,
    updates: TeamUpdate,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> TeamResponse:
    """
    Rename a team. Restricted to owners.
    """
    service = TeamService(db)
    return await service.update_team(team_id, updates, profile)


@router.delete("/{team_id}", response_model=DeleteResponse, operation_id="deleteTeam")
async def delete_team(
    team_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
    storage: Optional[StorageService] = Depends(get_optional_storage),
) -> DeleteResponse:
    """
    Delete a team and everything under it. Restricted to owners.

    Memberships, projects, videos and notes are removed; stored video files
    of uploaded videos are deleted from storage afterwards.
    """
    service = TeamService(db, storage)
    await service.delete_team(team_id, profile)
    return DeleteResponse()
