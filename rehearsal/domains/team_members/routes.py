# rehearsal/domains/team_members/routes.py
from typing import List

from fastapi import APIRouter, Depends, Query, status
from prisma.models import Profile, TeamMember

from prisma import Prisma
from rehearsal.core.database import get_db
from rehearsal.domains.auth.dependencies import get_current_profile
from rehearsal.domains.auth.models import UserInfo
from rehearsal.domains.team_members.models import (
    CurrentRoleResponse,
    InviteByEmailRequest,
    InviteByUserRequest,
    TeamMemberResponse,
    UpdateMemberRoleRequest,
)
from rehearsal.domains.team_members.service import TeamMemberService
from rehearsal.shared.models import DeleteResponse
from rehearsal.shared.permissions import Capability, require_capability

router = APIRouter(prefix="/teams/{team_id}/members", tags=["Team Members"])
users_router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[TeamMemberResponse], operation_id="getTeamMembers")
async def get_team_members(
    team_id: str,
    membership: TeamMember = Depends(require_capability(Capability.VIEW)),
    db: Prisma = Depends(get_db),
) -> List[TeamMemberResponse]:
    """
    Get active members and pending invites of a team.

    Any active member can see the roster.
    """
    service = TeamMemberService(db)
    return await service.get_team_members(team_id)


@router.get("/me", response_model=CurrentRoleResponse, operation_id="getCurrentUserRole")
async def get_current_user_role(
    team_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> CurrentRoleResponse:
    service = TeamMemberService(db)
    return await service.get_current_user_role(team_id, profile)


@router.post(
    "/invite-email",
    response_model=TeamMemberResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="inviteMemberByEmail",
)
async def invite_member_by_email(
    team_id: str,
    request: InviteByEmailRequest,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> TeamMemberResponse:
    """
    Invite by email. Registered users join immediately; anyone else gets a
    pending invite.
    """
    service = TeamMemberService(db)
    return await service.invite_member_by_email(team_id, request, profile)


@router.post(
    "/invite-user",
    response_model=TeamMemberResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="inviteMemberByUser",
)
async def invite_member_by_user(
    team_id: str,
    request: InviteByUserRequest,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> TeamMemberResponse:
    service = TeamMemberService(db)
    return await service.invite_member_by_user(team_id, request, profile)


@router.patch(
    "/{member_id}", response_model=TeamMemberResponse, operation_id="updateMemberRole"
)
async def update_member_role(
    team_id: str,
    member_id: str,
    request: UpdateMemberRoleRequest,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> TeamMemberResponse:
    """
    Change a member's role. Restricted to owners; owners cannot be demoted.
    """
    service = TeamMemberService(db)
    return await service.update_member_role(team_id, member_id, request, profile)


@router.delete("/{member_id}", response_model=DeleteResponse, operation_id="removeMember")
async def remove_member(
    team_id: str,
    member_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> DeleteResponse:
    service = TeamMemberService(db)
    await service.remove_member(team_id, member_id, profile)
    return DeleteResponse()


@users_router.get("/search", response_model=List[UserInfo], operation_id="searchUsers")
async def search_users(
    q: str = Query("", description="Email, first or last name fragment"),
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> List[UserInfo]:
    service = TeamMemberService(db)
    return await service.search_users(q)
