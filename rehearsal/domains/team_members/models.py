# rehearsal/domains/team_members/models.py
from datetime import datetime
from typing import Optional

from prisma.enums import MemberStatus, TeamRole
from prisma.models import TeamMember
from pydantic import BaseModel, EmailStr, field_validator

from rehearsal.domains.auth.models import UserInfo
from rehearsal.shared.permissions.models import PermissionSet, permission_set_for


class _AssignableRole(BaseModel):
    role: TeamRole = TeamRole.dancer

    @field_validator("role")
    @classmethod
    def validate_assignable(cls, v: TeamRole) -> TeamRole:
        if v == TeamRole.owner:
            raise ValueError("Role must be director or dancer")
        return v


class InviteByEmailRequest(_AssignableRole):
    email: EmailStr


class InviteByUserRequest(_AssignableRole):
    user_id: str


class UpdateMemberRoleRequest(_AssignableRole):
    pass


class TeamMemberResponse(BaseModel):
    id: str
    team_id: str
    user_id: Optional[str]
    email: Optional[str]
    role: TeamRole
    status: MemberStatus
    permissions: PermissionSet
    invited_by: Optional[str]
    joined_at: Optional[datetime]
    user: Optional[UserInfo] = None

    @classmethod
    def from_prisma(cls, member: TeamMember) -> "TeamMemberResponse":
        profile = getattr(member, "profile", None)
        return cls(
            id=member.id,
            team_id=member.teamId,
            user_id=member.profileId,
            email=member.email,
            role=member.role,
            status=member.status,
            permissions=permission_set_for(member.role),
            invited_by=member.invitedById,
            joined_at=member.joinedAt,
            user=UserInfo.from_prisma(profile) if profile else None,
        )


class CurrentRoleResponse(BaseModel):
    role: Optional[TeamRole]
    permissions: PermissionSet
