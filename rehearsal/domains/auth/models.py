# rehearsal/domains/auth/models.py
from typing import List, Optional

from prisma.enums import TeamRole
from prisma.models import Profile
from pydantic import BaseModel

from rehearsal.shared.permissions.models import PermissionSet


class UserInfo(BaseModel):
    """Public directory entry for a user."""

    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None

    @classmethod
    def from_prisma(cls, profile: Profile) -> "UserInfo":
        return cls(
            id=profile.id,
            email=profile.email,
            first_name=profile.firstName,
            last_name=profile.lastName,
            avatar_url=profile.avatarUrl,
        )


class TeamMembershipSummary(BaseModel):
    id: str
    name: str
    role: TeamRole
    permissions: PermissionSet


class SessionState(BaseModel):
    user_id: str
    user_email: str
    user_display_name: Optional[str]
    teams: List[TeamMembershipSummary]
