# rehearsal/domains/team_members/service.py
import logging
from typing import List, Optional

from prisma.enums import MemberStatus, TeamRole
from prisma.errors import PrismaError, UniqueViolationError
from prisma.models import Profile, TeamMember

from prisma import Prisma
from rehearsal.domains.auth.models import UserInfo
from rehearsal.domains.team_members.models import (
    CurrentRoleResponse,
    InviteByEmailRequest,
    InviteByUserRequest,
    TeamMemberResponse,
    UpdateMemberRoleRequest,
)
from rehearsal.shared.exceptions import (
    AccessDeniedError,
    ConflictError,
    MemberNotFoundError,
    UpstreamFailureError,
    UserNotFoundError,
)
from rehearsal.shared.permissions import (
    AccessControl,
    Capability,
    ResourceRef,
    can_assign_role,
    can_change_role,
    can_remove_member,
    permission_set_for,
)

logger = logging.getLogger(__name__)

INVITE_DENIED = "Only owners and directors can invite members"
DIRECTOR_ASSIGN_DENIED = "Only owners can assign the director role"
ALREADY_MEMBER = "User is already a member of this team"
ALREADY_INVITED = "An invite has already been sent to this email"

MIN_SEARCH_LENGTH = 2
MAX_SEARCH_RESULTS = 10


class TeamMemberService:
    def __init__(self, db: Prisma):
        self.db = db
        self.access = AccessControl(db)

    async def get_team_members(self, team_id: str) -> List[TeamMemberResponse]:
        """
        Get active members and pending invites of a team, oldest first.

        Callers check membership before listing.
        """
        try:
            members = await self.db.teammember.find_many(
                where={"teamId": team_id},
                include={"profile": True},
                order={"joinedAt": "asc"},
            )
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        return [TeamMemberResponse.from_prisma(member) for member in members]

    async def get_current_user_role(
        self, team_id: str, profile: Profile
    ) -> CurrentRoleResponse:
        role = await self.access.resolve_role(team_id, profile.id)
        return CurrentRoleResponse(role=role, permissions=permission_set_for(role))

    async def _require_assignable(
        self, team_id: str, profile: Profile, role: TeamRole
    ) -> None:
        grant = await self.access.require(
            ResourceRef.team(team_id), profile.id, Capability.EDIT, INVITE_DENIED
        )
        if not can_assign_role(grant.role, role):
            raise AccessDeniedError(DIRECTOR_ASSIGN_DENIED)

    async def _find_membership(
        self, team_id: str, profile_id: str
    ) -> Optional[TeamMember]:
        return await self.db.teammember.find_first(
            where={"teamId": team_id, "profileId": profile_id}
        )

    async def _find_email_invite(self, team_id: str, email: str) -> Optional[TeamMember]:
        return await self.db.teammember.find_first(
            where={
                "teamId": team_id,
                "email": email,
                "status": MemberStatus.invited,
            }
        )

    async def invite_member_by_email(
        self, team_id: str, request: InviteByEmailRequest, profile: Profile
    ) -> TeamMemberResponse:
        """
        Invite someone to a team by email address.

        A registered user is added as an active member right away. An unknown
        address becomes a pending invite, which grants nothing until it is
        turned into a membership.

        Raises:
            AccessDeniedError: If the caller may not invite with this role
            ConflictError: If the user is already a member or already invited
        """
        await self._require_assignable(team_id, profile, request.role)
        email = request.email.lower()

        try:
            existing_user = await self.db.profile.find_first(
                where={"email": {"equals": email, "mode": "insensitive"}}
            )

            if existing_user and await self._find_membership(team_id, existing_user.id):
                raise ConflictError(ALREADY_MEMBER)
            if await self._find_email_invite(team_id, email):
                raise ConflictError(ALREADY_INVITED)

            data = {
                "teamId": team_id,
                "email": email,
                "role": request.role,
                "invitedById": profile.id,
            }
            if existing_user:
                data.update(profileId=existing_user.id, status=MemberStatus.active)
            else:
                data.update(status=MemberStatus.invited)

            member = await self.db.teammember.create(
                data=data, include={"profile": True}
            )
        except UniqueViolationError:
            # Lost a race with a concurrent invite for the same person
            raise ConflictError(ALREADY_MEMBER if existing_user else ALREADY_INVITED)
        except PrismaError as e:
            logger.error(f"Failed to invite {email} to team {team_id}: {e}")
            raise UpstreamFailureError(str(e))

        logger.info(
            f"Invited {email} to team {team_id} as {request.role.value} "
            f"({member.status.value}) by profile {profile.id}"
        )
        return TeamMemberResponse.from_prisma(member)

    async def invite_member_by_user(
        self, team_id: str, request: InviteByUserRequest, profile: Profile
    ) -> TeamMemberResponse:
        """
        Add a registered user found through user search to a team.

        Raises:
            AccessDeniedError: If the caller may not invite with this role
            UserNotFoundError: If the profile does not exist
            ConflictError: If the user is already a member or already invited
        """
        await self._require_assignable(team_id, profile, request.role)

        try:
            user = await self.db.profile.find_unique(where={"id": request.user_id})
            if not user:
                raise UserNotFoundError()

            if await self._find_membership(team_id, user.id):
                raise ConflictError(ALREADY_MEMBER)
            if await self._find_email_invite(team_id, user.email.lower()):
                raise ConflictError(ALREADY_INVITED)

            member = await self.db.teammember.create(
                data={
                    "teamId": team_id,
                    "profileId": user.id,
                    "email": user.email.lower(),
                    "role": request.role,
                    "status": MemberStatus.active,
                    "invitedById": profile.id,
                },
                include={"profile": True},
            )
        except UniqueViolationError:
            raise ConflictError(ALREADY_MEMBER)
        except PrismaError as e:
            logger.error(f"Failed to add user {request.user_id} to team {team_id}: {e}")
            raise UpstreamFailureError(str(e))

        logger.info(f"User {user.id} added to team {team_id} as {request.role.value}")
        return TeamMemberResponse.from_prisma(member)

    async def _get_member(self, team_id: str, member_id: str) -> TeamMember:
        try:
            member = await self.db.teammember.find_first(
                where={"id": member_id, "teamId": team_id}
            )
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        if not member:
            raise MemberNotFoundError()
        return member

    async def update_member_role(
        self,
        team_id: str,
        member_id: str,
        request: UpdateMemberRoleRequest,
        profile: Profile,
    ) -> TeamMemberResponse:
        grant = await self.access.require(
            ResourceRef.team(team_id),
            profile.id,
            Capability.OWNER_ONLY,
            "Only owners can change member roles",
        )

        member = await self._get_member(team_id, member_id)
        if not can_change_role(grant.role, member.role):
            raise AccessDeniedError("Cannot change the role of an owner")
        if not can_assign_role(grant.role, request.role):
            raise AccessDeniedError(DIRECTOR_ASSIGN_DENIED)

        try:
            updated = await self.db.teammember.update(
                where={"id": member_id},
                data={"role": request.role},
                include={"profile": True},
            )
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        if not updated:
            raise MemberNotFoundError()

        logger.info(
            f"Member {member_id} of team {team_id} changed from {member.role.value} "
            f"to {request.role.value}"
        )
        return TeamMemberResponse.from_prisma(updated)

    async def remove_member(
        self, team_id: str, member_id: str, profile: Profile
    ) -> None:
        """
        Remove a member from a team, or revoke a pending invite.

        Raises:
            AccessDeniedError: If the caller may not remove this member
            MemberNotFoundError: If the member is not part of the team
        """
        grant = await self.access.require(
            ResourceRef.team(team_id),
            profile.id,
            Capability.EDIT,
            "Only owners and directors can remove members",
        )

        member = await self._get_member(team_id, member_id)
        if member.role == TeamRole.owner:
            raise AccessDeniedError("Cannot remove an owner from the team")
        if not can_remove_member(grant.role, member.role):
            raise AccessDeniedError("Only owners can remove directors")

        try:
            await self.db.teammember.delete(where={"id": member_id})
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        logger.info(f"Member {member_id} removed from team {team_id} by {profile.id}")

    async def search_users(self, query: str) -> List[UserInfo]:
        """
        Search the user directory by email, first or last name.

        Queries shorter than two characters return nothing.
        """
        query = query.strip()
        if len(query) < MIN_SEARCH_LENGTH:
            return []

        try:
            profiles = await self.db.profile.find_many(
                where={
                    "OR": [
                        {"email": {"contains": query, "mode": "insensitive"}},
                        {"firstName": {"contains": query, "mode": "insensitive"}},
                        {"lastName": {"contains": query, "mode": "insensitive"}},
                    ]
                },
                take=MAX_SEARCH_RESULTS,
            )
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        return [UserInfo.from_prisma(p) for p in profiles]
