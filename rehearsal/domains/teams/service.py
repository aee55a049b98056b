# rehearsal/domains/teams/service.py
import logging
from typing import List, Optional

from prisma.enums import MemberStatus, TeamRole, VideoSourceType
from prisma.errors import PrismaError
from prisma.models import Profile

from prisma import Prisma
from rehearsal.core.storage import StorageService
from rehearsal.domains.teams.models import (
    TeamCreate,
    TeamResponse,
    TeamUpdate,
    TeamWithRoleResponse,
)
from rehearsal.domains.videos.service import remove_stored_video_files
from rehearsal.shared.exceptions import AccessDeniedError, UpstreamFailureError
from rehearsal.shared.permissions import (
    AccessControl,
    Capability,
    ResourceRef,
    permission_set_for,
)

logger = logging.getLogger(__name__)


class TeamService:
    def __init__(self, db: Prisma, storage: Optional[StorageService] = None):
        self.db = db
        self.storage = storage
        self.access = AccessControl(db)

    async def create_team(
        self, team_data: TeamCreate, profile: Profile
    ) -> TeamWithRoleResponse:
        """
        Create a new team and add the current user as its owner.

        The team and the owner membership are written in one transaction so a
        team never exists without an owner.
        """
        try:
            async with self.db.tx() as transaction:
                team = await transaction.team.create(
                    data={"name": team_data.name, "createdById": profile.id}
                )
                await transaction.teammember.create(
                    data={
                        "teamId": team.id,
                        "profileId": profile.id,
                        "email": profile.email,
                        "role": TeamRole.owner,
                        "status": MemberStatus.active,
                        "invitedById": profile.id,
                    }
                )
        except PrismaError as e:
            logger.error(f"Failed to create team for profile {profile.id}: {e}")
            raise UpstreamFailureError(str(e))

        logger.info(f"Team {team.id} created by profile {profile.id}")
        return TeamWithRoleResponse(
            team=TeamResponse.model_validate(team),
            role=TeamRole.owner,
            permissions=permission_set_for(TeamRole.owner),
        )

    async def list_teams(self, profile: Profile) -> List[TeamWithRoleResponse]:
        """
        Get all teams the user is an active member of.
        """
        try:
            memberships = await self.db.teammember.find_many(
                where={"profileId": profile.id, "status": MemberStatus.active},
                include={"team": True},
                order={"joinedAt": "asc"},
            )
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        return [
            TeamWithRoleResponse(
                team=TeamResponse.model_validate(membership.team),
                role=membership.role,
                permissions=permission_set_for(membership.role),
            )
            for membership in memberships
            if membership.team
        ]

    async def get_team(self, team_id: str, profile: Profile) -> TeamWithRoleResponse:
        grant = await self.access.require(
            ResourceRef.team(team_id), profile.id, Capability.VIEW
        )

        team = await self.db.team.find_unique(where={"id": team_id})
        if not team:
            # Deleted between the membership check and the read
            raise AccessDeniedError()

        return TeamWithRoleResponse(
            team=TeamResponse.model_validate(team),
            role=grant.role,
            permissions=permission_set_for(grant.role),
        )

    async def update_team(
        self, team_id: str, updates: TeamUpdate, profile: Profile
    ) -> TeamResponse:
        await self.access.require(
            ResourceRef.team(team_id),
            profile.id,
            Capability.OWNER_ONLY,
            "Only owners can rename a team",
        )

        try:
            team = await self.db.team.update(
                where={"id": team_id}, data={"name": updates.name}
            )
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        if not team:
            raise AccessDeniedError()

        return TeamResponse.model_validate(team)

    async def delete_team(self, team_id: str, profile: Profile) -> None:
        """
        Delete a team with its memberships, projects, videos and notes.

        Stored files of uploaded videos are removed after the rows are gone.
        """
        await self.access.require(
            ResourceRef.team(team_id),
            profile.id,
            Capability.OWNER_ONLY,
            "Only owners can delete a team",
        )

        try:
            uploads = await self.db.video.find_many(
                where={
                    "project": {"is": {"teamId": team_id}},
                    "sourceType": VideoSourceType.upload,
                }
            )

            async with self.db.tx() as transaction:
                await transaction.teammember.delete_many(where={"teamId": team_id})
                await transaction.project.delete_many(where={"teamId": team_id})
                await transaction.team.delete(where={"id": team_id})
        except PrismaError as e:
            logger.error(f"Failed to delete team {team_id}: {e}")
            raise UpstreamFailureError(str(e))

        logger.info(f"Team {team_id} deleted by profile {profile.id}")
        await remove_stored_video_files(self.storage, uploads)
