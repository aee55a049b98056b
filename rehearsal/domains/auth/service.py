from prisma.enums import MemberStatus
from prisma.errors import PrismaError
from prisma.models import Profile

from prisma import Prisma
from rehearsal.domains.auth.models import SessionState, TeamMembershipSummary
from rehearsal.shared.exceptions import UpstreamFailureError
from rehearsal.shared.permissions.models import permission_set_for


class SessionService:
    """Service for session-related operations"""

    def __init__(self, db: Prisma):
        self.db = db

    async def get_session_state(self, profile: Profile) -> SessionState:
        """
        Get session state for a user including all active team memberships

        Args:
            profile: User's profile object

        Returns:
            SessionState with user info and each team's role and permissions
        """
        try:
            memberships = await self.db.teammember.find_many(
                where={"profileId": profile.id, "status": MemberStatus.active},
                include={"team": True},
                order={"joinedAt": "asc"},
            )
        except PrismaError as e:
            raise UpstreamFailureError(f"Error retrieving session state: {str(e)}")

        teams = [
            TeamMembershipSummary(
                id=membership.team.id,
                name=membership.team.name,
                role=membership.role,
                permissions=permission_set_for(membership.role),
            )
            for membership in memberships
            if membership.team
        ]

        return SessionState(
            user_id=profile.id,
            user_email=profile.email,
            user_display_name=getattr(profile, "displayName", None),
            teams=teams,
        )
