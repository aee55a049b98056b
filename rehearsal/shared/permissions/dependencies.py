from typing import Awaitable, Callable

from fastapi import Depends
from prisma.models import Profile, TeamMember

from prisma import Prisma
from rehearsal.core.database import get_db
from rehearsal.domains.auth.dependencies import get_current_profile
from rehearsal.shared.exceptions import AccessDeniedError

from .models import Capability
from .services import AccessControl, has_capability


def require_capability(
    capability: Capability,
    message: str = AccessDeniedError.message,
) -> Callable[..., Awaitable[TeamMember]]:
    """
    Dependency factory for team-scoped routes.

    Creates a dependency that validates the current user holds the given
    capability in the team named by the ``team_id`` path parameter.

    Args:
        capability: The capability required to access the endpoint
        message: Error detail returned on deny

    Returns:
        Async dependency function that validates access and returns membership
    """

    async def check_capability(
        team_id: str,
        profile: Profile = Depends(get_current_profile),
        db: Prisma = Depends(get_db),
    ) -> TeamMember:
        """
        Validate user has required capability for the team.

        Raises:
            AccessDeniedError: If user is not an active member or lacks capability
        """
        membership = await AccessControl(db).get_membership(team_id, profile.id)

        if membership is None or not has_capability(membership.role, capability):
            raise AccessDeniedError(message)

        return membership

    return check_capability
