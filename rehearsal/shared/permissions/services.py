import logging
from typing import Optional

from prisma.enums import MemberStatus, NoteType, TeamRole
from prisma.errors import PrismaError
from prisma.models import TeamMember

from prisma import Prisma
from rehearsal.shared.exceptions import AccessDeniedError

from .models import (
    CAPABILITY_MATRIX,
    AccessGrant,
    Capability,
    ResourceKind,
    ResourceRef,
)

logger = logging.getLogger(__name__)


def has_capability(role: Optional[TeamRole], capability: Capability) -> bool:
    """
    Check if a role satisfies a capability level.

    Args:
        role: The team role to check, or None when there is no membership
        capability: The capability level required

    Returns:
        True if the role has the capability, False otherwise
    """
    if role is None:
        return False
    return capability in CAPABILITY_MATRIX.get(role, set())


def can_assign_role(actor_role: Optional[TeamRole], requested_role: TeamRole) -> bool:
    """Only owners hand out the director role; nobody hands out owner."""
    if not has_capability(actor_role, Capability.EDIT):
        return False
    if requested_role == TeamRole.owner:
        return False
    if requested_role == TeamRole.director:
        return actor_role == TeamRole.owner
    return True


def can_change_role(
    actor_role: Optional[TeamRole], target_current_role: TeamRole
) -> bool:
    """Role changes are owner-only and never target an owner."""
    if not has_capability(actor_role, Capability.OWNER_ONLY):
        return False
    return target_current_role != TeamRole.owner


def can_remove_member(actor_role: Optional[TeamRole], target_role: TeamRole) -> bool:
    """Owners are never removable; directors are removable only by owners."""
    if not has_capability(actor_role, Capability.EDIT):
        return False
    if target_role == TeamRole.owner:
        return False
    if target_role == TeamRole.director:
        return actor_role == TeamRole.owner
    return True


def capability_for_note_kind(note_type: NoteType) -> Capability:
    """Any member may comment; timestamp notes need edit rights."""
    if note_type == NoteType.timestamp:
        return Capability.EDIT
    return Capability.VIEW


def can_mutate_note(actor_role: Optional[TeamRole], is_author: bool) -> bool:
    """
    Notes may be changed by their author or by anyone with edit rights.

    The author must still be a member of the team.
    """
    if actor_role is None:
        return False
    return is_author or has_capability(actor_role, Capability.EDIT)


class AccessControl:
    """
    Resolves roles and resource chains against current membership data.

    Nothing is cached: every call reads the database, so a revoked
    membership takes effect on the next request.
    """

    def __init__(self, db: Prisma):
        self.db = db

    async def get_membership(
        self, team_id: str, profile_id: str
    ) -> Optional[TeamMember]:
        """Return the caller's active membership in a team, if any."""
        try:
            return await self.db.teammember.find_first(
                where={
                    "teamId": team_id,
                    "profileId": profile_id,
                    "status": MemberStatus.active,
                }
            )
        except PrismaError as e:
            logger.error(f"Membership lookup failed for team {team_id}: {e}")
            return None

    async def resolve_role(self, team_id: str, profile_id: str) -> Optional[TeamRole]:
        """
        Resolve a user's role in a team.

        Args:
            team_id: Team ID
            profile_id: Profile ID of the user

        Returns:
            The stored role, or None when there is no active membership
        """
        membership = await self.get_membership(team_id, profile_id)
        return membership.role if membership else None

    async def resolve_team_id(self, resource: ResourceRef) -> Optional[str]:
        """
        Walk a resource's parent chain up to its owning team.

        Args:
            resource: The resource to resolve

        Returns:
            Team ID, or None if any link in the chain is missing
        """
        kind, resource_id = resource.kind, resource.id
        while kind is not ResourceKind.TEAM:
            parent = await self._parent_of(kind, resource_id)
            if parent is None:
                logger.debug(f"Could not resolve parent of {kind.value} {resource_id}")
                return None
            kind, resource_id = parent
        return resource_id

    async def _parent_of(
        self, kind: ResourceKind, resource_id: str
    ) -> Optional[tuple[ResourceKind, str]]:
        try:
            if kind is ResourceKind.PROJECT:
                project = await self.db.project.find_unique(where={"id": resource_id})
                return (ResourceKind.TEAM, project.teamId) if project else None
            if kind is ResourceKind.VIDEO:
                video = await self.db.video.find_unique(where={"id": resource_id})
                return (ResourceKind.PROJECT, video.projectId) if video else None
            if kind is ResourceKind.VIDEO_NOTE:
                note = await self.db.videonote.find_unique(where={"id": resource_id})
                return (ResourceKind.VIDEO, note.videoId) if note else None
            if kind is ResourceKind.PROJECT_NOTE:
                project_note = await self.db.projectnote.find_unique(
                    where={"id": resource_id}
                )
                return (
                    (ResourceKind.PROJECT, project_note.projectId)
                    if project_note
                    else None
                )
        except PrismaError as e:
            logger.error(f"Lookup of {kind.value} {resource_id} failed: {e}")
        return None

    async def authorize(
        self, resource: ResourceRef, profile_id: str, capability: Capability
    ) -> Optional[AccessGrant]:
        """
        Decide whether a user holds a capability on a resource.

        Returns:
            AccessGrant with the owning team and caller role, or None on deny
        """
        team_id = await self.resolve_team_id(resource)
        if team_id is None:
            return None

        role = await self.resolve_role(team_id, profile_id)
        if not has_capability(role, capability):
            logger.debug(
                f"Denied {capability.value} on {resource.kind.value} {resource.id} "
                f"for profile {profile_id} (role={role})"
            )
            return None

        return AccessGrant(team_id=team_id, role=role)

    async def check_permission(
        self, resource: ResourceRef, profile_id: str, capability: Capability
    ) -> bool:
        """Boolean form of authorize()."""
        return await self.authorize(resource, profile_id, capability) is not None

    async def require(
        self,
        resource: ResourceRef,
        profile_id: str,
        capability: Capability,
        message: str = AccessDeniedError.message,
    ) -> AccessGrant:
        """
        Require a capability on a resource.

        A resource that cannot be resolved is denied with the same message as
        an insufficient role.

        Raises:
            AccessDeniedError: If the capability is not held
        """
        grant = await self.authorize(resource, profile_id, capability)
        if grant is None:
            raise AccessDeniedError(message)
        return grant
