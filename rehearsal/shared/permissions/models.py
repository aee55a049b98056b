from dataclasses import dataclass
from enum import Enum
from typing import Optional, Set

from prisma.enums import TeamRole
from pydantic import BaseModel


class Capability(Enum):
    """
    Abstract permission levels a team role either satisfies or does not.

    Every resource operation maps onto exactly one of these before any
    special rule is applied.
    """

    VIEW = "view"  # Read teams, projects, videos and notes; add comments
    EDIT = "edit"  # Create and change content, invite and remove members
    OWNER_ONLY = "owner_only"  # Delete teams and projects, change roles


CAPABILITY_MATRIX: dict[TeamRole, Set[Capability]] = {
    TeamRole.owner: {
        Capability.VIEW,
        Capability.EDIT,
        Capability.OWNER_ONLY,
    },
    TeamRole.director: {
        Capability.VIEW,
        Capability.EDIT,
    },
    TeamRole.dancer: {
        Capability.VIEW,
    },
}


class PermissionSet(BaseModel):
    """Permission flags shown to clients, derived from a role on read."""

    can_edit: bool
    can_delete: bool
    can_upload: bool


def permission_set_for(role: Optional[TeamRole]) -> PermissionSet:
    """
    Derive the permission flags for a role.

    Args:
        role: Team role, or None for a non-member

    Returns:
        PermissionSet computed from CAPABILITY_MATRIX
    """
    capabilities = CAPABILITY_MATRIX.get(role, set()) if role else set()
    can_edit = Capability.EDIT in capabilities
    return PermissionSet(can_edit=can_edit, can_delete=can_edit, can_upload=can_edit)


class ResourceKind(Enum):
    TEAM = "team"
    PROJECT = "project"
    VIDEO = "video"
    VIDEO_NOTE = "video_note"
    PROJECT_NOTE = "project_note"


@dataclass(frozen=True)
class ResourceRef:
    """A resource whose owning team is found by walking its parent chain."""

    kind: ResourceKind
    id: str

    @classmethod
    def team(cls, team_id: str) -> "ResourceRef":
        return cls(ResourceKind.TEAM, team_id)

    @classmethod
    def project(cls, project_id: str) -> "ResourceRef":
        return cls(ResourceKind.PROJECT, project_id)

    @classmethod
    def video(cls, video_id: str) -> "ResourceRef":
        return cls(ResourceKind.VIDEO, video_id)

    @classmethod
    def video_note(cls, note_id: str) -> "ResourceRef":
        return cls(ResourceKind.VIDEO_NOTE, note_id)

    @classmethod
    def project_note(cls, note_id: str) -> "ResourceRef":
        return cls(ResourceKind.PROJECT_NOTE, note_id)


@dataclass(frozen=True)
class AccessGrant:
    """Result of a successful authorization check."""

    team_id: str
    role: TeamRole
