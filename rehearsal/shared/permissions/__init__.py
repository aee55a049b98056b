"""
Shared permission system for role-based access control.

One decision table (role x capability) is consumed by every domain. Nested
resources are authorized against the team found by walking their parent
chain (note -> video -> project -> team).

Usage:
    from rehearsal.shared.permissions import AccessControl, Capability, ResourceRef

    grant = await AccessControl(db).require(
        ResourceRef.video(video_id),
        profile.id,
        Capability.EDIT,
        "Only owners and directors can edit videos",
    )
"""

from .dependencies import require_capability
from .models import (
    CAPABILITY_MATRIX,
    AccessGrant,
    Capability,
    PermissionSet,
    ResourceKind,
    ResourceRef,
    permission_set_for,
)
from .services import (
    AccessControl,
    can_assign_role,
    can_change_role,
    can_mutate_note,
    can_remove_member,
    capability_for_note_kind,
    has_capability,
)

__all__ = [
    "AccessControl",
    "AccessGrant",
    "CAPABILITY_MATRIX",
    "Capability",
    "PermissionSet",
    "ResourceKind",
    "ResourceRef",
    "can_assign_role",
    "can_change_role",
    "can_mutate_note",
    "can_remove_member",
    "capability_for_note_kind",
    "has_capability",
    "permission_set_for",
    "require_capability",
]
