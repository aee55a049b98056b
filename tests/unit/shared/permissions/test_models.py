"""
Tests for shared permission models (decision table and derived flags).
"""

import pytest
from prisma.enums import TeamRole

from rehearsal.shared.permissions.models import (
    CAPABILITY_MATRIX,
    Capability,
    PermissionSet,
    ResourceKind,
    ResourceRef,
    permission_set_for,
)
from tests.utils.permission_testing import PermissionTestHelpers


class TestCapabilityMatrix:
    """Test the role x capability decision table."""

    def test_every_role_has_an_entry(self):
        assert set(CAPABILITY_MATRIX) == set(TeamRole)

    def test_owner_has_every_capability(self):
        assert CAPABILITY_MATRIX[TeamRole.owner] == set(Capability)

    def test_director_can_view_and_edit(self):
        assert CAPABILITY_MATRIX[TeamRole.director] == {
            Capability.VIEW,
            Capability.EDIT,
        }

    def test_dancer_can_only_view(self):
        assert CAPABILITY_MATRIX[TeamRole.dancer] == {Capability.VIEW}

    def test_capabilities_are_nested(self):
        """Each role's capabilities include everything a lower role has."""
        owner = CAPABILITY_MATRIX[TeamRole.owner]
        director = CAPABILITY_MATRIX[TeamRole.director]
        dancer = CAPABILITY_MATRIX[TeamRole.dancer]

        assert dancer <= director <= owner

    def test_only_owner_holds_owner_only(self):
        assert PermissionTestHelpers.roles_with(Capability.OWNER_ONLY) == [
            TeamRole.owner
        ]


class TestPermissionSetFor:
    """Test the permission flags derived from a role."""

    @pytest.mark.parametrize("role", [TeamRole.owner, TeamRole.director])
    def test_editors_get_all_flags(self, role: TeamRole):
        assert permission_set_for(role) == PermissionSet(
            can_edit=True, can_delete=True, can_upload=True
        )

    def test_dancer_gets_no_flags(self):
        assert permission_set_for(TeamRole.dancer) == PermissionSet(
            can_edit=False, can_delete=False, can_upload=False
        )

    def test_non_member_gets_no_flags(self):
        assert permission_set_for(None) == PermissionSet(
            can_edit=False, can_delete=False, can_upload=False
        )

    @pytest.mark.parametrize("role", list(TeamRole))
    def test_flags_follow_edit_capability(self, role: TeamRole):
        """The flags are a pure function of the role's edit capability."""
        has_edit = Capability.EDIT in CAPABILITY_MATRIX[role]
        flags = permission_set_for(role)

        assert flags.can_edit is has_edit
        assert flags.can_delete is has_edit
        assert flags.can_upload is has_edit
        assert permission_set_for(role) == flags


class TestResourceRef:
    """Test ResourceRef constructors."""

    @pytest.mark.parametrize(
        "factory,kind",
        [
            (ResourceRef.team, ResourceKind.TEAM),
            (ResourceRef.project, ResourceKind.PROJECT),
            (ResourceRef.video, ResourceKind.VIDEO),
            (ResourceRef.video_note, ResourceKind.VIDEO_NOTE),
            (ResourceRef.project_note, ResourceKind.PROJECT_NOTE),
        ],
    )
    def test_constructors_set_kind(self, factory, kind: ResourceKind):
        ref = factory("abc")

        assert ref.kind is kind
        assert ref.id == "abc"

    def test_refs_are_hashable_values(self):
        assert ResourceRef.video("v1") == ResourceRef.video("v1")
        assert len({ResourceRef.video("v1"), ResourceRef.video("v1")}) == 1
