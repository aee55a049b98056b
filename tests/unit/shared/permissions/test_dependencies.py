"""
Tests for shared permissions dependencies (require_capability factory).
"""

from unittest.mock import Mock

import pytest
from fastapi import HTTPException

from rehearsal.shared.permissions.dependencies import require_capability
from rehearsal.shared.permissions.models import Capability
from tests.fixtures.team_fixtures import TEAM_ID
from tests.utils.permission_testing import PermissionTestHelpers, member_as


class TestRequireCapability:
    """Test the require_capability dependency factory."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("capability", list(Capability))
    async def test_roles_with_capability_pass(
        self, capability: Capability, mock_prisma: Mock, mock_profile: Mock
    ):
        check = require_capability(capability)

        for role in PermissionTestHelpers.roles_with(capability):
            member_as(mock_prisma, role)
            membership = await check(team_id=TEAM_ID, profile=mock_profile, db=mock_prisma)
            assert membership.role == role

    @pytest.mark.asyncio
    @pytest.mark.parametrize("capability", [Capability.EDIT, Capability.OWNER_ONLY])
    async def test_roles_without_capability_get_403(
        self, capability: Capability, mock_prisma: Mock, mock_profile: Mock
    ):
        check = require_capability(capability, "Only owners can do that")

        for role in PermissionTestHelpers.roles_without(capability):
            member_as(mock_prisma, role)
            with pytest.raises(HTTPException) as exc_info:
                await check(team_id=TEAM_ID, profile=mock_profile, db=mock_prisma)

            assert exc_info.value.status_code == 403
            assert exc_info.value.detail == "Only owners can do that"

    @pytest.mark.asyncio
    async def test_non_member_gets_default_message(
        self, mock_prisma: Mock, mock_profile: Mock
    ):
        member_as(mock_prisma, None)
        check = require_capability(Capability.VIEW)

        with pytest.raises(HTTPException) as exc_info:
            await check(team_id=TEAM_ID, profile=mock_profile, db=mock_prisma)

        assert exc_info.value.detail == "Access denied"

