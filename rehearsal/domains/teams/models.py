# rehearsal/domains/teams/models.py
from datetime import datetime
from typing import Optional

from prisma.enums import TeamRole
from pydantic import BaseModel, ConfigDict, Field, field_validator

from rehearsal.shared.permissions.models import PermissionSet


class TeamCreate(BaseModel):
    name: str = Field(..., max_length=120)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Team name is required")
        return v


class TeamUpdate(TeamCreate):
    pass


class TeamResponse(BaseModel):
    id: str
    name: str
    created_by: str = Field(alias="createdById")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class TeamWithRoleResponse(BaseModel):
    team: TeamResponse
    role: TeamRole
    permissions: PermissionSet
