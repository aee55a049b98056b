# rehearsal/domains/projects/models.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectCreate(BaseModel):
    name: str = Field(..., max_length=120)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name is required")
        return v


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=120)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> str:
        # Omit the field to leave the name unchanged
        if v is None:
            raise ValueError("Project name is required")
        v = v.strip()
        if not v:
            raise ValueError("Project name is required")
        return v


class ProjectResponse(BaseModel):
    id: str
    team_id: str = Field(alias="teamId")
    name: str
    description: Optional[str] = None
    created_by: str = Field(alias="createdById")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
