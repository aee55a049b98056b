# rehearsal/domains/project_notes/models.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectNoteCreate(BaseModel):
    content: str
    title: Optional[str] = Field(default=None, max_length=200)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Note content is required")
        return v


class ProjectNoteUpdate(BaseModel):
    content: Optional[str] = None
    title: Optional[str] = Field(default=None, max_length=200)
    is_pinned: Optional[bool] = None

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Note content is required")
        return v


class ProjectNoteResponse(BaseModel):
    id: str
    project_id: str = Field(alias="projectId")
    title: Optional[str] = None
    content: str
    is_pinned: bool = Field(alias="isPinned")
    created_by: str = Field(alias="createdById")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
