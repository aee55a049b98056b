# rehearsal/domains/videos/models.py
from datetime import datetime
from typing import Optional

from prisma.enums import VideoSourceType
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _required_title(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Video title is required")
    return v


class UploadUrlRequest(BaseModel):
    filename: str = Field(..., min_length=1)
    content_type: str
    file_size: Optional[int] = Field(default=None, ge=0)


class UploadUrlResponse(BaseModel):
    path: str
    signed_url: str
    token: str


class VideoFromUploadCreate(BaseModel):
    title: str = Field(..., max_length=200)
    storage_path: str
    description: Optional[str] = None
    duration_seconds: Optional[float] = Field(default=None, ge=0)
    file_size_bytes: Optional[int] = Field(default=None, ge=0)
    mime_type: Optional[str] = None

    _validate_title = field_validator("title")(_required_title)


class VideoFromUrlCreate(BaseModel):
    title: str = Field(..., max_length=200)
    url: str
    description: Optional[str] = None

    _validate_title = field_validator("title")(_required_title)


class VideoUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> str:
        # Omit the field to leave the title unchanged
        if v is None:
            raise ValueError("Video title is required")
        return _required_title(v)


class VideoResponse(BaseModel):
    id: str
    project_id: str = Field(alias="projectId")
    title: str
    description: Optional[str] = None
    source_type: VideoSourceType = Field(alias="sourceType")
    storage_path: Optional[str] = Field(default=None, alias="storagePath")
    storage_url: Optional[str] = Field(default=None, alias="storageUrl")
    external_url: Optional[str] = Field(default=None, alias="externalUrl")
    external_id: Optional[str] = Field(default=None, alias="externalId")
    duration_seconds: Optional[float] = Field(default=None, alias="durationSeconds")
    thumbnail_url: Optional[str] = Field(default=None, alias="thumbnailUrl")
    file_size_bytes: Optional[int] = Field(default=None, alias="fileSizeBytes")
    mime_type: Optional[str] = Field(default=None, alias="mimeType")
    created_by: str = Field(alias="createdById")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PlaybackUrlResponse(BaseModel):
    url: str
