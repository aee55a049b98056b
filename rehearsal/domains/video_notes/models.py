# rehearsal/domains/video_notes/models.py
import math
from datetime import datetime
from typing import Optional, Union

from prisma.enums import NoteType
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from rehearsal.domains.videos.utils import parse_timestamp


def _required_content(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Note content is required")
    return v


class VideoNoteCreate(BaseModel):
    content: str
    note_type: NoteType = NoteType.comment
    timestamp_seconds: Optional[Union[float, str]] = None
    screenshot_url: Optional[str] = None

    _validate_content = field_validator("content")(_required_content)

    @field_validator("timestamp_seconds")
    @classmethod
    def parse_timestamp_string(
        cls, v: Optional[Union[float, str]]
    ) -> Optional[Union[float, str]]:
        """Accept "MM:SS" and "HH:MM:SS" as well as plain seconds."""
        if isinstance(v, str):
            try:
                return parse_timestamp(v) if ":" in v else float(v)
            except ValueError:
                raise ValueError("Invalid timestamp. Use MM:SS or HH:MM:SS")
        return v

    @model_validator(mode="after")
    def validate_timestamp(self) -> "VideoNoteCreate":
        if self.note_type == NoteType.timestamp:
            if self.timestamp_seconds is None:
                raise ValueError("Timestamp notes require a timestamp")
            if not math.isfinite(self.timestamp_seconds):
                raise ValueError("Invalid timestamp. Use MM:SS or HH:MM:SS")
            if self.timestamp_seconds < 0:
                raise ValueError("Timestamp must not be negative")
        else:
            # Only timestamp notes carry a time offset or screenshot
            self.timestamp_seconds = None
            self.screenshot_url = None
        return self


class VideoNoteUpdate(BaseModel):
    content: str

    _validate_content = field_validator("content")(_required_content)


class VideoNoteResponse(BaseModel):
    id: str
    video_id: str = Field(alias="videoId")
    note_type: NoteType = Field(alias="noteType")
    content: str
    timestamp_seconds: Optional[float] = Field(default=None, alias="timestampSeconds")
    screenshot_url: Optional[str] = Field(default=None, alias="screenshotUrl")
    created_by: str = Field(alias="createdById")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
