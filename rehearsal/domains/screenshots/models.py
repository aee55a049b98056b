# rehearsal/domains/screenshots/models.py
from pydantic import BaseModel, Field


class ScreenshotUploadRequest(BaseModel):
    timestamp: float = Field(..., ge=0)


class ScreenshotUploadResponse(BaseModel):
    path: str
    signed_url: str
    token: str


class ScreenshotUrlResponse(BaseModel):
    url: str
