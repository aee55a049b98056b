# rehearsal/domains/screenshots/routes.py
from fastapi import APIRouter, Depends, Query
from prisma.models import Profile

from prisma import Prisma
from rehearsal.core.database import get_db
from rehearsal.core.storage import StorageService, get_storage
from rehearsal.domains.auth.dependencies import get_current_profile
from rehearsal.domains.screenshots.models import (
    ScreenshotUploadRequest,
    ScreenshotUploadResponse,
    ScreenshotUrlResponse,
)
from rehearsal.domains.screenshots.service import ScreenshotService

router = APIRouter(tags=["Screenshots"])


@router.post(
    "/videos/{video_id}/screenshots/upload-url",
    response_model=ScreenshotUploadResponse,
    operation_id="getScreenshotUploadUrl",
)
async def request_screenshot_upload_url(
    video_id: str,
    request: ScreenshotUploadRequest,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
    storage: StorageService = Depends(get_storage),
) -> ScreenshotUploadResponse:
    """
    Get a signed URL to upload a screenshot captured at a video timestamp.
    """
    service = ScreenshotService(db, storage)
    return await service.request_screenshot_upload_url(
        video_id, request.timestamp, profile
    )


@router.get(
    "/screenshots/public-url",
    response_model=ScreenshotUrlResponse,
    operation_id="getScreenshotPublicUrl",
)
async def get_screenshot_public_url(
    path: str = Query(..., min_length=1),
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
    storage: StorageService = Depends(get_storage),
) -> ScreenshotUrlResponse:
    service = ScreenshotService(db, storage)
    return await service.get_screenshot_public_url(path, profile)
