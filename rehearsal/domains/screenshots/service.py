# rehearsal/domains/screenshots/service.py
import logging
import uuid

from prisma.models import Profile

from prisma import Prisma
from rehearsal.core.storage import StorageService
from rehearsal.domains.screenshots.models import (
    ScreenshotUploadResponse,
    ScreenshotUrlResponse,
)
from rehearsal.shared.exceptions import AccessDeniedError
from rehearsal.shared.permissions import AccessControl, Capability, ResourceRef

logger = logging.getLogger(__name__)


def _format_offset(timestamp: float) -> str:
    return str(int(timestamp)) if float(timestamp).is_integer() else str(timestamp)


class ScreenshotService:
    """
    Screenshots are uploaded straight to storage and referenced from
    timestamp notes by URL. They live under ``{video_id}/`` in the
    screenshot bucket.
    """

    def __init__(self, db: Prisma, storage: StorageService):
        self.db = db
        self.storage = storage
        self.access = AccessControl(db)

    async def request_screenshot_upload_url(
        self, video_id: str, timestamp: float, profile: Profile
    ) -> ScreenshotUploadResponse:
        await self.access.require(
            ResourceRef.video(video_id),
            profile.id,
            Capability.EDIT,
            "Only owners and directors can take screenshots",
        )

        path = f"{video_id}/{_format_offset(timestamp)}-{uuid.uuid4()}.png"
        upload = await self.storage.create_signed_upload_url(
            self.storage.screenshot_bucket, path
        )

        logger.info(f"Screenshot upload URL issued for video {video_id} at {timestamp}s")
        return ScreenshotUploadResponse(**upload)

    async def get_screenshot_public_url(
        self, path: str, profile: Profile
    ) -> ScreenshotUrlResponse:
        """
        Get the public URL of an uploaded screenshot.

        The caller must be able to view the video the screenshot was taken
        from, named by the first segment of the path.
        """
        path = path.strip("/")
        video_id, separator, _ = path.partition("/")
        if not separator:
            raise AccessDeniedError()

        await self.access.require(ResourceRef.video(video_id), profile.id, Capability.VIEW)

        url = self.storage.get_public_url(self.storage.screenshot_bucket, path)
        return ScreenshotUrlResponse(url=url)
