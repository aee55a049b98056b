# rehearsal/domains/videos/service.py
import logging
import mimetypes
import uuid
from typing import Iterable, List, Optional

from prisma.enums import VideoSourceType
from prisma.errors import PrismaError
from prisma.models import Profile, Video

from prisma import Prisma
from rehearsal.core.settings import settings
from rehearsal.core.storage import StorageService
from rehearsal.domains.videos.models import (
    PlaybackUrlResponse,
    UploadUrlRequest,
    UploadUrlResponse,
    VideoFromUploadCreate,
    VideoFromUrlCreate,
    VideoResponse,
    VideoUpdate,
)
from rehearsal.domains.videos.utils import (
    format_file_size,
    is_valid_video_url,
    parse_video_url,
)
from rehearsal.shared.exceptions import (
    AccessDeniedError,
    InvalidDataError,
    NotFoundError,
    UpstreamFailureError,
)
from rehearsal.shared.permissions import AccessControl, Capability, ResourceRef
from rehearsal.shared.playback import (
    PlayerConfig,
    VideoSourceDescriptor,
    build_player_config,
)

logger = logging.getLogger(__name__)

UPLOAD_DENIED = "Only owners and directors can upload videos"


async def remove_stored_video_files(
    storage: Optional[StorageService], videos: Iterable[Video]
) -> None:
    """
    Remove the stored files of uploaded videos whose rows are already gone.

    Failures are logged and not raised: the rows are deleted either way.
    """
    paths = [
        video.storagePath
        for video in videos
        if video.sourceType == VideoSourceType.upload and video.storagePath
    ]
    if not paths:
        return

    if storage is None:
        logger.warning(f"Storage not configured; {len(paths)} video file(s) left behind")
        return

    try:
        await storage.remove_files(storage.video_bucket, paths)
    except UpstreamFailureError as e:
        logger.warning(f"Failed to remove {len(paths)} video file(s): {e.detail}")


class VideoService:
    def __init__(self, db: Prisma, storage: Optional[StorageService] = None):
        self.db = db
        self.storage = storage
        self.access = AccessControl(db)

    def _require_storage(self) -> StorageService:
        if self.storage is None:
            raise UpstreamFailureError("Storage is not configured")
        return self.storage

    async def _find_video(self, video_id: str) -> Video:
        try:
            video = await self.db.video.find_unique(where={"id": video_id})
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        if not video:
            # Removed after the permission check
            raise AccessDeniedError()
        return video

    async def list_videos(self, project_id: str, profile: Profile) -> List[VideoResponse]:
        await self.access.require(
            ResourceRef.project(project_id), profile.id, Capability.VIEW
        )

        try:
            videos = await self.db.video.find_many(
                where={"projectId": project_id}, order={"createdAt": "desc"}
            )
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        return [VideoResponse.model_validate(video) for video in videos]

    async def get_video(self, video_id: str, profile: Profile) -> VideoResponse:
        await self.access.require(ResourceRef.video(video_id), profile.id, Capability.VIEW)
        video = await self._find_video(video_id)
        return VideoResponse.model_validate(video)

    async def request_upload_url(
        self, project_id: str, request: UploadUrlRequest, profile: Profile
    ) -> UploadUrlResponse:
        """
        Create a signed URL the client uploads the video file to.

        The video row is created separately once the upload has finished, so
        an abandoned upload leaves nothing behind in the database.

        Raises:
            AccessDeniedError: If the caller cannot upload to the project
            InvalidDataError: If the file type or size is not accepted
        """
        await self.access.require(
            ResourceRef.project(project_id), profile.id, Capability.EDIT, UPLOAD_DENIED
        )

        if request.content_type not in settings.ALLOWED_VIDEO_MIME_TYPES:
            raise InvalidDataError(
                "Invalid file type. Accepted types: "
                + ", ".join(settings.ALLOWED_VIDEO_MIME_TYPES)
            )
        if request.file_size is not None and request.file_size > settings.MAX_VIDEO_UPLOAD_BYTES:
            raise InvalidDataError(
                "File too large. Maximum size: "
                + format_file_size(settings.MAX_VIDEO_UPLOAD_BYTES)
            )

        extension = _file_extension(request.filename, request.content_type)
        path = f"{project_id}/{uuid.uuid4()}.{extension}"

        storage = self._require_storage()
        upload = await storage.create_signed_upload_url(storage.video_bucket, path)
        return UploadUrlResponse(**upload)

    async def create_video_from_upload(
        self, project_id: str, data: VideoFromUploadCreate, profile: Profile
    ) -> VideoResponse:
        await self.access.require(
            ResourceRef.project(project_id), profile.id, Capability.EDIT, UPLOAD_DENIED
        )

        if not data.storage_path.startswith(f"{project_id}/"):
            raise InvalidDataError("Storage path does not belong to this project")

        storage = self._require_storage()
        public_url = storage.get_public_url(storage.video_bucket, data.storage_path)

        try:
            video = await self.db.video.create(
                data={
                    "projectId": project_id,
                    "title": data.title,
                    "description": data.description or None,
                    "sourceType": VideoSourceType.upload,
                    "storagePath": data.storage_path,
                    "storageUrl": public_url,
                    "durationSeconds": data.duration_seconds,
                    "fileSizeBytes": data.file_size_bytes,
                    "mimeType": data.mime_type,
                    "createdById": profile.id,
                }
            )
        except PrismaError as e:
            logger.error(f"Failed to create uploaded video in project {project_id}: {e}")
            raise UpstreamFailureError(str(e))

        logger.info(f"Video {video.id} uploaded to project {project_id} by {profile.id}")
        return VideoResponse.model_validate(video)

    async def create_video_from_url(
        self, project_id: str, data: VideoFromUrlCreate, profile: Profile
    ) -> VideoResponse:
        await self.access.require(
            ResourceRef.project(project_id),
            profile.id,
            Capability.EDIT,
            "Only owners and directors can add videos",
        )

        url = data.url.strip()
        if not is_valid_video_url(url):
            raise InvalidDataError("Please enter a valid video URL")

        parsed = parse_video_url(url)

        try:
            video = await self.db.video.create(
                data={
                    "projectId": project_id,
                    "title": data.title,
                    "description": data.description or None,
                    "sourceType": parsed.source_type,
                    "externalUrl": url,
                    "externalId": parsed.external_id,
                    "thumbnailUrl": parsed.thumbnail_url,
                    "createdById": profile.id,
                }
            )
        except PrismaError as e:
            logger.error(f"Failed to link video in project {project_id}: {e}")
            raise UpstreamFailureError(str(e))

        logger.info(
            f"Video {video.id} ({parsed.source_type.value}) linked to project {project_id}"
        )
        return VideoResponse.model_validate(video)

    async def update_video(
        self, video_id: str, updates: VideoUpdate, profile: Profile
    ) -> VideoResponse:
        await self.access.require(
            ResourceRef.video(video_id),
            profile.id,
            Capability.EDIT,
            "Only owners and directors can edit videos",
        )

        data = updates.model_dump(exclude_unset=True)
        try:
            video = await self.db.video.update(where={"id": video_id}, data=data)
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        if not video:
            raise AccessDeniedError()
        return VideoResponse.model_validate(video)

    async def delete_video(self, video_id: str, profile: Profile) -> None:
        """
        Delete a video and its notes, then its stored file if it was uploaded.
        """
        await self.access.require(
            ResourceRef.video(video_id),
            profile.id,
            Capability.EDIT,
            "Only owners and directors can delete videos",
        )

        video = await self._find_video(video_id)

        try:
            await self.db.video.delete(where={"id": video_id})
        except PrismaError as e:
            logger.error(f"Failed to delete video {video_id}: {e}")
            raise UpstreamFailureError(str(e))

        logger.info(f"Video {video_id} deleted by profile {profile.id}")
        await remove_stored_video_files(self.storage, [video])

    async def get_playback_url(
        self, video_id: str, profile: Profile
    ) -> PlaybackUrlResponse:
        """
        Get a URL the client can play the video from.

        External sources play from their own URL; uploads get a signed URL
        that expires after SIGNED_URL_EXPIRES_IN seconds.

        Raises:
            NotFoundError: If the video has no file or URL to play
        """
        await self.access.require(ResourceRef.video(video_id), profile.id, Capability.VIEW)
        video = await self._find_video(video_id)

        url = await self._playback_url(video)
        if not url:
            raise NotFoundError("Video file not found")
        return PlaybackUrlResponse(url=url)

    async def get_player_config(self, video_id: str, profile: Profile) -> PlayerConfig:
        await self.access.require(ResourceRef.video(video_id), profile.id, Capability.VIEW)
        video = await self._find_video(video_id)

        descriptor = VideoSourceDescriptor(
            source_type=video.sourceType,
            external_id=video.externalId,
            external_url=video.externalUrl,
            playback_url=await self._playback_url(video),
        )
        return build_player_config(descriptor)

    async def _playback_url(self, video: Video) -> Optional[str]:
        if video.sourceType != VideoSourceType.upload:
            return video.externalUrl
        if not video.storagePath:
            return None

        storage = self._require_storage()
        return await storage.create_signed_url(storage.video_bucket, video.storagePath)


def _file_extension(filename: str, content_type: str) -> str:
    if "." in filename:
        extension = filename.rsplit(".", 1)[1].strip().lower()
        if extension:
            return extension
    guessed = mimetypes.guess_extension(content_type) or ".mp4"
    return guessed.lstrip(".")
