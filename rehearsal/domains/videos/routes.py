# rehearsal/domains/videos/routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from prisma.models import Profile

from prisma import Prisma
from rehearsal.core.database import get_db
from rehearsal.core.storage import StorageService, get_optional_storage, get_storage
from rehearsal.domains.auth.dependencies import get_current_profile
from rehearsal.domains.videos.models import (
    PlaybackUrlResponse,
    UploadUrlRequest,
    UploadUrlResponse,
    VideoFromUploadCreate,
    VideoFromUrlCreate,
    VideoResponse,
    VideoUpdate,
)
from rehearsal.domains.videos.service import VideoService
from rehearsal.shared.models import DeleteResponse
from rehearsal.shared.playback import PlayerConfig

router = APIRouter(tags=["Videos"])


@router.get(
    "/projects/{project_id}/videos",
    response_model=List[VideoResponse],
    operation_id="getVideos",
)
async def list_videos(
    project_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> List[VideoResponse]:
    service = VideoService(db)
    return await service.list_videos(project_id, profile)


@router.post(
    "/projects/{project_id}/videos/upload-url",
    response_model=UploadUrlResponse,
    operation_id="getSignedUploadUrl",
)
async def request_upload_url(
    project_id: str,
    request: UploadUrlRequest,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
    storage: StorageService = Depends(get_storage),
) -> UploadUrlResponse:
    """
    Get a signed URL to upload a video file directly to storage.

    Call `createVideoFromUpload` with the returned path once the upload
    has finished.
    """
    service = VideoService(db, storage)
    return await service.request_upload_url(project_id, request, profile)


@router.post(
    "/projects/{project_id}/videos/upload",
    response_model=VideoResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createVideoFromUpload",
)
async def create_video_from_upload(
    project_id: str,
    data: VideoFromUploadCreate,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
    storage: StorageService = Depends(get_storage),
) -> VideoResponse:
    service = VideoService(db, storage)
    return await service.create_video_from_upload(project_id, data, profile)


@router.post(
    "/projects/{project_id}/videos/link",
    response_model=VideoResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createVideoFromUrl",
)
async def create_video_from_url(
    project_id: str,
    data: VideoFromUrlCreate,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> VideoResponse:
    """
    Add a YouTube, Vimeo or other external video by URL.
    """
    service = VideoService(db)
    return await service.create_video_from_url(project_id, data, profile)


@router.get("/videos/{video_id}", response_model=VideoResponse, operation_id="getVideo")
async def get_video(
    video_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> VideoResponse:
    service = VideoService(db)
    return await service.get_video(video_id, profile)


@router.patch(
    "/videos/{video_id}", response_model=VideoResponse, operation_id="updateVideo"
)
async def update_video(
    video_id: str,
    updates: VideoUpdate,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
) -> VideoResponse:
    service = VideoService(db)
    return await service.update_video(video_id, updates, profile)


@router.delete(
    "/videos/{video_id}", response_model=DeleteResponse, operation_id="deleteVideo"
)
async def delete_video(
    video_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
    storage: Optional[StorageService] = Depends(get_optional_storage),
) -> DeleteResponse:
    service = VideoService(db, storage)
    await service.delete_video(video_id, profile)
    return DeleteResponse()


@router.get(
    "/videos/{video_id}/playback-url",
    response_model=PlaybackUrlResponse,
    operation_id="getVideoPlaybackUrl",
)
async def get_playback_url(
    video_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
    storage: Optional[StorageService] = Depends(get_optional_storage),
) -> PlaybackUrlResponse:
    service = VideoService(db, storage)
    return await service.get_playback_url(video_id, profile)


@router.get(
    "/videos/{video_id}/player",
    response_model=PlayerConfig,
    operation_id="getPlayerConfig",
)
async def get_player_config(
    video_id: str,
    profile: Profile = Depends(get_current_profile),
    db: Prisma = Depends(get_db),
    storage: Optional[StorageService] = Depends(get_optional_storage),
) -> PlayerConfig:
    """
    Get the player backend and source for a video.
    """
    service = VideoService(db, storage)
    return await service.get_player_config(video_id, profile)
