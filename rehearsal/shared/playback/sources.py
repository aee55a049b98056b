# rehearsal/shared/playback/sources.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from prisma.enums import VideoSourceType
from pydantic import BaseModel

from rehearsal.core.settings import settings

YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{id}"
VIMEO_EMBED_URL = "https://player.vimeo.com/video/{id}"


class PlayerBackend(str, Enum):
    NATIVE = "native"
    YOUTUBE = "youtube"
    IFRAME = "iframe"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class VideoSourceDescriptor:
    """What a client needs to know about a video to pick a player."""

    source_type: VideoSourceType
    external_id: Optional[str] = None
    external_url: Optional[str] = None
    playback_url: Optional[str] = None


class PlayerConfig(BaseModel):
    backend: PlayerBackend
    source_url: Optional[str] = None
    embed_url: Optional[str] = None
    external_id: Optional[str] = None
    poll_playing_seconds: float
    poll_paused_seconds: float


def select_backend(descriptor: VideoSourceDescriptor) -> PlayerBackend:
    """
    Pick the player backend for a video source.

    Uploads play natively from their signed URL, YouTube videos through the
    IFrame player API and Vimeo videos in a plain iframe. Any other source
    with a URL is handed to the native element.
    """
    source_type = descriptor.source_type

    if source_type == VideoSourceType.upload:
        return PlayerBackend.NATIVE if descriptor.playback_url else PlayerBackend.UNAVAILABLE
    if source_type == VideoSourceType.youtube and descriptor.external_id:
        return PlayerBackend.YOUTUBE
    if source_type == VideoSourceType.vimeo and descriptor.external_id:
        return PlayerBackend.IFRAME
    if descriptor.external_url:
        return PlayerBackend.NATIVE
    return PlayerBackend.UNAVAILABLE


def build_player_config(descriptor: VideoSourceDescriptor) -> PlayerConfig:
    backend = select_backend(descriptor)

    source_url: Optional[str] = None
    embed_url: Optional[str] = None
    if backend is PlayerBackend.NATIVE:
        source_url = descriptor.playback_url or descriptor.external_url
    elif backend is PlayerBackend.YOUTUBE:
        embed_url = YOUTUBE_EMBED_URL.format(id=descriptor.external_id)
    elif backend is PlayerBackend.IFRAME:
        embed_url = VIMEO_EMBED_URL.format(id=descriptor.external_id)

    return PlayerConfig(
        backend=backend,
        source_url=source_url,
        embed_url=embed_url,
        external_id=descriptor.external_id,
        poll_playing_seconds=settings.PLAYER_POLL_PLAYING_SECONDS,
        poll_paused_seconds=settings.PLAYER_POLL_PAUSED_SECONDS,
    )
