# rehearsal/domains/videos/utils.py
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from prisma.enums import VideoSourceType

YOUTUBE_PATTERNS = [
    re.compile(
        r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([a-zA-Z0-9_-]{11})"
    ),
]

VIMEO_PATTERNS = [
    re.compile(r"vimeo\.com/(\d+)"),
    re.compile(r"player\.vimeo\.com/video/(\d+)"),
]

YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{id}"
YOUTUBE_THUMBNAIL_URL = "https://img.youtube.com/vi/{id}/maxresdefault.jpg"
VIMEO_EMBED_URL = "https://player.vimeo.com/video/{id}"

FILE_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


@dataclass(frozen=True)
class ParsedVideoUrl:
    source_type: VideoSourceType
    external_id: Optional[str] = None
    embed_url: Optional[str] = None
    thumbnail_url: Optional[str] = None


def parse_video_url(url: str) -> ParsedVideoUrl:
    """
    Recognize YouTube and Vimeo links; anything else is an external source.

    Vimeo thumbnails need an API call, so none is derived for them.
    """
    for pattern in YOUTUBE_PATTERNS:
        match = pattern.search(url)
        if match:
            video_id = match.group(1)
            return ParsedVideoUrl(
                source_type=VideoSourceType.youtube,
                external_id=video_id,
                embed_url=YOUTUBE_EMBED_URL.format(id=video_id),
                thumbnail_url=YOUTUBE_THUMBNAIL_URL.format(id=video_id),
            )

    for pattern in VIMEO_PATTERNS:
        match = pattern.search(url)
        if match:
            video_id = match.group(1)
            return ParsedVideoUrl(
                source_type=VideoSourceType.vimeo,
                external_id=video_id,
                embed_url=VIMEO_EMBED_URL.format(id=video_id),
            )

    return ParsedVideoUrl(source_type=VideoSourceType.external)


def get_video_embed_url(
    source_type: VideoSourceType,
    external_id: Optional[str],
    external_url: Optional[str],
) -> Optional[str]:
    if source_type == VideoSourceType.youtube and external_id:
        return YOUTUBE_EMBED_URL.format(id=external_id)
    if source_type == VideoSourceType.vimeo and external_id:
        return VIMEO_EMBED_URL.format(id=external_id)
    if source_type == VideoSourceType.external and external_url:
        return external_url
    return None


def is_valid_video_url(url: str) -> bool:
    """Only absolute http(s) URLs can be linked."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def format_timestamp(seconds: float) -> str:
    """Format seconds as M:SS, or H:MM:SS from one hour on."""
    if seconds < 0:
        return "0:00"

    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def parse_timestamp(timestamp: str) -> float:
    """
    Parse "MM:SS" or "HH:MM:SS" back to seconds.

    Raises:
        ValueError: If there are not two or three parts, or a part is not a
            number
    """
    parts = [float(part) for part in timestamp.strip().split(":")]

    if len(parts) == 3:
        return parts[0] * 3600 + parts[1] * 60 + parts[2]
    if len(parts) == 2:
        return parts[0] * 60 + parts[1]
    raise ValueError(f"Unrecognized timestamp: {timestamp!r}")


def format_file_size(size_bytes: int) -> str:
    if size_bytes <= 0:
        return "0 Bytes"

    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(FILE_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {FILE_SIZE_UNITS[unit]}"


def format_duration(seconds: float) -> str:
    if seconds < 60:
        return f"{round(seconds)}s"

    minutes = int(seconds // 60)
    remaining_seconds = round(seconds % 60)

    if minutes < 60:
        return f"{minutes}m {remaining_seconds}s" if remaining_seconds else f"{minutes}m"

    hours, remaining_minutes = divmod(minutes, 60)
    return f"{hours}h {remaining_minutes}m" if remaining_minutes else f"{hours}h"
