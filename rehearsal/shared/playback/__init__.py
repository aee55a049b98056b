"""
Media playback adapter.

Selects a player backend from a video's source and drives every backend
through the same PlayerHandle surface.
"""

from .player import (
    IframeBackend,
    NativeBackend,
    PlayerHandle,
    YouTubeBackend,
    create_player_handle,
)
from .polling import PlaybackState, TimeUpdatePoller
from .sources import (
    PlayerBackend,
    PlayerConfig,
    VideoSourceDescriptor,
    build_player_config,
    select_backend,
)

__all__ = [
    "IframeBackend",
    "NativeBackend",
    "PlaybackState",
    "PlayerBackend",
    "PlayerConfig",
    "PlayerHandle",
    "TimeUpdatePoller",
    "VideoSourceDescriptor",
    "YouTubeBackend",
    "build_player_config",
    "create_player_handle",
    "select_backend",
]
