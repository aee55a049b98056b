# rehearsal/shared/playback/player.py
import logging
from typing import Any, Optional, Protocol

from .sources import PlayerBackend

logger = logging.getLogger(__name__)


class MediaElement(Protocol):
    """A native video element."""

    currentTime: float

    def play(self) -> Any: ...

    def pause(self) -> Any: ...


class YouTubePlayer(Protocol):
    """The subset of the YouTube IFrame player API the handle drives."""

    def getCurrentTime(self) -> float: ...

    def seekTo(self, seconds: float, allowSeekAhead: bool) -> Any: ...

    def playVideo(self) -> Any: ...

    def pauseVideo(self) -> Any: ...


class PlayerHandle:
    """
    Uniform control surface over every player backend.

    Seeking resumes playback. Backends that cannot be controlled ignore
    every call and report a time of zero.
    """

    backend: PlayerBackend = PlayerBackend.UNAVAILABLE

    def seek(self, seconds: float) -> None:
        pass

    def current_time(self) -> float:
        return 0.0

    def underlying_element(self) -> Optional[Any]:
        return None

    def pause(self) -> None:
        pass


class NativeBackend(PlayerHandle):
    backend = PlayerBackend.NATIVE

    def __init__(self, element: MediaElement):
        self.element = element

    def seek(self, seconds: float) -> None:
        self.element.currentTime = max(0.0, seconds)
        self.element.play()

    def current_time(self) -> float:
        return float(self.element.currentTime)

    def underlying_element(self) -> MediaElement:
        return self.element

    def pause(self) -> None:
        self.element.pause()


class YouTubeBackend(PlayerHandle):
    backend = PlayerBackend.YOUTUBE

    def __init__(self, player: YouTubePlayer):
        self.player = player

    def seek(self, seconds: float) -> None:
        self.player.seekTo(max(0.0, seconds), True)
        self.player.playVideo()

    def current_time(self) -> float:
        return float(self.player.getCurrentTime())

    def pause(self) -> None:
        self.player.pauseVideo()


class IframeBackend(PlayerHandle):
    """Plain embeds (Vimeo) expose no control API."""

    backend = PlayerBackend.IFRAME


def create_player_handle(backend: PlayerBackend, target: Any = None) -> PlayerHandle:
    """
    Wrap a backend's player object in a PlayerHandle.

    Args:
        backend: Backend selected for the video
        target: The native element or YouTube player; ignored for iframes

    Returns:
        PlayerHandle for the backend
    """
    if backend is PlayerBackend.NATIVE and target is not None:
        return NativeBackend(target)
    if backend is PlayerBackend.YOUTUBE and target is not None:
        return YouTubeBackend(target)
    if backend is PlayerBackend.IFRAME:
        return IframeBackend()

    logger.debug(f"No controllable player for backend {backend.value}")
    return PlayerHandle()
