# rehearsal/shared/playback/polling.py
import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

from rehearsal.core.settings import settings

from .player import PlayerHandle

logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    UNSTARTED = "unstarted"
    PLAYING = "playing"
    PAUSED = "paused"
    BUFFERING = "buffering"
    ENDED = "ended"


TimeListener = Callable[[float], None]


class TimeUpdatePoller:
    """
    Reports a player's current time to a listener.

    Players without time events (the YouTube IFrame player) are polled: fast
    while playing, slower while paused so scrubbing is still picked up, and
    not at all once playback ends. Every state change also reports the time
    immediately.
    """

    def __init__(
        self,
        handle: PlayerHandle,
        on_time_update: TimeListener,
        playing_interval: Optional[float] = None,
        paused_interval: Optional[float] = None,
    ):
        self.handle = handle
        self.on_time_update = on_time_update
        self.playing_interval = playing_interval or settings.PLAYER_POLL_PLAYING_SECONDS
        self.paused_interval = paused_interval or settings.PLAYER_POLL_PAUSED_SECONDS
        self.interval: Optional[float] = None
        self.error: Optional[BaseException] = None
        self._task: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def is_polling(self) -> bool:
        return self._task is not None and not self._task.done()

    def on_state_change(self, state: PlaybackState) -> None:
        """
        React to a player state change.

        Must be called from within a running event loop.
        """
        if self._closed:
            return

        self._report()

        if state is PlaybackState.PLAYING:
            self._restart(self.playing_interval)
        elif state is PlaybackState.PAUSED:
            self._restart(self.paused_interval)
        else:
            self._stop()

    def close(self) -> None:
        self._closed = True
        self._stop()

    def _report(self) -> None:
        self.on_time_update(self.handle.current_time())

    def _restart(self, interval: float) -> None:
        self._stop()
        self.interval = interval
        self.error = None
        self._task = asyncio.get_running_loop().create_task(self._poll(interval))
        self._task.add_done_callback(self._on_poll_done)

    def _stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self.interval = None

    def _on_poll_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is None:
            return

        logger.error(f"Time update polling stopped: {error!r}")
        self.error = error
        if task is self._task:
            self._task = None
            self.interval = None

    async def _poll(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            self._report()
