"""Single-owner event loop for a lyrics session.

The host player posts messages into the session; one asyncio task consumes
them in order and is the only code that touches ``LyricsService`` state.
Track changes are applied in order; only the provider calls they start run
as background tasks, so position updates keep flowing during a fetch.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional, Set, Union

from ..utils.logging import get_logger
from .models import Track
from .service import LyricsService

logger = get_logger(__name__)


@dataclass(frozen=True)
class TrackChanged:
    track: Optional[Track]


@dataclass(frozen=True)
class PositionUpdated:
    position: float


@dataclass(frozen=True)
class RefreshRequested:
    pass


@dataclass(frozen=True)
class ClearCache:
    pass


@dataclass(frozen=True)
class _Stop:
    pass


Message = Union[TrackChanged, PositionUpdated, RefreshRequested, ClearCache]


class LyricsSession:
    """Serializes player events into a ``LyricsService``."""

    def __init__(self, service: Optional[LyricsService] = None):
        self.service = service or LyricsService()
        self._queue: "asyncio.Queue[Union[Message, _Stop]]" = asyncio.Queue()
        self._tasks: Set["asyncio.Task[object]"] = set()
        self.running = False

    def post(self, message: Message) -> None:
        """Queue a message for the session loop."""
        self._queue.put_nowait(message)

    def stop(self) -> None:
        """Ask ``run()`` to finish once earlier messages are handled."""
        self._queue.put_nowait(_Stop())

    async def run(self) -> None:
        """Process messages until ``stop()`` is called."""
        self.running = True
        try:
            while True:
                message = await self._queue.get()
                try:
                    if isinstance(message, _Stop):
                        break
                    self._dispatch(message)
                finally:
                    self._queue.task_done()
        finally:
            self.running = False
            await self._wait_for_tasks()

    async def drain(self) -> None:
        """Wait until every posted message and the fetches it started are done."""
        await self._queue.join()
        await self._wait_for_tasks()

    def _dispatch(self, message: Message) -> None:
        service = self.service
        if isinstance(message, PositionUpdated):
            service.update_position(message.position)
        elif isinstance(message, TrackChanged):
            # Loading or a cache hit is applied here, before the next message.
            token = service.begin_track_change(message.track)
            if token is not None:
                self._spawn(service.fetch_from_providers(message.track, token))
        elif isinstance(message, RefreshRequested):
            track = service.current_track
            if track is not None:
                token = service.begin_fetch(track)
                self._spawn(service.fetch_from_providers(track, token))
        elif isinstance(message, ClearCache):
            service.clear_cache()
        else:
            raise TypeError(f"Unknown session message: {message!r}")

    def _spawn(self, coro) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: "asyncio.Task[object]") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Lyrics task failed: {exc!r}")

    async def _wait_for_tasks(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
