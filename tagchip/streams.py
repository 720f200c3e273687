"""Bridge from notifier callbacks to an asyncio consumer (the SSE endpoint).

Notifier callbacks fire on whatever thread committed the session, usually a
threadpool worker. They only schedule a put on the consumer's event loop.
"""

import asyncio
import logging
from typing import Callable

from tagchip.notifier import ChangeEvent, ChangeNotifier

logger = logging.getLogger(__name__)


class ChangeStream:
    def __init__(
        self,
        notifier: ChangeNotifier,
        project_id: int | None = None,
        maxsize: int = 1000,
    ):
        self.project_id = project_id
        self._notifier = notifier
        self._maxsize = maxsize
        self._loop: asyncio.AbstractEventLoop | None = None
        self._queue: asyncio.Queue[ChangeEvent] | None = None
        self._unsubscribers: list[Callable[[], None]] = []

    def open(self) -> None:
        """Subscribe. Must be called from the loop that will consume."""
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue(self._maxsize)
        if self.project_id is not None:
            self._unsubscribers.append(
                self._notifier.on_project_tags_changed(self.project_id, self._push)
            )
        self._unsubscribers.append(self._notifier.on_claims_changed(self._push))
        logger.debug("Change stream opened (project=%s)", self.project_id)

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        logger.debug("Change stream closed (project=%s)", self.project_id)

    def _push(self, change: ChangeEvent) -> None:
        # only tag events are scoped, claim events always go through
        if (
            change.topic == "tags"
            and self.project_id is not None
            and change.project_id is not None
            and change.project_id != self.project_id
        ):
            return
        if self._loop is None or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._put, change)

    def _put(self, change: ChangeEvent) -> None:
        try:
            self._queue.put_nowait(change)
        except asyncio.QueueFull:
            # observers re-fetch on the next event anyway
            logger.warning("Change stream queue full, dropped %s", change)

    async def get(self, timeout: float) -> ChangeEvent | None:
        """Next change, or None when nothing arrived within `timeout` seconds."""
        try:
            return await asyncio.wait_for(self._queue.get(), timeout)
        except asyncio.TimeoutError:
            return None
