"""
EventPusher implementations: push swipe events to the presentation layer.

Provides three implementations:
- QueueEventPusher: hands events to an asyncio.Queue a view model drains
- NullEventPusher: silently discards (headless / testing)
- LoggingEventPusher: logs events (debugging / CI)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from pulsedeck.core.events import SwipeEvent

logger = logging.getLogger(__name__)


class NullEventPusher:
    """EventPusher that silently discards all events.

    Use for headless mode (notebooks, CI, scripts) where nothing
    subscribes to the engine.
    """

    async def push(self, event: SwipeEvent) -> None:
        pass

    async def push_many(self, events: list[SwipeEvent]) -> None:
        pass


class LoggingEventPusher:
    """EventPusher that logs events at INFO level."""

    async def push(self, event: SwipeEvent) -> None:
        logger.info(
            "Event [%s] %s: %s",
            event.session_id,
            event.event_type.value,
            {k: str(v)[:100] for k, v in event.data.items()},
        )

    async def push_many(self, events: list[SwipeEvent]) -> None:
        for event in events:
            await self.push(event)


class QueueEventPusher:
    """
    EventPusher backed by an asyncio.Queue.

    The presentation layer awaits ``queue.get()`` and animates from the
    events. With a bounded queue, the oldest event is dropped when full
    so the engine never blocks on a slow consumer.
    """

    def __init__(self, queue: Optional[asyncio.Queue] = None, maxsize: int = 0):
        self._queue: asyncio.Queue = queue if queue is not None else asyncio.Queue(maxsize)
        self.dropped = 0

    @property
    def queue(self) -> asyncio.Queue:
        return self._queue

    async def push(self, event: SwipeEvent) -> None:
        """Enqueue a single event without waiting."""
        if self._queue.full():
            try:
                stale = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                pass
            else:
                self.dropped += 1
                logger.debug(
                    "Event queue full, dropped %s", stale.event_type.value,
                )
        self._queue.put_nowait(event)

    async def push_many(self, events: list[SwipeEvent]) -> None:
        """Push multiple events."""
        for event in events:
            await self.push(event)

    def drain(self) -> list[SwipeEvent]:
        """Take everything currently queued."""
        events: list[SwipeEvent] = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                return events
