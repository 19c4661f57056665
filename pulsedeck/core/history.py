"""Bounded rewind history: FIFO eviction on overflow, LIFO for undo."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterator, Optional

from .errors import ConfigError
from .models import RewindEntry

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_CAPACITY = 10


class RewindHistory:
    """
    Fixed-capacity stack of committed decisions.

    Backed by ``deque(maxlen=capacity)``: appending to a full history
    drops the oldest entry. In-memory only, gone on restart.
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY):
        if capacity < 1:
            raise ConfigError(f"history capacity must be positive, got {capacity}")
        self._entries: deque[RewindEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def push(self, entry: RewindEntry) -> Optional[RewindEntry]:
        """Append an entry. Returns the evicted entry, if any."""
        evicted = None
        if len(self._entries) == self.capacity:
            evicted = self._entries[0]
            logger.debug("Rewind history full, evicting %s", evicted.subject_id)
        self._entries.append(entry)
        return evicted

    def pop(self) -> Optional[RewindEntry]:
        """Remove and return the newest entry, or None when empty."""
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[RewindEntry]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> list[RewindEntry]:
        """Oldest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[RewindEntry]:
        return iter(list(self._entries))

    def __contains__(self, entry: object) -> bool:
        return entry in self._entries
