"""
Local mirror of the discovery queue.

The engine always decides about the subject at the top of the deck.
The deck pulls batches from the DiscoverySource and tops itself up
when it runs low; a rewound subject goes back on top.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Optional

from .errors import ConfigError
from .protocols import DiscoverySource

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10
DEFAULT_REFILL_THRESHOLD = 3


class CandidateDeck:
    """Ordered, de-duplicated queue of subject ids."""

    def __init__(
        self,
        source: DiscoverySource,
        batch_size: int = DEFAULT_BATCH_SIZE,
        refill_threshold: int = DEFAULT_REFILL_THRESHOLD,
    ):
        if batch_size < 1:
            raise ConfigError(f"deck batch size must be positive, got {batch_size}")
        if refill_threshold < 0:
            raise ConfigError(
                f"deck refill threshold must be non-negative, got {refill_threshold}"
            )
        self._source = source
        self._batch_size = batch_size
        self._refill_threshold = refill_threshold
        self._queue: deque[str] = deque()
        self._exhausted = False

    @property
    def current(self) -> Optional[str]:
        """Subject currently on top, or None when the deck is empty."""
        return self._queue[0] if self._queue else None

    @property
    def exhausted(self) -> bool:
        """True once the source returned a short batch."""
        return self._exhausted

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @property
    def needs_refill(self) -> bool:
        return not self._exhausted and len(self._queue) <= self._refill_threshold

    def upcoming(self, n: Optional[int] = None) -> list[str]:
        items = list(self._queue)
        return items if n is None else items[:n]

    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, subject_id: object) -> bool:
        return subject_id in self._queue

    async def load(self) -> int:
        """Fetch one batch from the source. Returns how many were added.

        Errors from the source propagate.
        """
        fetched = await self._source.load_next(self._batch_size)
        added = 0
        for subject_id in fetched:
            if subject_id in self._queue:
                continue
            self._queue.append(subject_id)
            added += 1
        self._exhausted = len(fetched) < self._batch_size
        logger.debug(
            "Deck loaded %d of %d fetched (size=%d, exhausted=%s)",
            added, len(fetched), len(self._queue), self._exhausted,
        )
        return added

    async def refill_if_needed(self) -> int:
        """Load another batch when at or below the refill threshold."""
        if not self.needs_refill:
            return 0
        return await self.load()

    def take(self, subject_id: Optional[str] = None) -> Optional[str]:
        """
        Remove a subject from the deck.

        Without an argument, removes the top. With one, removes that
        subject wherever it sits. Returns the removed id, or None.
        """
        if subject_id is None:
            return self._queue.popleft() if self._queue else None
        try:
            self._queue.remove(subject_id)
        except ValueError:
            return None
        return subject_id

    def put_back(self, subject_id: str) -> None:
        """Place a subject on top (rewind). Existing copies are removed."""
        try:
            self._queue.remove(subject_id)
        except ValueError:
            pass
        self._queue.appendleft(subject_id)

    def clear(self) -> None:
        self._queue.clear()
        self._exhausted = False
