"""
In-memory DiscoverySource.

Serves candidates from a fixed list and keeps its own decision log, so
the engine can run headless (demos, notebooks, CI) without a backend.
A subject in ``admirers`` has already liked the user: liking or
super-liking them back is a match.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from pulsedeck.core.errors import CollaboratorError
from pulsedeck.core.models import SwipeDecision, SwipeResult, generate_id

logger = logging.getLogger(__name__)


class InMemoryDiscoverySource:
    """DiscoverySource backed by Python lists."""

    def __init__(
        self,
        candidates: Iterable[str],
        admirers: Optional[Iterable[str]] = None,
    ):
        self._pending: list[str] = list(candidates)
        self._admirers = set(admirers or ())
        self._served: set[str] = set()
        self.decisions: list[tuple[str, SwipeDecision]] = []
        self.matches: dict[str, str] = {}  # subject_id -> conversation_id

    @property
    def remaining(self) -> int:
        return len(self._pending)

    async def load_next(self, n: int) -> list[str]:
        batch = self._pending[:n]
        del self._pending[:n]
        self._served.update(batch)
        logger.debug("Served %d candidates, %d left", len(batch), len(self._pending))
        return batch

    async def record_decision(
        self, subject_id: str, decision: SwipeDecision,
    ) -> SwipeResult:
        if subject_id not in self._served:
            raise CollaboratorError(
                "record_decision", subject_id, ValueError("subject was never served"),
            )
        self.decisions.append((subject_id, decision))

        is_match = decision != SwipeDecision.PASS and subject_id in self._admirers
        conversation_id = None
        if is_match:
            conversation_id = self.matches.setdefault(subject_id, generate_id("conv"))
        return SwipeResult(
            subject_id=subject_id,
            decision=decision,
            is_match=is_match,
            conversation_id=conversation_id,
        )

    async def undo_last_decision(self, subject_id: str) -> None:
        if not self.decisions or self.decisions[-1][0] != subject_id:
            raise CollaboratorError(
                "undo_last_decision",
                subject_id,
                ValueError("not the most recent decision"),
            )
        _, decision = self.decisions.pop()
        if decision != SwipeDecision.PASS:
            self.matches.pop(subject_id, None)
