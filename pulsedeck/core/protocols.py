"""
Module-boundary Protocol definitions: the contracts between the engine
and the collaborators it drives.

These Protocols define WHAT each collaborator must do, not HOW. Any
implementation that satisfies the Protocol can be used interchangeably
(HTTP-backed discovery service, in-memory fake, test mock).
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from .events import SwipeEvent
from .models import DragSnapshot, HapticKind, SwipeDecision, SwipeResult, SyncFailure


# ============ Discovery ============

@runtime_checkable
class DiscoverySource(Protocol):
    """
    Supplies candidate profiles and accepts decisions about them.

    The engine treats it as an opaque service. It commits its own state
    first and only then calls these methods, so a failure here never
    corrupts the engine.
    """

    async def load_next(self, n: int) -> list[str]:
        """Return up to ``n`` candidate subject ids, in display order."""
        ...

    async def record_decision(
        self, subject_id: str, decision: SwipeDecision,
    ) -> Optional[SwipeResult]:
        """
        Record a decision. May return a SwipeResult carrying match info.
        Raises on backend failure.
        """
        ...

    async def undo_last_decision(self, subject_id: str) -> None:
        """Reverse the most recent decision, which was about ``subject_id``."""
        ...


# ============ Entitlement ============

@runtime_checkable
class EntitlementGate(Protocol):
    """Premium gate. Queried on every rewind, never cached by the engine."""

    async def query_rewind_entitlement(self) -> bool:
        ...


# ============ Feedback ============

@runtime_checkable
class FeedbackSink(Protocol):
    """Haptic / visual feedback. Fire-and-forget, no return value."""

    def notify_haptic(self, kind: HapticKind) -> None:
        ...


# ============ Event Pusher ============

@runtime_checkable
class EventPusher(Protocol):
    """
    Pushes swipe events to the presentation layer.

    The engine pushes ALL events. The presentation layer decides what
    to animate or display.
    """

    async def push(self, event: SwipeEvent) -> None:
        """Push a single event."""
        ...

    async def push_many(self, events: list[SwipeEvent]) -> None:
        """Push multiple events."""
        ...


# ============ Reconciliation ============

@runtime_checkable
class ReconciliationHook(Protocol):
    """
    Receives decisions and undos the discovery source rejected.

    The engine does not retry or roll back. Whatever policy applies
    (retry with backoff, drop the rewind entry, show "sync pending")
    belongs here.
    """

    async def on_sync_failure(self, failure: SyncFailure) -> None:
        ...


# ============ Snapshot Listener ============

@runtime_checkable
class SnapshotListener(Protocol):
    """Synchronous subscriber for drag snapshots (drives animation)."""

    def __call__(self, snapshot: DragSnapshot) -> None:
        ...
