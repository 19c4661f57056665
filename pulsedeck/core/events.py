"""
Swipe events pushed from the engine to the presentation layer.

Every committed decision, snap-back, rewind and sync problem produces
one event. Factory functions below are the only place event payloads
are shaped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from .models import generate_id


class EventType(str, Enum):
    DECISION_COMMITTED = "decision.committed"
    GESTURE_SNAPPED_BACK = "gesture.snapped_back"
    MATCH_FOUND = "match.found"
    REWIND_COMPLETED = "rewind.completed"
    REWIND_DENIED = "rewind.denied"
    SYNC_FAILED = "sync.failed"
    DECK_REFILLED = "deck.refilled"
    DECK_EXHAUSTED = "deck.exhausted"


@dataclass
class SwipeEvent:
    event_type: EventType
    session_id: str
    data: dict[str, Any] = field(default_factory=dict)
    event_id: str = field(default_factory=lambda: generate_id("evt"))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type.value,
            "session_id": self.session_id,
            "timestamp": self.timestamp.isoformat(),
            "data": self.data,
        }


# ============ Factories ============

def decision_committed(
    session_id: str,
    subject_id: str,
    decision: str,
    source: str,
    history_size: int,
) -> SwipeEvent:
    """``source`` is "gesture" or "button"."""
    return SwipeEvent(
        event_type=EventType.DECISION_COMMITTED,
        session_id=session_id,
        data={
            "subject_id": subject_id,
            "decision": decision,
            "source": source,
            "history_size": history_size,
        },
    )


def gesture_snapped_back(
    session_id: str,
    dx: float,
    dy: float,
    vx: float,
    reason: str,
) -> SwipeEvent:
    return SwipeEvent(
        event_type=EventType.GESTURE_SNAPPED_BACK,
        session_id=session_id,
        data={"dx": dx, "dy": dy, "vx": vx, "reason": reason},
    )


def match_found(
    session_id: str,
    subject_id: str,
    decision: str,
    conversation_id: Optional[str] = None,
) -> SwipeEvent:
    return SwipeEvent(
        event_type=EventType.MATCH_FOUND,
        session_id=session_id,
        data={
            "subject_id": subject_id,
            "decision": decision,
            "conversation_id": conversation_id,
        },
    )


def rewind_completed(
    session_id: str,
    subject_id: str,
    decision: str,
    history_size: int,
) -> SwipeEvent:
    return SwipeEvent(
        event_type=EventType.REWIND_COMPLETED,
        session_id=session_id,
        data={
            "subject_id": subject_id,
            "decision": decision,
            "history_size": history_size,
        },
    )


def rewind_denied(session_id: str, reason: str) -> SwipeEvent:
    return SwipeEvent(
        event_type=EventType.REWIND_DENIED,
        session_id=session_id,
        data={"reason": reason},
    )


def sync_failed(
    session_id: str,
    operation: str,
    subject_id: str,
    decision: str,
    error: str,
) -> SwipeEvent:
    return SwipeEvent(
        event_type=EventType.SYNC_FAILED,
        session_id=session_id,
        data={
            "operation": operation,
            "subject_id": subject_id,
            "decision": decision,
            "error": error,
        },
    )


def deck_refilled(session_id: str, added: int, remaining: int) -> SwipeEvent:
    return SwipeEvent(
        event_type=EventType.DECK_REFILLED,
        session_id=session_id,
        data={"added": added, "remaining": remaining},
    )


def deck_exhausted(session_id: str) -> SwipeEvent:
    return SwipeEvent(
        event_type=EventType.DECK_EXHAUSTED,
        session_id=session_id,
        data={},
    )
