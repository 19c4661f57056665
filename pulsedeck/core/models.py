"""
Core data models for the swipe interaction engine.

These are the data structures shared across all modules. They define
WHAT the engine works with, not HOW gestures are classified.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


# ============ ID Generation ============

def generate_id(prefix: str = "") -> str:
    """Generate a unique ID with optional prefix."""
    uid = uuid.uuid4().hex[:12]
    return f"{prefix}_{uid}" if prefix else uid


# ============ Decisions ============

class SwipeDecision(str, Enum):
    PASS = "pass"
    LIKE = "like"
    SUPER_LIKE = "super_like"


class SwipeDirection(str, Enum):
    """Physical swipe direction. Each maps to exactly one decision."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"

    @property
    def decision(self) -> SwipeDecision:
        return _DIRECTION_DECISIONS[self]


_DIRECTION_DECISIONS: dict[SwipeDirection, SwipeDecision] = {
    SwipeDirection.LEFT: SwipeDecision.PASS,
    SwipeDirection.RIGHT: SwipeDecision.LIKE,
    SwipeDirection.UP: SwipeDecision.SUPER_LIKE,
}


class HapticKind(str, Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


# ============ Engine State ============

class EngineState(str, Enum):
    """
    Interaction lifecycle states.

    COMMITTING and SNAPPING_BACK are transient: the engine passes
    through them on the way back to IDLE within a single call.
    """
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"
    SNAPPING_BACK = "snapping_back"


@dataclass
class DragState:
    """Mutable drag state owned by one engine.

    Offsets are cumulative screen fractions. When inactive, the offset
    is (0, 0) and there is no provisional direction.
    """
    dx: float = 0.0
    dy: float = 0.0
    is_active: bool = False
    provisional: Optional[SwipeDirection] = None

    @property
    def offset(self) -> tuple[float, float]:
        return (self.dx, self.dy)

    def reset(self) -> None:
        self.dx = 0.0
        self.dy = 0.0
        self.is_active = False
        self.provisional = None

    def snapshot(self, state: EngineState) -> DragSnapshot:
        return DragSnapshot(
            dx=self.dx,
            dy=self.dy,
            is_active=self.is_active,
            provisional=self.provisional,
            state=state,
        )


@dataclass(frozen=True)
class DragSnapshot:
    """Immutable view of the drag state handed to subscribers."""
    dx: float
    dy: float
    is_active: bool
    provisional: Optional[SwipeDirection]
    state: EngineState


# ============ Rewind ============

@dataclass(frozen=True)
class RewindEntry:
    """A committed decision that can be rewound."""
    decision: SwipeDecision
    subject_id: str


class RewindOutcome(str, Enum):
    REWOUND = "rewound"
    NOTHING_TO_UNDO = "nothing_to_undo"
    DENIED_NOT_ENTITLED = "denied_not_entitled"


# ============ Collaborator Results ============

@dataclass
class SwipeResult:
    """What the discovery source reports back for a recorded decision."""
    subject_id: str
    decision: SwipeDecision
    is_match: bool = False
    conversation_id: Optional[str] = None


@dataclass
class SyncFailure:
    """
    A decision or undo the discovery source did not accept.

    Local state is NOT rolled back when this happens. The failure is
    handed to the reconciliation hook (if any) so the caller can retry
    or compensate.
    """
    operation: str
    entry: RewindEntry
    error: Exception
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
