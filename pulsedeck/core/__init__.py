"""Core interaction layer: classifier, history, deck, engine, events, models, errors."""

from .classifier import (
    DEFAULT_THRESHOLDS,
    SwipeThresholds,
    classify_release,
    provisional_direction,
    should_commit,
)
from .deck import CandidateDeck
from .engine import SwipeEngine
from .errors import (
    PulseDeckError,
    CollaboratorError,
    ConfigError,
    EngineError,
)
from .events import EventType, SwipeEvent
from .history import RewindHistory
from .models import (
    DragSnapshot,
    DragState,
    EngineState,
    HapticKind,
    RewindEntry,
    RewindOutcome,
    SwipeDecision,
    SwipeDirection,
    SwipeResult,
    SyncFailure,
    generate_id,
)
from .protocols import (
    DiscoverySource,
    EntitlementGate,
    EventPusher,
    FeedbackSink,
    ReconciliationHook,
    SnapshotListener,
)

__all__ = [
    "DEFAULT_THRESHOLDS", "SwipeThresholds",
    "classify_release", "provisional_direction", "should_commit",
    "CandidateDeck", "SwipeEngine", "RewindHistory",
    "PulseDeckError", "CollaboratorError", "ConfigError", "EngineError",
    "EventType", "SwipeEvent",
    "DragSnapshot", "DragState", "EngineState", "HapticKind",
    "RewindEntry", "RewindOutcome", "SwipeDecision", "SwipeDirection",
    "SwipeResult", "SyncFailure", "generate_id",
    "DiscoverySource", "EntitlementGate", "EventPusher", "FeedbackSink",
    "ReconciliationHook", "SnapshotListener",
]
