"""
pulsedeck: swipe interaction engine for a discovery deck.

Public API surface. Import everything you need from here::

    from pulsedeck import SwipeEngine, EngineBuilder, SwipeDirection

Extension points (implement these Protocols to customize):

- ``DiscoverySource`` — where candidates come from and decisions go
- ``EntitlementGate`` — who may rewind
- ``FeedbackSink`` — haptic cues
- ``EventPusher`` — event transport to the presentation layer
- ``ReconciliationHook`` — what to do when a decision fails to sync
"""

# -- Core engine --
from pulsedeck.core.engine import SwipeEngine

# -- Classifier --
from pulsedeck.core.classifier import (
    DEFAULT_THRESHOLDS,
    SwipeThresholds,
    classify_release,
    provisional_direction,
    should_commit,
)

# -- Components --
from pulsedeck.core.deck import CandidateDeck
from pulsedeck.core.history import RewindHistory

# -- Data models --
from pulsedeck.core.models import (
    DragSnapshot,
    EngineState,
    HapticKind,
    RewindEntry,
    RewindOutcome,
    SwipeDecision,
    SwipeDirection,
    SwipeResult,
    SyncFailure,
)

# -- Events --
from pulsedeck.core.events import EventType, SwipeEvent

# -- Errors --
from pulsedeck.core.errors import (
    CollaboratorError,
    ConfigError,
    EngineError,
    PulseDeckError,
)

# -- Protocols (contracts for extension) --
from pulsedeck.core.protocols import (
    DiscoverySource,
    EntitlementGate,
    EventPusher,
    FeedbackSink,
    ReconciliationHook,
    SnapshotListener,
)

# -- Builder --
from pulsedeck.builder import EngineBuilder

# -- Default implementations --
from pulsedeck.infra.config import PulseDeckConfig
from pulsedeck.infra.discovery import InMemoryDiscoverySource
from pulsedeck.infra.entitlement import CallableEntitlementGate, StaticEntitlementGate
from pulsedeck.infra.event_pusher import (
    LoggingEventPusher,
    NullEventPusher,
    QueueEventPusher,
)
from pulsedeck.infra.feedback import (
    LoggingFeedbackSink,
    NullFeedbackSink,
    RecordingFeedbackSink,
)

__all__ = [
    # Engine
    "SwipeEngine",
    "EngineBuilder",
    # Classifier
    "DEFAULT_THRESHOLDS",
    "SwipeThresholds",
    "classify_release",
    "provisional_direction",
    "should_commit",
    # Components
    "CandidateDeck",
    "RewindHistory",
    # Models
    "DragSnapshot",
    "EngineState",
    "HapticKind",
    "RewindEntry",
    "RewindOutcome",
    "SwipeDecision",
    "SwipeDirection",
    "SwipeResult",
    "SyncFailure",
    # Events
    "SwipeEvent",
    "EventType",
    # Errors
    "PulseDeckError",
    "EngineError",
    "CollaboratorError",
    "ConfigError",
    # Protocols
    "DiscoverySource",
    "EntitlementGate",
    "EventPusher",
    "FeedbackSink",
    "ReconciliationHook",
    "SnapshotListener",
    # Default implementations
    "PulseDeckConfig",
    "InMemoryDiscoverySource",
    "StaticEntitlementGate",
    "CallableEntitlementGate",
    "NullEventPusher",
    "LoggingEventPusher",
    "QueueEventPusher",
    "NullFeedbackSink",
    "LoggingFeedbackSink",
    "RecordingFeedbackSink",
]
