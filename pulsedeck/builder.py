"""
EngineBuilder: convenience factory for assembling a SwipeEngine with
all its collaborators.

Only the discovery source is truly required. Everything else has a
headless default: no events, no haptics, and a gate that denies rewinds.

Usage (headless)::

    from pulsedeck import EngineBuilder

    engine = (
        EngineBuilder()
        .with_source(my_source)
        .with_entitlement_gate(premium_gate)
        .build()
    )
    await engine.load_deck()
"""

from __future__ import annotations

import logging
from typing import Optional

from pulsedeck.core.classifier import DEFAULT_THRESHOLDS, SwipeThresholds
from pulsedeck.core.deck import DEFAULT_BATCH_SIZE, DEFAULT_REFILL_THRESHOLD
from pulsedeck.core.engine import SwipeEngine
from pulsedeck.core.history import DEFAULT_HISTORY_CAPACITY
from pulsedeck.core.protocols import (
    DiscoverySource,
    EntitlementGate,
    EventPusher,
    FeedbackSink,
    ReconciliationHook,
)
from pulsedeck.infra.config import PulseDeckConfig
from pulsedeck.infra.entitlement import StaticEntitlementGate
from pulsedeck.infra.event_pusher import NullEventPusher
from pulsedeck.infra.feedback import NullFeedbackSink

logger = logging.getLogger(__name__)


class EngineBuilder:
    """Fluent builder for SwipeEngine."""

    def __init__(self) -> None:
        self._source: DiscoverySource | None = None
        self._entitlement_gate: EntitlementGate | None = None
        self._feedback_sink: FeedbackSink | None = None
        self._event_pusher: EventPusher | None = None
        self._reconciliation_hook: ReconciliationHook | None = None
        self._thresholds: SwipeThresholds = DEFAULT_THRESHOLDS
        self._history_capacity: int = DEFAULT_HISTORY_CAPACITY
        self._deck_batch_size: int = DEFAULT_BATCH_SIZE
        self._deck_refill_threshold: int = DEFAULT_REFILL_THRESHOLD
        self._session_id: Optional[str] = None

    # --- Collaborators ---

    def with_source(self, source: DiscoverySource) -> EngineBuilder:
        self._source = source
        return self

    def with_entitlement_gate(self, gate: EntitlementGate) -> EngineBuilder:
        self._entitlement_gate = gate
        return self

    def with_feedback_sink(self, sink: FeedbackSink) -> EngineBuilder:
        self._feedback_sink = sink
        return self

    def with_event_pusher(self, pusher: EventPusher) -> EngineBuilder:
        self._event_pusher = pusher
        return self

    def with_reconciliation_hook(self, hook: ReconciliationHook) -> EngineBuilder:
        self._reconciliation_hook = hook
        return self

    # --- Tuning ---

    def with_config(self, config: PulseDeckConfig) -> EngineBuilder:
        """Take thresholds, history and deck sizes from a config object."""
        self._thresholds = config.to_thresholds()
        self._history_capacity = config.history_capacity
        self._deck_batch_size = config.deck_batch_size
        self._deck_refill_threshold = config.deck_refill_threshold
        return self

    def with_thresholds(self, thresholds: SwipeThresholds) -> EngineBuilder:
        self._thresholds = thresholds
        return self

    def history_capacity(self, capacity: int) -> EngineBuilder:
        self._history_capacity = capacity
        return self

    def deck_batch_size(self, size: int) -> EngineBuilder:
        self._deck_batch_size = size
        return self

    def deck_refill_threshold(self, threshold: int) -> EngineBuilder:
        self._deck_refill_threshold = threshold
        return self

    def session_id(self, session_id: str) -> EngineBuilder:
        self._session_id = session_id
        return self

    # --- Build ---

    def build(self) -> SwipeEngine:
        """Build the engine.

        Raises ValueError if no discovery source was provided.
        """
        if self._source is None:
            raise ValueError("A DiscoverySource is required: call with_source() first.")

        gate = self._entitlement_gate or StaticEntitlementGate(entitled=False)
        sink = self._feedback_sink or NullFeedbackSink()
        pusher = self._event_pusher or NullEventPusher()

        engine = SwipeEngine(
            source=self._source,
            entitlement_gate=gate,
            feedback_sink=sink,
            event_pusher=pusher,
            thresholds=self._thresholds,
            history_capacity=self._history_capacity,
            deck_batch_size=self._deck_batch_size,
            deck_refill_threshold=self._deck_refill_threshold,
            reconciliation_hook=self._reconciliation_hook,
            session_id=self._session_id,
        )

        logger.info(
            "EngineBuilder: built engine %s (pusher=%s, gate=%s, history=%d)",
            engine.session_id,
            type(pusher).__name__,
            type(gate).__name__,
            self._history_capacity,
        )
        return engine
