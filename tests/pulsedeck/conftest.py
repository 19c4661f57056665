"""
Shared test fixtures for pulsedeck tests.

Provides mock collaborators (discovery source, entitlement gate,
feedback sink, event pusher, reconciliation hook) and factories for
engines wired to them.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import pytest

from pulsedeck.core.engine import SwipeEngine
from pulsedeck.core.events import EventType, SwipeEvent
from pulsedeck.core.models import HapticKind, SwipeDecision, SwipeResult, SyncFailure


SAMPLE_CANDIDATES = [f"user_{i}" for i in range(1, 31)]


# ============ Mock Discovery Source ============

class MockDiscoverySource:
    """Serves candidates in order and records every call."""

    def __init__(
        self,
        candidates: list[str] | None = None,
        admirers: set[str] | None = None,
    ):
        self._pending = list(candidates if candidates is not None else SAMPLE_CANDIDATES)
        self.admirers = set(admirers or ())
        self.load_calls: list[int] = []
        self.record_calls: list[tuple[str, SwipeDecision]] = []
        self.undo_calls: list[str] = []
        self.fail_load = False
        self.fail_record = False
        self.fail_undo = False

    async def load_next(self, n: int) -> list[str]:
        self.load_calls.append(n)
        if self.fail_load:
            raise RuntimeError("discovery backend unavailable")
        batch = self._pending[:n]
        del self._pending[:n]
        return batch

    async def record_decision(
        self, subject_id: str, decision: SwipeDecision,
    ) -> Optional[SwipeResult]:
        self.record_calls.append((subject_id, decision))
        if self.fail_record:
            raise RuntimeError("503 Service Unavailable")
        is_match = subject_id in self.admirers
        return SwipeResult(
            subject_id=subject_id,
            decision=decision,
            is_match=is_match,
            conversation_id=f"conv_{subject_id}" if is_match else None,
        )

    async def undo_last_decision(self, subject_id: str) -> None:
        self.undo_calls.append(subject_id)
        if self.fail_undo:
            raise RuntimeError("503 Service Unavailable")


# ============ Mock Entitlement Gate ============

class MockEntitlementGate:
    """Fixed answer; counts queries so tests can check it is never cached."""

    def __init__(self, entitled: bool = True):
        self.entitled = entitled
        self.calls = 0

    async def query_rewind_entitlement(self) -> bool:
        self.calls += 1
        return self.entitled


# ============ Mock Feedback Sink ============

class MockFeedbackSink:
    def __init__(self):
        self.kinds: list[HapticKind] = []

    def notify_haptic(self, kind: HapticKind) -> None:
        self.kinds.append(kind)


# ============ Mock Event Pusher ============

class MockEventPusher:
    """Collects pushed events for test assertions."""

    def __init__(self):
        self.events: list[SwipeEvent] = []

    async def push(self, event: SwipeEvent) -> None:
        self.events.append(event)

    async def push_many(self, events: list[SwipeEvent]) -> None:
        self.events.extend(events)

    def get_events_by_type(self, event_type: EventType) -> list[SwipeEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def reset(self) -> None:
        self.events.clear()


# ============ Mock Reconciliation Hook ============

class MockReconciliationHook:
    def __init__(self, raise_error: bool = False):
        self.failures: list[SyncFailure] = []
        self._raise_error = raise_error

    async def on_sync_failure(self, failure: SyncFailure) -> None:
        self.failures.append(failure)
        if self._raise_error:
            raise RuntimeError("hook blew up")


# ============ Fixtures ============

@pytest.fixture
def source() -> MockDiscoverySource:
    return MockDiscoverySource()


@pytest.fixture
def gate() -> MockEntitlementGate:
    return MockEntitlementGate(entitled=True)


@pytest.fixture
def sink() -> MockFeedbackSink:
    return MockFeedbackSink()


@pytest.fixture
def pusher() -> MockEventPusher:
    return MockEventPusher()


@pytest.fixture
def hook() -> MockReconciliationHook:
    return MockReconciliationHook()


@pytest.fixture
def engine(
    source: MockDiscoverySource,
    gate: MockEntitlementGate,
    sink: MockFeedbackSink,
    pusher: MockEventPusher,
    hook: MockReconciliationHook,
) -> SwipeEngine:
    return SwipeEngine(
        source=source,
        entitlement_gate=gate,
        feedback_sink=sink,
        event_pusher=pusher,
        reconciliation_hook=hook,
        session_id="swp_test",
    )


@pytest.fixture
def make_engine() -> Callable[..., SwipeEngine]:
    """Factory for independent engines, each with fresh mocks unless given."""

    def _make(**overrides: Any) -> SwipeEngine:
        kwargs: dict[str, Any] = {
            "source": MockDiscoverySource(),
            "entitlement_gate": MockEntitlementGate(entitled=True),
            "feedback_sink": MockFeedbackSink(),
            "event_pusher": MockEventPusher(),
        }
        kwargs.update(overrides)
        return SwipeEngine(**kwargs)

    return _make


@pytest.fixture
def drag() -> Callable[..., None]:
    """Start a gesture and feed it the given deltas (no release)."""

    def _drag(engine: SwipeEngine, *deltas: tuple[float, float]) -> None:
        engine.on_drag_start()
        for ddx, ddy in deltas:
            engine.on_drag_update(ddx, ddy)

    return _drag


@pytest.fixture
def make_source() -> Callable[..., MockDiscoverySource]:
    """Factory for discovery sources with custom candidates / admirers."""
    return MockDiscoverySource


@pytest.fixture
def make_hook() -> Callable[..., MockReconciliationHook]:
    return MockReconciliationHook
