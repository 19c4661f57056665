"""
Swipe interaction engine: the state machine that turns drag gestures
and button presses into decisions, and rewinds them.

The engine commits its own state (history, drag reset, deck) first and
only then awaits collaborators. A collaborator failure is reported, never
rolled back: local-first, best-effort remote.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .classifier import (
    DEFAULT_THRESHOLDS,
    SwipeThresholds,
    classify_release,
    exceeds_epsilon,
    provisional_direction,
)
from .deck import DEFAULT_BATCH_SIZE, DEFAULT_REFILL_THRESHOLD, CandidateDeck
from .errors import CollaboratorError, EngineError
from .events import (
    SwipeEvent,
    deck_exhausted,
    deck_refilled,
    decision_committed,
    gesture_snapped_back,
    match_found,
    rewind_completed,
    rewind_denied,
    sync_failed,
)
from .history import DEFAULT_HISTORY_CAPACITY, RewindHistory
from .models import (
    DragSnapshot,
    DragState,
    EngineState,
    HapticKind,
    RewindEntry,
    RewindOutcome,
    SwipeDecision,
    SwipeDirection,
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

logger = logging.getLogger(__name__)

# ============ State Machine ============

# Valid state transitions. Key = current state, value = set of allowed next states.
VALID_TRANSITIONS: dict[EngineState, set[EngineState]] = {
    EngineState.IDLE: {EngineState.DRAGGING, EngineState.COMMITTING},
    EngineState.DRAGGING: {EngineState.COMMITTING, EngineState.SNAPPING_BACK},
    EngineState.COMMITTING: {EngineState.IDLE},
    EngineState.SNAPPING_BACK: {EngineState.IDLE},
}

# Where a commit came from
SOURCE_GESTURE = "gesture"
SOURCE_BUTTON = "button"

# Collaborator operations, as reported in SyncFailure / sync.failed
OP_RECORD_DECISION = "record_decision"
OP_UNDO_LAST_DECISION = "undo_last_decision"

# Snap-back reasons
SNAP_NO_DIRECTION = "no_direction"
SNAP_BELOW_THRESHOLD = "below_threshold"
SNAP_DECK_EMPTY = "deck_empty"


class SwipeEngine:
    """
    One discovery session's interaction core.

    IDLE -> DRAGGING -> COMMITTING -> IDLE
                     -> SNAPPING_BACK -> IDLE
    IDLE -> COMMITTING -> IDLE (button press)

    Calls are expected to arrive serially from one event loop. Calls
    that do not fit the current state raise EngineError.
    """

    def __init__(
        self,
        source: DiscoverySource,
        entitlement_gate: EntitlementGate,
        feedback_sink: FeedbackSink,
        event_pusher: EventPusher,
        thresholds: SwipeThresholds = DEFAULT_THRESHOLDS,
        history_capacity: int = DEFAULT_HISTORY_CAPACITY,
        deck: Optional[CandidateDeck] = None,
        deck_batch_size: int = DEFAULT_BATCH_SIZE,
        deck_refill_threshold: int = DEFAULT_REFILL_THRESHOLD,
        reconciliation_hook: Optional[ReconciliationHook] = None,
        session_id: Optional[str] = None,
    ):
        self._source = source
        self._entitlement_gate = entitlement_gate
        self._feedback_sink = feedback_sink
        self._event_pusher = event_pusher
        self._thresholds = thresholds.validate()
        self._history = RewindHistory(history_capacity)
        if deck is None:
            deck = CandidateDeck(
                source,
                batch_size=deck_batch_size,
                refill_threshold=deck_refill_threshold,
            )
        self._deck = deck
        self._reconciliation_hook = reconciliation_hook
        self._session_id = session_id or generate_id("swp")

        self._state = EngineState.IDLE
        self._drag = DragState()
        self._last_notified: tuple[float, float] = (0.0, 0.0)
        self._listeners: list[SnapshotListener] = []

    # ============ Read-only Views ============

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def drag_state(self) -> DragSnapshot:
        return self._drag.snapshot(self._state)

    @property
    def provisional_direction(self) -> Optional[SwipeDirection]:
        return self._drag.provisional

    @property
    def thresholds(self) -> SwipeThresholds:
        return self._thresholds

    @property
    def history(self) -> list[RewindEntry]:
        """Committed decisions, oldest first."""
        return self._history.entries()

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def deck(self) -> CandidateDeck:
        return self._deck

    @property
    def current_subject(self) -> Optional[str]:
        return self._deck.current

    # ============ Subscriptions ============

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a snapshot listener. Returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        snapshot = self.drag_state
        self._last_notified = (snapshot.dx, snapshot.dy)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.error(
                    "Session %s: snapshot listener %r failed",
                    self._session_id, listener, exc_info=True,
                )

    # ============ State Transition ============

    def _transition(self, new_state: EngineState) -> None:
        """
        Move to a new state.

        Raises EngineError if the transition is not valid.
        """
        current = self._state
        allowed = VALID_TRANSITIONS.get(current, set())
        if new_state not in allowed:
            raise EngineError(
                f"Invalid state transition: {current.value} -> {new_state.value}"
            )
        logger.debug(
            "Session %s: %s -> %s", self._session_id, current.value, new_state.value,
        )
        self._state = new_state

    def _require(self, expected: EngineState, action: str) -> None:
        if self._state != expected:
            raise EngineError(
                f"Cannot {action} while {self._state.value} (expected {expected.value})"
            )

    # ============ Side-effect Helpers ============

    def _haptic(self, kind: HapticKind) -> None:
        try:
            self._feedback_sink.notify_haptic(kind)
        except Exception as exc:
            logger.warning("Haptic feedback %s failed: %s", kind.value, exc)

    async def _push(self, event: SwipeEvent) -> None:
        try:
            await self._event_pusher.push(event)
        except Exception as exc:
            logger.warning(
                "Session %s: failed to push %s: %s",
                self._session_id, event.event_type.value, exc,
            )

    # ============ Deck ============

    async def load_deck(self) -> int:
        """Fetch the first batch of candidates. Source errors propagate."""
        added = await self._deck.load()
        await self._report_deck(added)
        return added

    async def _refill_deck(self) -> None:
        if not self._deck.needs_refill:
            return
        try:
            added = await self._deck.load()
        except Exception as exc:
            logger.warning("Session %s: deck refill failed: %s", self._session_id, exc)
            return
        await self._report_deck(added)

    async def _report_deck(self, added: int) -> None:
        if added:
            await self._push(deck_refilled(self._session_id, added, len(self._deck)))
        if self._deck.exhausted:
            logger.info("Session %s: no more candidates", self._session_id)
            await self._push(deck_exhausted(self._session_id))

    # ============ Gesture Path ============

    def on_drag_start(self) -> None:
        """Begin a gesture. Only one gesture may be active at a time."""
        self._require(EngineState.IDLE, "start a drag")
        self._transition(EngineState.DRAGGING)
        self._drag.reset()
        self._drag.is_active = True
        self._haptic(HapticKind.LIGHT)
        self._notify()

    def on_drag_update(self, ddx: float, ddy: float) -> bool:
        """
        Accumulate a drag delta (screen fractions).

        Returns True when subscribers were notified: the offset moved more
        than notify_epsilon on some axis since the last notification, or
        the provisional direction changed.
        """
        self._require(EngineState.DRAGGING, "update a drag")
        drag = self._drag
        drag.dx += ddx
        drag.dy += ddy

        previous = drag.provisional
        drag.provisional = provisional_direction(
            drag.dx, drag.dy, previous, self._thresholds,
        )
        changed = drag.provisional != previous
        if changed:
            logger.debug(
                "Session %s: provisional %s -> %s",
                self._session_id,
                previous.value if previous else None,
                drag.provisional.value if drag.provisional else None,
            )

        if changed or exceeds_epsilon(drag.offset, self._last_notified, self._thresholds):
            self._notify()
            return True
        return False

    async def on_drag_end(self, vx: float = 0.0, vy: float = 0.0) -> Optional[SwipeDecision]:
        """
        Release the gesture with velocity (px/s).

        Commits the provisional direction when the commit condition holds,
        otherwise snaps back. Returns the committed decision or None.
        """
        self._require(EngineState.DRAGGING, "end a drag")
        drag = self._drag
        direction = classify_release(
            drag.dx, drag.dy, vx, drag.provisional, self._thresholds,
        )
        if direction is None:
            if drag.provisional is None:
                reason = SNAP_NO_DIRECTION
            else:
                reason = SNAP_BELOW_THRESHOLD
            logger.debug(
                "Session %s: release at (%.3f, %.3f) v=(%.0f, %.0f) -> snap back (%s)",
                self._session_id, drag.dx, drag.dy, vx, vy, reason,
            )
            await self._snap_back(vx, reason)
            return None

        entry = await self._commit(direction, SOURCE_GESTURE, vx=vx)
        return entry.decision if entry else None

    async def _snap_back(self, vx: float, reason: str) -> None:
        dx, dy = self._drag.offset
        self._transition(EngineState.SNAPPING_BACK)
        self._drag.reset()
        self._haptic(HapticKind.LIGHT)
        self._transition(EngineState.IDLE)
        self._notify()
        await self._push(gesture_snapped_back(self._session_id, dx, dy, vx, reason))

    # ============ Button Path ============

    async def dispatch(self, direction: SwipeDirection) -> Optional[SwipeDecision]:
        """
        Commit a decision from an action button.

        Runs the same commit path as a gesture that met the commit
        condition for ``direction``.
        """
        self._require(EngineState.IDLE, "dispatch a button press")
        entry = await self._commit(direction, SOURCE_BUTTON)
        return entry.decision if entry else None

    # ============ Commit ============

    async def _commit(
        self, direction: SwipeDirection, source: str, vx: float = 0.0,
    ) -> Optional[RewindEntry]:
        subject_id = self._deck.current
        if subject_id is None:
            logger.warning(
                "Session %s: %s %s with an empty deck, nothing to decide on",
                self._session_id, source, direction.value,
            )
            if self._state == EngineState.DRAGGING:
                await self._snap_back(vx, SNAP_DECK_EMPTY)
            return None

        # Local commit: synchronous, before any collaborator is awaited
        self._transition(EngineState.COMMITTING)
        self._deck.take()
        entry = RewindEntry(decision=direction.decision, subject_id=subject_id)
        self._history.push(entry)
        self._drag.reset()
        self._haptic(HapticKind.MEDIUM)
        self._transition(EngineState.IDLE)
        self._notify()

        logger.info(
            "Session %s: %s %s via %s (history=%d)",
            self._session_id,
            entry.decision.value,
            subject_id,
            source,
            len(self._history),
        )
        await self._push(decision_committed(
            self._session_id, subject_id, entry.decision.value, source, len(self._history),
        ))

        await self._sync_decision(entry)
        await self._refill_deck()
        return entry

    async def _sync_decision(self, entry: RewindEntry) -> None:
        try:
            result = await self._source.record_decision(entry.subject_id, entry.decision)
        except Exception as exc:
            await self._handle_sync_failure(OP_RECORD_DECISION, entry, exc)
            return

        if result is not None and result.is_match and entry.decision != SwipeDecision.PASS:
            logger.info("Session %s: match with %s", self._session_id, entry.subject_id)
            await self._push(match_found(
                self._session_id,
                entry.subject_id,
                entry.decision.value,
                result.conversation_id,
            ))

    # ============ Rewind ============

    async def undo(self) -> RewindOutcome:
        """
        Rewind the most recent decision.

        Empty history returns NOTHING_TO_UNDO without asking the gate.
        Missing entitlement returns DENIED_NOT_ENTITLED and changes nothing.

        The commit path returns to IDLE before record_decision completes,
        so an undo issued while that call is in flight may reach the
        source first. Callers that need remote ordering should await the
        commit before calling undo.
        """
        if self._state == EngineState.DRAGGING:
            raise EngineError("Cannot rewind while a drag is active")

        entry = self._history.peek()
        if entry is None:
            logger.info("Session %s: rewind requested with empty history", self._session_id)
            await self._push(rewind_denied(self._session_id, RewindOutcome.NOTHING_TO_UNDO.value))
            return RewindOutcome.NOTHING_TO_UNDO

        entitled = await self._entitlement_gate.query_rewind_entitlement()
        if not entitled:
            logger.info("Session %s: rewind denied, not entitled", self._session_id)
            await self._push(rewind_denied(
                self._session_id, RewindOutcome.DENIED_NOT_ENTITLED.value,
            ))
            return RewindOutcome.DENIED_NOT_ENTITLED

        self._history.pop()
        self._haptic(HapticKind.HEAVY)
        self._deck.put_back(entry.subject_id)
        logger.info(
            "Session %s: rewound %s %s (history=%d)",
            self._session_id, entry.decision.value, entry.subject_id, len(self._history),
        )
        await self._push(rewind_completed(
            self._session_id, entry.subject_id, entry.decision.value, len(self._history),
        ))

        try:
            await self._source.undo_last_decision(entry.subject_id)
        except Exception as exc:
            await self._handle_sync_failure(OP_UNDO_LAST_DECISION, entry, exc)
        return RewindOutcome.REWOUND

    # ============ Sync Failures ============

    async def _handle_sync_failure(
        self, operation: str, entry: RewindEntry, exc: Exception,
    ) -> None:
        if isinstance(exc, CollaboratorError):
            error = exc
        else:
            error = CollaboratorError(operation, entry.subject_id, exc)
        logger.warning(
            "Session %s: %s failed for %s, keeping local state: %s",
            self._session_id, operation, entry.subject_id, exc,
        )
        await self._push(sync_failed(
            self._session_id, operation, entry.subject_id, entry.decision.value, str(error),
        ))

        if self._reconciliation_hook is None:
            return
        try:
            await self._reconciliation_hook.on_sync_failure(
                SyncFailure(operation=operation, entry=entry, error=error)
            )
        except Exception:
            logger.error(
                "Session %s: reconciliation hook failed for %s",
                self._session_id, operation, exc_info=True,
            )

    # ============ Convenience ============

    def would_commit(self, vx: float = 0.0) -> bool:
        """Whether releasing now, at ``vx``, would commit."""
        drag = self._drag
        return classify_release(
            drag.dx, drag.dy, vx, drag.provisional, self._thresholds,
        ) is not None
