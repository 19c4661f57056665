"""
Unified exception hierarchy for pulsedeck.

All exceptions inherit from PulseDeckError. Rewind refusals are not
exceptions; they come back as RewindOutcome values.
"""


class PulseDeckError(Exception):
    """Base exception for all pulsedeck errors."""
    pass


class EngineError(PulseDeckError):
    """Swipe engine misuse (invalid state transition, gesture overlap, etc.)."""
    pass


class CollaboratorError(PulseDeckError):
    """The discovery source rejected a decision or an undo.

    Carries the operation name and subject so a reconciliation hook can
    decide what to do without parsing the message.
    """

    def __init__(self, operation: str, subject_id: str, cause: BaseException | None = None):
        self.operation = operation
        self.subject_id = subject_id
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{operation} failed for {subject_id}{detail}")


class ConfigError(PulseDeckError):
    """Configuration error (non-positive capacity, inverted thresholds, etc.)."""
    pass
