"""
FeedbackSink implementations for haptic cues.

The device-specific sink lives in the presentation layer; these cover
headless runs and debugging.
"""

from __future__ import annotations

import logging

from pulsedeck.core.models import HapticKind

logger = logging.getLogger(__name__)


class NullFeedbackSink:
    """Discards all feedback."""

    def notify_haptic(self, kind: HapticKind) -> None:
        pass


class LoggingFeedbackSink:
    """Logs each haptic cue at DEBUG level."""

    def notify_haptic(self, kind: HapticKind) -> None:
        logger.debug("Haptic: %s", kind.value)


class RecordingFeedbackSink:
    """Keeps every cue in order. Handy for replaying a session."""

    def __init__(self) -> None:
        self.kinds: list[HapticKind] = []

    def notify_haptic(self, kind: HapticKind) -> None:
        self.kinds.append(kind)

    def reset(self) -> None:
        self.kinds.clear()
