"""
Gesture classifier: maps a drag trajectory to a swipe direction.

Pure functions over offsets and velocity. The same accumulated offset
and release velocity always produce the same result, independent of
frame rate or how the offset was accumulated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigError
from .models import SwipeDirection

# Default thresholds (screen fractions, velocity in px/s)
DEFAULT_NOTIFY_EPSILON = 0.01
DEFAULT_PROVISIONAL_ACTIVATION = 0.08
DEFAULT_PROVISIONAL_THRESHOLD = 0.15
DEFAULT_COMMIT_DISTANCE = 0.35
DEFAULT_COMMIT_UP_DISTANCE = 0.25
DEFAULT_COMMIT_VELOCITY = 500.0


@dataclass(frozen=True)
class SwipeThresholds:
    """
    Classification thresholds. All comparisons are strict (``>``).

    - notify_epsilon: minimum per-axis change before subscribers hear
      about a drag update. Never affects classification.
    - provisional_activation: dead zone; inside it the provisional
      direction is left as it was.
    - provisional_threshold: distance at which a direction is proposed.
    - commit_distance: horizontal distance that commits on release.
    - commit_up_distance: upward distance that commits on release.
    - commit_velocity: horizontal release speed that commits regardless
      of distance.
    """
    notify_epsilon: float = DEFAULT_NOTIFY_EPSILON
    provisional_activation: float = DEFAULT_PROVISIONAL_ACTIVATION
    provisional_threshold: float = DEFAULT_PROVISIONAL_THRESHOLD
    commit_distance: float = DEFAULT_COMMIT_DISTANCE
    commit_up_distance: float = DEFAULT_COMMIT_UP_DISTANCE
    commit_velocity: float = DEFAULT_COMMIT_VELOCITY

    def validate(self) -> SwipeThresholds:
        """Raise ConfigError if the thresholds cannot classify sensibly."""
        for name in (
            "notify_epsilon",
            "provisional_activation",
            "provisional_threshold",
            "commit_distance",
            "commit_up_distance",
            "commit_velocity",
        ):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be non-negative")
        if self.provisional_activation > self.provisional_threshold:
            raise ConfigError(
                "provisional_activation must not exceed provisional_threshold"
            )
        if self.provisional_threshold > min(self.commit_distance, self.commit_up_distance):
            raise ConfigError(
                "provisional_threshold must not exceed the commit distances"
            )
        return self


DEFAULT_THRESHOLDS = SwipeThresholds()


def provisional_direction(
    dx: float,
    dy: float,
    previous: Optional[SwipeDirection] = None,
    thresholds: SwipeThresholds = DEFAULT_THRESHOLDS,
) -> Optional[SwipeDirection]:
    """
    Derive the advisory direction for the current offset.

    Checked in the order UP, RIGHT, LEFT, so an upward drag wins when
    both axes are past the threshold. Inside the activation dead zone
    ``previous`` is returned unchanged.
    """
    activation = thresholds.provisional_activation
    if abs(dx) <= activation and abs(dy) <= activation:
        return previous

    limit = thresholds.provisional_threshold
    if dy < -limit:
        return SwipeDirection.UP
    if dx > limit:
        return SwipeDirection.RIGHT
    if dx < -limit:
        return SwipeDirection.LEFT
    return None


def should_commit(
    dx: float,
    dy: float,
    vx: float = 0.0,
    thresholds: SwipeThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Whether a release at this offset and horizontal velocity commits."""
    return (
        abs(dx) > thresholds.commit_distance
        or dy < -thresholds.commit_up_distance
        or abs(vx) > thresholds.commit_velocity
    )


def classify_release(
    dx: float,
    dy: float,
    vx: float = 0.0,
    provisional: Optional[SwipeDirection] = None,
    thresholds: SwipeThresholds = DEFAULT_THRESHOLDS,
) -> Optional[SwipeDirection]:
    """
    Final direction for a release, or None for a snap-back.

    ``provisional`` is whatever the drag updates settled on. When it is
    unset, only a fling faster than commit_velocity commits, toward the
    side it was thrown.
    """
    if not should_commit(dx, dy, vx, thresholds):
        return None
    if provisional is not None:
        return provisional
    if abs(vx) > thresholds.commit_velocity:
        return SwipeDirection.RIGHT if vx > 0 else SwipeDirection.LEFT
    return None


def exceeds_epsilon(
    offset: tuple[float, float],
    last_notified: tuple[float, float],
    thresholds: SwipeThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Debounce check: has either axis moved more than notify_epsilon?"""
    eps = thresholds.notify_epsilon
    return (
        abs(offset[0] - last_notified[0]) > eps
        or abs(offset[1] - last_notified[1]) > eps
    )
