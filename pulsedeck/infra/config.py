"""
Configuration management using pydantic-settings.

All pulsedeck settings are loaded from environment variables with the
PULSEDECK_ prefix.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings

from pulsedeck.core.classifier import SwipeThresholds


class PulseDeckConfig(BaseSettings):
    """
    Swipe engine configuration.

    Environment variables are prefixed with PULSEDECK_, e.g.:
    - PULSEDECK_COMMIT_DISTANCE=0.4
    - PULSEDECK_HISTORY_CAPACITY=20
    """

    model_config = {"env_prefix": "PULSEDECK_"}

    # Classifier (screen fractions)
    notify_epsilon: float = 0.01
    provisional_activation: float = 0.08
    provisional_threshold: float = 0.15
    commit_distance: float = 0.35
    commit_up_distance: float = 0.25

    # Fling speed that commits regardless of distance (px/s)
    commit_velocity: float = 500.0

    # Rewind
    history_capacity: int = 10

    # Candidate deck
    deck_batch_size: int = 10
    deck_refill_threshold: int = 3

    def to_thresholds(self) -> SwipeThresholds:
        """Build validated classifier thresholds. Raises ConfigError."""
        return SwipeThresholds(
            notify_epsilon=self.notify_epsilon,
            provisional_activation=self.provisional_activation,
            provisional_threshold=self.provisional_threshold,
            commit_distance=self.commit_distance,
            commit_up_distance=self.commit_up_distance,
            commit_velocity=self.commit_velocity,
        ).validate()
