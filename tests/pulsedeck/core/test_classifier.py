"""Tests for the gesture classifier: provisional direction, commit rule, debounce."""

import pytest

from pulsedeck.core.classifier import (
    DEFAULT_THRESHOLDS,
    SwipeThresholds,
    classify_release,
    exceeds_epsilon,
    provisional_direction,
    should_commit,
)
from pulsedeck.core.errors import ConfigError
from pulsedeck.core.models import SwipeDirection


class TestProvisionalDirection:
    def test_dead_zone_keeps_previous(self):
        assert provisional_direction(0.05, 0.05, SwipeDirection.LEFT) == SwipeDirection.LEFT
        assert provisional_direction(0.08, -0.08, None) is None

    def test_right(self):
        assert provisional_direction(0.16, 0.0) == SwipeDirection.RIGHT

    def test_left(self):
        assert provisional_direction(-0.16, 0.0) == SwipeDirection.LEFT

    def test_up(self):
        assert provisional_direction(0.0, -0.16) == SwipeDirection.UP

    def test_up_dominates_horizontal(self):
        assert provisional_direction(0.5, -0.2) == SwipeDirection.UP
        assert provisional_direction(-0.5, -0.2) == SwipeDirection.UP

    def test_between_activation_and_threshold_clears(self):
        assert provisional_direction(0.1, 0.0, SwipeDirection.RIGHT) is None

    def test_downward_drag_has_no_direction(self):
        assert provisional_direction(0.0, 0.5) is None

    def test_threshold_is_exclusive(self):
        assert provisional_direction(0.15, 0.0) is None
        assert provisional_direction(0.0, -0.15) is None


class TestShouldCommit:
    def test_horizontal_boundary_is_exclusive(self):
        assert should_commit(0.35, 0.0) is False
        assert should_commit(0.3500001, 0.0) is True
        assert should_commit(-0.3500001, 0.0) is True

    def test_below_distance_without_velocity(self):
        assert should_commit(0.34, 0.0, 0.0) is False

    def test_upward_boundary(self):
        assert should_commit(0.0, -0.25) is False
        assert should_commit(0.0, -0.2500001) is True

    def test_downward_never_commits_on_distance(self):
        assert should_commit(0.0, 0.9) is False

    def test_velocity_override(self):
        assert should_commit(0.1, 0.0, 500.0) is False
        assert should_commit(0.1, 0.0, 501.0) is True
        assert should_commit(0.1, 0.0, -501.0) is True

    def test_tap_never_commits(self):
        assert should_commit(0.0, 0.0, 0.0) is False


class TestClassifyRelease:
    def test_commits_provisional(self):
        direction = classify_release(0.4, 0.0, 0.0, SwipeDirection.RIGHT)
        assert direction == SwipeDirection.RIGHT

    def test_snap_back_below_threshold(self):
        assert classify_release(0.34, 0.0, 0.0, SwipeDirection.RIGHT) is None

    def test_tap(self):
        assert classify_release(0.0, 0.0, 0.0, None) is None

    def test_fling_without_provisional_uses_velocity_sign(self):
        assert classify_release(0.1, 0.0, 501.0, None) == SwipeDirection.RIGHT
        assert classify_release(-0.1, 0.0, -501.0, None) == SwipeDirection.LEFT

    def test_fling_keeps_provisional_when_set(self):
        assert classify_release(0.0, -0.2, 900.0, SwipeDirection.UP) == SwipeDirection.UP

    def test_up_dominance(self):
        provisional = provisional_direction(0.2, -0.3)
        assert classify_release(0.2, -0.3, 0.0, provisional) == SwipeDirection.UP

    def test_deterministic_across_step_sizes(self):
        def run(steps):
            dx = dy = 0.0
            direction = None
            for ddx, ddy in steps:
                dx += ddx
                dy += ddy
                direction = provisional_direction(dx, dy, direction)
            return classify_release(dx, dy, 0.0, direction)

        coarse = run([(0.25, 0.0), (0.25, 0.0)])
        fine = run([(0.125, 0.0)] * 4)
        assert coarse == fine == SwipeDirection.RIGHT


class TestExceedsEpsilon:
    def test_exclusive(self):
        assert exceeds_epsilon((0.01, 0.0), (0.0, 0.0)) is False
        assert exceeds_epsilon((0.011, 0.0), (0.0, 0.0)) is True

    def test_either_axis(self):
        assert exceeds_epsilon((0.0, -0.02), (0.0, 0.0)) is True


class TestSwipeThresholds:
    def test_defaults_validate(self):
        assert DEFAULT_THRESHOLDS.validate() is DEFAULT_THRESHOLDS
        assert DEFAULT_THRESHOLDS.commit_distance == 0.35
        assert DEFAULT_THRESHOLDS.commit_velocity == 500.0

    def test_negative_rejected(self):
        with pytest.raises(ConfigError):
            SwipeThresholds(commit_velocity=-1.0).validate()

    def test_activation_above_threshold_rejected(self):
        with pytest.raises(ConfigError):
            SwipeThresholds(provisional_activation=0.2, provisional_threshold=0.15).validate()

    def test_threshold_above_commit_rejected(self):
        with pytest.raises(ConfigError):
            SwipeThresholds(provisional_threshold=0.3, commit_up_distance=0.25).validate()

    def test_custom_thresholds_applied(self):
        strict = SwipeThresholds(commit_distance=0.5)
        assert should_commit(0.4, 0.0, thresholds=strict) is False
