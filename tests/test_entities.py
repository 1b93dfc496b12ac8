"""
Tests for the catcher and falling egg models.
"""

import math
import random

import pytest

from egg_catcher.catcher_core.config_loader import load_config
from egg_catcher.catcher_core.entities import Catcher, FallingObject


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def catcher(config):
    return Catcher.from_config(config)


class TestCatcher:
    """Test catcher movement and clamping."""

    def test_starts_centered(self, catcher, config):
        """Catcher should start in the middle of the board."""
        assert catcher.x == (config.board.width - catcher.width) / 2
        assert catcher.y == config.catcher_y

    def test_move_to_centers_on_target(self, catcher):
        """move_to should center the catcher on the target."""
        catcher.move_to(200.0)
        assert catcher.center_x == pytest.approx(200.0)

    def test_move_to_clamps(self, catcher, config):
        """Targets beyond the walls should clamp to the margins."""
        catcher.move_to(-1000.0)
        assert catcher.x == config.board.margin

        catcher.move_to(10000.0)
        assert catcher.x == config.board.width - catcher.width - config.board.margin

    def test_move_to_idempotent(self, catcher):
        """Moving to the same target twice gives the same position."""
        catcher.move_to(123.0)
        first = catcher.x
        catcher.move_to(123.0)
        assert catcher.x == first

    def test_step_moves_by_speed(self, catcher):
        """A step should move exactly one speed increment."""
        start = catcher.x
        catcher.step(1)
        assert catcher.x == start + catcher.speed
        catcher.step(-1)
        assert catcher.x == start
        catcher.step(0)
        assert catcher.x == start

    def test_step_clamps_at_walls(self, catcher):
        """Repeated steps should stop at the margins."""
        for _ in range(200):
            catcher.step(-1)
        assert catcher.x == catcher.min_x

        for _ in range(200):
            catcher.step(1)
        assert catcher.x == catcher.max_x

    def test_position_always_in_bounds(self, catcher):
        """Any mix of moves keeps x inside the clamp range."""
        rng = random.Random(3)
        for _ in range(500):
            if rng.random() < 0.5:
                catcher.move_to(rng.uniform(-500, 1500))
            else:
                catcher.step(rng.choice([-1, 0, 1]))
            assert catcher.min_x <= catcher.x <= catcher.max_x

    def test_spans_is_strict(self, catcher):
        """Edges of the catcher do not count as inside."""
        assert not catcher.spans(catcher.x)
        assert not catcher.spans(catcher.right)
        assert catcher.spans(catcher.x + 0.001)
        assert catcher.spans(catcher.center_x)


class TestFallingObject:
    """Test egg motion."""

    def test_fall_distance(self):
        """y advances by fall_speed * dt * fall_rate."""
        egg = FallingObject(x=100.0, y=0.0, radius=12.0, fall_speed=2.0)
        egg.update(16.0)

        assert egg.y == pytest.approx(2.0 * 16.0 * 0.02)
        assert egg.x == 100.0

    def test_sway_drift(self):
        """x drifts by sin(phase) * amplitude after the phase advances."""
        egg = FallingObject(
            x=100.0, y=0.0, radius=12.0, fall_speed=2.0,
            sway_amplitude=0.5, sway_phase=0.0
        )
        egg.update(16.0)

        assert egg.sway_phase == pytest.approx(16.0 * 0.004)
        assert egg.x == pytest.approx(100.0 + math.sin(0.064) * 0.5)

    def test_edges(self):
        """top and bottom are one radius from the center."""
        egg = FallingObject(x=0.0, y=50.0, radius=10.0, fall_speed=1.0)
        assert egg.top == 40.0
        assert egg.bottom == 60.0

    def test_starts_live(self):
        """A new egg has no terminal flag set."""
        egg = FallingObject(x=0.0, y=0.0, radius=12.0, fall_speed=1.0)
        assert not egg.caught
        assert not egg.missed
        assert not egg.crossed_catch_line
