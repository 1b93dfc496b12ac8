"""
Tests for spawn scheduling and the difficulty ramp.
"""

import math

import pytest

from egg_catcher.catcher_core.config_loader import load_config
from egg_catcher.catcher_core.spawn_scheduler import SpawnScheduler


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def scheduler(config):
    return SpawnScheduler(config, seed=42)


def _snapshot(egg):
    return (egg.x, egg.y, egg.radius, egg.fall_speed, egg.sway_amplitude, egg.sway_phase)


class TestSpawnTiming:
    """Test when eggs appear."""

    def test_no_spawn_before_interval(self, scheduler):
        """Timer accumulates without spawning until the interval."""
        assert scheduler.advance(16.0, score=0) is None
        assert scheduler.spawn_timer == 16.0
        assert scheduler.spawned == 0

    def test_spawn_at_interval(self, scheduler, config):
        """Reaching the interval spawns one egg and resets the timer."""
        egg = scheduler.advance(config.spawn.initial_interval, score=0)

        assert egg is not None
        assert scheduler.spawn_timer == 0.0
        assert scheduler.spawned == 1

    def test_interval_tightens_after_spawn(self, scheduler):
        """Each spawn multiplies the interval by the decay factor."""
        scheduler.advance(900.0, score=0)
        assert scheduler.spawn_interval == pytest.approx(900.0 * 0.985)

    def test_interval_monotonic_and_floored(self, scheduler, config):
        """Interval never increases and never drops below the floor."""
        previous = scheduler.spawn_interval
        for _ in range(500):
            scheduler.advance(40.0, score=0)
            assert scheduler.spawn_interval <= previous
            assert scheduler.spawn_interval >= config.spawn.interval_floor
            previous = scheduler.spawn_interval

    def test_interval_reaches_floor(self, scheduler, config):
        """Enough spawns saturate the interval at the floor."""
        for _ in range(200):
            scheduler.advance(scheduler.spawn_interval, score=0)
        assert scheduler.spawn_interval == config.spawn.interval_floor

    def test_reset_restores_defaults(self, scheduler, config):
        """Reset should restore timer and interval."""
        for _ in range(5):
            scheduler.advance(1000.0, score=0)
        scheduler.advance(10.0, score=0)

        scheduler.reset()

        assert scheduler.spawn_timer == 0.0
        assert scheduler.spawn_interval == config.spawn.initial_interval
        assert scheduler.spawned == 0


class TestSpawnedEggs:
    """Test egg parameters."""

    def test_parameters_in_range(self, scheduler, config):
        """Random parameters stay within configured ranges."""
        board = config.board
        falling = config.falling
        for score in [0, 10, 100, 5000]:
            for _ in range(50):
                egg = scheduler.create_object(score)
                floor = scheduler.speed_floor(score)

                assert board.spawn_margin <= egg.x <= board.width - board.spawn_margin
                assert falling.radius_min <= egg.radius <= falling.radius_max
                assert egg.y == pytest.approx(-egg.radius * 1.5)
                assert floor <= egg.fall_speed <= floor + falling.speed_jitter
                assert -falling.sway_max <= egg.sway_amplitude <= falling.sway_max
                assert 0 <= egg.sway_phase <= 2 * math.pi

    def test_speed_floor_grows_with_score(self, scheduler):
        """Speed floor rises with score."""
        assert scheduler.speed_floor(0) == pytest.approx(1.8 + 0.15)
        assert scheduler.speed_floor(99) == pytest.approx(1.8 + 0.15 * 10)
        assert scheduler.speed_floor(10) < scheduler.speed_floor(100)

    def test_speed_floor_saturates(self, scheduler):
        """The score bonus is capped."""
        assert scheduler.speed_floor(1000) == pytest.approx(1.8 + 4.0)
        assert scheduler.speed_floor(10 ** 9) == pytest.approx(1.8 + 4.0)

    def test_deterministic_with_seed(self, config):
        """Same seed should produce the same eggs."""
        s1 = SpawnScheduler(config, seed=7)
        s2 = SpawnScheduler(config, seed=7)

        eggs1 = [_snapshot(s1.create_object(0)) for _ in range(20)]
        eggs2 = [_snapshot(s2.create_object(0)) for _ in range(20)]

        assert eggs1 == eggs2

    def test_different_seeds_differ(self, config):
        """Different seeds should produce different eggs."""
        s1 = SpawnScheduler(config, seed=7)
        s2 = SpawnScheduler(config, seed=8)

        assert _snapshot(s1.create_object(0)) != _snapshot(s2.create_object(0))

    def test_reset_with_seed_restores_sequence(self, config):
        """Reset with the same seed should replay the sequence."""
        scheduler = SpawnScheduler(config, seed=42)
        initial = [_snapshot(scheduler.create_object(0)) for _ in range(10)]

        scheduler.reset(seed=42)
        after_reset = [_snapshot(scheduler.create_object(0)) for _ in range(10)]

        assert initial == after_reset
