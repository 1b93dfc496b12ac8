"""
Tests for the frame clock.
"""

import pytest

from egg_catcher.catcher_core.clock import SimulationClock


class TestSimulationClock:
    """Test dt derivation and clamping."""

    def test_dt_is_time_since_previous(self):
        """dt should be the gap between consecutive timestamps."""
        clock = SimulationClock(max_dt=40)
        clock.reset(1000.0)

        assert clock.tick(1016.0) == pytest.approx(16.0)
        assert clock.tick(1030.0) == pytest.approx(14.0)

    def test_large_gap_is_clamped(self):
        """A long stall should never produce dt above max_dt."""
        clock = SimulationClock(max_dt=40)
        clock.reset(0.0)

        assert clock.tick(5000.0) == 40.0
        # The stall is consumed, next frame is normal again
        assert clock.tick(5016.0) == pytest.approx(16.0)

    def test_never_exceeds_max_dt(self):
        """No sequence of timestamps yields dt > max_dt."""
        clock = SimulationClock(max_dt=40)
        clock.reset(0.0)

        now = 0.0
        for gap in [1, 39, 40, 41, 100, 1e6, 0.5, 3000]:
            now += gap
            assert clock.tick(now) <= 40

    def test_backwards_timestamp_gives_zero(self):
        """Non-monotonic input should not produce a negative dt."""
        clock = SimulationClock(max_dt=40)
        clock.reset(100.0)

        assert clock.tick(90.0) == 0.0

    def test_first_tick_without_reset(self):
        """The very first tick has nothing to measure against."""
        clock = SimulationClock()

        assert clock.tick(123.0) == 0.0
        assert clock.previous == 123.0

    def test_reset_moves_reference(self):
        """Reset should make the next dt small."""
        clock = SimulationClock(max_dt=40)
        clock.reset(0.0)
        clock.reset(10000.0)

        assert clock.tick(10008.0) == pytest.approx(8.0)

    def test_invalid_max_dt(self):
        """max_dt must be positive."""
        with pytest.raises(ValueError):
            SimulationClock(max_dt=0)
