"""Frame clock turning driver timestamps into a clamped simulation dt."""

from __future__ import annotations

from typing import Optional


class SimulationClock:
    """
    Converts successive monotonic timestamps into frame deltas.

    dt is clamped to [0, max_dt] so a long stall (backgrounded window,
    debugger pause) cannot move eggs past the catch line in one frame.
    """

    def __init__(self, max_dt: float = 40.0) -> None:
        if max_dt <= 0:
            raise ValueError("max_dt must be positive")
        self._max_dt = max_dt
        self._previous: Optional[float] = None

    @property
    def max_dt(self) -> float:
        return self._max_dt

    @property
    def previous(self) -> Optional[float]:
        return self._previous

    def reset(self, now: float) -> None:
        self._previous = now

    def tick(self, now: float) -> float:
        """Record `now` and return the clamped time since the previous tick."""
        if self._previous is None:
            self._previous = now
            return 0.0
        dt = max(0.0, min(self._max_dt, now - self._previous))
        self._previous = now
        return dt
