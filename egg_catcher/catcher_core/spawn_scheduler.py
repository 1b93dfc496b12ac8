"""
Spawn Scheduler
===============

Decides when a new egg appears and how fast it falls.

Every spawn tightens the interval by a constant factor down to a floor, so
the spawn rate grows toward a fixed maximum. Fall speed has a score-driven
floor that saturates at `speed_cap` plus uniform jitter.
"""

from __future__ import annotations

import math
import random
from typing import Optional

from egg_catcher.catcher_core.config_loader import GameConfig, get_config
from egg_catcher.catcher_core.entities import FallingObject


class SpawnScheduler:
    """
    Interval-based egg spawner with an exponential difficulty ramp.

    Owns its own seeded RNG so a session is reproducible from its seed.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize scheduler.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._spawn = config.spawn
        self._falling = config.falling
        self._rng = random.Random(seed)

        self.spawn_timer: float = 0.0
        self.spawn_interval: float = self._spawn.initial_interval
        self._spawned: int = 0

    @property
    def spawned(self) -> int:
        """Number of eggs created since the last reset."""
        return self._spawned

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Restore the default timer and interval.

        Args:
            seed: New random seed. Keeps the current RNG stream if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self.spawn_timer = 0.0
        self.spawn_interval = self._spawn.initial_interval
        self._spawned = 0

    def speed_floor(self, score: int) -> float:
        """Minimum fall speed for an egg spawned at this score."""
        bonus = self._falling.speed_score_factor * math.sqrt(score + 1)
        return self._falling.base_speed + min(self._falling.speed_cap, bonus)

    def advance(self, dt: float, score: int) -> Optional[FallingObject]:
        """
        Accumulate dt and spawn an egg once the interval has elapsed.

        Args:
            dt: Frame delta.
            score: Current score, which drives fall speed.

        Returns:
            The new egg, or None if nothing spawned this frame.
        """
        self.spawn_timer += dt
        if self.spawn_timer < self.spawn_interval:
            return None

        self.spawn_timer = 0.0
        egg = self.create_object(score)
        self.spawn_interval = max(
            self._spawn.interval_floor,
            self.spawn_interval * self._spawn.interval_decay
        )
        return egg

    def create_object(self, score: int) -> FallingObject:
        """Create an egg with randomized position, size, speed and sway."""
        board = self._config.board
        falling = self._falling
        rng = self._rng

        x = board.spawn_margin + rng.random() * (board.width - board.spawn_margin * 2)
        radius = falling.radius_min + rng.random() * (falling.radius_max - falling.radius_min)
        fall_speed = self.speed_floor(score) + rng.random() * falling.speed_jitter
        sway_amplitude = (rng.random() * 2 - 1) * falling.sway_max
        sway_phase = rng.random() * math.pi * 2

        self._spawned += 1
        return FallingObject(
            x=x,
            y=-radius * falling.spawn_height_factor,
            radius=radius,
            fall_speed=fall_speed,
            sway_amplitude=sway_amplitude,
            sway_phase=sway_phase,
            sway_rate=falling.sway_rate,
            fall_rate=falling.fall_rate,
        )
