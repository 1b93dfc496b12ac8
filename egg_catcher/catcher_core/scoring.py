"""
Scoring System
==============

Tracks score and lives. Catches award a fixed reward, misses cost a life.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from egg_catcher.catcher_core.config_loader import GameConfig, get_config


@dataclass
class ScoreEvent:
    """Record of a catch or a miss."""
    points: int
    lives_lost: int
    score_after: int
    lives_after: int

    @property
    def is_catch(self) -> bool:
        return self.lives_lost == 0

    def __repr__(self) -> str:
        if self.is_catch:
            return f"ScoreEvent(catch=+{self.points}, score={self.score_after})"
        return f"ScoreEvent(miss=-{self.lives_lost}, lives={self.lives_after})"


class ScoreTracker:
    """
    Score, lives and catch/miss counters for one playthrough.

    Score never decreases; lives never go below zero.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._reward = config.scoring.catch_reward
        self._starting_lives = config.scoring.starting_lives
        self._score: int = 0
        self._lives: int = self._starting_lives
        self._catches: int = 0
        self._misses: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def lives(self) -> int:
        """Remaining lives."""
        return self._lives

    @property
    def catches(self) -> int:
        return self._catches

    @property
    def misses(self) -> int:
        return self._misses

    @property
    def out_of_lives(self) -> bool:
        return self._lives <= 0

    def apply_catch(self) -> ScoreEvent:
        """Award the catch reward."""
        self._score += self._reward
        self._catches += 1
        return ScoreEvent(
            points=self._reward,
            lives_lost=0,
            score_after=self._score,
            lives_after=self._lives
        )

    def apply_miss(self) -> ScoreEvent:
        """Take one life."""
        self._lives = max(0, self._lives - 1)
        self._misses += 1
        return ScoreEvent(
            points=0,
            lives_lost=1,
            score_after=self._score,
            lives_after=self._lives
        )

    def reset(self) -> None:
        """Reset score and lives to their starting values."""
        self._score = 0
        self._lives = self._starting_lives
        self._catches = 0
        self._misses = 0
