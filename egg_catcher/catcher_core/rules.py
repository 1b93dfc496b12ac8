"""
Game Rules
==========

Handles catch/miss resolution and termination conditions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from egg_catcher.catcher_core.config_loader import GameConfig, get_config
from egg_catcher.catcher_core.entities import Catcher, FallingObject


class Outcome(Enum):
    """Fate of an egg after one frame."""
    FALLING = "falling"
    CAUGHT = "caught"
    MISSED = "missed"


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, reason)


class CatchRules:
    """
    Edge-crossing catch test plus the out-of-bounds miss test.

    The catch test runs once per egg, on the first frame its bottom edge
    reaches the catcher's top edge. An egg that crosses outside the catcher
    keeps falling and becomes a miss once its top edge leaves the board.
    This is not continuous collision; it relies on dt being clamped.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize catch rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._board_height = config.board.height

    @property
    def board_height(self) -> float:
        return self._board_height

    def resolve(self, egg: FallingObject, catcher: Catcher) -> Outcome:
        """
        Decide the egg's fate for this frame and set its terminal flag.

        Args:
            egg: An egg that has already been updated this frame.
            catcher: The player's catcher.

        Returns:
            Outcome for this frame.
        """
        if not egg.crossed_catch_line and egg.bottom >= catcher.y:
            egg.crossed_catch_line = True
            if catcher.spans(egg.x):
                egg.caught = True
                return Outcome.CAUGHT

        if egg.top > self._board_height:
            egg.missed = True
            return Outcome.MISSED

        return Outcome.FALLING


class TerminationRules:
    """
    Handles game termination conditions.

    - Out of lives: the last life was lost to a miss
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()
        self._config = config

    def check_termination(self, lives: int) -> TerminationResult:
        """
        Check all termination conditions.

        Args:
            lives: Remaining lives.

        Returns:
            TerminationResult indicating game state.
        """
        if lives <= 0:
            return TerminationResult.game_over("out_of_lives")
        return TerminationResult.none()


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize game rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self.catch = CatchRules(config)
        self.termination = TerminationRules(config)
