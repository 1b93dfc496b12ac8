"""
Game Session
============

Main game orchestrator combining the catcher, eggs, spawning, scoring and rules.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from egg_catcher.catcher_core.clock import SimulationClock
from egg_catcher.catcher_core.config_loader import GameConfig, get_config
from egg_catcher.catcher_core.drawing import Color, DrawingAdapter
from egg_catcher.catcher_core.entities import Catcher, FallingObject
from egg_catcher.catcher_core.rules import GameRules, Outcome
from egg_catcher.catcher_core.scoring import ScoreEvent, ScoreTracker
from egg_catcher.catcher_core.spawn_scheduler import SpawnScheduler

GROUND_BAND_COLOR: Color = (255, 255, 255, 15)
SCORE_TEXT_COLOR: Color = (0, 0, 0, 13)

DIRECTIONS = ("left", "right")


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


@dataclass
class FrameResult:
    """What happened during one processed frame."""
    dt: float
    spawned: bool = False
    caught: int = 0
    missed: int = 0
    delta_score: int = 0
    ended: bool = False
    events: List[ScoreEvent] = field(default_factory=list)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameSession:
    """
    One playable egg-catcher session.

    Orchestrates:
    - Frame clock (clamped dt)
    - Input latching (pointer target and held directions)
    - Spawn scheduling
    - Egg update, catch and miss resolution
    - Scoring and lives
    - Draw requests against a DrawingAdapter

    One frame = one call to frame(now) from the external driver.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        canvas: Optional[DrawingAdapter] = None,
        time_source: Optional[Callable[[], float]] = None
    ):
        """
        Initialize session in the idle state.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducible spawns.
            canvas: Drawing adapter. Frames are simulated without drawing if None.
            time_source: Millisecond clock used by start() when no timestamp
                is given. Defaults to time.monotonic() in milliseconds.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._canvas = canvas
        self._time_source = time_source or _monotonic_ms

        self._clock = SimulationClock(config.clock.max_dt)
        self._catcher = Catcher.from_config(config)
        self._spawner = SpawnScheduler(config, seed)
        self._scorer = ScoreTracker(config)
        self._rules = GameRules(config)

        self._objects: List[FallingObject] = []
        self._state = GameState.IDLE
        self._termination_reason: str = ""
        self._elapsed: float = 0.0
        self._frames: int = 0

        # Input cells, last write wins, read once per frame
        self._input_target_x: Optional[float] = None
        self._left_held: bool = False
        self._right_held: bool = False

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def canvas(self) -> Optional[DrawingAdapter]:
        return self._canvas

    @canvas.setter
    def canvas(self, canvas: Optional[DrawingAdapter]) -> None:
        self._canvas = canvas

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is GameState.RUNNING

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def lives(self) -> int:
        """Remaining lives."""
        return self._scorer.lives

    @property
    def catcher(self) -> Catcher:
        return self._catcher

    @property
    def objects(self) -> Tuple[FallingObject, ...]:
        """Live eggs in spawn order."""
        return tuple(self._objects)

    @property
    def spawn_timer(self) -> float:
        return self._spawner.spawn_timer

    @property
    def spawn_interval(self) -> float:
        return self._spawner.spawn_interval

    @property
    def elapsed(self) -> float:
        """Simulated milliseconds since start()."""
        return self._elapsed

    @property
    def frames(self) -> int:
        return self._frames

    @property
    def termination_reason(self) -> str:
        """Reason for game end, or empty string."""
        return self._termination_reason

    @property
    def input_target_x(self) -> Optional[float]:
        return self._input_target_x

    @property
    def left_held(self) -> bool:
        return self._left_held

    @property
    def right_held(self) -> bool:
        return self._right_held

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Clear the board and restore score, lives and spawn timing.

        Valid from any state; does not change the running state.

        Args:
            seed: New random seed. Keeps the current RNG stream if None.
        """
        if seed is not None:
            self._seed = seed

        self._objects.clear()
        self._scorer.reset()
        self._spawner.reset(seed)
        self._catcher.center(self._config.board.width)
        self._termination_reason = ""
        self._elapsed = 0.0
        self._frames = 0

    def start(self, now: Optional[float] = None, seed: Optional[int] = None) -> None:
        """
        Begin a new playthrough.

        Args:
            now: Timestamp of the start, in the same unit as frame(). Read
                from the session's time source if None.
            seed: New random seed. Keeps the current RNG stream if None.
        """
        self.reset(seed)
        self._state = GameState.RUNNING
        if now is None:
            now = self._time_source()
        self._clock.reset(now)

    def end(self) -> None:
        """Stop processing frames. Score and lives stay readable."""
        if self._state is GameState.RUNNING:
            self._state = GameState.ENDED

    def frame(self, now: float) -> Optional[FrameResult]:
        """
        Process one display refresh.

        Args:
            now: Monotonic timestamp in milliseconds.

        Returns:
            FrameResult, or None if the session is not running.
        """
        if not self.running:
            return None

        dt = self._clock.tick(now)
        self._frames += 1
        self._elapsed += dt
        score_before = self._scorer.score

        result = FrameResult(dt=dt)

        self._apply_input()

        egg = self._spawner.advance(dt, self._scorer.score)
        if egg is not None:
            self._objects.append(egg)
            result.spawned = True

        self._update_objects(dt, result)

        result.delta_score = self._scorer.score - score_before
        self.draw()
        return result

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def set_continuous_target(self, x: Optional[float]) -> None:
        """Latch the pointer position the catcher should center on (None to release)."""
        self._input_target_x = None if x is None else float(x)

    def set_direction_held(self, direction: str, held: bool) -> None:
        """
        Latch a directional key state.

        Raises:
            ValueError: If direction is not 'left' or 'right'.
        """
        if direction == "left":
            self._left_held = bool(held)
        elif direction == "right":
            self._right_held = bool(held)
        else:
            raise ValueError(f"direction must be one of {DIRECTIONS}, got {direction!r}")

    def _apply_input(self) -> None:
        if self._input_target_x is not None:
            self._catcher.move_to(self._input_target_x)
        if self._left_held:
            self._catcher.step(-1)
        if self._right_held:
            self._catcher.step(1)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def _update_objects(self, dt: float, result: FrameResult) -> None:
        """Update every live egg, resolving catches and misses."""
        # Walk backwards so removals never skip an unvisited egg
        for i in range(len(self._objects) - 1, -1, -1):
            egg = self._objects[i]
            egg.update(dt)
            outcome = self._rules.catch.resolve(egg, self._catcher)

            if outcome is Outcome.CAUGHT:
                del self._objects[i]
                result.events.append(self._scorer.apply_catch())
                result.caught += 1

            elif outcome is Outcome.MISSED:
                del self._objects[i]
                result.events.append(self._scorer.apply_miss())
                result.missed += 1

                termination = self._rules.termination.check_termination(self._scorer.lives)
                if termination.terminated:
                    self._termination_reason = termination.reason
                    self.end()
                    result.ended = True
                    return

    def spawn_object(
        self,
        x: Optional[float] = None,
        y: Optional[float] = None,
        radius: Optional[float] = None,
        fall_speed: Optional[float] = None,
        sway_amplitude: Optional[float] = None,
        sway_phase: Optional[float] = None
    ) -> Optional[FallingObject]:
        """
        Add an egg immediately, overriding any of its random parameters.

        Returns:
            The new egg, or None if the session is not running.
        """
        if not self.running:
            return None

        egg = self._spawner.create_object(self._scorer.score)
        if radius is not None:
            egg.radius = radius
            egg.y = -radius * self._config.falling.spawn_height_factor
        if x is not None:
            egg.x = x
        if y is not None:
            egg.y = y
        if fall_speed is not None:
            egg.fall_speed = fall_speed
        if sway_amplitude is not None:
            egg.sway_amplitude = sway_amplitude
        if sway_phase is not None:
            egg.sway_phase = sway_phase

        self._objects.append(egg)
        return egg

    # ------------------------------------------------------------------
    # Drawing and inspection
    # ------------------------------------------------------------------

    def draw(self) -> None:
        """Issue this frame's draw requests to the canvas, if any."""
        canvas = self._canvas
        if canvas is None:
            return

        board = self._config.board
        band = board.ground_band_height

        canvas.clear_rect(0, 0, board.width, board.height)
        canvas.fill_rect(0, board.height - band, board.width, band, GROUND_BAND_COLOR)

        for egg in self._objects:
            egg.draw(canvas)

        self._catcher.draw(canvas)

        canvas.fill_text(f"Score {self._scorer.score}", 10, 16, SCORE_TEXT_COLOR, 12)

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._scorer.score,
            "lives": self._scorer.lives,
            "catches": self._scorer.catches,
            "misses": self._scorer.misses,
            "objects_count": len(self._objects),
            "spawn_interval": self._spawner.spawn_interval,
            "elapsed": self._elapsed,
            "frames": self._frames,
            "running": self.running,
            "terminated_reason": self._termination_reason,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering outside the draw contract.

        Returns:
            Dict with board size, catcher rectangle, eggs and counters.
        """
        catcher = self._catcher
        return {
            "board_width": self._config.board.width,
            "board_height": self._config.board.height,
            "catcher": {
                "x": catcher.x,
                "y": catcher.y,
                "width": catcher.width,
                "height": catcher.height,
            },
            "objects": [
                {
                    "x": egg.x,
                    "y": egg.y,
                    "radius": egg.radius,
                    "tilt": egg.tilt,
                    "fall_speed": egg.fall_speed,
                }
                for egg in self._objects
            ],
            "score": self._scorer.score,
            "lives": self._scorer.lives,
            "state": self._state.value,
        }
