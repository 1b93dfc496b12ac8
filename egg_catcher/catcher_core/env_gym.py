"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the egg catcher game.
One environment step is one frame of `env.frame_ms` simulated milliseconds.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from egg_catcher.catcher_core.config_loader import GameConfig, load_config
from egg_catcher.catcher_core.game import GameSession
from egg_catcher.catcher_core.state_snapshot import SnapshotBuilder


class CatcherEnv(gym.Env):
    """
    Egg catcher game as a Gymnasium environment.

    Action Space:
        Box(low=-1.0, high=1.0, shape=(), dtype=float32)
        Pointer position from the left wall (-1) to the right wall (+1).

    Observation Space:
        Dict containing catcher state, counters and padded egg arrays.

    Reward:
        Score gained this frame (10 per catch).

    Info:
        Contains score, lives, delta_score, caught, missed, terminated_reason, etc.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        image_obs: bool = False,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Initialize catcher environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            image_obs: If True, include board_rgb in observations.
            image_width: Override observation image width.
            image_height: Override observation image height.
            debug: If True, print per-step diagnostics.
        """
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(
                f"render_mode must be one of {self.metadata['render_modes']}, got {render_mode!r}"
            )

        self._config = load_config(config_path)

        self.render_mode = render_mode
        self._image_obs = image_obs
        self._debug = debug

        self._img_width = image_width or self._config.observation.image_width
        self._img_height = image_height or self._config.observation.image_height

        self._session = GameSession(config=self._config)
        self._snapshot_builder = SnapshotBuilder(self._config)
        self._frame_ms = self._config.env.frame_ms
        self._max_frames = self._config.env.max_frames
        self._now: float = 0.0
        self._steps: int = 0

        # Canvases (lazy)
        self._array_canvas = None
        self._window_canvas = None

        self.action_space = spaces.Box(
            low=-1.0,
            high=1.0,
            shape=(),
            dtype=np.float32
        )

        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] CatcherEnv initialized")
            print(f"[DEBUG]   Board: {self._config.board.width}x{self._config.board.height}")
            print(f"[DEBUG]   Frame: {self._frame_ms}ms, max frames: {self._max_frames}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_obj = self._config.observation.max_objects
        board = self._config.board
        big = np.float32(1e6)

        obs_dict = {
            "catcher_x": spaces.Box(low=0, high=board.width, shape=(), dtype=np.float32),
            "catcher_y": spaces.Box(low=0, high=board.height, shape=(), dtype=np.float32),
            "catcher_width": spaces.Box(low=0, high=board.width, shape=(), dtype=np.float32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "lives": spaces.Box(low=0, high=self._config.scoring.starting_lives, shape=(), dtype=np.int32),
            "objects_count": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            "spawn_interval": spaces.Box(low=0, high=big, shape=(), dtype=np.float32),

            "board_width": spaces.Box(low=0, high=big, shape=(), dtype=np.float32),
            "board_height": spaces.Box(low=0, high=big, shape=(), dtype=np.float32),

            "lowest_object_x": spaces.Box(low=-big, high=big, shape=(), dtype=np.float32),
            "lowest_object_y": spaces.Box(low=-big, high=big, shape=(), dtype=np.float32),

            "obj_x": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_y": spaces.Box(low=-np.inf, high=np.inf, shape=(max_obj,), dtype=np.float32),
            "obj_radius": spaces.Box(low=0, high=big, shape=(max_obj,), dtype=np.float32),
            "obj_fall_speed": spaces.Box(low=0, high=big, shape=(max_obj,), dtype=np.float32),
            "obj_mask": spaces.MultiBinary(max_obj),
        }

        if self._image_obs:
            obs_dict["board_rgb"] = spaces.Box(
                low=0,
                high=255,
                shape=(self._img_height, self._img_width, 3),
                dtype=np.uint8
            )

        return spaces.Dict(obs_dict)

    def action_to_target_x(self, action: float) -> float:
        """
        Convert normalized action [-1, 1] to a pointer X coordinate.

        -1 is the left wall and +1 the right wall; the catcher clamps
        targets it cannot center on.
        """
        action = max(-1.0, min(1.0, action))
        t = (action + 1.0) / 2.0
        return t * self._config.board.width

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._now = 0.0
        self._steps = 0
        self._session.set_continuous_target(None)
        self._session.start(now=self._now, seed=seed)

        obs = self._build_obs()
        info = self._session.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[float, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Advance one frame with the catcher steered toward the action target.

        Args:
            action: Target position in [-1, 1].

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        if isinstance(action, np.ndarray):
            action = float(action.item() if action.ndim == 0 else action[0])

        if not self._session.running:
            # Episode already ended, return current state
            info = self._session.get_info()
            info["delta_score"] = 0
            return self._build_obs(), 0.0, True, False, info

        self._session.set_continuous_target(self.action_to_target_x(action))
        self._now += self._frame_ms
        result = self._session.frame(self._now)
        self._steps += 1

        terminated = not self._session.running
        truncated = not terminated and self._steps >= self._max_frames

        obs = self._build_obs()
        reward = float(result.delta_score)

        info = self._session.get_info()
        info["delta_score"] = result.delta_score
        info["caught"] = result.caught
        info["missed"] = result.missed

        if self._debug:
            print(f"[DEBUG] Step {self._steps}: action={action:.3f}, "
                  f"caught={result.caught}, missed={result.missed}, "
                  f"score={info['score']}, lives={info['lives']}")
            if terminated:
                print(f"[DEBUG] TERMINATED: {info.get('terminated_reason', 'unknown')}")

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def _build_obs(self) -> Dict[str, np.ndarray]:
        board_rgb = self._render_to_array() if self._image_obs else None
        snapshot = self._snapshot_builder.build(self._session, board_rgb=board_rgb)
        return snapshot.to_obs_dict()

    def _render_to_array(self) -> np.ndarray:
        """Render board to RGB array."""
        if self._array_canvas is None:
            from egg_catcher.catcher_core.render_solid import ArrayCanvas
            self._array_canvas = ArrayCanvas(
                self._config,
                width=self._img_width,
                height=self._img_height
            )
        self._draw_with(self._array_canvas)
        return self._array_canvas.to_array()

    def _draw_with(self, canvas) -> None:
        """Draw the session once on canvas without keeping it attached."""
        previous = self._session.canvas
        self._session.canvas = canvas
        try:
            self._session.draw()
        finally:
            self._session.canvas = previous

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode == "human":
            import pygame
            from egg_catcher.catcher_core.render_pygame import PygameCanvas

            if self._window_canvas is None:
                pygame.init()
                board = self._config.board
                screen = pygame.display.set_mode((board.width, board.height))
                pygame.display.set_caption("Egg Catcher")
                self._window_canvas = PygameCanvas(screen, self._config)

            pygame.event.pump()
            self._draw_with(self._window_canvas)
            pygame.display.flip()
            return None

        return None

    def close(self) -> None:
        """Clean up resources."""
        self._array_canvas = None
        if self._window_canvas is not None:
            import pygame
            pygame.display.quit()
            self._window_canvas = None

    @property
    def session(self) -> GameSession:
        """Access to underlying session (for debugging/tools)."""
        return self._session

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
