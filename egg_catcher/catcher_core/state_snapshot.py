"""
State Snapshot
==============

Packs session state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, TYPE_CHECKING
import numpy as np

from egg_catcher.catcher_core.config_loader import GameConfig, get_config

if TYPE_CHECKING:
    from egg_catcher.catcher_core.game import GameSession


@dataclass
class GameSnapshot:
    """
    Session state snapshot.

    Object arrays are fixed-size with masking for variable object counts,
    sorted lowest egg (largest y) first.
    """
    # Core state
    catcher_x: float
    catcher_y: float
    catcher_width: float
    score: int
    lives: int
    objects_count: int
    spawn_interval: float

    # Board info (for normalization)
    board_width: float
    board_height: float

    # Derived features
    lowest_object_x: float           # -board_width when no egg is live
    lowest_object_y: float           # -board_height when no egg is live

    # Object arrays (fixed size, padded)
    obj_x: np.ndarray                 # (MAX_OBJ,) float32
    obj_y: np.ndarray                 # (MAX_OBJ,) float32
    obj_radius: np.ndarray            # (MAX_OBJ,) float32
    obj_fall_speed: np.ndarray        # (MAX_OBJ,) float32
    obj_mask: np.ndarray              # (MAX_OBJ,) bool

    # Optional image
    board_rgb: Optional[np.ndarray] = None

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        obs = {
            "catcher_x": np.array(self.catcher_x, dtype=np.float32),
            "catcher_y": np.array(self.catcher_y, dtype=np.float32),
            "catcher_width": np.array(self.catcher_width, dtype=np.float32),
            "score": np.array(self.score, dtype=np.int64),
            "lives": np.array(self.lives, dtype=np.int32),
            "objects_count": np.array(self.objects_count, dtype=np.int32),
            "spawn_interval": np.array(self.spawn_interval, dtype=np.float32),

            "board_width": np.array(self.board_width, dtype=np.float32),
            "board_height": np.array(self.board_height, dtype=np.float32),

            "lowest_object_x": np.array(self.lowest_object_x, dtype=np.float32),
            "lowest_object_y": np.array(self.lowest_object_y, dtype=np.float32),

            "obj_x": self.obj_x,
            "obj_y": self.obj_y,
            "obj_radius": self.obj_radius,
            "obj_fall_speed": self.obj_fall_speed,
            "obj_mask": self.obj_mask,
        }

        if self.board_rgb is not None:
            obs["board_rgb"] = self.board_rgb

        return obs


class SnapshotBuilder:
    """Builds session snapshots with pre-allocated arrays."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_obj = config.observation.max_objects

        self._obj_x = np.zeros(self._max_obj, dtype=np.float32)
        self._obj_y = np.zeros(self._max_obj, dtype=np.float32)
        self._obj_radius = np.zeros(self._max_obj, dtype=np.float32)
        self._obj_fall_speed = np.zeros(self._max_obj, dtype=np.float32)
        self._obj_mask = np.zeros(self._max_obj, dtype=bool)

    def build(
        self,
        session: "GameSession",
        board_rgb: Optional[np.ndarray] = None
    ) -> GameSnapshot:
        """
        Build a snapshot of the session.

        Args:
            session: The session to capture.
            board_rgb: Optional rendered image to attach.

        Returns:
            GameSnapshot with copies of the internal arrays.
        """
        self._obj_x.fill(0)
        self._obj_y.fill(0)
        self._obj_radius.fill(0)
        self._obj_fall_speed.fill(0)
        self._obj_mask.fill(False)

        eggs = sorted(session.objects, key=lambda e: e.y, reverse=True)
        eggs = eggs[:self._max_obj]

        for i, egg in enumerate(eggs):
            self._obj_x[i] = egg.x
            self._obj_y[i] = egg.y
            self._obj_radius[i] = egg.radius
            self._obj_fall_speed[i] = egg.fall_speed
            self._obj_mask[i] = True

        if eggs:
            lowest_x, lowest_y = eggs[0].x, eggs[0].y
        else:
            # Eggs never sit a full board above the top edge
            lowest_x = -float(self._config.board.width)
            lowest_y = -float(self._config.board.height)

        catcher = session.catcher
        return GameSnapshot(
            catcher_x=catcher.x,
            catcher_y=catcher.y,
            catcher_width=catcher.width,
            score=session.score,
            lives=session.lives,
            objects_count=len(session.objects),
            spawn_interval=session.spawn_interval,
            board_width=self._config.board.width,
            board_height=self._config.board.height,
            lowest_object_x=lowest_x,
            lowest_object_y=lowest_y,
            obj_x=self._obj_x.copy(),
            obj_y=self._obj_y.copy(),
            obj_radius=self._obj_radius.copy(),
            obj_fall_speed=self._obj_fall_speed.copy(),
            obj_mask=self._obj_mask.copy(),
            board_rgb=board_rgb,
        )
