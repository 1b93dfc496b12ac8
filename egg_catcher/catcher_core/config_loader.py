"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


@dataclass(frozen=True)
class BoardConfig:
    """Play area geometry."""
    width: int                   # Play area width in pixels
    height: int                  # Play area height in pixels
    margin: float                # Catcher clamp margin
    spawn_margin: float          # Egg spawn margin from each wall
    ground_band_height: float    # Background band at the bottom


@dataclass(frozen=True)
class CatcherConfig:
    """Player-controlled catcher."""
    width: float
    height: float
    speed: float
    bottom_offset: float
    corner_radius: float


@dataclass(frozen=True)
class ClockConfig:
    """Frame timing."""
    max_dt: float


@dataclass(frozen=True)
class SpawnConfig:
    """Spawn scheduling and difficulty ramp."""
    initial_interval: float
    interval_floor: float
    interval_decay: float


@dataclass(frozen=True)
class FallingConfig:
    """Falling object generation and motion."""
    radius_min: float
    radius_max: float
    spawn_height_factor: float
    base_speed: float
    speed_score_factor: float
    speed_cap: float
    speed_jitter: float
    fall_rate: float
    sway_max: float
    sway_rate: float


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring and lives."""
    catch_reward: int
    starting_lives: int


@dataclass(frozen=True)
class ObservationConfig:
    """Observation space parameters."""
    max_objects: int
    image_width: int
    image_height: int


@dataclass(frozen=True)
class EnvConfig:
    """Gymnasium environment stepping."""
    frame_ms: float
    max_frames: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    catcher: CatcherConfig
    clock: ClockConfig
    spawn: SpawnConfig
    falling: FallingConfig
    scoring: ScoringConfig
    observation: ObservationConfig
    env: EnvConfig

    @property
    def catcher_y(self) -> float:
        """Fixed top edge of the catcher."""
        return self.board.height - self.catcher.height - self.catcher.bottom_offset

    @property
    def catcher_min_x(self) -> float:
        """Smallest allowed catcher x."""
        return self.board.margin

    @property
    def catcher_max_x(self) -> float:
        """Largest allowed catcher x."""
        return self.board.width - self.catcher.width - self.board.margin


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    board = config.board
    if board.width <= 0 or board.height <= 0:
        raise ValueError(f"Board size must be positive, got {board.width}x{board.height}")

    catcher = config.catcher
    if catcher.width <= 0 or catcher.height <= 0:
        raise ValueError(
            f"Catcher size must be positive, got {catcher.width}x{catcher.height}"
        )
    if config.catcher_min_x > config.catcher_max_x:
        raise ValueError(
            f"Catcher width ({catcher.width}) plus margins does not fit "
            f"the board width ({board.width})"
        )
    if config.catcher_y < 0:
        raise ValueError("Catcher does not fit inside the board height")

    if board.spawn_margin * 2 > board.width:
        raise ValueError(
            f"spawn_margin ({board.spawn_margin}) leaves no room to spawn "
            f"on a board of width {board.width}"
        )

    if config.clock.max_dt <= 0:
        raise ValueError(f"clock.max_dt must be positive, got {config.clock.max_dt}")

    spawn = config.spawn
    if spawn.interval_floor <= 0:
        raise ValueError(f"spawn.interval_floor must be positive, got {spawn.interval_floor}")
    if spawn.initial_interval < spawn.interval_floor:
        raise ValueError(
            f"spawn.initial_interval ({spawn.initial_interval}) must not be below "
            f"spawn.interval_floor ({spawn.interval_floor})"
        )
    if not 0 < spawn.interval_decay <= 1:
        raise ValueError(f"spawn.interval_decay must be in (0, 1], got {spawn.interval_decay}")

    falling = config.falling
    if not 0 < falling.radius_min <= falling.radius_max:
        raise ValueError(
            f"Invalid radius range [{falling.radius_min}, {falling.radius_max}]"
        )
    if falling.radius_max * falling.spawn_height_factor >= board.height:
        raise ValueError(
            f"Eggs of radius {falling.radius_max} would spawn a full board "
            f"height ({board.height}) above the top edge"
        )

    if config.scoring.starting_lives <= 0:
        raise ValueError(
            f"scoring.starting_lives must be positive, got {config.scoring.starting_lives}"
        )

    if config.observation.max_objects <= 0:
        raise ValueError("observation.max_objects must be positive")

    if config.env.frame_ms <= 0:
        raise ValueError(f"env.frame_ms must be positive, got {config.env.frame_ms}")


def default_config_path() -> str:
    """Location of the bundled game_config.yaml."""
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), "game_config.yaml")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = default_config_path()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        width=int(board_data["width"]),
        height=int(board_data["height"]),
        margin=float(board_data.get("margin", 8)),
        spawn_margin=float(board_data.get("spawn_margin", 24)),
        ground_band_height=float(board_data.get("ground_band_height", 60))
    )

    catcher_data = raw["catcher"]
    catcher = CatcherConfig(
        width=float(catcher_data["width"]),
        height=float(catcher_data["height"]),
        speed=float(catcher_data["speed"]),
        bottom_offset=float(catcher_data.get("bottom_offset", 14)),
        corner_radius=float(catcher_data.get("corner_radius", 8))
    )

    clock = ClockConfig(max_dt=float(raw["clock"]["max_dt"]))

    spawn_data = raw["spawn"]
    spawn = SpawnConfig(
        initial_interval=float(spawn_data["initial_interval"]),
        interval_floor=float(spawn_data["interval_floor"]),
        interval_decay=float(spawn_data["interval_decay"])
    )

    falling_data = raw["falling"]
    falling = FallingConfig(
        radius_min=float(falling_data["radius_min"]),
        radius_max=float(falling_data["radius_max"]),
        spawn_height_factor=float(falling_data.get("spawn_height_factor", 1.5)),
        base_speed=float(falling_data["base_speed"]),
        speed_score_factor=float(falling_data["speed_score_factor"]),
        speed_cap=float(falling_data["speed_cap"]),
        speed_jitter=float(falling_data["speed_jitter"]),
        fall_rate=float(falling_data["fall_rate"]),
        sway_max=float(falling_data.get("sway_max", 0.5)),
        sway_rate=float(falling_data.get("sway_rate", 0.004))
    )

    scoring_data = raw["scoring"]
    scoring = ScoringConfig(
        catch_reward=int(scoring_data["catch_reward"]),
        starting_lives=int(scoring_data["starting_lives"])
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_objects=int(obs_data.get("max_objects", 32)),
        image_width=int(obs_data.get("image_width", 240)),
        image_height=int(obs_data.get("image_height", 320))
    )

    env_data = raw.get("env", {})
    env = EnvConfig(
        frame_ms=float(env_data.get("frame_ms", 16)),
        max_frames=int(env_data.get("max_frames", 20000))
    )

    config = GameConfig(
        board=board,
        catcher=catcher,
        clock=clock,
        spawn=spawn,
        falling=falling,
        scoring=scoring,
        observation=observation,
        env=env
    )

    _validate_config(config)
    return config


# Module-level cache for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
