"""
Catcher Core - The simulation loop of the game.

This module provides the game session, its entities and supporting systems
(clock, spawning, scoring, rules), the drawing adapter contract and the
Gymnasium environment wrapper.

Main exports:
- GameSession: Per-frame game orchestrator
- CatcherEnv: Gymnasium environment for agents
- ArrayCanvas: Headless numpy drawing adapter
- GameConfig: Configuration loaded from game_config.yaml
"""

from egg_catcher.catcher_core.config_loader import GameConfig, load_config
from egg_catcher.catcher_core.clock import SimulationClock
from egg_catcher.catcher_core.drawing import DrawingAdapter
from egg_catcher.catcher_core.entities import Catcher, FallingObject
from egg_catcher.catcher_core.spawn_scheduler import SpawnScheduler
from egg_catcher.catcher_core.game import FrameResult, GameSession, GameState
from egg_catcher.catcher_core.render_solid import ArrayCanvas
from egg_catcher.catcher_core.env_gym import CatcherEnv

__all__ = [
    "GameConfig",
    "load_config",
    "SimulationClock",
    "DrawingAdapter",
    "Catcher",
    "FallingObject",
    "SpawnScheduler",
    "FrameResult",
    "GameSession",
    "GameState",
    "ArrayCanvas",
    "CatcherEnv",
]
