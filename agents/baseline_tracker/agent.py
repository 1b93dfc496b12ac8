"""
Baseline Tracker Agent - Follows the lowest falling egg.

This is a simple heuristic agent that reads the padded egg arrays, picks
the egg closest to the ground and steers the catcher under it.

Strategy:
- Eggs are sorted lowest first, so slot 0 is the most urgent one
- With no egg in play, drift back to the middle of the board
- Convert the egg's x into an action in [-1, 1] across the board width
"""

import numpy as np
from typing import Any, Dict, Optional


class CatcherAgent:
    """
    Baseline agent that tracks the lowest egg.

    Stateless: every decision is made from the current observation.
    """

    def __init__(self, debug: bool = False):
        """
        Initialize the agent.

        Args:
            debug: If True, print decisions to stdout.
        """
        self.debug = debug

    def reset(self, seed: Optional[int] = None) -> None:
        """Called when a new episode starts. Nothing to reset."""
        pass

    def act(self, observation: Dict[str, Any], debug: bool = False) -> float:
        """
        Choose where the catcher should go.

        Args:
            observation: Dict of numpy arrays from the environment.
            debug: If True, print debug info for this step.

        Returns:
            Action in [-1, 1] representing the pointer position.
        """
        board_width = float(observation["board_width"])

        if bool(observation["obj_mask"][0]):
            target_x = float(observation["obj_x"][0])
        else:
            target_x = board_width / 2

        action = (target_x / board_width) * 2.0 - 1.0
        action = float(np.clip(action, -1.0, 1.0))

        if debug or self.debug:
            print(f"[Tracker Agent] Eggs={int(observation['objects_count'])}, "
                  f"Target x={target_x:.1f}, Action={action:.3f}")

        return action


# Convenience function to create agent (used by evaluation harness)
def create_agent(**kwargs) -> CatcherAgent:
    """Factory function to create an agent instance."""
    return CatcherAgent(**kwargs)
