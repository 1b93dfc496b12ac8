"""
Entities
========

The two entity kinds in play: the player's Catcher and the FallingObjects
(eggs) it tries to intercept. Both are plain dataclasses exposing
`update`/`step` style mutators and `draw(canvas)`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from egg_catcher.catcher_core.config_loader import GameConfig
from egg_catcher.catcher_core.drawing import Color, DrawingAdapter

EGG_COLOR: Color = (255, 246, 215, 255)
EGG_SHADOW_COLOR: Color = (0, 0, 0, 18)
BASKET_COLOR: Color = (123, 79, 53, 255)
BASKET_RIM_COLOR: Color = (162, 107, 71, 255)

# Maximum egg wobble in radians
EGG_TILT = 0.05


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


@dataclass
class Catcher:
    """
    Player-controlled basket.

    Position is the top-left corner. `x` is kept inside [min_x, max_x] by
    every mutator; out-of-range targets are clamped, never rejected.
    """
    x: float
    y: float
    width: float
    height: float
    speed: float
    min_x: float
    max_x: float
    corner_radius: float = 8.0

    @classmethod
    def from_config(cls, config: GameConfig) -> "Catcher":
        """Create a centered catcher for the configured board."""
        catcher = cls(
            x=0.0,
            y=config.catcher_y,
            width=config.catcher.width,
            height=config.catcher.height,
            speed=config.catcher.speed,
            min_x=config.catcher_min_x,
            max_x=config.catcher_max_x,
            corner_radius=config.catcher.corner_radius,
        )
        catcher.center(config.board.width)
        return catcher

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    def center(self, board_width: float) -> None:
        """Place the catcher in the middle of the board."""
        self.x = clamp((board_width - self.width) / 2, self.min_x, self.max_x)

    def move_to(self, target_center_x: float) -> None:
        """Center the catcher on target_center_x (pointer input)."""
        self.x = clamp(target_center_x - self.width / 2, self.min_x, self.max_x)

    def step(self, direction: int) -> None:
        """Move one speed increment left (-1) or right (+1)."""
        self.x = clamp(self.x + direction * self.speed, self.min_x, self.max_x)

    def spans(self, x: float) -> bool:
        """True if x lies strictly between the catcher's left and right edges."""
        return self.x < x < self.right

    def draw(self, canvas: DrawingAdapter) -> None:
        # Body
        canvas.fill_round_rect(
            self.x, self.y, self.width, self.height,
            self.corner_radius, BASKET_COLOR
        )
        # Rim
        canvas.fill_round_rect(
            self.x + 6, self.y - 8, self.width - 12, 10,
            6, BASKET_RIM_COLOR
        )


@dataclass
class FallingObject:
    """
    One falling egg.

    (x, y) is the center. `caught` and `missed` are terminal and mutually
    exclusive; `crossed_catch_line` records that the single catch test has
    already been made for this egg.
    """
    x: float
    y: float
    radius: float
    fall_speed: float
    sway_amplitude: float = 0.0
    sway_phase: float = 0.0
    sway_rate: float = 0.004
    fall_rate: float = 0.02
    caught: bool = False
    missed: bool = False
    crossed_catch_line: bool = False

    @property
    def top(self) -> float:
        return self.y - self.radius

    @property
    def bottom(self) -> float:
        return self.y + self.radius

    @property
    def tilt(self) -> float:
        """Cosmetic rotation derived from the sway phase."""
        return math.sin(self.sway_phase) * EGG_TILT

    def update(self, dt: float) -> None:
        """Advance sway and fall by dt milliseconds."""
        self.sway_phase += dt * self.sway_rate
        self.x += math.sin(self.sway_phase) * self.sway_amplitude
        self.y += self.fall_speed * dt * self.fall_rate

    def draw(self, canvas: DrawingAdapter) -> None:
        tilt = self.tilt
        canvas.fill_ellipse(self.x, self.y, self.radius * 0.8, self.radius, tilt, EGG_COLOR)

        # Shadow sits below center in the egg's rotated frame
        offset = self.radius * 0.35
        canvas.fill_ellipse(
            self.x - offset * math.sin(tilt),
            self.y + offset * math.cos(tilt),
            self.radius * 0.6,
            self.radius * 0.35,
            tilt,
            EGG_SHADOW_COLOR
        )
