"""
Drawing Adapter
===============

The primitive drawing surface the simulation draws against.

The game core owns no drawing state: every frame it issues an ordered
sequence of primitive requests to a DrawingAdapter. Concrete adapters live in
render_solid (numpy, headless) and render_pygame (window).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

# RGBA, each channel 0-255
Color = Tuple[int, int, int, int]


class DrawingAdapter(ABC):
    """Minimal 2D canvas interface."""

    @property
    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """(width, height) of the surface in world pixels."""

    @abstractmethod
    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        """Reset a rectangle to the surface background."""

    @abstractmethod
    def fill_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color
    ) -> None:
        """Fill an axis-aligned rectangle."""

    @abstractmethod
    def fill_round_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        radius: float,
        color: Color
    ) -> None:
        """Fill a rectangle with rounded corners."""

    @abstractmethod
    def fill_ellipse(
        self,
        cx: float,
        cy: float,
        rx: float,
        ry: float,
        rotation: float,
        color: Color
    ) -> None:
        """
        Fill an ellipse translated to (cx, cy) and rotated by `rotation`.

        Args:
            cx: Center X.
            cy: Center Y.
            rx: Horizontal radius before rotation.
            ry: Vertical radius before rotation.
            rotation: Rotation in radians, clockwise in screen space.
            color: Fill color.
        """

    @abstractmethod
    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        color: Color,
        size: int = 12
    ) -> None:
        """Draw text with its baseline-left corner at (x, y)."""
