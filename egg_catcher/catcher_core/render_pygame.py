"""
Pygame Renderer
===============

DrawingAdapter that draws onto a pygame surface, for the human play window
or for off-screen surfaces.
"""

from __future__ import annotations

import math
from typing import Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from egg_catcher.catcher_core.config_loader import GameConfig, get_config
from egg_catcher.catcher_core.drawing import Color, DrawingAdapter


class PygameCanvas(DrawingAdapter):
    """
    Draws game primitives onto a pygame surface.

    The board is placed at `offset` and scaled uniformly by `scale`, so the
    same session can be shown in a window larger than the board.
    Translucent colors go through a per-shape SRCALPHA surface.
    """

    def __init__(
        self,
        surface: "pygame.Surface",
        config: Optional[GameConfig] = None,
        scale: float = 1.0,
        offset: Tuple[int, int] = (0, 0),
        background: Tuple[int, int, int] = (46, 58, 89)
    ):
        """
        Initialize canvas.

        Args:
            surface: Target pygame surface (window or off-screen).
            config: Game configuration. Uses default if None.
            scale: World-to-screen scale factor.
            offset: Screen position of the board's top-left corner.
            background: RGB color used by clear_rect.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameCanvas")

        if config is None:
            config = get_config()

        self._surface = surface
        self._config = config
        self._scale = scale
        self._offset = offset
        self._bg_color = background

        if not pygame.font.get_init():
            pygame.font.init()
        self._fonts: Dict[int, "pygame.font.Font"] = {}

    @property
    def size(self) -> Tuple[int, int]:
        return (self._config.board.width, self._config.board.height)

    @property
    def surface(self) -> "pygame.Surface":
        return self._surface

    def _to_screen(self, x: float, y: float) -> Tuple[int, int]:
        return (
            int(round(self._offset[0] + x * self._scale)),
            int(round(self._offset[1] + y * self._scale)),
        )

    def _screen_rect(self, x: float, y: float, width: float, height: float) -> "pygame.Rect":
        left, top = self._to_screen(x, y)
        return pygame.Rect(
            left, top,
            max(1, int(round(width * self._scale))),
            max(1, int(round(height * self._scale)))
        )

    def _font(self, size: int) -> "pygame.font.Font":
        px = max(8, int(round(size * self._scale * 1.4)))
        if px not in self._fonts:
            self._fonts[px] = pygame.font.Font(None, px)
        return self._fonts[px]

    def _draw_rect(self, rect: "pygame.Rect", radius: int, color: Color) -> None:
        if color[3] >= 255:
            pygame.draw.rect(self._surface, color[:3], rect, border_radius=radius)
            return
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        pygame.draw.rect(layer, color, layer.get_rect(), border_radius=radius)
        self._surface.blit(layer, rect.topleft)

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._surface.fill(self._bg_color, self._screen_rect(x, y, width, height))

    def fill_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color
    ) -> None:
        self._draw_rect(self._screen_rect(x, y, width, height), 0, color)

    def fill_round_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        radius: float,
        color: Color
    ) -> None:
        self._draw_rect(
            self._screen_rect(x, y, width, height),
            int(round(radius * self._scale)),
            color
        )

    def fill_ellipse(
        self,
        cx: float,
        cy: float,
        rx: float,
        ry: float,
        rotation: float,
        color: Color
    ) -> None:
        width = max(1, int(round(rx * 2 * self._scale)))
        height = max(1, int(round(ry * 2 * self._scale)))

        layer = pygame.Surface((width, height), pygame.SRCALPHA)
        pygame.draw.ellipse(layer, color, layer.get_rect())

        # pygame rotates counter-clockwise; screen rotation is clockwise
        if abs(rotation) > 1e-4:
            layer = pygame.transform.rotate(layer, -math.degrees(rotation))

        rect = layer.get_rect(center=self._to_screen(cx, cy))
        self._surface.blit(layer, rect)

    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        color: Color,
        size: int = 12
    ) -> None:
        font = self._font(size)
        rendered = font.render(text, True, color[:3])
        if color[3] < 255:
            rendered.set_alpha(color[3])
        left, baseline = self._to_screen(x, y)
        self._surface.blit(rendered, (left, baseline - font.get_ascent()))
