"""
Solid Renderer
==============

Fast numpy-based canvas that rasterizes draw requests into an RGB array.
Used for image observations and headless runs; no pygame required.
Text needs the optional opencv-python package.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

# Try to import cv2 for text rendering
try:
    import cv2
    CV2_AVAILABLE = True
except ImportError:
    CV2_AVAILABLE = False

from egg_catcher.catcher_core.config_loader import GameConfig, get_config
from egg_catcher.catcher_core.drawing import Color, DrawingAdapter


class ArrayCanvas(DrawingAdapter):
    """
    DrawingAdapter backed by a (height, width, 3) uint8 array.

    World coordinates are the board's pixels; the output image may be a
    different size and is scaled per axis. Alpha is blended against what is
    already on the array. Text is rasterized with OpenCV's Hershey font when
    cv2 is installed and skipped otherwise.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        background: Tuple[int, int, int] = (30, 30, 40)
    ):
        """
        Initialize canvas.

        Args:
            config: Game configuration. Uses default if None.
            width: Output image width. Defaults to the board width.
            height: Output image height. Defaults to the board height.
            background: RGB color used by clear_rect.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._board_width = config.board.width
        self._board_height = config.board.height
        self._width = width or self._board_width
        self._height = height or self._board_height
        self._scale_x = self._width / self._board_width
        self._scale_y = self._height / self._board_height

        self._bg_color = np.array(background, dtype=np.float32)
        self._img = np.zeros((self._height, self._width, 3), dtype=np.float32)
        self._img[:] = self._bg_color

    @property
    def size(self) -> Tuple[int, int]:
        return (self._board_width, self._board_height)

    def to_array(self) -> np.ndarray:
        """Current image as a (height, width, 3) uint8 array."""
        return np.clip(np.rint(self._img), 0, 255).astype(np.uint8)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _pixel_box(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float
    ) -> Optional[Tuple[int, int, int, int]]:
        """World-space box to clipped pixel bounds (row_min, row_max, col_min, col_max)."""
        col_min = max(0, int(math.floor(x0 * self._scale_x)))
        col_max = min(self._width, int(math.ceil(x1 * self._scale_x)))
        row_min = max(0, int(math.floor(y0 * self._scale_y)))
        row_max = min(self._height, int(math.ceil(y1 * self._scale_y)))
        if row_min >= row_max or col_min >= col_max:
            return None
        return row_min, row_max, col_min, col_max

    def _world_grid(self, box: Tuple[int, int, int, int]) -> Tuple[np.ndarray, np.ndarray]:
        """World coordinates of the pixel centers inside box."""
        row_min, row_max, col_min, col_max = box
        ys = (np.arange(row_min, row_max) + 0.5) / self._scale_y
        xs = (np.arange(col_min, col_max) + 0.5) / self._scale_x
        yy, xx = np.meshgrid(ys, xs, indexing="ij")
        return xx, yy

    def _blend(
        self,
        box: Tuple[int, int, int, int],
        mask: Optional[np.ndarray],
        color: Color
    ) -> None:
        row_min, row_max, col_min, col_max = box
        region = self._img[row_min:row_max, col_min:col_max]
        alpha = color[3] / 255.0
        rgb = np.array(color[:3], dtype=np.float32)
        if mask is None:
            region[:] = region * (1 - alpha) + rgb * alpha
        else:
            region[mask] = region[mask] * (1 - alpha) + rgb * alpha

    # ------------------------------------------------------------------
    # DrawingAdapter
    # ------------------------------------------------------------------

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        box = self._pixel_box(x, y, x + width, y + height)
        if box is None:
            return
        row_min, row_max, col_min, col_max = box
        self._img[row_min:row_max, col_min:col_max] = self._bg_color

    def fill_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color
    ) -> None:
        box = self._pixel_box(x, y, x + width, y + height)
        if box is None:
            return
        self._blend(box, None, color)

    def fill_round_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        radius: float,
        color: Color
    ) -> None:
        box = self._pixel_box(x, y, x + width, y + height)
        if box is None:
            return

        radius = max(0.0, min(radius, width / 2, height / 2))
        xx, yy = self._world_grid(box)

        # Distance outside the inner (radius-shrunk) rectangle
        dx = np.maximum(np.maximum(x + radius - xx, xx - (x + width - radius)), 0)
        dy = np.maximum(np.maximum(y + radius - yy, yy - (y + height - radius)), 0)
        mask = dx ** 2 + dy ** 2 <= radius ** 2

        self._blend(box, mask, color)

    def fill_ellipse(
        self,
        cx: float,
        cy: float,
        rx: float,
        ry: float,
        rotation: float,
        color: Color
    ) -> None:
        if rx <= 0 or ry <= 0:
            return

        reach = max(rx, ry)
        box = self._pixel_box(cx - reach, cy - reach, cx + reach, cy + reach)
        if box is None:
            return

        xx, yy = self._world_grid(box)
        u = xx - cx
        v = yy - cy

        # Undo the rotation to test against the axis-aligned ellipse
        cos_r = math.cos(rotation)
        sin_r = math.sin(rotation)
        local_u = u * cos_r + v * sin_r
        local_v = -u * sin_r + v * cos_r
        mask = (local_u / rx) ** 2 + (local_v / ry) ** 2 <= 1.0

        self._blend(box, mask, color)

    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        color: Color,
        size: int = 12
    ) -> None:
        """Draw text with its baseline-left corner at (x, y); size is the text height in world pixels."""
        if not CV2_AVAILABLE or not text:
            return

        font = cv2.FONT_HERSHEY_SIMPLEX
        thickness = 1
        pixel_height = max(1, int(round(size * self._scale_y)))
        font_scale = cv2.getFontScaleFromHeight(font, pixel_height, thickness)
        origin = (int(round(x * self._scale_x)), int(round(y * self._scale_y)))

        # Rasterize into a coverage layer, then blend like any other shape
        layer = np.zeros((self._height, self._width), dtype=np.uint8)
        cv2.putText(layer, text, origin, font, font_scale, 255, thickness, cv2.LINE_8)

        rows = np.flatnonzero(layer.any(axis=1))
        cols = np.flatnonzero(layer.any(axis=0))
        if rows.size == 0 or cols.size == 0:
            return

        box = (int(rows[0]), int(rows[-1]) + 1, int(cols[0]), int(cols[-1]) + 1)
        mask = layer[box[0]:box[1], box[2]:box[3]] > 0
        self._blend(box, mask, color)
