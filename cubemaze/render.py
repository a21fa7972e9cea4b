"""Drawing into a frame buffer: textured walls, floor and ceiling, minimap."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from .constants import (
    CELL_SIZE,
    MINI_CELL_SIZE,
    MINI_PLAYER_SIZE,
    MINIMAP_EMPTY_COLOR,
    MINIMAP_FLOOR_COLOR,
    MINIMAP_PLAYER_COLOR,
    MINIMAP_WALL_COLOR,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
)
from .raycast import Column, WallSide

if TYPE_CHECKING:
    from .player import Player

_MASK = 0xFFFFFFFF
_MINIMAP_COLORS = {
    " ": MINIMAP_EMPTY_COLOR,
    "1": MINIMAP_WALL_COLOR,
    "0": MINIMAP_FLOOR_COLOR,
    "N": MINIMAP_FLOOR_COLOR,
    "S": MINIMAP_FLOOR_COLOR,
    "E": MINIMAP_FLOOR_COLOR,
    "W": MINIMAP_FLOOR_COLOR,
}


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // abs(divisor)
    return quotient if (value >= 0) == (divisor > 0) else -quotient


def texture_coords(column: Column, y: int, texture_width: int,
                   texture_height: int) -> tuple[int, int]:
    """Return the texture (x, y) sampled for screen row *y* of a wall column."""
    tex_y = 0
    if column.height:
        tex_y = _trunc_div((y - column.top) * texture_height, column.height)
    scaled = _trunc_div(column.offset_x * texture_width, CELL_SIZE)
    if column.side in (WallSide.WEST, WallSide.SOUTH):
        tex_x = CELL_SIZE - scaled
    else:
        tex_x = scaled
    return tex_x, tex_y


@dataclass
class Textures:
    """Wall images as 2-D arrays of packed 32-bit colours, one per side."""

    north: np.ndarray
    south: np.ndarray
    west: np.ndarray
    east: np.ndarray

    def __post_init__(self) -> None:
        for side in WallSide:
            image = np.ascontiguousarray(getattr(self, side.value), dtype=np.uint32)
            setattr(self, side.value, image)

    def _texture(self, side: WallSide) -> np.ndarray:
        return getattr(self, WallSide(side).value)

    def pixel(self, side: WallSide, x: int, y: int) -> int:
        """Colour at (x, y) of a side's texture.

        Coordinates are read in row-major order, as the image is laid out
        in memory, and clamped to the image.
        """
        texture = self._texture(side)
        flat = texture.ravel()
        index = min(max(y * texture.shape[1] + x, 0), flat.size - 1)
        return int(flat[index])


@dataclass
class Frame:
    """A frame buffer of packed 32-bit colours, indexed [row, column]."""

    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    pixels: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.pixels = np.zeros((self.height, self.width), dtype=np.uint32)

    def clear(self) -> None:
        self.pixels.fill(0)

    def fill_floor_ceiling(self, ceiling: int, floor: int) -> None:
        """Paint the upper half with the ceiling colour and the lower with the floor."""
        middle = self.height // 2
        self.pixels[:middle] = ceiling & _MASK
        self.pixels[middle:] = floor & _MASK

    def draw_column(self, column: Column, textures: Textures) -> None:
        """Draw one textured wall slice, clipped to the frame."""
        y1 = max(column.top, 0)
        y2 = min(column.bottom, self.height)
        if y2 <= y1 or not 0 <= column.x < self.width:
            return
        texture = textures._texture(column.side)
        tex_height, tex_width = texture.shape
        tex_x, _ = texture_coords(column, y1, tex_width, tex_height)
        rows = np.arange(y1, y2, dtype=np.int64)
        if column.height:
            tex_y = (rows - column.top) * tex_height // column.height
        else:
            tex_y = np.zeros_like(rows)
        index = np.clip(tex_y * tex_width + tex_x, 0, texture.size - 1)
        self.pixels[y1:y2, column.x] = texture.ravel()[index]

    def _fill_square(self, x0: int, y0: int, size: int, color: int) -> None:
        x1, y1 = max(x0, 0), max(y0, 0)
        x2, y2 = min(x0 + size, self.width), min(y0 + size, self.height)
        if x1 < x2 and y1 < y2:
            self.pixels[y1:y2, x1:x2] = color & _MASK

    def draw_cell(self, x: int, y: int, color: int) -> None:
        """Fill the minimap square of map cell (x, y)."""
        self._fill_square(x * MINI_CELL_SIZE, y * MINI_CELL_SIZE,
                          MINI_CELL_SIZE, color)

    def draw_player(self, player: Player, color: int) -> None:
        """Draw the player's marker on the minimap, centred on its position."""
        ratio = CELL_SIZE // MINI_CELL_SIZE
        start_x = _trunc_div(player.x, ratio) - MINI_PLAYER_SIZE // 2
        start_y = _trunc_div(player.y, ratio) - MINI_PLAYER_SIZE // 2
        self._fill_square(start_x, start_y, MINI_PLAYER_SIZE, color)

    def draw_minimap(self, grid: Sequence[str], player: Player) -> None:
        """Draw every map cell except each row's last, then the player marker."""
        for y, line in enumerate(grid):
            for x, char in enumerate(line[:-1]):
                color = _MINIMAP_COLORS.get(char)
                if color is not None:
                    self.draw_cell(x, y, color)
        self.draw_player(player, MINIMAP_PLAYER_COLOR)