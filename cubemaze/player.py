"""The player: position, facing, movement with collisions, and turning."""

from __future__ import annotations

import math
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass
from enum import IntEnum

from .constants import (
    CELL_SIZE,
    FOV_ANGLE,
    KEY_A,
    KEY_D,
    KEY_ESC,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_W,
    PLAYER_SIZE,
    SCREEN_WIDTH,
    STEP_SIZE,
    TURN_ANGLE,
)
from .validate import StartPosition


class Key(IntEnum):
    """Key codes the game reacts to."""

    W = KEY_W
    S = KEY_S
    A = KEY_A
    D = KEY_D
    LEFT = KEY_LEFT
    RIGHT = KEY_RIGHT
    ESC = KEY_ESC


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def _round(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _char_at(grid: Sequence[str], row: int, col: int) -> str:
    line = grid[row]
    return line[col] if col < len(line) else ""


def _set_cell(grid: MutableSequence[str], row: int, col: int, char: str) -> None:
    line = grid[row]
    grid[row] = line[:col] + char + line[col + 1:]


def is_valid_move(grid: Sequence[str], x: int, y: int) -> bool:
    """Tell whether a player centred on (x, y) keeps every corner out of walls."""
    rows = len(grid)
    columns = max((len(line) for line in grid), default=0)
    half = PLAYER_SIZE // 2
    corners = ((x - half, y - half), (x + half, y - half),
               (x + half, y + half), (x - half, y + half))
    for corner_x, corner_y in corners:
        col = _trunc_div(corner_x, CELL_SIZE)
        row = _trunc_div(corner_y, CELL_SIZE)
        if not (0 <= row < rows and 0 <= col < columns):
            return False
        if _char_at(grid, row, col) == "1":
            return False
    return True


def mouse_turn(x: int, y: int) -> int:
    """Turn direction for a pointer position: -1 left third, 1 right third, else 0."""
    if x < 0 or y < 0:
        return 0
    third = SCREEN_WIDTH // 3
    if x < third:
        return -1
    if x > 2 * third:
        return 1
    return 0


@dataclass
class Player:
    """Pixel position, map cell, facing angle and field of view."""

    x: int
    y: int
    row: int
    col: int
    angle: float
    fov: float = FOV_ANGLE

    @classmethod
    def from_start(cls, start: StartPosition) -> Player:
        """Place a player at the centre of the start cell, facing its direction."""
        return cls(x=start.x, y=start.y, row=start.row, col=start.col,
                   angle=start.angle)

    def move(self, grid: MutableSequence[str], key: int) -> bool:
        """Step for a movement key; marks the grid and returns whether it moved."""
        dx = _round(math.cos(self.angle) * STEP_SIZE)
        dy = _round(math.sin(self.angle) * STEP_SIZE)
        offsets = {
            Key.W: (dx, dy),
            Key.S: (-dx, -dy),
            Key.A: (dy, -dx),
            Key.D: (-dy, dx),
        }
        offset = offsets.get(key)
        if offset is None:
            return False
        new_x, new_y = self.x + offset[0], self.y + offset[1]
        if not is_valid_move(grid, new_x, new_y):
            return False
        new_row = _trunc_div(new_y, CELL_SIZE)
        new_col = _trunc_div(new_x, CELL_SIZE)
        _set_cell(grid, self.row, self.col, "0")
        _set_cell(grid, new_row, new_col, "N")
        self.x, self.y = new_x, new_y
        self.row, self.col = new_row, new_col
        return True

    def turn_left(self) -> None:
        self.angle -= TURN_ANGLE
        if self.angle < 0:
            self.angle += 2 * math.pi

    def turn_right(self) -> None:
        self.angle += TURN_ANGLE
        if self.angle >= 2 * math.pi:
            self.angle -= 2 * math.pi

    def turn(self, key: int) -> None:
        """Turn for an arrow key; other keys are ignored."""
        if key == Key.LEFT:
            self.turn_left()
        elif key == Key.RIGHT:
            self.turn_right()