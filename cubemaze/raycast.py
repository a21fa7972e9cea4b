"""Grid ray casting: one ray per screen column, walls found by cell stepping."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from .constants import CELL_SIZE, SCREEN_HEIGHT, SCREEN_WIDTH

if TYPE_CHECKING:
    from .player import Player

INT_MAX = 2**31 - 1
_NUDGE = 0.01


class WallSide(Enum):
    """The face of a wall block that a ray hit."""

    NORTH = "north"
    SOUTH = "south"
    WEST = "west"
    EAST = "east"


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // abs(divisor)
    return quotient if (value >= 0) == (divisor > 0) else -quotient


def _c_round(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _cell(coord: float) -> int:
    if not math.isfinite(coord):
        return -1
    return int(coord / CELL_SIZE)


def _step_length(x_step: float, y_step: float) -> float:
    length = math.hypot(x_step, y_step)
    return _c_round(length) if math.isfinite(length) else math.inf


def ray_directions(angle: float) -> tuple[int, int]:
    """Return the (x, y) stepping directions, each 1 or -1, for a ray angle."""
    y_dir = 1 if (0 < angle < math.pi) or angle > 2 * math.pi else -1
    x_dir = -1 if math.pi / 2 < angle < 3 * math.pi / 2 else 1
    return x_dir, y_dir


@dataclass
class Ray:
    """A ray travelling across the grid from the player's position."""

    angle: float
    x: float
    y: float
    row: int
    col: int
    x_dir: int = 0
    y_dir: int = 0
    x_step: float = 0.0
    y_step: float = 0.0

    def step_horizontal(self) -> float:
        """Advance to the next horizontal grid line; return the rounded step length."""
        self.row += self.y_dir
        border = self.row * CELL_SIZE if self.y_dir == 1 else (self.row + 1) * CELL_SIZE
        self.y_step = abs(border - self.y)
        slope = abs(math.tan(self.angle))
        self.x_step = self.y_step / slope if slope else math.inf
        self.y = border
        if self.angle:
            self.x += self.x_dir * self.x_step
        self.col = _cell(self.x + _NUDGE * self.x_dir)
        return _step_length(self.x_step, self.y_step)

    def step_vertical(self) -> float:
        """Advance to the next vertical grid line; return the rounded step length."""
        self.col += self.x_dir
        border = self.col * CELL_SIZE if self.x_dir == 1 else (self.col + 1) * CELL_SIZE
        self.x_step = abs(border - self.x)
        self.y_step = self.x_step * abs(math.tan(self.angle))
        self.x = border
        if self.angle:
            self.y += self.y_dir * self.y_step
        self.row = _cell(self.y + _NUDGE * self.y_dir)
        return _step_length(self.x_step, self.y_step)


@dataclass(frozen=True)
class Column:
    """The wall slice seen by one screen column."""

    x: int
    top: int
    bottom: int
    height: int
    distance: int
    offset_x: int
    side: WallSide
    hit_horizontal: bool


def hit_test(grid: Sequence[str], row: int, col: int) -> int:
    """Return -1 outside the map, 1 on a wall cell and 0 elsewhere."""
    columns = max((len(line) for line in grid), default=0)
    if not (0 <= row < len(grid) and 0 <= col < columns):
        return -1
    line = grid[row]
    return 1 if col < len(line) and line[col] == "1" else 0


def _march(grid: Sequence[str], ray: Ray, step: Callable[[], float]) -> None:
    while True:
        step()
        if hit_test(grid, ray.row, ray.col):
            return


def _corrected_distance(ray: Ray, player: Player) -> int:
    length = math.hypot(ray.x - player.x, ray.y - player.y)
    value = abs(length * math.cos(player.angle - ray.angle))
    if not math.isfinite(value):
        return INT_MAX
    distance = _c_round(value)
    return INT_MAX if distance > INT_MAX else distance


def _offset(coord: float) -> int:
    if not math.isfinite(coord):
        return 0
    return int(math.fmod(int(coord), CELL_SIZE))


def _wall_side(x_dir: int, y_dir: int, hit_horizontal: bool) -> WallSide:
    if hit_horizontal:
        return WallSide.SOUTH if y_dir == 1 else WallSide.NORTH
    return WallSide.EAST if x_dir == 1 else WallSide.WEST


def _cast(grid: Sequence[str], player: Player, index: int,
          previous_hit: bool) -> Column:
    first_angle = player.angle - math.pi / 6
    angle = first_angle + (player.fov * index) / SCREEN_WIDTH
    x_dir, y_dir = ray_directions(angle)

    def start() -> Ray:
        return Ray(angle=angle, x=float(player.x), y=float(player.y),
                   row=player.row, col=player.col, x_dir=x_dir, y_dir=y_dir)

    hor, vert = start(), start()
    _march(grid, hor, hor.step_horizontal)
    _march(grid, vert, vert.step_vertical)
    hor_distance = _corrected_distance(hor, player)
    vert_distance = _corrected_distance(vert, player)

    if vert_distance < hor_distance:
        distance, offset, hit_horizontal = vert_distance, _offset(vert.y), False
    elif vert_distance > hor_distance:
        distance, offset, hit_horizontal = hor_distance, _offset(hor.x), True
    else:
        distance, offset, hit_horizontal = vert_distance, 0, previous_hit

    height = SCREEN_HEIGHT * CELL_SIZE // max(distance, 1)
    top = _trunc_div(SCREEN_HEIGHT - height, 2)
    return Column(
        x=index,
        top=top,
        bottom=SCREEN_HEIGHT - top,
        height=height,
        distance=distance,
        offset_x=offset,
        side=_wall_side(x_dir, y_dir, hit_horizontal),
        hit_horizontal=hit_horizontal,
    )


def cast_ray(grid: Sequence[str], player: Player, index: int) -> Column:
    """Cast the ray of screen column *index*; a tie counts as a vertical hit."""
    return _cast(grid, player, index, False)


def cast_all(grid: Sequence[str], player: Player) -> list[Column]:
    """Cast one ray per screen column; ties keep the previous column's wall kind."""
    columns: list[Column] = []
    previous_hit = False
    for index in range(SCREEN_WIDTH):
        column = _cast(grid, player, index, previous_hit)
        previous_hit = column.hit_horizontal
        columns.append(column)
    return columns