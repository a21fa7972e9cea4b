"""Validation of the map grid: allowed characters, start position, shape."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .constants import CELL_SIZE

_PLAYER_ANGLES = {
    "N": 3 * math.pi / 2,
    "S": math.pi / 2,
    "E": 2 * math.pi,
    "W": math.pi,
}
_ALLOWED = frozenset("NESW1 0")
_FILLABLE = frozenset("01NSWE")


class MapError(ValueError):
    """Raised when the map grid breaks one of the scene rules."""


@dataclass(frozen=True)
class StartPosition:
    """The cell holding the player's start marker and the facing it names."""

    row: int
    col: int
    direction: str

    @property
    def angle(self) -> float:
        return _PLAYER_ANGLES[self.direction]

    @property
    def x(self) -> int:
        return CELL_SIZE * self.col + CELL_SIZE // 2

    @property
    def y(self) -> int:
        return CELL_SIZE * self.row + CELL_SIZE // 2


def find_players(grid: Sequence[str]) -> list[StartPosition]:
    """Return every start marker in the grid, in row-major order."""
    return [
        StartPosition(row, col, char)
        for row, line in enumerate(grid)
        for col, char in enumerate(line)
        if char in _PLAYER_ANGLES
    ]


def check_characters(grid: Sequence[str]) -> None:
    """Raise MapError if the grid holds anything but walls, floor, spaces and markers."""
    for line in grid:
        if any(char not in _ALLOWED for char in line):
            raise MapError(
                "Forbidden character in the map or textures are after the map"
            )


def player_start(grid: Sequence[str]) -> StartPosition:
    """Return the single start position, raising MapError unless there is exactly one."""
    players = find_players(grid)
    if len(players) != 1:
        raise MapError("The map must contain 1 player starting position")
    return players[0]


def is_one_piece(grid: Sequence[str], start: StartPosition) -> bool:
    """Tell whether every non-space cell is reachable from *start*."""
    cells = [list(line) for line in grid]
    pending = [(start.row, start.col)]
    while pending:
        row, col = pending.pop()
        if not (0 <= row < len(cells) and 0 <= col < len(cells[row])):
            continue
        if cells[row][col] in _FILLABLE:
            cells[row][col] = "+"
            pending.extend(
                ((row + 1, col), (row - 1, col), (row, col + 1), (row, col - 1))
            )
    return all(char in " +" for line in cells for char in line)


def _border_sealed(cells: list[list[str]]) -> bool:
    if "0" in cells[0] or "0" in cells[-1]:
        return False
    for line in cells:
        if line[:1] == ["0"] or (len(line) >= 2 and line[-2] == "0"):
            return False
    return True


def _touches_floor(cells: list[list[str]], row: int, col: int) -> bool:
    for d_row in (-1, 0, 1):
        for d_col in (-1, 0, 1):
            if d_row == 0 and d_col == 0:
                continue
            r, c = row + d_row, col + d_col
            if 0 <= r < len(cells) and 0 <= c < len(cells[r]) and cells[r][c] == "0":
                return True
    return False


def is_closed(grid: Sequence[str], start: StartPosition) -> bool:
    """Tell whether the floor, start cell included, is sealed off by walls."""
    cells = [list(line) for line in grid]
    cells[start.row][start.col] = "0"
    if not _border_sealed(cells):
        return False
    return not any(
        char == " " and _touches_floor(cells, row, col)
        for row, line in enumerate(cells)
        for col, char in enumerate(line)
    )


def check_map(grid: Sequence[str]) -> StartPosition:
    """Run every map check and return the player's start position."""
    check_characters(grid)
    start = player_start(grid)
    if not is_one_piece(grid, start):
        raise MapError("Map is fragmented")
    if not is_closed(grid, start):
        raise MapError("Map is not closed")
    return start