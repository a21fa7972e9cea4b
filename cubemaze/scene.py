"""Reading ``.cub`` scene descriptions: wall textures, colours and the map grid."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

_TEXTURE_IDS = {"NO": "north", "SO": "south", "WE": "west", "EA": "east"}
_COLOUR_IDS = {"F": "floor", "C": "ceiling"}
_HEADER_PREFIXES = ("NO", "SO", "WE", "EA", "C ", "F ")
_DIGITS = re.compile(r"[0-9]+")


class SceneError(ValueError):
    """Raised when a scene file cannot be read or is malformed."""


@dataclass
class Scene:
    """A parsed scene: texture paths, packed colours and the padded map rows."""

    north: str
    south: str
    west: str
    east: str
    floor: int
    ceiling: int
    grid: list[str] = field(default_factory=list)

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def columns(self) -> int:
        return max((len(row) for row in self.grid), default=0)


def check_extension(path: str) -> str:
    """Return *path* if it names a ``.cub`` file, otherwise raise SceneError."""
    if not str(path).endswith(".cub"):
        raise SceneError("Program accepts only .cub files")
    return path


def is_xpm(path: str) -> bool:
    """Tell whether *path* ends with the ``.xpm`` extension."""
    return path.endswith(".xpm")


def rgb_to_int(r: int, g: int, b: int) -> int:
    """Pack channels as 0xTTRRGGBB with the transparency byte set to 255."""
    return 255 << 24 | r << 16 | g << 8 | b


def parse_colour(text: str) -> int:
    """Parse an ``R,G,B`` value into a packed colour.

    Empty fields between commas are skipped; exactly three fields of
    decimal digits, each at most 255, are required.
    """
    if text.endswith("\n"):
        text = text[:-1]
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3 or not all(_DIGITS.fullmatch(part) for part in parts):
        raise SceneError("Wrong colour format")
    r, g, b = (int(part) for part in parts)
    if not all(0 <= channel <= 255 for channel in (r, g, b)):
        raise SceneError("Wrong colour format")
    return rgb_to_int(r, g, b)


def _split_lines(text: str) -> list[str]:
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _is_header(line: str) -> bool:
    return line.startswith("\n") or line.startswith(_HEADER_PREFIXES)


def _map_rows(lines: list[str]) -> list[str]:
    start = 0
    while start < len(lines) and _is_header(lines[start]):
        start += 1
    map_lines = lines[start:]
    columns = max((len(line) for line in map_lines), default=0)
    grid = []
    for line in map_lines:
        if line.startswith("\n"):
            raise SceneError("Empty line in or after the map")
        grid.append(line.ljust(columns).replace("\n", " "))
    return grid


def parse_scene(text: str) -> Scene:
    """Parse the full contents of a scene file."""
    lines = _split_lines(text)
    grid = _map_rows(lines)
    if not lines:
        raise SceneError("Empty file")

    textures: dict[str, str] = {}
    colours: dict[str, int] = {}
    for line in lines:
        ident = line[:2]
        if ident in _TEXTURE_IDS:
            name = _TEXTURE_IDS[ident]
            value = line[2:].lstrip(" ")
            if value.endswith("\n"):
                value = value[:-1]
            if name in textures:
                raise SceneError("Same texture listed more than once")
            if not is_xpm(value):
                raise SceneError("Wrong texture format")
            textures[name] = value
        elif line[:1] in _COLOUR_IDS:
            name = _COLOUR_IDS[line[:1]]
            value = line[1:].lstrip(" ")
            if name in colours:
                raise SceneError("Same colour listed more than once")
            colours[name] = parse_colour(value)

    for name in ("north", "south", "west", "east"):
        if name not in textures:
            raise SceneError(f"No {name} texture")
    for name in ("floor", "ceiling"):
        if name not in colours:
            raise SceneError(f"No {name} colour")

    return Scene(
        north=textures["north"],
        south=textures["south"],
        west=textures["west"],
        east=textures["east"],
        floor=colours["floor"],
        ceiling=colours["ceiling"],
        grid=grid,
    )


def load_scene(path: str | Path) -> Scene:
    """Read and parse the ``.cub`` file at *path*."""
    check_extension(str(path))
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise SceneError("File does not exist") from exc
    return parse_scene(text)