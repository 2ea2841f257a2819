"""Reading and validating ``.cub`` scene files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, TextIO

ALLOWED_CHARS = "01NSEW \n"
PLAYER_CHARS = "NSWE"
WALL_CHARS = "1 \n"
TEXTURE_COUNT = 4
CONFIG_LINES = TEXTURE_COUNT + 2
MIN_LINE_WIDTH = 4
MIN_MAP_ROWS = 3

_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class MapError(Exception):
    """Raised when a scene file cannot be opened or is invalid."""


@dataclass(frozen=True)
class TextureSpec:
    """A wall texture entry: its identifier and the image path."""

    name: str
    path: str


@dataclass
class Scene:
    """A parsed and validated scene."""

    textures: tuple[TextureSpec, ...]
    floor: tuple[int, int, int, int]
    ceiling: tuple[int, int, int, int]
    grid: list[str]
    width: int
    start: tuple[int, int, str]

    @property
    def height(self) -> int:
        return len(self.grid)


def read_lines(stream: TextIO) -> Iterator[str]:
    """Yield the lines of ``stream`` with their trailing newlines kept."""
    yield from stream


def _strip_newline(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _parse_texture(line: str) -> TextureSpec:
    content = _strip_newline(line)
    name, sep, path = content.partition(" ")
    if not sep:
        raise MapError(f"Parser failure: malformed texture line {content!r}")
    return TextureSpec(name, path)


def _parse_color(line: str) -> tuple[int, int, int, int]:
    content = _strip_newline(line)
    space = content.find(" ")
    if space < 0:
        raise MapError(f"Parser failure: malformed colour line {content!r}")
    values = [_atoi(part) for part in content[space:].split(",") if part][:4]
    values += [0] * (4 - len(values))
    return (values[0], values[1], values[2], values[3])


def _collect(lines: Iterable[str]) -> tuple[list[str], int]:
    collected: list[str] = []
    width = -1
    for count, line in enumerate(lines):
        width = max(width, len(_strip_newline(line)))
        if width < MIN_LINE_WIDTH:
            raise MapError("Parser failure: line too short")
        if count < CONFIG_LINES and line.startswith(("1", " ")):
            raise MapError("Parser failure: map starts before configuration ends")
        collected.append(line)
    if not collected:
        raise MapError("Parser failure: empty scene")
    return collected, width


def pad_grid(grid: Iterable[str], width: int) -> list[str]:
    """Right-pad every row with spaces to at least ``width`` characters."""
    return [row.ljust(width) for row in grid]


def _is_wall_row(row: str) -> bool:
    return all(ch in WALL_CHARS for ch in row)


def _is_open(grid: list[str], row: int, col: int) -> bool:
    if row < 0 or row >= len(grid) or col < 0 or col >= len(grid[row]):
        return True
    return grid[row][col] == " "


def check_enclosed(grid: list[str]) -> bool:
    """Whether the first and last rows are walls and no floor cell touches empty space.

    A floor cell at the edge of the grid counts as touching empty space.
    """
    if not grid or not _is_wall_row(grid[0]) or not _is_wall_row(grid[-1]):
        return False
    for r, row in enumerate(grid):
        for c, ch in enumerate(row):
            if ch != "0":
                continue
            neighbours = ((r, c + 1), (r, c - 1), (r + 1, c), (r - 1, c))
            if any(_is_open(grid, nr, nc) for nr, nc in neighbours):
                return False
    return True


def check_allowed(grid: Iterable[str]) -> bool:
    """Whether every cell is one of the permitted map characters."""
    return all(ch in ALLOWED_CHARS for row in grid for ch in row)


def find_player(grid: Iterable[str]) -> tuple[int, int, str]:
    """Return ``(column, row, direction)`` of the single player start."""
    starts = [
        (c, r, ch)
        for r, row in enumerate(grid)
        for c, ch in enumerate(row)
        if ch in PLAYER_CHARS
    ]
    if len(starts) != 1:
        raise MapError("Missing required characters.")
    return starts[0]


def parse_scene(lines: Iterable[str]) -> Scene:
    """Parse and validate the lines of a scene description."""
    collected, width = _collect(lines)
    if len(collected) < CONFIG_LINES:
        raise MapError("Parser failure: incomplete configuration")
    textures = tuple(_parse_texture(line) for line in collected[:TEXTURE_COUNT])
    floor = _parse_color(collected[TEXTURE_COUNT])
    ceiling = _parse_color(collected[TEXTURE_COUNT + 1])
    rows = [_strip_newline(line) for line in collected[CONFIG_LINES:]]
    if len(rows) < MIN_MAP_ROWS:
        raise MapError("Parser failure: map too small")
    grid = pad_grid(rows, width)
    if not check_enclosed(grid):
        raise MapError("Map is not enclosed.")
    if not check_allowed(grid):
        raise MapError("Has a character not allowed.")
    start = find_player(grid)
    return Scene(textures, floor, ceiling, grid, width, start)


def load_scene(path: str | Path) -> Scene:
    """Open a ``.cub`` file and parse it into a validated scene."""
    name = str(path)
    if len(name) < 4 or not name.endswith(".cub"):
        raise MapError("Can't open map.")
    try:
        with open(name, encoding="utf-8") as stream:
            return parse_scene(read_lines(stream))
    except OSError as exc:
        raise MapError("Can't open map.") from exc