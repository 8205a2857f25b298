"""Level map files: enemy paths, tower spots and the tile grid."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from itertools import pairwise
from os import PathLike
from pathlib import Path
from typing import Iterator

from .positions import Point, TowerPosition

GRID_WIDTH = 12
GRID_HEIGHT = 8


class MapFormatError(ValueError):
    """A map file does not follow the expected layout."""


class Tile(enum.Enum):
    GRASS = "grass"
    ROAD = "road"
    TOWER = "tower"


@dataclass
class GamePath:
    """A road from start to end; ``waypoints`` includes both ends."""

    start: Point
    end: Point
    waypoints: list[Point] = field(default_factory=list)


@dataclass
class MapData:
    paths: list[GamePath] = field(default_factory=list)
    tower_positions: list[TowerPosition] = field(default_factory=list)


def _number(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise MapFormatError(f"not a number: {token!r}") from None


def _cell(x: str, y: str) -> Point:
    return Point(_number(x) - 1, _number(y) - 1)


def _point_list(parts: list[str]) -> list[Point]:
    xs, ys = parts[1::3], parts[2::3]
    if len(xs) != len(ys):
        raise MapFormatError(f"incomplete coordinate pair in {' '.join(parts)!r}")
    return [_cell(x, y) for x, y in zip(xs, ys)]


def _expect(lines: Iterator[str], keyword: str) -> list[str]:
    line = next(lines, None)
    if line is None:
        raise MapFormatError(f"expected {keyword}, found end of file")
    parts = line.split(" ")
    if parts[0] != keyword:
        raise MapFormatError(f"expected {keyword}, found {line!r}")
    return parts


def _single_point(parts: list[str]) -> Point:
    if len(parts) < 3:
        raise MapFormatError(f"{parts[0]} needs two coordinates")
    return _cell(parts[1], parts[2])


def parse_map(text: str) -> MapData:
    """Parse a map description; coordinates in the text count from 1."""
    data = MapData()
    lines = iter(text.splitlines())
    for line in lines:
        parts = line.split(" ")
        if parts[0] == "PATH":
            start = _single_point(_expect(lines, "START"))
            middle = _point_list(_expect(lines, "INFPO"))
            end = _single_point(_expect(lines, "END"))
            data.paths.append(GamePath(start, end, [start, *middle, end]))
        elif parts[0] == "TOWERPOS":
            data.tower_positions.extend(TowerPosition(p) for p in _point_list(parts))
    return data


def load_map(path: str | PathLike[str]) -> MapData:
    return parse_map(Path(path).read_text(encoding="utf-8"))


def _mark(grid: list[list[Tile]], point: Point, tile: Tile) -> None:
    if not (0 <= point.x < len(grid) and 0 <= point.y < len(grid[0])):
        raise MapFormatError(f"cell {point} lies outside the grid")
    grid[point.x][point.y] = tile


def build_grid(map_data: MapData, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> list[list[Tile]]:
    """Return ``grid[x][y]`` with roads along straight path segments and tower spots."""
    grid = [[Tile.GRASS] * height for _ in range(width)]
    for game_path in map_data.paths:
        for a, b in pairwise(game_path.waypoints):
            if a.x == b.x:
                for y in range(min(a.y, b.y), max(a.y, b.y) + 1):
                    _mark(grid, Point(a.x, y), Tile.ROAD)
            elif a.y == b.y:
                for x in range(min(a.x, b.x), max(a.x, b.x) + 1):
                    _mark(grid, Point(x, a.y), Tile.ROAD)
    for spot in map_data.tower_positions:
        _mark(grid, spot.pos, Tile.TOWER)
    return grid