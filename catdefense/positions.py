"""Points on the playfield and the spots where towers may stand."""

from __future__ import annotations

import math
from dataclasses import dataclass

TILE_SIZE = 100


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class TowerPosition:
    """A grid cell that can hold one tower."""

    pos: Point
    occupied: bool = False

    def center(self) -> Point:
        """Pixel centre of the cell."""
        return Point(self.pos.x * TILE_SIZE + TILE_SIZE // 2, self.pos.y * TILE_SIZE + TILE_SIZE // 2)

    def contains(self, point: Point) -> bool:
        """Whether a pixel lies strictly inside the cell."""
        left, top = self.pos.x * TILE_SIZE, self.pos.y * TILE_SIZE
        return left < point.x < left + TILE_SIZE and top < point.y < top + TILE_SIZE