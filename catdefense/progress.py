"""Which levels the player has opened, kept in a small text file."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Iterable

LEVEL_COUNT = 6


def parse_levels(text: str) -> frozenset[int]:
    """Read the level numbers from the first line, ignoring anything invalid."""
    first_line = text.splitlines()[0] if text else ""
    levels = set()
    for token in first_line.split(" "):
        try:
            number = int(token)
        except ValueError:
            continue
        if 1 <= number <= LEVEL_COUNT:
            levels.add(number)
    return frozenset(levels)


def format_levels(unlocked: Iterable[int]) -> str:
    """Write open levels in ascending order, each followed by a space."""
    opened = set(unlocked)
    return "".join(f"{level} " for level in range(1, LEVEL_COUNT + 1) if level in opened)


@dataclass
class LevelProgress:
    unlocked: set[int] = field(default_factory=set)

    @classmethod
    def load(cls, path: str | PathLike[str]) -> LevelProgress:
        """Read progress; a missing file means only the first level is open."""
        file = Path(path)
        if not file.exists():
            return cls({1})
        return cls(set(parse_levels(file.read_text(encoding="utf-8"))))

    def save(self, path: str | PathLike[str]) -> None:
        Path(path).write_text(format_levels(self.unlocked), encoding="utf-8")

    def unlock(self, level: int) -> None:
        if not 1 <= level <= LEVEL_COUNT:
            raise ValueError(f"no such level: {level}")
        self.unlocked.add(level)

    def is_unlocked(self, level: int) -> bool:
        return level in self.unlocked