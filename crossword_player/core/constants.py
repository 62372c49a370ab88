"""Shared constants and enumerations for the crossword player."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(str, Enum):
    """Answer directions supported by the grid."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def other(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS

    @property
    def step(self) -> Tuple[int, int]:
        """Unit ``(dx, dy)`` step along this direction."""

        if self is Direction.ACROSS:
            return (1, 0)
        return (0, 1)


class Separator(str, Enum):
    """Breaks rendered inside a compound answer."""

    WORD = ","
    HYPHEN = "-"


def along(x: int, y: int, direction: Direction) -> int:
    """Return the coordinate that varies when moving in ``direction``."""

    if direction is Direction.ACROSS:
        return x
    return y


# Two-step confirmation window for destructive controls, in seconds.
CONFIRM_TIMEOUT = 2.0

CELL_VALUE_PATTERN = r"[A-Za-zÀ-ÿ0-9]"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper, indexed by column then row."""

    cols: int
    rows: int

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows
