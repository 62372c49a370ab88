"""Data models supporting the crossword player."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple

from .constants import Direction, Separator
from .exceptions import PuzzleLoadError


class Position(NamedTuple):
    """Cell coordinates: ``x`` is the column, ``y`` the row."""

    x: int
    y: int


@dataclass(frozen=True)
class Clue:
    """One across or down answer slot of a puzzle."""

    id: str
    number: int
    human_number: str
    direction: Direction
    position: Position
    length: int
    group: Tuple[str, ...]
    text: str = ""
    separator_locations: Dict[Separator, Tuple[int, ...]] = field(
        default_factory=dict, compare=False, hash=False
    )
    solution: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Clue":
        try:
            position = payload["position"]
            separators = {
                Separator(kind): tuple(int(offset) for offset in offsets)
                for kind, offsets in (payload.get("separatorLocations") or {}).items()
            }
            clue_id = str(payload["id"])
            solution = payload.get("solution")
            return cls(
                id=clue_id,
                number=int(payload["number"]),
                human_number=str(payload.get("humanNumber", payload["number"])),
                direction=Direction(payload["direction"]),
                position=Position(int(position["x"]), int(position["y"])),
                length=int(payload["length"]),
                group=tuple(payload.get("group") or (clue_id,)),
                text=payload.get("clue", ""),
                separator_locations=separators,
                solution=solution.upper() if solution else None,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise PuzzleLoadError(f"Malformed clue entry {payload!r}: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "number": self.number,
            "humanNumber": self.human_number,
            "clue": self.text,
            "direction": self.direction.value,
            "length": self.length,
            "group": list(self.group),
            "position": {"x": self.position.x, "y": self.position.y},
            "separatorLocations": {
                kind.value: list(offsets) for kind, offsets in self.separator_locations.items()
            },
        }
        if self.solution is not None:
            payload["solution"] = self.solution
        return payload


@dataclass
class Cell:
    """Represents a grid cell with its entry state."""

    value: str = ""
    is_editable: bool = False
    is_error: bool = False
    number: Optional[int] = None
    is_highlighted: bool = False
    is_animating: bool = False

    def is_empty(self) -> bool:
        return not self.value


@dataclass(frozen=True)
class Puzzle:
    """A complete puzzle definition: dimensions plus the ordered clue list."""

    id: str
    cols: int
    rows: int
    entries: Tuple[Clue, ...]
    name: str = ""
    crossword_type: str = ""

    @property
    def has_solutions(self) -> bool:
        return bool(self.entries) and self.entries[0].solution is not None

    def entry(self, clue_id: str) -> Optional[Clue]:
        for clue in self.entries:
            if clue.id == clue_id:
                return clue
        return None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Puzzle":
        try:
            dimensions = payload["dimensions"]
            entries = [Clue.from_dict(item) for item in payload["entries"]]
            return cls(
                id=str(payload["id"]),
                cols=int(dimensions["cols"]),
                rows=int(dimensions["rows"]),
                entries=tuple(entries),
                name=payload.get("name", ""),
                crossword_type=payload.get("crosswordType", ""),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise PuzzleLoadError(f"Malformed puzzle definition: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        entries: List[Dict[str, Any]] = [clue.to_dict() for clue in self.entries]
        return {
            "id": self.id,
            "name": self.name,
            "crosswordType": self.crossword_type,
            "dimensions": {"cols": self.cols, "rows": self.rows},
            "entries": entries,
        }


@dataclass(frozen=True)
class Move:
    """A committed change to one cell value."""

    x: int
    y: int
    value: str
    previous_value: str


@dataclass(frozen=True)
class FocusChange:
    """Emitted whenever a clue gains focus."""

    x: int
    y: int
    clue_id: str


@dataclass(frozen=True)
class SeparatorMark:
    """A word or hyphen break drawn before the cell it is keyed on."""

    direction: Direction
    separator: Separator
