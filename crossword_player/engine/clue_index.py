"""Cell-to-clue and cell-to-separator lookup tables.

Both tables are keyed canonically on :class:`Position` and built once per
puzzle. Clue geometry helpers live here as well so that navigation and answer
checking share one definition of which cells a clue covers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import Direction, Separator, along
from ..core.exceptions import PuzzleConfigError
from ..core.models import Clue, Position, SeparatorMark
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CluePair:
    """The (at most one) across and down clue passing through a cell."""

    across: Optional[Clue] = None
    down: Optional[Clue] = None

    def get(self, direction: Optional[Direction]) -> Optional[Clue]:
        if direction is Direction.ACROSS:
            return self.across
        if direction is Direction.DOWN:
            return self.down
        return None

    def __bool__(self) -> bool:
        return self.across is not None or self.down is not None


EMPTY_PAIR = CluePair()


# ----------------------------------------------------------------------
# Clue geometry
# ----------------------------------------------------------------------
def cells_for_entry(clue: Clue) -> List[Position]:
    """Cells covered by ``clue``, in answer order."""

    dx, dy = clue.direction.step
    x, y = clue.position
    return [Position(x + dx * i, y + dy * i) for i in range(clue.length)]


def entry_has_cell(clue: Clue, x: int, y: int) -> bool:
    return Position(x, y) in cells_for_entry(clue)


def is_first_cell_in_clue(cell: Position, clue: Clue) -> bool:
    return along(cell.x, cell.y, clue.direction) == along(*clue.position, clue.direction)


def is_last_cell_in_clue(cell: Position, clue: Clue) -> bool:
    start = along(*clue.position, clue.direction)
    return along(cell.x, cell.y, clue.direction) == start + clue.length - 1


def last_cell_in_clue(clue: Clue) -> Position:
    dx, dy = clue.direction.step
    offset = clue.length - 1
    return Position(clue.position.x + dx * offset, clue.position.y + dy * offset)


def clue_is_in_group(clue: Clue) -> bool:
    return len(clue.group) != 1


def clues_are_in_group(clue: Clue, other: Clue) -> bool:
    return clue.id in other.group


# ----------------------------------------------------------------------
# Index builders
# ----------------------------------------------------------------------
def build_clue_map(clues: Iterable[Clue]) -> Dict[Position, CluePair]:
    """Record every clue under each cell it covers, keyed by direction."""

    across: Dict[Position, Clue] = {}
    down: Dict[Position, Clue] = {}
    for clue in clues:
        target = across if clue.direction is Direction.ACROSS else down
        for cell in cells_for_entry(clue):
            target[cell] = clue

    return {
        cell: CluePair(across=across.get(cell), down=down.get(cell))
        for cell in set(across) | set(down)
    }


def _resolve_group_offset(members: Sequence[Clue], offset: int) -> Optional[Tuple[Clue, Position]]:
    cursor = 0
    for member in members:
        if offset < cursor + member.length:
            return member, cells_for_entry(member)[offset - cursor]
        cursor += member.length
    return None


def build_separator_map(clues: Sequence[Clue]) -> Dict[Position, SeparatorMark]:
    """Translate group-wide separator offsets into absolute cell positions.

    Offsets count characters of the whole group's concatenated answer, so the
    lengths of earlier group members are accumulated to find the member (and
    cell) each offset falls in. One mark per cell; the last writer wins.
    """

    by_id = {clue.id: clue for clue in clues}
    mapping: Dict[Position, SeparatorMark] = {}
    for clue in clues:
        members = [by_id[clue_id] for clue_id in clue.group if clue_id in by_id] or [clue]
        for separator, offsets in clue.separator_locations.items():
            for offset in offsets:
                resolved = _resolve_group_offset(members, offset)
                if resolved is None:
                    LOGGER.debug("Separator offset %s lies outside group of %s", offset, clue.id)
                    continue
                member, cell = resolved
                mapping[cell] = SeparatorMark(direction=member.direction, separator=separator)
    return mapping


# ----------------------------------------------------------------------
# Index
# ----------------------------------------------------------------------
class ClueIndex:
    """Read-only lookup from cells to the clues and separators at them."""

    def __init__(self, entries: Sequence[Clue]) -> None:
        self.entries: Tuple[Clue, ...] = tuple(entries)
        self._by_id: Dict[str, Clue] = {}
        for clue in self.entries:
            if clue.id in self._by_id:
                LOGGER.error("Duplicate clue id %s", clue.id)
                raise PuzzleConfigError(f"Duplicate clue id: {clue.id}")
            self._by_id[clue.id] = clue
        self._validate_groups()
        self.clue_map: Mapping[Position, CluePair] = build_clue_map(self.entries)
        self.separator_map: Mapping[Position, SeparatorMark] = build_separator_map(self.entries)

    def _validate_groups(self) -> None:
        for clue in self.entries:
            missing = [clue_id for clue_id in clue.group if clue_id not in self._by_id]
            if missing or clue.id not in clue.group:
                LOGGER.error("Clue %s has an inconsistent group %s", clue.id, clue.group)
                raise PuzzleConfigError(f"Clue {clue.id} references unknown group members {missing}")
            if clue.solution is not None and len(clue.solution) != clue.length:
                raise PuzzleConfigError(
                    f"Solution for {clue.id} has {len(clue.solution)} letters, expected {clue.length}"
                )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def clues_for(self, x: int, y: int) -> CluePair:
        return self.clue_map.get(Position(x, y), EMPTY_PAIR)

    def separator_at(self, x: int, y: int) -> Optional[SeparatorMark]:
        return self.separator_map.get(Position(x, y))

    def get(self, clue_id: str) -> Optional[Clue]:
        return self._by_id.get(clue_id)

    def index_of(self, clue: Clue) -> int:
        for index, entry in enumerate(self.entries):
            if entry.id == clue.id:
                return index
        return -1

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------
    def group_entries(self, clue: Clue) -> List[Clue]:
        return [self._by_id[clue_id] for clue_id in clue.group if clue_id in self._by_id]

    def next_clue_in_group(self, clue: Clue) -> Optional[Clue]:
        position = clue.group.index(clue.id)
        if position + 1 < len(clue.group):
            return self._by_id.get(clue.group[position + 1])
        return None

    def previous_clue_in_group(self, clue: Clue) -> Optional[Clue]:
        position = clue.group.index(clue.id)
        if position > 0:
            return self._by_id.get(clue.group[position - 1])
        return None

    def group_total_length(self, clue: Clue) -> int:
        return sum(entry.length for entry in self.group_entries(clue))

    def group_clue_text(self, clue: Clue) -> str:
        return self.group_entries(clue)[0].text

    def group_human_number(self, clue: Clue) -> str:
        return self.group_entries(clue)[0].human_number

    def group_separators(self, clue: Clue) -> Dict[Separator, List[int]]:
        """Separator offsets within the concatenated group answer, per kind."""

        merged: Dict[Separator, List[int]] = {}
        for separator in Separator:
            offsets = set()
            for entry in self.group_entries(clue):
                offsets.update(entry.separator_locations.get(separator, ()))
            merged[separator] = sorted(offsets)
        return merged
