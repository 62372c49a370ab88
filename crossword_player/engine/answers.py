"""Character entry, answer checking and clearing."""

from __future__ import annotations

import re
from typing import Dict, List

from ..core.constants import CELL_VALUE_PATTERN
from ..core.models import Cell, Clue, Position
from ..utils.logger import get_logger
from .clue_index import ClueIndex, cells_for_entry, clue_is_in_group, clues_are_in_group
from .grid import PlayGrid
from .navigation import Navigator


LOGGER = get_logger(__name__)

_VALUE_RE = re.compile(CELL_VALUE_PATTERN)


def has_been_answered(grid: PlayGrid, clue: Clue) -> bool:
    """True when every cell of ``clue`` holds exactly one character."""

    return all(len(grid.value(x, y)) == 1 for x, y in cells_for_entry(clue))


class AnswerEngine:
    """Applies entry, check and clear operations to the grid."""

    def __init__(self, grid: PlayGrid, index: ClueIndex, navigator: Navigator) -> None:
        self.grid = grid
        self.index = index
        self.navigator = navigator

    # ------------------------------------------------------------------
    # Entry
    # ------------------------------------------------------------------
    def insert_character(self, character: str) -> bool:
        cell = self.navigator.state.cell
        if cell is None:
            return False
        upper = character.upper() if isinstance(character, str) else ""
        if not _VALUE_RE.fullmatch(upper):
            LOGGER.debug("Rejected input %r", character)
            return False
        self.grid.set_value(cell.x, cell.y, upper)
        self.navigator.focus_next()
        return True

    def delete_at_focus(self) -> bool:
        """Clear the focused cell, or step back if it is already empty.

        Returns True when a cell value was cleared.
        """

        cell = self.navigator.state.cell
        if cell is None:
            return False
        if self.grid.cell(*cell).is_empty():
            self.navigator.focus_previous()
            return False
        self.grid.set_value(cell.x, cell.y, "")
        return True

    # ------------------------------------------------------------------
    # Checking
    # ------------------------------------------------------------------
    def check_clue(self, clue: Clue) -> List[Position]:
        """Blank and flag every filled cell that disagrees with the solution."""

        if not clue.solution:
            return []
        bad_cells = [
            position
            for position, expected in zip(cells_for_entry(clue), clue.solution)
            if len(self.grid.value(*position)) == 1 and self.grid.value(*position) != expected
        ]
        for x, y in bad_cells:
            self.grid.set_value(x, y, "", error=True)
        if bad_cells:
            LOGGER.debug("Clue %s: %s incorrect cells cleared", clue.id, len(bad_cells))
        return bad_cells

    def check_all(self) -> List[Position]:
        errors: List[Position] = []
        for clue in self.index.entries:
            errors.extend(self.check_clue(clue))
        LOGGER.info("Checked all clues: %s errors", len(errors))
        return errors

    def check_focus_group(self) -> List[Position]:
        errors: List[Position] = []
        for clue in self.navigator.focus_group():
            errors.extend(self.check_clue(clue))
        return errors

    # ------------------------------------------------------------------
    # Clearing
    # ------------------------------------------------------------------
    def _clearable_cells_for_entry(self, entry: Clue) -> List[Position]:
        crossing_direction = entry.direction.other
        clearable: List[Position] = []
        for cell in cells_for_entry(entry):
            crossing = self.index.clues_for(*cell).get(crossing_direction)
            if (
                crossing is None
                or clues_are_in_group(entry, crossing)
                or not has_been_answered(self.grid, crossing)
            ):
                clearable.append(cell)
        return clearable

    def clearable_cells_for_clue(self, clue: Clue) -> List[Position]:
        """Cells of ``clue`` (and its group) that can be blanked safely.

        A cell shared with an answered crossing clue from another group is
        kept, so completed answers are not lost as a side effect.
        """

        if not clue_is_in_group(clue):
            return self._clearable_cells_for_entry(clue)
        unique: Dict[Position, None] = {}
        for entry in self.index.group_entries(clue):
            for cell in self._clearable_cells_for_entry(entry):
                unique.setdefault(cell, None)
        return list(unique)

    def clear_single(self) -> List[Position]:
        clue = self.navigator.clue_in_focus()
        if clue is None:
            return []
        targets = set(self.clearable_cells_for_clue(clue))

        def blank(cell: Cell, x: int, y: int):
            return "" if (x, y) in targets else None

        changed = self.grid.map_cells(blank)
        LOGGER.info("Cleared %s cells of %s", changed, clue.id)
        return sorted(targets)

    def clear_all(self) -> int:
        changed = self.grid.map_cells(lambda cell, x, y: "")
        LOGGER.info("Cleared %s cells", changed)
        return changed

    def has_been_answered(self, clue: Clue) -> bool:
        return has_been_answered(self.grid, clue)
