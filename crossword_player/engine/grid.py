"""Grid representation and the single cell-write primitive."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from ..core.constants import Bounds
from ..core.exceptions import PuzzleConfigError
from ..core.models import Cell, Clue, Move
from ..utils.logger import get_logger
from .clue_index import cells_for_entry


LOGGER = get_logger(__name__)

MoveListener = Callable[[Move], None]
CellMapper = Callable[[Cell, int, int], Optional[str]]
GridValues = List[List[str]]


class PlayGrid:
    """Editable cell matrix indexed by column then row.

    Cells are updated in place. :meth:`set_value` is the only writer of cell
    values and fires each registered listener once per changed cell.
    """

    def __init__(self, cols: int, rows: int) -> None:
        if cols <= 0 or rows <= 0:
            raise PuzzleConfigError(f"Grid dimensions must be positive, got {cols}x{rows}")
        self.bounds = Bounds(cols=cols, rows=rows)
        self.cells: List[List[Cell]] = [[Cell() for _ in range(rows)] for _ in range(cols)]
        self._listeners: List[MoveListener] = []

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def build(
        cls,
        rows: int,
        cols: int,
        entries: Sequence[Clue],
        saved_values: Optional[Sequence[Sequence[str]]] = None,
    ) -> "PlayGrid":
        """Materialize the grid for ``entries``, restoring ``saved_values`` if given."""

        grid = cls(cols=cols, rows=rows)
        for clue in entries:
            grid._mark_clue(clue)
        if saved_values is not None:
            grid._restore(saved_values)
        LOGGER.debug("Built %sx%s grid for %s clues", cols, rows, len(entries))
        return grid

    def _mark_clue(self, clue: Clue) -> None:
        if clue.length <= 0:
            LOGGER.error("Clue %s has non-positive length %s", clue.id, clue.length)
            raise PuzzleConfigError(f"Clue {clue.id} has non-positive length {clue.length}")
        cells = cells_for_entry(clue)
        for x, y in cells:
            if not self.bounds.contains(x, y):
                LOGGER.error("Clue %s leaves the grid at %s", clue.id, (x, y))
                raise PuzzleConfigError(f"Clue {clue.id} extends outside grid at {(x, y)}")
            self.cells[x][y].is_editable = True

        start = self.cells[clue.position.x][clue.position.y]
        if start.number is None:
            start.number = clue.number
        elif start.number != clue.number:
            LOGGER.warning(
                "Cell %s starts clues numbered %s and %s; keeping the smaller",
                tuple(clue.position),
                start.number,
                clue.number,
            )
            start.number = min(start.number, clue.number)

    def _restore(self, saved_values: Sequence[Sequence[str]]) -> None:
        if len(saved_values) != self.bounds.cols or any(
            len(column) != self.bounds.rows for column in saved_values
        ):
            LOGGER.warning("Saved grid shape does not match %sx%s grid", self.bounds.cols, self.bounds.rows)
        for x, column in enumerate(saved_values[: self.bounds.cols]):
            for y, value in enumerate(column[: self.bounds.rows]):
                cell = self.cells[x][y]
                if cell.is_editable and isinstance(value, str) and len(value) == 1:
                    cell.value = value

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def add_listener(self, listener: MoveListener) -> None:
        self._listeners.append(listener)

    def set_value(self, x: int, y: int, value: str, *, error: bool = False) -> bool:
        """Write ``value`` at ``(x, y)``, resetting the error flag to ``error``.

        Returns True when the stored value changed.
        """

        cell = self.cells[x][y]
        previous = cell.value
        cell.value = value
        cell.is_error = error
        if previous == value:
            return False
        LOGGER.debug("Cell (%s,%s): %r -> %r", x, y, previous, value)
        move = Move(x=x, y=y, value=value, previous_value=previous)
        for listener in self._listeners:
            listener(move)
        return True

    def map_cells(self, fn: CellMapper) -> int:
        """Apply ``fn(cell, x, y)`` to every cell.

        ``fn`` returns the new value for the cell, or None to leave it alone.
        Writes go through :meth:`set_value`; the number of changed cells is
        returned.
        """

        changed = 0
        for x, column in enumerate(self.cells):
            for y, cell in enumerate(column):
                value = fn(cell, x, y)
                if value is not None and self.set_value(x, y, value):
                    changed += 1
        return changed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, x: int, y: int) -> Cell:
        return self.cells[x][y]

    def value(self, x: int, y: int) -> str:
        return self.cells[x][y].value

    def values(self) -> GridValues:
        """Rectangular value array, column then row, as handed to ``save``."""

        return [[cell.value for cell in column] for column in self.cells]
