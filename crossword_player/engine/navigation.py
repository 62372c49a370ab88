"""Focus tracking and keyboard navigation over the grid.

The navigator is a two-state machine: unfocused, or focused on a cell with an
active direction. Every transition funnels through :meth:`Navigator.focus_clue`,
which validates that a clue exists at the target before changing state and
notifies listeners with the resolved clue id.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from ..core.constants import Direction
from ..core.models import Clue, FocusChange, Position
from ..utils.logger import get_logger
from .clue_index import (
    ClueIndex,
    entry_has_cell,
    is_first_cell_in_clue,
    is_last_cell_in_clue,
    last_cell_in_clue,
)
from .grid import PlayGrid


LOGGER = get_logger(__name__)

FocusListener = Callable[[FocusChange], None]


@dataclass
class FocusState:
    """The focused cell and active direction, both None while unfocused."""

    cell: Optional[Position] = None
    direction: Optional[Direction] = None

    @property
    def is_focused(self) -> bool:
        return self.cell is not None and self.direction is not None


@dataclass
class SessionContext:
    """Caller-owned state threaded through navigation calls.

    ``return_position`` remembers where the caller's view was before a clue
    list activation moved it, so it can be restored once input loses focus.
    """

    return_position: Optional[float] = None

    def take_return_position(self) -> Optional[float]:
        position, self.return_position = self.return_position, None
        return position


class Navigator:
    """Owns the focus state and answers every navigation request."""

    def __init__(
        self,
        grid: PlayGrid,
        index: ClueIndex,
        state: Optional[FocusState] = None,
        context: Optional[SessionContext] = None,
    ) -> None:
        self.grid = grid
        self.index = index
        self.state = state or FocusState()
        self.context = context or SessionContext()
        self._listeners: List[FocusListener] = []

    def add_listener(self, listener: FocusListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------
    def clue_in_focus(self) -> Optional[Clue]:
        if self.state.cell is None:
            return None
        return self.index.clues_for(*self.state.cell).get(self.state.direction)

    def is_in_focus_group(self, clue: Clue) -> bool:
        focused = self.clue_in_focus()
        return focused is not None and clue.id in focused.group

    def focus_group(self) -> List[Clue]:
        """Every clue of the focused group, in puzzle order."""

        return [clue for clue in self.index.entries if self.is_in_focus_group(clue)]

    def is_highlighted(self, x: int, y: int) -> bool:
        focused = self.clue_in_focus()
        if focused is None:
            return False
        return any(entry_has_cell(clue, x, y) for clue in self.index.group_entries(focused))

    # ------------------------------------------------------------------
    # Focus primitive
    # ------------------------------------------------------------------
    def focus_clue(self, x: int, y: int, direction: Direction) -> bool:
        clue = self.index.clues_for(x, y).get(direction)
        if clue is None:
            LOGGER.debug("No %s clue at (%s,%s); focus unchanged", direction.value, x, y)
            return False

        self.state.cell = Position(x, y)
        self.state.direction = direction
        LOGGER.debug("Focus on (%s,%s) %s, clue %s", x, y, direction.value, clue.id)
        change = FocusChange(x=x, y=y, clue_id=clue.id)
        for listener in self._listeners:
            listener(change)
        return True

    def focus_first_cell_in_clue(self, clue: Clue) -> bool:
        return self.focus_clue(clue.position.x, clue.position.y, clue.direction)

    def focus_clue_by_id(self, clue_id: str, return_position: Optional[float] = None) -> bool:
        clue = self.index.get(clue_id)
        if clue is None:
            LOGGER.debug("Unknown clue id %r", clue_id)
            return False
        if return_position is not None:
            self.context.return_position = return_position
        return self.focus_first_cell_in_clue(clue)

    # ------------------------------------------------------------------
    # Pointer selection
    # ------------------------------------------------------------------
    def select(self, x: int, y: int) -> bool:
        """Handle direct activation of the cell at ``(x, y)``."""

        clues = self.index.clues_for(x, y)
        if not clues:
            return False

        target = Position(x, y)
        direction = self.state.direction
        if target == self.state.cell and direction is not None:
            if clues.get(direction.other) is not None:
                return self.focus_clue(x, y, direction.other)
            return False

        focused = self.clue_in_focus()
        if focused is not None and direction is not None and entry_has_cell(focused, x, y):
            return self.focus_clue(x, y, direction)

        def starts_here(clue: Optional[Clue]) -> bool:
            return clue is not None and clue.position == target

        if not starts_here(clues.across) and starts_here(clues.down):
            preferred = Direction.DOWN
        elif clues.across is not None:
            preferred = Direction.ACROSS
        else:
            preferred = Direction.DOWN
        return self.focus_clue(x, y, preferred)

    def reselect(self) -> bool:
        """Activate the focused cell again, toggling its direction."""

        if not self.state.is_focused:
            return False
        return self.select(*self.state.cell)

    # ------------------------------------------------------------------
    # Relative movement
    # ------------------------------------------------------------------
    def _find_next_editable(self, dx: int, dy: int) -> Optional[Position]:
        if self.state.cell is None:
            return None
        x, y = self.state.cell
        cols, rows = self.grid.bounds.cols, self.grid.bounds.rows
        steps = cols if dx else rows
        for _ in range(steps):
            # Python's modulo wraps -1 to max - 1 and max to 0.
            x, y = (x + dx) % cols, (y + dy) % rows
            if self.grid.cell(x, y).is_editable:
                return Position(x, y)
        return None

    def move_focus(self, dx: int, dy: int) -> bool:
        """Arrow-key move along one axis, wrapping and skipping block cells."""

        if (dx, dy) not in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            LOGGER.debug("Ignoring invalid move delta (%s,%s)", dx, dy)
            return False
        cell = self._find_next_editable(dx, dy)
        if cell is None:
            return False

        clues = self.index.clues_for(*cell)
        if (dx != 0 and clues.across is not None) or (dy != 0 and clues.down is None):
            direction = Direction.ACROSS
        else:
            direction = Direction.DOWN
        return self.focus_clue(cell.x, cell.y, direction)

    def _move_along(self, clue: Clue, amount: int) -> bool:
        dx, dy = clue.direction.step
        return self.move_focus(dx * amount, dy * amount)

    def focus_next(self) -> bool:
        """Advance one cell, continuing into the next clue of the group."""

        clue = self.clue_in_focus()
        if clue is None:
            return False
        if is_last_cell_in_clue(self.state.cell, clue):
            following = self.index.next_clue_in_group(clue)
            if following is None:
                return False
            return self.focus_first_cell_in_clue(following)
        return self._move_along(clue, 1)

    def focus_previous(self) -> bool:
        """Retreat one cell, continuing into the previous clue of the group."""

        clue = self.clue_in_focus()
        if clue is None:
            return False
        if is_first_cell_in_clue(self.state.cell, clue):
            preceding = self.index.previous_clue_in_group(clue)
            if preceding is None:
                return False
            end = last_cell_in_clue(preceding)
            return self.focus_clue(end.x, end.y, preceding.direction)
        return self._move_along(clue, -1)

    # ------------------------------------------------------------------
    # Clue list traversal
    # ------------------------------------------------------------------
    def _focus_relative_clue(self, offset: int) -> bool:
        clue = self.clue_in_focus()
        if clue is None:
            return False
        position = self.index.index_of(clue)
        entries = self.index.entries
        return self.focus_first_cell_in_clue(entries[(position + offset) % len(entries)])

    def focus_next_clue(self) -> bool:
        return self._focus_relative_clue(1)

    def focus_previous_clue(self) -> bool:
        return self._focus_relative_clue(-1)
