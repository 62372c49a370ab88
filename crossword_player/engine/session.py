"""Crossword session orchestration.

A session wires one puzzle to its grid, clue index, navigator and answer
engine, persists the grid after every committed mutation, and forwards move
and focus events to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Sequence

from ..core.constants import Direction
from ..core.models import Clue, FocusChange, Move, Puzzle, SeparatorMark
from ..utils.logger import get_logger
from .answers import AnswerEngine
from .clue_index import ClueIndex
from .controls import ConfirmGate, Control, ControlSet, available_controls
from .grid import GridValues, PlayGrid
from .navigation import Navigator, SessionContext


LOGGER = get_logger(__name__)


class GridStateStore(Protocol):
    def load(self, puzzle_id: str) -> Optional[GridValues]:
        """Return saved values for ``puzzle_id`` or None."""

    def save(self, puzzle_id: str, values: GridValues) -> None:
        """Persist the current grid values."""


@dataclass
class SessionConfig:
    """Options for a play session."""

    puzzle_id: Optional[str] = None
    initial_clue_id: Optional[str] = None
    save_after_mutation: bool = True


@dataclass(frozen=True)
class ClueView:
    clue: Clue
    has_answered: bool
    is_selected: bool


class CrosswordSession:
    """Interactive state for one puzzle."""

    def __init__(
        self,
        puzzle: Puzzle,
        store: Optional[GridStateStore] = None,
        config: Optional[SessionConfig] = None,
        *,
        on_move: Optional[Callable[[Move], None]] = None,
        on_focus_clue: Optional[Callable[[FocusChange], None]] = None,
        context: Optional[SessionContext] = None,
    ) -> None:
        self.puzzle = puzzle
        self.config = config or SessionConfig()
        self.puzzle_id = self.config.puzzle_id or puzzle.id
        self.store = store
        self._on_move = on_move
        self.index = ClueIndex(puzzle.entries)

        saved = store.load(self.puzzle_id) if store is not None else None
        self.grid = self._build_grid(saved)
        self.navigator = Navigator(self.grid, self.index, context=context)
        if on_focus_clue is not None:
            self.navigator.add_listener(on_focus_clue)
        self.answers = AnswerEngine(self.grid, self.index, self.navigator)
        self.confirmations: Dict[Control, ConfirmGate] = {
            control: ConfirmGate() for control in Control if control.needs_confirmation
        }
        LOGGER.info(
            "Session ready for %s (%sx%s, %s clues, saved state: %s)",
            self.puzzle_id,
            puzzle.cols,
            puzzle.rows,
            len(puzzle.entries),
            saved is not None,
        )

        if self.config.initial_clue_id:
            self.navigator.focus_clue_by_id(self.config.initial_clue_id)

    def _build_grid(self, values: Optional[Sequence[Sequence[str]]]) -> PlayGrid:
        grid = PlayGrid.build(self.puzzle.rows, self.puzzle.cols, self.puzzle.entries, values)
        if self._on_move is not None:
            grid.add_listener(self._on_move)
        return grid

    def reload(self, values: Optional[Sequence[Sequence[str]]]) -> None:
        """Replace the grid wholesale from ``values``; focus is kept."""

        self.grid = self._build_grid(values)
        self.navigator.grid = self.grid
        self.answers.grid = self.grid

    def _save(self) -> None:
        if self.store is None or not self.config.save_after_mutation:
            return
        try:
            self.store.save(self.puzzle_id, self.grid.values())
        except Exception as exc:
            LOGGER.warning("Saving grid state for %s failed: %s", self.puzzle_id, exc)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def has_solutions(self) -> bool:
        return self.puzzle.has_solutions

    @property
    def context(self) -> SessionContext:
        return self.navigator.context

    def clue_in_focus(self) -> Optional[Clue]:
        return self.navigator.clue_in_focus()

    def is_highlighted(self, x: int, y: int) -> bool:
        return self.navigator.is_highlighted(x, y)

    def separator_at(self, x: int, y: int) -> Optional[SeparatorMark]:
        return self.index.separator_at(x, y)

    def has_been_answered(self, clue: Clue) -> bool:
        return self.answers.has_been_answered(clue)

    def is_complete(self) -> bool:
        return all(self.answers.has_been_answered(clue) for clue in self.puzzle.entries)

    def grid_values(self) -> GridValues:
        return self.grid.values()

    def clues_data(self) -> List[ClueView]:
        return [
            ClueView(
                clue=clue,
                has_answered=self.answers.has_been_answered(clue),
                is_selected=self.navigator.is_in_focus_group(clue),
            )
            for clue in self.puzzle.entries
        ]

    def controls(self) -> ControlSet:
        return available_controls(self.has_solutions, self.clue_in_focus() is not None)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def select(self, x: int, y: int) -> bool:
        return self.navigator.select(x, y)

    def reselect(self) -> bool:
        return self.navigator.reselect()

    def move_focus(self, dx: int, dy: int) -> bool:
        return self.navigator.move_focus(dx, dy)

    def focus_clue(self, x: int, y: int, direction: Direction) -> bool:
        return self.navigator.focus_clue(x, y, direction)

    def activate_clue(self, clue_id: str, return_position: Optional[float] = None) -> bool:
        """Focus the first cell of a clue chosen from the clue list."""

        return self.navigator.focus_clue_by_id(clue_id, return_position=return_position)

    def go_to_return_position(self) -> Optional[float]:
        return self.context.take_return_position()

    # ------------------------------------------------------------------
    # Entry and answers
    # ------------------------------------------------------------------
    def insert_character(self, character: str) -> bool:
        accepted = self.answers.insert_character(character)
        if accepted:
            self._save()
        return accepted

    def delete_at_focus(self) -> bool:
        cleared = self.answers.delete_at_focus()
        if cleared:
            self._save()
        return cleared

    def check(self) -> int:
        errors = self.answers.check_focus_group()
        self._save()
        return len(errors)

    def check_all(self) -> int:
        errors = self.answers.check_all()
        self._save()
        return len(errors)

    def clear_single(self) -> None:
        if self.clue_in_focus() is None:
            return
        self.answers.clear_single()
        self._save()

    def clear_all(self) -> None:
        self.answers.clear_all()
        self._save()

    def press(self, control: Control) -> bool:
        """Trigger ``control`` if offered, gating destructive ones on confirmation.

        Returns True when the action ran.
        """

        if control not in self.controls():
            return False
        gate = self.confirmations.get(control)
        if gate is not None and not gate.press():
            LOGGER.debug("%s armed; awaiting confirmation", control.value)
            return False
        actions: Dict[Control, Callable[[], object]] = {
            Control.CHECK: self.check,
            Control.CLEAR_SINGLE: self.clear_single,
            Control.CHECK_ALL: self.check_all,
            Control.CLEAR_ALL: self.clear_all,
        }
        actions[control]()
        return True

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------
    def handle_key(self, key: str) -> bool:
        """Dispatch a key name (``"left"``, ``"backspace"``, ``"a"``...)."""

        bindings: Dict[str, Callable[[], bool]] = {
            "left": lambda: self.move_focus(-1, 0),
            "right": lambda: self.move_focus(1, 0),
            "up": lambda: self.move_focus(0, -1),
            "down": lambda: self.move_focus(0, 1),
            "backspace": self.delete_at_focus,
            "delete": self.delete_at_focus,
            "tab": self.navigator.focus_next_clue,
            "shift+tab": self.navigator.focus_previous_clue,
        }
        action = bindings.get(key.lower())
        if action is not None:
            return action()
        return self.insert_character(key)
