"""Control availability and two-step confirmation for destructive actions."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ..core.constants import CONFIRM_TIMEOUT


class Control(str, Enum):
    """Actions offered next to the grid."""

    CHECK = "check"
    CLEAR_SINGLE = "clear_single"
    CHECK_ALL = "check_all"
    CLEAR_ALL = "clear_all"

    @property
    def label(self) -> str:
        return {
            Control.CHECK: "Check this",
            Control.CLEAR_SINGLE: "Clear this",
            Control.CHECK_ALL: "Check all",
            Control.CLEAR_ALL: "Clear all",
        }[self]

    @property
    def needs_confirmation(self) -> bool:
        return self in (Control.CHECK_ALL, Control.CLEAR_ALL)


@dataclass(frozen=True)
class ControlSet:
    clue: Tuple[Control, ...]
    grid: Tuple[Control, ...]

    def __contains__(self, control: object) -> bool:
        return control in self.clue or control in self.grid


def available_controls(has_solutions: bool, clue_in_focus: bool) -> ControlSet:
    """Controls to offer given solution availability and focus."""

    clue: List[Control] = []
    grid: List[Control] = []
    if has_solutions:
        grid.append(Control.CHECK_ALL)
    grid.append(Control.CLEAR_ALL)
    if clue_in_focus:
        if has_solutions:
            clue.append(Control.CHECK)
        clue.append(Control.CLEAR_SINGLE)
    return ControlSet(clue=tuple(clue), grid=tuple(grid))


class ConfirmGate:
    """First press arms the gate; a second press within ``timeout`` fires it."""

    def __init__(self, timeout: float = CONFIRM_TIMEOUT, clock: Callable[[], float] = time.monotonic) -> None:
        self.timeout = timeout
        self._clock = clock
        self._armed_at: Optional[float] = None

    @property
    def is_armed(self) -> bool:
        if self._armed_at is None:
            return False
        if self._clock() - self._armed_at > self.timeout:
            self._armed_at = None
        return self._armed_at is not None

    def press(self) -> bool:
        if self.is_armed:
            self._armed_at = None
            return True
        self._armed_at = self._clock()
        return False

    def label(self, text: str) -> str:
        return f"Confirm {text.lower()}" if self.is_armed else text
