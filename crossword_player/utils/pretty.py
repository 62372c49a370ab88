"""Plain-text rendering of a play session."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List

from ..core.constants import Direction

if TYPE_CHECKING:
    from ..engine.session import CrosswordSession


BLOCK = "#"
EMPTY = "."


def cell_symbol(session: CrosswordSession, x: int, y: int) -> str:
    cell = session.grid.cell(x, y)
    if not cell.is_editable:
        return f" {BLOCK} "
    symbol = cell.value or EMPTY
    if session.navigator.state.cell == (x, y):
        return f"[{symbol}]"
    if session.is_highlighted(x, y):
        return f"({symbol})"
    if cell.is_error:
        return f"!{symbol} "
    return f" {symbol} "


def format_grid(session: CrosswordSession) -> str:
    bounds = session.grid.bounds
    lines = ["    " + "".join(f"{x:^3}" for x in range(bounds.cols))]
    lines.append("    " + "-" * (3 * bounds.cols))
    for y in range(bounds.rows):
        row_render = "".join(cell_symbol(session, x, y) for x in range(bounds.cols))
        lines.append(f"{y:>2} |{row_render}")
    return "\n".join(lines)


def format_clues(session: CrosswordSession) -> str:
    """Clue list by direction: ``>`` marks the focused group, ``*`` answered clues."""

    lines: List[str] = []
    views = session.clues_data()
    for direction in Direction:
        lines.append(direction.value.capitalize())
        for view in views:
            clue = view.clue
            if clue.direction is not direction:
                continue
            marker = ">" if view.is_selected else "*" if view.has_answered else " "
            length = session.index.group_total_length(clue)
            lines.append(f" {marker} {clue.human_number:>5}  {clue.text} ({length})  [{clue.id}]")
    return "\n".join(lines)


def pretty_print_session(session: CrosswordSession, *, label: str | None = None, stream=None) -> None:
    """Print the grid, the focused clue and the clue list."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(session), file=stream)
    focused = session.clue_in_focus()
    if focused is not None:
        print(file=stream)
        print(f"{focused.human_number} {focused.direction.value}: {focused.text}", file=stream)
    print(file=stream)
    print(format_clues(session), file=stream)
