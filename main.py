"""CLI entrypoint: play a crossword in the terminal.

Commands are read one per line from stdin, for example::

    select 0 0
    type CAT
    check
    quit
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, TextIO

from crossword_player.core.constants import Direction
from crossword_player.core.exceptions import CrosswordError
from crossword_player.engine.controls import Control
from crossword_player.engine.session import CrosswordSession, SessionConfig
from crossword_player.engine.state_store import JsonStateStore
from crossword_player.io.puzzle_source import SourceConfig, load_puzzle
from crossword_player.utils.logger import configure_logging
from crossword_player.utils.pretty import pretty_print_session


HELP = """Commands:
  select X Y          activate the cell at column X, row Y (again to toggle direction)
  clue ID             focus the first cell of a clue
  focus DIR X Y       focus the across or down clue through a cell
  left|right|up|down  move focus
  next|prev           focus the next / previous clue
  type LETTERS        enter letters from the focused cell
  del                 delete at focus
  check|clear         check / clear the focused clue group
  check-all|clear-all check / clear the whole grid (asks for confirmation)
  show                print the grid
  help, quit"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play a crossword puzzle in the terminal")
    parser.add_argument("--puzzle", required=True, help="Puzzle JSON file path or http(s) URL")
    parser.add_argument(
        "--state-dir",
        type=Path,
        default=None,
        help="Directory for saved grid progress (default: $CROSSWORD_STATE_DIR or local_db/grids)",
    )
    parser.add_argument("--focus", type=str, default=None, help="Clue id to focus on start")
    parser.add_argument("--timeout", type=float, default=10.0, help="HTTP timeout in seconds")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def run_command(session: CrosswordSession, line: str, stream: TextIO) -> bool:
    """Apply one command line; returns False when the session should end."""

    parts = line.split()
    if not parts:
        return True
    command, args = parts[0].lower(), parts[1:]

    simple: Dict[str, Callable[[], object]] = {
        "left": lambda: session.move_focus(-1, 0),
        "right": lambda: session.move_focus(1, 0),
        "up": lambda: session.move_focus(0, -1),
        "down": lambda: session.move_focus(0, 1),
        "next": session.navigator.focus_next_clue,
        "prev": session.navigator.focus_previous_clue,
        "del": session.delete_at_focus,
    }
    controls = {
        "check": Control.CHECK,
        "clear": Control.CLEAR_SINGLE,
        "check-all": Control.CHECK_ALL,
        "clear-all": Control.CLEAR_ALL,
    }

    if command in ("quit", "exit"):
        return False
    if command == "help":
        print(HELP, file=stream)
    elif command == "show":
        pretty_print_session(session, stream=stream)
    elif command in simple:
        simple[command]()
    elif command in controls:
        control = controls[command]
        if not session.press(control):
            gate = session.confirmations.get(control)
            if gate is not None and gate.is_armed:
                print(f"{gate.label(control.label)}? Repeat the command.", file=stream)
            else:
                print(f"{control.label} is not available", file=stream)
    elif command == "select" and len(args) == 2:
        if not session.select(int(args[0]), int(args[1])):
            print("No clue at that cell", file=stream)
    elif command == "clue" and len(args) == 1:
        if not session.activate_clue(args[0]):
            print(f"Unknown clue {args[0]}", file=stream)
    elif command == "type" and args:
        for character in "".join(args):
            session.insert_character(character)
    elif command == "focus" and len(args) == 3:
        if not session.focus_clue(int(args[1]), int(args[2]), Direction(args[0].lower())):
            print("No clue in that direction at that cell", file=stream)
    else:
        print(f"Unrecognised command: {line.strip()}", file=stream)
    return True


def play(session: CrosswordSession, lines: TextIO, stream: TextIO) -> None:
    pretty_print_session(session, stream=stream)
    for line in lines:
        try:
            if not run_command(session, line, stream):
                break
        except ValueError as exc:
            print(f"Bad arguments: {exc}", file=stream)
    if session.is_complete():
        print("All clues answered.", file=stream)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    try:
        puzzle = load_puzzle(args.puzzle, SourceConfig(timeout_seconds=args.timeout))
        session = CrosswordSession(
            puzzle,
            store=JsonStateStore(args.state_dir),
            config=SessionConfig(initial_clue_id=args.focus),
        )
    except CrosswordError as exc:
        parser.error(str(exc))

    play(session, sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
