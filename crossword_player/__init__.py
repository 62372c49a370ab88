"""Interactive crossword engine.

This package exposes the public API surface via:

- ``crossword_player.engine.session.CrosswordSession``: one puzzle in play.
- ``crossword_player.io.puzzle_source.load_puzzle``: reads puzzle definitions.
- ``crossword_player.engine.state_store`` stores: saved grid progress.

The grid, clue index, navigator and answer engine underneath the session can
also be used on their own.
"""

from .core.constants import Direction, Separator
from .core.models import Cell, Clue, FocusChange, Move, Position, Puzzle
from .engine.session import CrosswordSession, SessionConfig
from .engine.state_store import JsonStateStore, MemoryStateStore
from .io.puzzle_source import SourceConfig, load_puzzle

__all__ = [
    "Cell",
    "Clue",
    "CrosswordSession",
    "Direction",
    "FocusChange",
    "JsonStateStore",
    "MemoryStateStore",
    "Move",
    "Position",
    "Puzzle",
    "SessionConfig",
    "Separator",
    "SourceConfig",
    "load_puzzle",
]

__version__ = "0.1.0"
