"""Logging utilities for the crossword player."""

from __future__ import annotations

import logging
from typing import Optional


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with a sensible formatter.

    Every keystroke can produce several focus and cell events, so the engine
    logs those at DEBUG and keeps INFO for puzzle-level milestones. Callers
    may reconfigure before creating a :class:`CrosswordSession`.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "crossword_player")
