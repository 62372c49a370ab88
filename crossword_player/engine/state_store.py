"""Persistent grid state stores.

Progress for each puzzle is saved as a JSON document under
``local_db/grids/`` by default. Documents hold the rectangular value array
(column then row) exactly as :meth:`PlayGrid.values` produces it.
"""

from __future__ import annotations

import json
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from ..core.exceptions import StateStoreError
from ..utils.logger import get_logger
from .grid import GridValues


LOGGER = get_logger(__name__)

DEFAULT_STATE_DIR = Path("local_db/grids")
STATE_DIR_ENV = "CROSSWORD_STATE_DIR"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def default_state_dir() -> Path:
    return Path(os.environ.get(STATE_DIR_ENV) or DEFAULT_STATE_DIR)


def _copy(values: GridValues) -> GridValues:
    return [list(column) for column in values]


class JsonStateStore:
    """Save and restore grid values as one JSON document per puzzle."""

    def __init__(self, store_dir: Path | str | None = None) -> None:
        self.store_dir = Path(store_dir) if store_dir is not None else default_state_dir()
        self.store_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def load(self, puzzle_id: str) -> Optional[GridValues]:
        path = self._path(puzzle_id)
        if not path.exists():
            return None
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StateStoreError(f"Cannot read grid state {path}: {exc}") from exc

        grid = doc.get("grid") if isinstance(doc, dict) else None
        if not self._is_grid(grid):
            raise StateStoreError(f"Grid state {path} has no rectangular 'grid' array")
        LOGGER.info("Grid state loaded: %s", puzzle_id)
        return grid

    def save(self, puzzle_id: str, values: GridValues) -> None:
        doc = {
            "puzzle_id": puzzle_id,
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "grid": values,
        }
        path = self._path(puzzle_id)
        path.write_text(json.dumps(doc, ensure_ascii=False, indent=2), encoding="utf-8")
        LOGGER.debug("Grid state saved: %s", puzzle_id)

    def delete(self, puzzle_id: str) -> bool:
        path = self._path(puzzle_id)
        if not path.exists():
            return False
        path.unlink()
        return True

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _path(self, puzzle_id: str) -> Path:
        return self.store_dir / f"{_UNSAFE_CHARS.sub('_', puzzle_id)}.json"

    @staticmethod
    def _is_grid(grid: object) -> bool:
        if not isinstance(grid, list) or not grid:
            return False
        rows = {len(column) if isinstance(column, list) else -1 for column in grid}
        if len(rows) != 1 or -1 in rows:
            return False
        return all(isinstance(value, str) for column in grid for value in column)


class MemoryStateStore:
    """In-process store, handy for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, GridValues]] = None) -> None:
        self._grids: Dict[str, GridValues] = {
            key: _copy(values) for key, values in (initial or {}).items()
        }
        self.saves: List[str] = []

    def load(self, puzzle_id: str) -> Optional[GridValues]:
        values = self._grids.get(puzzle_id)
        return _copy(values) if values is not None else None

    def save(self, puzzle_id: str, values: GridValues) -> None:
        self._grids[puzzle_id] = _copy(values)
        self.saves.append(puzzle_id)
