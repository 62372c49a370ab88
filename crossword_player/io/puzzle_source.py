"""Load puzzle definitions from local JSON files or over HTTP."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import requests

from ..core.exceptions import PuzzleLoadError
from ..core.models import Puzzle
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass
class SourceConfig:
    """Options for fetching remote puzzle definitions."""

    timeout_seconds: float = 10.0
    user_agent: str = "crossword-player/0.1"


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_puzzle_payload(url: str, config: SourceConfig | None = None) -> Dict[str, Any]:
    """GET ``url`` and return the decoded JSON body."""

    config = config or SourceConfig()
    try:
        response = requests.get(
            url,
            headers={"Accept": "application/json", "User-Agent": config.user_agent},
            timeout=config.timeout_seconds,
        )
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as exc:
        raise PuzzleLoadError(f"Puzzle request failed: {exc}") from exc
    except ValueError as exc:
        raise PuzzleLoadError(f"Puzzle response from {url} is not JSON") from exc
    return payload


def read_puzzle_payload(path: Path) -> Dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise PuzzleLoadError(f"Cannot read puzzle file {path}: {exc}") from exc


def load_puzzle(source: str | Path, config: SourceConfig | None = None) -> Puzzle:
    """Load a puzzle from a file path or an ``http(s)`` URL."""

    if isinstance(source, str) and is_remote(source):
        payload = fetch_puzzle_payload(source, config)
    else:
        payload = read_puzzle_payload(Path(source))

    # Some feeds wrap the definition, e.g. {"crossword": {...}}.
    if isinstance(payload, dict) and "entries" not in payload and isinstance(payload.get("crossword"), dict):
        payload = payload["crossword"]
    if not isinstance(payload, dict):
        raise PuzzleLoadError(f"Puzzle definition from {source} is not a JSON object")

    puzzle = Puzzle.from_dict(payload)
    LOGGER.info("Loaded puzzle %s (%s clues) from %s", puzzle.id, len(puzzle.entries), source)
    return puzzle
