"""Custom exception hierarchy for the crossword player."""


class CrosswordError(Exception):
    """Base exception for crossword player failures."""


class PuzzleConfigError(CrosswordError):
    """Raised when the clue list does not fit the grid it describes."""


class PuzzleLoadError(CrosswordError):
    """Raised when a puzzle definition cannot be read or parsed."""


class StateStoreError(CrosswordError):
    """Raised when a persisted grid document cannot be read."""
