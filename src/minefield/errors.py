"""
Error types raised by the minefield engine.

Invalid input is surfaced as one of these; ordinary game outcomes
(rejected actions, wins, losses) are returned, never raised.
"""


class MinefieldError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(MinefieldError, ValueError):
    """Invalid board dimensions or mine count, or no room to place mines."""


class OutOfBoundsError(MinefieldError, IndexError):
    """Coordinate outside the grid."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Position ({row}, {col}) is outside the board")
        self.row = row
        self.col = col


class InvalidStateError(MinefieldError, RuntimeError):
    """Mutating action attempted after the game has ended."""


class AlreadyPlacedError(MinefieldError, RuntimeError):
    """Mines were already placed on this board."""
