"""Exception types raised by the Numerical Tic-Tac-Toe core."""

from __future__ import annotations


class NumTicTacToeError(Exception):
    """Base class for every error raised by this package."""


class OccupiedSquareError(NumTicTacToeError, ValueError):
    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Square ({row}, {col}) is already occupied.")
        self.row = row
        self.col = col


class InvalidMoveError(NumTicTacToeError, ValueError):
    """A move command could not be turned into a Move."""


class SerializationError(NumTicTacToeError, ValueError):
    pass


class InvalidTransitionError(NumTicTacToeError):
    """A status change was requested from a state that does not allow it."""
