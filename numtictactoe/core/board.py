from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Set, Tuple

import numpy as np
from numpy.typing import NDArray

from numtictactoe.errors import OccupiedSquareError

BOARD_SIZE = 3
EMPTY = 0

BoardArray = NDArray[np.int8]
Position = Tuple[int, int]


@dataclass(frozen=True)
class Piece:
    value: int
    owner_id: int


@dataclass(frozen=True)
class Square:
    row: int
    col: int
    piece: Optional[Piece] = None

    @property
    def is_occupied(self) -> bool:
        return self.piece is not None


class Board:
    """3x3 grid of squares backed by two int8 arrays.

    ``values`` holds the piece value on each square (0 when empty) and
    ``owners`` the id of the player owning it (0 when empty). Squares handed
    out by :meth:`get_square` are read-only views, so mutation only happens
    through :meth:`place_piece`, :meth:`remove_piece` and :meth:`reset_all`.
    """

    size = BOARD_SIZE

    def __init__(
        self,
        values: Optional[BoardArray] = None,
        owners: Optional[BoardArray] = None,
    ) -> None:
        shape = (BOARD_SIZE, BOARD_SIZE)
        self.values: BoardArray = (
            np.zeros(shape, dtype=np.int8) if values is None else np.array(values, dtype=np.int8)
        )
        self.owners: BoardArray = (
            np.zeros(shape, dtype=np.int8) if owners is None else np.array(owners, dtype=np.int8)
        )
        if self.values.shape != shape or self.owners.shape != shape:
            raise ValueError(f"board arrays must be {shape}")

    def place_piece(self, row: int, col: int, piece: Piece) -> None:
        self._check_bounds(row, col)
        if self.values[row, col] != EMPTY:
            raise OccupiedSquareError(row, col)
        self.values[row, col] = piece.value
        self.owners[row, col] = piece.owner_id

    def remove_piece(self, row: int, col: int) -> Optional[Piece]:
        square = self.get_square(row, col)
        self.values[row, col] = EMPTY
        self.owners[row, col] = 0
        return square.piece

    def get_square(self, row: int, col: int) -> Square:
        self._check_bounds(row, col)
        value = int(self.values[row, col])
        if value == EMPTY:
            return Square(row, col)
        return Square(row, col, Piece(value, int(self.owners[row, col])))

    def squares(self) -> Iterator[Square]:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                yield self.get_square(row, col)

    def reset_all(self) -> None:
        self.values[:, :] = EMPTY
        self.owners[:, :] = 0

    def clone(self) -> "Board":
        return Board(self.values.copy(), self.owners.copy())

    def is_full(self) -> bool:
        return bool(np.all(self.values != EMPTY))

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.values))

    def empty_positions(self) -> List[Position]:
        return [(int(r), int(c)) for r, c in np.argwhere(self.values == EMPTY)]

    def used_values(self) -> Set[int]:
        return {int(v) for v in self.values.flat if v != EMPTY}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self.values, other.values) and np.array_equal(self.owners, other.owners)

    def __repr__(self) -> str:
        rows = "\n".join(
            " ".join(str(int(v)) if v else "-" for v in row) for row in self.values
        )
        return f"Board(\n{rows}\n)"

    @staticmethod
    def _check_bounds(row: int, col: int) -> None:
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise IndexError(f"Square ({row}, {col}) is outside the {BOARD_SIZE}x{BOARD_SIZE} board.")


def position_to_row_col(position: int, size: int = BOARD_SIZE) -> Position:
    """Map a 1-based board position (1..9, row-major) to 0-based (row, col)."""
    if not 1 <= position <= size * size:
        raise ValueError(f"Position {position} is outside 1..{size * size}.")
    return (position - 1) // size, (position - 1) % size


def row_col_to_position(row: int, col: int, size: int = BOARD_SIZE) -> int:
    return row * size + col + 1
