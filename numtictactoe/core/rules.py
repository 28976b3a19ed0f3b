from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from numtictactoe.errors import InvalidMoveError

from .board import BOARD_SIZE, Board, Position
from .state import PLAYER_ONE_ID, PLAYER_TWO_ID, Move, Player

logger = logging.getLogger(__name__)

TARGET_SUM = 15
MIN_PIECE_VALUE = 1
MAX_PIECE_VALUE = 9
MOVE_COMMAND = "m"

# Scan order decides the winner when two lines reach the target on the same move.
WINNING_LINES: Tuple[Tuple[Position, ...], ...] = (
    tuple(tuple((row, col) for col in range(BOARD_SIZE)) for row in range(BOARD_SIZE))
    + tuple(tuple((row, col) for row in range(BOARD_SIZE)) for col in range(BOARD_SIZE))
    + (
        tuple((i, i) for i in range(BOARD_SIZE)),
        tuple((i, BOARD_SIZE - 1 - i) for i in range(BOARD_SIZE)),
    )
)

Check = Tuple[bool, Optional[str]]


def validate_move(board: Board, move: Move, player: Optional[Player] = None) -> Check:
    """Check a candidate move against the board.

    Checks run in a fixed order and the first failure is reported:
    the target square must be on the board and empty, the value must match
    the mover's parity, and the value must not already be on the board. When
    ``player`` is given the value must also still be in that player's
    remaining pieces.
    """
    if not (0 <= move.row < board.size and 0 <= move.col < board.size):
        return False, (
            f"Invalid move - square ({move.row + 1}, {move.col + 1}) is outside the "
            f"{board.size}x{board.size} board."
        )

    if board.get_square(move.row, move.col).is_occupied:
        return False, "Invalid move - square is already occupied."

    if not is_value_allowed(move.value, move.player_id):
        return False, (
            f"Invalid move - value: {move.value} is not in the valid piece set "
            f"for player {move.player_id}."
        )

    if move.value in board.used_values():
        return False, f"Invalid move - value: {move.value} is already used on the board."

    if player is not None and not player.has_piece(move.value):
        return False, f"Invalid move - {player.name} has no piece {move.value} left."

    return True, None


def is_value_allowed(value: int, player_id: int) -> bool:
    if not MIN_PIECE_VALUE <= value <= MAX_PIECE_VALUE:
        return False
    is_odd = value % 2 == 1
    return (player_id == PLAYER_ONE_ID and is_odd) or (player_id == PLAYER_TWO_ID and not is_odd)


def owner_for_value(value: int) -> int:
    return PLAYER_ONE_ID if value % 2 == 1 else PLAYER_TWO_ID


def line_sums(board: Board) -> List[int]:
    values = board.values.astype(np.int16)
    sums = list(values.sum(axis=1)) + list(values.sum(axis=0))
    sums.append(np.trace(values))
    sums.append(np.trace(np.fliplr(values)))
    return [int(s) for s in sums]


def winning_line(board: Board) -> Optional[Tuple[Position, ...]]:
    # Only the numeric sum is checked; empty cells count as 0.
    for line, total in zip(WINNING_LINES, line_sums(board)):
        if total == TARGET_SUM:
            return line
    return None


def get_winner(board: Board) -> Optional[int]:
    line = winning_line(board)
    if line is None:
        return None
    for row, col in line:
        owner = int(board.owners[row, col])
        if owner:
            return owner
    return None


def is_won(board: Board) -> bool:
    return get_winner(board) is not None


def is_stalemate(board: Board) -> bool:
    return board.is_full() and not is_won(board)


def is_valid_move_format(tokens: Sequence[str]) -> Check:
    if len(tokens) != 4 or tokens[0] != MOVE_COMMAND:
        return False, "Invalid move format. Use: 'm row col value'. Eg. m 1 2 7"

    try:
        row, col, value = (int(token) for token in tokens[1:])
    except ValueError:
        return False, "Invalid move format - incorrect positional structure or missing parts."

    in_bounds = 1 <= row <= BOARD_SIZE and 1 <= col <= BOARD_SIZE
    if not (in_bounds and MIN_PIECE_VALUE <= value <= MAX_PIECE_VALUE):
        return False, (
            f"Invalid move format - input out of bounds. Use: Row/Col: 1-{BOARD_SIZE}, "
            f"Value: {MIN_PIECE_VALUE}-{MAX_PIECE_VALUE}"
        )
    return True, None


def parse_move_command(text: str, player_id: int) -> Move:
    """Turn ``"m <row> <col> <value>"`` (1-based) into a 0-based Move."""
    tokens = text.split()
    ok, reason = is_valid_move_format(tokens)
    if not ok:
        logger.debug("Rejected move command %r: %s", text, reason)
        raise InvalidMoveError(reason)
    row, col, value = (int(token) for token in tokens[1:])
    return Move(row - 1, col - 1, value, player_id)
