"""Delimited text encoding of a game snapshot.

Layout, with ``,`` as delimiter and ``-`` marking an empty square::

    <9 board cells, each followed by ','>,<current player>,<turn>,<current player>,<mode>

e.g. ``9,2,-,-,5,-,-,-,-,,Human1,4,Human1,HumanVsComputer``. The board segment
ends with its own delimiter, so it is separated from the first name by two.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from numtictactoe.core import (
    BOARD_SIZE,
    DEFAULT_GAME_MODE,
    STARTING_PIECES,
    Board,
    GameMode,
    GameState,
    GameStatus,
    Piece,
    Player,
    get_winner,
    is_stalemate,
    owner_for_value,
)
from numtictactoe.errors import SerializationError

logger = logging.getLogger(__name__)

DELIM = ","
EMPTY_MARKER = "-"
CELL_COUNT = BOARD_SIZE * BOARD_SIZE


@dataclass
class DecodedSnapshot:
    state: GameState
    warnings: List[str] = field(default_factory=list)


def serialize(state: GameState) -> str:
    name = state.current_player.name
    if DELIM in name:
        raise SerializationError(f"Player name {name!r} contains the reserved delimiter {DELIM!r}.")
    return (
        f"{serialize_board(state.board)}{DELIM}{name}{DELIM}{state.turn_number}"
        f"{DELIM}{name}{DELIM}{state.game_mode.value}"
    )


def serialize_board(board: Board) -> str:
    cells = []
    for square in board.squares():
        cells.append(str(square.piece.value) if square.piece else EMPTY_MARKER)
        cells.append(DELIM)
    return "".join(cells)


def deserialize(text: str, players: Sequence[Player]) -> DecodedSnapshot:
    """Rebuild a GameState from ``text`` using ``players`` as the roster.

    Missing or malformed fields fall back to defaults one at a time; each
    substitution is logged and reported in ``warnings``.
    """
    if players is None or len(players) != 2:
        raise ValueError("Deserializing a snapshot needs the two session players.")

    warnings: List[str] = []

    def warn(message: str) -> None:
        logger.warning(message)
        warnings.append(message)

    tokens = text.strip().split(DELIM)
    cells, rest = tokens[:CELL_COUNT], tokens[CELL_COUNT:]
    if rest and rest[0] == "":
        rest = rest[1:]

    board = _deserialize_board(cells, warn)
    roster = sorted(players, key=lambda p: p.id)

    current_index = 0
    name = _field(rest, 0)
    if name is None:
        warn("Saved game has no current player; defaulting to the first player.")
    else:
        current_index = _player_index(roster, name)
        if current_index is None:
            warn(f"Unknown player {name!r} in saved game; defaulting to the first player.")
            current_index = 0

    turn_number = _parse_turn(_field(rest, 1), warn)

    repeated = _field(rest, 2)
    if name is not None and repeated is not None and repeated != name:
        warn(f"Saved game names two different current players ({name!r}, {repeated!r}); using {name!r}.")

    game_mode = _parse_mode(_field(rest, 3), warn)

    used = board.used_values()
    roster = [
        player.with_pieces([v for v in STARTING_PIECES[player.id] if v not in used])
        for player in roster
    ]

    winner = get_winner(board)
    if winner is not None:
        status = GameStatus.WON
    elif is_stalemate(board):
        status = GameStatus.DRAW
    else:
        status = GameStatus.IN_PROGRESS

    state = GameState(
        board=board,
        players=tuple(roster),
        status=status,
        turn_number=turn_number,
        current_player_index=current_index,
        game_mode=game_mode,
        winner_id=winner,
    )
    return DecodedSnapshot(state, warnings)


def _deserialize_board(cells: Sequence[str], warn) -> Board:
    board = Board()
    if len(cells) < CELL_COUNT:
        warn(f"Saved board has {len(cells)} of {CELL_COUNT} squares; missing squares left empty.")

    for index, raw in enumerate(cells):
        row, col = divmod(index, BOARD_SIZE)
        cell = raw.strip()
        if cell == EMPTY_MARKER:
            continue
        try:
            value = int(cell)
        except ValueError:
            warn(f"Invalid piece value format at ({row + 1}, {col + 1}): {raw!r}; square left empty.")
            continue
        if not 1 <= value <= 9:
            warn(f"Piece value {value} at ({row + 1}, {col + 1}) is out of range; square left empty.")
            continue
        if value in board.used_values():
            warn(f"Piece value {value} appears twice in saved board; square ({row + 1}, {col + 1}) left empty.")
            continue
        board.place_piece(row, col, Piece(value, owner_for_value(value)))
    return board


def _field(parts: Sequence[str], index: int) -> Optional[str]:
    if index >= len(parts):
        return None
    value = parts[index].strip()
    return value or None


def _player_index(players: Sequence[Player], name: str) -> Optional[int]:
    for index, player in enumerate(players):
        if player.name == name:
            return index
    return None


def _parse_turn(raw: Optional[str], warn) -> int:
    if raw is None:
        warn("Saved game has no turn number; defaulting to 0.")
        return 0
    try:
        turn = int(raw)
    except ValueError:
        warn(f"Invalid turn number {raw!r} in saved game; defaulting to 0.")
        return 0
    if turn < 0:
        warn(f"Negative turn number {turn} in saved game; defaulting to 0.")
        return 0
    return turn


def _parse_mode(raw: Optional[str], warn) -> GameMode:
    if raw is None:
        warn(f"Saved game has no game mode; defaulting to {DEFAULT_GAME_MODE.value}.")
        return DEFAULT_GAME_MODE
    for mode in GameMode:
        if raw in (mode.value, mode.name):
            return mode
    warn(f"Unknown game mode {raw!r} in saved game; defaulting to {DEFAULT_GAME_MODE.value}.")
    return DEFAULT_GAME_MODE
