"""Core game logic for Numerical Tic-Tac-Toe."""

from .board import (
    BOARD_SIZE,
    Board,
    Piece,
    Square,
    position_to_row_col,
    row_col_to_position,
)
from .state import (
    DEFAULT_GAME_MODE,
    PLAYER_ONE_ID,
    PLAYER_TWO_ID,
    STARTING_PIECES,
    GameMode,
    GameState,
    GameStatus,
    Move,
    MoveStrategy,
    Player,
    PlayerKind,
    initialize_game_state,
)
from .rules import (
    TARGET_SUM,
    WINNING_LINES,
    get_winner,
    is_stalemate,
    is_valid_move_format,
    is_value_allowed,
    is_won,
    owner_for_value,
    parse_move_command,
    validate_move,
    winning_line,
)

__all__ = [
    "BOARD_SIZE",
    "Board",
    "Piece",
    "Square",
    "position_to_row_col",
    "row_col_to_position",
    "DEFAULT_GAME_MODE",
    "PLAYER_ONE_ID",
    "PLAYER_TWO_ID",
    "STARTING_PIECES",
    "GameMode",
    "GameState",
    "GameStatus",
    "Move",
    "MoveStrategy",
    "Player",
    "PlayerKind",
    "initialize_game_state",
    "TARGET_SUM",
    "WINNING_LINES",
    "get_winner",
    "is_stalemate",
    "is_valid_move_format",
    "is_value_allowed",
    "is_won",
    "owner_for_value",
    "parse_move_command",
    "validate_move",
    "winning_line",
]
