"""Numerical Tic-Tac-Toe session core."""

from . import core, history, persistence, session
from .core import (
    Board,
    GameMode,
    GameState,
    GameStatus,
    Move,
    Piece,
    Player,
    PlayerKind,
    get_winner,
    is_stalemate,
    is_won,
    validate_move,
)
from .errors import (
    InvalidMoveError,
    InvalidTransitionError,
    NumTicTacToeError,
    OccupiedSquareError,
    SerializationError,
)
from .history import HistoryStep, MoveHistory
from .persistence import LoadReport, SnapshotStore, deserialize, serialize
from .players import create_players, random_strategy, request_move
from .session import GameSession, MoveOutcome, SessionConfig, SessionContext, SessionEvent

__version__ = "1.0.0"

__all__ = [
    "core",
    "history",
    "persistence",
    "session",
    "Board",
    "GameMode",
    "GameState",
    "GameStatus",
    "Move",
    "Piece",
    "Player",
    "PlayerKind",
    "get_winner",
    "is_stalemate",
    "is_won",
    "validate_move",
    "InvalidMoveError",
    "InvalidTransitionError",
    "NumTicTacToeError",
    "OccupiedSquareError",
    "SerializationError",
    "HistoryStep",
    "MoveHistory",
    "LoadReport",
    "SnapshotStore",
    "deserialize",
    "serialize",
    "create_players",
    "random_strategy",
    "request_move",
    "GameSession",
    "MoveOutcome",
    "SessionConfig",
    "SessionContext",
    "SessionEvent",
]
