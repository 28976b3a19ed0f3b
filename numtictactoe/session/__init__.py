"""Session wiring: context, configuration and the running game."""

from .config import SessionConfig, SessionContext, parse_game_mode
from .game_session import GAME_OVER, GameSession, MoveOutcome, SessionEvent

__all__ = [
    "SessionConfig",
    "SessionContext",
    "parse_game_mode",
    "GAME_OVER",
    "GameSession",
    "MoveOutcome",
    "SessionEvent",
]
