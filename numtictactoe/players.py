"""Move sources for human and computer players."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np

from numtictactoe.core import (
    PLAYER_ONE_ID,
    PLAYER_TWO_ID,
    Board,
    GameMode,
    Move,
    MoveStrategy,
    Player,
    PlayerKind,
    parse_move_command,
)
from numtictactoe.errors import InvalidMoveError


def random_strategy(rng: Optional[np.random.Generator] = None) -> MoveStrategy:
    """Pick a random empty square and a random unused piece from the player's pool."""
    rng = rng or np.random.default_rng()

    def choose(board: Board, player: Player) -> Move:
        squares = board.empty_positions()
        used = board.used_values()
        values = [v for v in player.remaining if v not in used]
        if not squares or not values:
            raise InvalidMoveError(f"{player.name} has no legal move left.")
        row, col = squares[int(rng.integers(len(squares)))]
        value = values[int(rng.integers(len(values)))]
        return Move(row, col, int(value), player.id)

    return choose


def request_move(player: Player, board: Board, command_text: Optional[str] = None) -> Move:
    """Get the next move from ``player``, whatever kind of player it is.

    Humans supply ``command_text`` (``"m row col value"``); computers ignore it
    and ask their strategy.
    """
    if player.kind == PlayerKind.HUMAN:
        if command_text is None:
            raise InvalidMoveError(f"{player.name} must enter a move command.")
        return parse_move_command(command_text, player.id)
    if player.kind == PlayerKind.COMPUTER:
        return player.strategy(board, player)
    raise ValueError(f"Unsupported player kind: {player.kind!r}")


def create_players(
    game_mode: GameMode,
    *,
    names: Optional[Dict[int, str]] = None,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[Player, Player]:
    """Build the two players for a game mode.

    Player 1 is always human and plays odd pieces; player 2 plays even pieces
    and is a computer in ``HUMAN_VS_COMPUTER`` mode.
    """
    names = names or {}
    first = Player.create(PLAYER_ONE_ID, names.get(PLAYER_ONE_ID, "Human1"))
    if game_mode == GameMode.HUMAN_VS_COMPUTER:
        second = Player.create(
            PLAYER_TWO_ID,
            names.get(PLAYER_TWO_ID, "Computer"),
            kind=PlayerKind.COMPUTER,
            strategy=random_strategy(rng),
        )
    else:
        second = Player.create(PLAYER_TWO_ID, names.get(PLAYER_TWO_ID, "Human2"))
    return first, second
