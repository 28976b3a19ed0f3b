from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Callable, Optional, Sequence, Tuple

from .board import Board, row_col_to_position

PLAYER_ONE_ID = 1
PLAYER_TWO_ID = 2
STARTING_PIECES = {
    PLAYER_ONE_ID: (1, 3, 5, 7, 9),
    PLAYER_TWO_ID: (2, 4, 6, 8),
}


class GameStatus(Enum):
    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    DRAW = "DRAW"
    QUIT = "QUIT"

    @property
    def is_terminal(self) -> bool:
        return self != GameStatus.IN_PROGRESS


class GameMode(Enum):
    HUMAN_VS_HUMAN = "HumanVsHuman"
    HUMAN_VS_COMPUTER = "HumanVsComputer"


DEFAULT_GAME_MODE = GameMode.HUMAN_VS_COMPUTER


class PlayerKind(IntEnum):
    HUMAN = 1
    COMPUTER = 2


# A strategy receives the live board and the moving player and returns a Move.
MoveStrategy = Callable[[Board, "Player"], "Move"]


@dataclass(frozen=True)
class Player:
    id: int
    name: str
    kind: PlayerKind = PlayerKind.HUMAN
    remaining: Tuple[int, ...] = ()
    strategy: Optional[MoveStrategy] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.id not in STARTING_PIECES:
            raise ValueError(f"Player id must be {PLAYER_ONE_ID} or {PLAYER_TWO_ID}, got {self.id}.")
        if self.kind == PlayerKind.COMPUTER and self.strategy is None:
            raise ValueError(f"Computer player {self.name!r} needs a move strategy.")

    @classmethod
    def create(
        cls,
        player_id: int,
        name: str,
        *,
        kind: PlayerKind = PlayerKind.HUMAN,
        strategy: Optional[MoveStrategy] = None,
    ) -> "Player":
        return cls(player_id, name, kind, STARTING_PIECES.get(player_id, ()), strategy)

    def has_piece(self, value: int) -> bool:
        return value in self.remaining

    def use_piece(self, value: int) -> "Player":
        if value not in self.remaining:
            raise ValueError(f"{self.name} has no piece {value} left.")
        return replace(self, remaining=tuple(v for v in self.remaining if v != value))

    def return_piece(self, value: int) -> "Player":
        if value in self.remaining:
            return self
        return replace(self, remaining=tuple(sorted(self.remaining + (value,))))

    def with_pieces(self, values: Sequence[int]) -> "Player":
        return replace(self, remaining=tuple(sorted(values)))

    def reset_pieces(self) -> "Player":
        return replace(self, remaining=STARTING_PIECES[self.id])


@dataclass
class Move:
    row: int
    col: int
    value: int
    player_id: int
    move_number: Optional[int] = None

    def assign_number(self, number: int) -> None:
        if self.move_number is not None:
            raise ValueError(f"Move already numbered #{self.move_number}.")
        self.move_number = number

    @property
    def position(self) -> int:
        return row_col_to_position(self.row, self.col)

    def copy(self) -> "Move":
        return replace(self)

    def __str__(self) -> str:
        return (
            f"Move #{self.move_number}: {self.value} placed at ({self.row + 1}, {self.col + 1})"
            f" by player {self.player_id}"
        )


@dataclass
class GameState:
    board: Board
    players: Tuple[Player, ...]
    status: GameStatus = GameStatus.IN_PROGRESS
    turn_number: int = 0
    current_player_index: int = 0
    game_mode: GameMode = DEFAULT_GAME_MODE
    winner_id: Optional[int] = None

    def copy(self) -> "GameState":
        # Players are immutable values; only the board needs a fresh copy.
        return GameState(
            board=self.board.clone(),
            players=tuple(self.players),
            status=self.status,
            turn_number=self.turn_number,
            current_player_index=self.current_player_index,
            game_mode=self.game_mode,
            winner_id=self.winner_id,
        )

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def player_by_id(self, player_id: int) -> Player:
        for player in self.players:
            if player.id == player_id:
                return player
        raise KeyError(f"No player with id {player_id}.")

    def __repr__(self) -> str:
        return (
            f"GameState(status={self.status.name}, turn={self.turn_number}, "
            f"current={self.current_player.name})\n{self.board!r}"
        )


def initialize_game_state(
    players: Sequence[Player],
    *,
    game_mode: GameMode = DEFAULT_GAME_MODE,
) -> GameState:
    if players is None or len(players) != 2:
        raise ValueError("A game needs exactly two players.")
    ids = sorted(player.id for player in players)
    if ids != [PLAYER_ONE_ID, PLAYER_TWO_ID]:
        raise ValueError(f"Players must have ids {PLAYER_ONE_ID} and {PLAYER_TWO_ID}, got {ids}.")
    fresh = tuple(sorted((player.reset_pieces() for player in players), key=lambda p: p.id))
    return GameState(board=Board(), players=fresh, game_mode=game_mode)
