from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Deque, List, Optional, Sequence, Tuple

import numpy as np

from numtictactoe.core import (
    PLAYER_ONE_ID,
    PLAYER_TWO_ID,
    Board,
    GameMode,
    GameState,
    GameStatus,
    Move,
    Piece,
    Player,
    get_winner,
    initialize_game_state,
    is_stalemate,
    parse_move_command,
    validate_move,
)
from numtictactoe.errors import InvalidMoveError, InvalidTransitionError
from numtictactoe.history import HistoryStep, MoveHistory
from numtictactoe.persistence import LoadReport
from numtictactoe.players import create_players, request_move

from .config import SessionContext

logger = logging.getLogger(__name__)

GAME_OVER = "Game is already over!"


@dataclass(frozen=True)
class SessionEvent:
    kind: str  # "status", "turn" or "mode"
    value: Any


@dataclass(frozen=True)
class MoveOutcome:
    accepted: bool
    status: GameStatus
    turn_number: int
    move: Optional[Move] = None
    reason: Optional[str] = None
    winner_id: Optional[int] = None


class GameSession:
    """One running game: live state, rules, history and persistence.

    Every operation returns its result directly. Status, turn and mode changes
    are also queued and can be drained with :meth:`poll_events`.
    """

    def __init__(
        self,
        context: SessionContext,
        players: Sequence[Player],
        *,
        game_mode: Optional[GameMode] = None,
    ) -> None:
        if context is None:
            raise ValueError("GameSession needs a SessionContext.")
        if players is None:
            raise ValueError("GameSession needs its two players.")
        self.context = context
        mode = game_mode or context.config.game_mode
        self._state = initialize_game_state(players, game_mode=mode)
        self.history = MoveHistory(self._state)
        self._events: Deque[SessionEvent] = deque()

    @classmethod
    def new(cls, context: SessionContext) -> "GameSession":
        config = context.config
        names = {PLAYER_ONE_ID: config.player_one_name}
        if config.player_two_name:
            names[PLAYER_TWO_ID] = config.player_two_name
        players = create_players(
            config.game_mode,
            names=names,
            rng=np.random.default_rng(config.seed),
        )
        return cls(context, players)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def players(self) -> Tuple[Player, ...]:
        return self._state.players

    @property
    def current_player(self) -> Player:
        return self._state.current_player

    @property
    def status(self) -> GameStatus:
        return self._state.status

    @property
    def turn_number(self) -> int:
        return self._state.turn_number

    @property
    def game_mode(self) -> GameMode:
        return self._state.game_mode

    @property
    def winner(self) -> Optional[Player]:
        if self._state.winner_id is None:
            return None
        return self._state.player_by_id(self._state.winner_id)

    def snapshot(self) -> GameState:
        return self._state.copy()

    def poll_events(self) -> List[SessionEvent]:
        events = list(self._events)
        self._events.clear()
        return events

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def apply_move(self, move: Move) -> MoveOutcome:
        state = self._state
        if state.is_terminal:
            return self._reject(move, GAME_OVER)

        player = state.current_player
        ok, reason = validate_move(state.board, move)
        if ok and move.player_id != player.id:
            ok, reason = False, f"It is {player.name}'s turn."
        if ok:
            ok, reason = validate_move(state.board, move, player)
        if not ok:
            return self._reject(move, reason)

        # A Move object replayed after undo is committed under a fresh number.
        if move.move_number is not None:
            move = replace(move, move_number=None)

        state.board.place_piece(move.row, move.col, Piece(move.value, move.player_id))
        state.players = tuple(
            p.use_piece(move.value) if p.id == player.id else p for p in state.players
        )

        winner = get_winner(state.board)
        if winner is not None:
            state.winner_id = winner
            self._set_status(GameStatus.WON)
        elif is_stalemate(state.board):
            self._set_status(GameStatus.DRAW)
        else:
            state.current_player_index = (state.current_player_index + 1) % len(state.players)
            self._set_turn(state.turn_number + 1)

        self.history.commit(move, state)
        logger.debug("Applied %s", move)
        return MoveOutcome(
            accepted=True,
            status=state.status,
            turn_number=state.turn_number,
            move=move,
            winner_id=state.winner_id,
        )

    def submit_command(self, text: str) -> MoveOutcome:
        try:
            move = parse_move_command(text, self.current_player.id)
        except InvalidMoveError as exc:
            return self._reject(None, str(exc))
        return self.apply_move(move)

    def request_move(self, command_text: Optional[str] = None) -> MoveOutcome:
        if self._state.is_terminal:
            return self._reject(None, GAME_OVER)
        try:
            move = request_move(self.current_player, self.board, command_text)
        except InvalidMoveError as exc:
            return self._reject(None, str(exc))
        return self.apply_move(move)

    def _reject(self, move: Optional[Move], reason: str) -> MoveOutcome:
        logger.debug("Rejected move %s: %s", move, reason)
        return MoveOutcome(
            accepted=False,
            status=self._state.status,
            turn_number=self._state.turn_number,
            move=move,
            reason=reason,
            winner_id=self._state.winner_id,
        )

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def undo(self) -> HistoryStep:
        if self._state.is_terminal:
            return HistoryStep(state=None, message=GAME_OVER)
        step = self.history.undo()
        if step.applied:
            self._restore(step.state)
        return step

    def redo(self) -> HistoryStep:
        if self._state.is_terminal:
            return HistoryStep(state=None, message=GAME_OVER)
        step = self.history.redo()
        if step.applied:
            self._restore(step.state)
        return step

    def _restore(self, state: GameState) -> None:
        previous = self._state
        self._state = state
        if state.turn_number != previous.turn_number:
            self._events.append(SessionEvent("turn", state.turn_number))
        if state.status != previous.status:
            self._events.append(SessionEvent("status", state.status))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def quit(self) -> GameStatus:
        if self._state.status != GameStatus.IN_PROGRESS:
            raise InvalidTransitionError(f"Cannot quit a game that is {self._state.status.name}.")
        self._set_status(GameStatus.QUIT)
        return self._state.status

    def restart(self) -> GameState:
        """Start a new round with the same players and mode."""
        fresh = initialize_game_state(self._state.players, game_mode=self._state.game_mode)
        self._restore(fresh)
        self.history.clear(initial_state=fresh)
        return self.snapshot()

    def save(self) -> Path:
        return self.context.store.save(self._state)

    def load(self) -> LoadReport:
        report = self.context.store.load(self._state.players)
        if report.loaded:
            previous_mode = self._state.game_mode
            self._restore(report.state)
            if report.state.game_mode != previous_mode:
                self._events.append(SessionEvent("mode", report.state.game_mode))
            self.history.clear(initial_state=report.state)
        return report

    def _set_status(self, status: GameStatus) -> None:
        if status != self._state.status:
            self._state.status = status
            self._events.append(SessionEvent("status", status))

    def _set_turn(self, turn_number: int) -> None:
        if turn_number != self._state.turn_number:
            self._state.turn_number = turn_number
            self._events.append(SessionEvent("turn", turn_number))
