from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from numtictactoe.core import GameState, Move

logger = logging.getLogger(__name__)

NOTHING_TO_UNDO = "No moves in history to undo."
NOTHING_TO_REDO = "No further moves in history to redo."


@dataclass(frozen=True)
class HistoryEntry:
    move: Move
    state: GameState  # snapshot taken after the move was applied


@dataclass(frozen=True)
class HistoryStep:
    """Result of an undo or redo.

    ``state`` is None when the cursor could not move; ``message`` then says why.
    ``move`` is the move that was undone or redone.
    """

    state: Optional[GameState]
    move: Optional[Move] = None
    message: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.state is not None


class MoveHistory:
    def __init__(self, initial_state: GameState) -> None:
        if initial_state is None:
            raise ValueError("MoveHistory needs an initial state snapshot.")
        self._initial = initial_state.copy()
        self._log: List[HistoryEntry] = []
        self._cursor = -1

    def __len__(self) -> int:
        return len(self._log)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor >= 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._log) - 1

    def commit(self, move: Move, state: GameState) -> None:
        if move.move_number is not None:
            raise ValueError(f"Move already numbered #{move.move_number}.")

        # Committing after an undo drops the undone branch for good.
        if self.can_redo:
            dropped = len(self._log) - self._cursor - 1
            del self._log[self._cursor + 1 :]
            logger.debug("Discarded %d undone move(s) from history", dropped)

        move.assign_number(len(self._log) + 1)
        self._log.append(HistoryEntry(move.copy(), state.copy()))
        self._cursor = len(self._log) - 1

    def undo(self) -> HistoryStep:
        if self._cursor < 0:
            logger.info(NOTHING_TO_UNDO)
            return HistoryStep(state=None, message=NOTHING_TO_UNDO)

        undone = self._log[self._cursor].move.copy()
        self._cursor -= 1
        if self._cursor < 0:
            return HistoryStep(state=self._initial.copy(), move=undone)
        return HistoryStep(state=self._log[self._cursor].state.copy(), move=undone)

    def redo(self) -> HistoryStep:
        if not self.can_redo:
            logger.info(NOTHING_TO_REDO)
            return HistoryStep(state=None, message=NOTHING_TO_REDO)

        self._cursor += 1
        entry = self._log[self._cursor]
        return HistoryStep(state=entry.state.copy(), move=entry.move.copy())

    def clear(self, initial_state: Optional[GameState] = None) -> None:
        self._log.clear()
        self._cursor = -1
        if initial_state is not None:
            self._initial = initial_state.copy()

    def moves(self) -> List[Move]:
        return [entry.move.copy() for entry in self._log]

    def current_move(self) -> Optional[Move]:
        if self._cursor < 0:
            return None
        return self._log[self._cursor].move.copy()

    @property
    def initial_state(self) -> GameState:
        return self._initial.copy()
