import pytest

from numtictactoe.core import GameMode, Move, Piece, initialize_game_state
from numtictactoe.history import MoveHistory
from numtictactoe.history.move_history import NOTHING_TO_REDO, NOTHING_TO_UNDO
from numtictactoe.players import create_players


def fresh_state():
    return initialize_game_state(create_players(GameMode.HUMAN_VS_HUMAN), game_mode=GameMode.HUMAN_VS_HUMAN)


def play(history, state, move):
    state.board.place_piece(move.row, move.col, Piece(move.value, move.player_id))
    state.turn_number += 1
    history.commit(move, state)


def test_requires_initial_state():
    with pytest.raises(ValueError):
        MoveHistory(None)


def test_undo_on_empty_history_reports_message():
    history = MoveHistory(fresh_state())
    step = history.undo()
    assert not step.applied
    assert step.message == NOTHING_TO_UNDO
    assert history.cursor == -1


def test_commit_numbers_moves_sequentially():
    state = fresh_state()
    history = MoveHistory(state)
    play(history, state, Move(0, 0, 9, 1))
    play(history, state, Move(0, 1, 2, 2))

    assert [m.move_number for m in history.moves()] == [1, 2]
    assert history.cursor == 1
    assert history.current_move().value == 2


def test_undo_back_to_initial_then_redo():
    state = fresh_state()
    history = MoveHistory(state)
    play(history, state, Move(0, 0, 9, 1))
    play(history, state, Move(0, 1, 2, 2))

    step = history.undo()
    assert step.move.value == 2
    assert step.state.board.occupied_count() == 1
    assert step.state.turn_number == 1

    step = history.undo()
    assert step.state.board.occupied_count() == 0
    assert step.state.turn_number == 0
    assert history.cursor == -1
    assert history.undo().message == NOTHING_TO_UNDO

    step = history.redo()
    assert step.move.value == 9
    assert step.state.board.get_square(0, 0).piece == Piece(9, 1)
    history.redo()
    step = history.redo()
    assert not step.applied
    assert step.message == NOTHING_TO_REDO


def test_commit_after_undo_discards_redo_branch():
    state = fresh_state()
    history = MoveHistory(state)
    play(history, state, Move(0, 0, 9, 1))
    play(history, state, Move(0, 1, 2, 2))

    state = history.undo().state
    play(history, state, Move(2, 2, 4, 2))

    assert len(history) == 2
    assert not history.can_redo
    assert history.moves()[-1].value == 4
    assert history.moves()[-1].move_number == 2
    assert history.redo().message == NOTHING_TO_REDO


def test_entries_are_snapshots():
    state = fresh_state()
    history = MoveHistory(state)
    play(history, state, Move(0, 0, 9, 1))
    state.board.place_piece(1, 1, Piece(5, 1))

    play(history, state, Move(2, 2, 1, 1))
    assert history.undo().state.board.occupied_count() == 1


def test_clear_can_replace_initial_state():
    state = fresh_state()
    history = MoveHistory(state)
    play(history, state, Move(0, 0, 9, 1))

    history.clear(initial_state=state)
    assert len(history) == 0
    assert history.cursor == -1
    assert history.initial_state.board.get_square(0, 0).piece == Piece(9, 1)

    play(history, state, Move(1, 1, 4, 2))
    assert history.moves()[0].move_number == 1
    assert history.undo().state.board.occupied_count() == 1


def test_numbered_move_is_refused_without_dropping_redo():
    state = fresh_state()
    history = MoveHistory(state)
    first = Move(0, 0, 9, 1)
    play(history, state, first)
    play(history, state, Move(0, 1, 2, 2))
    history.undo()

    with pytest.raises(ValueError):
        history.commit(first, state)
    assert len(history) == 2
    assert history.can_redo


def test_history_keeps_its_own_moves():
    state = fresh_state()
    history = MoveHistory(state)
    move = Move(0, 0, 9, 1)
    play(history, state, move)

    move.value = 7
    history.moves()[0].value = 5
    assert history.current_move().value == 9
