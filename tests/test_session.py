import pytest

from numtictactoe import GameSession, SessionConfig, SessionContext, SessionEvent
from numtictactoe.core import GameMode, GameStatus, Move, PlayerKind
from numtictactoe.errors import InvalidTransitionError
from numtictactoe.history.move_history import NOTHING_TO_UNDO
from numtictactoe.session import GAME_OVER, parse_game_mode

WIN_MOVES = ["m 1 1 9", "m 1 2 2", "m 2 2 5", "m 2 1 4", "m 3 3 1"]
DRAW_MOVES = [
    "m 1 1 1", "m 1 3 2", "m 1 2 3",
    "m 2 1 4", "m 3 1 5", "m 2 2 6",
    "m 2 3 7", "m 3 2 8", "m 3 3 9",
]


def make_session(tmp_path, mode=GameMode.HUMAN_VS_HUMAN, seed=None):
    config = SessionConfig(save_dir=str(tmp_path), game_mode=mode, seed=seed)
    return GameSession.new(SessionContext(config))


def play_all(session, commands):
    outcomes = [session.submit_command(text) for text in commands]
    assert all(outcome.accepted for outcome in outcomes), [o.reason for o in outcomes]
    return outcomes[-1]


def test_new_session_starts_in_progress(tmp_path):
    session = make_session(tmp_path)
    assert session.status == GameStatus.IN_PROGRESS
    assert session.turn_number == 0
    assert session.current_player.name == "Human1"
    assert [p.name for p in session.players] == ["Human1", "Human2"]


def test_session_requires_context_and_players(tmp_path):
    with pytest.raises(ValueError):
        GameSession(None, ())
    with pytest.raises(ValueError):
        GameSession(SessionContext(SessionConfig(save_dir=str(tmp_path))), None)


def test_accepted_move_advances_turn(tmp_path):
    session = make_session(tmp_path)
    outcome = session.submit_command("m 2 2 5")

    assert outcome.accepted
    assert outcome.move.move_number == 1
    assert session.board.occupied_count() == 1
    assert session.turn_number == 1
    assert session.current_player.id == 2
    assert session.players[0].remaining == (1, 3, 7, 9)
    assert session.poll_events() == [SessionEvent("turn", 1)]
    assert session.poll_events() == []


def test_wrong_parity_leaves_state_unchanged(tmp_path):
    session = make_session(tmp_path)
    outcome = session.submit_command("m 1 1 4")

    assert not outcome.accepted
    assert outcome.reason == "Invalid move - value: 4 is not in the valid piece set for player 1."
    assert session.board.occupied_count() == 0
    assert session.turn_number == 0
    assert len(session.history) == 0


def test_move_for_wrong_player_is_rejected(tmp_path):
    session = make_session(tmp_path)
    outcome = session.apply_move(Move(0, 0, 2, 2))
    assert not outcome.accepted
    assert outcome.reason == "It is Human1's turn."


def test_malformed_command_is_rejected(tmp_path):
    session = make_session(tmp_path)
    outcome = session.submit_command("m 1 2")
    assert not outcome.accepted
    assert outcome.reason.startswith("Invalid move format")


def test_winning_diagonal(tmp_path):
    session = make_session(tmp_path)
    outcome = play_all(session, WIN_MOVES)

    assert outcome.status == GameStatus.WON
    assert outcome.winner_id == 1
    assert session.winner.name == "Human1"
    assert session.turn_number == 4
    assert SessionEvent("status", GameStatus.WON) in session.poll_events()


def test_full_board_without_line_is_draw(tmp_path):
    session = make_session(tmp_path)
    outcome = play_all(session, DRAW_MOVES)

    assert outcome.status == GameStatus.DRAW
    assert session.winner is None
    assert session.board.is_full()


def test_moves_after_game_over_are_rejected(tmp_path):
    session = make_session(tmp_path)
    play_all(session, WIN_MOVES)

    outcome = session.submit_command("m 1 3 3")
    assert not outcome.accepted
    assert outcome.reason == GAME_OVER
    assert session.undo().message == GAME_OVER
    assert session.redo().message == GAME_OVER


def test_undo_redo_restores_snapshots(tmp_path):
    session = make_session(tmp_path)
    play_all(session, ["m 1 1 9", "m 1 2 2"])
    session.poll_events()

    step = session.undo()
    assert step.applied
    assert session.board.occupied_count() == 1
    assert session.turn_number == 1
    assert session.current_player.id == 2
    assert session.players[1].remaining == (2, 4, 6, 8)
    assert session.poll_events() == [SessionEvent("turn", 1)]

    session.undo()
    assert session.board.occupied_count() == 0
    assert session.undo().message == NOTHING_TO_UNDO

    session.redo()
    session.redo()
    assert session.board.occupied_count() == 2
    assert session.turn_number == 2


def test_new_move_after_undo_discards_redo(tmp_path):
    session = make_session(tmp_path)
    play_all(session, ["m 1 1 9", "m 1 2 2"])
    session.undo()

    assert session.submit_command("m 3 3 8").accepted
    assert not session.redo().applied
    assert [m.value for m in session.history.moves()] == [9, 8]


def test_quit_transitions(tmp_path):
    session = make_session(tmp_path)
    assert session.quit() == GameStatus.QUIT
    with pytest.raises(InvalidTransitionError):
        session.quit()
    assert session.submit_command("m 1 1 1").reason == GAME_OVER


def test_quit_after_win_is_invalid(tmp_path):
    session = make_session(tmp_path)
    play_all(session, WIN_MOVES)
    with pytest.raises(InvalidTransitionError):
        session.quit()
    assert session.status == GameStatus.WON


def test_restart_clears_board_and_history(tmp_path):
    session = make_session(tmp_path)
    play_all(session, WIN_MOVES)
    session.restart()

    assert session.status == GameStatus.IN_PROGRESS
    assert session.board.occupied_count() == 0
    assert len(session.history) == 0
    assert session.players[0].remaining == (1, 3, 5, 7, 9)


def test_computer_player_moves_with_strategy(tmp_path):
    session = make_session(tmp_path, mode=GameMode.HUMAN_VS_COMPUTER, seed=7)
    assert session.players[1].kind == PlayerKind.COMPUTER

    session.submit_command("m 2 2 5")
    outcome = session.request_move()

    assert outcome.accepted
    assert outcome.move.player_id == 2
    assert outcome.move.value % 2 == 0
    assert session.board.occupied_count() == 2
    assert session.current_player.id == 1


def test_human_request_needs_command_text(tmp_path):
    session = make_session(tmp_path)
    assert not session.request_move().accepted
    assert session.request_move("m 1 1 1").accepted


def test_save_and_load_restore_position(tmp_path):
    session = make_session(tmp_path)
    play_all(session, ["m 1 1 9", "m 1 2 2", "m 2 2 5"])
    path = session.save()
    assert path.exists()

    other = make_session(tmp_path)
    report = other.load()
    assert report.loaded
    assert other.board == session.board
    assert other.turn_number == 3
    assert other.current_player.id == 2
    assert len(other.history) == 0
    assert other.undo().message == NOTHING_TO_UNDO

    # Loaded position is the new baseline for undo.
    other.submit_command("m 3 3 4")
    other.undo()
    assert other.board == session.board


def test_load_reports_mode_change(tmp_path):
    session = make_session(tmp_path)
    session.submit_command("m 1 1 1")
    session.save()

    other = make_session(tmp_path, mode=GameMode.HUMAN_VS_COMPUTER)
    other.load()
    assert other.game_mode == GameMode.HUMAN_VS_HUMAN
    assert SessionEvent("mode", GameMode.HUMAN_VS_HUMAN) in other.poll_events()


def test_load_without_save_keeps_session(tmp_path):
    session = make_session(tmp_path / "empty")
    session.submit_command("m 1 1 1")
    report = session.load()

    assert not report.loaded
    assert report.warnings
    assert session.board.occupied_count() == 1
    assert len(session.history) == 1


def test_snapshot_is_detached(tmp_path):
    session = make_session(tmp_path)
    snapshot = session.snapshot()
    session.submit_command("m 1 1 1")
    assert snapshot.board.occupied_count() == 0
    assert snapshot.turn_number == 0


def test_config_from_mapping():
    config = SessionConfig.from_mapping({"game_mode": "humanvshuman", "seed": None, "player_one_name": "Ada"})
    assert config.game_mode == GameMode.HUMAN_VS_HUMAN
    assert config.seed is None
    assert config.player_one_name == "Ada"

    with pytest.raises(ValueError):
        SessionConfig.from_mapping({"board_size": 4})
    with pytest.raises(ValueError):
        parse_game_mode("Solo")


def test_replaying_a_move_object_after_undo(tmp_path):
    session = make_session(tmp_path)
    move = Move(0, 0, 9, 1)
    assert session.apply_move(move).accepted
    session.submit_command("m 1 2 2")
    session.undo()
    session.undo()

    outcome = session.apply_move(move)

    assert outcome.accepted
    assert outcome.move.move_number == 1
    assert session.board.occupied_count() == 1
    assert session.turn_number == 1
    assert len(session.history) == 1
    assert session.undo().applied
    assert session.board.occupied_count() == 0


def test_off_board_move_is_rejected(tmp_path):
    session = make_session(tmp_path)
    outcome = session.apply_move(Move(3, 0, 9, 1))

    assert not outcome.accepted
    assert outcome.reason == "Invalid move - square (4, 1) is outside the 3x3 board."
    assert session.board.occupied_count() == 0
    assert session.turn_number == 0


def test_board_checks_come_before_turn_check(tmp_path):
    session = make_session(tmp_path)
    session.submit_command("m 1 1 9")

    outcome = session.apply_move(Move(0, 0, 3, 1))
    assert outcome.reason == "Invalid move - square is already occupied."
    outcome = session.apply_move(Move(1, 1, 3, 1))
    assert outcome.reason == "It is Human2's turn."


def test_load_unreadable_save_file_keeps_session(tmp_path):
    session = make_session(tmp_path)
    session.submit_command("m 1 1 1")
    session.context.store.path.write_bytes(b"\xff\xfe9,\x80,-")

    report = session.load()

    assert not report.loaded
    assert report.warnings[0].startswith("Couldn't load game")
    assert session.board.occupied_count() == 1
    assert len(session.history) == 1
