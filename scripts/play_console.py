#!/usr/bin/env python3
"""Play Numerical Tic-Tac-Toe in the console, against a friend or the computer."""

import argparse
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

import yaml

from numtictactoe import GameSession, GameStatus, PlayerKind, SessionConfig, SessionContext
from numtictactoe.core import Board
from numtictactoe.errors import SerializationError

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  m <row> <col> <value>  place a piece, e.g. m 1 2 7 (rows/cols 1-3)
  u                      undo the last move (repeat, then 'f' to continue)
  r                      redo an undone move
  f                      finish undo/redo and resume play
  s                      save the game
  l                      load the saved game
  h                      show this help
  q                      quit"""

RULES_TEXT = """Numerical Tic-Tac-Toe: player 1 places odd pieces (1,3,5,7,9), player 2 even
pieces (2,4,6,8). Each piece is used once. The first to make a row, column or
diagonal sum to 15 wins."""


def load_yaml_config(path_str: Optional[str]) -> Dict:
    if not path_str:
        return {}
    path = Path(path_str)
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def build_config(args: argparse.Namespace, cfg: Dict) -> SessionConfig:
    values = dict(cfg)
    overrides = {
        "save_dir": args.save_dir,
        "game_mode": args.mode,
        "player_one_name": args.player_one,
        "player_two_name": args.player_two,
        "seed": args.seed,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return SessionConfig.from_mapping(values)


def format_board(board: Board) -> str:
    lines = ["    1   2   3"]
    for row in range(board.size):
        cells = []
        for col in range(board.size):
            piece = board.get_square(row, col).piece
            cells.append(str(piece.value) if piece else " ")
        lines.append(f"{row + 1}   " + " | ".join(cells))
        if row < board.size - 1:
            lines.append("   ---+---+---")
    return "\n".join(lines)


class ConsoleController:
    """Dispatches console commands to a GameSession and renders the replies."""

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self.undo_redo_active = False
        self.running = True

    def handle_command(self, text: str) -> List[str]:
        text = text.strip()
        if not text:
            return ["Invalid input - cannot be empty."]

        command = text[0]
        if command == "m":
            return self._move(text)
        if command == "u":
            self.undo_redo_active = True
            step = self.session.undo()
            return [step.message] if step.message else [format_board(self.session.board)]
        if command == "r":
            self.undo_redo_active = True
            step = self.session.redo()
            return [step.message] if step.message else [format_board(self.session.board)]
        if command == "f":
            self.undo_redo_active = False
            return [format_board(self.session.board)] + self._computer_turn()
        if command == "s":
            try:
                path = self.session.save()
            except (OSError, SerializationError) as exc:
                logger.error("Failed to save game: %s", exc)
                return [f"Failed to save game: {exc}"]
            return [f"Game saved successfully to {path}."]
        if command == "l":
            report = self.session.load()
            lines = list(report.warnings)
            if report.loaded:
                lines += [format_board(self.session.board), f"Successfully loaded game from {report.path}"]
            return lines
        if command == "h":
            return [RULES_TEXT, HELP_TEXT]
        if command == "q":
            self.running = False
            if self.session.status == GameStatus.IN_PROGRESS:
                self.session.quit()
            return ["Quitting game."]
        if not command.isalpha():
            return [f"Invalid command: '{text}'. Enter 'm' for a move, 'u' for undo, etc."]
        return ["Invalid command, please re-enter."]

    def _move(self, text: str) -> List[str]:
        outcome = self.session.submit_command(text)
        if not outcome.accepted:
            return [outcome.reason]
        return [format_board(self.session.board)] + self._game_over_lines() + self._computer_turn()

    def _computer_turn(self) -> List[str]:
        session = self.session
        if self.undo_redo_active or session.status != GameStatus.IN_PROGRESS:
            return []
        if session.current_player.kind != PlayerKind.COMPUTER:
            return []
        outcome = session.request_move()
        if not outcome.accepted:
            return [f"Computer tried to use piece {outcome.move.value if outcome.move else '?'}: {outcome.reason}"]
        return [f"Computer played {outcome.move}", format_board(session.board)] + self._game_over_lines()

    def _game_over_lines(self) -> List[str]:
        session = self.session
        if session.status == GameStatus.WON:
            self.running = False
            return [f"{session.winner.name} wins!"]
        if session.status == GameStatus.DRAW:
            self.running = False
            return ["It's a draw!"]
        return []


def play_interactive(
    session: GameSession,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> GameStatus:
    controller = ConsoleController(session)
    write(format_board(session.board))
    write(HELP_TEXT)
    while controller.running:
        try:
            text = read(f"{session.current_player.name} > ")
        except EOFError:
            break
        for line in controller.handle_command(text):
            write(line)
    return session.status


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Numerical Tic-Tac-Toe in the console.")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--mode", choices=["HumanVsHuman", "HumanVsComputer"])
    parser.add_argument("--save-dir")
    parser.add_argument("--player-one")
    parser.add_argument("--player-two")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--load", action="store_true", help="Resume the saved game")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = build_config(args, load_yaml_config(args.config))
    session = GameSession.new(SessionContext(config))
    if args.load:
        report = session.load()
        for warning in report.warnings:
            print(warning)

    play_interactive(session)


if __name__ == "__main__":
    main()
