from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from numtictactoe.core import GameState, Player

from .serializer import deserialize, serialize

logger = logging.getLogger(__name__)

DEFAULT_SAVE_DIR = "Game_saves"
SNAPSHOT_SUFFIX = "-GameSnapshot.txt"


@dataclass
class LoadReport:
    path: Path
    state: Optional[GameState] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def loaded(self) -> bool:
        return self.state is not None


class SnapshotStore:
    """Keeps one overwritten snapshot file per game type."""

    def __init__(self, directory: Union[str, Path] = DEFAULT_SAVE_DIR, game_type: str = "NumTicTacToe") -> None:
        if not game_type:
            raise ValueError("game_type must be a non-empty name.")
        self.directory = Path(directory)
        self.game_type = game_type

    @property
    def path(self) -> Path:
        return self.directory / f"{self.game_type}{SNAPSHOT_SUFFIX}"

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, state: GameState) -> Path:
        payload = serialize(state)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path.write_text(payload, encoding="utf-8")
        logger.info("Saved game to %s", self.path)
        return self.path

    def load(self, players: Sequence[Player]) -> LoadReport:
        report = LoadReport(self.path)
        if not self.exists():
            message = f"No saved game found at {self.path}"
            logger.warning(message)
            report.warnings.append(message)
            return report

        try:
            payload = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            message = f"Couldn't load game from {self.path}: {exc}"
            logger.error(message)
            report.warnings.append(message)
            return report

        if not payload.strip():
            message = f"Saved game file {self.path} is empty"
            logger.warning(message)
            report.warnings.append(message)
            return report

        decoded = deserialize(payload, players)
        report.state = decoded.state
        report.warnings.extend(decoded.warnings)
        logger.info("Loaded game from %s (%d warning(s))", self.path, len(report.warnings))
        return report
