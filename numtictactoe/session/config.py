from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from numtictactoe.core import DEFAULT_GAME_MODE, GameMode
from numtictactoe.persistence import DEFAULT_SAVE_DIR, SnapshotStore


@dataclass
class SessionConfig:
    save_dir: str = DEFAULT_SAVE_DIR
    game_type: str = "NumTicTacToe"
    game_mode: GameMode = DEFAULT_GAME_MODE
    player_one_name: str = "Human1"
    player_two_name: Optional[str] = None  # "Computer" or "Human2" depending on mode
    seed: Optional[int] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "SessionConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown session config keys: {sorted(unknown)}")
        kwargs = {k: v for k, v in values.items() if v is not None}
        if "game_mode" in kwargs:
            kwargs["game_mode"] = parse_game_mode(kwargs["game_mode"])
        return cls(**kwargs)


def parse_game_mode(value: Any) -> GameMode:
    if isinstance(value, GameMode):
        return value
    text = str(value).strip()
    for mode in GameMode:
        if text.lower() in (mode.value.lower(), mode.name.lower()):
            return mode
    raise ValueError(f"Unknown game mode: {value!r}")


@dataclass
class SessionContext:
    """Everything a session needs from its surroundings, passed in explicitly."""

    config: SessionConfig = field(default_factory=SessionConfig)
    store: Optional[SnapshotStore] = None

    def __post_init__(self) -> None:
        if self.store is None:
            self.store = SnapshotStore(self.config.save_dir, self.config.game_type)
