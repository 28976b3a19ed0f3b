"""Undo/redo history for a game session."""

from .move_history import HistoryEntry, HistoryStep, MoveHistory

__all__ = ["HistoryEntry", "HistoryStep", "MoveHistory"]
