"""Save-file encoding and storage."""

from .serializer import DELIM, EMPTY_MARKER, DecodedSnapshot, deserialize, serialize, serialize_board
from .store import DEFAULT_SAVE_DIR, SNAPSHOT_SUFFIX, LoadReport, SnapshotStore

__all__ = [
    "DELIM",
    "EMPTY_MARKER",
    "DecodedSnapshot",
    "deserialize",
    "serialize",
    "serialize_board",
    "DEFAULT_SAVE_DIR",
    "SNAPSHOT_SUFFIX",
    "LoadReport",
    "SnapshotStore",
]
