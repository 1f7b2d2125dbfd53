"""Move persistence for Connect4."""

from .interface import KeyValueStore
from .json_file import JsonFileStore
from .memory import MemoryStore
from .move_log import MoveLog


__all__ = [
    "KeyValueStore",
    "JsonFileStore",
    "MemoryStore",
    "MoveLog",
]
