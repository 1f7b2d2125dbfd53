"""Connect4 game engine."""

from .core import GameState, GameStatus, Modal, MoveRecord, Player
from .game import Board, GameController, ReplayScheduler, WinDetector
from .storage import JsonFileStore, MemoryStore, MoveLog


__all__ = [
    "Board",
    "GameController",
    "GameState",
    "GameStatus",
    "JsonFileStore",
    "MemoryStore",
    "Modal",
    "MoveLog",
    "MoveRecord",
    "Player",
    "ReplayScheduler",
    "WinDetector",
]
