"""Game logic module for Connect4."""

from .board import COLUMNS, ROWS, Board
from .engine import GameController
from .replay import ReplayScheduler, Timer
from .rules import WinDetector, evaluate


__all__ = [
    "COLUMNS",
    "ROWS",
    "Board",
    "WinDetector",
    "evaluate",
    "GameController",
    "ReplayScheduler",
    "Timer",
]
