"""
Event definitions for the Connect4 engine.

Events enable loose coupling between the engine and its host.
The engine publishes events without knowing who consumes them.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class EventType(Enum):
    """Types of events in the system."""

    # Game events
    GAME_STARTED = auto()
    TURN_CHANGED = auto()
    MOVE_MADE = auto()
    MOVE_UNDONE = auto()
    INVALID_MOVE = auto()
    GAME_WON = auto()
    GAME_DRAW = auto()

    # Replay events
    REPLAY_STARTED = auto()
    REPLAY_FINISHED = auto()
    REPLAY_CANCELLED = auto()

    # Presentation
    MODAL_CHANGED = auto()

    # Collaborators
    RESULT_REPORTED = auto()


@dataclass
class Event:
    """
    Base event structure.

    Attributes:
        type: The type of event
        data: Event-specific payload
        timestamp: When the event was created
        source: Which module created the event
    """

    type: EventType
    data: Any = None
    timestamp: float = field(default_factory=time.time)
    source: str = "unknown"

    def __str__(self) -> str:
        return f"[{self.source}] {self.type.name}: {self.data}"
