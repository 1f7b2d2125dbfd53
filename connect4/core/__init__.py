"""Core infrastructure for the Connect4 engine."""

from .bus import EventBus, get_event_bus, reset_event_bus
from .config import (
    GameSettings,
    ReporterBackend,
    ReporterSettings,
    Settings,
    StorageSettings,
    StoreBackend,
    get_settings,
    reset_settings,
)
from .errors import (
    ColumnFull,
    Connect4Error,
    EmptyColumn,
    InvalidColumn,
    InvalidRow,
    MoveRejected,
    ReplayUnavailable,
    ReportError,
    StoreUnavailable,
    UndoUnavailable,
)
from .events import Event, EventType
from .types import GameState, GameStatus, LastMove, Modal, MoveRecord, Player


__all__ = [
    # Config
    "get_settings",
    "reset_settings",
    "Settings",
    "GameSettings",
    "StorageSettings",
    "ReporterSettings",
    "StoreBackend",
    "ReporterBackend",
    # Errors
    "Connect4Error",
    "InvalidColumn",
    "InvalidRow",
    "ColumnFull",
    "EmptyColumn",
    "MoveRejected",
    "UndoUnavailable",
    "ReplayUnavailable",
    "StoreUnavailable",
    "ReportError",
    # Types
    "Player",
    "GameStatus",
    "Modal",
    "LastMove",
    "MoveRecord",
    "GameState",
    # Events
    "Event",
    "EventType",
    "EventBus",
    "get_event_bus",
    "reset_event_bus",
]
