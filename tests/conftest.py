"""Shared fixtures for the Connect4 tests."""

from collections.abc import Callable, Iterable
from typing import Any

import pytest

from connect4.core.bus import EventBus, reset_event_bus
from connect4.core.config import reset_settings
from connect4.core.events import Event, EventType
from connect4.core.types import Player
from connect4.game.board import Board
from connect4.game.engine import GameController
from connect4.reporting.log_reporter import LogReporter
from connect4.storage.memory import MemoryStore
from connect4.storage.move_log import MoveLog


# 42 alternating moves filling the board without four in a row anywhere.
DRAW_SEQUENCE = (
    [0, 1, 1, 0, 1, 0, 0, 1, 0, 1, 1, 0]
    + [2, 3, 3, 2, 3, 2, 2, 3, 2, 3, 3, 2]
    + [4, 5, 6, 4, 5, 4, 5, 6, 4, 6, 6, 5, 4, 5, 6, 4, 5, 6]
)

VERTICAL_WIN = [0, 1, 0, 1, 0, 1, 0]
HORIZONTAL_WIN = [0, 4, 1, 4, 2, 4, 3]
RISING_WIN = [0, 1, 1, 2, 2, 3, 2, 3, 3, 6, 3]


class ManualHandle:
    def __init__(self, when: float, callback: Callable[[], Any]):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimer:
    """Deterministic stand-in for an event loop's ``call_later``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.handles: list[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], Any]) -> ManualHandle:
        handle = ManualHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        """Move time forward, firing due callbacks in order."""
        target = self.now + seconds
        while True:
            due = [h for h in self.pending if h.when <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.handles.remove(handle)
            self.now = handle.when
            handle.callback()
        self.now = target

    def run_all(self) -> None:
        while self.pending:
            self.advance(max(h.when for h in self.pending) - self.now)


@pytest.fixture(autouse=True)
def _isolate_singletons(monkeypatch):
    for key in ("GAME_REPLAY_INTERVAL", "STORE_BACKEND", "STORE_PATH", "REPORTER_BACKEND"):
        monkeypatch.delenv(key, raising=False)
    reset_event_bus()
    reset_settings()
    yield
    reset_event_bus()
    reset_settings()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def move_log(store) -> MoveLog:
    return MoveLog(store)


@pytest.fixture
def reporter() -> LogReporter:
    return LogReporter()


@pytest.fixture
def timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def controller(move_log, reporter, timer, bus) -> GameController:
    return GameController(
        move_log=move_log,
        reporter=reporter,
        timer=timer,
        bus=bus,
        replay_interval=1.0,
    )


@pytest.fixture
def events(bus) -> Callable[..., list[Event]]:
    """Subscribe to event types and collect what is published."""

    def collect(*types: EventType) -> list[Event]:
        seen: list[Event] = []
        for event_type in types:
            bus.subscribe(event_type, seen.append)
        return seen

    return collect


def play(controller: GameController, columns: Iterable[int]) -> list[bool]:
    """Apply moves in order, returning each move's result."""
    return [controller.make_move(col) for col in columns]


def make_board(columns: dict[int, list[int]]) -> Board:
    """Build a board from bottom-up piece lists per column."""
    board = Board()
    for col, pieces in columns.items():
        for piece in pieces:
            board.drop(col, Player(piece))
    return board
