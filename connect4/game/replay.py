"""Paced, cancellable delivery of recorded moves."""

import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from ..core.types import MoveRecord


logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


class Timer(Protocol):
    """Anything that can run a callback later on the current event loop.

    ``asyncio.AbstractEventLoop`` satisfies this protocol.
    """

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class ReplayScheduler:
    """Delivers a queue of moves one at a time at a fixed interval.

    The next delivery is scheduled only after the previous one returned, so
    deliveries never overlap. ``cancel()`` prevents the pending delivery
    from firing and leaves whatever state the deliveries already produced.
    Starting a new run cancels the current one.
    """

    def __init__(self, timer: Timer, interval: float = 1.0):
        if interval <= 0:
            raise ValueError(f"Replay interval must be positive (got {interval})")
        self.timer = timer
        self.interval = interval
        self._moves: list[MoveRecord] = []
        self._cursor = 0
        self._deliver: Callable[[MoveRecord], Any] | None = None
        self._on_finished: Callable[[], Any] | None = None
        self._handle: TimerHandle | None = None
        self._active = False
        self._run = 0

    def start(
        self,
        moves: Sequence[MoveRecord],
        deliver: Callable[[MoveRecord], Any],
        on_finished: Callable[[], Any] | None = None,
    ) -> None:
        """Begin a run; the first move is delivered after one interval."""
        self.cancel()
        self._run += 1
        self._active = True
        self._moves = list(moves)
        self._cursor = 0
        self._deliver = deliver
        self._on_finished = on_finished
        logger.debug("Replay run %d started with %d moves", self._run, len(self._moves))
        self._schedule_next()

    def cancel(self) -> bool:
        """Stop delivery. Returns True if a run was active."""
        if not self._active:
            return False
        self._active = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        logger.debug("Replay run %d cancelled at move %d", self._run, self._cursor)
        return True

    def _schedule_next(self) -> None:
        run = self._run
        self._handle = self.timer.call_later(self.interval, lambda: self._tick(run))

    def _tick(self, run: int) -> None:
        # Timers that cannot unschedule may still fire a stale handle
        if run != self._run or not self._active:
            return
        self._handle = None

        if self._cursor < len(self._moves):
            move = self._moves[self._cursor]
            self._cursor += 1
            assert self._deliver is not None
            self._deliver(move)

        # The delivery itself may have cancelled or restarted the run
        if run != self._run or not self._active:
            return

        if self._cursor < len(self._moves):
            self._schedule_next()
        else:
            self._active = False
            logger.debug("Replay run %d finished", run)
            if self._on_finished is not None:
                self._on_finished()

    @property
    def is_running(self) -> bool:
        return self._active

    @property
    def cursor(self) -> int:
        """Number of moves delivered in the current run."""
        return self._cursor

    @property
    def remaining(self) -> int:
        return len(self._moves) - self._cursor
