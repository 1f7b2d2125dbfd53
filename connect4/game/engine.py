"""Game controller: the Connect4 state machine."""

import logging

from ..core.bus import EventBus, get_event_bus
from ..core.config import get_settings
from ..core.errors import (
    Connect4Error,
    MoveRejected,
    ReplayUnavailable,
    UndoUnavailable,
)
from ..core.events import Event, EventType
from ..core.types import (
    GameState,
    GameStatus,
    LastMove,
    Modal,
    MoveRecord,
    Player,
)
from ..reporting.interface import ResultReporter, build_payload
from ..storage.move_log import MoveLog
from .board import Board
from .replay import ReplayScheduler, Timer
from .rules import WinDetector


logger = logging.getLogger(__name__)


class GameController:
    """Owns the board, the game state and the move log.

    Stateful controller that:
    - Applies moves and alternates players
    - Detects wins/draws
    - Offers one level of undo
    - Replays recorded games through a `ReplayScheduler`
    - Emits events for state changes

    The public methods never raise on bad input or in the wrong state.
    They return False and leave the board and state untouched.
    """

    def __init__(
        self,
        move_log: MoveLog | None = None,
        reporter: ResultReporter | None = None,
        timer: Timer | None = None,
        bus: EventBus | None = None,
        detector: WinDetector | None = None,
        replay_interval: float | None = None,
    ):
        """Initialize controller.

        Args:
            move_log: Move log (in-memory only if None)
            reporter: Receives finished live games (none if None)
            timer: Event-loop timer driving replays (replay disabled if None)
            bus: Event bus (uses global if None)
            detector: Win detector (4 in a row if None)
            replay_interval: Seconds between replayed moves (settings if None)
        """
        self.bus = bus or get_event_bus()
        self.detector = detector or WinDetector()
        self.move_log = move_log if move_log is not None else MoveLog()
        self.reporter = reporter

        if replay_interval is None:
            replay_interval = get_settings().game.replay_interval
        self.scheduler = ReplayScheduler(timer, replay_interval) if timer is not None else None

        self._board = Board()
        self._state = GameState(
            status=GameStatus.NOT_STARTED,
            game_id=self.move_log.last_game_id(),
            modal=Modal.BEGIN,
        )

    # ─────────────────────────────────────────────────────────
    # LIFECYCLE
    # ─────────────────────────────────────────────────────────

    def begin_game(self) -> GameState:
        """Start a new game with a fresh id and an empty board.

        Returns:
            Initial game state
        """
        if self._state.replaying:
            self.cancel_replay()

        game_id = max(self._state.game_id, self.move_log.last_game_id()) + 1
        self._board.clear()
        self._state = GameState(
            status=GameStatus.IN_PROGRESS,
            current_player=Player.ONE,
            turn_count=0,
            game_id=game_id,
            modal=self._state.modal,
        )

        logger.info("Game %d started", game_id)
        self.bus.publish(Event(
            type=EventType.GAME_STARTED,
            data={"game_id": game_id, "first_player": int(Player.ONE)},
            source="game_controller"
        ))
        return self.state

    def restart(self) -> GameState:
        """Start a new game and hide any open modal."""
        self.begin_game()
        self.dismiss_modal()
        return self.state

    def dismiss_modal(self) -> None:
        self._set_modal(Modal.NONE)

    def _set_modal(self, modal: Modal) -> None:
        if self._state.modal == modal:
            return
        self._state.modal = modal
        self.bus.publish(Event(
            type=EventType.MODAL_CHANGED,
            data={"modal": modal.value},
            source="game_controller"
        ))

    # ─────────────────────────────────────────────────────────
    # MOVES
    # ─────────────────────────────────────────────────────────

    def make_move(self, column: int) -> bool:
        """Drop the current player's piece into a column.

        Args:
            column: Column to drop piece (0-6)

        Returns:
            True if the move was applied, False if it was ignored
        """
        try:
            if self._state.replaying:
                raise MoveRejected("Replay in progress")
            if self._state.status != GameStatus.IN_PROGRESS:
                raise MoveRejected(f"Game not in progress ({self._state.status.name})")
            self._apply_move(column, record=True)
        except Connect4Error as e:
            logger.debug("Move to column %r rejected: %s", column, e)
            self.bus.publish(Event(
                type=EventType.INVALID_MOVE,
                data={"column": column, "reason": str(e)},
                source="game_controller"
            ))
            return False
        return True

    def _apply_move(self, column: int, record: bool) -> None:
        """Place a piece and resolve the outcome.

        Raises:
            InvalidColumn: If column is outside the board
            ColumnFull: If the column is full
        """
        state = self._state
        player = state.current_player

        row = self._board.drop(column, player)
        state.last_move = LastMove(column=int(column), row=row, player=player)

        if record:
            self.move_log.append(MoveRecord(
                game_id=state.game_id,
                turn_index=state.turn_count,
                player=player,
                column=int(column),
            ))

        winning_line = self.detector.winning_line(self._board, column, row, player)

        if winning_line:
            state.turn_count += 1
            state.status = GameStatus.WON
            state.winner = player
            logger.info("Game %d won by player %d in %d moves", state.game_id, player, state.turn_count)
            self.bus.publish(Event(
                type=EventType.GAME_WON,
                data={"game_id": state.game_id, "winner": int(player), "positions": winning_line},
                source="game_controller"
            ))
            self._finish(Modal.WIN)
        elif self._board.is_full():
            state.turn_count += 1
            state.status = GameStatus.DRAW
            logger.info("Game %d drawn", state.game_id)
            self.bus.publish(Event(
                type=EventType.GAME_DRAW,
                data={"game_id": state.game_id},
                source="game_controller"
            ))
            self._finish(Modal.DRAW)
        else:
            # Continue game - switch turns
            state.turn_count += 1
            state.current_player = player.other
            self.bus.publish(Event(
                type=EventType.TURN_CHANGED,
                data={"player": int(state.current_player), "turn": state.turn_count},
                source="game_controller"
            ))

        self.bus.publish(Event(
            type=EventType.MOVE_MADE,
            data={"column": int(column), "row": row, "player": int(player), "turn": state.turn_count},
            source="game_controller"
        ))

    def _finish(self, modal: Modal) -> None:
        self._set_modal(modal)
        if self._state.replaying:
            return
        self._report()

    def _report(self) -> None:
        if self.reporter is None:
            return
        state = self._state
        payload = build_payload(
            state.game_id,
            self.move_log.read_all(state.game_id),
            result="win" if state.status == GameStatus.WON else "draw",
            winner=state.winner,
        )
        try:
            self.reporter.report(payload)
        except Exception:
            logger.exception("Reporting game %d via %s failed", state.game_id, self.reporter.get_name())
            return
        self.bus.publish(Event(
            type=EventType.RESULT_REPORTED,
            data=payload,
            source="game_controller"
        ))

    def undo_move(self) -> bool:
        """Take back the most recent move.

        Only one consecutive undo is possible: the last move is forgotten
        once it has been undone.

        Returns:
            True if a move was undone
        """
        state = self._state
        try:
            if state.replaying or state.status != GameStatus.IN_PROGRESS:
                raise UndoUnavailable(f"Game not in progress ({state.status.name})")
            if state.last_move is None:
                raise UndoUnavailable("No move to undo")
        except UndoUnavailable as e:
            logger.debug("Undo ignored: %s", e)
            return False

        last = state.last_move
        self._board.remove_top(last.column)
        state.current_player = last.player
        state.turn_count -= 1
        state.last_move = None
        self.move_log.remove_last(state.game_id)

        self.bus.publish(Event(
            type=EventType.MOVE_UNDONE,
            data={"column": last.column, "row": last.row, "player": int(last.player), "turn": state.turn_count},
            source="game_controller"
        ))
        return True

    # ─────────────────────────────────────────────────────────
    # REPLAY
    # ─────────────────────────────────────────────────────────

    def start_replay(self, game_id: int | None = None) -> bool:
        """Replay a recorded game from an empty board.

        Args:
            game_id: Game to replay (current game if None)

        Returns:
            True if the replay was scheduled
        """
        state = self._state
        if game_id is None:
            game_id = state.game_id
        try:
            if self.scheduler is None:
                raise ReplayUnavailable("No timer configured")
            if state.status == GameStatus.IN_PROGRESS and not state.replaying:
                raise ReplayUnavailable("Live game in progress")
            moves = self.move_log.read_all(game_id)
            if not moves:
                raise ReplayUnavailable(f"No recorded moves for game {game_id}")
        except ReplayUnavailable as e:
            logger.debug("Replay of game %s ignored: %s", game_id, e)
            return False

        if state.replaying:
            # Close the superseded run before announcing the new one
            self.cancel_replay()
        self._board.clear()
        self._state = GameState(
            status=GameStatus.IN_PROGRESS,
            current_player=Player.ONE,
            turn_count=0,
            game_id=game_id,
            replaying=True,
            modal=state.modal,
        )
        self.dismiss_modal()

        logger.info("Replaying game %d (%d moves)", game_id, len(moves))
        self.bus.publish(Event(
            type=EventType.REPLAY_STARTED,
            data={"game_id": game_id, "moves": len(moves)},
            source="game_controller"
        ))
        self.scheduler.start(moves, self._deliver_replayed, self._on_replay_finished)
        return True

    def _deliver_replayed(self, record: MoveRecord) -> None:
        state = self._state
        if state.status != GameStatus.IN_PROGRESS:
            logger.warning("Game %d already over, dropping replayed %s", state.game_id, record)
            self.cancel_replay()
            return
        if record.player != state.current_player:
            logger.warning("Replayed %s expected player %d", record, state.current_player)
        try:
            self._apply_move(record.column, record=False)
        except Connect4Error as e:
            logger.warning("Replayed %s rejected: %s", record, e)
            self.cancel_replay()

    def _on_replay_finished(self) -> None:
        state = self._state
        state.replaying = False
        if state.status == GameStatus.IN_PROGRESS:
            # Recorded game was never finished; keep the board but do not resume it
            state.status = GameStatus.NOT_STARTED
        logger.info("Replay of game %d finished", state.game_id)
        self.bus.publish(Event(
            type=EventType.REPLAY_FINISHED,
            data={"game_id": state.game_id, "status": state.status.name},
            source="game_controller"
        ))

    def cancel_replay(self) -> bool:
        """Stop a running replay, keeping the partially rebuilt board.

        Returns:
            True if a replay was running
        """
        state = self._state
        if not state.replaying:
            return False

        delivered = 0
        if self.scheduler is not None:
            self.scheduler.cancel()
            delivered = self.scheduler.cursor
        state.replaying = False
        if state.status == GameStatus.IN_PROGRESS:
            state.status = GameStatus.NOT_STARTED

        logger.info("Replay of game %d cancelled after %d moves", state.game_id, delivered)
        self.bus.publish(Event(
            type=EventType.REPLAY_CANCELLED,
            data={"game_id": state.game_id, "delivered": delivered},
            source="game_controller"
        ))
        return True

    # ─────────────────────────────────────────────────────────
    # READ-ONLY ACCESS
    # ─────────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        """Get a copy of the current game state."""
        return self._state.copy()

    @property
    def board(self) -> Board:
        """Get a copy of the board."""
        return self._board.copy()

    @property
    def modal(self) -> Modal:
        return self._state.modal

    @property
    def legal_moves(self) -> list[int]:
        if self._state.status != GameStatus.IN_PROGRESS or self._state.replaying:
            return []
        return self._board.legal_moves()

    @property
    def can_undo(self) -> bool:
        """Check if an undo is possible right now."""
        state = self._state
        return (
            state.status == GameStatus.IN_PROGRESS
            and not state.replaying
            and state.last_move is not None
        )

    @property
    def is_game_over(self) -> bool:
        """Check if game is over."""
        return self._state.is_finished

    @property
    def is_replaying(self) -> bool:
        return self._state.replaying
