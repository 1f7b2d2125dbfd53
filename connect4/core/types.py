"""
Shared data types for the Connect4 engine.

These types are the contracts between modules.
All modules communicate using these structures.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto


# ─────────────────────────────────────────────────────────────
# PLAYER, STATUS & MODAL
# ─────────────────────────────────────────────────────────────


class Player(IntEnum):
    """Cell occupant / player identifier."""

    EMPTY = 0
    ONE = 1
    TWO = 2

    def __str__(self) -> str:
        return str(self.value)

    @property
    def other(self) -> "Player":
        """The opponent (EMPTY has no opponent)."""
        if self is Player.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return Player.TWO if self is Player.ONE else Player.ONE

    @property
    def symbol(self) -> str:
        """Get symbol for display."""
        return {0: ".", 1: "X", 2: "O"}[self.value]


class GameStatus(Enum):
    """Current status of the game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    DRAW = auto()


class Modal(str, Enum):
    """Which modal/result the presentation layer should show."""

    BEGIN = "begin"
    WIN = "win"
    DRAW = "draw"
    NONE = "none"


# ─────────────────────────────────────────────────────────────
# MOVES
# ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LastMove:
    """Most recent placement, kept for a single level of undo."""

    column: int
    row: int  # 0 = bottom
    player: Player


@dataclass(frozen=True)
class MoveRecord:
    """One completed move of a recorded game."""

    game_id: int
    turn_index: int
    player: Player
    column: int

    @property
    def key(self) -> str:
        """Store key: ``"{game_id}.{turn_index}"``."""
        return f"{self.game_id}.{self.turn_index}"

    @property
    def value(self) -> str:
        """Store value: ``"{player}.{column}"``."""
        return f"{int(self.player)}.{self.column}"

    @classmethod
    def decode(cls, game_id: int, turn_index: int, value: str) -> "MoveRecord":
        """Rebuild a record from a stored ``"{player}.{column}"`` value.

        Raises:
            ValueError: If the value is not a valid player/column pair
        """
        player_raw, sep, column_raw = str(value).partition(".")
        if not sep:
            raise ValueError(f"Malformed move value: {value!r}")
        player = Player(int(player_raw))
        if player is Player.EMPTY:
            raise ValueError(f"Malformed move value: {value!r}")
        return cls(
            game_id=game_id,
            turn_index=turn_index,
            player=player,
            column=int(column_raw),
        )

    def __str__(self) -> str:
        return f"#{self.turn_index} {self.player.symbol} → Column {self.column}"


# ─────────────────────────────────────────────────────────────
# GAME STATE
# ─────────────────────────────────────────────────────────────


@dataclass
class GameState:
    """Complete game state snapshot (board excluded)."""

    status: GameStatus = GameStatus.NOT_STARTED
    current_player: Player = Player.ONE
    turn_count: int = 0
    game_id: int = 0
    winner: Player | None = None
    last_move: LastMove | None = None
    replaying: bool = False
    modal: Modal = Modal.BEGIN

    @property
    def is_in_progress(self) -> bool:
        return self.status == GameStatus.IN_PROGRESS

    @property
    def is_finished(self) -> bool:
        return self.status in (GameStatus.WON, GameStatus.DRAW)

    def copy(self) -> "GameState":
        """Create a copy of the game state."""
        return GameState(
            status=self.status,
            current_player=self.current_player,
            turn_count=self.turn_count,
            game_id=self.game_id,
            winner=self.winner,
            last_move=self.last_move,
            replaying=self.replaying,
            modal=self.modal,
        )
