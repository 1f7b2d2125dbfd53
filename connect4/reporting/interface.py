"""Abstract interface for result reporting."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..core.types import MoveRecord, Player


def build_payload(
    game_id: int,
    moves: Sequence[MoveRecord],
    result: str,
    winner: Player | None = None,
) -> dict[str, Any]:
    """Build the result payload for a finished game.

    Args:
        game_id: Game that finished
        moves: Its recorded moves in turn order
        result: ``"win"`` or ``"draw"``
        winner: Winning player (None for a draw)

    Returns:
        ``{"gameId", "result", "winner", "moves": [{"turn", "player", "column"}]}``
    """
    return {
        "gameId": game_id,
        "result": result,
        "winner": int(winner) if winner is not None else None,
        "moves": [
            {"turn": m.turn_index, "player": int(m.player), "column": m.column}
            for m in moves
        ],
    }


class ResultReporter(ABC):
    """Receives the payload of every finished live game.

    `report` is called synchronously from the move that ends the game, on
    the host's event loop. Implementations must return promptly and bound
    any I/O with a timeout. They may raise; the engine logs and ignores
    failures.
    """

    @abstractmethod
    def report(self, payload: dict[str, Any]) -> None:
        """Deliver a result payload."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get reporter name for display."""
        pass
