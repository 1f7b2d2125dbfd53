"""Win detection for Connect4."""

from collections.abc import Iterator

from ..core.types import Player
from .board import Board


Cell = tuple[int, int]  # (column, row)


class WinDetector:
    """Decides whether the last placed piece completed a line.

    Win condition: ``win_length`` consecutive pieces of one player along
    the column, the row, or either diagonal through the last placed cell.
    Every line is scanned end to end, so a run that does not include the
    last placed cell still counts.
    """

    def __init__(self, win_length: int = 4):
        """Initialize detector.

        Args:
            win_length: Number in a row to win (4 default)
        """
        self.win_length = win_length

    def evaluate(self, board: Board, last_column: int, last_row: int, player: Player) -> bool:
        """Check the four lines through ``(last_column, last_row)``.

        Args:
            board: Board after the piece was placed
            last_column: Column of the last placed piece
            last_row: Row of the last placed piece (0 = bottom)
            player: Player who placed it

        Returns:
            True if any line holds a run of at least ``win_length``
        """
        return bool(self.winning_line(board, last_column, last_row, player))

    def winning_line(
        self, board: Board, last_column: int, last_row: int, player: Player
    ) -> list[Cell]:
        """Cells of the first winning run found, or an empty list.

        Lines are checked in order: vertical, horizontal, rising diagonal,
        falling diagonal. A run longer than ``win_length`` is returned whole.
        """
        lines = (
            self._vertical(board, last_column),
            self._horizontal(board, last_row),
            self._rising(board, last_column, last_row),
            self._falling(board, last_column, last_row),
        )
        for line in lines:
            run = self._scan(board, line, player)
            if run:
                return run
        return []

    def _scan(self, board: Board, cells: Iterator[Cell], player: Player) -> list[Cell]:
        """Running consecutive count along a line, reset on any other cell."""
        run: list[Cell] = []
        winning: list[Cell] = []
        for column, row in cells:
            if board.occupant(column, row) == player:
                run.append((column, row))
                if len(run) >= self.win_length:
                    winning = list(run)
            else:
                if winning:
                    break
                run = []
        return winning

    # Lines

    def _vertical(self, board: Board, column: int) -> Iterator[Cell]:
        for row in range(board.rows):
            yield column, row

    def _horizontal(self, board: Board, row: int) -> Iterator[Cell]:
        for column in range(board.columns):
            yield column, row

    def _rising(self, board: Board, column: int, row: int) -> Iterator[Cell]:
        """Bottom-left to top-right diagonal through the cell."""
        # Anchor on the bottom or left edge
        while column > 0 and row > 0:
            column -= 1
            row -= 1

        while column < board.columns and row < board.rows:
            yield column, row
            column += 1
            row += 1

    def _falling(self, board: Board, column: int, row: int) -> Iterator[Cell]:
        """Bottom-right to top-left diagonal through the cell."""
        # Anchor on the bottom or right edge
        while column < board.columns - 1 and row > 0:
            column += 1
            row -= 1

        while column >= 0 and row < board.rows:
            yield column, row
            column -= 1
            row += 1


_default_detector = WinDetector()


def evaluate(board: Board, last_column: int, last_row: int, player: Player) -> bool:
    """Module-level shortcut for ``WinDetector().evaluate``."""
    return _default_detector.evaluate(board, last_column, last_row, player)
