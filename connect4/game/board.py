"""7x6 Connect4 board."""

import numpy as np

from ..core.errors import ColumnFull, EmptyColumn, InvalidColumn, InvalidRow
from ..core.types import Player


COLUMNS = 7
ROWS = 6


class Board:
    """Occupancy grid with bounds-checked mutation.

    Cells are addressed ``(column, row)`` with row 0 at the bottom, so the
    first piece dropped into a column lands at row 0. Pieces in a column
    are always contiguous from the bottom.
    """

    def __init__(self, columns: int = COLUMNS, rows: int = ROWS):
        self.columns = columns
        self.rows = rows
        self._grid = np.zeros((columns, rows), dtype=np.int8)

    def _check_column(self, column: object) -> int:
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
            raise InvalidColumn(column)
        if not 0 <= column < self.columns:
            raise InvalidColumn(column)
        return int(column)

    def height(self, column: int) -> int:
        """Number of pieces in a column."""
        column = self._check_column(column)
        return int(np.count_nonzero(self._grid[column]))

    def drop(self, column: int, player: Player) -> int:
        """Drop a piece into the lowest empty row of a column.

        Returns:
            Row index where the piece landed

        Raises:
            InvalidColumn: If column is outside the board
            ColumnFull: If the column already holds ``rows`` pieces
        """
        column = self._check_column(column)
        if player is Player.EMPTY:
            raise ValueError("Cannot drop an EMPTY piece")

        row = self.height(column)
        if row >= self.rows:
            raise ColumnFull(column)

        self._grid[column, row] = int(player)
        return row

    def remove_top(self, column: int) -> Player:
        """Remove and return the topmost piece of a column.

        Raises:
            InvalidColumn: If column is outside the board
            EmptyColumn: If the column holds no piece
        """
        column = self._check_column(column)
        row = self.height(column) - 1
        if row < 0:
            raise EmptyColumn(column)

        player = Player(int(self._grid[column, row]))
        self._grid[column, row] = int(Player.EMPTY)
        return player

    def occupant(self, column: int, row: int) -> Player:
        """Read-only lookup of a single cell."""
        column = self._check_column(column)
        if isinstance(row, bool) or not isinstance(row, (int, np.integer)):
            raise InvalidRow(row)
        if not 0 <= row < self.rows:
            raise InvalidRow(row)
        return Player(int(self._grid[column, row]))

    def is_full(self) -> bool:
        """True when every cell is occupied."""
        return bool(np.all(self._grid != int(Player.EMPTY)))

    def legal_moves(self) -> list[int]:
        """Columns that can still accept a piece."""
        return [col for col in range(self.columns) if self.height(col) < self.rows]

    @property
    def piece_count(self) -> int:
        return int(np.count_nonzero(self._grid))

    def clear(self) -> None:
        """Empty every cell."""
        self._grid.fill(int(Player.EMPTY))

    def copy(self) -> "Board":
        """Create a deep copy of the board."""
        board = Board(self.columns, self.rows)
        board._grid = self._grid.copy()
        return board

    def column_pieces(self, column: int) -> list[Player]:
        """Pieces of one column, bottom first."""
        column = self._check_column(column)
        return [Player(int(cell)) for cell in self._grid[column, : self.height(column)]]

    @property
    def as_matrix(self) -> np.ndarray:
        """Grid as a ``(rows, columns)`` array with the top row first.

        Values: EMPTY=0, ONE=1, TWO=2. Returns a copy.
        """
        return np.flipud(self._grid.T).copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid.shape == other._grid.shape and bool(
            np.array_equal(self._grid, other._grid)
        )

    def __str__(self) -> str:
        lines = [" ".join(Player(int(cell)).symbol for cell in row) for row in self.as_matrix]
        lines.append(" ".join(str(col) for col in range(self.columns)))
        return "\n".join(lines)
