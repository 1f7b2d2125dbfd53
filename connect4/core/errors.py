"""
Error taxonomy for the Connect4 engine.

Board errors are raised by `Board` and handled by `GameController`.
Controller errors never leave the controller's public API: they are
caught at the boundary and turned into a ``False`` return.
"""


class Connect4Error(ValueError):
    """Base class for engine errors."""


# Board


class InvalidColumn(Connect4Error):
    """Column index outside [0, columns)."""

    def __init__(self, column: object):
        super().__init__(f"Invalid column: {column!r}")
        self.column = column


class InvalidRow(Connect4Error):
    """Row index outside [0, rows)."""

    def __init__(self, row: object):
        super().__init__(f"Invalid row: {row!r}")
        self.row = row


class ColumnFull(Connect4Error):
    """Column already holds a piece in every row."""

    def __init__(self, column: int):
        super().__init__(f"Column {column} is full")
        self.column = column


class EmptyColumn(Connect4Error):
    """Column has no piece to remove."""

    def __init__(self, column: int):
        super().__init__(f"Column {column} is empty")
        self.column = column


# Controller


class MoveRejected(Connect4Error):
    """Move not applied (game not in progress, invalid or full column)."""


class UndoUnavailable(Connect4Error):
    """No last move to undo, or game not in progress."""


class ReplayUnavailable(Connect4Error):
    """No recorded moves for the game, or a live game is in progress."""


# Collaborators


class StoreUnavailable(Connect4Error):
    """Persistent key-value store cannot be read or written."""


class ReportError(Connect4Error):
    """Result could not be delivered to the reporting backend."""
