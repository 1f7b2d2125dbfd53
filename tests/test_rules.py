import pytest

from connect4.core.types import Player
from connect4.game.rules import WinDetector, evaluate

from conftest import make_board


@pytest.fixture
def detector():
    return WinDetector()


def swap(columns: dict[int, list[int]]) -> dict[int, list[int]]:
    return {col: [3 - p for p in pieces] for col, pieces in columns.items()}


# (board, last column, last row) with four of player 1 in a line
WINS = {
    "vertical": ({2: [2, 1, 1, 1, 1]}, 2, 4),
    "horizontal": ({1: [1], 2: [1], 3: [1], 4: [1]}, 4, 0),
    "rising": ({0: [1], 1: [2, 1], 2: [2, 2, 1], 3: [2, 2, 2, 1]}, 3, 3),
    "rising_left_edge": (
        {0: [2, 2, 1], 1: [2, 2, 2, 1], 2: [2, 2, 2, 2, 1], 3: [2, 2, 2, 2, 2, 1]},
        1,
        3,
    ),
    "falling": ({3: [1], 2: [2, 1], 1: [2, 2, 1], 0: [2, 2, 2, 1]}, 0, 3),
    "falling_right_edge": (
        {6: [2, 2, 1], 5: [2, 2, 2, 1], 4: [2, 2, 2, 2, 1], 3: [2, 2, 2, 2, 2, 1]},
        6,
        2,
    ),
}


@pytest.mark.parametrize("name", sorted(WINS))
def test_four_in_a_row_wins(detector, name):
    columns, col, row = WINS[name]
    board = make_board(columns)
    assert board.occupant(col, row) == Player.ONE
    assert detector.evaluate(board, col, row, Player.ONE)
    assert not detector.evaluate(board, col, row, Player.TWO)


@pytest.mark.parametrize("name", sorted(WINS))
def test_win_detection_is_symmetric_under_player_swap(detector, name):
    columns, col, row = WINS[name]
    board = make_board(swap(columns))
    assert detector.evaluate(board, col, row, Player.TWO)


@pytest.mark.parametrize(
    "columns, col, row",
    [
        ({2: [2, 1, 1, 1]}, 2, 3),  # vertical three
        ({2: [1, 1, 2, 1, 1]}, 2, 4),  # vertical broken run
        ({0: [1], 1: [1], 2: [1], 4: [1]}, 4, 0),  # horizontal with a gap
        ({0: [1], 1: [2, 1], 2: [2, 2, 1]}, 2, 2),  # rising three
        ({0: [1], 1: [2, 1], 2: [2, 2, 2], 3: [2, 2, 2, 1], 4: [2, 2, 2, 2, 1]}, 4, 4),  # rising broken
        ({3: [1], 2: [2, 1], 1: [2, 2, 1]}, 1, 2),  # falling three
    ],
)
def test_three_or_broken_runs_do_not_win(detector, columns, col, row):
    board = make_board(columns)
    assert not detector.evaluate(board, col, row, Player.ONE)
    assert detector.winning_line(board, col, row, Player.ONE) == []


def test_run_of_five_is_one_win(detector):
    board = make_board({0: [1], 1: [1], 2: [1], 3: [1], 4: [1]})
    assert detector.evaluate(board, 2, 0, Player.ONE)
    assert detector.winning_line(board, 2, 0, Player.ONE) == [(c, 0) for c in range(5)]


@pytest.mark.parametrize(
    "columns, col, row, expected",
    [
        (
            {0: [1], 1: [2, 1], 2: [2, 2, 1], 3: [2, 2, 2, 1], 4: [2, 2, 2, 2, 1]},
            2,
            2,
            [(0, 0), (1, 1), (2, 2), (3, 3), (4, 4)],
        ),
        (
            {6: [1], 5: [2, 1], 4: [2, 2, 1], 3: [2, 2, 2, 1], 2: [2, 2, 2, 2, 1]},
            4,
            2,
            [(6, 0), (5, 1), (4, 2), (3, 3), (2, 4)],
        ),
    ],
    ids=["rising", "falling"],
)
def test_diagonal_run_of_five_is_one_win(detector, columns, col, row, expected):
    # Last piece fills the middle of the run
    board = make_board(columns)
    assert detector.evaluate(board, col, row, Player.ONE)
    assert detector.winning_line(board, col, row, Player.ONE) == expected


def test_horizontal_scan_covers_the_whole_row(detector):
    # The last piece in column 6 is not part of the run, the row still wins
    board = make_board({0: [1], 1: [1], 2: [1], 3: [1], 6: [1]})
    assert detector.evaluate(board, 6, 0, Player.ONE)


def test_winning_line_reports_diagonal_cells(detector):
    columns, col, row = WINS["falling"]
    board = make_board(columns)
    assert detector.winning_line(board, col, row, Player.ONE) == [(3, 0), (2, 1), (1, 2), (0, 3)]


def test_diagonal_from_top_corner_cells(detector):
    # Rising diagonal ending in the top-right corner
    board = make_board({
        3: [2, 2, 1],
        4: [2, 2, 2, 1],
        5: [2, 2, 2, 2, 1],
        6: [2, 2, 2, 2, 2, 1],
    })
    assert detector.evaluate(board, 6, 5, Player.ONE)
    assert detector.winning_line(board, 6, 5, Player.ONE) == [(3, 2), (4, 3), (5, 4), (6, 5)]


def test_module_level_evaluate():
    columns, col, row = WINS["vertical"]
    assert evaluate(make_board(columns), col, row, Player.ONE)
    assert not evaluate(make_board({0: [1]}), 0, 0, Player.ONE)


def test_custom_win_length():
    board = make_board({0: [1], 1: [1], 2: [1]})
    assert WinDetector(win_length=3).evaluate(board, 2, 0, Player.ONE)
    assert not WinDetector(win_length=4).evaluate(board, 2, 0, Player.ONE)
