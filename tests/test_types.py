import pytest

from connect4.core.types import GameState, GameStatus, LastMove, Modal, Player


def test_player_other():
    assert Player.ONE.other is Player.TWO
    assert Player.TWO.other is Player.ONE
    with pytest.raises(ValueError):
        Player.EMPTY.other


def test_player_values_and_symbols():
    assert [int(p) for p in Player] == [0, 1, 2]
    assert str(Player.TWO) == "2"
    assert Player.ONE.symbol == "X"


def test_game_state_copy_is_independent():
    state = GameState(
        status=GameStatus.IN_PROGRESS,
        current_player=Player.TWO,
        turn_count=3,
        game_id=2,
        last_move=LastMove(column=1, row=0, player=Player.ONE),
    )
    clone = state.copy()
    assert clone == state

    clone.turn_count = 10
    assert state.turn_count == 3
    assert state.is_in_progress and not state.is_finished


def test_modal_values():
    assert [m.value for m in Modal] == ["begin", "win", "draw", "none"]
