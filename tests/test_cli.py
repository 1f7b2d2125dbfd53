import pytest
from typer.testing import CliRunner

from connect4.cli.main import app, board_to_ascii, get_reporter, get_store
from connect4.core.config import Settings
from connect4.core.types import Player
from connect4.game.board import Board
from connect4.reporting import HTTPReporter, LogReporter
from connect4.storage import JsonFileStore, MemoryStore

from conftest import VERTICAL_WIN


runner = CliRunner()


@pytest.fixture
def json_store_env(monkeypatch, tmp_path):
    path = tmp_path / "moves.json"
    monkeypatch.setenv("STORE_BACKEND", "json")
    monkeypatch.setenv("STORE_PATH", str(path))
    monkeypatch.setenv("REPORTER_BACKEND", "none")
    return path


def test_commands_registered():
    names = [c.name or c.callback.__name__ for c in app.registered_commands]
    assert {"play", "replay", "history"} <= set(names)


def test_board_to_ascii():
    board = Board()
    board.drop(0, Player.ONE)
    board.drop(6, Player.TWO)
    lines = board_to_ascii(board).splitlines()
    assert lines[1].split() == [str(c) for c in range(7)]
    assert lines[-2] == "| X |   |   |   |   |   | O |"


def test_factories(monkeypatch, tmp_path):
    monkeypatch.setenv("STORE_BACKEND", "memory")
    monkeypatch.setenv("REPORTER_BACKEND", "none")
    settings = Settings()
    assert isinstance(get_store(settings), MemoryStore)
    assert get_reporter(settings) is None

    monkeypatch.setenv("STORE_BACKEND", "json")
    monkeypatch.setenv("STORE_PATH", str(tmp_path / "m.json"))
    monkeypatch.setenv("REPORTER_BACKEND", "http")
    settings = Settings()
    assert isinstance(get_store(settings), JsonFileStore)
    assert isinstance(get_reporter(settings), HTTPReporter)

    monkeypatch.setenv("REPORTER_BACKEND", "log")
    assert isinstance(get_reporter(Settings()), LogReporter)


def test_history_empty(json_store_env):
    result = runner.invoke(app, ["history"])
    assert result.exit_code == 0
    assert "No recorded games." in result.output


def test_play_quit(json_store_env):
    result = runner.invoke(app, ["play"], input="3\nq\n")
    assert result.exit_code == 0
    assert "CONNECT 4" in result.output
    assert "Current player: Player 2 (O)" in result.output
    assert "Game quit." in result.output


def test_play_rejects_bad_input(json_store_env):
    result = runner.invoke(app, ["play"], input="x\n9\nu\nq\n")
    assert result.exit_code == 0
    assert "Enter a number 0-6" in result.output
    assert "Invalid! Legal moves: [0, 1, 2, 3, 4, 5, 6]" in result.output
    assert "Nothing to undo" in result.output


def test_play_full_game_then_history_and_replay(json_store_env):
    moves = "\n".join(str(c) for c in VERTICAL_WIN)
    result = runner.invoke(app, ["play", "--interval", "0.01"], input=f"{moves}\nw\nq\n")
    assert result.exit_code == 0
    assert "Player 1 (X) WINS!" in result.output
    assert "Replaying game 1" in result.output

    result = runner.invoke(app, ["history"])
    assert "Game 1: 7 moves" in result.output

    result = runner.invoke(app, ["replay", "1", "--interval", "0.01"])
    assert result.exit_code == 0
    assert "Replaying game 1" in result.output
    assert "Player 1 (X) WINS!" in result.output


def test_replay_unknown_game(json_store_env):
    result = runner.invoke(app, ["replay", "12", "--interval", "0.01"])
    assert result.exit_code == 1
