"""
Terminal host shell for the Connect4 engine.

Usage:
    connect4 --help
    connect4 play
    connect4 replay 3 --interval 0.5
    connect4 history
"""

import asyncio
import logging
from typing import Annotated

import typer

from ..core.bus import EventBus
from ..core.config import ReporterBackend, Settings, StoreBackend, get_settings
from ..core.events import Event, EventType
from ..core.types import GameStatus, Modal, Player
from ..game.board import Board
from ..game.engine import GameController
from ..reporting import HTTPReporter, LogReporter, ResultReporter
from ..storage import JsonFileStore, KeyValueStore, MemoryStore, MoveLog


app = typer.Typer(
    name="connect4",
    help="Play and replay Connect4 games in the terminal.",
    add_completion=False,
)

PLAYER_NAMES = {Player.ONE: "Player 1 (X)", Player.TWO: "Player 2 (O)"}


def board_to_ascii(board: Board) -> str:
    """Convert board to ASCII display."""
    border = "+" + "---+" * board.columns
    lines = ["\n  " + "   ".join(str(col) for col in range(board.columns)), border]

    for row in board.as_matrix:
        cells = [Player(int(cell)).symbol if cell else " " for cell in row]
        lines.append("| " + " | ".join(cells) + " |")
        lines.append(border)

    return "\n".join(lines)


def print_status(controller: GameController) -> None:
    """Print game status."""
    state = controller.state
    typer.echo(board_to_ascii(controller.board))
    typer.echo(f"\nGame {state.game_id}, turn {state.turn_count}")

    if state.last_move is not None:
        typer.echo(f"Last move: {PLAYER_NAMES[state.last_move.player]} → Column {state.last_move.column}")

    if state.status == GameStatus.WON:
        typer.echo(f"\n🎉 {PLAYER_NAMES[state.winner]} WINS! 🎉")
    elif state.status == GameStatus.DRAW:
        typer.echo("\n🤝 It's a DRAW!")
    elif state.status == GameStatus.IN_PROGRESS:
        typer.echo(f"Current player: {PLAYER_NAMES[state.current_player]}")


def get_store(settings: Settings) -> KeyValueStore:
    """Get move store based on settings."""
    if settings.storage.backend == StoreBackend.MEMORY:
        return MemoryStore()
    return JsonFileStore(settings.storage.path, prefix=settings.storage.prefix)


def get_reporter(settings: Settings) -> ResultReporter | None:
    """Get result reporter based on settings."""
    backend = settings.reporter.backend
    if backend == ReporterBackend.HTTP:
        return HTTPReporter(settings.reporter.base_url, timeout=settings.reporter.timeout)
    if backend == ReporterBackend.LOG:
        return LogReporter()
    return None


def _configure_logging(settings: Settings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build(
    loop: asyncio.AbstractEventLoop, interval: float | None
) -> tuple[GameController, EventBus]:
    settings = get_settings()
    bus = EventBus()
    controller = GameController(
        move_log=MoveLog(get_store(settings)),
        reporter=get_reporter(settings),
        timer=loop,
        bus=bus,
        replay_interval=interval,
    )
    return controller, bus


def _watch_replay(
    controller: GameController,
    bus: EventBus,
    loop: asyncio.AbstractEventLoop,
    game_id: int | None,
) -> bool:
    """Run a paced replay on the loop until it finishes or is interrupted."""
    done: asyncio.Future = loop.create_future()

    def on_done(event: Event) -> None:
        if not done.done():
            done.set_result(event.type)

    def on_move(event: Event) -> None:
        if controller.is_replaying:
            print_status(controller)

    bus.subscribe(EventType.REPLAY_FINISHED, on_done)
    bus.subscribe(EventType.REPLAY_CANCELLED, on_done)
    bus.subscribe(EventType.MOVE_MADE, on_move)
    try:
        if not controller.start_replay(game_id):
            return False
        typer.echo(f"\n▶ Replaying game {controller.state.game_id} (Ctrl+C to stop)")
        try:
            loop.run_until_complete(done)
        except KeyboardInterrupt:
            controller.cancel_replay()
            typer.echo("\nReplay stopped.")
        print_status(controller)
        return True
    finally:
        bus.unsubscribe(EventType.REPLAY_FINISHED, on_done)
        bus.unsubscribe(EventType.REPLAY_CANCELLED, on_done)
        bus.unsubscribe(EventType.MOVE_MADE, on_move)


def _game_over_prompt(controller: GameController, bus: EventBus, loop: asyncio.AbstractEventLoop) -> bool:
    """Ask what to do after a game. Returns False to quit."""
    while True:
        choice = typer.prompt("\n[p]lay again, [w]atch replay, [q]uit", default="p").strip().lower()
        if choice == "p":
            controller.restart()
            return True
        if choice == "w":
            game_id = controller.state.game_id
            if not _watch_replay(controller, bus, loop, game_id):
                typer.echo("Nothing to replay.")
            continue
        if choice == "q":
            return False
        typer.echo("Enter p, w or q")


@app.command()
def play(
    interval: Annotated[float | None, typer.Option("--interval", "-i", min=0.01, help="Seconds between replayed moves")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
):
    """
    Play a two-player game on one terminal.

    Enter a column number (0-6) to drop a piece, 'u' to undo the last
    move, 'r' to restart and 'q' to quit.
    """
    _configure_logging(get_settings(), verbose)
    loop = asyncio.new_event_loop()
    try:
        controller, bus = _build(loop, interval)

        typer.echo("\n" + "=" * 50)
        typer.echo("  CONNECT 4")
        typer.echo("=" * 50)
        if controller.modal == Modal.BEGIN:
            typer.echo("\nFour in a row wins. Player 1 starts.")
        controller.restart()

        while True:
            print_status(controller)

            if controller.is_game_over or controller.state.status == GameStatus.NOT_STARTED:
                if not _game_over_prompt(controller, bus, loop):
                    break
                continue

            try:
                user_input = typer.prompt("\nMove (0-6, u, r, q)").strip().lower()
            except (KeyboardInterrupt, typer.Abort):
                typer.echo("\nGame quit.")
                break

            if user_input == "q":
                typer.echo("Game quit.")
                break
            if user_input == "u":
                if not controller.undo_move():
                    typer.echo("Nothing to undo (only the last move can be taken back).")
                continue
            if user_input == "r":
                controller.restart()
                continue

            try:
                col = int(user_input)
            except ValueError:
                typer.echo("Enter a number 0-6")
                continue
            if not controller.make_move(col):
                typer.echo(f"Invalid! Legal moves: {controller.legal_moves}")
    finally:
        loop.close()


@app.command()
def replay(
    game_id: Annotated[int, typer.Argument(help="Recorded game to replay")],
    interval: Annotated[float | None, typer.Option("--interval", "-i", min=0.01, help="Seconds between moves")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
):
    """Replay a recorded game move by move."""
    _configure_logging(get_settings(), verbose)
    loop = asyncio.new_event_loop()
    try:
        controller, bus = _build(loop, interval)
        if not _watch_replay(controller, bus, loop, game_id):
            typer.echo(f"No recorded moves for game {game_id}.", err=True)
            raise typer.Exit(code=1)
    finally:
        loop.close()


@app.command()
def history():
    """List recorded games."""
    settings = get_settings()
    move_log = MoveLog(get_store(settings))

    game_ids = move_log.game_ids()
    if not game_ids:
        typer.echo("No recorded games.")
        return

    for game_id in game_ids:
        moves = move_log.read_all(game_id)
        typer.echo(f"Game {game_id}: {len(moves)} moves")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
