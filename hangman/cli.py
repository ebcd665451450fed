"""
Hangman CLI - Command-line interface.

Usage:
    hangman serve [--host HOST] [--port PORT]    Run the HTTP/WebSocket API
    hangman play [--health N]                    Hot-seat game in the terminal
"""

import argparse
import asyncio
import getpass
import sys

from .config import HangmanConfig
from .errors import HangmanError
from .logging_config import setup_logging


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Hangman Rooms - multiplayer word guessing",
        prog="hangman",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")
    serve_parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a local hot-seat game")
    play_parser.add_argument("--health", type=int, default=None, help="Wrong guesses allowed")

    args = parser.parse_args()

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "play":
        cmd_play(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    config = HangmanConfig.from_env()
    setup_logging(log_level=config.log_level, log_file=config.log_file)
    uvicorn.run(
        "hangman.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.log_level.lower(),
    )


def cmd_play(args):
    """Play one room in the terminal until everyone quits."""
    try:
        config = HangmanConfig.from_env()
        if args.health is not None:
            config = HangmanConfig(
                starting_health=args.health,
                env=config.env,
                log_level="WARNING",
            )
    except HangmanError as e:
        print(f"Error: {e.message}")
        sys.exit(1)

    setup_logging(log_level="WARNING")
    asyncio.run(_play(config))


async def _play(config: HangmanConfig):
    from .session import RoomManager

    manager = RoomManager(config=config)
    coordinator = manager.create_room("Terminal")

    host = None
    while host is None:
        try:
            host = manager.players.register(_ask("Host name: "))
        except HangmanError as e:
            print(f"  {e.message}")
    await coordinator.join_room(host.player_id, as_host=True)

    guessers = []
    while not guessers:
        names = [n.strip() for n in _ask("Guessers (comma separated): ").split(",") if n.strip()]
        if not names:
            print("Need at least one guesser.")
            continue
        try:
            guessers = [manager.players.register(n) for n in names]
        except HangmanError as e:
            print(f"  {e.message}")
            guessers = []
    for player in guessers:
        await coordinator.join_room(player.player_id)

    while True:
        word = getpass.getpass(f"{host.name}, type the secret word (empty to quit): ")
        if not word.strip():
            return
        try:
            await coordinator.start_round(host.player_id, word)
        except HangmanError as e:
            print(f"  {e.message}")
            continue

        turn = 0
        snapshot = await coordinator.get_snapshot()
        while snapshot.round and not snapshot.round.status.is_terminal:
            player = guessers[turn % len(guessers)]
            view = snapshot.round
            print(f"\n  {view.masked_word}   health {view.remaining_health}/{view.starting_health}"
                  f"   guessed: {' '.join(view.guessed_letters) or '-'}")
            guess = _ask(f"{player.name}, letter or word: ").strip()
            try:
                if len(guess) == 1:
                    result = await coordinator.guess_letter(player.player_id, guess)
                else:
                    result = await coordinator.guess_word(player.player_id, guess)
            except HangmanError as e:
                print(f"  {e.message}")
                continue
            print(f"  -> {result.outcome.value}")
            snapshot = result.snapshot
            turn += 1

        print(f"\nRound {snapshot.round.status.value}: the word was {snapshot.round.word}\n")


def _ask(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError:
        sys.exit(0)


if __name__ == "__main__":
    main()
