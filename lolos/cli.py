"""
Lolos CLI - Command-line interface for the engine.

Usage:
    lolos targets <d1> <d2> <d3>      List every target reachable with a roll
    lolos deck [--difficulty easy]    Show the composition of a fresh deck
    lolos serve [--host H --port P]   Run the HTTP API
"""

import argparse
from collections import Counter
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Lolos - Arithmetic card game engine",
        prog="lolos",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    targets_parser = subparsers.add_parser("targets", help="List targets for a dice roll")
    targets_parser.add_argument("dice", nargs=3, type=int, metavar="DIE", help="Three values 1-6")

    deck_parser = subparsers.add_parser("deck", help="Show deck composition")
    deck_parser.add_argument("--difficulty", choices=["easy", "full"], default="full")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    if args.command == "targets":
        cmd_targets(args)
    elif args.command == "deck":
        cmd_deck(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_targets(args):
    """Print each reachable target with the first equation found for it."""
    from .engine_core.arithmetic import generate_valid_targets
    from .engine_core.state import DiceResult

    if any(not 1 <= d <= 6 for d in args.dice):
        print("Error: dice values must be between 1 and 6")
        sys.exit(1)

    options = generate_valid_targets(DiceResult(*args.dice))
    print(f"{len(options)} targets:")
    for option in options:
        print(f"  {option.result:>4}  {option.display}")


def cmd_deck(args):
    """Print card counts per type for a fresh deck."""
    from .engine_core.deck import DeckBuilder
    from .engine_core.state import Difficulty

    deck = DeckBuilder().build_deck(Difficulty(args.difficulty))
    counts = Counter(card.card_type.value for card in deck)
    print(f"Deck ({args.difficulty}): {len(deck)} cards")
    for card_type, count in sorted(counts.items()):
        print(f"  {card_type}: {count}")


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn
    from .config import configure_logging

    configure_logging()
    uvicorn.run("lolos.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
