"""Command line entry point: play one game and print its transcript."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable

from .config import ConfigError, load_config
from .deck import read_tokens
from .game import play_game
from .logging_utils import LOG_LEVEL, setup_logging
from .transcript import transcript_printer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play a shedding card game between player agents.")
    parser.add_argument("players", type=int, help="Number of players (1-52).")
    parser.add_argument("--file", type=Path, default=None, help="Read card tokens from this file instead of stdin.")
    parser.add_argument("--shuffle", action="store_true", help="Shuffle the cards before dealing.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for --shuffle.")
    parser.add_argument(
        "--require-full-deck",
        action="store_true",
        help="Refuse to play unless all 52 distinct cards are supplied.",
    )
    parser.add_argument("--transport", default="thread", choices=["thread", "process"])
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level (default from LOG_LEVEL).")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(None if argv is None else list(argv))
    setup_logging(args.log_level)

    try:
        config = load_config(
            players=args.players,
            transport=args.transport,
            shuffle=args.shuffle,
            seed=args.seed,
            require_full_deck=args.require_full_deck,
        )
        if args.file is not None:
            with args.file.open("r", encoding="utf-8") as handle:
                tokens = read_tokens(handle)
        else:
            tokens = read_tokens(sys.stdin)
        play_game(tokens, config, listeners=[transcript_printer(sys.stdout)])
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: cannot read cards: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
