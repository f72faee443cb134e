from __future__ import annotations

import argparse
import logging
import os
import sys

from rps_errors import ConfigurationError
from rps_game import Game
from rps_rules import MoveSet, Rules

LOG_LEVEL_ENV = "RPS_LOG_LEVEL"

EXAMPLE = "rps rock paper scissors lizard Spock"


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)

    parser = argparse.ArgumentParser(
        prog="rps",
        description="Rock-paper-scissors over any odd number of moves, with an HMAC proving the computer's move.",
        epilog=f"example: {EXAMPLE}\na move named -h or --help must follow --, e.g. rps -- -h b c",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("moves", nargs="*", help="Move names in cycle order (odd count, at least 3, unique)")
    # -h is the only option; every other token is a move name, dashes included.
    parser.parse_known_args(argv)

    _configure_logging()

    try:
        moves = MoveSet.from_names(_move_names(argv))
    except ConfigurationError as exc:
        print(f"Invalid arguments: {exc}", file=sys.stderr)
        print(f"   Example: {EXAMPLE}", file=sys.stderr)
        return 1

    game = Game(Rules(moves))
    return game.play()


def _move_names(argv: list[str]) -> list[str]:
    if "--" not in argv:
        return argv
    split = argv.index("--")
    return argv[:split] + argv[split + 1 :]


def _configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    raise SystemExit(main())
