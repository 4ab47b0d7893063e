"""CLI entrypoint for the crossword grid filler."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from crossfill.core.exceptions import DictionaryLoadError, PuzzleLoadError
from crossfill.engine.generator import CrosswordFiller, FillerConfig, FillResult
from crossfill.utils.logger import configure_logging
from crossfill.utils.pretty import format_plain

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fill an American-style crossword grid from a word list",
    )
    parser.add_argument(
        "--dictionary",
        type=Path,
        default=Path("words.txt"),
        help="Word list, one word per line",
    )
    parser.add_argument(
        "--puzzle",
        type=Path,
        default=Path("puzzle.txt"),
        help="Grid file, one row per line, '#' marks black cells",
    )
    parser.add_argument(
        "--refresh-rate",
        type=int,
        default=100,
        help="Log the grid every N steps (0 disables progress output)",
    )
    parser.add_argument(
        "--attempts",
        type=int,
        default=1,
        help="Maximum solve attempts before giving up",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Abandon an attempt after this many solver steps",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Keep running attempts, waiting for Enter between them",
    )
    parser.add_argument(
        "--check-feasible",
        action="store_true",
        help="Prove with CP-SAT that a fill exists before attempting",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def report(result: FillResult, stream=None) -> None:
    stream = stream or sys.stdout
    if result.solved and not result.mismatches:
        print("SUCCESS!", file=stream)
    elif result.solved:
        print(f"ERRORS: {result.mismatches}!", file=stream)
    else:
        print("FAILED!", file=stream)
    print(format_plain(result.grid), file=stream)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.attempts < 1:
        parser.error("--attempts must be at least 1")

    config = FillerConfig(
        puzzle_path=args.puzzle,
        dictionary_path=args.dictionary,
        seed=args.seed,
        retry_limit=args.attempts,
        refresh_rate=args.refresh_rate,
        max_steps=args.max_steps,
        check_feasible=args.check_feasible,
    )

    try:
        filler = CrosswordFiller(config)
    except (DictionaryLoadError, PuzzleLoadError) as exc:
        LOGGER.error("%s", exc)
        return 2
    LOGGER.info("Dictionaries processed")

    if not args.interactive:
        result = filler.fill()
        report(result)
        return 0 if result.solved and not result.mismatches else 1

    if args.check_feasible and filler.check_feasible().feasible is False:
        print("FAILED! No fill exists for this grid and dictionary.")
        return 1

    attempt = 1
    while True:
        result = filler.attempt(attempt)
        report(result)
        try:
            input("press enter for another")
        except EOFError:
            return 0 if result.solved and not result.mismatches else 1
        attempt += 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
