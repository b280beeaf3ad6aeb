"""Command line entry point for the puzzle solvers."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .beam import solve_beam
from .errors import GridPuzzleError
from .puzzles import PuzzleLoader, read_cycles, read_puzzle, resolve_puzzle_root
from .rocks import DEFAULT_CYCLES, total_load_after

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-puzzles",
        description="Beam tracer and spin-cycle rock simulator",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log solver progress at debug level.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    beam = subparsers.add_parser("beam", help="Count tiles energized by the beam.")
    beam.add_argument("puzzle", help="Path to an input file or a bundled puzzle name.")

    spin = subparsers.add_parser("spin", help="Total load after spin cycles.")
    spin.add_argument("puzzle", help="Path to an input file or a bundled puzzle name.")
    spin.add_argument(
        "--cycles",
        type=int,
        default=None,
        help=f"Number of spin cycles (default: $GRID_PUZZLES_CYCLES or {DEFAULT_CYCLES}).",
    )

    subparsers.add_parser("list", help="List the bundled puzzle inputs.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "list":
            names: List[str] = PuzzleLoader(resolve_puzzle_root()).available()
            print("Available puzzles:")
            for name in names:
                print(f"  {name}")
            return 0

        # An explicit file path never needs the puzzle root to exist.
        loader = PuzzleLoader(resolve_puzzle_root(check_exists=False))
        text = read_puzzle(args.puzzle, loader)
        if args.command == "beam":
            result = solve_beam(text)
        else:
            cycles = args.cycles if args.cycles is not None else read_cycles(DEFAULT_CYCLES)
            result = total_load_after(text, cycles)
    except (GridPuzzleError, FileNotFoundError, ValueError) as exc:
        logger.debug("Run failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Result: {result}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation entry point
    sys.exit(main())
