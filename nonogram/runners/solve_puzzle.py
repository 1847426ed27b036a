"""
Command-line solver for a single puzzle.

Reads a puzzle from a file (text or .json format) or from stdin, and prints
the solved grid, "No solution", or "Error: <message>" for unparseable input.

Usage:
    # Solve a puzzle file
    python -m nonogram.runners.solve_puzzle data/puzzles/smiley.txt

    # Read from stdin, check uniqueness and cross-check with the ILP
    python -m nonogram.runners.solve_puzzle --check-unique --cross-check < puzzle.txt

    # Save diagnostics as JSON
    python -m nonogram.runners.solve_puzzle puzzle.txt --diagnostics-json out/diag.json

Exit status:
    0 when a solution was printed or the puzzle has no solution,
    1 for invalid input or any other error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from nonogram.core.puzzle_io import format_result
from nonogram.runners.kernel import solve_puzzle_with_diagnostics


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments for the single-puzzle solver.

    Returns:
        Parsed arguments with puzzle, check_unique, cross_check, log_level
        and diagnostics_json
    """
    parser = argparse.ArgumentParser(
        description="Solve a nonogram puzzle given its row and column run definitions."
    )
    parser.add_argument(
        "puzzle",
        nargs="?",
        default="-",
        help="Puzzle file (text or .json); '-' or omitted reads stdin.",
    )
    parser.add_argument(
        "--check-unique",
        action="store_true",
        help="Also report whether the solution is unique.",
    )
    parser.add_argument(
        "--cross-check",
        action="store_true",
        help="Cross-check feasibility with the ILP model (requires CBC via pulp).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (logs go to stderr).",
    )
    parser.add_argument(
        "--diagnostics-json",
        type=Path,
        default=None,
        help="Optional path where solve diagnostics are written as JSON.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint; returns the process exit status."""
    args = parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s"
    )

    source = sys.stdin if args.puzzle == "-" else Path(args.puzzle)
    grid, diag = solve_puzzle_with_diagnostics(
        source,
        check_unique=args.check_unique,
        cross_check=args.cross_check,
    )

    if args.diagnostics_json is not None:
        args.diagnostics_json.parent.mkdir(parents=True, exist_ok=True)
        with args.diagnostics_json.open("w", encoding="utf-8") as f:
            json.dump(diag.to_dict(), f, indent=2)
        logger.info("Diagnostics written to %s", args.diagnostics_json)

    if diag.status in ("invalid_input", "error"):
        print(f"Error: {diag.error_message}")
        return 1

    print(format_result(grid))
    if diag.unique is not None and grid is not None:
        print("Unique solution" if diag.unique else "Multiple solutions")
    return 0


if __name__ == "__main__":
    sys.exit(main())
