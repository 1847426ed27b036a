"""
Puzzle sweep script.

This script loops over every puzzle file in a directory, runs the kernel on
each one and appends the diagnostics of every puzzle that did not solve
cleanly to a JSONL failure log.

Usage:
    # Solve every puzzle in the default directory
    python -m nonogram.runners.sweep_puzzles

    # First 5 puzzles only, with the ILP cross-check
    python -m nonogram.runners.sweep_puzzles --max-puzzles 5 --cross-check

    # Custom paths
    python -m nonogram.runners.sweep_puzzles \
        --puzzle-dir data/puzzles \
        --failure-log logs/puzzle_failures.jsonl

Output:
    - Summary counts logged at INFO level
    - One JSON line per non-ok puzzle appended to the failure log
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional

from nonogram.runners.kernel import solve_puzzle_with_diagnostics


# Logger for this module
logger = logging.getLogger(__name__)

DEFAULT_PUZZLE_DIR = Path("data/puzzles")
DEFAULT_FAILURE_LOG = Path("logs/puzzle_failures.jsonl")
PUZZLE_SUFFIXES = (".txt", ".json")


def list_puzzle_files(puzzle_dir: Path) -> List[Path]:
    """Puzzle files in `puzzle_dir`, sorted by name for deterministic order."""
    return sorted(
        p for p in puzzle_dir.iterdir()
        if p.is_file() and p.suffix.lower() in PUZZLE_SUFFIXES
    )


def sweep_puzzles(
    puzzle_dir: Path,
    failure_log_path: Path,
    max_puzzles: Optional[int] = None,
    check_unique: bool = False,
    cross_check: bool = False,
) -> Dict[str, int]:
    """
    Solve every puzzle in a directory and log failures.

    Args:
        puzzle_dir: Directory containing *.txt / *.json puzzle files
        failure_log_path: Path to JSONL file where non-ok diagnostics will be appended
        max_puzzles: If not None, limit to the first max_puzzles files (for testing)
        check_unique: Passed to the kernel
        cross_check: Passed to the kernel

    Returns:
        Counts per status, e.g. {"ok": 3, "no_solution": 1}

    Example:
        >>> counts = sweep_puzzles(
        ...     puzzle_dir=Path("data/puzzles"),
        ...     failure_log_path=Path("logs/puzzle_failures.jsonl"),
        ...     max_puzzles=10
        ... )
    """
    # 1. Collect puzzle files
    logger.info("Loading puzzles from %s", puzzle_dir)
    puzzle_files = list_puzzle_files(puzzle_dir)
    logger.info("Found %d puzzles", len(puzzle_files))

    if max_puzzles is not None:
        puzzle_files = puzzle_files[:max_puzzles]
        logger.info("Limiting to first %d puzzles", max_puzzles)

    # 2. Solve each puzzle
    counts: Counter = Counter()
    failures = []
    for path in puzzle_files:
        logger.info("Processing %s", path.name)
        _, diag = solve_puzzle_with_diagnostics(
            path, check_unique=check_unique, cross_check=cross_check
        )
        counts[diag.status] += 1

        if diag.status == "ok":
            logger.info("  ✓ OK for %s", path.name)
        else:
            logger.warning("  ✗ %s for %s: %s", diag.status, path.name, diag.error_message or "")
            failures.append(diag.to_dict())

    # 3. Append failures to the JSONL log
    if failures:
        failure_log_path.parent.mkdir(parents=True, exist_ok=True)
        with failure_log_path.open("a", encoding="utf-8") as f:
            for record in failures:
                f.write(json.dumps(record) + "\n")

    # 4. Summary
    logger.info("")
    logger.info("=" * 70)
    logger.info("SWEEP SUMMARY")
    logger.info("=" * 70)
    logger.info("Total puzzles: %d", len(puzzle_files))
    for status, n in sorted(counts.items()):
        logger.info("  %s: %d", status, n)
    if failures:
        logger.info("Failures appended to %s", failure_log_path)

    return dict(counts)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint for the puzzle sweep."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Solve every nonogram puzzle in a directory and log failures."
    )
    parser.add_argument(
        "--puzzle-dir",
        type=Path,
        default=DEFAULT_PUZZLE_DIR,
        help="Directory containing puzzle files (*.txt, *.json).",
    )
    parser.add_argument(
        "--failure-log",
        type=Path,
        default=DEFAULT_FAILURE_LOG,
        help="Path to JSONL file where failure diagnostics will be logged.",
    )
    parser.add_argument(
        "--max-puzzles",
        type=int,
        default=None,
        help="Optional limit on number of puzzles to process (for quick tests).",
    )
    parser.add_argument(
        "--check-unique",
        action="store_true",
        help="Also check whether each solution is unique.",
    )
    parser.add_argument(
        "--cross-check",
        action="store_true",
        help="Cross-check every puzzle with the ILP model.",
    )

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    counts = sweep_puzzles(
        puzzle_dir=args.puzzle_dir,
        failure_log_path=args.failure_log,
        max_puzzles=args.max_puzzles,
        check_unique=args.check_unique,
        cross_check=args.cross_check,
    )
    return 1 if counts.get("error", 0) or counts.get("invalid_input", 0) else 0


if __name__ == "__main__":
    raise SystemExit(main())
