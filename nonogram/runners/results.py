"""
Result and diagnostics structures for the nonogram solver.

This module defines SolveDiagnostics, the single structured object that captures
everything about a solve attempt, and an independent verifier that compares
a grid's actual runs with the puzzle's run definitions.

Key components:
  - SolveDiagnostics: Complete solve attempt record (status, search counters, timing)
  - line_runs: Run lengths of a boolean line, via scipy.ndimage.label
  - compute_line_mismatches: Per-line diff between definitions and a grid
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional

import numpy as np
from scipy import ndimage as ndi

from nonogram.core.grid_types import Grid
from nonogram.core.problem import ProblemInput


# Status type for solve attempts
SolveStatus = Literal["ok", "no_solution", "invalid_input", "error"]


@dataclass
class SolveDiagnostics:
    """
    Complete diagnostics for a single solve attempt.

    Attributes:
        puzzle_name: Name of the puzzle source (file name or "<stdin>")
        status: Solve outcome - one of:
            - "ok": a solution was found and verified against every definition
            - "no_solution": the search exhausted without a solution
            - "invalid_input": the puzzle text could not be parsed; no search ran
            - "error": unexpected error (I/O, failed verification, ...)
        rows: Row count R (0 if the input was invalid)
        cols: Column count C (0 if the input was invalid)
        assignments: Trial values written during the search
        rejections: Assignments rejected by the line checks
        backtracks: Cursor retreats during the search
        elapsed_seconds: Wall time spent in the search
        unique: True/False when uniqueness was checked, None otherwise
        ilp_status: "feasible"/"infeasible"/"unavailable" when the ILP cross-check ran,
                    None otherwise
        profile: Static profile of the puzzle (see diagnostics.profiler)
        line_mismatches: Lines of the returned grid that do not match
                         their definition (always empty for status "ok")
        error_message: Optional error message for "invalid_input"/"error"
    """
    puzzle_name: str
    status: SolveStatus

    rows: int = 0
    cols: int = 0

    assignments: int = 0
    rejections: int = 0
    backtracks: int = 0
    elapsed_seconds: float = 0.0

    unique: Optional[bool] = None
    ilp_status: Optional[str] = None

    profile: Dict[str, Any] = field(default_factory=dict)
    line_mismatches: List[Dict[str, Any]] = field(default_factory=list)
    # Each element: {"axis": "row"|"column", "index": int,
    #                "expected": List[int], "actual": List[int]}

    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def line_runs(line: np.ndarray) -> List[int]:
    """
    Lengths of the maximal runs of True values in a 1-D boolean array.

    Example:
        >>> line_runs(np.array([True, True, False, True]))
        [2, 1]
    """
    if line.size == 0:
        return []
    labels, num = ndi.label(line)
    if num == 0:
        return []
    # bincount index 0 counts the background
    return np.bincount(labels.ravel())[1:].tolist()


def compute_line_mismatches(grid: Grid, problem: ProblemInput) -> List[Dict[str, Any]]:
    """
    Compare every row and column of `grid` with its run definition.

    Args:
        grid: Grid of shape problem.shape (UNSET cells count as not filled)
        problem: Run definitions

    Returns:
        List of mismatch records, empty if every line matches:
          [{"axis": "row", "index": i, "expected": [...], "actual": [...]}, ...]

    Raises:
        ValueError: If the grid shape differs from the problem shape
    """
    if grid.shape != problem.shape:
        raise ValueError(f"Grid shape {grid.shape} does not match puzzle shape {problem.shape}")

    mask = grid.filled_mask()
    mismatches = []

    for r, expected in enumerate(problem.rowdef):
        actual = line_runs(mask[r, :])
        if actual != list(expected):
            mismatches.append({"axis": "row", "index": r, "expected": list(expected), "actual": actual})

    for c, expected in enumerate(problem.coldef):
        actual = line_runs(mask[:, c])
        if actual != list(expected):
            mismatches.append({"axis": "column", "index": c, "expected": list(expected), "actual": actual})

    return mismatches


def verify_solution(grid: Grid, problem: ProblemInput) -> bool:
    """True if `grid` is complete and every line matches its definition."""
    return grid.is_complete() and not compute_line_mismatches(grid, problem)


if __name__ == "__main__":
    # Quick self-test
    from nonogram.core.grid_types import grid_from_strings

    print("Testing results.py verification...")
    print("=" * 70)

    problem = ProblemInput(rowdef=[[1, 1]], coldef=[[1], [], [1]])
    good = grid_from_strings(["# . #"])
    bad = grid_from_strings(["# # ."])

    assert verify_solution(good, problem)
    diff = compute_line_mismatches(bad, problem)
    print(f"Mismatches for '# # .': {diff}")
    assert len(diff) == 3

    print("\n✓ All self-tests passed")
    print("=" * 70)
