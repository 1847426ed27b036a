"""
Smoke test for SolveDiagnostics and line verification.

This test validates that the results.py module works correctly without
requiring the kernel. Tests:
  - line_runs on boolean arrays (scipy labeling)
  - compute_line_mismatches with known differences
  - verify_solution on complete and incomplete grids
  - SolveDiagnostics structure creation and serialization

No kernel dependencies - pure diagnostics testing.
"""

import json

import numpy as np

from nonogram.core.grid_types import Grid, grid_from_strings
from nonogram.core.problem import ProblemInput
from nonogram.runners.results import (
    SolveDiagnostics,
    compute_line_mismatches,
    line_runs,
    verify_solution,
)


def test_line_runs():
    assert line_runs(np.array([True, True, False, True])) == [2, 1]
    assert line_runs(np.array([False, False])) == []
    assert line_runs(np.array([], dtype=bool)) == []
    assert line_runs(np.array([True] * 4)) == [4]


def test_line_mismatches():
    """
    Main smoke test: validate per-line mismatch records.
    """
    print("\n" + "=" * 70)
    print("SMOKE TEST: results.py line verification")
    print("=" * 70)

    problem = ProblemInput(rowdef=[[2], [1]], coldef=[[2], [1]])
    good = grid_from_strings([
        "# #",
        "# .",
    ])
    bad = grid_from_strings([
        "# #",
        ". #",   # row 1 still [1], but columns become [1] and [2]
    ])

    assert compute_line_mismatches(good, problem) == []
    assert verify_solution(good, problem)

    diff = compute_line_mismatches(bad, problem)
    print(f"  Mismatches: {diff}")
    assert diff == [
        {"axis": "column", "index": 0, "expected": [2], "actual": [1]},
        {"axis": "column", "index": 1, "expected": [1], "actual": [2]},
    ]
    assert not verify_solution(bad, problem)

    print("✓ Test passed")


def test_incomplete_grid_is_not_a_solution():
    problem = ProblemInput(rowdef=[[]], coldef=[[]])
    # The UNSET cell has no filled runs, but the grid is still incomplete
    assert compute_line_mismatches(Grid(1, 1), problem) == []
    assert not verify_solution(Grid(1, 1), problem)


def test_shape_mismatch_rejected():
    try:
        compute_line_mismatches(Grid(2, 2), ProblemInput(rowdef=[[]], coldef=[[]]))
        raise AssertionError("Expected ValueError for shape mismatch")
    except ValueError:
        pass


def test_diagnostics_serializable():
    diag = SolveDiagnostics(puzzle_name="p.txt", status="no_solution", rows=2, cols=2)
    data = diag.to_dict()
    assert data["status"] == "no_solution"
    assert data["line_mismatches"] == []
    assert data["unique"] is None
    # Must round-trip through JSON for the failure log
    assert json.loads(json.dumps(data))["puzzle_name"] == "p.txt"
