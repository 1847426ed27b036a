"""
Smoke test for the kernel runner.

Runs the full pipeline (parse -> profile -> search -> verify) on the sample
puzzles under data/puzzles and on in-memory streams, and checks the
diagnostics status for each outcome.
"""

import io
import json
import shutil
import tempfile
from pathlib import Path

from nonogram.core.grid_types import grid_from_strings
from nonogram.core.problem import ProblemInput
from nonogram.runners.kernel import (
    solve_problem_with_diagnostics,
    solve_puzzle,
    solve_puzzle_with_diagnostics,
)


PUZZLE_DIR = Path(__file__).resolve().parents[2] / "data" / "puzzles"


def test_sample_puzzles_from_disk():
    print("\n" + "=" * 70)
    print("KERNEL SMOKE TEST: sample puzzles")
    print("=" * 70)

    expected = {
        "plus.txt": "ok",
        "smiley.txt": "ok",
        "frame.txt": "ok",
        "dots.json": "ok",
        "no_solution.txt": "no_solution",
    }
    for name, status in expected.items():
        grid, diag = solve_puzzle_with_diagnostics(PUZZLE_DIR / name)
        print(f"  {name}: {diag.status} ({diag.assignments} assignments)")
        assert diag.status == status, f"{name}: expected {status}, got {diag.status}"
        assert (grid is None) == (status == "no_solution")
        assert diag.line_mismatches == []

    print("✓ Test passed")


def test_plus_solution_and_uniqueness():
    grid, diag = solve_puzzle_with_diagnostics(PUZZLE_DIR / "plus.txt", check_unique=True)
    assert grid == grid_from_strings([
        ". # .",
        "# # #",
        ". # .",
    ])
    assert diag.unique is True
    assert diag.rows == 3 and diag.cols == 3
    assert diag.profile["totals_consistent"] is True


def test_multiple_solutions_reported():
    problem = ProblemInput(rowdef=[[1], [1]], coldef=[[1], [1]])
    grid, diag = solve_problem_with_diagnostics(problem, check_unique=True)
    assert grid is not None
    assert diag.status == "ok"
    assert diag.unique is False


def test_invalid_input_does_not_search():
    grid, diag = solve_puzzle_with_diagnostics(io.StringIO("2 2\n1\n1 x\n1\n1\n"))
    assert grid is None
    assert diag.status == "invalid_input"
    assert "line 3" in diag.error_message
    assert diag.assignments == 0


def test_missing_file_is_an_error():
    grid, diag = solve_puzzle_with_diagnostics(PUZZLE_DIR / "does_not_exist.txt")
    assert grid is None
    assert diag.status == "error"


def test_no_solution_from_stream():
    grid, diag = solve_puzzle_with_diagnostics(io.StringIO("1 2\n1\n1\n1\n"))
    assert grid is None
    assert diag.status == "no_solution"
    assert diag.profile["obviously_infeasible"] is True


def test_solve_puzzle_thin_wrapper():
    tmp_dir = Path(tempfile.mkdtemp())
    try:
        path = tmp_dir / "dots.json"
        path.write_text(json.dumps({"rows": [[1, 1]], "cols": [[1], [], [1]]}), encoding="utf-8")
        assert solve_puzzle(path) == grid_from_strings(["# . #"])
        assert solve_puzzle(io.StringIO("1 1\n0\n0\n")) == grid_from_strings(["."])
    finally:
        shutil.rmtree(tmp_dir, ignore_errors=True)


def test_cross_check_agrees():
    _, diag = solve_puzzle_with_diagnostics(PUZZLE_DIR / "frame.txt", cross_check=True)
    assert diag.status == "ok"
    assert diag.ilp_status == "feasible"

    _, diag = solve_puzzle_with_diagnostics(PUZZLE_DIR / "no_solution.txt", cross_check=True)
    assert diag.status == "no_solution"
    assert diag.ilp_status == "infeasible"
