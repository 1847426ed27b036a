"""
Core kernel runner for the nonogram solver.

This module provides the main entrypoint for solving a puzzle end to end:
  1. Load and parse the puzzle definition
  2. Profile it (line capacity, row/column balance)
  3. Run the backtracking search
  4. Verify the returned grid against every definition
  5. Optionally check uniqueness and cross-check feasibility with the ILP
  6. Return the grid together with SolveDiagnostics

Parse failures are reported as status "invalid_input" and never start a search.
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Optional, TextIO, Tuple, Union

import pulp

from nonogram.core.grid_types import Grid
from nonogram.core.problem import ProblemInput
from nonogram.core.puzzle_io import MalformedInputError, load_puzzle, read_puzzle
from nonogram.diagnostics.profiler import profile_puzzle
from nonogram.runners.results import SolveDiagnostics, compute_line_mismatches
from nonogram.solver.backtracking import count_solutions, solve_with_stats
from nonogram.solver.lp_solver import InfeasibleModelError, solve_with_ilp


logger = logging.getLogger(__name__)

PuzzleSource = Union[Path, str, TextIO]


def _cross_check(problem: ProblemInput, grid: Optional[Grid], diag: SolveDiagnostics) -> None:
    """Run the ILP oracle and record whether it agrees with the search."""
    try:
        ilp_grid = solve_with_ilp(problem)
    except InfeasibleModelError as e:
        logger.debug("ILP infeasible: %s", e)
        diag.ilp_status = "infeasible"
        if grid is not None:
            diag.status = "error"
            diag.error_message = "ILP cross-check found no solution, but the search did"
        return
    except pulp.PulpSolverError as e:
        diag.ilp_status = "unavailable"
        logger.warning("ILP cross-check skipped: %s", e)
        return

    diag.ilp_status = "feasible"
    if grid is None:
        diag.status = "error"
        diag.error_message = "ILP cross-check found a solution, but the search did not"
    elif compute_line_mismatches(ilp_grid, problem):
        diag.status = "error"
        diag.error_message = "ILP cross-check returned a grid that violates the definitions"


def solve_problem_with_diagnostics(
    problem: ProblemInput,
    puzzle_name: str = "<puzzle>",
    check_unique: bool = False,
    cross_check: bool = False,
) -> Tuple[Optional[Grid], SolveDiagnostics]:
    """
    Solve a parsed puzzle and return the grid with diagnostics.

    Args:
        problem: Parsed run definitions
        puzzle_name: Name recorded in the diagnostics
        check_unique: If True, continue the search to decide whether the
                      solution is unique (stops at the second solution)
        cross_check: If True, also solve the ILP model and flag any
                     disagreement as status "error"

    Returns:
        Tuple of (grid, diagnostics):
          - grid: solved Grid, or None if there is no solution
          - diagnostics: SolveDiagnostics with:
              - status: "ok" | "no_solution" | "error"
              - search counters and elapsed time
              - profile of the puzzle
              - unique (if check_unique=True)
              - ilp_status (if cross_check=True)

    Raises:
        SolverInvariantError: If the search observes an undecided cell where
                              only decided cells can exist
    """
    rows, cols = problem.shape
    diag = SolveDiagnostics(puzzle_name=puzzle_name, status="ok", rows=rows, cols=cols)

    # 1. Profile
    profile = profile_puzzle(problem)
    diag.profile = profile.to_dict()
    if profile.obviously_infeasible:
        logger.info(
            "%s: definitions cannot be satisfied (overfull lines: %d, row total %d vs column total %d)",
            puzzle_name, len(profile.overfull_lines),
            profile.filled_by_rows, profile.filled_by_cols,
        )

    # 2. Search
    logger.info("Solving %s (%dx%d)", puzzle_name, rows, cols)
    start = time.perf_counter()
    grid, stats = solve_with_stats(problem)
    diag.elapsed_seconds = time.perf_counter() - start
    diag.assignments = stats.assignments
    diag.rejections = stats.rejections
    diag.backtracks = stats.backtracks

    # 3. Verify
    if grid is None:
        diag.status = "no_solution"
    else:
        diag.line_mismatches = compute_line_mismatches(grid, problem)
        if diag.line_mismatches:
            diag.status = "error"
            diag.error_message = f"Returned grid violates {len(diag.line_mismatches)} line definition(s)"

    # 4. Optional checks
    if check_unique:
        diag.unique = grid is not None and count_solutions(problem, limit=2) == 1
    if cross_check:
        _cross_check(problem, grid, diag)

    logger.info(
        "%s: status=%s assignments=%d backtracks=%d elapsed=%.3fs",
        puzzle_name, diag.status, diag.assignments, diag.backtracks, diag.elapsed_seconds,
    )
    return grid, diag


def solve_puzzle_with_diagnostics(
    source: PuzzleSource,
    check_unique: bool = False,
    cross_check: bool = False,
) -> Tuple[Optional[Grid], SolveDiagnostics]:
    """
    Load a puzzle from a path or an open text stream and solve it.

    Args:
        source: Path (text or .json format) or an open text stream
        check_unique: See solve_problem_with_diagnostics
        cross_check: See solve_problem_with_diagnostics

    Returns:
        (grid, diagnostics). Unparseable input gives (None, status
        "invalid_input"); an unreadable file gives (None, status "error").
    """
    if isinstance(source, (str, Path)):
        puzzle_name = str(source)
    else:
        puzzle_name = getattr(source, "name", "<stream>")

    try:
        if isinstance(source, (str, Path)):
            problem = load_puzzle(Path(source))
        else:
            problem = read_puzzle(source)
    except MalformedInputError as e:
        logger.warning("%s: invalid input: %s", puzzle_name, e)
        return None, SolveDiagnostics(
            puzzle_name=puzzle_name, status="invalid_input", error_message=str(e)
        )
    except OSError as e:
        logger.error("%s: cannot read puzzle: %s", puzzle_name, e)
        return None, SolveDiagnostics(
            puzzle_name=puzzle_name, status="error", error_message=f"{type(e).__name__}: {e}"
        )

    return solve_problem_with_diagnostics(
        problem,
        puzzle_name=puzzle_name,
        check_unique=check_unique,
        cross_check=cross_check,
    )


def solve_puzzle(source: PuzzleSource) -> Optional[Grid]:
    """
    Solve a puzzle from a path or stream and return only the grid.

    This is a thin wrapper around solve_problem_with_diagnostics.

    Raises:
        MalformedInputError: If the puzzle cannot be parsed
    """
    if isinstance(source, (str, Path)):
        problem = load_puzzle(Path(source))
    else:
        problem = read_puzzle(source)
    grid, _ = solve_problem_with_diagnostics(problem)
    return grid


if __name__ == "__main__":
    # Self-test with the sample puzzle on stdin
    from nonogram.core.puzzle_io import format_result

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    grid, diag = solve_puzzle_with_diagnostics(sys.stdin, cross_check=True)
    print(format_result(grid))
    print(f"status={diag.status} ilp={diag.ilp_status}")
