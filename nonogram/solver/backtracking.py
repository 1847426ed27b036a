"""
Backtracking search for nonogram solutions.

Cells are decided one at a time in row-major scan order. After each
assignment the cell's row (up to its column) and column (up to its row) are
checked against their run definitions; a failed check prunes the branch.

The search keeps no explicit stack: the state of the current cell encodes
which trial value comes next (UNSET -> EMPTY -> FILLED -> exhausted). An
exhausted cell is reset to UNSET and the cursor retreats to the previous
cell, which then moves on to its own next trial. Retreating from the first
cell means the whole space is exhausted.

The visiting order is EMPTY before FILLED, so the first solution found is the
lexicographically smallest one (EMPTY < FILLED) in row-major order, and
repeated calls on the same input return identical grids.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from nonogram.constraints.indexing import ScanIndex
from nonogram.constraints.line_check import SolverInvariantError, check_line
from nonogram.core.grid_types import CellState, Grid
from nonogram.core.problem import ProblemInput


logger = logging.getLogger(__name__)

__all__ = [
    "SearchStats",
    "SolverInvariantError",
    "check",
    "count_solutions",
    "iter_solutions",
    "solve",
    "solve_runs",
    "solve_with_stats",
]

# Trial order per cell; the value after the current one is tried next
_NEXT_TRIAL = {
    CellState.UNSET: CellState.EMPTY,
    CellState.EMPTY: CellState.FILLED,
    CellState.FILLED: None,
}


@dataclass
class SearchStats:
    """
    Counters collected during one search.

    Attributes:
        assignments: Number of trial values written to cells
        rejections: Number of assignments rejected by the row/column check
        backtracks: Number of times the cursor retreated
        solutions: Number of complete solutions reached
    """
    assignments: int = 0
    rejections: int = 0
    backtracks: int = 0
    solutions: int = 0


def check(grid: Grid, idx: ScanIndex, problem: ProblemInput) -> bool:
    """
    Check the row and column through the cell at `idx`.

    The row is checked over columns 0..idx.column and the column over rows
    0..idx.row. A line whose last cell is `idx` gets the exact check, any
    other line the partial check.

    Args:
        grid: Grid being filled; every cell up to `idx` in scan order is decided
        idx: Position that was just assigned
        problem: Run definitions

    Returns:
        True if both lines are still consistent with their definitions.
    """
    row, col = idx.row, idx.column
    if not check_line(
        (grid.get(row, c) for c in range(col + 1)),
        problem.rowdef[row],
        exact=col + 1 == grid.cols,
    ):
        return False
    return check_line(
        (grid.get(r, col) for r in range(row + 1)),
        problem.coldef[col],
        exact=row + 1 == grid.rows,
    )


def _search(grid: Grid, idx: ScanIndex, problem: ProblemInput, stats: SearchStats) -> bool:
    """
    Advance the search from `idx` until a solution or exhaustion.

    `idx` is moved in place. On success it is left at the end sentinel and
    `grid` holds the solution; on failure every cell is back to UNSET.
    Calling again after a success with the cursor retreated onto the last cell
    resumes the search for the next solution.
    """
    while not idx.is_end():
        value = _NEXT_TRIAL[grid.get_by_index(idx)]
        if value is None:
            grid.set_by_index(idx, CellState.UNSET)
            if idx.is_begin():
                return False
            idx.retreat()
            stats.backtracks += 1
            continue

        grid.set_by_index(idx, value)
        stats.assignments += 1
        if check(grid, idx, problem):
            idx.advance()
        else:
            stats.rejections += 1

    stats.solutions += 1
    return True


def _degenerate_solution(problem: ProblemInput) -> Optional[Grid]:
    # No cells: only an all-empty definition set can be satisfied
    grid = Grid(problem.row_count, problem.column_count)
    return grid if problem.has_no_runs() else None


def solve_with_stats(problem: ProblemInput) -> Tuple[Optional[Grid], SearchStats]:
    """
    Solve a puzzle and also return the search counters.

    Args:
        problem: Run definitions; R = len(rowdef), C = len(coldef)

    Returns:
        (grid, stats) where grid is the solved Grid (EMPTY/FILLED only) or
        None when no assignment satisfies every definition.
    """
    stats = SearchStats()
    rows, cols = problem.shape
    logger.debug("Solving %dx%d puzzle", rows, cols)

    grid = Grid(rows, cols)
    if grid.empty():
        solution = _degenerate_solution(problem)
        stats.solutions = 0 if solution is None else 1
        return solution, stats

    idx = ScanIndex.for_grid(grid)
    found = _search(grid, idx, problem, stats)

    logger.debug(
        "Search finished: found=%s assignments=%d rejections=%d backtracks=%d",
        found, stats.assignments, stats.rejections, stats.backtracks,
    )
    return (grid if found else None), stats


def solve(problem: ProblemInput) -> Optional[Grid]:
    """
    Find a solution grid for `problem`, or None if none exists.

    Example:
        >>> grid = solve(ProblemInput(rowdef=[[1]], coldef=[[1]]))
        >>> grid.get(0, 0)
        <CellState.FILLED: 2>
    """
    grid, _ = solve_with_stats(problem)
    return grid


def solve_runs(
    rowdef: Sequence[Sequence[int]],
    coldef: Sequence[Sequence[int]]
) -> Optional[Grid]:
    """Convenience wrapper: solve directly from row and column run lists."""
    return solve(ProblemInput(rowdef=rowdef, coldef=coldef))


def iter_solutions(
    problem: ProblemInput,
    stats: Optional[SearchStats] = None
) -> Iterator[Grid]:
    """
    Yield every solution of `problem` in search order.

    The first grid yielded is the one solve() returns. Each yielded grid is an
    independent copy.

    Args:
        problem: Run definitions
        stats: Optional SearchStats to accumulate counters into
    """
    if stats is None:
        stats = SearchStats()

    grid = Grid(*problem.shape)
    if grid.empty():
        solution = _degenerate_solution(problem)
        if solution is not None:
            stats.solutions += 1
            yield solution
        return

    idx = ScanIndex.for_grid(grid)
    while _search(grid, idx, problem, stats):
        yield grid.copy()
        # Resume from the last cell; its next trial continues the search
        idx.retreat()


def count_solutions(problem: ProblemInput, limit: Optional[int] = None) -> int:
    """
    Count solutions, stopping early once `limit` have been found.

    Example:
        >>> # Two diagonal placements satisfy these definitions
        >>> count_solutions(ProblemInput(rowdef=[[1], [1]], coldef=[[1], [1]]))
        2
    """
    count = 0
    for _ in iter_solutions(problem):
        count += 1
        if limit is not None and count >= limit:
            break
    return count
