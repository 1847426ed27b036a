"""
Run-definition checks for a single row or column.

A line is consistent with its run definition when its maximal runs of FILLED
cells, read in order, match the definition. Two modes are supported:

  - partial: only a prefix of the line has been assigned. Every closed run
    must match its expected length, an open run must not exceed it, and no
    run may start after all expected runs are consumed.
  - exact: the whole line has been assigned. In addition, a run still open at
    the end must match the last expected length and every expected run must
    have been consumed.

The checks return a violation reason (None when consistent) so callers can
either branch on it cheaply or report it.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from nonogram.core.grid_types import CellState


TOO_MANY_FILLED = "too many filled cells"
TOO_FEW_FILLED = "too few filled cells"
TOO_MANY_GROUPS = "too many groups"
TOO_FEW_GROUPS = "too few groups"


class SolverInvariantError(RuntimeError):
    """Raised when an UNSET cell is seen where only decided cells can exist."""
    pass


def line_violation(
    cells: Iterable[CellState],
    runs: Sequence[int],
    exact: bool
) -> Optional[str]:
    """
    Check an assigned line prefix against its run definition.

    Args:
        cells: Assigned cells of the line, in order (EMPTY/FILLED only)
        runs: Expected run lengths for the line
        exact: True if `cells` is the whole line, False for a prefix

    Returns:
        None if the cells are consistent with `runs`, otherwise one of
        TOO_MANY_FILLED, TOO_FEW_FILLED, TOO_MANY_GROUPS, TOO_FEW_GROUPS.

    Raises:
        SolverInvariantError: If an UNSET (or unknown) cell is encountered

    Example:
        >>> F, E = CellState.FILLED, CellState.EMPTY
        >>> line_violation([F, E, F], [1, 1], exact=True) is None
        True
        >>> line_violation([F, F], [1], exact=False)
        'too many filled cells'
    """
    expected = 0        # index of the run expected next
    count = 0           # length of the open run
    in_run = False
    total = len(runs)

    for cell in cells:
        if cell == CellState.EMPTY:
            if in_run:
                if count != runs[expected]:
                    return TOO_FEW_FILLED
                expected += 1
                count = 0
                in_run = False
        elif cell == CellState.FILLED:
            if not in_run:
                if expected == total:
                    return TOO_MANY_GROUPS
                in_run = True
            count += 1
            if count > runs[expected]:
                return TOO_MANY_FILLED
        else:
            raise SolverInvariantError(f"Undecided cell {cell!r} inside a checked line prefix")

    if exact:
        if in_run:
            if count != runs[expected]:
                return TOO_FEW_FILLED
            expected += 1
        if expected != total:
            return TOO_FEW_GROUPS
    return None


def check_line(cells: Iterable[CellState], runs: Sequence[int], exact: bool) -> bool:
    """Boolean form of line_violation, used by the search."""
    return line_violation(cells, runs, exact) is None


def min_line_length(runs: Sequence[int]) -> int:
    """
    Minimum number of cells needed to hold `runs` (one gap between runs).

    Example:
        >>> min_line_length([3, 1, 2])
        8
        >>> min_line_length([])
        0
    """
    if not runs:
        return 0
    return sum(runs) + len(runs) - 1


def runs_of(cells: Iterable[CellState]) -> List[int]:
    """
    Lengths of the maximal FILLED runs in a line, in order.

    Example:
        >>> F, E = CellState.FILLED, CellState.EMPTY
        >>> runs_of([F, F, E, F])
        [2, 1]
    """
    result: List[int] = []
    count = 0
    for cell in cells:
        if cell == CellState.FILLED:
            count += 1
        elif count:
            result.append(count)
            count = 0
    if count:
        result.append(count)
    return result
