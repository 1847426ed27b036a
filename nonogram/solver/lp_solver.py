"""
ILP cross-check for nonogram solutions.

This module encodes a puzzle as a 0/1 integer program and solves it with
PuLP's bundled CBC solver. It is an independent oracle used to cross-check
the backtracking search (feasibility and clue satisfaction); answers shown to
users always come from the backtracking search.

Model:
  - Cell variables x[r,c] in {0,1} (1 = FILLED)
  - For each line and each run i of length b_i, start variables
    s[i,p] in {0,1} over the feasible start offsets p of that run
  - Each run starts exactly once:          sum_p s[i,p] = 1
  - Runs keep their order with a gap:      start(i+1) >= start(i) + b_i + 1
  - Cells are exactly the covered cells:   x[cell t] = sum_{i,p: p <= t < p+b_i} s[i,p]
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

import pulp

from nonogram.core.grid_types import CellState, Grid
from nonogram.core.problem import ProblemInput


logger = logging.getLogger(__name__)


class InfeasibleModelError(Exception):
    """Raised when the ILP model is infeasible or not optimal."""
    pass


def run_start_ranges(runs: Sequence[int], length: int) -> List[Tuple[int, int]]:
    """
    Inclusive (lowest, highest) start offsets for every run of a line.

    A run can start no earlier than the space taken by the runs before it
    (each followed by one gap) and no later than what leaves room for the
    runs after it.

    Example:
        >>> run_start_ranges([2, 1], 5)
        [(0, 1), (3, 4)]
    """
    ranges = []
    for i, b in enumerate(runs):
        lowest = sum(n + 1 for n in runs[:i])
        highest = length - b - sum(n + 1 for n in runs[i + 1:])
        ranges.append((lowest, highest))
    return ranges


def _add_line_constraints(
    prob: pulp.LpProblem,
    cells: List[pulp.LpVariable],
    runs: Sequence[int],
    name: str
) -> None:
    length = len(cells)

    if not runs:
        for t, x in enumerate(cells):
            prob += (x == 0), f"{name}_empty_{t}"
        return

    ranges = run_start_ranges(runs, length)
    for i, (lowest, highest) in enumerate(ranges):
        if highest < lowest:
            raise InfeasibleModelError(
                f"{name}: run {i} of length {runs[i]} does not fit in {length} cells"
            )

    starts: List[Dict[int, pulp.LpVariable]] = []
    for i, (lowest, highest) in enumerate(ranges):
        starts.append({
            p: pulp.LpVariable(f"s_{name}_{i}_{p}", cat=pulp.LpBinary)
            for p in range(lowest, highest + 1)
        })

    # 1. Each run starts exactly once
    for i, s in enumerate(starts):
        prob += (pulp.lpSum(s.values()) == 1), f"{name}_run{i}_once"

    # 2. Runs in order, separated by at least one empty cell
    for i in range(len(runs) - 1):
        this_start = pulp.lpSum(p * v for p, v in starts[i].items())
        next_start = pulp.lpSum(p * v for p, v in starts[i + 1].items())
        prob += (next_start >= this_start + runs[i] + 1), f"{name}_run{i}_order"

    # 3. A cell is filled iff some run covers it
    for t, x in enumerate(cells):
        covering = [
            v
            for i, s in enumerate(starts)
            for p, v in s.items()
            if p <= t < p + runs[i]
        ]
        prob += (x == pulp.lpSum(covering)), f"{name}_cover_{t}"


def solve_with_ilp(problem: ProblemInput) -> Grid:
    """
    Solve a puzzle as an ILP.

    Args:
        problem: Run definitions

    Returns:
        A solution Grid (EMPTY/FILLED only). When several solutions exist this
        is whichever CBC finds, not necessarily the backtracking answer.

    Raises:
        InfeasibleModelError: if the model is infeasible or no optimal solution is found.
    """
    rows, cols = problem.shape
    grid = Grid(rows, cols)
    if grid.empty():
        if not problem.has_no_runs():
            raise InfeasibleModelError("Grid has no cells but some lines require runs")
        return grid

    # 1. Create model and cell variables x[r][c]
    prob = pulp.LpProblem("nonogram_ilp", pulp.LpMinimize)
    x = [
        [pulp.LpVariable(f"x_{r}_{c}", cat=pulp.LpBinary) for c in range(cols)]
        for r in range(rows)
    ]

    # 2. Line constraints for every row and column
    for r, runs in enumerate(problem.rowdef):
        _add_line_constraints(prob, x[r], runs, f"row{r}")
    for c, runs in enumerate(problem.coldef):
        _add_line_constraints(prob, [x[r][c] for r in range(rows)], runs, f"col{c}")

    # 3. Objective: any feasible point will do; minimize filled cells
    prob += pulp.lpSum(v for row in x for v in row)

    # 4. Solve using pulp's CBC solver
    status = prob.solve(pulp.PULP_CBC_CMD(msg=False))
    logger.debug("ILP status for %dx%d puzzle: %s", rows, cols, pulp.LpStatus[status])

    if pulp.LpStatus[status] != "Optimal":
        raise InfeasibleModelError(
            f"Solver status: {pulp.LpStatus[status]}. "
            f"Model may be infeasible."
        )

    # 5. Extract solution, guarding against None or float noise
    for r in range(rows):
        for c in range(cols):
            val = pulp.value(x[r][c])
            filled = val is not None and val > 0.5
            grid.set(r, c, CellState.FILLED if filled else CellState.EMPTY)

    return grid


def ilp_feasible(problem: ProblemInput) -> bool:
    """True if the ILP finds any solution."""
    try:
        solve_with_ilp(problem)
    except InfeasibleModelError:
        return False
    return True


if __name__ == "__main__":
    # Simple self-test: the 1x3 puzzle "# . #"
    print("Testing lp_solver.py with minimal example...")
    print("=" * 70)

    problem = ProblemInput(rowdef=[[1, 1]], coldef=[[1], [], [1]])
    grid = solve_with_ilp(problem)
    print(f"Solution row: {grid.row(0)}")
    assert grid.row(0) == [CellState.FILLED, CellState.EMPTY, CellState.FILLED]

    print("\n✓ lp_solver.py self-test passed.")
    print("=" * 70)
