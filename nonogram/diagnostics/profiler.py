"""
Puzzle Profiler.

Analyzes a puzzle's run definitions *before* searching, to flag puzzles that
cannot have a solution for simple counting reasons:

1. Line capacity: a line needs sum(runs) + (len(runs) - 1) cells; a line
   with fewer cells can never be satisfied.
2. Balance: every filled cell belongs to one row and one column, so the
   row totals and the column totals must agree.

The profile is informational. The search still runs on every puzzle and
remains the sole source of answers.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

import numpy as np

from nonogram.constraints.line_check import min_line_length
from nonogram.core.problem import ProblemInput


@dataclass
class PuzzleProfile:
    """
    Static profile of a puzzle.

    Attributes:
        rows: Row count R
        cols: Column count C
        filled_by_rows: Total filled cells required by the row definitions
        filled_by_cols: Total filled cells required by the column definitions
        overfull_lines: Lines whose runs cannot fit, each as
                        {"axis": str, "index": int, "required": int, "available": int}
        density: filled_by_rows / (R * C), 0.0 for an empty grid
    """
    rows: int
    cols: int
    filled_by_rows: int
    filled_by_cols: int
    overfull_lines: List[Dict[str, Any]] = field(default_factory=list)
    density: float = 0.0

    @property
    def totals_consistent(self) -> bool:
        return self.filled_by_rows == self.filled_by_cols

    @property
    def obviously_infeasible(self) -> bool:
        """True if counting alone proves there is no solution."""
        return bool(self.overfull_lines) or not self.totals_consistent

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["totals_consistent"] = self.totals_consistent
        data["obviously_infeasible"] = self.obviously_infeasible
        return data


def _overfull(defs, length: int, axis: str) -> List[Dict[str, Any]]:
    required = np.array([min_line_length(runs) for runs in defs], dtype=int)
    bad = np.where(required > length)[0]
    return [
        {"axis": axis, "index": int(i), "required": int(required[i]), "available": length}
        for i in bad
    ]


def profile_puzzle(problem: ProblemInput) -> PuzzleProfile:
    """
    Compute the static profile of a puzzle.

    Example:
        >>> p = profile_puzzle(ProblemInput(rowdef=[[2, 1]], coldef=[[1], [1], [1]]))
        >>> p.overfull_lines
        [{'axis': 'row', 'index': 0, 'required': 4, 'available': 3}]
    """
    rows, cols = problem.shape
    filled_by_rows = sum(sum(runs) for runs in problem.rowdef)
    filled_by_cols = sum(sum(runs) for runs in problem.coldef)

    overfull = _overfull(problem.rowdef, cols, "row") + _overfull(problem.coldef, rows, "column")
    density = filled_by_rows / (rows * cols) if rows * cols else 0.0

    return PuzzleProfile(
        rows=rows,
        cols=cols,
        filled_by_rows=filled_by_rows,
        filled_by_cols=filled_by_cols,
        overfull_lines=overfull,
        density=density,
    )
