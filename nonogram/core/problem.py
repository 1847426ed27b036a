"""
Puzzle definition types.

ProblemInput holds the run definitions of a nonogram: for every row and every
column, the ordered list of run lengths of FILLED cells that line must contain.
An empty run list means the whole line is EMPTY. A list holding the single
value 0 is accepted as another spelling of the empty list. Run lengths may be
any integral type (numpy integers included) and are stored as Python ints.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Sequence, Tuple


Runs = Tuple[int, ...]


def _is_run_length(n) -> bool:
    return isinstance(n, Integral) and not isinstance(n, bool)


def _normalize_runs(defs: Sequence[Sequence[int]], axis: str) -> Tuple[Runs, ...]:
    normalized = []
    for i, runs in enumerate(defs):
        line = tuple(runs)
        # A lone 0 is the "no runs" marker, as in the text format
        if len(line) == 1 and _is_run_length(line[0]) and line[0] == 0:
            line = ()
        for n in line:
            if not _is_run_length(n) or n <= 0:
                raise ValueError(
                    f"{axis} {i}: run lengths must be positive integers, got {list(line)}"
                )
        normalized.append(tuple(int(n) for n in line))
    return tuple(normalized)


@dataclass(frozen=True)
class ProblemInput:
    """
    Run definitions for every row and column of a puzzle.

    The grid shape is implied: R = len(rowdef), C = len(coldef). Inputs are
    converted to tuples so a ProblemInput can be shared without copying.

    Attributes:
        rowdef: rowdef[i] is the ordered run lengths required in row i
        coldef: coldef[j] is the ordered run lengths required in column j

    Example:
        >>> p = ProblemInput(rowdef=[[1, 1]], coldef=[[1], [], [1]])
        >>> p.shape
        (1, 3)
    """
    rowdef: Tuple[Runs, ...]
    coldef: Tuple[Runs, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rowdef", _normalize_runs(self.rowdef, "row"))
        object.__setattr__(self, "coldef", _normalize_runs(self.coldef, "column"))

    @property
    def row_count(self) -> int:
        return len(self.rowdef)

    @property
    def column_count(self) -> int:
        return len(self.coldef)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.row_count, self.column_count)

    def has_no_runs(self) -> bool:
        """True if every row and column definition is empty."""
        return not any(self.rowdef) and not any(self.coldef)

    def to_dict(self) -> dict:
        return {
            "rows": [list(runs) for runs in self.rowdef],
            "cols": [list(runs) for runs in self.coldef],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProblemInput":
        return cls(rowdef=data["rows"], coldef=data["cols"])
