"""
Scan-order indexing helpers for the nonogram search.

This module provides canonical mappings between:
  - Cell coordinates (r, c) <-> flat cell index (0..R*C-1)
  - A ScanIndex cursor that walks a grid's extents in row-major order

Conventions:
  - Grid shape: (R, C)
  - Cell ordering: row-major, flat = r * C + c
  - All indices are 0-based (Python convention)
  - The terminal ("after-last") position is (R, 0)

This is pure indexing math with no dependencies on cell states or the solver.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, Tuple


def flatten_index(r: int, c: int, C: int) -> int:
    """
    Convert row/col coordinates to a flat cell index (0 .. R*C-1).

    Uses row-major ordering: all columns of row 0, then all columns of row 1, etc.

    Args:
        r: row index, 0 <= r < R
        c: col index, 0 <= c < C
        C: grid width (column count)

    Returns:
        flat cell index, r * C + c

    Example:
        >>> # 3x4 grid, cell at row 1, col 2
        >>> flatten_index(1, 2, 4)
        6
    """
    return r * C + c


def unflatten_index(flat: int, C: int) -> Tuple[int, int]:
    """
    Convert a flat cell index back to (row, col).

    This is the inverse of flatten_index.

    Example:
        >>> unflatten_index(6, 4)
        (1, 2)
    """
    return (flat // C, flat % C)


@dataclass
class ScanIndex:
    """
    Position cursor over a grid's (row_size, column_size) extents.

    The cursor carries its own extents so that a grid can reject a cursor
    built for a differently shaped grid. Positions are visited in row-major
    order; row == row_size is the unique terminal sentinel (column is 0 there).
    The begin position (0, 0) doubles as "before-first" since the search only
    moves forward from it.

    Attributes:
        row_size: Number of rows in the scanned grid (R)
        column_size: Number of columns in the scanned grid (C)
        row: Current row, 0 <= row <= R
        column: Current column, 0 <= column < C

    Example:
        >>> idx = ScanIndex(2, 2)
        >>> idx.advance().advance()
        ScanIndex(row_size=2, column_size=2, row=1, column=0)
        >>> idx.advance().advance().is_end()
        True
    """
    row_size: int
    column_size: int
    row: int = 0
    column: int = 0

    def __post_init__(self) -> None:
        # A grid without columns has no cells: start at the terminal sentinel
        if self.column_size == 0:
            self.row = self.row_size
            self.column = 0

    @classmethod
    def for_grid(cls, grid) -> "ScanIndex":
        """Build a begin cursor whose extents match the given grid."""
        return cls(grid.rows, grid.cols)

    @property
    def extents(self) -> Tuple[int, int]:
        return (self.row_size, self.column_size)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.column)

    @property
    def flat(self) -> int:
        """Row-major offset of the current position."""
        return flatten_index(self.row, self.column, self.column_size)

    def is_begin(self) -> bool:
        return self.row == 0 and self.column == 0

    def is_end(self) -> bool:
        return self.row == self.row_size

    def advance(self) -> "ScanIndex":
        """
        Move to the next position in row-major order (prefix increment).

        Must not be called on a cursor that is already at the end.

        Returns:
            self, to allow chaining
        """
        self.column += 1
        if self.column == self.column_size:
            self.column = 0
            self.row += 1
        return self

    def retreat(self) -> "ScanIndex":
        """
        Move to the previous position in row-major order (prefix decrement).

        Must not be called on a cursor at the begin position. Retreating from
        the terminal sentinel lands on the last cell (R-1, C-1).

        Returns:
            self, to allow chaining
        """
        if self.column == 0:
            self.column = self.column_size
            self.row -= 1
        self.column -= 1
        return self

    def copy(self) -> "ScanIndex":
        return replace(self)

    def next(self) -> "ScanIndex":
        """Return an advanced copy, leaving this cursor untouched."""
        return self.copy().advance()


def scan_positions(rows: int, cols: int) -> Iterator[Tuple[int, int]]:
    """
    Yield every (row, col) of an R x C grid in row-major scan order.

    Example:
        >>> list(scan_positions(2, 2))
        [(0, 0), (0, 1), (1, 0), (1, 1)]
    """
    idx = ScanIndex(rows, cols)
    while not idx.is_end():
        yield idx.position
        idx.advance()


if __name__ == "__main__":
    # Sanity checks for scan order and index roundtrips
    R, C = 3, 4

    print("Testing flat index roundtrip...")
    for r in range(R):
        for c in range(C):
            flat = flatten_index(r, c, C)
            assert unflatten_index(flat, C) == (r, c), f"Roundtrip failed at {(r, c)}"
    print("  ✓ Flat index roundtrip passed")

    print("Testing scan order...")
    visited = list(scan_positions(R, C))
    assert visited == [(r, c) for r in range(R) for c in range(C)]
    print(f"  ✓ Visited {len(visited)} positions in row-major order")

    print("\n✓ indexing.py sanity checks passed.")
