"""
Core grid types for the nonogram solver.

This module defines the cell state enumeration and the dense Grid container
the search fills in place.

Grid: R x C cells, stored flat in row-major order (offset = row * C + col)
Cells: addressed as (row, col) pairs or through a ScanIndex cursor
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from nonogram.constraints.indexing import ScanIndex, flatten_index


class CellState(IntEnum):
    """
    State of a single cell.

    UNSET only exists while a search is in progress; a returned solution
    holds EMPTY/FILLED exclusively. UNSET is 0 so that a zeroed buffer is
    an undecided grid.
    """
    UNSET = 0
    EMPTY = 1
    FILLED = 2


class GridIndexError(IndexError):
    """Raised when checked grid access is outside the grid's extents."""
    pass


class IndexMismatchError(ValueError):
    """Raised when a ScanIndex built for other extents is applied to a grid."""
    pass


class Grid:
    """
    Dense R x C container of CellState values.

    Storage is a flat numpy int8 buffer in row-major layout owned by the grid.
    get/set and get_by_index/set_by_index are unchecked and meant for the
    search's inner loop; at/set_at, at_index/set_at_index and item access
    (grid[r, c], grid[idx]) validate their arguments first.

    Attributes:
        rows: Number of rows (R >= 0)
        cols: Number of columns (C >= 0)

    Example:
        >>> g = Grid(2, 3)
        >>> g.set(1, 2, CellState.FILLED)
        >>> g.at(1, 2)
        <CellState.FILLED: 2>
    """

    def __init__(self, rows: int, cols: int):
        if rows < 0 or cols < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got rows={rows}, cols={cols}")
        self._rows = rows
        self._cols = cols
        self._cells = np.zeros(rows * cols, dtype=np.int8)

    @classmethod
    def from_rows(cls, data: Sequence[Sequence[int]]) -> "Grid":
        """
        Build a grid from nested row lists (all rows must have equal length).

        Example:
            >>> g = Grid.from_rows([[CellState.FILLED, CellState.EMPTY]])
            >>> g.shape
            (1, 2)
        """
        rows = len(data)
        cols = len(data[0]) if rows else 0
        grid = cls(rows, cols)
        for r, row in enumerate(data):
            if len(row) != cols:
                raise ValueError(f"Row {r} has length {len(row)}, expected {cols}")
            for c, value in enumerate(row):
                grid.set(r, c, CellState(value))
        return grid

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def size(self) -> int:
        return self._rows * self._cols

    def empty(self) -> bool:
        return self.size == 0

    # Unchecked access

    def get(self, row: int, col: int) -> CellState:
        return CellState(int(self._cells[row * self._cols + col]))

    def set(self, row: int, col: int, value: CellState) -> None:
        self._cells[row * self._cols + col] = value

    def get_by_index(self, idx: ScanIndex) -> CellState:
        return self.get(idx.row, idx.column)

    def set_by_index(self, idx: ScanIndex, value: CellState) -> None:
        self.set(idx.row, idx.column, value)

    # Checked access

    def _bound_check(self, row: int, col: int) -> None:
        if row < 0 or row >= self._rows:
            raise GridIndexError(f"Grid row {row} out of range [0, {self._rows})")
        if col < 0 or col >= self._cols:
            raise GridIndexError(f"Grid column {col} out of range [0, {self._cols})")

    def _index_check(self, idx: ScanIndex) -> None:
        if idx.extents != self.shape:
            raise IndexMismatchError(
                f"ScanIndex extents {idx.extents} do not match grid shape {self.shape}"
            )
        self._bound_check(idx.row, idx.column)

    def at(self, row: int, col: int) -> CellState:
        self._bound_check(row, col)
        return self.get(row, col)

    def set_at(self, row: int, col: int, value: CellState) -> None:
        self._bound_check(row, col)
        self.set(row, col, CellState(value))

    def at_index(self, idx: ScanIndex) -> CellState:
        self._index_check(idx)
        return self.get_by_index(idx)

    def set_at_index(self, idx: ScanIndex, value: CellState) -> None:
        self._index_check(idx)
        self.set_by_index(idx, CellState(value))

    def __getitem__(self, key) -> CellState:
        if isinstance(key, ScanIndex):
            return self.at_index(key)
        row, col = key
        return self.at(row, col)

    def __setitem__(self, key, value: CellState) -> None:
        if isinstance(key, ScanIndex):
            self.set_at_index(key, value)
        else:
            row, col = key
            self.set_at(row, col, value)

    def resize(self, rows: int, cols: int) -> None:
        """
        Change the grid's extents, keeping the overlapping top-left block.

        The min(old_rows, rows) x min(old_cols, cols) submatrix is copied into
        the new storage; every other cell becomes UNSET.

        Args:
            rows: New row count (>= 0)
            cols: New column count (>= 0)

        Raises:
            ValueError: If either dimension is negative
        """
        resized = Grid(rows, cols)
        keep_rows = min(self._rows, rows)
        keep_cols = min(self._cols, cols)
        if keep_rows and keep_cols:
            resized._cells.reshape(rows, cols)[:keep_rows, :keep_cols] = \
                self._cells.reshape(self._rows, self._cols)[:keep_rows, :keep_cols]
        self._rows, self._cols, self._cells = resized._rows, resized._cols, resized._cells

    def row(self, r: int) -> List[CellState]:
        start = flatten_index(r, 0, self._cols)
        return [CellState(int(v)) for v in self._cells[start:start + self._cols]]

    def column(self, c: int) -> List[CellState]:
        return [CellState(int(v)) for v in self._cells[c::self._cols]] if self._cols else []

    def iter_rows(self) -> Iterator[List[CellState]]:
        for r in range(self._rows):
            yield self.row(r)

    def __iter__(self) -> Iterator[CellState]:
        """Iterate over all cells in row-major scan order."""
        for v in self._cells:
            yield CellState(int(v))

    def __len__(self) -> int:
        return self.size

    def is_complete(self) -> bool:
        """True if no cell is UNSET."""
        return not np.any(self._cells == int(CellState.UNSET))

    def to_array(self) -> np.ndarray:
        """Return a (rows, cols) int8 copy of the cell values."""
        return self._cells.reshape(self._rows, self._cols).copy()

    def filled_mask(self) -> np.ndarray:
        """Return a (rows, cols) boolean array, True where a cell is FILLED."""
        return self.to_array() == int(CellState.FILLED)

    def copy(self) -> "Grid":
        other = Grid(self._rows, self._cols)
        other._cells[:] = self._cells
        return other

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f"Grid(rows={self._rows}, cols={self._cols})"


def grid_from_strings(lines: Iterable[str]) -> Grid:
    """
    Build a grid from rendered lines such as "# . #".

    Whitespace is ignored; '#' is FILLED, '.' is EMPTY, '?' is UNSET.
    Mostly useful for writing expected solutions in tests.

    Example:
        >>> grid_from_strings(["# .", ". #"]).shape
        (2, 2)
    """
    symbols = {"#": CellState.FILLED, ".": CellState.EMPTY, "?": CellState.UNSET}
    data = []
    for line in lines:
        try:
            data.append([symbols[ch] for ch in line if not ch.isspace()])
        except KeyError as e:
            raise ValueError(f"Unknown cell symbol {e.args[0]!r} in line {line!r}")
    return Grid.from_rows(data)
