"""
Smoke tests for the Grid container and CellState.

Covers:
  - construction (all cells UNSET) and shape accessors
  - unchecked get/set and row-major storage
  - checked access: out-of-range rows/columns, mismatched ScanIndex extents
  - resize preserving the top-left block
  - iteration, copy/equality and grid_from_strings
"""

from nonogram.constraints.indexing import ScanIndex
from nonogram.core.grid_types import (
    CellState,
    Grid,
    GridIndexError,
    IndexMismatchError,
    grid_from_strings,
)


def test_construct_all_unset():
    grid = Grid(2, 3)
    assert grid.shape == (2, 3)
    assert grid.size == 6
    assert len(grid) == 6
    assert all(cell == CellState.UNSET for cell in grid)
    assert not grid.is_complete()


def test_zero_sized_grids():
    for rows, cols in [(0, 0), (0, 4), (3, 0)]:
        grid = Grid(rows, cols)
        assert grid.empty()
        assert list(grid) == []
        # Vacuously complete: no cell is UNSET
        assert grid.is_complete()


def test_negative_dimensions_rejected():
    try:
        Grid(-1, 2)
        raise AssertionError("Expected ValueError for negative rows")
    except ValueError:
        pass


def test_get_set_row_major():
    grid = Grid(2, 3)
    grid.set(1, 0, CellState.FILLED)
    grid.set(0, 2, CellState.EMPTY)

    assert grid.get(1, 0) == CellState.FILLED
    assert grid.get(0, 2) == CellState.EMPTY
    # Row-major: (0,2) is flat 2, (1,0) is flat 3
    cells = list(grid)
    assert cells[2] == CellState.EMPTY
    assert cells[3] == CellState.FILLED


def test_checked_access_out_of_range():
    """at/set_at reject rows and columns outside the extents."""
    grid = Grid(2, 3)
    for row, col in [(-1, 0), (2, 0), (0, -1), (0, 3), (5, 5)]:
        try:
            grid.at(row, col)
            raise AssertionError(f"Expected GridIndexError for ({row}, {col})")
        except GridIndexError:
            pass
        try:
            grid.set_at(row, col, CellState.FILLED)
            raise AssertionError(f"Expected GridIndexError for set_at({row}, {col})")
        except GridIndexError:
            pass

    # GridIndexError is an IndexError, so tuple indexing behaves like a sequence
    try:
        grid[2, 0]
        raise AssertionError("Expected IndexError")
    except IndexError:
        pass


def test_scan_index_access():
    grid = Grid(2, 2)
    idx = ScanIndex.for_grid(grid).advance()  # (0, 1)

    grid.set_by_index(idx, CellState.FILLED)
    assert grid.get(0, 1) == CellState.FILLED
    assert grid.get_by_index(idx) == CellState.FILLED
    assert grid.at_index(idx) == CellState.FILLED
    assert grid[idx] == CellState.FILLED

    grid[idx] = CellState.EMPTY
    assert grid.get(0, 1) == CellState.EMPTY


def test_scan_index_mismatch_is_distinct_from_out_of_range():
    grid = Grid(2, 2)

    # Same position, but extents of a 3x2 grid
    foreign = ScanIndex(3, 2)
    try:
        grid.at_index(foreign)
        raise AssertionError("Expected IndexMismatchError")
    except IndexMismatchError:
        pass

    try:
        grid.set_at_index(ScanIndex(2, 5), CellState.FILLED)
        raise AssertionError("Expected IndexMismatchError")
    except IndexMismatchError:
        pass

    # Matching extents but terminal position: out of range, not a mismatch
    end = ScanIndex(2, 2, row=2, column=0)
    try:
        grid.at_index(end)
        raise AssertionError("Expected GridIndexError")
    except GridIndexError:
        pass


def test_resize_preserves_top_left():
    grid = grid_from_strings([
        "# . #",
        ". # .",
    ])

    grid.resize(3, 2)
    assert grid.shape == (3, 2)
    assert grid.row(0) == [CellState.FILLED, CellState.EMPTY]
    assert grid.row(1) == [CellState.EMPTY, CellState.FILLED]
    assert grid.row(2) == [CellState.UNSET, CellState.UNSET]

    grid.resize(1, 4)
    assert grid.row(0) == [CellState.FILLED, CellState.EMPTY, CellState.UNSET, CellState.UNSET]

    grid.resize(0, 4)
    assert grid.empty()


def test_rows_columns_and_array():
    grid = grid_from_strings([
        "# .",
        "# #",
    ])
    assert grid.column(0) == [CellState.FILLED, CellState.FILLED]
    assert grid.column(1) == [CellState.EMPTY, CellState.FILLED]
    assert [row for row in grid.iter_rows()] == [grid.row(0), grid.row(1)]
    assert grid.filled_mask().tolist() == [[True, False], [True, True]]
    assert grid.to_array().shape == (2, 2)


def test_copy_and_equality():
    grid = grid_from_strings(["# ."])
    other = grid.copy()
    assert other == grid

    other.set(0, 1, CellState.FILLED)
    assert other != grid
    assert grid.get(0, 1) == CellState.EMPTY

    assert Grid(1, 2) != Grid(2, 1)


def test_from_rows_rejects_ragged_rows():
    try:
        Grid.from_rows([[CellState.EMPTY], [CellState.EMPTY, CellState.FILLED]])
        raise AssertionError("Expected ValueError for ragged rows")
    except ValueError:
        pass

    try:
        grid_from_strings(["# x"])
        raise AssertionError("Expected ValueError for unknown symbol")
    except ValueError:
        pass
