"""
Puzzle text/JSON IO utilities.

This module reads puzzle definitions into ProblemInput and renders solved
grids back to text.

Text format:

    # comment lines start with '#', blank lines are ignored
    R C                 # first non-comment line: row count, column count
    <row 0 runs>        # R lines, whitespace-separated positive integers
    ...
    <column 0 runs>     # C lines, same format
    ...

A line holding the single value 0 means "no runs" (the line is all empty).
Anything after the last column line is ignored.

JSON format:

    {"rows": [[int, ...], ...], "cols": [[int, ...], ...]}

As in the text format, a run list of [0] means "no runs".
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Iterator, List, Optional, TextIO, Tuple

from nonogram.core.grid_types import CellState, Grid
from nonogram.core.problem import ProblemInput


CELL_SYMBOLS = {
    CellState.EMPTY: ".",
    CellState.FILLED: "#",
    CellState.UNSET: "?",
}

NO_SOLUTION_TEXT = "No solution"


class MalformedInputError(ValueError):
    """
    Raised when puzzle text cannot be parsed.

    Attributes:
        line_no: 1-based line number of the offending line, or None when the
                 input ended early or is not valid text
    """

    def __init__(self, message: str, line_no: Optional[int] = None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


def _content_lines(stream: TextIO) -> Iterator[Tuple[int, str]]:
    """
    Yield (line_no, text) for every non-blank, non-comment line.

    Raises:
        MalformedInputError: If the stream is not valid text. No line number
                             is attached: text streams decode ahead in
                             chunks, so the failing read is not the bad line.
    """
    line_no = 0
    while True:
        try:
            line = stream.readline()
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"invalid text encoding: {e.reason}")
        if not line:
            return
        line_no += 1
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        yield line_no, stripped


def _parse_ints(text: str, line_no: int) -> List[int]:
    values = []
    for token in text.split():
        try:
            values.append(int(token))
        except ValueError:
            raise MalformedInputError(f"expected an integer, got {token!r}", line_no)
    return values


def _parse_header(text: str, line_no: int) -> Tuple[int, int]:
    values = _parse_ints(text, line_no)
    if len(values) != 2:
        raise MalformedInputError(
            f"expected 'rows cols' header, got {len(values)} value(s)", line_no
        )
    rows, cols = values
    if rows < 0 or cols < 0:
        raise MalformedInputError(f"grid size must be non-negative, got {rows}x{cols}", line_no)
    return rows, cols


def _parse_runs(text: str, line_no: int) -> List[int]:
    values = _parse_ints(text, line_no)
    # "0" also means an empty row/column
    if values == [0]:
        return []
    if any(v <= 0 for v in values):
        raise MalformedInputError(
            f"run lengths must be positive (use a single 0 for an empty line), got {values}",
            line_no,
        )
    return values


def read_puzzle(stream: TextIO) -> ProblemInput:
    """
    Parse a puzzle in the text format from an open stream.

    Args:
        stream: Text stream positioned at the start of the puzzle

    Returns:
        ProblemInput with R row definitions and C column definitions

    Raises:
        MalformedInputError: If the header or any definition line is invalid,
                             or the input ends before all definitions are read
                             or cannot be decoded
    """
    lines = _content_lines(stream)

    header = next(lines, None)
    if header is None:
        raise MalformedInputError("missing 'rows cols' header")
    rows, cols = _parse_header(header[1], header[0])

    def read_defs(count: int, axis: str) -> List[List[int]]:
        defs = []
        for i in range(count):
            entry = next(lines, None)
            if entry is None:
                raise MalformedInputError(
                    f"unexpected end of input: expected {count} {axis} definitions, got {i}"
                )
            defs.append(_parse_runs(entry[1], entry[0]))
        return defs

    rowdef = read_defs(rows, "row")
    coldef = read_defs(cols, "column")
    return ProblemInput(rowdef=rowdef, coldef=coldef)


def parse_puzzle(text: str) -> ProblemInput:
    """
    Parse puzzle text.

    Example:
        >>> p = parse_puzzle("1 3\\n1 1\\n1\\n0\\n1\\n")
        >>> p.rowdef, p.coldef
        (((1, 1),), ((1,), (), (1,)))
    """
    return read_puzzle(io.StringIO(text))


def load_puzzle_json(path: Path) -> ProblemInput:
    """
    Load a puzzle from a JSON file with "rows" and "cols" run lists.

    Raises:
        MalformedInputError: If the JSON is invalid or lacks the expected keys
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return ProblemInput.from_dict(data)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"invalid JSON: {e.msg}", e.lineno)
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedInputError(f"invalid puzzle JSON: {e}")


def load_puzzle(path: Path) -> ProblemInput:
    """
    Load a puzzle from disk; ".json" files use the JSON format, anything
    else the text format.
    """
    path = Path(path)
    if path.suffix.lower() == ".json":
        return load_puzzle_json(path)
    with open(path, "r", encoding="utf-8") as f:
        return read_puzzle(f)


def format_puzzle(problem: ProblemInput) -> str:
    """Render a ProblemInput in the text format (inverse of parse_puzzle)."""
    out = [f"{problem.row_count} {problem.column_count}"]
    for runs in problem.rowdef + problem.coldef:
        out.append(" ".join(str(n) for n in runs) if runs else "0")
    return "\n".join(out) + "\n"


def format_grid(grid: Grid) -> str:
    """
    Render a grid as R lines of C space-separated symbols.

    '.' is EMPTY, '#' is FILLED and '?' marks an UNSET cell (never present in
    a returned solution).

    Example:
        >>> from nonogram.core.grid_types import grid_from_strings
        >>> print(format_grid(grid_from_strings(["#.#"])))
        # . #
    """
    return "\n".join(
        " ".join(CELL_SYMBOLS[cell] for cell in row)
        for row in grid.iter_rows()
    )


def format_result(grid: Optional[Grid]) -> str:
    """Render a solve result: the grid, or the no-solution message."""
    if grid is None:
        return NO_SOLUTION_TEXT
    return format_grid(grid)