"""
Loading, validating and rendering Sudoku grids.

A grid is a tuple of N rows, each a tuple of N integers in [0, N] where 0 marks
an empty cell. N must be a perfect square (4, 9, 16, 25, ...).

Two input forms are supported:
    - the puzzle file: one row per line, comma separated integers
    - the dataset string: N*N characters, '.', '0' or '_' for blanks,
      '1'...'9' then 'A'...'Z' for values 10-35
"""

import csv
import math
import re

from .exceptions import FileAccessError, FormatError

Grid = tuple[tuple[int, ...], ...]

MAX_STRING_GRID_SIZE = 35

_NUMBER = re.compile(r"[0-9]+")
_EMPTY_CHARS = ('.', '0', '_')


def is_perfect_square(n: int) -> bool:
    return n >= 1 and math.isqrt(n) ** 2 == n


def box_size(n: int) -> int:
    """Side length of a block for an n x n grid."""
    return math.isqrt(n)


def _parse_row(line: str) -> list[int]:
    if not line.strip():
        raise FormatError()
    tokens = next(csv.reader([line]))
    row = []
    for token in tokens:
        token = token.strip()
        if not _NUMBER.fullmatch(token):
            raise FormatError()
        row.append(int(token))
    return row


def validate_grid(rows) -> Grid:
    """
    Check the shape and value range of a grid and freeze it.

    Args:
        rows: Sequence of rows of integers

    Returns:
        The grid as a tuple of tuples

    Raises:
        FormatError: if the grid is not N x N with N a perfect square, or a
            value lies outside [0, N]
    """
    n = len(rows)
    if not is_perfect_square(n):
        raise FormatError()
    for row in rows:
        if len(row) != n:
            raise FormatError()
        for value in row:
            if isinstance(value, bool) or not isinstance(value, int):
                raise FormatError()
            if not 0 <= value <= n:
                raise FormatError()
    return tuple(tuple(row) for row in rows)


def parse_puzzle(text: str) -> Grid:
    """
    Parse puzzle text: one row per line, comma separated integers.

    A single trailing newline is accepted; any other blank line is an error.
    """
    rows = [_parse_row(line) for line in text.splitlines()]
    return validate_grid(rows)


def load_puzzle(path) -> Grid:
    """Read and parse a puzzle file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except UnicodeDecodeError:
        raise FormatError()
    except OSError as e:
        raise FileAccessError(f"Could not read puzzle file {path}: {e.strerror or e}") from e
    return parse_puzzle(text)


def _char_to_val(char: str, n: int) -> int:
    """
    Converts a puzzle character ('.', '1', 'A', etc.) to its integer value.
    Returns 0 for empty cells.
    """
    if char in _EMPTY_CHARS:
        return 0
    if '1' <= char <= '9':
        val = int(char)
    elif 'A' <= char <= 'Z':
        val = ord(char) - ord('A') + 10
    elif 'a' <= char <= 'z':
        val = ord(char) - ord('a') + 10
    else:
        raise FormatError(f"Invalid character in puzzle string: '{char}'")
    if val > n:
        raise FormatError(f"Clue value '{char}' (={val}) is out of range for grid size {n}")
    return val


def _val_to_char(val: int) -> str:
    if val == 0:
        return '.'
    if 1 <= val <= 9:
        return str(val)
    return chr(ord('A') + val - 10)


def parse_puzzle_string(puzzle_str: str) -> Grid:
    """
    Parse the one-line dataset form of a puzzle.

    N is determined from the string length (e.g., 81 -> 9x9).
    """
    puzzle_str = puzzle_str.strip()
    n = math.isqrt(len(puzzle_str))
    if n * n != len(puzzle_str) or not is_perfect_square(n):
        raise FormatError(
            f"Invalid puzzle length: {len(puzzle_str)}. "
            f"Length must be N*N where N is a perfect square (e.g., 16, 81, 256)."
        )
    if n > MAX_STRING_GRID_SIZE:
        raise FormatError(
            f"Grid size {n}x{n} is not supported "
            f"(max is {MAX_STRING_GRID_SIZE}x{MAX_STRING_GRID_SIZE}, using values 1-9 and A-Z)."
        )
    values = [_char_to_val(ch, n) for ch in puzzle_str]
    return tuple(tuple(values[i * n:(i + 1) * n]) for i in range(n))


def grid_to_string(grid) -> str:
    """Convert a grid back to the one-line dataset form."""
    return ''.join(_val_to_char(val) for row in grid for val in row)


def format_grid(grid) -> str:
    """Render a grid with every field right-aligned to the widest digit."""
    width = len(str(len(grid)))
    return '\n'.join(' '.join(str(val).rjust(width) for val in row) for row in grid)


def count_givens(grid) -> int:
    return sum(1 for row in grid for val in row if val != 0)
