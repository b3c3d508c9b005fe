"""
Variable numbering for the Sudoku SAT encoding.

Every (row, column, digit) triple of an N x N puzzle gets its own boolean
variable. Rows, columns and digits are all 1-based, and ids run from 1 to N^3:

    var(r, c, d) = (r - 1) * N^2 + (c - 1) * N + d
"""


def variable_count(n: int) -> int:
    """Number of variables used for an n x n puzzle."""
    return n * n * n


def variable(r: int, c: int, d: int, n: int) -> int:
    """
    Map (row, col, digit) to its SAT variable id.

    Args:
        r: Row (1..n)
        c: Column (1..n)
        d: Digit (1..n)
        n: Grid size

    Returns:
        Integer variable id in 1..n^3
    """
    if not (1 <= r <= n and 1 <= c <= n and 1 <= d <= n):
        raise ValueError(f"({r}, {c}, {d}) is out of range for grid size {n}")
    return (r - 1) * n * n + (c - 1) * n + d


def decode_variable(v: int, n: int) -> tuple[int, int, int]:
    """
    Inverse of variable(): recover (row, col, digit) from a variable id.

    Args:
        v: Variable id (1..n^3)
        n: Grid size

    Returns:
        Tuple (r, c, d), all 1-based
    """
    if not 1 <= v <= variable_count(n):
        raise ValueError(f"Variable {v} is out of range for grid size {n}")
    d = (v - 1) % n + 1
    rem = (v - 1) // n
    c = rem % n + 1
    r = rem // n + 1
    return r, c, d
