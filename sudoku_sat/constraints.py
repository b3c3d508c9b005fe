"""
CNF generation for Sudoku.

Four constraint families each split the N^3 variables into N^2 groups of N, and
every group must have exactly one true variable:

    - cell:   each cell holds exactly one digit
    - row:    each digit appears exactly once per row
    - column: each digit appears exactly once per column
    - block:  each digit appears exactly once per block

"Exactly one" is the at-least-one clause over the whole group plus the pairwise
at-most-one clauses (-a | -b). Given cells add one unit clause each.
"""

from itertools import combinations

from .encoding import variable, variable_count
from .puzzle import box_size

Clause = tuple[int, ...]
Formula = tuple[Clause, ...]


def _cell_variable(r, c, k, n):
    return variable(r, c, k, n)


def _row_variable(digit, r, k, n):
    return variable(r, k, digit, n)


def _column_variable(digit, c, k, n):
    return variable(k, c, digit, n)


def _block_variable(digit, block, k, n):
    root = box_size(n)
    r = (block - 1) // root * root + (k - 1) // root + 1
    c = (block - 1) % root * root + (k - 1) % root + 1
    return variable(r, c, digit, n)


# (name, mapping) pairs in emission order. A mapping takes the two group
# indices, the position inside the group and the grid size.
FAMILIES = (
    ('cell', _cell_variable),
    ('row', _row_variable),
    ('column', _column_variable),
    ('block', _block_variable),
)


def family_groups(mapping, n: int) -> list[tuple[int, ...]]:
    """All N^2 groups of one family, outer index first."""
    return [
        tuple(mapping(outer, inner, k, n) for k in range(1, n + 1))
        for outer in range(1, n + 1)
        for inner in range(1, n + 1)
    ]


def at_most_one(group) -> list[Clause]:
    return [(-a, -b) for a, b in combinations(group, 2)]


def exactly_one_clauses(groups) -> list[Clause]:
    """At-least-one clauses for every group, then the at-most-one clauses."""
    clauses = [tuple(group) for group in groups]
    for group in groups:
        clauses.extend(at_most_one(group))
    return clauses


def given_clauses(grid) -> list[Clause]:
    """Unit clauses for the pre-filled cells, in row-major order."""
    n = len(grid)
    return [
        (variable(r, c, d, n),)
        for r, row in enumerate(grid, start=1)
        for c, d in enumerate(row, start=1)
        if d != 0
    ]


def generate_formula(grid) -> Formula:
    """
    Build the complete CNF for a validated grid.

    Args:
        grid: N x N grid, 0 for empty cells

    Returns:
        Tuple of clauses in a fixed order: cell, row, column and block
        families, then the givens
    """
    n = len(grid)
    clauses = []
    for _name, mapping in FAMILIES:
        clauses.extend(exactly_one_clauses(family_groups(mapping, n)))
    clauses.extend(given_clauses(grid))
    return tuple(clauses)


def expected_clause_count(n: int, givens: int = 0) -> int:
    """4 * N^2 * (1 + C(N, 2)) + givens"""
    return 4 * n * n * (1 + n * (n - 1) // 2) + givens


def to_dimacs(formula, n: int) -> str:
    """Convert a formula to DIMACS CNF text."""
    lines = [f"p cnf {variable_count(n)} {len(formula)}"]
    for clause in formula:
        lines.append(" ".join(map(str, clause)) + " 0")
    return "\n".join(lines) + "\n"


def write_dimacs(path, formula, n: int):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(to_dimacs(formula, n))
