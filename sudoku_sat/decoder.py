"""Turning a satisfying assignment back into a Sudoku grid."""

from .encoding import decode_variable, variable_count
from .exceptions import DecodeError
from .puzzle import box_size


def decode_assignment(assignment, n: int, strict: bool = True):
    """
    Converts the SAT solver's assignment back into an n x n grid.

    True variables are decoded in ascending order and their digit is placed at
    (r, c). Variables missing from the assignment count as false.

    Args:
        assignment: Mapping from variable id to bool
        n: Grid size
        strict: Require exactly one true digit per cell

    Returns:
        The solved grid as a tuple of tuples

    Raises:
        DecodeError: in strict mode, when a cell has zero or several true
            digits, or a true variable lies outside 1..n^3
    """
    grid = [[0] * n for _ in range(n)]
    counts = [[0] * n for _ in range(n)]
    limit = variable_count(n)

    for v in sorted(v for v, value in assignment.items() if value):
        if not 1 <= v <= limit:
            if strict:
                raise DecodeError(f"Variable {v} is outside 1..{limit}")
            continue
        r, c, d = decode_variable(v, n)
        grid[r - 1][c - 1] = d
        counts[r - 1][c - 1] += 1

    if strict:
        for r in range(n):
            for c in range(n):
                if counts[r][c] != 1:
                    raise DecodeError(
                        f"Cell r{r + 1}c{c + 1} has {counts[r][c]} true digits, expected exactly 1"
                    )
    return tuple(tuple(row) for row in grid)


def _duplicates(values):
    seen = set()
    dups = set()
    for v in values:
        if v == 0:
            continue
        if v in seen:
            dups.add(v)
        seen.add(v)
    return sorted(dups)


def verify_solution(solution, puzzle=None) -> list[str]:
    """
    Check a solved grid against the Sudoku rules and the puzzle's givens.

    Returns:
        A list of human readable problems; empty when the solution is valid
    """
    n = len(solution)
    root = box_size(n)
    issues = []

    if puzzle is not None:
        for r in range(n):
            for c in range(n):
                given = puzzle[r][c]
                if given != 0 and solution[r][c] != given:
                    issues.append(f"r{r + 1}c{c + 1}: given {given} overwritten by {solution[r][c]}")

    for r in range(n):
        for c in range(n):
            if not 1 <= solution[r][c] <= n:
                issues.append(f"r{r + 1}c{c + 1}: not filled")

    for r in range(n):
        for d in _duplicates(solution[r]):
            issues.append(f"row {r + 1}: duplicate {d}")
    for c in range(n):
        for d in _duplicates([solution[r][c] for r in range(n)]):
            issues.append(f"column {c + 1}: duplicate {d}")
    for b in range(n):
        br, bc = b // root * root, b % root * root
        values = [solution[br + i][bc + j] for i in range(root) for j in range(root)]
        for d in _duplicates(values):
            issues.append(f"block {b + 1}: duplicate {d}")
    return issues
