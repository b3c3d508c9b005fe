import pytest

from sudoku_sat.encoding import variable, variable_count
from sudoku_sat.solver import Outcome


PUZZLE_4X4 = (
    (1, 0, 0, 4),
    (0, 0, 1, 0),
    (0, 1, 0, 0),
    (4, 0, 0, 1),
)

SOLVED_4X4 = (
    (1, 2, 3, 4),
    (3, 4, 1, 2),
    (2, 1, 4, 3),
    (4, 3, 2, 1),
)

UNSAT_4X4 = (
    (1, 0, 1, 0),
    (0, 0, 0, 0),
    (0, 0, 0, 0),
    (0, 0, 0, 0),
)


class StubSolver:
    """Returns a canned outcome and remembers the formula it was given."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.formula = None

    def solve(self, formula):
        self.formula = formula
        return self.outcome


def identity_assignment(grid):
    """Every cell's own variable true, everything else false."""
    n = len(grid)
    assignment = dict.fromkeys(range(1, variable_count(n) + 1), False)
    for r, row in enumerate(grid, start=1):
        for c, d in enumerate(row, start=1):
            assignment[variable(r, c, d, n)] = True
    return assignment


def write_puzzle(path, rows):
    path.write_text(''.join(','.join(map(str, row)) + '\n' for row in rows))
    return path


@pytest.fixture
def puzzle_file(tmp_path):
    return write_puzzle(tmp_path / 'puzzle.csv', PUZZLE_4X4)


@pytest.fixture
def unsat_file(tmp_path):
    return write_puzzle(tmp_path / 'unsat.csv', UNSAT_4X4)


@pytest.fixture
def unsat_stub():
    return StubSolver(Outcome(False, {}))
