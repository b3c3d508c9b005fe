import time

from .constraints import generate_formula
from .decoder import decode_assignment
from .puzzle import format_grid
from .solver import DEFAULT_SOLVER, PySATSolver


class SudokuSATSolver:
    """
    Solves a Sudoku puzzle of size N x N by encoding it as a SAT problem.

    N must be a perfect square (e.g., 4, 9, 16, 25).
    The puzzle is represented by N*N*N variables: var(r, c, v)
    which is true if cell (r, c) has value v.
    r, c, v are all in the range [1, N].
    """

    def __init__(self, grid, solver=None, solver_name: str = DEFAULT_SOLVER, strict: bool = True):
        """
        Args:
            grid: Validated N x N grid (see puzzle.validate_grid)
            solver: Object with solve(formula) -> Outcome; a PySATSolver
                for solver_name is created when omitted
            solver_name: python-sat engine name
            strict: Check that the assignment has exactly one digit per cell
        """
        self.grid = grid
        self.grid_size = len(grid)
        self.solver = solver if solver is not None else PySATSolver(solver_name)
        self.strict = strict

        self.cnf = ()
        self.satisfiable = None
        self.solution = None  # Will store the N x N solution grid
        self.elapsed = 0.0

    @property
    def clause_count(self) -> int:
        return len(self.cnf)

    def solve(self) -> bool:
        """
        Builds the CNF, runs the solver and decodes the model.

        Unsatisfiable puzzles are not decoded; self.solution stays None.

        Returns:
            bool: True if a solution is found, False otherwise.
        """
        start_time = time.perf_counter()

        self.cnf = generate_formula(self.grid)
        outcome = self.solver.solve(self.cnf)
        self.satisfiable = outcome.satisfiable

        self.elapsed = time.perf_counter() - start_time

        if self.satisfiable:
            self.solution = decode_assignment(outcome.assignment, self.grid_size, strict=self.strict)
        else:
            self.solution = None
        return self.satisfiable

    def print_solution(self):
        if self.solution is None:
            print("No solution to print.")
            return
        print("Solution is")
        print(format_grid(self.solution))
