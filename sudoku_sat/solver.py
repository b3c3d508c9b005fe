"""
Boundary to the SAT engine.

The pipeline only depends on the SolverAdapter protocol: a formula goes in,
an Outcome comes out. PySATSolver is the production implementation on top of
python-sat; tests inject stubs returning canned assignments.
"""

from typing import NamedTuple, Protocol

from pysat.solvers import Solver, SolverNames

DEFAULT_SOLVER = "Glucose3"


class Outcome(NamedTuple):
    satisfiable: bool
    assignment: dict[int, bool]


class SolverAdapter(Protocol):
    def solve(self, formula) -> Outcome:
        ...


def available_solvers() -> list[str]:
    """Every engine name python-sat accepts."""
    names = []
    for aliases in vars(SolverNames).values():
        if isinstance(aliases, tuple):
            names.extend(aliases)
    return sorted(names)


def model_to_assignment(model) -> dict[int, bool]:
    """Turn a list of signed literals into a variable -> bool mapping."""
    return {abs(lit): lit > 0 for lit in model}


class PySATSolver:
    """
    Solve formulas with one of the python-sat engines.

    The engine is chosen by name, e.g. 'Glucose3', 'cadical153', 'minisat22'.
    """

    def __init__(self, name: str = DEFAULT_SOLVER):
        self.name = name.lower()
        if self.name not in available_solvers():
            raise ValueError(f"Unknown SAT solver: {name}")

    def solve(self, formula) -> Outcome:
        clauses = [list(clause) for clause in formula]
        with Solver(name=self.name, bootstrap_with=clauses) as s:
            if not s.solve():
                return Outcome(False, {})
            return Outcome(True, model_to_assignment(s.get_model()))
