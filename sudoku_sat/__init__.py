"""Solve N x N Sudoku puzzles by reduction to SAT."""

from .constraints import generate_formula, to_dimacs
from .decoder import decode_assignment, verify_solution
from .encoding import decode_variable, variable
from .exceptions import ArgumentError, DecodeError, FileAccessError, FormatError, SudokuSATError
from .puzzle import load_puzzle, parse_puzzle, parse_puzzle_string
from .solver import Outcome, PySATSolver
from .SudokuSAT import SudokuSATSolver

__version__ = "0.1.0"
