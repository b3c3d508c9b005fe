"""
Command line entry point: solve a single puzzle file.

Usage: sudoku-sat [--solver NAME] [--no-strict] [--dimacs PATH] [--print-cnf] PUZZLE_FILE
"""

import argparse
import sys

from .constraints import write_dimacs
from .exceptions import ArgumentError, DecodeError, FileAccessError, FormatError
from .puzzle import format_grid, load_puzzle
from .solver import DEFAULT_SOLVER
from .SudokuSAT import SudokuSATSolver


class _ArgumentParser(argparse.ArgumentParser):
    """argparse exits with status 2 on bad arguments; this tool uses 1."""

    def error(self, message):
        raise ArgumentError(message)


def build_parser():
    parser = _ArgumentParser(
        prog='sudoku-sat',
        description='Solve an N x N Sudoku puzzle by reduction to SAT'
    )
    parser.add_argument(
        'puzzle',
        help='Puzzle file: N lines of N comma separated numbers in [0, N], 0 is empty'
    )
    parser.add_argument(
        '--solver',
        default=DEFAULT_SOLVER,
        help=f'python-sat engine to use (default: {DEFAULT_SOLVER})'
    )
    parser.add_argument(
        '--no-strict',
        dest='strict',
        action='store_false',
        help='Do not check that the solver model has exactly one digit per cell'
    )
    parser.add_argument(
        '--dimacs',
        default=None,
        help='Also write the generated CNF to this file in DIMACS format'
    )
    parser.add_argument(
        '--print-cnf',
        action='store_true',
        help='Print every generated clause'
    )
    return parser


def run(args) -> int:
    grid = load_puzzle(args.puzzle)

    print("Input problem is")
    print(format_grid(grid))

    solver = SudokuSATSolver(grid, solver_name=args.solver, strict=args.strict)
    is_solvable = solver.solve()

    if args.print_cnf:
        print("Generated CNF is")
        for clause in solver.cnf:
            print(list(clause))
    print(f"Generated CNF clause is {solver.clause_count}")

    if args.dimacs:
        try:
            write_dimacs(args.dimacs, solver.cnf, solver.grid_size)
        except OSError as e:
            raise FileAccessError(f"Could not write DIMACS file {args.dimacs}: {e.strerror or e}") from e

    print(f"Satisfiable: {is_solvable}")
    if is_solvable:
        solver.print_solution()
    print(f"Elapsed time: {solver.elapsed:.6f}s")
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except ArgumentError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 1

    try:
        return run(args)
    except FormatError as e:
        print(e, file=sys.stderr)
    except FileAccessError as e:
        print(f"Error: {e}", file=sys.stderr)
    except DecodeError as e:
        print(f"Error: inconsistent solver model: {e}", file=sys.stderr)
    except ValueError as e:
        # unknown --solver name
        print(f"Error: {e}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
