"""Exceptions raised by the Sudoku SAT pipeline."""

INPUT_FORMAT_MSG = (
    "Please input n * n numbers [0-n] delimited by comma. "
    "0 is empty as Sudoku cell."
)


class SudokuSATError(Exception):
    """Base class for every error the pipeline reports."""


class FileAccessError(SudokuSATError):
    """The puzzle file is missing or cannot be read."""


class FormatError(SudokuSATError, ValueError):
    """
    The puzzle text violates the input grammar.

    Wrong row length, wrong row count, a non-square size, and out-of-range or
    non-numeric tokens are all reported the same way.
    """

    def __init__(self, message=INPUT_FORMAT_MSG):
        super().__init__(message)


class ArgumentError(SudokuSATError):
    """Wrong number of command line arguments."""


class DecodeError(SudokuSATError):
    """A solver assignment does not describe exactly one digit per cell."""
