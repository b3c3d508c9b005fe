import pytest

from sudoku_sat.exceptions import FileAccessError, FormatError
from sudoku_sat.puzzle import (
    format_grid,
    grid_to_string,
    load_puzzle,
    parse_puzzle,
    parse_puzzle_string,
    validate_grid,
)

from conftest import PUZZLE_4X4


def test_parse_valid_puzzle():
    text = "1,0,0,4\n0,0,1,0\n0,1,0,0\n4,0,0,1\n"
    assert parse_puzzle(text) == PUZZLE_4X4


def test_parse_tolerates_spaces_and_missing_final_newline():
    text = "1, 0, 0, 4\r\n0,0,1,0\r\n0,1,0,0\r\n4,0,0,1"
    assert parse_puzzle(text) == PUZZLE_4X4


def test_single_cell_grid_is_accepted():
    assert parse_puzzle("0\n") == ((0,),)


@pytest.mark.parametrize("text", [
    "",  # empty
    "1,0\n0,1\n",  # N = 2 is not a perfect square
    "1,0,0\n0,1,0\n0,0,1\n",  # N = 3
    "1,0,0,4\n0,0,1\n0,1,0,0\n4,0,0,1\n",  # ragged row
    "1,0,0,4\n0,0,1,0\n0,1,0,0\n",  # too few rows
    "1,0,0,4\n0,0,1,0\n0,1,0,0\n4,0,0,1\n0,0,0,0\n",  # too many rows
    "1,0,0,4,0\n0,0,1,0,0\n0,1,0,0,0\n4,0,0,1,0\n",  # 4 rows of 5
    "1,0,0,x\n0,0,1,0\n0,1,0,0\n4,0,0,1\n",  # non-numeric token
    "1,0,0,\n0,0,1,0\n0,1,0,0\n4,0,0,1\n",  # empty token
    "1,0,0,5\n0,0,1,0\n0,1,0,0\n4,0,0,1\n",  # out of range
    "1,0,0,-1\n0,0,1,0\n0,1,0,0\n4,0,0,1\n",  # negative
    "1,0,0,2.0\n0,0,1,0\n0,1,0,0\n4,0,0,1\n",  # float
    "1,0,0,4\n\n0,0,1,0\n0,1,0,0\n4,0,0,1\n",  # blank line
    "1,0,0,4\n0,0,1,0\n0,1,0,0\n4,0,0,1\n\n",  # trailing blank line
])
def test_parse_rejects_malformed_input(text):
    with pytest.raises(FormatError):
        parse_puzzle(text)


def test_format_error_has_one_generic_message():
    with pytest.raises(FormatError) as excinfo:
        parse_puzzle("a,b\n")
    assert "0 is empty" in str(excinfo.value)


def test_validate_grid_returns_immutable_rows():
    grid = validate_grid([[1, 0, 0, 4], [0, 0, 1, 0], [0, 1, 0, 0], [4, 0, 0, 1]])
    assert grid == PUZZLE_4X4
    assert isinstance(grid, tuple) and isinstance(grid[0], tuple)


def test_load_puzzle(puzzle_file):
    assert load_puzzle(puzzle_file) == PUZZLE_4X4


def test_load_missing_file(tmp_path):
    with pytest.raises(FileAccessError):
        load_puzzle(tmp_path / 'nope.csv')


def test_load_directory_is_unreadable(tmp_path):
    with pytest.raises(FileAccessError):
        load_puzzle(tmp_path)


def test_parse_puzzle_string():
    assert parse_puzzle_string("1..4..1..1..4..1") == PUZZLE_4X4
    assert parse_puzzle_string("1004001001004001") == PUZZLE_4X4


def test_parse_puzzle_string_letters_for_16x16():
    grid = parse_puzzle_string("G" + "." * 255)
    assert len(grid) == 16
    assert grid[0][0] == 16


@pytest.mark.parametrize("text", ["1..4..1..1..4..", "..5." * 4, "1..4..1..1..4..?", "." * 9])
def test_parse_puzzle_string_rejects(text):
    with pytest.raises(FormatError):
        parse_puzzle_string(text)


def test_grid_to_string_roundtrips_dataset_form():
    assert grid_to_string(PUZZLE_4X4) == "1..4..1..1..4..1"
    assert grid_to_string(((10, 0), (0, 1))) == "A..1"


def test_format_grid_pads_to_widest_digit():
    assert format_grid(PUZZLE_4X4).splitlines()[0] == "1 0 0 4"
    grid = tuple(tuple([16] + [0] * 15) for _ in range(16))
    assert format_grid(grid).splitlines()[0] == "16" + "  0" * 15
