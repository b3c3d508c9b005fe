import csv

from sudoku_sat.evaluate import get_difficulty_category, main, run_evaluation, solve_row

SOLVED = "1234341221434321"


def write_dataset(path, rows):
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=['id', 'puzzle', 'solution', 'difficulty'])
        writer.writeheader()
        writer.writerows(rows)
    return path


def read_results(path):
    with open(path, newline='', encoding='utf-8') as f:
        return list(csv.DictReader(f))


def test_get_difficulty_category():
    assert get_difficulty_category(0.5) == "Easy"
    assert get_difficulty_category(1.0) == "Easy"
    assert get_difficulty_category(2.5) == "Medium"
    assert get_difficulty_category(4.0) == "Hard"


def test_solve_row_checks_expected_solution():
    row, outcome = solve_row({'id': '1', 'puzzle': "12.." + "." * 8 + "4321", 'solution': SOLVED}, "Glucose3")
    assert outcome in ('correct', 'incorrect')
    assert row['satisfiable'] == 'True'
    assert len(row['computed_solution']) == 16


def test_solve_row_without_solution_verifies_rules():
    row, outcome = solve_row({'id': '1', 'puzzle': "1..4..1..1..4..1"}, "Glucose3")
    assert outcome == 'correct'


def test_solve_row_records_errors():
    row, outcome = solve_row({'id': '1', 'puzzle': "123"}, "Glucose3")
    assert outcome == 'error'
    assert row['computed_solution'].startswith('ERROR: Invalid puzzle length')


def test_run_evaluation(tmp_path, capsys):
    dataset = write_dataset(tmp_path / 'puzzles.csv', [
        {'id': '1', 'puzzle': SOLVED[:12] + "....", 'solution': SOLVED, 'difficulty': '0.0'},
        {'id': '2', 'puzzle': "1.1." + "." * 12, 'solution': '', 'difficulty': '2.0'},
        {'id': '3', 'puzzle': "bad", 'solution': '', 'difficulty': '5.0'},
        # several solutions; checked against the rules only
        {'id': '4', 'puzzle': "1..4..1..1..4..1", 'solution': '', 'difficulty': '4.2'},
    ])
    output = tmp_path / 'results.csv'

    stats = run_evaluation(str(dataset), output_path=str(output), num_workers=1)

    assert stats == {'total': 4, 'solved': 2, 'unsatisfiable': 1, 'correct': 2, 'incorrect': 0, 'errors': 1}
    results = read_results(output)
    assert [r['id'] for r in results] == ['1', '2', '3', '4']
    assert results[0]['computed_solution'] == SOLVED
    assert results[1]['satisfiable'] == 'False'
    assert results[2]['computed_solution'].startswith('ERROR')
    out = capsys.readouterr().out
    assert "Total puzzles processed:     4" in out
    assert "Easy:" in out


def test_run_evaluation_max_puzzles(tmp_path):
    dataset = write_dataset(tmp_path / 'puzzles.csv', [
        {'id': str(i), 'puzzle': "1..4..1..1..4..1", 'solution': '', 'difficulty': ''} for i in range(5)
    ])
    output = tmp_path / 'results.csv'
    stats = run_evaluation(str(dataset), output_path=str(output), max_puzzles=3, num_workers=2)
    assert stats['total'] == 3
    assert len(read_results(output)) == 3


def test_main_missing_dataset(tmp_path, capsys):
    assert main([str(tmp_path / 'nope.csv'), '--workers', '1']) == 1
    assert "Error" in capsys.readouterr().err
