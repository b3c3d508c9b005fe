"""
Batch evaluation of the SAT solver on a CSV dataset of puzzles.

The input CSV needs 'id' and 'puzzle' columns ('puzzle' in the one-line form,
e.g. 81 characters for 9x9). Optional 'solution' and 'difficulty' columns are
used to check answers and to group timings.
"""

import argparse
import csv
import os
import sys
import tempfile
import time
from datetime import datetime
from multiprocessing import Pool, cpu_count

import numpy as np

from .decoder import verify_solution
from .puzzle import grid_to_string, parse_puzzle_string
from .solver import DEFAULT_SOLVER, PySATSolver
from .SudokuSAT import SudokuSATSolver

FIELDNAMES = ['id', 'puzzle', 'solution', 'difficulty', 'solve_time', 'satisfiable', 'computed_solution']
STAT_KEYS = ('total', 'solved', 'unsatisfiable', 'correct', 'incorrect', 'errors')


def get_difficulty_category(diff_float: float) -> str:
    """
    Categorizes puzzles based on the 'difficulty' float from the CSV.
    """
    if diff_float <= 1.0:
        return "Easy"
    elif diff_float <= 3.0:
        return "Medium"
    else:
        return "Hard"


def print_stats_block(name: str, times_list: list):
    """Prints a formatted statistics block for a list of timings."""
    print("-" * 60)
    print(f"{name}:")

    if not times_list:
        print("  No puzzles solved in this category.")
        return

    times_np = np.array(times_list)
    print(f"  Minimum:         {np.min(times_np):.6f}")
    print(f"  Median:          {np.median(times_np):.6f}")
    print(f"  Mean:            {np.mean(times_np):.6f}")
    print(f"  Maximum:         {np.max(times_np):.6f}")
    print(f"  Count:           {len(times_np)}")


def solve_row(row, solver_name):
    """
    Solve one dataset row.

    Returns:
        Tuple of (output_row, outcome) where outcome is one of 'correct',
        'incorrect', 'unsatisfiable' or 'error'
    """
    output_row = {
        'id': row.get('id', ''),
        'puzzle': row.get('puzzle', ''),
        'solution': row.get('solution', '') or '',
        'difficulty': row.get('difficulty', '') or '',
        'solve_time': '0.000000',
        'satisfiable': '',
        'computed_solution': '',
    }
    try:
        grid = parse_puzzle_string(output_row['puzzle'])
        solver = SudokuSATSolver(grid, solver=PySATSolver(solver_name))
        is_solvable = solver.solve()
    except Exception as e:
        output_row['computed_solution'] = f'ERROR: {e}'
        return output_row, 'error'

    output_row['solve_time'] = f"{solver.elapsed:.6f}"
    output_row['satisfiable'] = str(is_solvable)
    if not is_solvable:
        return output_row, 'unsatisfiable'

    solution_str = grid_to_string(solver.solution)
    output_row['computed_solution'] = solution_str
    expected = output_row['solution']
    if expected:
        correct = solution_str == expected
    else:
        correct = not verify_solution(solver.solution, grid)
    return output_row, 'correct' if correct else 'incorrect'


def process_chunk(args):
    """
    Process a chunk of puzzles. Each worker writes to its own temp file.

    Args:
        args: Tuple of (chunk_id, chunk_rows, temp_dir, solver_name)

    Returns:
        Tuple of (temp_file_path, stats_dict)
    """
    chunk_id, chunk_rows, temp_dir, solver_name = args
    temp_file = os.path.join(temp_dir, f'chunk_{chunk_id:06d}.csv')
    stats = dict.fromkeys(STAT_KEYS, 0)

    with open(temp_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for row in chunk_rows:
            stats['total'] += 1
            output_row, outcome = solve_row(row, solver_name)
            if outcome == 'error':
                stats['errors'] += 1
            elif outcome == 'unsatisfiable':
                stats['unsatisfiable'] += 1
            else:
                stats['solved'] += 1
                stats[outcome] += 1
            writer.writerow(output_row)

    return temp_file, stats


def read_dataset(csv_path, max_puzzles=None):
    rows = []
    with open(csv_path, 'r', encoding='utf-8', newline='') as input_file:
        reader = csv.DictReader(input_file)
        if reader.fieldnames is None or 'puzzle' not in reader.fieldnames:
            raise ValueError(f"{csv_path} has no 'puzzle' column")
        for row in reader:
            rows.append(row)
            if max_puzzles and len(rows) >= max_puzzles:
                break
    return rows


def default_output_path(csv_path, solver_name):
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    base_name = os.path.splitext(os.path.basename(csv_path))[0]
    return os.path.join(
        os.path.dirname(os.path.abspath(csv_path)),
        f'{base_name}_{solver_name.lower()}_results_{timestamp}.csv'
    )


def run_evaluation(csv_path, output_path=None, solver_name=DEFAULT_SOLVER, max_puzzles=None, num_workers=None):
    """
    Solves every puzzle of a dataset, writes a results CSV and prints a
    performance report.

    Args:
        csv_path: Input dataset
        output_path: Results CSV (default: next to the input, timestamped)
        solver_name: python-sat engine name
        max_puzzles: Maximum number of puzzles to solve (None for all)
        num_workers: Number of worker processes (None for one per CPU)

    Returns:
        The aggregated stats dict
    """
    PySATSolver(solver_name)  # fail fast on an unknown engine name
    if output_path is None:
        output_path = default_output_path(csv_path, solver_name)

    print("--- Sudoku SAT Solver Performance Evaluation ---")
    print(f"Solver: {solver_name}")
    print(f"Reading puzzles from: {csv_path}")
    print(f"Results will be saved to: {output_path}\n")

    all_rows = read_dataset(csv_path, max_puzzles)
    total_puzzles = len(all_rows)
    print(f"Loaded {total_puzzles} puzzles")

    if num_workers is None:
        num_workers = cpu_count()
        print(f"Auto-detected {num_workers} CPU cores")
    num_workers = max(1, num_workers)

    stats = dict.fromkeys(STAT_KEYS, 0)
    start_time = time.perf_counter()

    with tempfile.TemporaryDirectory(prefix='sudoku_sat_') as temp_dir:
        chunk_size = max(1, -(-total_puzzles // num_workers))
        chunks = [
            (i // chunk_size, all_rows[i:i + chunk_size], temp_dir, solver_name)
            for i in range(0, total_puzzles, chunk_size)
        ]
        print(f"Processing {len(chunks)} chunks with {num_workers} workers...")

        if num_workers == 1:
            results = [process_chunk(chunk) for chunk in chunks]
        else:
            with Pool(processes=num_workers) as pool:
                results = pool.map(process_chunk, chunks)

        with open(output_path, 'w', newline='', encoding='utf-8') as output_file:
            writer = csv.DictWriter(output_file, fieldnames=FIELDNAMES)
            writer.writeheader()
            for temp_file, chunk_stats in sorted(results, key=lambda r: r[0]):
                for key in STAT_KEYS:
                    stats[key] += chunk_stats[key]
                with open(temp_file, 'r', encoding='utf-8', newline='') as temp_f:
                    for row in csv.DictReader(temp_f):
                        writer.writerow(row)

    wall_time = time.perf_counter() - start_time
    print(f"\nResults saved to: {output_path}")
    print_report(output_path, stats, solver_name, wall_time)
    return stats


def print_report(output_path, stats, solver_name, wall_time):
    timings = {'Easy': [], 'Medium': [], 'Hard': []}
    all_times = []

    with open(output_path, 'r', encoding='utf-8', newline='') as f:
        for row in csv.DictReader(f):
            if row['satisfiable'] != 'True':
                continue
            solve_time = float(row['solve_time'])
            all_times.append(solve_time)
            try:
                category = get_difficulty_category(float(row['difficulty']))
            except ValueError:
                continue
            timings[category].append(solve_time)

    total = stats['total']

    print("=" * 60)
    print("CPU Time (sec)")
    print("=" * 60)
    print(f"                      {solver_name}")
    if any(timings.values()):
        for name, times_list in timings.items():
            print_stats_block(name, times_list)
    print_stats_block("All", all_times)

    print("=" * 60)
    print("Overall Statistics")
    print("=" * 60)

    def pct(count):
        return (count / total) * 100 if total > 0 else 0

    print(f"Total puzzles processed:     {total}")
    print(f"Successfully solved:         {stats['solved']} ({pct(stats['solved']):.2f}%)")
    print(f"Unsatisfiable:               {stats['unsatisfiable']} ({pct(stats['unsatisfiable']):.2f}%)")
    print(f"Correct solutions:           {stats['correct']} ({pct(stats['correct']):.2f}%)")
    print(f"Incorrect solutions:         {stats['incorrect']} ({pct(stats['incorrect']):.2f}%)")
    if stats['errors'] > 0:
        print(f"Errors encountered:          {stats['errors']}")
    print(f"Wall-clock time:             {wall_time:.6f}")

    if all_times:
        all_times_np = np.array(all_times)
        print("\nPercentiles:")
        p = np.percentile(all_times_np, [25, 50, 75, 90, 95, 99])
        print(f"  25th percentile (Q1):      {p[0]:.6f}")
        print(f"  50th percentile (median):  {p[1]:.6f}")
        print(f"  75th percentile (Q3):      {p[2]:.6f}")
        print(f"  90th percentile:           {p[3]:.6f}")
        print(f"  95th percentile:           {p[4]:.6f}")
        print(f"  99th percentile:           {p[5]:.6f}")
        print(f"  Standard deviation:        {np.std(all_times_np):.6f}")
    print("=" * 60)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='sudoku-sat-evaluate',
        description='Solve every puzzle of a CSV dataset and report timings'
    )
    parser.add_argument('dataset', help="CSV file with 'id' and 'puzzle' columns")
    parser.add_argument('--output', default=None, help='Results CSV path (default: timestamped, next to the dataset)')
    parser.add_argument('--solver', default=DEFAULT_SOLVER, help=f'python-sat engine (default: {DEFAULT_SOLVER})')
    parser.add_argument('--max-puzzles', type=int, default=None, help='Stop after this many puzzles')
    parser.add_argument('--workers', type=int, default=None, help='Worker processes (default: CPU count)')
    args = parser.parse_args(argv)

    try:
        run_evaluation(
            args.dataset,
            output_path=args.output,
            solver_name=args.solver,
            max_puzzles=args.max_puzzles,
            num_workers=args.workers,
        )
    except OSError as e:
        print(f"Error: Could not process {args.dataset}: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
