import sys
import os
import argparse
from concurrent.futures import ProcessPoolExecutor

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from tqdm import tqdm

# 프로젝트 루트 경로 추가
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from data.load_dataset import SudokuDataset
from solvers.board import SudokuError
from solvers.master_solver import solve_sudoku
from utils.grid_utils import array_to_string, board_to_array, check_solution, preserves_clues


RESULT_COLUMNS = ['idx', 'status', 'valid', 'matches', 'time_ms', 'guesses', 'backtracks', 'message']


def solve_one(job):
    """
    Worker entry: (idx, quiz, solution, blank, timeout) -> result row.
    Builds its own Board, so jobs are independent across processes.
    """
    idx, quiz, solution, blank, timeout = job
    row = {'idx': idx, 'status': 'error', 'valid': False, 'matches': None,
           'time_ms': 0, 'guesses': 0, 'backtracks': 0, 'message': ''}
    try:
        result = solve_sudoku(quiz, blank=blank, timeout=timeout)
    except SudokuError as e:
        row['message'] = str(e)
        return row

    row.update(status=result.status, time_ms=result.duration_ms,
               guesses=result.guesses, backtracks=result.backtracks, message=result.message)
    if result.solved:
        puzzle = board_to_array(quiz, blank=blank)
        row['valid'] = check_solution(result.solution) and preserves_clues(puzzle, result.solution)
        if solution:
            row['matches'] = array_to_string(result.solution) == solution
    return row


def evaluate_dataset(dataset, num_samples=None, workers=1, timeout=0.0, seed=None, progress=True):
    n = len(dataset) if num_samples is None else min(len(dataset), num_samples)
    if seed is not None:
        indices = np.random.default_rng(seed).choice(len(dataset), size=n, replace=False)
    else:
        indices = np.arange(n)

    jobs = []
    for idx in indices:
        quiz, solution = dataset[int(idx)]
        jobs.append((int(idx), quiz, solution, dataset.blank, timeout))

    if workers > 1:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            rows = list(tqdm(pool.map(solve_one, jobs, chunksize=16), total=len(jobs),
                             desc="Solving", disable=not progress))
    else:
        rows = [solve_one(job) for job in tqdm(jobs, desc="Solving", disable=not progress)]

    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def summarize(results):
    # An empty run (no puzzles) still reports 0/0
    results = results.reindex(columns=RESULT_COLUMNS)
    total = len(results)
    solved = int((results['status'] == 'solved').sum())
    summary = {
        'total': total,
        'solved': solved,
        'unsolvable': int((results['status'] == 'unsolvable').sum()),
        'timeout': int((results['status'] == 'timeout').sum()),
        'errors': int((results['status'] == 'error').sum()),
        'invalid': int((results['status'] == 'solved').sum() - results['valid'].sum()),
        'needed_search': int((results['guesses'] > 0).sum()),
        'avg_time_ms': float(results['time_ms'].mean()) if total else 0.0,
        'max_time_ms': int(results['time_ms'].max()) if total else 0,
    }
    checked = results['matches'].dropna()
    summary['accuracy'] = float(checked.astype(bool).mean() * 100) if len(checked) else None
    return summary


def save_performance_graph(results, save_path='benchmark_result.png'):
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    ax1.hist(results['time_ms'], bins=30, color='tab:blue', alpha=0.7)
    ax1.set_xlabel('Solve time (ms)')
    ax1.set_ylabel('Puzzles')
    ax1.set_title('Solve time')

    ax2.hist(results['guesses'], bins=30, color='tab:red', alpha=0.7)
    ax2.set_xlabel('Guesses')
    ax2.set_title('Search effort')

    fig.tight_layout()
    plt.savefig(save_path)
    plt.close(fig)
    return save_path


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--dataset', type=str, default='./data/raw/sudoku.csv',
                        help='CSV (quizzes[,solutions]) or text file, one puzzle per line')
    parser.add_argument('--blank', type=str, default='0')
    parser.add_argument('--samples', type=int, default=1000)
    parser.add_argument('--workers', type=int, default=1, help='worker processes')
    parser.add_argument('--timeout', type=float, default=0.0, help='per-puzzle timeout in seconds')
    parser.add_argument('--seed', type=int, default=None, help='random sample instead of the first N')
    parser.add_argument('--plot', type=str, default='benchmark_result.png')
    args = parser.parse_args()

    try:
        dataset = SudokuDataset(args.dataset, blank=args.blank)
    except FileNotFoundError as e:
        print(f"❌ {e}")
        return 1

    print(f"🔍 Solving {min(len(dataset), args.samples)} puzzles with {args.workers} worker(s)...")
    results = evaluate_dataset(dataset, args.samples, args.workers, args.timeout, args.seed)
    summary = summarize(results)

    print("\n" + "="*55)
    print("📊 Final Results")
    print("="*55)
    print(f"Solved:        {summary['solved']}/{summary['total']}")
    print(f"Unsolvable:    {summary['unsolvable']}")
    print(f"Timeouts:      {summary['timeout']}")
    print(f"Bad input:     {summary['errors']}")
    print(f"Invalid grids: {summary['invalid']}")
    print(f"Needed search: {summary['needed_search']}")
    if summary['accuracy'] is not None:
        print(f"Matches reference solution: {summary['accuracy']:.2f}%")
    print(f"Avg time: {summary['avg_time_ms']:.2f} ms | Max time: {summary['max_time_ms']} ms")
    print("="*55)

    if len(results):
        save_performance_graph(results, args.plot)
        print(f"💾 Saved graph to {args.plot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
