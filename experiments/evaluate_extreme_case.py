import sys
import os
import time
import argparse

import numpy as np
import matplotlib.pyplot as plt

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from solvers.master_solver import solve_sudoku
from utils.grid_utils import board_to_array, check_solution

# 제한 시간 (초)
TIMEOUT_SEC = 60.0

EXTREME_PUZZLES = [
    "000006000059000008200008000045000000003000000006003054000325006000000000000000000", # Norvig #1
    "000005080000601043000000000010500000000106000300000005530000061000000004000000000", # Norvig #2
    "800000000003600000070090200050007000000045700000100030001000068008500010090000400", # AI Escargot
    "005300000800000020070010500400005300010070006003200080060500009004000030000009700", # Inkala 2010
    "000000000000003085001020000000507000004000100090000000500000073002010000000040009", # Platinum Blonde
    "000000039000001005003050800008090006070002000100400000009080050020000600400700000", # Golden Nugget
    "100000000002740000000500004030000000750000000000009600040006000000000071000001030", # Easter Monster
    "000000000050000801000002000020100003004000200500006090000500000608000070000000000", # Tarantula
    "020000000000600003074080000000003002080040010600500000000010780500009000000000040", # Red Dwarf
]

PUZZLE_NAMES = [
    "Norvig #1", "Norvig #2", "AI Escargot", "Inkala 2010", "Platinum Blonde", "Golden Nugget",
    "Easter Monster", "Tarantula", "Red Dwarf",
]


# -------------------------------------------------------------------------
# 1. Naive backtracking baseline (first empty cell, digits 1..9, no propagation)
# -------------------------------------------------------------------------
def is_valid(board, row, col, num):
    if num in board[row, :]: return False
    if num in board[:, col]: return False
    br, bc = row // 3, col // 3
    if num in board[br*3:(br+1)*3, bc*3:(bc+1)*3]: return False
    return True


def solve_sudoku_backtracking(board, timeout=TIMEOUT_SEC):
    """
    Returns True (solved in place), False (no solution) or None (timeout).
    """
    start_time = time.time()
    steps = [0]

    def _recursive():
        steps[0] += 1
        if steps[0] % 2000 == 0 and timeout > 0 and time.time() - start_time > timeout:
            return None

        empty = np.argwhere(board == 0)
        if len(empty) == 0:
            return True
        row, col = empty[0]
        for num in range(1, 10):
            if is_valid(board, row, col, num):
                board[row, col] = num
                result = _recursive()
                if result or result is None:
                    return result
                board[row, col] = 0
        return False

    return _recursive()


# -------------------------------------------------------------------------
# 2. Benchmark
# -------------------------------------------------------------------------
def run_case(puzzle_str, timeout=TIMEOUT_SEC, baseline=True):
    row = {}

    result = solve_sudoku(puzzle_str, blank='0', timeout=timeout)
    row['engine_time'] = result.duration_ms / 1000
    row['engine_status'] = result.status
    row['engine_valid'] = result.solved and check_solution(result.solution)
    row['engine_guesses'] = result.guesses

    if baseline:
        grid = board_to_array(puzzle_str)
        start = time.time()
        outcome = solve_sudoku_backtracking(grid, timeout)
        row['bt_time'] = time.time() - start
        row['bt_status'] = {True: 'solved', False: 'unsolvable', None: 'timeout'}[outcome]
        row['bt_valid'] = bool(outcome) and check_solution(grid)
    return row


def save_extreme_graph(names, rows, save_path='benchmark_extreme.png'):
    x = np.arange(len(names))
    width = 0.4

    fig, ax = plt.subplots(figsize=(12, 6))
    ax.bar(x - width / 2, [r['engine_time'] for r in rows], width, label='Propagation + MRV')
    ax.bar(x + width / 2, [r.get('bt_time', 0.0) for r in rows], width, label='Naive backtracking')
    ax.set_xticks(x)
    ax.set_xticklabels(names, rotation=30, ha='right')
    ax.set_ylabel('Time (sec, log)')
    ax.set_yscale('log')
    ax.legend()
    plt.title('Extreme puzzles: solve time')
    fig.tight_layout()
    plt.savefig(save_path)
    plt.close(fig)
    return save_path


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--timeout', type=float, default=TIMEOUT_SEC)
    parser.add_argument('--no-baseline', action='store_true', help='skip naive backtracking')
    parser.add_argument('--plot', type=str, default='benchmark_extreme.png')
    args = parser.parse_args()

    rows = []
    print(f"{'Puzzle':<16} | {'Engine':<22} | {'Naive':<22}")
    print("-" * 66)
    for name, puzzle in zip(PUZZLE_NAMES, EXTREME_PUZZLES):
        row = run_case(puzzle, args.timeout, baseline=not args.no_baseline)
        rows.append(row)
        engine = f"{row['engine_status']} {row['engine_time']:.4f}s"
        naive = f"{row['bt_status']} {row['bt_time']:.4f}s" if 'bt_time' in row else "-"
        print(f"{name:<16} | {engine:<22} | {naive:<22}")

    save_extreme_graph(PUZZLE_NAMES, rows, args.plot)
    print(f"\n💾 Saved graph to {args.plot}")


if __name__ == "__main__":
    main()
