import time
from dataclasses import dataclass, field

import numpy as np

from solvers.board import Contradiction
from solvers.simple_propagation import propagate_constraints
from utils.grid_utils import POPCOUNT

# Check the clock every N nodes (time.time() on every node is measurable overhead)
TIMEOUT_CHECK_INTERVAL = 2000


@dataclass
class SearchStats:
    timeout: float = 0.0
    start_time: float = field(default_factory=time.time)
    nodes: int = 0
    guesses: int = 0
    backtracks: int = 0
    forced: int = 0

    def timed_out(self):
        return self.timeout > 0 and (time.time() - self.start_time > self.timeout)


def select_branch_cell(board):
    """
    MRV: open cell with the fewest candidates (> 1), lowest row-major index on ties.
    Returns None when no such cell exists.
    """
    counts = POPCOUNT[board.candidates]
    eligible = (board.values == 0) & (counts > 1)
    if not np.any(eligible):
        return None
    return int(np.argmin(np.where(eligible, counts, 10)))


def recursive_solve(board, stats, logger=None):
    """
    Depth-first search over `board`, mutated in place.

    Returns True once the board is complete, False if this branch is dead,
    None if the timeout hit (the caller must stop, not try the next digit).
    On False the caller rolls back with board.undo_to(mark).
    """
    stats.nodes += 1
    if stats.nodes % TIMEOUT_CHECK_INTERVAL == 0 and stats.timed_out():
        return None

    # 1. Logic phase
    try:
        stats.forced += propagate_constraints(board)
    except Contradiction:
        return False

    if board.is_complete():
        return True

    # 2. Branch on the most constrained cell
    idx = select_branch_cell(board)
    if idx is None:
        return False
    row, col = divmod(idx, 9)

    for digit in board.candidates_at(idx):
        mark = board.mark()
        stats.guesses += 1
        if logger:
            logger(f"Guess: r{row + 1}c{col + 1} = {digit} ({board.unsolved_squares} unsolved)")

        try:
            board.assign(row, col, digit)
            result = recursive_solve(board, stats, logger)
        except Contradiction:
            result = False

        if result:
            return True
        # Timeout signal: propagate without trying the remaining digits
        if result is None:
            return None

        board.undo_to(mark)
        stats.backtracks += 1
        if logger:
            logger(f"Backtrack: r{row + 1}c{col + 1} != {digit}")

    return False
