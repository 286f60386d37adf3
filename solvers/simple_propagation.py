import numpy as np

from solvers.board import Contradiction
from utils.grid_utils import DIGIT_SHIFTS, POPCOUNT, UNITS, mask_to_digits


def find_naked_singles(board):
    """Flat indices of open cells with exactly one candidate, row-major."""
    open_cells = board.values == 0
    counts = POPCOUNT[board.candidates]
    if np.any(open_cells & (counts == 0)):
        idx = int(np.flatnonzero(open_cells & (counts == 0))[0])
        raise Contradiction(f"r{idx // 9 + 1}c{idx % 9 + 1} has no candidates")
    return np.flatnonzero(open_cells & (counts == 1))


def find_hidden_single(board, unit):
    """
    First (digit, cell) in `unit` where the digit fits exactly one cell.
    A digit missing from the unit with nowhere left to go is a Contradiction.
    """
    masks = board.candidates[unit]
    # bits[k, d-1] == 1 iff cell unit[k] still allows digit d
    bits = (masks[:, None] >> DIGIT_SHIFTS) & 1
    counts = bits.sum(axis=0)
    placed = set(board.values[unit].tolist())

    for digit in range(1, 10):
        if digit in placed:
            continue
        n = counts[digit - 1]
        if n == 0:
            raise Contradiction(f"digit {digit} has no place left in a unit")
        if n == 1:
            return digit, int(unit[np.argmax(bits[:, digit - 1])])
    return None


def propagate_constraints(board):
    """
    Naked singles and hidden singles, repeated until a full sweep places nothing
    (Fixed Point Iteration). Mutates `board` through Board.assign.

    returns: number of cells placed
    raises: Contradiction when the current board cannot be completed
    """
    placed = 0
    changed = True

    while changed:
        changed = False

        # 1. Naked singles
        for idx in find_naked_singles(board):
            idx = int(idx)
            digit = mask_to_digits(int(board.candidates[idx]))[0]
            board.assign(idx // 9, idx % 9, digit)
            placed += 1
            changed = True

        # 2. Hidden singles, at most one per unit per sweep (masks go stale after an assign)
        for unit in UNITS:
            hit = find_hidden_single(board, unit)
            if hit is None:
                continue
            digit, idx = hit
            board.assign(idx // 9, idx % 9, digit)
            placed += 1
            changed = True

    return placed
