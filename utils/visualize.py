import numpy as np

from utils.grid_utils import UNITS

# ANSI Colors
RED = '\033[91m'   # conflict
BLUE = '\033[94m'  # filled in by the solver
RESET = '\033[0m'


def get_conflict_mask(grid):
    """
    Mask (True = violation) of cells whose digit repeats in their row, column or box.
    """
    flat = np.asarray(grid).reshape(81)
    conflict = np.zeros(81, dtype=bool)

    for unit in UNITS:
        vals = flat[unit]
        # same[i, j]: cells i and j of the unit hold the same non-zero digit
        same = (vals[:, None] == vals[None, :]) & (vals[:, None] != 0)
        conflict[unit] |= same.sum(axis=1) > 1

    return conflict.reshape(9, 9)


def format_sudoku(grid, original=None, color=True, blank='.'):
    """
    Boxed 9x9 rendering.
    original: the puzzle as given; cells it leaves empty are highlighted when filled.
    """
    grid = np.asarray(grid).reshape(9, 9)
    if original is not None:
        original = np.asarray(original).reshape(9, 9)
    conflicts = get_conflict_mask(grid)

    lines = ["-" * 25]
    for i in range(9):
        if i > 0 and i % 3 == 0:
            lines.append("-" * 25)
        row_str = "| "
        for j in range(9):
            if j > 0 and j % 3 == 0:
                row_str += "| "

            val = grid[i, j]
            val_str = str(val) if val != 0 else blank

            is_error = conflicts[i, j]
            is_filled = (original is not None) and (original[i, j] == 0) and (val != 0)

            if color and is_error:
                row_str += f"{RED}{val_str}{RESET} "
            elif color and is_filled:
                row_str += f"{BLUE}{val_str}{RESET} "
            else:
                row_str += f"{val_str} "
        lines.append(row_str + "|")
    lines.append("-" * 25)
    return "\n".join(lines)


def print_sudoku(grid, original=None, color=True, file=None):
    print(format_sudoku(grid, original=original, color=color), file=file)
