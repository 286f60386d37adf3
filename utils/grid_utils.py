import numpy as np

DIGITS = list(range(1, 10))
ALL_MASK = (1 << 9) - 1  # 0b1_1111_1111


def box_of(row, col):
    return (row // 3) * 3 + col // 3


def get_sudoku_units():
    """
    Return the 27 units as a [27, 9] array of flat cell indices (row-major).
    Order: 9 rows, then 9 columns, then 9 boxes.
    """
    units = []
    for r in range(9):
        units.append([r * 9 + c for c in range(9)])
    for c in range(9):
        units.append([r * 9 + c for r in range(9)])
    for b in range(9):
        br, bc = (b // 3) * 3, (b % 3) * 3
        units.append([(br + i) * 9 + (bc + j) for i in range(3) for j in range(3)])
    return np.array(units, dtype=np.int64)


def get_sudoku_peers():
    """
    Static peer table for a 9x9 Sudoku: [81, 20] array.
    peers[i] lists, in ascending order, every cell sharing a row, column or box with i.
    """
    peers = []
    for i in range(81):
        row, col = i // 9, i % 9
        block = box_of(row, col)
        cell_peers = []
        for j in range(81):
            if i == j: continue
            r, c = j // 9, j % 9
            if r == row or c == col or box_of(r, c) == block:
                cell_peers.append(j)
        peers.append(cell_peers)
    return np.array(peers, dtype=np.int64)


UNITS = get_sudoku_units()
PEERS = get_sudoku_peers()

# POPCOUNT[mask] = number of candidates in a 9-bit mask
POPCOUNT = np.array([bin(m).count("1") for m in range(ALL_MASK + 1)], dtype=np.int64)
DIGIT_SHIFTS = np.arange(9, dtype=np.uint16)


def digit_to_mask(d):
    return 0 if d == 0 else 1 << (d - 1)


def mask_to_digits(mask):
    return [d for d in DIGITS if mask & (1 << (d - 1))]


def board_to_array(board_str, blank='0'):
    """
    Convert an 81-char puzzle string to a 9x9 int array, blanks as 0.
    No validation beyond that: use Board.from_string for checked parsing.
    """
    return np.array([0 if ch == blank else int(ch) for ch in board_str], dtype=np.int64).reshape(9, 9)


def array_to_string(grid, blank='.'):
    return "".join(str(int(v)) if v else blank for v in np.asarray(grid).flatten())


def check_solution(grid):
    """True iff every row, column and box holds each digit 1-9 exactly once."""
    grid = np.asarray(grid).reshape(9, 9)
    target = set(DIGITS)
    for i in range(9):
        if set(grid[i, :].tolist()) != target: return False
        if set(grid[:, i].tolist()) != target: return False
    for br in range(3):
        for bc in range(3):
            if set(grid[br*3:(br+1)*3, bc*3:(bc+1)*3].flatten().tolist()) != target:
                return False
    return True


def preserves_clues(puzzle, grid):
    """Every non-zero cell of `puzzle` keeps its digit in `grid`."""
    puzzle = np.asarray(puzzle).reshape(9, 9)
    grid = np.asarray(grid).reshape(9, 9)
    clues = puzzle != 0
    return bool(np.array_equal(puzzle[clues], grid[clues]))
