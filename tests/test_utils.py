import numpy as np

from conftest import EASY
from solvers.master_solver import solve_sudoku
from utils.grid_utils import (
    PEERS,
    UNITS,
    array_to_string,
    board_to_array,
    check_solution,
    mask_to_digits,
    preserves_clues,
)
from utils.visualize import BLUE, RED, format_sudoku, get_conflict_mask


def test_peer_and_unit_tables():
    assert PEERS.shape == (81, 20)
    assert UNITS.shape == (27, 9)
    # r1c1 sees its row, column and box
    assert set(PEERS[0].tolist()) == ({1, 2, 3, 4, 5, 6, 7, 8}
                                      | {9, 18, 27, 36, 45, 54, 63, 72}
                                      | {10, 11, 19, 20})
    for unit in UNITS:
        assert len(set(unit.tolist())) == 9


def test_mask_to_digits():
    assert mask_to_digits(0) == []
    assert mask_to_digits(0b100000101) == [1, 3, 9]


def test_string_array_round_trip():
    grid = board_to_array(EASY, blank=".")
    assert grid[0, 0] == 3 and grid[0, 1] == 0
    assert array_to_string(grid) == EASY


def test_check_solution_rejects_duplicates():
    solution = solve_sudoku(EASY).solution.copy()
    assert check_solution(solution)
    solution[0, 0], solution[0, 1] = solution[0, 1], solution[0, 0]
    assert not check_solution(solution)


def test_preserves_clues():
    puzzle = board_to_array(EASY, blank=".")
    solution = solve_sudoku(EASY).solution
    assert preserves_clues(puzzle, solution)
    tampered = solution.copy()
    tampered[0, 0] = 9 if tampered[0, 0] != 9 else 8
    assert not preserves_clues(puzzle, tampered)


def test_conflict_mask():
    grid = np.zeros((9, 9), dtype=int)
    grid[0, 0] = 5
    grid[0, 8] = 5
    grid[4, 4] = 5
    mask = get_conflict_mask(grid)
    assert mask[0, 0] and mask[0, 8]
    assert not mask[4, 4]
    # same box, different row and column
    grid[3, 3] = 5
    mask = get_conflict_mask(grid)
    assert mask[3, 3] and mask[4, 4]
    assert not mask[0, 4]


def test_format_highlights_filled_cells():
    puzzle = board_to_array(EASY, blank=".")
    solution = solve_sudoku(EASY).solution
    text = format_sudoku(solution, original=puzzle, color=True)
    assert BLUE in text
    assert RED not in text
    plain = format_sudoku(puzzle, color=False)
    assert ". " in plain
    assert array_to_string(puzzle) == EASY
