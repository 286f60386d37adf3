import pandas as pd
import pytest

from conftest import DEAD_END, EASY, EVIL
from data.load_dataset import SudokuDataset
from experiments.evaluate import evaluate_dataset, solve_one, summarize
from experiments.evaluate_extreme_case import is_valid, solve_sudoku_backtracking
from solvers.master_solver import solve_sudoku
from utils.grid_utils import array_to_string, board_to_array, check_solution


def zeros(puzzle):
    return puzzle.replace(".", "0")


@pytest.fixture
def csv_dataset(tmp_path):
    easy_solution = array_to_string(solve_sudoku(EASY).solution)
    path = tmp_path / "sudoku.csv"
    path.write_text(
        "quizzes,solutions\n"
        f"{zeros(EASY)},{easy_solution}\n"
        f"{zeros(EVIL)},\n"
    )
    return SudokuDataset(str(path))


def test_csv_keeps_leading_zeros(csv_dataset):
    assert len(csv_dataset) == 2
    quiz, solution = csv_dataset[1]
    assert quiz == zeros(EVIL)
    assert quiz.startswith("000")
    assert solution is None
    assert csv_dataset[0][1] is not None
    assert csv_dataset.has_solutions


def test_text_dataset(tmp_path):
    path = tmp_path / "puzzles.txt"
    path.write_text(f"# two puzzles\n{EASY}\n\n{EVIL}\n")
    dataset = SudokuDataset(str(path), blank=".", limit=1)
    assert len(dataset) == 1
    assert dataset[0] == (EASY, None)
    assert not dataset.has_solutions


def test_missing_dataset(tmp_path):
    with pytest.raises(FileNotFoundError):
        SudokuDataset(str(tmp_path / "nope.csv"))


def test_evaluate_dataset(csv_dataset):
    results = evaluate_dataset(csv_dataset, progress=False)
    assert results['status'].tolist() == ['solved', 'solved']
    assert results['valid'].all()
    summary = summarize(results)
    assert summary['solved'] == 2
    assert summary['needed_search'] == 1
    assert summary['accuracy'] == 100.0


def test_solve_one_reports_errors_and_dead_ends():
    bad = solve_one((0, "123", None, "0", 0.0))
    assert bad['status'] == 'error'
    assert bad['message']
    dead = solve_one((1, zeros(DEAD_END), None, "0", 0.0))
    assert dead['status'] == 'unsolvable'
    assert not dead['valid']


def test_naive_backtracking_baseline():
    grid = board_to_array(EASY, blank=".")
    assert not is_valid(grid, 0, 1, 3)
    assert solve_sudoku_backtracking(grid) is True
    assert check_solution(grid)


def test_empty_run_reports_zero(tmp_path):
    path = tmp_path / "puzzles.txt"
    path.write_text("# nothing here\n\n")
    dataset = SudokuDataset(str(path), blank=".")
    results = evaluate_dataset(dataset, progress=False)
    assert len(results) == 0
    summary = summarize(results)
    assert summary['total'] == 0
    assert summary['solved'] == 0
    assert summary['avg_time_ms'] == 0.0
    assert summary['accuracy'] is None


def test_summarize_without_columns():
    summary = summarize(pd.DataFrame([]))
    assert summary['total'] == 0
    assert summary['invalid'] == 0
