from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from solvers.backtracking import SearchStats, recursive_solve
from solvers.board import Board

SOLVED = "solved"
UNSOLVABLE = "unsolvable"
TIMEOUT = "timeout"


@dataclass
class SolverResult:
    status: str
    solution: Optional[np.ndarray]
    duration_ms: int
    guesses: int = 0
    backtracks: int = 0
    nodes: int = 0
    forced: int = 0
    message: str = ""

    @property
    def solved(self) -> bool:
        return self.status == SOLVED


def solve_board(
    board: Board,
    timeout: float = 0.0,
    logger: Optional[Callable[[str], None]] = None,
) -> SolverResult:
    """
    Solve `board` in place: deduction to a fixed point, then MRV backtracking.
    The first complete assignment found wins.
    """
    start_time = time.time()
    stats = SearchStats(timeout=timeout, start_time=start_time)
    root = board.mark()

    outcome = recursive_solve(board, stats, logger)
    duration_ms = int((time.time() - start_time) * 1000)

    if outcome:
        return SolverResult(
            status=SOLVED,
            solution=board.to_grid(),
            duration_ms=duration_ms,
            guesses=stats.guesses,
            backtracks=stats.backtracks,
            nodes=stats.nodes,
            forced=stats.forced,
        )

    # Leave the board as constructed
    board.undo_to(root)
    if outcome is None:
        status, solution = TIMEOUT, None
        message = f"gave up after {timeout:g}s ({stats.nodes} nodes)"
    else:
        status, solution = UNSOLVABLE, None
        message = "puzzle has no solution"

    return SolverResult(
        status=status,
        solution=solution,
        duration_ms=duration_ms,
        guesses=stats.guesses,
        backtracks=stats.backtracks,
        nodes=stats.nodes,
        forced=stats.forced,
        message=message,
    )


def solve_sudoku(
    input_str: str,
    blank: str = ".",
    timeout: float = 0.0,
    logger: Optional[Callable[[str], None]] = None,
) -> SolverResult:
    """
    Main Entry Point.
    Raises MalformedInput / ConstraintViolation for bad puzzles; an
    unsolvable puzzle is a normal result with status "unsolvable".
    """
    board = Board.from_string(input_str, blank=blank)
    return solve_board(board, timeout=timeout, logger=logger)
