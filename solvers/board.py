from __future__ import annotations

from typing import List, Tuple

import numpy as np

from utils.grid_utils import (
    ALL_MASK,
    PEERS,
    POPCOUNT,
    box_of,
    digit_to_mask,
    mask_to_digits,
)

# (cell index, digit, cell mask before the assignment, peers that lost the digit)
TrailEntry = Tuple[int, int, int, np.ndarray]


class SudokuError(Exception):
    pass


class MalformedInput(SudokuError, ValueError):
    """Puzzle text has the wrong length or an unknown character."""


class ConstraintViolation(SudokuError):
    """A digit would appear twice in a row, column or box."""


class Contradiction(SudokuError):
    """An open cell (or a unit's missing digit) has no candidates left."""


class Board:
    """
    81 cells in row-major order.

    values[i] is the placed digit (0 = open). candidates[i] is a 9-bit mask,
    bit d-1 set iff digit d is still legal there; fixed cells carry mask 0.
    rows_used / cols_used / boxes_used mirror the placed digits per unit so a
    legality test is a single mask check.

    Every assign pushes an entry on `trail`; unassign pops it and restores
    exactly the candidate bits that assignment removed.
    """

    def __init__(self) -> None:
        self.values = np.zeros(81, dtype=np.int8)
        self.candidates = np.full(81, ALL_MASK, dtype=np.uint16)
        self.rows_used = np.zeros(9, dtype=np.uint16)
        self.cols_used = np.zeros(9, dtype=np.uint16)
        self.boxes_used = np.zeros(9, dtype=np.uint16)
        self.clues = np.zeros(81, dtype=bool)
        self.trail: List[TrailEntry] = []

    @classmethod
    def from_string(cls, text: str, blank: str = ".") -> "Board":
        if len(text) != 81:
            raise MalformedInput(f"expected 81 cells, got {len(text)}")
        for pos, ch in enumerate(text):
            if ch != blank and ch not in "123456789":
                raise MalformedInput(
                    f"invalid character {ch!r} at position {pos} (blank is {blank!r})"
                )

        board = cls()
        for idx, ch in enumerate(text):
            if ch == blank:
                continue
            row, col = divmod(idx, 9)
            try:
                board.assign(row, col, int(ch))
            except Contradiction:
                # Clue stays placed; the emptied peer is reported by the deduction pass.
                pass
            board.clues[idx] = True
        return board

    def copy(self) -> "Board":
        other = Board()
        other.values = self.values.copy()
        other.candidates = self.candidates.copy()
        other.rows_used = self.rows_used.copy()
        other.cols_used = self.cols_used.copy()
        other.boxes_used = self.boxes_used.copy()
        other.clues = self.clues.copy()
        other.trail = list(self.trail)
        return other

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def value(self, row: int, col: int) -> int:
        return int(self.values[row * 9 + col])

    def candidates_at(self, idx: int) -> List[int]:
        return mask_to_digits(int(self.candidates[idx]))

    def candidates_of(self, row: int, col: int) -> List[int]:
        """Remaining candidate digits, ascending. Empty for fixed cells."""
        return self.candidates_at(row * 9 + col)

    def candidate_count(self, row: int, col: int) -> int:
        return int(POPCOUNT[self.candidates[row * 9 + col]])

    def is_legal(self, row: int, col: int, digit: int) -> bool:
        if self.values[row * 9 + col]:
            return False
        used = self.rows_used[row] | self.cols_used[col] | self.boxes_used[box_of(row, col)]
        return not (int(used) & digit_to_mask(digit))

    def is_complete(self) -> bool:
        return bool(np.all(self.values != 0))

    @property
    def unsolved_squares(self) -> int:
        return int(np.count_nonzero(self.values == 0))

    def to_grid(self) -> np.ndarray:
        return self.values.astype(np.int64).reshape(9, 9)

    def to_string(self, blank: str = ".") -> str:
        return "".join(str(int(v)) if v else blank for v in self.values)

    def __str__(self) -> str:
        return self.to_string()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def assign(self, row: int, col: int, digit: int) -> None:
        """
        Fix (row, col) to digit and prune it from every open peer.

        Raises ConstraintViolation (board untouched) if the cell is already
        fixed or the digit is used in its row, column or box. Raises
        Contradiction if some peer is left without candidates; in that case
        the assignment has been applied and recorded, and the caller undoes it.
        """
        if not 1 <= digit <= 9:
            raise ValueError(f"digit must be in 1..9, got {digit}")
        idx = row * 9 + col
        if self.values[idx]:
            raise ConstraintViolation(
                f"r{row + 1}c{col + 1} is already fixed to {int(self.values[idx])}"
            )
        bit = digit_to_mask(digit)
        box = box_of(row, col)
        if int(self.rows_used[row]) & bit:
            raise ConstraintViolation(f"digit {digit} repeated in row {row + 1}")
        if int(self.cols_used[col]) & bit:
            raise ConstraintViolation(f"digit {digit} repeated in column {col + 1}")
        if int(self.boxes_used[box]) & bit:
            raise ConstraintViolation(f"digit {digit} repeated in box {box + 1}")

        previous = int(self.candidates[idx])
        self.values[idx] = digit
        self.candidates[idx] = 0
        self.rows_used[row] |= bit
        self.cols_used[col] |= bit
        self.boxes_used[box] |= bit

        peers = PEERS[idx]
        pruned = peers[(self.candidates[peers] & bit) != 0]
        self.candidates[pruned] &= ALL_MASK ^ bit
        self.trail.append((idx, digit, previous, pruned))

        if np.any(self.candidates[pruned] == 0):
            raise Contradiction(f"r{row + 1}c{col + 1} = {digit} empties a peer")

    def unassign(self, row: int, col: int) -> None:
        """Undo the most recent assignment, which must be the one at (row, col)."""
        idx = row * 9 + col
        if self.clues[idx]:
            raise ValueError(f"r{row + 1}c{col + 1} is a clue")
        if not self.trail or self.trail[-1][0] != idx:
            raise ValueError(f"r{row + 1}c{col + 1} is not the latest assignment")

        _, digit, previous, pruned = self.trail.pop()
        bit = digit_to_mask(digit)
        keep = ALL_MASK ^ bit
        self.candidates[pruned] |= bit
        self.candidates[idx] = previous
        self.values[idx] = 0
        self.rows_used[row] &= keep
        self.cols_used[col] &= keep
        self.boxes_used[box_of(row, col)] &= keep

    def mark(self) -> int:
        return len(self.trail)

    def undo_to(self, mark: int) -> None:
        while len(self.trail) > mark:
            idx = self.trail[-1][0]
            self.unassign(idx // 9, idx % 9)
