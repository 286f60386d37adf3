import pytest

from utils.grid_utils import ALL_MASK, PEERS, digit_to_mask

EASY = "3..9..7.11....45.9984........9.268..4...9...5..241.6........4122.38....76.1..9..8"
EVIL = "...6....17...945..4....2....5..1.7.2.2.....6.3.6.8..9....8....7..376...89....3..."
BLANK = "." * 81


def place(cells):
    """81-char puzzle with the given {(row, col): digit} clues."""
    chars = ["."] * 81
    for (r, c), d in cells.items():
        chars[r * 9 + c] = str(d)
    return "".join(chars)


# Row 0 = 1..7, 8 in columns 7 and 8 lower down: r1c8 and r1c9 both need 9.
DEAD_END = place({**{(0, c): c + 1 for c in range(7)}, (3, 7): 8, (6, 8): 8})
# Row 0 = 1..8 and a 9 in column 9: r1c9 has no candidate from the start.
EMPTY_CELL = place({**{(0, c): c + 1 for c in range(8)}, (4, 8): 9})
# Survives the deduction pass; every branch of the search dies.
NO_COMPLETION = ".57..3.9...4.......39..1.52..8.........7.9..43..8..5..2..3.......6.....3.8.....41"


def expected_candidates(board):
    """Candidate masks recomputed from scratch from the fixed cells."""
    masks = []
    for idx in range(81):
        if board.values[idx]:
            masks.append(0)
            continue
        mask = ALL_MASK
        for p in PEERS[idx]:
            if board.values[p]:
                mask &= ALL_MASK ^ digit_to_mask(int(board.values[p]))
        masks.append(mask)
    return masks


@pytest.fixture
def easy():
    return EASY


@pytest.fixture
def evil():
    return EVIL
