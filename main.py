import argparse
import sys

from solvers.board import Board, ConstraintViolation, MalformedInput
from solvers.master_solver import TIMEOUT, solve_board
from utils.grid_utils import array_to_string
from utils.visualize import print_sudoku

EXIT_OK = 0
EXIT_UNSOLVED = 1
EXIT_BAD_INPUT = 2


def build_parser():
    parser = argparse.ArgumentParser(description='Constraint propagation + backtracking Sudoku solver')
    parser.add_argument('--input', type=str, default=None,
                        help='81-char puzzle (default: read one line from stdin)')
    parser.add_argument('--blank', type=str, default='.', help='blank cell marker')
    parser.add_argument('--flat', action='store_true', help='print the solution as one 81-char line')
    parser.add_argument('--trace', action='store_true', help='log every guess and backtrack to stderr')
    parser.add_argument('--timeout', type=float, default=0.0, help='give up after N seconds (0 = never)')
    parser.add_argument('--no-color', action='store_true', help='disable ANSI colors')
    return parser


def main(argv=None, stdin=None, stdout=None, stderr=None):
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    args = build_parser().parse_args(argv)

    if len(args.blank) != 1:
        print(f"❌ --blank must be a single character, got {args.blank!r}", file=stderr)
        return EXIT_BAD_INPUT

    puzzle = args.input if args.input is not None else stdin.readline()
    puzzle = puzzle.strip()

    # 1. Parse
    try:
        board = Board.from_string(puzzle, blank=args.blank)
    except MalformedInput as e:
        print(f"❌ Malformed input: {e}", file=stderr)
        return EXIT_BAD_INPUT
    except ConstraintViolation as e:
        print(f"❌ Invalid puzzle: {e}", file=stderr)
        return EXIT_BAD_INPUT

    original = board.to_grid()
    logger = (lambda msg: print(msg, file=stderr)) if args.trace else None

    # 2. Solve
    result = solve_board(board, timeout=args.timeout, logger=logger)

    # 3. Report
    if not result.solved:
        icon = "⏱️" if result.status == TIMEOUT else "💀"
        print(f"{icon} {result.status.capitalize()}: {result.message}", file=stderr)
        return EXIT_UNSOLVED

    if args.flat:
        print(array_to_string(result.solution), file=stdout)
    else:
        color = not args.no_color and hasattr(stdout, 'isatty') and stdout.isatty()
        print_sudoku(result.solution, original=original, color=color, file=stdout)

    print(f"🎉 Solved in {result.duration_ms} ms "
          f"({result.guesses} guesses, {result.backtracks} backtracks)", file=stderr)
    return EXIT_OK


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
