import io

from conftest import DEAD_END, EASY, place
from main import EXIT_BAD_INPUT, EXIT_OK, EXIT_UNSOLVED, main
from utils.grid_utils import board_to_array, check_solution


def run(argv, stdin_text=""):
    stdin, stdout, stderr = io.StringIO(stdin_text), io.StringIO(), io.StringIO()
    code = main(argv, stdin=stdin, stdout=stdout, stderr=stderr)
    return code, stdout.getvalue(), stderr.getvalue()


def test_solves_line_from_stdin_flat():
    code, out, err = run(["--flat"], EASY + "\n")
    assert code == EXIT_OK
    solution = out.strip()
    assert len(solution) == 81
    assert check_solution(board_to_array(solution))
    assert "Solved" in err


def test_boxed_output_without_color():
    code, out, _ = run(["--input", EASY, "--no-color"])
    assert code == EXIT_OK
    lines = out.strip().splitlines()
    assert len(lines) == 13
    assert "\033[" not in out
    assert lines[1].startswith("| 3 ")


def test_malformed_input_exit_code():
    code, out, err = run([], EASY[:80] + "\n")
    assert code == EXIT_BAD_INPUT
    assert out == ""
    assert "Malformed" in err


def test_duplicate_clue_exit_code():
    code, _, err = run(["--input", place({(0, 0): 5, (0, 1): 5})])
    assert code == EXIT_BAD_INPUT
    assert "Invalid puzzle" in err


def test_unsolvable_exit_code():
    code, out, err = run(["--input", DEAD_END])
    assert code == EXIT_UNSOLVED
    assert out == ""
    assert "Unsolvable" in err


def test_trace_goes_to_stderr():
    code, out, err = run(["--input", "." * 81, "--flat", "--trace"])
    assert code == EXIT_OK
    assert "Guess: r1c1 = 1" in err
    assert "Guess" not in out


def test_custom_blank():
    code, out, _ = run(["--blank", "0", "--flat"], EASY.replace(".", "0"))
    assert code == EXIT_OK
    assert check_solution(board_to_array(out.strip()))


def test_blank_must_be_one_character():
    code, _, _ = run(["--blank", "..", "--input", EASY])
    assert code == EXIT_BAD_INPUT
