import os

import pytest

from adventure_satplan.main import main

UNREACHABLE = """\
START GOAL

0
START TREASURES TOLLS NEXT GOAL
GOAL TREASURES TOLLS NEXT
"""

PUNCTUATED = """\
START hall,2 GOAL

2
START TREASURES TOLLS NEXT hall,2
hall,2 TREASURES TOLLS NEXT GOAL
GOAL TREASURES TOLLS NEXT GOAL
"""


@pytest.fixture
def toll_maze_file(boards_dir):
    return os.path.join(boards_dir, "toll_maze.txt")


def read(path):
    with open(path, encoding="utf-8") as f:
        return f.read()


def test_run(toll_maze_file, tmp_path, capsys):
    rc = main(["run", toll_maze_file, "-outdir", str(tmp_path), "-s"])

    assert rc == 0
    assert capsys.readouterr().out == "START A START B GOAL\n"
    assert read(tmp_path / "solution.txt") == "START A START B GOAL\n"
    assert read(tmp_path / "davis_putnam_input.txt").startswith("-1 -6\n")
    assert read(tmp_path / "symbolic_clauses.txt").startswith("-At(START,0) -At(A,0)\n")
    output = read(tmp_path / "davis_putnam_output.txt").splitlines()
    assert output[0] == " 1 T"
    assert output[30] == "0"


def test_run_without_symbolic_file(toll_maze_file, tmp_path):
    assert main(["run", toll_maze_file, "-outdir", str(tmp_path)]) == 0
    assert not os.path.exists(tmp_path / "symbolic_clauses.txt")


def test_phases_as_separate_commands(toll_maze_file, tmp_path, capsys):
    outdir = str(tmp_path)
    dimacs = str(tmp_path / "maze.cnf")

    assert main(["encode", toll_maze_file, "-outdir", outdir, "-dimacs", dimacs]) == 0
    assert read(dimacs).startswith("p cnf 30 ")
    assert main(["solve", "-outdir", outdir, "-solver", "cadical"]) == 0
    assert main(["decode", "-outdir", outdir]) == 0

    assert capsys.readouterr().out == "START A START B GOAL\n"


def test_unsolvable_board(tmp_path, capsys):
    board = tmp_path / "board.txt"
    board.write_text(UNREACHABLE)

    assert main(["run", str(board), "-outdir", str(tmp_path)]) == 0
    assert capsys.readouterr().out == "NO SOLUTION\n"
    # only the key section is written
    assert read(tmp_path / "davis_putnam_output.txt") == "0\n1 At(START,0)\n2 At(GOAL,0)\n"


def test_malformed_board(tmp_path, capsys):
    board = tmp_path / "board.txt"
    board.write_text("START GOAL\n\nmany\n")

    assert main(["run", str(board), "-outdir", str(tmp_path)]) == 1
    assert "Malformed input" in capsys.readouterr().err


def test_missing_phase_file(tmp_path, capsys):
    assert main(["decode", "-outdir", str(tmp_path)]) == 1
    assert "davis_putnam_output.txt" in capsys.readouterr().err


def test_unknown_solver(toll_maze_file):
    with pytest.raises(SystemExit):
        main(["run", toll_maze_file, "-solver", "walksat"])


def test_run_with_punctuated_location(tmp_path, capsys):
    board = tmp_path / "board.txt"
    board.write_text(PUNCTUATED)

    assert main(["run", str(board), "-outdir", str(tmp_path)]) == 0
    assert capsys.readouterr().out == "START hall,2 GOAL\n"
