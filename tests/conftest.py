import os

import pytest

from adventure_satplan.board import parse_board, load_board
from adventure_satplan.data_structures import PlanningProblem

BOARDS_DIR = os.path.join(os.path.dirname(__file__), os.pardir, "boards")

TOLL_MAZE = """\
START A B GOAL
ruby
4
START TREASURES TOLLS NEXT A B
A TREASURES ruby TOLLS NEXT START
B TREASURES TOLLS ruby NEXT GOAL START
GOAL TREASURES TOLLS NEXT GOAL
"""


@pytest.fixture
def boards_dir():
    return os.path.abspath(BOARDS_DIR)


@pytest.fixture
def toll_maze():
    return parse_board(TOLL_MAZE)


@pytest.fixture
def two_keys(boards_dir):
    return load_board(os.path.join(boards_dir, "two_keys.txt"))


@pytest.fixture
def corridor():
    """START -> GOAL in one move, no treasures."""
    return PlanningProblem.build(
        ["START", "GOAL"], [],
        {"START": ["GOAL"], "GOAL": ["GOAL"]},
        move_budget=1)
