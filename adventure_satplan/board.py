"""
board.py - Reader for adventure-game board descriptions.

Board layout::

    START A B GOAL                            locations
    ruby                                      treasures (may be blank)
    3                                         move budget
    START TREASURES TOLLS NEXT A              one line per location
    A TREASURES ruby TOLLS NEXT START B
    B TREASURES TOLLS ruby NEXT GOAL
    GOAL TREASURES TOLLS NEXT GOAL

Blank description lines are ignored.
"""

from __future__ import annotations

from adventure_satplan.data_structures import (
    PlanningProblem, MalformedProblem,
    TREASURES, TOLLS, NEXT,
)


def load_board(path: str) -> PlanningProblem:
    """Parse the board file at *path*."""
    with open(path, "r", encoding="utf-8") as f:
        return parse_board(f.read())


def parse_board(text: str) -> PlanningProblem:
    """Parse a board description held in *text*."""
    lines = text.splitlines()
    if len(lines) < 3:
        raise MalformedProblem("Board needs a location line, a treasure line "
                               "and a move budget line")

    locations = lines[0].split()
    treasures = lines[1].split()
    try:
        move_budget = int(lines[2].strip())
    except ValueError:
        raise MalformedProblem(f"Line 3: bad move budget {lines[2].strip()!r}") from None

    adjacency: dict[str, list[str]] = {}
    treasure_homes: dict[str, list[str]] = {}
    tolls: dict[str, list[str]] = {}

    for lineno, line in enumerate(lines[3:], start=4):
        tokens = line.split()
        if not tokens:
            continue
        node, found, fees, neighbours = _parse_node_line(tokens, lineno)
        if node in adjacency:
            raise MalformedProblem(f"Line {lineno}: {node} described twice")
        treasure_homes[node] = found
        tolls[node] = fees
        adjacency[node] = neighbours

    return PlanningProblem.build(locations, treasures, adjacency,
                                 treasure_homes, tolls, move_budget)


def _parse_node_line(tokens: list[str], lineno: int):
    """Split ``NODE TREASURES t.. TOLLS t.. NEXT n..`` into its four parts."""
    node = tokens[0]
    try:
        i_treasures = tokens.index(TREASURES)
        i_tolls = tokens.index(TOLLS)
        i_next = tokens.index(NEXT)
    except ValueError:
        raise MalformedProblem(
            f"Line {lineno}: expected {TREASURES}, {TOLLS} and {NEXT} sections") from None
    if not (i_treasures == 1 and i_treasures < i_tolls < i_next):
        raise MalformedProblem(
            f"Line {lineno}: sections must read {node} {TREASURES} .. {TOLLS} .. {NEXT} ..")

    found = tokens[i_treasures + 1:i_tolls]
    fees = tokens[i_tolls + 1:i_next]
    neighbours = tokens[i_next + 1:]
    return node, found, fees, neighbours
