"""
data_structures.py - Core data types for the adventure-game SATPLAN.

Holds the constants shared by every phase (reserved board tokens, status
codes, print masks, default file names), the atom tagged variant, the
planning problem and the solver settings.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
START = "START"
GOAL = "GOAL"

# Section markers of a board description line
TREASURES = "TREASURES"
TOLLS = "TOLLS"
NEXT = "NEXT"

# Separator line between clauses and key in the transport files
KEY_SEPARATOR = "0"

NO_SOLUTION = "NO SOLUTION"

# Solver return values
Unsat = 0
Sat = 1
Failure = 3

STATUS_NAMES = {Unsat: "UNSAT", Sat: "SAT", Failure: "FAILURE"}

# Print masks
PrintLit = 1
PrintCNF = 2
PrintMap = 8
PrintModel = 16

# Default file locations (relative to the output directory)
DEFAULT_OUTDIR = "outputs"
DAVIS_PUTNAM_INPUT = "davis_putnam_input.txt"
DAVIS_PUTNAM_OUTPUT = "davis_putnam_output.txt"
SYMBOLIC_CLAUSES = "symbolic_clauses.txt"
SOLUTION = "solution.txt"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class MalformedProblem(ValueError):
    """The board (or a transport file derived from it) is inconsistent."""


class InternalInvariantViolation(RuntimeError):
    """A bug in this package: data produced by one phase does not fit another."""


# ---------------------------------------------------------------------------
# Atoms
# ---------------------------------------------------------------------------

class Kind(Enum):
    AT = "At"
    AVAILABLE = "Available"
    HAS = "Has"

    def __str__(self):
        return self.value


class Atom(NamedTuple):
    """A boolean state variable: *kind* holds for *name* at step *time*."""
    kind: Kind
    name: str
    time: int

    def __str__(self):
        return f"{self.kind}({self.name},{self.time})"


def At(name: str, time: int) -> Atom:
    return Atom(Kind.AT, name, time)


def Available(name: str, time: int) -> Atom:
    return Atom(Kind.AVAILABLE, name, time)


def Has(name: str, time: int) -> Atom:
    return Atom(Kind.HAS, name, time)


# ---------------------------------------------------------------------------
# PlanningProblem - the game board
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlanningProblem:
    """A maze with treasures and tolls, to be crossed in exactly *move_budget* moves.

    Maps keep insertion order; the value tuples are ordered and free of
    duplicates.  Use :meth:`build` rather than the constructor so that the
    GOAL self-loop is synthesised and the board is validated.
    """
    locations: tuple[str, ...]
    treasures: tuple[str, ...]
    adjacency: dict[str, tuple[str, ...]]
    treasure_homes: dict[str, tuple[str, ...]]
    tolls: dict[str, tuple[str, ...]]
    move_budget: int
    start: str = START
    goal: str = GOAL

    @classmethod
    def build(cls, locations, treasures, adjacency, treasure_homes=None,
              tolls=None, move_budget: int = 0, start: str = START,
              goal: str = GOAL) -> 'PlanningProblem':
        locations = tuple(dict.fromkeys(locations))
        treasures = tuple(dict.fromkeys(treasures))
        treasure_homes = treasure_homes or {}
        tolls = tolls or {}

        if start not in locations:
            raise MalformedProblem(f"Start {start} is not a declared location")
        if goal not in locations:
            raise MalformedProblem(f"Goal {goal} is not a declared location")
        if goal not in adjacency:
            raise MalformedProblem(f"Goal {goal} has no description")
        if move_budget < 0:
            raise MalformedProblem(f"Negative move budget {move_budget}")

        known_locs = set(locations)
        known_treasures = set(treasures)

        def check_location(loc: str, what: str):
            if loc not in known_locs:
                raise MalformedProblem(f"{what} refers to unknown location {loc!r}")

        def check_treasure(t: str, what: str):
            if t not in known_treasures:
                raise MalformedProblem(f"{what} refers to unknown treasure {t!r}")

        adj: dict[str, tuple[str, ...]] = {}
        for loc, neighbours in adjacency.items():
            check_location(loc, "Adjacency")
            neighbours = tuple(dict.fromkeys(neighbours))
            for n in neighbours:
                check_location(n, f"Neighbour list of {loc}")
            if loc == goal and goal not in neighbours:
                neighbours += (goal,)
            adj[loc] = neighbours
        # Undescribed locations are dead ends
        for loc in locations:
            adj.setdefault(loc, ())

        homes: dict[str, tuple[str, ...]] = {}
        home_of: dict[str, str] = {}
        for loc, found in treasure_homes.items():
            check_location(loc, "Treasure home")
            found = tuple(dict.fromkeys(found))
            for t in found:
                check_treasure(t, f"Treasure list of {loc}")
                if t in home_of:
                    raise MalformedProblem(
                        f"Treasure {t!r} has two homes: {home_of[t]} and {loc}")
                home_of[t] = loc
            homes[loc] = found

        fees: dict[str, tuple[str, ...]] = {}
        for loc, required in tolls.items():
            check_location(loc, "Toll")
            required = tuple(dict.fromkeys(required))
            for t in required:
                check_treasure(t, f"Toll of {loc}")
            fees[loc] = required

        # All three maps list every location, in adjacency order
        homes = {loc: homes.get(loc, ()) for loc in adj}
        fees = {loc: fees.get(loc, ()) for loc in adj}

        return cls(locations, treasures, adj, homes, fees, move_budget, start, goal)

    def with_budget(self, move_budget: int) -> 'PlanningProblem':
        """Same board, different number of moves."""
        if move_budget < 0:
            raise MalformedProblem(f"Negative move budget {move_budget}")
        return PlanningProblem(self.locations, self.treasures, self.adjacency,
                               self.treasure_homes, self.tolls, move_budget,
                               self.start, self.goal)

    def treasure_order(self) -> list[str]:
        """Treasures in home order, then the declared ones without a home."""
        order = [t for found in self.treasure_homes.values() for t in found]
        homed = set(order)
        order.extend(t for t in self.treasures if t not in homed)
        return order

    def home_of(self, treasure: str) -> Optional[str]:
        for loc, found in self.treasure_homes.items():
            if treasure in found:
                return loc
        return None


# ---------------------------------------------------------------------------
# Solver settings
# ---------------------------------------------------------------------------

@dataclass
class SolverSpec:
    """Which SAT backend to run and how chatty to be."""
    solver_name: str = "dpll"        # "dpll", "cadical", "glucose", "maple"
    debug: int = 0
    printflag: int = 0
