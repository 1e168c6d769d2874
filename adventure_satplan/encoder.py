"""
encoder.py - SAT encoding of the adventure game.

Compiles a :class:`PlanningProblem` into a CNF formula in clause-list form
over time-indexed atoms At(location, t), Available(treasure, t) and
Has(treasure, t), t = 0 .. move budget.  Thirteen axiom families are
emitted, always in the same order:

   1. at most one location per step
   2. a held treasure is not available
   3. moves follow the maze edges
   4. entering a toll location needs the toll treasure one step earlier
   5. arriving home while a treasure is available picks it up
   6. a toll treasure is spent on arrival
   7. visiting elsewhere keeps a treasure available
   8. unavailable stays unavailable
   9. holding needs an earlier hold or pickup
  10. visiting a toll location that does not ask for a treasure keeps it
  11. start at START
  12. every treasure starts available
  13. end at GOAL
"""

from __future__ import annotations

from adventure_satplan.atoms import AtomRegistry
from adventure_satplan.data_structures import (
    PlanningProblem, Kind,
    PrintLit, PrintCNF, PrintMap,
)


# ── Axiom families ───────────────────────────────────────────────────────────

CATEGORIES = (
    "position_mutex",
    "has_available_mutex",
    "movement",
    "toll_gating",
    "pickup",
    "toll_consumption",
    "available_frame",
    "available_decay",
    "has_decay",
    "has_frame",
    "initial_position",
    "initial_available",
    "goal",
)

AT = Kind.AT
AVAILABLE = Kind.AVAILABLE
HAS = Kind.HAS


class AdventureEncoder:
    """Encodes an adventure-game board as a CNF SAT formula."""

    def __init__(self, problem: PlanningProblem, printflag: int = 0):
        self.problem = problem
        self.printflag = printflag
        self.registry = AtomRegistry.for_problem(problem)

        self.numvar: int = self.registry.count
        self.numclause: int = 0
        self.clauses: list[list[int]] = []
        self.category_counts: dict[str, int] = {}

    # ── Main entry point ─────────────────────────────────────────────────

    def encode(self) -> tuple[list[list[int]], int, int]:
        """Encode the board to CNF.

        Returns ``(clauses, numvar, numclause)`` where each clause is a
        list of integer literals (positive or negative variable numbers).
        """
        self.clauses = []
        self.category_counts = {}

        generators = (
            self._generate_position_mutex,
            self._generate_has_available_mutex,
            self._generate_movement,
            self._generate_toll_gating,
            self._generate_pickup,
            self._generate_toll_consumption,
            self._generate_available_frame,
            self._generate_available_decay,
            self._generate_has_decay,
            self._generate_has_frame,
            self._generate_initial_position,
            self._generate_initial_available,
            self._generate_goal,
        )
        for name, generate in zip(CATEGORIES, generators):
            before = len(self.clauses)
            generate()
            self.category_counts[name] = len(self.clauses) - before

        self.numclause = len(self.clauses)

        if self.printflag & PrintMap:
            self.print_variable_map()
        if self.printflag & PrintLit:
            for clause in self.clauses:
                print("  " + " ".join(str(lit) for lit in clause))
        if self.printflag & PrintCNF:
            for clause in self.clauses:
                print("  " + " ".join(self.registry.literal_str(lit) for lit in clause))

        return self.clauses, self.numvar, self.numclause

    # ── Literal helpers ──────────────────────────────────────────────────

    def _pos(self, kind: Kind, name: str, time: int) -> int:
        return self.registry.id_of(kind, name, time)

    def _neg(self, kind: Kind, name: str, time: int) -> int:
        return -self.registry.id_of(kind, name, time)

    def _add(self, *lits: int):
        # Duplicate literals collapse; order of first occurrence is kept.
        self.clauses.append(list(dict.fromkeys(lits)))

    # ── Axiom generators ─────────────────────────────────────────────────

    def _generate_position_mutex(self):
        """(NOT At(a,i)) OR (NOT At(b,i)) for every pair a != b."""
        nodes = list(self.problem.adjacency)
        for i in range(self.problem.move_budget + 1):
            for j in range(len(nodes) - 1):
                for k in range(j + 1, len(nodes)):
                    self._add(self._neg(AT, nodes[j], i),
                              self._neg(AT, nodes[k], i))

    def _generate_has_available_mutex(self):
        """(NOT Has(t,i)) OR (NOT Available(t,i))."""
        for t in self.problem.treasure_order():
            for i in range(self.problem.move_budget + 1):
                self._add(self._neg(HAS, t, i), self._neg(AVAILABLE, t, i))

    def _generate_movement(self):
        """(NOT At(a,i)) OR At(n1,i+1) OR At(n2,i+1) OR ..."""
        for node, neighbours in self.problem.adjacency.items():
            for i in range(self.problem.move_budget):
                self._add(self._neg(AT, node, i),
                          *(self._pos(AT, n, i + 1) for n in neighbours))

    def _generate_toll_gating(self):
        """(NOT At(a,i)) OR Has(t,i-1) for each toll t of a."""
        for node, fees in self.problem.tolls.items():
            for t in fees:
                for i in range(1, self.problem.move_budget + 1):
                    self._add(self._neg(AT, node, i), self._pos(HAS, t, i - 1))

    def _generate_pickup(self):
        """(NOT Available(t,i)) OR (NOT At(home,i+1)) OR Has(t,i+1)."""
        for home, found in self.problem.treasure_homes.items():
            for t in found:
                for i in range(self.problem.move_budget):
                    self._add(self._neg(AVAILABLE, t, i),
                              self._neg(AT, home, i + 1),
                              self._pos(HAS, t, i + 1))

    def _generate_toll_consumption(self):
        """(NOT At(a,i)) OR (NOT Has(t,i)) for each toll t of a."""
        for node, fees in self.problem.tolls.items():
            for t in fees:
                for i in range(self.problem.move_budget + 1):
                    self._add(self._neg(AT, node, i), self._neg(HAS, t, i))

    def _generate_available_frame(self):
        """(NOT Available(t,i)) OR (NOT At(b,i+1)) OR Available(t,i+1), b not home."""
        budget = self.problem.move_budget
        for t in self.problem.treasure_order():
            home = self.problem.home_of(t)
            for node in self.problem.adjacency:
                if node == home:
                    continue
                for i in range(budget):
                    self._add(self._neg(AVAILABLE, t, i),
                              self._neg(AT, node, i + 1),
                              self._pos(AVAILABLE, t, i + 1))

    def _generate_available_decay(self):
        """Available(t,i) OR (NOT Available(t,i+1))."""
        for t in self.problem.treasure_order():
            for i in range(self.problem.move_budget):
                self._add(self._pos(AVAILABLE, t, i),
                          self._neg(AVAILABLE, t, i + 1))

    def _generate_has_decay(self):
        """Available(t,i) OR Has(t,i) OR (NOT Has(t,i+1))."""
        for t in self.problem.treasure_order():
            for i in range(self.problem.move_budget):
                self._add(self._pos(AVAILABLE, t, i),
                          self._pos(HAS, t, i),
                          self._neg(HAS, t, i + 1))

    def _generate_has_frame(self):
        """(NOT Has(t,i)) OR (NOT At(a,i+1)) OR Has(t,i+1), toll a not asking t."""
        for t in self.problem.treasure_order():
            for node, fees in self.problem.tolls.items():
                if t in fees:
                    continue
                for i in range(self.problem.move_budget):
                    self._add(self._neg(HAS, t, i),
                              self._neg(AT, node, i + 1),
                              self._pos(HAS, t, i + 1))

    # ── Initial / goal state ─────────────────────────────────────────────

    def _generate_initial_position(self):
        self._add(self._pos(AT, self.problem.start, 0))

    def _generate_initial_available(self):
        for t in self.problem.treasure_order():
            self._add(self._pos(AVAILABLE, t, 0))

    def _generate_goal(self):
        self._add(self._pos(AT, self.problem.goal, self.problem.move_budget))

    # ── Reporting ────────────────────────────────────────────────────────

    def print_category_counts(self):
        """Print the number of clauses emitted by each axiom family."""
        print(f"  Vars:          {self.numvar:>6,}")
        print(f"  Total Clauses: {self.numclause:>6,}")
        for name in CATEGORIES:
            print(f"  {name + ':':<22}{self.category_counts.get(name, 0):>6,}")

    def print_variable_map(self):
        """Print the mapping from variable numbers to atoms."""
        for var, atom in self.registry:
            print(f"  {var}: {atom}")


def encode(problem: PlanningProblem, printflag: int = 0) -> tuple[list[list[int]], AtomRegistry]:
    """Encode *problem*; returns the clause list and the atom registry."""
    enc = AdventureEncoder(problem, printflag=printflag)
    clauses, _, _ = enc.encode()
    return clauses, enc.registry
