"""
atoms.py - Bijection between state atoms and SAT variable numbers.

Variables are numbered 1..N in enumeration order: every At atom (locations
in declared order, time ascending), then every Available atom, then every
Has atom (treasures in declared order).
"""

from __future__ import annotations
from typing import Iterator

from adventure_satplan.data_structures import Atom, Kind, PlanningProblem


class AtomRegistry:
    """Maps each :class:`Atom` of one encoding run to its variable number."""

    def __init__(self, locations, treasures, move_budget: int):
        self.move_budget = move_budget
        self._atom2var: dict[Atom, int] = {}
        self._var2atom: list[Atom | None] = [None]  # 1-indexed

        for loc in locations:
            self._add_series(Kind.AT, loc)
        for t in treasures:
            self._add_series(Kind.AVAILABLE, t)
        for t in treasures:
            self._add_series(Kind.HAS, t)

    @classmethod
    def for_problem(cls, problem: PlanningProblem) -> 'AtomRegistry':
        return cls(problem.locations, problem.treasures, problem.move_budget)

    def _add_series(self, kind: Kind, name: str):
        for time in range(self.move_budget + 1):
            atom = Atom(kind, name, time)
            if atom in self._atom2var:
                continue
            self._var2atom.append(atom)
            self._atom2var[atom] = len(self._var2atom) - 1

    # --- lookups -----------------------------------------------------------

    def id_of(self, kind: Kind, name: str, time: int) -> int:
        return self._atom2var[Atom(kind, name, time)]

    def var(self, atom: Atom) -> int:
        return self._atom2var[atom]

    def atom_of(self, var: int) -> Atom:
        if var < 1 or var >= len(self._var2atom):
            raise KeyError(var)
        return self._var2atom[var]

    @property
    def count(self) -> int:
        return len(self._var2atom) - 1

    def __len__(self) -> int:
        return self.count

    def __contains__(self, atom: Atom) -> bool:
        return atom in self._atom2var

    def __iter__(self) -> Iterator[tuple[int, Atom]]:
        for var in range(1, len(self._var2atom)):
            yield var, self._var2atom[var]

    def literal_str(self, lit: int) -> str:
        """Symbolic form of a signed literal, e.g. ``-At(A,0)``."""
        atom = self.atom_of(abs(lit))
        return f"-{atom}" if lit < 0 else str(atom)
