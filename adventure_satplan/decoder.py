"""
decoder.py - Map a SAT solution back onto the game.

``project`` inverts the atom registry to list the true atoms of each time
step; ``extract_path`` and ``narrate`` turn that trace into the route the
player walks.
"""

from __future__ import annotations
from typing import Optional

from adventure_satplan.atoms import AtomRegistry
from adventure_satplan.data_structures import (
    Atom, Kind, InternalInvariantViolation, NO_SOLUTION,
)

Trace = list[tuple[int, frozenset[Atom]]]


def project(assignment, registry: AtomRegistry) -> Trace:
    """Group the atoms made true by *assignment* by time step.

    *assignment* is 1-indexed (slot 0 unused) and must cover exactly the
    registry's variables.
    """
    if len(assignment) != registry.count + 1:
        raise InternalInvariantViolation(
            f"Assignment covers {len(assignment) - 1} variables, "
            f"registry has {registry.count}")

    steps: list[set[Atom]] = [set() for _ in range(registry.move_budget + 1)]
    for var, atom in registry:
        if assignment[var]:
            steps[atom.time].add(atom)
    return [(t, frozenset(facts)) for t, facts in enumerate(steps)]


def extract_path(trace: Trace) -> list[str]:
    """The location occupied at each step of *trace*."""
    path = []
    for t, facts in trace:
        here = sorted(a.name for a in facts if a.kind is Kind.AT)
        if len(here) != 1:
            raise InternalInvariantViolation(
                f"Step {t}: expected one location, found {here or 'none'}")
        path.append(here[0])
    return path


def holdings(trace: Trace) -> list[list[str]]:
    """Treasures held at each step of *trace*."""
    return [sorted(a.name for a in facts if a.kind is Kind.HAS)
            for _, facts in trace]


def narrate(path: Optional[list[str]]) -> str:
    """One line naming the visited locations, or the no-solution message."""
    if path is None:
        return NO_SOLUTION + "\n"
    return " ".join(path) + "\n"


def decode(assignment, registry: AtomRegistry) -> str:
    """Full back-end: assignment (or None) to solution text."""
    if assignment is None:
        return narrate(None)
    return narrate(extract_path(project(assignment, registry)))
