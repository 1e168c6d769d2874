"""
dpll.py - Davis-Putnam (DPLL) satisfiability search.

Complete backtracking search with pure-literal elimination and unit
propagation.  Every recursive call works on its own immutable snapshot:
clauses are tuples of literal tuples and the valuation is a tuple indexed
1..numvar (slot 0 unused) holding True, False or None.  Binding or
propagating builds new tuples, so the true and false branches of a split
never share state.
"""

from __future__ import annotations
import sys
from dataclasses import dataclass
from typing import Iterable, Optional

Clauses = tuple[tuple[int, ...], ...]
Valuation = tuple[Optional[bool], ...]


@dataclass
class SearchStats:
    """Counters collected during one :func:`solve` call."""
    branches: int = 0
    unit_props: int = 0
    pure_literals: int = 0
    backtracks: int = 0
    max_depth: int = 0


# ── Clause-set operations ────────────────────────────────────────────────────

def normalize(clauses: Iterable[Iterable[int]]) -> Clauses:
    """Freeze *clauses*, dropping duplicate literals inside each clause."""
    return tuple(tuple(dict.fromkeys(clause)) for clause in clauses)


def has_empty_clause(clauses: Clauses) -> bool:
    for clause in clauses:
        if not clause:
            return True
    return False


def find_pure_literal(clauses: Clauses, numvar: int) -> int:
    """Return the pure literal with the lowest variable number, or 0."""
    positive = [False] * (numvar + 1)
    negative = [False] * (numvar + 1)
    for clause in clauses:
        for lit in clause:
            if lit < 0:
                negative[-lit] = True
            else:
                positive[lit] = True
    for var in range(1, numvar + 1):
        if positive[var] != negative[var]:
            return -var if negative[var] else var
    return 0


def find_unit_literal(clauses: Clauses) -> int:
    """Return the literal of the first single-literal clause, or 0."""
    for clause in clauses:
        if len(clause) == 1:
            return clause[0]
    return 0


def delete_clauses(clauses: Clauses, lit: int) -> Clauses:
    """Drop every clause containing *lit*."""
    return tuple(clause for clause in clauses if lit not in clause)


def propagate(clauses: Clauses, lit: int) -> Clauses:
    """Make *lit* true: drop satisfied clauses and strip ``-lit`` from the rest."""
    result = []
    for clause in clauses:
        if lit in clause:
            continue
        if -lit in clause:
            clause = tuple(l for l in clause if l != -lit)
        result.append(clause)
    return tuple(result)


def bind(valuation: Valuation, lit: int) -> Valuation:
    """Return a copy of *valuation* with the variable of *lit* set to satisfy it."""
    var = abs(lit)
    return valuation[:var] + (lit > 0,) + valuation[var + 1:]


def first_unbound(clauses: Clauses, valuation: Valuation) -> int:
    """Lowest unbound variable that still occurs in *clauses*, or 0."""
    occurring = {abs(lit) for clause in clauses for lit in clause}
    for var in range(1, len(valuation)):
        if valuation[var] is None and var in occurring:
            return var
    return 0


def assign_unbound(valuation: Valuation, default: bool = True) -> tuple[bool, ...]:
    """Complete a partial valuation, unbound variables taking *default*."""
    return (None,) + tuple(default if v is None else v for v in valuation[1:])


# ── Search ───────────────────────────────────────────────────────────────────

def _dp(clauses: Clauses, valuation: Valuation, numvar: int,
        stats: SearchStats, depth: int) -> Optional[Valuation]:
    stats.max_depth = max(stats.max_depth, depth)

    while True:
        if not clauses:
            return valuation
        if has_empty_clause(clauses):
            return None
        lit = find_pure_literal(clauses, numvar)
        if lit:
            stats.pure_literals += 1
            valuation = bind(valuation, lit)
            clauses = delete_clauses(clauses, lit)
            continue
        lit = find_unit_literal(clauses)
        if lit:
            stats.unit_props += 1
            valuation = bind(valuation, lit)
            clauses = propagate(clauses, lit)
            continue
        break

    var = first_unbound(clauses, valuation)
    stats.branches += 1

    result = _dp(propagate(clauses, var), bind(valuation, var),
                 numvar, stats, depth + 1)
    if result is not None:
        return result

    stats.backtracks += 1
    return _dp(propagate(clauses, -var), bind(valuation, -var),
               numvar, stats, depth + 1)


def solve(clauses: Iterable[Iterable[int]], numvar: int,
          stats: Optional[SearchStats] = None,
          default: bool = True) -> Optional[tuple[bool, ...]]:
    """Decide *clauses* over variables 1..numvar.

    Returns a total assignment (tuple of length ``numvar + 1``, slot 0 is
    ``None``) in which variables the search never bound are set to
    *default*, or ``None`` if the clauses are unsatisfiable.
    """
    frozen = normalize(clauses)
    for clause in frozen:
        for lit in clause:
            if lit == 0 or abs(lit) > numvar:
                raise ValueError(f"Literal {lit} out of range 1..{numvar}")

    if stats is None:
        stats = SearchStats()

    # One frame per split; splits never exceed the variable count.
    old_limit = sys.getrecursionlimit()
    sys.setrecursionlimit(old_limit + numvar)
    try:
        result = _dp(frozen, (None,) * (numvar + 1), numvar, stats, 0)
    finally:
        sys.setrecursionlimit(old_limit)

    if result is None:
        return None
    return assign_unbound(result, default)


def satisfies(assignment, clauses: Iterable[Iterable[int]]) -> bool:
    """True when every clause has a literal made true by *assignment*."""
    for clause in clauses:
        if not any(bool(assignment[abs(lit)]) == (lit > 0) for lit in clause):
            return False
    return True
