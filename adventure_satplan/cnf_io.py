"""
cnf_io.py - Text formats passed between the encode, solve and decode phases.

Clause-plus-key file (encode -> solve)::

    -1 -4
    ...
    0
     1 At(START,0)
     2 At(START,1)
    ...

Solver output file (solve -> decode): when satisfiable, one ``N T|F`` line
per variable, followed by the key section exactly as above.  When
unsatisfiable only the key section is written.
"""

from __future__ import annotations
import re
from typing import Optional

from adventure_satplan.atoms import AtomRegistry
from adventure_satplan.data_structures import (
    Atom, Kind, MalformedProblem, KEY_SEPARATOR,
)

# The time is after the last comma; names may hold commas or parentheses.
_ATOM_RE = re.compile(r"^(At|Available|Has)\((.+),(\d+)\)$")
_KINDS = {k.value: k for k in Kind}


# ── Symbolic clauses ─────────────────────────────────────────────────────────

def symbolic_clauses(clauses: list[list[int]], registry: AtomRegistry) -> str:
    """Human-readable clauses, one per line: ``-At(A,0) -At(B,0)``."""
    lines = [" ".join(registry.literal_str(lit) for lit in clause)
             for clause in clauses]
    return "".join(line + "\n" for line in lines)


def parse_atom(text: str) -> Atom:
    m = _ATOM_RE.match(text.strip())
    if m is None:
        raise MalformedProblem(f"Not an atom: {text!r}")
    return Atom(_KINDS[m.group(1)], m.group(2), int(m.group(3)))


# ── Key ──────────────────────────────────────────────────────────────────────

def key_to_string(registry: AtomRegistry) -> str:
    """The variable-number to atom table, right-aligned numbers."""
    width = len(str(registry.count))
    lines = [KEY_SEPARATOR]
    lines.extend(f"{var:>{width}} {atom}" for var, atom in registry)
    return "\n".join(lines) + "\n"


def parse_key(lines: list[str]) -> AtomRegistry:
    """Rebuild the registry from key lines (separator line excluded).

    Variable numbers must run 1..N in order; the atoms must form the
    At / Available / Has enumeration of some board.
    """
    atoms: list[Atom] = []
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        parts = line.split()
        if len(parts) != 2 or not parts[0].isdigit():
            raise MalformedProblem(f"Key line {lineno}: {line.strip()!r}")
        if int(parts[0]) != len(atoms) + 1:
            raise MalformedProblem(
                f"Key line {lineno}: expected variable {len(atoms) + 1}, got {parts[0]}")
        atoms.append(parse_atom(parts[1]))

    locations = list(dict.fromkeys(a.name for a in atoms if a.kind is Kind.AT))
    treasures = list(dict.fromkeys(a.name for a in atoms if a.kind is Kind.AVAILABLE))
    move_budget = max((a.time for a in atoms), default=0)
    registry = AtomRegistry(locations, treasures, move_budget)
    if [atom for _, atom in registry] != atoms:
        raise MalformedProblem("Key does not enumerate a board's atoms in order")
    return registry


# ── Clause-plus-key file ─────────────────────────────────────────────────────

def clauses_to_string(clauses: list[list[int]], registry: AtomRegistry) -> str:
    body = "".join(" ".join(str(lit) for lit in clause) + "\n" for clause in clauses)
    return body + key_to_string(registry)


def _split_at_separator(text: str) -> tuple[list[str], list[str]]:
    lines = text.splitlines()
    for i, line in enumerate(lines):
        if line.strip() == KEY_SEPARATOR:
            return lines[:i], lines[i + 1:]
    raise MalformedProblem(f"Missing '{KEY_SEPARATOR}' separator line")


def parse_clauses(text: str) -> tuple[list[list[int]], AtomRegistry]:
    """Read a clause-plus-key file back into clauses and registry."""
    head, key = _split_at_separator(text)
    registry = parse_key(key)
    clauses: list[list[int]] = []
    for lineno, line in enumerate(head, start=1):
        try:
            clause = [int(tok) for tok in line.split()]
        except ValueError:
            raise MalformedProblem(f"Clause line {lineno}: {line.strip()!r}") from None
        for lit in clause:
            if lit == 0 or abs(lit) > registry.count:
                raise MalformedProblem(f"Clause line {lineno}: literal {lit} out of range")
        clauses.append(clause)
    return clauses, registry


# ── Solver output file ───────────────────────────────────────────────────────

def solution_to_string(assignment, registry: AtomRegistry) -> str:
    """Render ``N T|F`` lines (if *assignment* is not None) followed by the key."""
    lines = []
    if assignment is not None:
        width = len(str(len(assignment)))
        for var in range(1, len(assignment)):
            lines.append(f"{var:>{width}} {'T' if assignment[var] else 'F'}\n")
    return "".join(lines) + key_to_string(registry)


def parse_solution(text: str) -> tuple[Optional[tuple[bool, ...]], AtomRegistry]:
    """Read a solver output file; the assignment is None when unsatisfiable."""
    head, key = _split_at_separator(text)
    registry = parse_key(key)
    values: list[bool] = []
    for lineno, line in enumerate(head, start=1):
        parts = line.split()
        if not parts:
            continue
        if (len(parts) != 2 or parts[1] not in ("T", "F")
                or not parts[0].isdigit() or int(parts[0]) != len(values) + 1):
            raise MalformedProblem(f"Solution line {lineno}: {line.strip()!r}")
        values.append(parts[1] == "T")
    if not values:
        return None, registry
    return (None,) + tuple(values), registry


# ── DIMACS output ────────────────────────────────────────────────────────────

def to_dimacs(clauses: list[list[int]], numvar: int) -> str:
    """Return the CNF formula as a DIMACS-format string."""
    lines = [f"p cnf {numvar} {len(clauses)}"]
    for clause in clauses:
        lines.append(' '.join(str(lit) for lit in clause) + ' 0')
    return '\n'.join(lines) + '\n'
