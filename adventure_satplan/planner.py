"""
planner.py - Encode, solve and decode one board.

Runs the encode, solve and decode phases in one process; the file-based
variant of the same pipeline lives in ``main``.
"""

from __future__ import annotations
import time as time_mod
from dataclasses import dataclass
from typing import Optional

from adventure_satplan.atoms import AtomRegistry
from adventure_satplan.data_structures import (
    PlanningProblem, SolverSpec, Sat, STATUS_NAMES,
    PrintModel,
)
from adventure_satplan.decoder import project, extract_path, holdings, Trace
from adventure_satplan.encoder import AdventureEncoder
from adventure_satplan.sat_interface import satsolve


@dataclass
class PlanResult:
    """Outcome of one planning run."""
    status: int
    registry: AtomRegistry
    clauses: list[list[int]]
    assignment: Optional[tuple[bool, ...]] = None
    trace: Optional[Trace] = None
    path: Optional[list[str]] = None
    encode_sec: float = 0.0
    solve_sec: float = 0.0

    @property
    def solved(self) -> bool:
        return self.status == Sat


class Planner:
    """Runs the whole pipeline for a board at its move budget."""

    def __init__(self, problem: PlanningProblem, spec: SolverSpec | None = None):
        self.problem = problem
        self.spec = spec or SolverSpec()
        self.encoder: AdventureEncoder | None = None

    def encode(self) -> tuple[list[list[int]], AtomRegistry]:
        self.encoder = AdventureEncoder(self.problem, printflag=self.spec.printflag)
        clauses, numvar, numclause = self.encoder.encode()
        if self.spec.debug >= 1:
            print(f"Move budget {self.problem.move_budget}: "
                  f"{numvar} vars, {numclause} clauses")
            if self.spec.debug >= 2:
                self.encoder.print_category_counts()
        return clauses, self.encoder.registry

    def run(self) -> PlanResult:
        start = time_mod.time()
        clauses, registry = self.encode()
        encode_sec = time_mod.time() - start

        start = time_mod.time()
        status, soln = satsolve(clauses, registry.count, self.spec)
        solve_sec = time_mod.time() - start

        result = PlanResult(status, registry, clauses,
                            encode_sec=encode_sec, solve_sec=solve_sec)
        if self.spec.debug >= 1:
            print(f"  {STATUS_NAMES.get(status, status)} "
                  f"(encode {encode_sec:.3f}s, solve {solve_sec:.3f}s)")
        if status != Sat:
            return result

        result.assignment = (None,) + tuple(bool(v) for v in soln[1:])
        result.trace = project(result.assignment, registry)
        result.path = extract_path(result.trace)

        if self.spec.printflag & PrintModel:
            for (t, facts), here, held in zip(result.trace, result.path,
                                              holdings(result.trace)):
                print(f"  {t}: {here} holding " + (" ".join(held) or "nothing"))
                print("     " + " ".join(sorted(str(a) for a in facts)))
        return result


def plan(problem: PlanningProblem, spec: SolverSpec | None = None) -> PlanResult:
    return Planner(problem, spec).run()
