"""
sat_interface.py - Interface to the SAT solvers.

The built-in Davis-Putnam search (``dpll``) is the default.  The PySAT
library supplies external solvers for cross-checking and for boards too
large for the pure-Python search.

Available solvers:
  - dpll     (built-in Davis-Putnam)     - default
  - cadical  (CaDiCaL 1.9.5)             - top SAT competition performer
  - glucose  (Glucose 4.2)               - strong on industrial benchmarks
  - maple    (MapleChrono)               - SAT competition 2018 winner

Install: pip install python-sat
"""

from __future__ import annotations
import sys
import time

from pysat.solvers import Cadical195, Glucose42, MapleChrono

from adventure_satplan import dpll
from adventure_satplan.data_structures import Sat, Unsat, Failure, SolverSpec


# ── Solver dispatch ──────────────────────────────────────────────────────────

SOLVER_CLASSES = {
    'cadical': Cadical195,
    'cd195': Cadical195,
    'glucose': Glucose42,
    'g42': Glucose42,
    'maple': MapleChrono,
    'mcb': MapleChrono,
}

DEFAULT_SOLVER = 'dpll'

SOLVER_NAMES = (DEFAULT_SOLVER,) + tuple(SOLVER_CLASSES)


def _print_stats(label: str, delta: dict):
    print(f"  {label}: "
          f"decisions={delta.get('decisions', 0)} "
          f"conflicts={delta.get('conflicts', 0)} "
          f"propagations={delta.get('propagations', 0)}")


def _solve_with_pysat(solver_cls, clauses: list[list[int]], numvar: int,
                      debug: int = 0) -> tuple[int, list[int]]:
    """Run a PySAT solver on the given CNF clauses.

    Returns (status, soln) where soln is a 1-indexed assignment array:
    soln[v] = 1 if variable v is true, 0 if false.
    """
    soln = [0] * (numvar + 1)

    try:
        with solver_cls(bootstrap_with=clauses) as solver:
            result = solver.solve()
            if result:
                model = solver.get_model() or []
                # Variables absent from every clause stay true, as in dpll.
                soln = [0] + [1] * numvar
                for lit in model:
                    var = abs(lit)
                    if 1 <= var <= numvar:
                        soln[var] = 1 if lit > 0 else 0
            if debug >= 1 and hasattr(solver, 'accum_stats'):
                _print_stats("SAT search", solver.accum_stats())
            return (Sat if result else Unsat), soln
    except (RuntimeError, ValueError, TypeError) as e:
        print(f"  SAT solver error: {e}", file=sys.stderr)
        return Failure, soln


def bb_satsolve_dpll(clauses: list[list[int]], numvar: int,
                     debug: int = 0) -> tuple[int, list[int]]:
    """Solve with the built-in Davis-Putnam search."""
    stats = dpll.SearchStats()
    result = dpll.solve(clauses, numvar, stats=stats)
    if debug >= 1:
        print(f"  DPLL search: branches={stats.branches} "
              f"backtracks={stats.backtracks} "
              f"units={stats.unit_props} "
              f"pure={stats.pure_literals} "
              f"depth={stats.max_depth}")
    if result is None:
        return Unsat, [0] * (numvar + 1)
    return Sat, [0] + [1 if v else 0 for v in result[1:]]


# ── Public API ───────────────────────────────────────────────────────────────

def satsolve(clauses: list[list[int]], numvar: int,
             spec: SolverSpec | None = None) -> tuple[int, list[int]]:
    """Solve *clauses* with the solver named in *spec*.

    Returns ``(status, soln)``; ``soln`` is 1-indexed (slot 0 unused) with
    1 for true and 0 for false.
    """
    spec = spec or SolverSpec()
    key = (spec.solver_name or DEFAULT_SOLVER).lower()
    if key != DEFAULT_SOLVER and key not in SOLVER_CLASSES:
        raise ValueError(f"Unknown solver '{spec.solver_name}'")

    if spec.debug >= 2:
        print(f"  [{key}] {numvar} vars, {len(clauses)} clauses")

    start = time.time()
    if key == DEFAULT_SOLVER:
        status, soln = bb_satsolve_dpll(clauses, numvar, spec.debug)
    else:
        status, soln = _solve_with_pysat(SOLVER_CLASSES[key], clauses, numvar,
                                         spec.debug)
    if spec.debug >= 1:
        print(f"  [{key}] solved in {time.time() - start:.3f}s")
    return status, soln
