#!/usr/bin/env python3
"""
run_budget_experiments.py

Sweep the move budget of one or more adventure boards, encode and solve each
budget, print the per-family clause counts and plot clause and solve-time
trends against the budget.

Expected directory layout:
  boards/
    <name>.txt
    ...

Example:
  python run_budget_experiments.py --root boards --max_budget 8
"""

from __future__ import annotations

import argparse
import glob
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt

from adventure_satplan.board import load_board
from adventure_satplan.data_structures import SolverSpec, STATUS_NAMES, Sat
from adventure_satplan.decoder import narrate
from adventure_satplan.encoder import CATEGORIES
from adventure_satplan.planner import Planner


Series = Tuple[List[int], List[float]]


@dataclass
class BudgetRun:
    budget: int
    numvar: int
    numclause: int
    category_counts: Dict[str, int]
    status: int
    solve_sec: float
    path: Optional[List[str]] = None


@dataclass
class BoardSweep:
    name: str
    runs: List[BudgetRun] = field(default_factory=list)

    def series(self, key) -> Series:
        return [r.budget for r in self.runs], [key(r) for r in self.runs]


def discover_boards(root: str, pattern: str = "*.txt") -> List[str]:
    """Board files directly under ROOT."""
    return sorted(p for p in glob.glob(os.path.join(root, pattern))
                  if os.path.isfile(p))


def sweep_board(path: str, max_budget: int, spec: SolverSpec) -> BoardSweep:
    """Encode and solve *path* at every budget 0..max_budget."""
    problem = load_board(path)
    sweep = BoardSweep(os.path.splitext(os.path.basename(path))[0])

    for budget in range(max_budget + 1):
        planner = Planner(problem.with_budget(budget), spec)
        result = planner.run()
        enc = planner.encoder
        sweep.runs.append(BudgetRun(
            budget=budget,
            numvar=enc.numvar,
            numclause=enc.numclause,
            category_counts=dict(enc.category_counts),
            status=result.status,
            solve_sec=result.solve_sec,
            path=result.path,
        ))

        print(f"Move budget: {budget}")
        enc.print_category_counts()
        print(f"  Result:        {STATUS_NAMES.get(result.status, result.status)}"
              f"  ({result.solve_sec:.3f}s)")
        if result.status == Sat:
            print("  Path:          " + narrate(result.path), end="")
        print()

    return sweep


def _finish_axes(fig, ax, title: str, ylabel: str, outpath: Optional[str]) -> None:
    ax.set_xlabel("Move budget")
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    if ax.get_legend_handles_labels()[1]:
        ax.legend(loc="best", fontsize="small")
    fig.tight_layout()
    if outpath:
        fig.savefig(outpath, dpi=200)
    plt.close(fig)


def plot_board_trend(
    sweeps: List[BoardSweep],
    key,
    title: str,
    ylabel: str,
    outpath: Optional[str],
) -> None:
    """One line per board of key(run) against the budget."""
    fig, ax = plt.subplots()
    for sweep in sweeps:
        budgets, values = sweep.series(key)
        ax.plot(budgets, values, marker="o", label=sweep.name)
    _finish_axes(fig, ax, title, ylabel, outpath)


def plot_family_mix(sweep: BoardSweep, outpath: Optional[str]) -> None:
    """Stacked clause counts per axiom family for one board."""
    fig, ax = plt.subplots()
    budgets = [r.budget for r in sweep.runs]
    bottom = [0] * len(budgets)
    for name in CATEGORIES:
        counts = [r.category_counts.get(name, 0) for r in sweep.runs]
        if not any(counts):
            continue
        ax.bar(budgets, counts, bottom=bottom, label=name)
        bottom = [b + c for b, c in zip(bottom, counts)]
    _finish_axes(fig, ax, f"Clauses per Axiom Family ({sweep.name})", "Clauses", outpath)


def main() -> None:
    ap = argparse.ArgumentParser(description="Sweep move budgets and plot clause/solve-time trends.")
    ap.add_argument("--root", required=True, help="Folder containing board files.")
    ap.add_argument("--board_glob", default="*.txt", help="Board filename glob within ROOT.")
    ap.add_argument("--max_budget", type=int, default=8)
    ap.add_argument("--solver", default="dpll")
    ap.add_argument("--outdir", default="plots")
    args = ap.parse_args()

    os.makedirs(args.outdir, exist_ok=True)

    boards = discover_boards(args.root, pattern=args.board_glob)
    if not boards:
        raise SystemExit(f"No boards found under {args.root} matching {args.board_glob}.")

    spec = SolverSpec(solver_name=args.solver)
    sweeps = []
    for path in boards:
        sweep = sweep_board(path, args.max_budget, spec)
        sweeps.append(sweep)
        solved = [r.budget for r in sweep.runs if r.status == Sat]
        print(f"[OK] {sweep.name}: solvable budgets {solved or 'none'}")
        plot_family_mix(sweep, os.path.join(args.outdir, f"families_{sweep.name}.png"))

    plot_board_trend(sweeps, lambda r: r.numclause,
                     title="Clauses vs Move Budget (by board)", ylabel="Clauses",
                     outpath=os.path.join(args.outdir, "clauses_by_board.png"))
    plot_board_trend(sweeps, lambda r: r.solve_sec,
                     title="Solve Time vs Move Budget (by board)", ylabel="Seconds",
                     outpath=os.path.join(args.outdir, "solve_time_by_board.png"))


if __name__ == "__main__":
    main()
