"""
main.py - Command-line driver.

Usage:
    adventure-satplan run <board> [-s] [-solver <name>] [-outdir <dir>]
    adventure-satplan encode <board> [-s] [-dimacs <file>] [-outdir <dir>]
    adventure-satplan solve [-solver <name>] [-outdir <dir>]
    adventure-satplan decode [-outdir <dir>]

Each phase reads and writes the files under the output directory, so the
phases can run as separate processes:

    encode -> davis_putnam_input.txt (+ symbolic_clauses.txt with -s)
    solve  -> davis_putnam_output.txt
    decode -> solution.txt
"""

from __future__ import annotations
import argparse
import os
import sys

from adventure_satplan.board import load_board
from adventure_satplan.cnf_io import (
    symbolic_clauses, key_to_string, clauses_to_string, parse_clauses,
    solution_to_string, parse_solution, to_dimacs,
)
from adventure_satplan.data_structures import (
    SolverSpec, MalformedProblem, Sat, Failure,
    DEFAULT_OUTDIR, DAVIS_PUTNAM_INPUT, DAVIS_PUTNAM_OUTPUT,
    SYMBOLIC_CLAUSES, SOLUTION,
)
from adventure_satplan.decoder import decode
from adventure_satplan.planner import Planner
from adventure_satplan.sat_interface import satsolve, SOLVER_NAMES, DEFAULT_SOLVER


def _write(path: str, content: str):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def _read(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _spec(args) -> SolverSpec:
    return SolverSpec(solver_name=getattr(args, "solver", DEFAULT_SOLVER),
                      debug=args.debug, printflag=args.printflag)


# ── Phases ───────────────────────────────────────────────────────────────────

def do_encode(args) -> int:
    problem = load_board(args.board)
    planner = Planner(problem, _spec(args))
    clauses, registry = planner.encode()

    _write(os.path.join(args.outdir, DAVIS_PUTNAM_INPUT),
           clauses_to_string(clauses, registry))
    if args.s:
        _write(os.path.join(args.outdir, SYMBOLIC_CLAUSES),
               symbolic_clauses(clauses, registry) + key_to_string(registry))
    if args.dimacs:
        _write(args.dimacs, to_dimacs(clauses, registry.count))
    return 0


def do_solve(args) -> int:
    clauses, registry = parse_clauses(_read(os.path.join(args.outdir, DAVIS_PUTNAM_INPUT)))
    status, soln = satsolve(clauses, registry.count, _spec(args))
    if status == Failure:
        print(f"Solver {args.solver} failed", file=sys.stderr)
        return 2
    assignment = None
    if status == Sat:
        assignment = (None,) + tuple(bool(v) for v in soln[1:])
    _write(os.path.join(args.outdir, DAVIS_PUTNAM_OUTPUT),
           solution_to_string(assignment, registry))
    return 0


def do_decode(args) -> int:
    assignment, registry = parse_solution(_read(os.path.join(args.outdir, DAVIS_PUTNAM_OUTPUT)))
    text = decode(assignment, registry)
    _write(os.path.join(args.outdir, SOLUTION), text)
    print(text, end="")
    return 0


def do_run(args) -> int:
    for phase in (do_encode, do_solve, do_decode):
        rc = phase(args)
        if rc != 0:
            return rc
    return 0


# ── Argument parsing ─────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adventure-satplan",
        description="Solve adventure-game boards by reduction to SAT")
    sub = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('-outdir', default=DEFAULT_OUTDIR,
                        help="directory for the phase files")
    common.add_argument('-debug', type=int, default=0)
    common.add_argument('-printflag', type=int, default=0,
                        help="bit mask: 1 numeric clauses, 2 symbolic clauses, "
                             "8 variable map, 16 model")

    def add_board(p):
        p.add_argument('board', help="board description file")
        p.add_argument('-s', action='store_true',
                       help="also write the symbolic clauses")
        p.add_argument('-dimacs', default=None, help="also write DIMACS here")

    def add_solver(p):
        p.add_argument('-solver', default=DEFAULT_SOLVER, choices=SOLVER_NAMES)

    p = sub.add_parser('run', parents=[common], help="encode, solve and decode")
    add_board(p)
    add_solver(p)
    p.set_defaults(func=do_run)

    p = sub.add_parser('encode', parents=[common], help="board -> clauses")
    add_board(p)
    p.set_defaults(func=do_encode)

    p = sub.add_parser('solve', parents=[common], help="clauses -> assignment")
    add_solver(p)
    p.set_defaults(func=do_solve)

    p = sub.add_parser('decode', parents=[common], help="assignment -> path")
    p.set_defaults(func=do_decode)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except MalformedProblem as e:
        print(f"Malformed input: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"Missing file: {e.filename}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
