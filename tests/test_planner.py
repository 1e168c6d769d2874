import pytest

from adventure_satplan.data_structures import (
    PlanningProblem, SolverSpec, Sat, Unsat, At, Available, Has, PrintModel,
)
from adventure_satplan.dpll import satisfies, solve
from adventure_satplan.encoder import encode
from adventure_satplan.planner import Planner, plan
from adventure_satplan.sat_interface import satsolve


def check_walk(problem, path):
    assert len(path) == problem.move_budget + 1
    assert path[0] == problem.start
    assert path[-1] == problem.goal
    for here, there in zip(path, path[1:]):
        assert there in problem.adjacency[here]


def test_direct_connection(corridor):
    clauses, registry = encode(corridor)
    result = solve(clauses, registry.count)

    assert result is not None
    assert result[registry.var(At("START", 0))] is True
    assert result[registry.var(At("GOAL", 1))] is True


def test_disconnected_is_unsat():
    problem = PlanningProblem.build(
        ["START", "GOAL"], [],
        {"START": ["START"], "GOAL": ["GOAL"]}, move_budget=1)
    clauses, registry = encode(problem)

    assert solve(clauses, registry.count) is None
    assert plan(problem).status == Unsat


def test_unreachable_toll_treasure_is_unsat():
    problem = PlanningProblem.build(
        ["START", "VAULT", "GOAL"], ["key"],
        {"START": ["START", "GOAL"], "VAULT": ["START"], "GOAL": ["GOAL"]},
        treasure_homes={"VAULT": ["key"]},
        tolls={"GOAL": ["key"]},
        move_budget=3)
    clauses, registry = encode(problem)

    assert solve(clauses, registry.count) is None


def test_budget_zero_start_is_goal():
    problem = PlanningProblem.build(
        ["HOME"], [], {"HOME": []}, move_budget=0, start="HOME", goal="HOME")
    clauses, registry = encode(problem)

    assert clauses == [[1], [1]]
    assert solve(clauses, registry.count) == (None, True)


def test_budget_zero_distinct_start_and_goal(corridor):
    assert plan(corridor.with_budget(0)).status == Unsat


def test_toll_maze_path(toll_maze):
    result = plan(toll_maze)

    assert result.status == Sat
    assert result.solved
    assert result.path == ["START", "A", "START", "B", "GOAL"]
    assert satisfies(result.assignment, result.clauses)
    # ruby picked up at A, spent on entering B
    t1 = dict(result.trace)[1]
    assert Has("ruby", 1) in t1
    assert Has("ruby", 3) not in dict(result.trace)[3]


def test_toll_maze_too_short(toll_maze):
    for budget in range(4):
        assert plan(toll_maze.with_budget(budget)).status == Unsat


def test_two_keys(two_keys):
    result = plan(two_keys)

    assert result.status == Sat
    check_walk(two_keys, result.path)
    # GOAL charges silver on every step spent there
    assert result.path.index("GOAL") == two_keys.move_budget
    assert satisfies(result.assignment, result.clauses)


def test_availability_never_returns(two_keys):
    result = plan(two_keys)
    registry = result.registry
    a = result.assignment

    for t in two_keys.treasures:
        for i in range(two_keys.move_budget):
            if not a[registry.var(Available(t, i))]:
                assert not a[registry.var(Available(t, i + 1))]


def test_plan_is_deterministic(two_keys):
    first = plan(two_keys)
    second = plan(two_keys)

    assert first.clauses == second.clauses
    assert first.assignment == second.assignment


@pytest.mark.parametrize("solver", ["cadical", "glucose", "maple"])
def test_external_solvers_agree(two_keys, solver):
    spec = SolverSpec(solver_name=solver)
    for budget in range(two_keys.move_budget + 1):
        problem = two_keys.with_budget(budget)
        ours = plan(problem)
        theirs = plan(problem, spec)

        assert ours.status == theirs.status
        if theirs.status == Sat:
            check_walk(problem, theirs.path)
            assert satisfies(theirs.assignment, theirs.clauses)


def test_satsolve_statuses():
    assert satsolve([[1], [-1]], 1) == (Unsat, [0, 0])
    assert satsolve([[-2], [1, 2]], 2) == (Sat, [0, 1, 0])
    assert satsolve([[-2], [1, 2]], 2, SolverSpec(solver_name="cadical")) == (Sat, [0, 1, 0])
    assert satsolve([[1], [-1]], 1, SolverSpec(solver_name="g42"))[0] == Unsat
    # variables no clause mentions default to true
    assert satsolve([[1]], 3) == (Sat, [0, 1, 1, 1])


def test_satsolve_unknown_solver():
    with pytest.raises(ValueError):
        satsolve([[1]], 1, SolverSpec(solver_name="walksat"))


def test_debug_output(toll_maze, capsys):
    Planner(toll_maze, SolverSpec(debug=2, printflag=PrintModel)).run()
    out = capsys.readouterr().out

    assert "Move budget 4: 30 vars" in out
    assert "position_mutex:" in out
    assert "DPLL search:" in out
    assert "SAT" in out
    assert "At(GOAL,4)" in out
    assert "  1: A holding ruby\n" in out
    assert "  4: GOAL holding nothing\n" in out
