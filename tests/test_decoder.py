import pytest

from adventure_satplan.atoms import AtomRegistry
from adventure_satplan.data_structures import At, Has, Available, InternalInvariantViolation
from adventure_satplan.decoder import decode, extract_path, holdings, narrate, project


@pytest.fixture
def registry():
    # 1 At(START,0) 2 At(START,1) 3 At(GOAL,0) 4 At(GOAL,1)
    # 5 Available(key,0) 6 Available(key,1) 7 Has(key,0) 8 Has(key,1)
    return AtomRegistry(["START", "GOAL"], ["key"], 1)


def test_project_groups_by_time(registry):
    assignment = (None, True, False, False, True, True, False, False, True)
    trace = project(assignment, registry)

    assert trace == [
        (0, frozenset({At("START", 0), Available("key", 0)})),
        (1, frozenset({At("GOAL", 1), Has("key", 1)})),
    ]
    assert extract_path(trace) == ["START", "GOAL"]
    assert holdings(trace) == [[], ["key"]]


def test_project_accepts_solver_bits(registry):
    soln = [0, 1, 0, 0, 1, 0, 0, 0, 0]
    assert extract_path(project(soln, registry)) == ["START", "GOAL"]


def test_project_length_mismatch(registry):
    with pytest.raises(InternalInvariantViolation):
        project((None, True, False), registry)


def test_extract_path_needs_one_location_per_step(registry):
    both = (None, True, False, True, True, False, False, False, False)
    with pytest.raises(InternalInvariantViolation):
        extract_path(project(both, registry))

    nowhere = (None, True, False, False, False, False, False, False, False)
    with pytest.raises(InternalInvariantViolation):
        extract_path(project(nowhere, registry))


def test_narrate():
    assert narrate(["START", "A", "GOAL"]) == "START A GOAL\n"
    assert narrate(None) == "NO SOLUTION\n"


def test_decode(registry):
    assignment = (None, True, False, False, True, True, True, False, False)
    assert decode(assignment, registry) == "START GOAL\n"
    assert decode(None, registry) == "NO SOLUTION\n"
