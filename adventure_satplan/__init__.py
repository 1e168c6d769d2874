"""Adventure-game planning by reduction to SAT."""

from adventure_satplan.atoms import AtomRegistry
from adventure_satplan.board import load_board, parse_board
from adventure_satplan.data_structures import (
    Atom, Kind, At, Available, Has,
    PlanningProblem, SolverSpec,
    MalformedProblem, InternalInvariantViolation,
)
from adventure_satplan.decoder import project, extract_path, narrate
from adventure_satplan.dpll import solve
from adventure_satplan.encoder import AdventureEncoder, encode

__version__ = "0.1.0"
