"""Core simulation primitives for the Gunslinger encounter simulator."""

from gunslinger_sim.sim.core.build import BUILD_FIELDS, BuildParameters
from gunslinger_sim.sim.core.rng import DiceRNG, round_half_up
from gunslinger_sim.sim.core.state import (
    MAX_CRIT_THRESHOLD,
    MIN_CRIT_THRESHOLD,
    AttackKind,
    AttackOutcome,
    AttackState,
    EncounterState,
)

__all__ = [
    # rng
    "DiceRNG",
    "round_half_up",
    # build
    "BUILD_FIELDS",
    "BuildParameters",
    # state
    "MIN_CRIT_THRESHOLD",
    "MAX_CRIT_THRESHOLD",
    "AttackKind",
    "AttackOutcome",
    "AttackState",
    "EncounterState",
]
