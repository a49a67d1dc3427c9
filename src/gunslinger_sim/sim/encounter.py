"""Encounter orchestration -- one full simulated fight for a build.

Provides:

- **Variant** / **VariantRules**: which optional mechanics are switched on.
  The baseline simulator is the grit simulator with every hook disabled.
- **simulate_encounter**: setup, opening quick-draw, then ``round_count``
  rounds of three attacks plus the Frontier Justice proc.

Assumptions baked into the grit variant:

- Three attacks per round (Pistolero), the third without the ability
  modifier to damage.
- AC varies per encounter around the row's base AC with SD 1.
- Grit starts at Wisdom modifier + 1, halved half the time to stand in for
  several fights per short rest.
- Ace in the Hole is always used when grit is available.
- High Noon hits an average of 3 targets (SD 1) from level 17.
- Frontier Justice triggers on 3 rounds out of 10.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from gunslinger_sim.sim.core.rng import round_half_up
from gunslinger_sim.sim.core.state import AttackState, EncounterState
from gunslinger_sim.sim.features import (
    has_bonus_proc,
    has_grit_regeneration,
    has_opening_volley,
    wisdom_modifier,
)
from gunslinger_sim.sim.mechanics.attack import resolve_attack
from gunslinger_sim.sim.telemetry import EncounterTelemetry

if TYPE_CHECKING:
    from gunslinger_sim.sim.core.build import BuildParameters
    from gunslinger_sim.sim.core.rng import DiceRNG

ATTACKS_PER_ROUND = 3
OFFHAND_ATTACK_INDEX = 2
GRIT_HALVING_CHANCE = 0.5
BONUS_PROC_CHANCE = 0.3
AC_JITTER_SD = 1.0
HIGH_NOON_MEAN_TARGETS = 3.0
HIGH_NOON_TARGETS_SD = 1.0
HIGH_NOON_MAX_TARGETS = 6
OPENING_GRIT_COST = 1


class Variant(str, enum.Enum):
    """Which simulator a table is run through."""

    GRIT = "grit"
    BASELINE = "baseline"


class VariantRules(BaseModel):
    """Hook toggles for the encounter orchestrator."""

    model_config = ConfigDict(frozen=True)

    ac_jitter: bool = True
    """Draw a per-encounter AC around the row's base AC."""
    grit: bool = True
    """Track the grit pool (starting budget, crit refunds, Ace in the Hole, True Grit)."""
    opening_attack: bool = True
    """Spend grit on a quick-draw (or High Noon volley) before round 1."""
    bonus_proc: bool = True
    """Roll for Frontier Justice each round."""
    offhand_penalty: bool = True
    """Withhold the ability modifier on the third attack of each round."""


GRIT_RULES = VariantRules()
BASELINE_RULES = VariantRules(
    ac_jitter=False,
    grit=False,
    opening_attack=False,
    bonus_proc=False,
    offhand_penalty=False,
)


def rules_for(variant: Variant) -> VariantRules:
    """Return the canonical rules for *variant*."""
    if variant is Variant.BASELINE:
        return BASELINE_RULES
    return GRIT_RULES


def starting_grit(level: int, rng: DiceRNG) -> int:
    """Grit available when the encounter begins."""
    grit = wisdom_modifier(level) + 1
    if rng.random_float() < GRIT_HALVING_CHANCE:
        grit //= 2
    return grit


def opening_target_count(level: int, rng: DiceRNG) -> int:
    """Number of targets for the opening quick-draw."""
    if not has_opening_volley(level):
        return 1
    targets = round_half_up(rng.random_gaussian(HIGH_NOON_MEAN_TARGETS, HIGH_NOON_TARGETS_SD))
    return max(0, min(HIGH_NOON_MAX_TARGETS, targets))


def simulate_encounter(
    params: BuildParameters,
    rng: DiceRNG,
    rules: VariantRules = GRIT_RULES,
) -> EncounterTelemetry:
    """Run one encounter to completion and return its totals."""
    ac = params.base_ac
    if rules.ac_jitter:
        ac = round_half_up(params.base_ac + rng.random_gaussian(0.0, AC_JITTER_SD))

    wis = wisdom_modifier(params.level)
    state = EncounterState()
    if rules.grit:
        state.attack_state = AttackState(grit=starting_grit(params.level, rng))

    def attack() -> None:
        outcome = resolve_attack(
            params,
            state.attack_state,
            ac,
            rng,
            wisdom_modifier=wis,
            grit_enabled=rules.grit,
        )
        state.apply(outcome)

    # Snapshot / High Noon
    if rules.opening_attack:
        if rules.grit:
            for _ in range(OPENING_GRIT_COST):
                state.spend_grit()
        for _ in range(opening_target_count(params.level, rng)):
            attack()

    for _ in range(params.round_count):
        if rules.grit and has_grit_regeneration(params.level) and state.grit == 0:
            state.gain_grit()

        for attack_index in range(ATTACKS_PER_ROUND):
            attack()
            if rules.offhand_penalty and attack_index == OFFHAND_ATTACK_INDEX:
                state.running_damage -= params.ability_modifier

        if rules.bonus_proc and has_bonus_proc(params.level):
            if rng.random_float() < BONUS_PROC_CHANCE:
                attack()

    return EncounterTelemetry(
        total_damage=state.running_damage,
        hits=state.hit_count,
        crits=state.crit_count,
        attacks=state.attack_count,
        resource_spends=state.resource_spend_count,
    )
