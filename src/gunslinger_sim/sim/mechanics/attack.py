"""Single-attack resolution.

Implements one Gunslinger attack roll:
    golden gun advantage -> d20 -> crit / hit / ace in the hole / miss

The first matching rule wins.  Any successful attack narrows the crit
window for the next attack; a miss resets it to a natural 20.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gunslinger_sim.sim.core.state import (
    MAX_CRIT_THRESHOLD,
    MIN_CRIT_THRESHOLD,
    AttackKind,
    AttackOutcome,
    AttackState,
)
from gunslinger_sim.sim.features import (
    crit_threshold_decay,
    has_golden_gun,
    has_resource_assisted_hits,
)

if TYPE_CHECKING:
    from gunslinger_sim.sim.core.build import BuildParameters
    from gunslinger_sim.sim.core.rng import DiceRNG


def resolve_attack(
    params: BuildParameters,
    state: AttackState,
    ac: int,
    rng: DiceRNG,
    *,
    wisdom_modifier: int,
    advantage: bool = False,
    grit_enabled: bool = True,
) -> AttackOutcome:
    """Resolve one attack against a target with armour class *ac*.

    Resolution order (order matters):
        1. Critical: natural d20 >= crit threshold.  Two weapon dice, all
           Bad Medicine dice and the ability modifier; +1 grit when the
           grit mechanic is enabled.
        2. Hit: attack roll >= AC.  One weapon die plus the ability modifier.
        3. Ace in the Hole: with grit in the pool (level 7+), attack roll
           plus Wisdom >= AC converts the miss into a hit for one grit.
        4. Miss: crit threshold resets to 20.

    The function only reads its arguments and draws from *rng*; the next
    attack state is returned inside the outcome.
    """
    if has_golden_gun(params.level) and state.crit_threshold <= MIN_CRIT_THRESHOLD:
        advantage = True

    d20 = rng.roll_with_advantage() if advantage else rng.roll_die(20)
    attack_roll = d20 + params.ability_modifier + params.proficiency_bonus

    if d20 >= state.crit_threshold:
        damage = rng.roll_die(params.damage_die) + rng.roll_die(params.damage_die)
        for _ in range(params.bonus_dice_count):
            damage += rng.roll_die(params.bonus_die)
        damage += params.ability_modifier
        grit = state.grit + 1 if grit_enabled else state.grit
        return AttackOutcome(
            kind=AttackKind.CRITICAL,
            damage=max(0, damage),
            state=AttackState(_decayed_threshold(params.level, state), grit),
        )

    if attack_roll >= ac:
        return AttackOutcome(
            kind=AttackKind.HIT,
            damage=_weapon_damage(params, rng),
            state=AttackState(_decayed_threshold(params.level, state), state.grit),
        )

    if (
        grit_enabled
        and state.grit > 0
        and has_resource_assisted_hits(params.level)
        and attack_roll + wisdom_modifier >= ac
    ):
        return AttackOutcome(
            kind=AttackKind.RESOURCE_ASSISTED_HIT,
            damage=_weapon_damage(params, rng),
            state=AttackState(_decayed_threshold(params.level, state), state.grit - 1),
        )

    return AttackOutcome(
        kind=AttackKind.MISS,
        damage=0,
        state=AttackState(MAX_CRIT_THRESHOLD, state.grit),
    )


def _weapon_damage(params: BuildParameters, rng: DiceRNG) -> int:
    """One weapon die plus the ability modifier, floored at 0."""
    return max(0, rng.roll_die(params.damage_die) + params.ability_modifier)


def _decayed_threshold(level: int, state: AttackState) -> int:
    return max(MIN_CRIT_THRESHOLD, state.crit_threshold - crit_threshold_decay(level))
