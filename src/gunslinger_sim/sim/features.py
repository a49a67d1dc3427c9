"""Level-gated Gunslinger features.

Every level comparison the simulator makes goes through one of the
predicates below so that the threshold table can be checked against the
class write-up in one place.
"""

from __future__ import annotations

# Class level at which each feature comes online.
ACE_IN_THE_HOLE_LEVEL = 7
FRONTIER_JUSTICE_LEVEL = 11
WISDOM_INCREASE_LEVELS = (12, 16)
IMPROVED_DECAY_LEVEL = 14
HIGH_NOON_LEVEL = 17
TRUE_GRIT_LEVEL = 18
GOLDEN_GUN_LEVEL = 20

# Wisdom modifier is 3, rising by one at each WISDOM_INCREASE_LEVELS entry.
_BASE_WISDOM_MODIFIER = 3


def has_resource_assisted_hits(level: int) -> bool:
    """Ace in the Hole: spend grit to add Wisdom to a missed attack roll."""
    return level >= ACE_IN_THE_HOLE_LEVEL


def has_bonus_proc(level: int) -> bool:
    """Frontier Justice: a chance of one extra attack per round."""
    return level >= FRONTIER_JUSTICE_LEVEL


def has_improved_crit_decay(level: int) -> bool:
    """The crit threshold drops by 2 instead of 1 after a hit."""
    return level >= IMPROVED_DECAY_LEVEL


def has_opening_volley(level: int) -> bool:
    """High Noon: the opening quick-draw fires at several targets."""
    return level >= HIGH_NOON_LEVEL


def has_grit_regeneration(level: int) -> bool:
    """True Grit: regain one grit at the start of a round with an empty pool."""
    return level >= TRUE_GRIT_LEVEL


def has_golden_gun(level: int) -> bool:
    """Golden Gun: advantage once the crit threshold has hit its floor."""
    return level >= GOLDEN_GUN_LEVEL


def wisdom_modifier(level: int) -> int:
    """Wisdom modifier assumed for a Gunslinger of *level*."""
    return _BASE_WISDOM_MODIFIER + sum(
        1 for threshold in WISDOM_INCREASE_LEVELS if level >= threshold
    )


def crit_threshold_decay(level: int) -> int:
    """How far the crit threshold falls after any successful attack."""
    return 2 if has_improved_crit_decay(level) else 1
