"""Sequential attack state and per-encounter accumulators.

The crit threshold and the grit pool both carry over from one attack to
the next.  They live in :class:`AttackState`, an immutable value that is
passed into every resolution call and returned (updated) inside its
:class:`AttackOutcome`.  :class:`EncounterState` owns the current value and
folds outcomes into the encounter's running totals.

Plain dataclasses rather than Pydantic models: these objects are created
millions of times per table row.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

MIN_CRIT_THRESHOLD = 16
MAX_CRIT_THRESHOLD = 20


class AttackKind(str, enum.Enum):
    """How a single attack resolved."""

    CRITICAL = "critical"
    HIT = "hit"
    RESOURCE_ASSISTED_HIT = "resource_assisted_hit"
    MISS = "miss"


@dataclass(frozen=True, slots=True)
class AttackState:
    """Crit threshold and grit carried between attacks."""

    crit_threshold: int = MAX_CRIT_THRESHOLD
    grit: int = 0

    def __post_init__(self) -> None:
        if not MIN_CRIT_THRESHOLD <= self.crit_threshold <= MAX_CRIT_THRESHOLD:
            raise ValueError(
                f"crit_threshold must be in [{MIN_CRIT_THRESHOLD}, "
                f"{MAX_CRIT_THRESHOLD}], got {self.crit_threshold}"
            )
        if self.grit < 0:
            raise ValueError(f"grit must be >= 0, got {self.grit}")


@dataclass(frozen=True, slots=True)
class AttackOutcome:
    """Result of resolving one attack.

    Attributes
    ----------
    kind:
        Which resolution rule matched.
    damage:
        Damage dealt by this attack (``0`` on a miss).
    state:
        The attack state to feed into the next attack.
    """

    kind: AttackKind
    damage: int
    state: AttackState

    @property
    def is_hit(self) -> bool:
        return self.kind is not AttackKind.MISS

    @property
    def is_crit(self) -> bool:
        return self.kind is AttackKind.CRITICAL

    @property
    def spent_grit(self) -> bool:
        return self.kind is AttackKind.RESOURCE_ASSISTED_HIT


@dataclass(slots=True)
class EncounterState:
    """Mutable totals for one simulated encounter."""

    attack_state: AttackState = field(default_factory=AttackState)
    running_damage: int = 0
    hit_count: int = 0
    crit_count: int = 0
    attack_count: int = 0
    resource_spend_count: int = 0

    @property
    def grit(self) -> int:
        return self.attack_state.grit

    @property
    def crit_threshold(self) -> int:
        return self.attack_state.crit_threshold

    def apply(self, outcome: AttackOutcome) -> None:
        """Fold one attack's outcome into the encounter totals."""
        self.attack_state = outcome.state
        self.running_damage += outcome.damage
        self.attack_count += 1
        if outcome.is_hit:
            self.hit_count += 1
        if outcome.is_crit:
            self.crit_count += 1
        if outcome.spent_grit:
            self.resource_spend_count += 1

    def spend_grit(self) -> None:
        """Spend one grit outside of an attack (e.g. the opening quick-draw)."""
        self.attack_state = AttackState(
            crit_threshold=self.attack_state.crit_threshold,
            grit=self.attack_state.grit - 1,
        )
        self.resource_spend_count += 1

    def gain_grit(self, amount: int = 1) -> None:
        self.attack_state = AttackState(
            crit_threshold=self.attack_state.crit_threshold,
            grit=self.attack_state.grit + amount,
        )
