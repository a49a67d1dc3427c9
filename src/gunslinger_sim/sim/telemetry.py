"""Telemetry data models for per-encounter and per-row statistics.

These lightweight dataclasses capture everything needed to summarise a
build without storing any attack-level history:

- **EncounterTelemetry**: totals from one simulated encounter.
- **AggregateResult**: per-round damage samples and counters for every
  encounter simulated for one table row.

Both classes are plain ``dataclass`` instances (not Pydantic models) to
keep telemetry collection as cheap as possible during batch runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


def truncated_division(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero (``-7 / 2 == -3``)."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


@dataclass(slots=True)
class EncounterTelemetry:
    """Totals from a single simulated encounter.

    Attributes
    ----------
    total_damage:
        Damage dealt across the opening volley and every round.  Can be
        negative when the off-hand penalty outweighs the damage dealt.
    hits:
        Successful attacks, including crits and grit-assisted hits.
    crits:
        Critical hits.
    attacks:
        Attacks made (opening volley, round attacks, bonus procs).
    resource_spends:
        Grit spent, including the opening quick-draw.
    """

    total_damage: int
    hits: int
    crits: int
    attacks: int
    resource_spends: int = 0


@dataclass
class AggregateResult:
    """Everything collected for one table row.

    Attributes
    ----------
    round_count:
        Rounds per encounter for this row.
    damage_per_round:
        One truncated per-round damage value per encounter.  Kept sorted
        once :meth:`finalize` has run.
    """

    level: int
    round_count: int
    damage_per_round: list[int] = field(default_factory=list)
    total_hits: int = 0
    total_crits: int = 0
    total_attacks: int = 0
    total_resource_spends: int = 0

    @property
    def simulations(self) -> int:
        return len(self.damage_per_round)

    def record(self, encounter: EncounterTelemetry) -> None:
        """Add one encounter's totals."""
        self.damage_per_round.append(
            truncated_division(encounter.total_damage, self.round_count)
        )
        self.total_hits += encounter.hits
        self.total_crits += encounter.crits
        self.total_attacks += encounter.attacks
        self.total_resource_spends += encounter.resource_spends

    def merge(self, other: AggregateResult) -> None:
        """Concatenate another partial result (e.g. from a worker) into this one."""
        if other.round_count != self.round_count:
            raise ValueError(
                f"Cannot merge results with {other.round_count} rounds into "
                f"results with {self.round_count} rounds"
            )
        self.damage_per_round.extend(other.damage_per_round)
        self.total_hits += other.total_hits
        self.total_crits += other.total_crits
        self.total_attacks += other.total_attacks
        self.total_resource_spends += other.total_resource_spends

    def finalize(self) -> None:
        """Sort the damage samples; required before computing percentiles."""
        self.damage_per_round.sort()
