"""Pure metric computation functions for simulation summaries.

All functions take aggregated telemetry and return structured metrics.
No side effects, no I/O.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence

from gunslinger_sim.balance.models import RowSummary
from gunslinger_sim.sim.encounter import Variant

if TYPE_CHECKING:
    from gunslinger_sim.sim.telemetry import AggregateResult


class DegenerateSimulationError(ValueError):
    """Raised when a row's totals cannot produce meaningful rates."""

    reason = "zero_attacks"


def percentile(sorted_values: Sequence[int], p: float) -> int:
    """Nearest-rank percentile of an ascending sequence.

    Rank is ``ceil(p * n) - 1`` clamped to ``[0, n - 1]``; no interpolation.
    """
    if not sorted_values:
        raise ValueError("percentile of an empty sequence")
    index = math.ceil(p * len(sorted_values)) - 1
    return sorted_values[max(0, min(index, len(sorted_values) - 1))]


def compute_row_summary(
    result: AggregateResult,
    variant: Variant = Variant.GRIT,
) -> RowSummary:
    """Reduce one row's aggregate telemetry to summary statistics.

    *result* must already be finalized (damage samples sorted).
    """
    if result.total_attacks == 0:
        raise DegenerateSimulationError(
            f"Level {result.level} row made no attacks across "
            f"{result.simulations} encounters"
        )

    samples = result.damage_per_round
    total_rounds = result.round_count * result.simulations

    return RowSummary(
        level=result.level,
        variant=variant,
        simulations=result.simulations,
        attacks_per_round=result.total_attacks / total_rounds,
        hit_rate=100.0 * result.total_hits / result.total_attacks,
        crit_rate=100.0 * result.total_crits / result.total_attacks,
        average_damage=sum(samples) / len(samples),
        q1=percentile(samples, 0.25),
        median=percentile(samples, 0.5),
        q3=percentile(samples, 0.75),
        resource_spend_per_round=result.total_resource_spends / total_rounds,
    )
