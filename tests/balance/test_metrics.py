"""Tests for summary metric computation."""

from __future__ import annotations

import pytest

from gunslinger_sim.balance.metrics import (
    DegenerateSimulationError,
    compute_row_summary,
    percentile,
)
from gunslinger_sim.sim.encounter import Variant
from gunslinger_sim.sim.telemetry import AggregateResult


def _make_result(
    damage: list[int],
    round_count: int = 2,
    hits: int = 30,
    crits: int = 6,
    attacks: int = 40,
    spends: int = 5,
    level: int = 9,
) -> AggregateResult:
    result = AggregateResult(
        level=level,
        round_count=round_count,
        damage_per_round=damage,
        total_hits=hits,
        total_crits=crits,
        total_attacks=attacks,
        total_resource_spends=spends,
    )
    result.finalize()
    return result


# ---- Percentiles ----

class TestPercentile:
    def test_four_values(self) -> None:
        values = [1, 2, 3, 4]
        assert percentile(values, 0.25) == 1
        assert percentile(values, 0.5) == 2
        assert percentile(values, 0.75) == 3

    def test_nearest_rank_no_interpolation(self) -> None:
        values = [10, 20, 30, 40, 50]
        assert percentile(values, 0.25) == 20  # ceil(1.25) - 1 = 1
        assert percentile(values, 0.5) == 30
        assert percentile(values, 0.75) == 40  # ceil(3.75) - 1 = 3

    def test_clamped(self) -> None:
        assert percentile([5, 6], 0.0) == 5
        assert percentile([5, 6], 1.0) == 6

    def test_single_value(self) -> None:
        assert percentile([7], 0.25) == 7

    def test_empty(self) -> None:
        with pytest.raises(ValueError):
            percentile([], 0.5)


# ---- Row summary ----

class TestComputeRowSummary:
    def test_basic(self) -> None:
        summary = compute_row_summary(_make_result([4, 1, 3, 2]))

        assert summary.level == 9
        assert summary.simulations == 4
        assert summary.average_damage == pytest.approx(2.5)
        assert (summary.q1, summary.median, summary.q3) == (1, 2, 3)
        assert summary.hit_rate == pytest.approx(75.0)
        assert summary.crit_rate == pytest.approx(15.0)
        assert summary.attacks_per_round == pytest.approx(40 / (2 * 4))
        assert summary.resource_spend_per_round == pytest.approx(5 / (2 * 4))
        assert summary.variant is Variant.GRIT

    def test_negative_samples(self) -> None:
        summary = compute_row_summary(_make_result([-3, -1, 0, 2]))
        assert summary.q1 == -3
        assert summary.average_damage == pytest.approx(-0.5)

    def test_variant_is_recorded(self) -> None:
        summary = compute_row_summary(_make_result([1, 2]), Variant.BASELINE)
        assert summary.variant is Variant.BASELINE

    def test_zero_attacks(self) -> None:
        with pytest.raises(DegenerateSimulationError, match="no attacks") as excinfo:
            compute_row_summary(_make_result([0, 0], hits=0, crits=0, attacks=0))
        assert excinfo.value.reason == "zero_attacks"
        assert isinstance(excinfo.value, ValueError)
