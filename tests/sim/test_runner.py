"""Tests for the Monte Carlo batch runner."""

import pytest
from pydantic import ValidationError

from gunslinger_sim.balance.metrics import compute_row_summary
from gunslinger_sim.sim.core.rng import DiceRNG
from gunslinger_sim.sim.encounter import GRIT_RULES, Variant
from gunslinger_sim.sim.runner import (
    DEFAULT_SIMULATIONS,
    BatchRunner,
    SimulationConfig,
    chunk_sizes,
    run_chunk,
)
from gunslinger_sim.sim.telemetry import AggregateResult, EncounterTelemetry, truncated_division


class TestSimulationConfig:
    def test_defaults(self):
        config = SimulationConfig()
        assert config.simulations == DEFAULT_SIMULATIONS == 1_000_000
        assert config.variant is Variant.GRIT
        assert config.parallel is False

    @pytest.mark.parametrize("field", ["simulations", "chunk_size", "workers"])
    def test_rejects_non_positive(self, field):
        with pytest.raises(ValidationError):
            SimulationConfig(**{field: 0})


class TestChunkSizes:
    def test_even_split(self):
        assert chunk_sizes(100, 25) == [25, 25, 25, 25]

    def test_remainder(self):
        assert chunk_sizes(110, 25) == [25, 25, 25, 25, 10]

    def test_small_total(self):
        assert chunk_sizes(7, 50_000) == [7]


class TestTelemetry:
    @pytest.mark.parametrize(
        "numerator, denominator, expected",
        [(7, 2, 3), (-7, 2, -3), (6, 3, 2), (-1, 3, 0), (0, 5, 0)],
    )
    def test_truncated_division(self, numerator, denominator, expected):
        assert truncated_division(numerator, denominator) == expected

    def test_record_and_merge(self):
        a = AggregateResult(level=5, round_count=3)
        a.record(EncounterTelemetry(total_damage=31, hits=6, crits=1, attacks=10, resource_spends=1))
        b = AggregateResult(level=5, round_count=3)
        b.record(EncounterTelemetry(total_damage=-4, hits=0, crits=0, attacks=10, resource_spends=1))
        a.merge(b)
        a.finalize()

        assert a.damage_per_round == [-1, 10]
        assert a.simulations == 2
        assert a.total_hits == 6
        assert a.total_attacks == 20
        assert a.total_resource_spends == 2

    def test_merge_rejects_mismatched_rounds(self):
        with pytest.raises(ValueError, match="rounds"):
            AggregateResult(level=5, round_count=3).merge(AggregateResult(level=5, round_count=4))


class TestRunChunk:
    def test_chunk_size(self, make_build):
        result = run_chunk(make_build(), GRIT_RULES, 250, DiceRNG(1))
        assert result.simulations == 250
        assert result.total_attacks == 250 * (1 + 3 * 3)  # level 5: quick-draw + 3/round


class TestBatchRunner:
    def test_one_sample_per_encounter(self, make_build):
        runner = BatchRunner(SimulationConfig(simulations=1_234, chunk_size=500))
        result = runner.run_row(make_build())
        assert len(result.damage_per_round) == 1_234
        assert result.damage_per_round == sorted(result.damage_per_round)

    def test_deterministic(self, make_build):
        config = SimulationConfig(simulations=2_000, chunk_size=700, base_seed=11)
        first = BatchRunner(config).run_row(make_build(level=18))
        second = BatchRunner(config).run_row(make_build(level=18))
        assert first == second

    def test_seed_changes_results(self, make_build):
        a = BatchRunner(SimulationConfig(simulations=2_000, base_seed=1)).run_row(make_build())
        b = BatchRunner(SimulationConfig(simulations=2_000, base_seed=2)).run_row(make_build())
        assert a.damage_per_round != b.damage_per_round

    def test_parallel_matches_sequential(self, make_build):
        params = make_build(level=20, bonus_dice_count=3, bonus_die=6)
        seq = BatchRunner(SimulationConfig(simulations=1_000, chunk_size=250))
        par = BatchRunner(
            SimulationConfig(simulations=1_000, chunk_size=250, parallel=True, workers=2)
        )
        assert seq.run_row(params) == par.run_row(params)

    def test_baseline_attack_count(self, make_build):
        runner = BatchRunner(SimulationConfig(simulations=500, variant=Variant.BASELINE))
        result = runner.run_row(make_build(level=20, round_count=4))
        assert result.total_attacks == 500 * 4 * 3
        assert result.total_resource_spends == 0


# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_level_five_rates_are_sensible(self, make_build):
        params = make_build(
            level=5, damage_die=8, bonus_dice_count=0, bonus_die=0,
            proficiency_bonus=3, ability_modifier=3, round_count=3, base_ac=15,
        )
        result = BatchRunner(SimulationConfig(simulations=20_000)).run_row(params)
        summary = compute_row_summary(result)

        assert 0.0 < summary.hit_rate < 100.0
        assert 0.0 < summary.crit_rate < 100.0
        assert summary.crit_rate < summary.hit_rate
        assert summary.average_damage > 0.0
        assert summary.q1 <= summary.median <= summary.q3

    def test_level_one_spends_only_opening_grit(self, make_build):
        params = make_build(level=1, round_count=3)
        result = BatchRunner(SimulationConfig(simulations=5_000)).run_row(params)
        summary = compute_row_summary(result)

        assert result.total_resource_spends == 5_000
        assert summary.resource_spend_per_round == pytest.approx(1 / 3)
        assert summary.attacks_per_round == pytest.approx((1 + 9) / 3)

    def test_grit_variant_hits_more_at_level_seven(self, make_build):
        """Ace in the Hole should lift the hit rate over the baseline."""
        params = make_build(level=7, base_ac=17)
        grit = compute_row_summary(
            BatchRunner(SimulationConfig(simulations=20_000)).run_row(params)
        )
        base = compute_row_summary(
            BatchRunner(SimulationConfig(simulations=20_000, variant=Variant.BASELINE)).run_row(params),
            Variant.BASELINE,
        )
        assert grit.hit_rate > base.hit_rate
