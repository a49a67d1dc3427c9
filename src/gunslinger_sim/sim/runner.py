"""Monte Carlo batch runner -- repeats encounters for one build and aggregates.

Provides:

- **SimulationConfig**: how many encounters to run and how to run them.
- **run_chunk**: simulate one fixed-size slice of a row on its own RNG.
- **BatchRunner**: splits a row into chunks and runs them sequentially or
  in a multiprocessing pool.

Chunk *i* always draws from ``DiceRNG(base_seed).fork(f"chunk:{i}")`` and
chunk results are merged in chunk order, so the sequential and parallel
paths produce identical output for the same configuration.
"""

from __future__ import annotations

import logging
import multiprocessing
import time

from pydantic import BaseModel, Field

from gunslinger_sim.sim.core.build import BuildParameters
from gunslinger_sim.sim.core.rng import DiceRNG
from gunslinger_sim.sim.encounter import Variant, VariantRules, rules_for, simulate_encounter
from gunslinger_sim.sim.telemetry import AggregateResult

logger = logging.getLogger(__name__)

DEFAULT_SIMULATIONS = 1_000_000


class SimulationConfig(BaseModel):
    """Settings shared by every row of a table run."""

    simulations: int = Field(default=DEFAULT_SIMULATIONS, gt=0)
    """Encounters simulated per row."""
    base_seed: int = 42
    variant: Variant = Variant.GRIT
    parallel: bool = False
    workers: int | None = Field(default=None, gt=0)
    """Worker processes for parallel runs (``None`` = CPU count)."""
    chunk_size: int = Field(default=50_000, gt=0)
    """Encounters per independently seeded chunk."""


def chunk_sizes(simulations: int, chunk_size: int) -> list[int]:
    """Split *simulations* into chunks of at most *chunk_size*."""
    full, remainder = divmod(simulations, chunk_size)
    sizes = [chunk_size] * full
    if remainder:
        sizes.append(remainder)
    return sizes


def run_chunk(
    params: BuildParameters,
    rules: VariantRules,
    n_encounters: int,
    rng: DiceRNG,
) -> AggregateResult:
    """Simulate *n_encounters* encounters on *rng* (results left unsorted)."""
    result = AggregateResult(level=params.level, round_count=params.round_count)
    for _ in range(n_encounters):
        result.record(simulate_encounter(params, rng, rules))
    return result


def _worker_run_chunk(args: tuple) -> AggregateResult:
    """Top-level worker function for multiprocessing (must be picklable)."""
    params_data, rules_data, n_encounters, base_seed, chunk_index = args
    params = BuildParameters.model_validate(params_data)
    rules = VariantRules.model_validate(rules_data)
    rng = DiceRNG(base_seed).fork(f"chunk:{chunk_index}")
    return run_chunk(params, rules, n_encounters, rng)


class BatchRunner:
    """Runs the Monte Carlo simulation for table rows, optionally in parallel."""

    def __init__(self, config: SimulationConfig | None = None) -> None:
        self.config = config or SimulationConfig()
        self.rules = rules_for(self.config.variant)

    def run_row(self, params: BuildParameters) -> AggregateResult:
        """Simulate ``config.simulations`` encounters for *params*.

        The returned result has its per-round damage samples sorted.
        """
        sizes = chunk_sizes(self.config.simulations, self.config.chunk_size)
        logger.debug(
            "Simulating level %d: %d encounters in %d chunk(s)",
            params.level, self.config.simulations, len(sizes),
        )
        t0 = time.perf_counter()

        if self.config.parallel and len(sizes) > 1:
            partials = self._run_parallel(params, sizes)
        else:
            partials = self._run_sequential(params, sizes)

        result = AggregateResult(level=params.level, round_count=params.round_count)
        for partial in partials:
            result.merge(partial)
        result.finalize()

        logger.debug(
            "Level %d done in %.2fs", params.level, time.perf_counter() - t0,
        )
        return result

    def _run_sequential(
        self,
        params: BuildParameters,
        sizes: list[int],
    ) -> list[AggregateResult]:
        root = DiceRNG(self.config.base_seed)
        return [
            run_chunk(params, self.rules, size, root.fork(f"chunk:{i}"))
            for i, size in enumerate(sizes)
        ]

    def _run_parallel(
        self,
        params: BuildParameters,
        sizes: list[int],
    ) -> list[AggregateResult]:
        """Run chunks in a process pool.

        Rather than pickling models, we pass plain dicts and rebuild them in
        each worker process.
        """
        params_data = params.model_dump()
        rules_data = self.rules.model_dump()
        work_items = [
            (params_data, rules_data, size, self.config.base_seed, i)
            for i, size in enumerate(sizes)
        ]

        n_workers = min(len(sizes), self.config.workers or multiprocessing.cpu_count() or 1)

        with multiprocessing.Pool(processes=n_workers) as pool:
            # pool.map preserves chunk order, which keeps the merge deterministic.
            results = pool.map(_worker_run_chunk, work_items)

        return results
