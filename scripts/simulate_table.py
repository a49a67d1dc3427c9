"""Simulate every build in a parameter table.

Usage:
    uv run python scripts/simulate_table.py [--input data/input.tsv] [--output output.tsv]
        [--variant grit|baseline] [--simulations 1000000] [--parallel]
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from pydantic import ValidationError

from gunslinger_sim.balance.report import generate_text_report, save_summary
from gunslinger_sim.pipeline import run_table
from gunslinger_sim.sim.encounter import Variant
from gunslinger_sim.sim.runner import DEFAULT_SIMULATIONS, SimulationConfig


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate Gunslinger builds from a TSV table")
    parser.add_argument("--input", type=str, default="data/input.tsv", help="Parameter table")
    parser.add_argument("--output", type=str, default="output.tsv", help="Result table")
    parser.add_argument("--json", type=str, default=None, help="Also save a JSON summary here")
    parser.add_argument(
        "--variant", choices=[v.value for v in Variant], default=Variant.GRIT.value,
        help="Simulator variant",
    )
    parser.add_argument(
        "--simulations", type=int, default=DEFAULT_SIMULATIONS, help="Encounters per row",
    )
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--parallel", action="store_true", help="Use a process pool")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes")
    parser.add_argument("--chunk-size", type=int, default=50_000, help="Encounters per chunk")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SimulationConfig(
            simulations=args.simulations,
            base_seed=args.seed,
            variant=Variant(args.variant),
            parallel=args.parallel,
            workers=args.workers,
            chunk_size=args.chunk_size,
        )
    except ValidationError as exc:
        error = exc.errors()[0]
        flag = "--" + str(error["loc"][0]).replace("_", "-")
        parser.error(f"argument {flag}: {error['msg']}")

    print(f"Running {config.simulations:,} {config.variant.value} encounters per row...")
    t0 = time.perf_counter()
    run = run_table(Path(args.input), Path(args.output), config)
    elapsed = time.perf_counter() - t0
    print(f"Done in {elapsed:.1f}s, results in {args.output}")

    summary = run.to_summary(config)
    if args.json:
        save_summary(summary, Path(args.json))
        print(f"Saved summary to {args.json}")

    print()
    print(generate_text_report(summary))


if __name__ == "__main__":
    main()
