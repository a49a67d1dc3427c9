"""Plot per-round damage distributions for every build in a parameter table.

Usage:
    uv run python scripts/plot_damage.py [--input data/input.tsv] [--runs 20000] [--output dpr.png]
"""

from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from gunslinger_sim.balance.metrics import compute_row_summary
from gunslinger_sim.pipeline import RowValidationError, parse_row, read_parameter_table
from gunslinger_sim.sim.encounter import Variant
from gunslinger_sim.sim.runner import BatchRunner, SimulationConfig


def collect(input_path: Path, runs: int, seed: int) -> dict:
    results = {}
    for variant in (Variant.BASELINE, Variant.GRIT):
        runner = BatchRunner(SimulationConfig(simulations=runs, base_seed=seed, variant=variant))
        for row_number, tokens in read_parameter_table(input_path):
            try:
                params = parse_row(tokens, row_number)
            except RowValidationError as exc:
                print(f"  skipping: {exc}")
                continue
            aggregate = runner.run_row(params)
            summary = compute_row_summary(aggregate, variant)
            results.setdefault(params.level, {})[variant] = {
                "samples": np.array(aggregate.damage_per_round),
                "summary": summary,
            }
            print(f"  {variant.value:8s} L{params.level:<3d} dpr={summary.average_damage:.2f}")
    return results


def generate_charts(results: dict, runs: int, output: Path) -> None:
    levels = sorted(results)
    fig, axes = plt.subplots(1, 2, figsize=(14, 6))
    fig.suptitle(f"Gunslinger damage per round, {runs:,} encounters per build",
                 fontsize=16, fontweight="bold")

    colors = {Variant.BASELINE: "#3498db", Variant.GRIT: "#e67e22"}

    # --- Chart 1: Average DPR with interquartile range ---
    ax = axes[0]
    for variant in (Variant.BASELINE, Variant.GRIT):
        xs = [lvl for lvl in levels if variant in results[lvl]]
        summaries = [results[lvl][variant]["summary"] for lvl in xs]
        means = [s.average_damage for s in summaries]
        q1 = [s.q1 for s in summaries]
        q3 = [s.q3 for s in summaries]
        ax.plot(xs, means, marker="o", label=f"{variant.value} (mean)", color=colors[variant])
        ax.fill_between(xs, q1, q3, alpha=0.2, color=colors[variant])
    ax.set_xlabel("Level")
    ax.set_ylabel("Damage per round")
    ax.set_title("Average DPR (band = Q1-Q3)")
    ax.legend()

    # --- Chart 2: Distribution at the highest level ---
    ax = axes[1]
    top = levels[-1]
    for variant, data in results[top].items():
        samples = data["samples"]
        bins = np.arange(samples.min() - 0.5, samples.max() + 1.5, 1)
        ax.hist(samples, bins=bins, alpha=0.6, color=colors[variant],
                label=f"{variant.value} (avg={np.mean(samples):.1f})",
                edgecolor="black", linewidth=0.3)
    ax.set_xlabel("Damage per round")
    ax.set_ylabel("Encounters")
    ax.set_title(f"Level {top} distribution")
    ax.legend()

    plt.tight_layout()
    plt.savefig(output, dpi=150, bbox_inches="tight")
    print(f"\nChart saved to {output}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Plot Gunslinger DPR distributions")
    parser.add_argument("--input", type=str, default="data/input.tsv", help="Parameter table")
    parser.add_argument("--runs", type=int, default=20_000, help="Encounters per build")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--output", type=str, default="dpr.png", help="Chart path")
    args = parser.parse_args()

    results = collect(Path(args.input), args.runs, args.seed)
    if not results:
        print("No valid rows to plot.")
        return
    generate_charts(results, args.runs, Path(args.output))


if __name__ == "__main__":
    main()
