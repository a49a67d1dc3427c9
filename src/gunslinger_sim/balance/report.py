"""Report generation for table runs.

Two output formats:
- Result rows: tab-separated lines matching the simulator's output table.
- Text report: human-readable summary for the terminal.
"""

from __future__ import annotations

import json
from pathlib import Path

from gunslinger_sim.balance.models import RowFailure, RowSummary, TableSummary
from gunslinger_sim.sim.encounter import Variant

_GRIT_HEADER = ("Level", "APR", "Hit Rate", "Crit Rate", "DPR", "Q1", "Q2", "Q3", "GPR")
_BASELINE_HEADER = ("Level", "Hit Rate", "Crit Rate", "DPR", "Q1", "Q2", "Q3")


def result_header(variant: Variant = Variant.GRIT) -> str:
    """Header line of the output table for *variant*."""
    columns = _BASELINE_HEADER if variant is Variant.BASELINE else _GRIT_HEADER
    return "\t".join(columns)


def format_result_row(summary: RowSummary) -> str:
    """Format one summary as a tab-separated output row."""
    if summary.variant is Variant.BASELINE:
        fields = [
            f"{summary.level:d}",
            f"{summary.hit_rate:.2f}%",
            f"{summary.crit_rate:.2f}%",
            f"{summary.average_damage:.2f}",
            f"{summary.q1:d}",
            f"{summary.median:d}",
            f"{summary.q3:d}",
        ]
    else:
        fields = [
            f"{summary.level:d}",
            f"{summary.attacks_per_round:.2f}",
            f"{summary.hit_rate:.2f}%",
            f"{summary.crit_rate:.2f}%",
            f"{summary.average_damage:.2f}",
            f"{summary.q1:d}",
            f"{summary.median:d}",
            f"{summary.q3:d}",
            f"{summary.resource_spend_per_round:.2f}",
        ]
    return "\t".join(fields)


def generate_text_report(summary: TableSummary) -> str:
    """Generate a human-readable summary of a table run."""
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append(f"Gunslinger Simulation Report: {summary.variant.value} variant")
    lines.append(
        f"Encounters per row: {summary.simulations:,} | Seed: {summary.base_seed}"
        f" | Generated: {summary.generated_at}"
    )
    lines.append("=" * 60)

    lines.append("")
    lines.append(f"## Rows ({len(summary.rows)} simulated)")
    for row in summary.rows:
        line = (
            f"  L{row.level:<3d} dpr={row.average_damage:7.2f}"
            f"  q=[{row.q1}, {row.median}, {row.q3}]"
            f"  hit={row.hit_rate:5.1f}%  crit={row.crit_rate:5.1f}%"
        )
        if row.variant is Variant.GRIT:
            line += (
                f"  apr={row.attacks_per_round:.2f}"
                f"  gpr={row.resource_spend_per_round:.2f}"
            )
        lines.append(line)

    if summary.failures:
        lines.append("")
        lines.append(f"## Rejected Rows ({len(summary.failures)})")
        for failure in summary.failures:
            where = f" [{failure.field}]" if failure.field else ""
            lines.append(
                f"  line {failure.row_number}{where} {failure.reason}: {failure.message}"
            )

    lines.append("")
    return "\n".join(lines)


def save_summary(summary: TableSummary, path: Path) -> None:
    """Save a table summary to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary.model_dump(mode="json"), indent=2))


def load_summary(path: Path) -> TableSummary:
    """Load a table summary from a JSON file."""
    data = json.loads(path.read_text())
    return TableSummary.model_validate(data)
