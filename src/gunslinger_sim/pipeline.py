"""Table pipeline -- parameter rows in, result rows out.

Reads a tab-separated table of builds (header line first, one build per
line), simulates every valid row and writes the matching output table.
A bad row is logged and recorded as a :class:`RowFailure`; it never stops
the rest of the table from running.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Sequence

from pydantic import ValidationError

from gunslinger_sim.balance.metrics import DegenerateSimulationError, compute_row_summary
from gunslinger_sim.balance.models import RowFailure, RowSummary, TableSummary
from gunslinger_sim.balance.report import format_result_row, result_header
from gunslinger_sim.sim.core.build import BUILD_FIELDS, BuildParameters
from gunslinger_sim.sim.runner import BatchRunner, SimulationConfig

logger = logging.getLogger(__name__)


class RowValidationError(ValueError):
    """Raised when an input row cannot be turned into BuildParameters."""

    reason = "invalid_input"

    def __init__(self, row_number: int, field: str | None, message: str) -> None:
        self.row_number = row_number
        self.field = field
        self.message = message
        where = f" field {field!r}" if field else ""
        super().__init__(f"Row {row_number}{where}: {message}")


def parse_row(tokens: Sequence[str], row_number: int) -> BuildParameters:
    """Parse the eight integer columns of one input row."""
    values: dict[str, int] = {}
    for index, name in enumerate(BUILD_FIELDS):
        if index >= len(tokens) or not tokens[index].strip():
            raise RowValidationError(row_number, name, "missing value")
        raw = tokens[index].strip()
        try:
            values[name] = int(raw)
        except ValueError:
            raise RowValidationError(row_number, name, f"not an integer: {raw!r}") from None

    try:
        return BuildParameters(**values)
    except ValidationError as exc:
        error = exc.errors()[0]
        # Model-level validators report an empty location.
        loc = error.get("loc") or ("bonus_die",)
        raise RowValidationError(row_number, str(loc[0]), error["msg"]) from exc


def read_parameter_table(path: Path) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(row_number, tokens)`` for each data line of a TSV table.

    Row numbers are 1-based file line numbers; the header is line 1 and is
    skipped, as are blank lines.  Undecodable bytes become U+FFFD so the
    affected row fails integer parsing on its own.
    """
    with path.open(encoding="utf-8", errors="replace") as fh:
        for row_number, line in enumerate(fh, start=1):
            if row_number == 1:
                continue
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            yield row_number, line.split("\t")


@dataclass
class TableRun:
    """Outcome of :func:`run_table`."""

    summaries: list[RowSummary] = field(default_factory=list)
    failures: list[RowFailure] = field(default_factory=list)

    def to_summary(self, config: SimulationConfig) -> TableSummary:
        return TableSummary(
            variant=config.variant,
            simulations=config.simulations,
            base_seed=config.base_seed,
            generated_at=datetime.now(timezone.utc).isoformat(),
            rows=self.summaries,
            failures=self.failures,
        )


def simulate_row(
    runner: BatchRunner,
    tokens: Sequence[str],
    row_number: int,
) -> RowSummary:
    """Validate, simulate and summarise one input row."""
    params = parse_row(tokens, row_number)
    result = runner.run_row(params)
    return compute_row_summary(result, runner.config.variant)


def run_table(
    input_path: Path,
    output_path: Path,
    config: SimulationConfig | None = None,
) -> TableRun:
    """Simulate every row of *input_path* and write the result table.

    The output file is overwritten; its header is written before the
    first row.  Result rows are written as each row finishes.
    """
    config = config or SimulationConfig()
    runner = BatchRunner(config)
    run = TableRun()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as out:
        out.write(result_header(config.variant) + "\n")

        for row_number, tokens in read_parameter_table(input_path):
            try:
                summary = simulate_row(runner, tokens, row_number)
            except RowValidationError as exc:
                logger.warning("Skipping row %d: %s", row_number, exc)
                run.failures.append(RowFailure(
                    row_number=row_number,
                    reason=exc.reason,
                    field=exc.field,
                    message=exc.message,
                ))
                continue
            except DegenerateSimulationError as exc:
                logger.warning("Skipping row %d: %s", row_number, exc)
                run.failures.append(RowFailure(
                    row_number=row_number,
                    reason=exc.reason,
                    message=str(exc),
                ))
                continue

            row = format_result_row(summary)
            logger.info("%s", row)
            out.write(row + "\n")
            run.summaries.append(summary)

    return run
