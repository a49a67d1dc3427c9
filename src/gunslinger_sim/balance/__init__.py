"""Summary statistics, result models, and reports."""

from gunslinger_sim.balance.metrics import (
    DegenerateSimulationError,
    compute_row_summary,
    percentile,
)
from gunslinger_sim.balance.models import RowFailure, RowSummary, TableSummary
from gunslinger_sim.balance.report import (
    format_result_row,
    generate_text_report,
    load_summary,
    result_header,
    save_summary,
)

__all__ = [
    "DegenerateSimulationError",
    "RowFailure",
    "RowSummary",
    "TableSummary",
    "compute_row_summary",
    "format_result_row",
    "generate_text_report",
    "load_summary",
    "percentile",
    "result_header",
    "save_summary",
]
