"""Pydantic v2 models for simulation summaries.

These models define the structured output of a table run: one
:class:`RowSummary` per simulated row and one :class:`RowFailure` per
rejected row.  Both are serializable to/from JSON.
"""

from __future__ import annotations

from pydantic import BaseModel

from gunslinger_sim.sim.encounter import Variant


class RowSummary(BaseModel):
    """Summary statistics for one simulated table row."""

    level: int
    variant: Variant = Variant.GRIT
    simulations: int
    attacks_per_round: float
    """Total attacks / (rounds * simulations)."""
    hit_rate: float
    """Percentage of attacks that hit (crits included)."""
    crit_rate: float
    """Percentage of attacks that crit."""
    average_damage: float
    """Mean of the truncated per-round damage samples."""
    q1: int
    median: int
    q3: int
    resource_spend_per_round: float
    """Grit spent / (rounds * simulations)."""


class RowFailure(BaseModel):
    """A table row that could not be simulated."""

    row_number: int
    """1-based line number in the input table (the header is line 1)."""
    reason: str
    """Error tag, e.g. ``"invalid_input"`` or ``"zero_attacks"``."""
    field: str | None = None
    message: str


class TableSummary(BaseModel):
    """Top-level result of a table run."""

    variant: Variant
    simulations: int
    base_seed: int
    generated_at: str
    """ISO 8601 timestamp."""
    rows: list[RowSummary]
    failures: list[RowFailure]
