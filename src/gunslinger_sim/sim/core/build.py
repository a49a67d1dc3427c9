"""Build parameters for one simulated table row.

A build is everything the simulator needs to know about the character and
the fight it is placed in.  It is validated once on construction and then
shared read-only by every encounter simulated for that row.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Column order of the input table.
BUILD_FIELDS: tuple[str, ...] = (
    "level",
    "damage_die",
    "bonus_dice_count",
    "bonus_die",
    "proficiency_bonus",
    "ability_modifier",
    "round_count",
    "base_ac",
)


class BuildParameters(BaseModel):
    """Static parameters of one Gunslinger build."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=1)
    damage_die: int = Field(ge=1)
    """Face count of the primary weapon die."""
    bonus_dice_count: int = Field(ge=0)
    """Bad Medicine dice rolled on a critical hit."""
    bonus_die: int = Field(ge=0)
    """Face count of the Bad Medicine die."""
    proficiency_bonus: int
    ability_modifier: int
    """Dexterity modifier; added to both attack and damage rolls."""
    round_count: int = Field(ge=1)
    base_ac: int
    """Mean armour class of the targets before per-encounter jitter."""

    @model_validator(mode="after")
    def _bonus_die_needs_faces(self) -> BuildParameters:
        if self.bonus_dice_count > 0 and self.bonus_die < 1:
            raise ValueError(
                f"bonus_die must be >= 1 when bonus_dice_count is "
                f"{self.bonus_dice_count}"
            )
        return self
