"""Shared fixtures and helpers for simulator tests."""

from __future__ import annotations

from typing import Iterable

import pytest

from gunslinger_sim.sim.core.build import BuildParameters
from gunslinger_sim.sim.core.rng import DiceRNG


class ScriptedRNG(DiceRNG):
    """DiceRNG that replays pre-set values instead of drawing them.

    Dice come from *rolls* in order (advantage consumes two), floats from
    *floats*, standard-normal samples from *gaussians*.  Running out of
    scripted values raises ``IndexError``, which doubles as a check that
    no unexpected draw happened.
    """

    def __init__(
        self,
        rolls: Iterable[int] = (),
        floats: Iterable[float] = (),
        gaussians: Iterable[float] = (),
    ) -> None:
        super().__init__(0)
        self.rolls = list(rolls)
        self.floats = list(floats)
        self.gaussians = list(gaussians)
        self.advantage_calls = 0

    def roll_die(self, sides: int) -> int:
        value = self.rolls.pop(0)
        assert 1 <= value <= sides, f"scripted roll {value} does not fit a d{sides}"
        return value

    def roll_with_advantage(self) -> int:
        self.advantage_calls += 1
        return max(self.roll_die(20), self.roll_die(20))

    def random_float(self) -> float:
        return self.floats.pop(0)

    def random_gaussian(self, mu: float = 0.0, sigma: float = 1.0) -> float:
        return mu + sigma * self.gaussians.pop(0)

    @property
    def exhausted(self) -> bool:
        return not (self.rolls or self.floats or self.gaussians)


@pytest.fixture()
def scripted_rng() -> type[ScriptedRNG]:
    """The ScriptedRNG class, for building per-test scripts."""
    return ScriptedRNG


@pytest.fixture()
def make_build():
    """Factory for BuildParameters with sensible level-5 defaults."""

    def _make_build(**kwargs) -> BuildParameters:
        defaults = dict(
            level=5,
            damage_die=8,
            bonus_dice_count=0,
            bonus_die=0,
            proficiency_bonus=3,
            ability_modifier=3,
            round_count=3,
            base_ac=15,
        )
        defaults.update(kwargs)
        return BuildParameters(**defaults)

    return _make_build
