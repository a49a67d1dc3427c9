"""Seeded random number generator for deterministic encounter simulation.

Wraps Python's random.Random to provide reproducible dice.  Every Monte
Carlo chunk (and therefore every worker process) should use a *forked*
RNG so that no two execution contexts ever share generator state.
"""

from __future__ import annotations

import hashlib
import math
import random


def round_half_up(value: float) -> int:
    """Round *value* to the nearest integer, with ``.5`` going up.

    ``round()`` uses banker's rounding, which would bias the Gaussian
    samples toward even numbers.
    """
    return math.floor(value + 0.5)


class DiceRNG:
    """Deterministic dice roller that can be forked into independent sub-streams.

    Parameters
    ----------
    seed:
        Integer seed for the underlying Mersenne Twister.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    # -- public properties ---------------------------------------------------

    @property
    def seed(self) -> int:
        """Return the seed this RNG was initialised with."""
        return self._seed

    # -- dice ----------------------------------------------------------------

    def roll_die(self, sides: int) -> int:
        """Return a uniform integer in ``[1, sides]``."""
        if sides < 1:
            raise ValueError(f"A die needs at least one side, got {sides}")
        return self._rng.randint(1, sides)

    def roll_with_advantage(self) -> int:
        """Roll 2d20 and keep the higher result."""
        first = self._rng.randint(1, 20)
        second = self._rng.randint(1, 20)
        return max(first, second)

    # -- continuous draws ----------------------------------------------------

    def random_float(self) -> float:
        """Return a random float in the half-open interval ``[0.0, 1.0)``."""
        return self._rng.random()

    def random_gaussian(self, mu: float = 0.0, sigma: float = 1.0) -> float:
        """Sample from a normal distribution with mean *mu* and SD *sigma*.

        This is the only source of Gaussian noise in the simulator (AC
        jitter and High Noon target counts both go through it).
        """
        return self._rng.gauss(mu, sigma)

    # -- forking -------------------------------------------------------------

    def fork(self, name: str) -> DiceRNG:
        """Create a child RNG whose seed is derived from this RNG's seed and
        *name*.

        The derivation is deterministic: forking with the same *name*
        always produces the same child seed, regardless of how many values
        the parent has already produced.  The batch runner forks one child
        per chunk (``"chunk:0"``, ``"chunk:1"``, ...), which keeps results
        identical whether chunks run in-process or in a worker pool.
        """
        # Derive a stable child seed by hashing (parent_seed, name).
        digest = hashlib.sha256(f"{self._seed}:{name}".encode()).digest()
        child_seed = int.from_bytes(digest[:8], "big")
        return DiceRNG(child_seed)

    # -- dunder helpers ------------------------------------------------------

    def __repr__(self) -> str:
        return f"DiceRNG(seed={self._seed})"
