"""Attack mechanics for the Gunslinger simulator.

Usage::

    from gunslinger_sim.sim.mechanics import resolve_attack
"""

from .attack import resolve_attack

__all__ = ["resolve_attack"]
