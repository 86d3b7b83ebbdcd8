# MIT License (see LICENSE)
"""
Position Verlet integration.

The cloth keeps no velocity state. The displacement over the last step,
``x - x_prev``, stands in for velocity, which makes constraint and collision
corrections (plain position edits) automatically consistent with the motion
of the next step.

    x_new  = x + (x - x_prev) * damping + a * dt²
    x_prev = x

Every particle is updated independently, so the update is expressed as a
single vectorised operation on the position arrays.

Reference:
    https://en.wikipedia.org/wiki/Verlet_integration#Basic_Störmer–Verlet
"""
from __future__ import annotations

import numpy as np

from ..types import ParticleSet


def verlet_step(particles: ParticleSet, dt: float, damping: float) -> None:
    """
    Advance every particle by one Störmer–Verlet step.

    Args:
        particles: Particle set, modified in-place.
        dt: Timestep.
        damping: Fraction of the implicit velocity kept, in (0, 1]. Values
                 near 1 preserve momentum; lower values damp oscillation.
    """
    x = particles.positions
    x_prev = particles.previous.copy()
    particles.previous[:] = x
    x += (x - x_prev) * damping + particles.forces * (dt * dt)


def implicit_velocity(particles: ParticleSet, dt: float) -> np.ndarray:
    """Per-particle velocity estimate (x - x_prev) / dt, [N, 3]."""
    return (particles.positions - particles.previous) / dt
