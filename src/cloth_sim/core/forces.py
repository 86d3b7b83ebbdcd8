# MIT License (see LICENSE)
"""
Force accumulation for the particle set.

Forces are refilled from scratch at the start of every time step and read
once by the integrator. Particles have unit mass, so a force is also the
acceleration it produces.
"""
from __future__ import annotations

import numpy as np

from ..types import ParticleSet


def apply_gravity(particles: ParticleSet, g: np.ndarray) -> None:
    """
    Add a uniform gravity force to every particle.

    Args:
        particles: Particle set; ``forces`` is modified in-place.
        g: Gravity vector [gx, gy, gz].
    """
    particles.forces += g


def accumulate_forces(particles: ParticleSet, g: np.ndarray) -> None:
    """Clear the accumulators and add every active force (currently gravity)."""
    particles.clear_forces()
    apply_gravity(particles, g)
