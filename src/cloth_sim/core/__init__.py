# MIT License (see LICENSE)
"""
Core particle dynamics.

This subpackage provides:
    - Force accumulation: gravity.
    - Integration: position Verlet with damping.
    - Diagnostics: rod length errors, implicit kinetic energy.

Typical usage:
    from cloth_sim.core import accumulate_forces, verlet_step

    accumulate_forces(particles, np.array([0.0, -40.0, 0.0]))
    verlet_step(particles, dt=0.03, damping=0.95)
"""
from .forces import apply_gravity, accumulate_forces
from .integrators import verlet_step, implicit_velocity
from .invariants import rod_errors, max_rod_error, kinetic_energy, centroid

__all__ = [
    # Forces
    "apply_gravity",
    "accumulate_forces",
    # Integrators
    "verlet_step",
    "implicit_velocity",
    # Diagnostics
    "rod_errors",
    "max_rod_error",
    "kinetic_energy",
    "centroid",
]
