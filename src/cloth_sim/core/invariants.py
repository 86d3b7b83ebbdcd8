# MIT License (see LICENSE)
"""
Diagnostics for checking solver quality.

Used for verifying convergence and debugging stability: how far rods are
from their rest length, and how much (implicit) kinetic energy the cloth
still carries. A settled, well-relaxed cloth has small values for both.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..types import ParticleSet
from ..constraints.solver import Constraint, RodConstraint
from ..util import norm


def rod_errors(positions: np.ndarray, constraints: Sequence[Constraint]) -> np.ndarray:
    """
    Signed length error |pb - pa| - L of every rod.

    Non-rod constraints are skipped.

    Returns:
        Array [R] in constraint-list order.
    """
    rods = [c for c in constraints if isinstance(c, RodConstraint)]
    if not rods:
        return np.zeros(0, dtype=np.float64)
    a = np.array([r.a for r in rods], dtype=np.intp)
    b = np.array([r.b for r in rods], dtype=np.intp)
    rest = np.array([r.rest_length for r in rods], dtype=np.float64)
    return norm(positions[b] - positions[a]) - rest


def max_rod_error(positions: np.ndarray, constraints: Sequence[Constraint]) -> float:
    """Largest absolute rod length error (0 when there are no rods)."""
    err = rod_errors(positions, constraints)
    return float(np.max(np.abs(err))) if len(err) else 0.0


def kinetic_energy(particles: ParticleSet, dt: float) -> float:
    """
    Kinetic energy from the implicit velocity, with unit particle mass.

    T = Σ 0.5 * |(x - x_prev) / dt|²
    """
    v = (particles.positions - particles.previous) / dt
    return float(0.5 * np.sum(v * v))


def centroid(positions: np.ndarray) -> np.ndarray:
    """Mean particle position [3]."""
    return positions.mean(axis=0)
