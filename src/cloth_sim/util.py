# MIT License (see LICENSE)
"""
Utility functions for 3D vector math.

Vectors are numpy float64 arrays of shape (3,). The helpers below are the
small set of operations the solver, the colliders and the topology builder
share: dot/cross products, squared and plain length, and normalization.
Most of them also broadcast over (N, 3) arrays along the last axis.
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Always copies, so callers may keep the result without aliasing the input.
    """
    return np.array(x, dtype=np.float64)


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    """Build a 3-vector."""
    return np.array([x, y, z], dtype=np.float64)


def dot(a: np.ndarray, b: np.ndarray) -> np.ndarray | float:
    """Dot product along the last axis."""
    return np.sum(a * b, axis=-1)


def norm2(v: np.ndarray) -> np.ndarray | float:
    """Squared magnitude. Avoids sqrt for performance."""
    return dot(v, v)


def norm(v: np.ndarray) -> np.ndarray | float:
    """Magnitude (length) along the last axis."""
    return np.sqrt(norm2(v))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit vector in the same direction as v.

    Returns the zero vector if |v| < eps to avoid division by zero.
    """
    n = float(norm(v))
    if n < eps:
        return np.zeros(3, dtype=np.float64)
    return v / n


def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """3D cross product a × b."""
    return np.cross(a, b)
