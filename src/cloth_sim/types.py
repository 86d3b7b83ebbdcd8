# MIT License (see LICENSE)
"""
Core type definitions for the cloth simulation.

Defines:
- ClothStyle / CollisionMode / Axis enumerations.
- ParticleSet: the arena that owns every particle's state.

Particles are not objects. A particle is a row index into the arrays of a
ParticleSet, laid out as ``i + nx*j`` for grid column i and row j.
Constraints refer to particles by that index and never hold array
references, so the arena can be rebuilt without dangling handles.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntFlag

import numpy as np


class ClothStyle(str, Enum):
    """How the first row of the cloth is held in place."""
    TABLECLOTH = "tablecloth"
    CURTAIN = "curtain"
    SLIDING_CURTAIN = "sliding_curtain"
    PLEATED_CURTAIN = "pleated_curtain"


class CollisionMode(str, Enum):
    """Which collider kind takes part in the relaxation loop."""
    NONE = "none"
    SPHERES = "spheres"
    BOXES = "boxes"
    INSIDE_BOXES = "inside_boxes"
    QUADS = "quads"


class Axis(IntFlag):
    """Axis mask for slide constraints."""
    X = 1
    Y = 2
    Z = 4


@dataclass
class ParticleSet:
    """
    Fixed-size particle arena for an nx × ny grid.

    Attributes:
        nx: Grid points along x.
        ny: Grid points along y (laid out along world z).
        positions: Current positions [N, 3]. Mutated by integration,
                   constraints and collisions.
        previous: Positions one step ago [N, 3]. Only the integrator
                  writes it; ``positions - previous`` is the implicit velocity.
        forces: Force accumulator [N, 3], refilled every step.
    """
    nx: int
    ny: int
    positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=np.float64))
    previous: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=np.float64))
    forces: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=np.float64))

    def __post_init__(self) -> None:
        n = self.nx * self.ny
        if self.positions.shape != (n, 3):
            self.positions = np.zeros((n, 3), dtype=np.float64)
        if self.previous.shape != (n, 3):
            self.previous = self.positions.copy()
        if self.forces.shape != (n, 3):
            self.forces = np.zeros((n, 3), dtype=np.float64)

    def __len__(self) -> int:
        return self.nx * self.ny

    def index(self, i: int, j: int) -> int:
        """Row index of grid point (i, j)."""
        return i + self.nx * j

    def clear_forces(self) -> None:
        """Reset the force accumulator to zero."""
        self.forces[:] = 0.0
