# MIT License (see LICENSE)
"""
Cloth configuration and validation.

ClothConfig gathers every knob the simulation reads: grid resolution and
spacing, integration parameters, the cloth style, stiffening span, the number
of relaxation passes, the active collider kind and the shuffle seed. Nothing
in the engine reads global state; a Cloth is fully described by its config
plus its collider set.

Validation happens when a topology is built or a setting is changed, so a
bad value fails before any particle state is touched.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, replace

import numpy as np

from .constants import (
    DEFAULT_GRAVITY,
    DEFAULT_DT,
    DEFAULT_DAMPING,
    DEFAULT_ITERATIONS,
    DEFAULT_TEX_REPEATS,
)
from .types import ClothStyle, CollisionMode

SOLVERS = ("gauss_seidel", "colored")


def _is_count(value) -> bool:
    """True for Python or numpy integers; bools and integral floats do not count."""
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class ClothConfigError(ValueError):
    """Raised for an invalid cloth configuration."""


@dataclass(frozen=True)
class ClothConfig:
    """
    Parameters of a cloth simulation.

    Attributes:
        nx, ny: Grid points per axis (>= 1).
        dx, dy: Rest spacing between neighbouring grid points (> 0).
        center: Cloth center. The grid lies in the XZ plane through it.
        dt: Time step (> 0).
        damping: Verlet damping in (0, 1]. 1 keeps all momentum.
        gravity: Constant force applied to every particle.
        style: How the first row is held (see ClothStyle).
        stiffening: Span in cells of the extra stiffening rods. 1 disables them.
        iterations: Relaxation passes per time step (>= 0).
        collision_mode: Active collider kind.
        solver: "gauss_seidel" applies constraints one by one in list order;
                "colored" applies conflict-free rod batches as vector updates.
        tex_repeats: Texture repeat factor for the generated UVs.
        seed: Seed for the constraint shuffle. None draws fresh entropy.
    """
    nx: int = 30
    ny: int = 30
    dx: float = 2.0
    dy: float = 2.0
    center: tuple[float, float, float] = (0.0, 30.0, 0.0)
    dt: float = DEFAULT_DT
    damping: float = DEFAULT_DAMPING
    gravity: tuple[float, float, float] = DEFAULT_GRAVITY
    style: ClothStyle = ClothStyle.TABLECLOTH
    stiffening: int = 1
    iterations: int = DEFAULT_ITERATIONS
    collision_mode: CollisionMode = CollisionMode.SPHERES
    solver: str = "gauss_seidel"
    tex_repeats: float = DEFAULT_TEX_REPEATS
    seed: int | None = None

    def __post_init__(self) -> None:
        # Accept plain strings for the enum fields (e.g. from JSON).
        object.__setattr__(self, "style", ClothStyle(self.style))
        object.__setattr__(self, "collision_mode", CollisionMode(self.collision_mode))
        object.__setattr__(self, "center", tuple(float(c) for c in self.center))
        object.__setattr__(self, "gravity", tuple(float(g) for g in self.gravity))

    @property
    def rest_diagonal(self) -> float:
        """Rest length of a cell diagonal; also the grab capture radius."""
        return math.sqrt(self.dx * self.dx + self.dy * self.dy)

    def with_changes(self, **changes) -> "ClothConfig":
        """Return a validated copy with some fields replaced."""
        cfg = replace(self, **changes)
        cfg.validate()
        return cfg

    def validate(self) -> None:
        """
        Check every field.

        Raises:
            ClothConfigError: On the first invalid field.
        """
        for name in ("nx", "ny", "stiffening", "iterations"):
            value = getattr(self, name)
            if not _is_count(value):
                raise ClothConfigError(f"{name} must be an integer, got {value!r}")
        if self.nx < 1 or self.ny < 1:
            raise ClothConfigError(f"Grid dimensions must be positive, got ({self.nx}, {self.ny})")
        if not (self.dx > 0 and self.dy > 0) or not (math.isfinite(self.dx) and math.isfinite(self.dy)):
            raise ClothConfigError(f"Rest spacing must be positive, got ({self.dx}, {self.dy})")
        if not (self.dt > 0 and math.isfinite(self.dt)):
            raise ClothConfigError(f"Time step must be positive, got {self.dt}")
        if not (0.0 < self.damping <= 1.0):
            raise ClothConfigError(f"Damping must be in (0, 1], got {self.damping}")
        if len(self.center) != 3 or not all(math.isfinite(c) for c in self.center):
            raise ClothConfigError(f"Center must be a finite 3-vector, got {self.center}")
        if len(self.gravity) != 3 or not all(math.isfinite(g) for g in self.gravity):
            raise ClothConfigError(f"Gravity must be a finite 3-vector, got {self.gravity}")
        if self.stiffening < 1:
            raise ClothConfigError(f"Stiffening span must be >= 1, got {self.stiffening}")
        if self.iterations < 0:
            raise ClothConfigError(f"Constraint iterations must be >= 0, got {self.iterations}")
        if self.solver not in SOLVERS:
            raise ClothConfigError(f"Unknown solver: {self.solver!r} (expected one of {SOLVERS})")
        if not (self.tex_repeats > 0):
            raise ClothConfigError(f"Texture repeats must be positive, got {self.tex_repeats}")
