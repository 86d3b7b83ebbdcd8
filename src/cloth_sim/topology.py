# MIT License (see LICENSE)
"""
Cloth topology construction.

Builds everything that depends only on the grid layout and the cloth style:

- rest positions of the nx × ny particle grid (in the XZ plane, centred on
  the configured center),
- structural rods between horizontal and vertical neighbours,
- shear rods along both diagonals of every cell,
- optional stiffening rods: the same four families spanning ``stiffening``
  cells, which resist bending and large-scale shear,
- style pins (Point / Slide constraints on the first row),
- triangle indices and texture coordinates for the renderer.

The constraint list is shuffled with a uniform random permutation so that
sequential relaxation has no preferred sweep direction. Any change to the
layout (resolution, stiffening, style) rebuilds the whole topology.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass

import numpy as np

from .config import ClothConfig
from .constants import CURTAIN_PIN_STRIDE, PLEAT_PIN_STRIDE, PLEAT_SHRINK
from .constraints.solver import Constraint, PointConstraint, RodConstraint, SlideConstraint
from .types import Axis, ClothStyle, ParticleSet
from .util import f64

logger = logging.getLogger(__name__)


@dataclass
class Topology:
    """
    Result of a topology build.

    Attributes:
        particles: Particle arena at rest (previous == positions).
        constraints: Structural, shear, stiffening and style constraints in
                     application order.
        triangles: Triangle vertex indices [2*(nx-1)*(ny-1), 3].
        tex_coords: Per-particle texture coordinates [N, 2].
    """
    particles: ParticleSet
    constraints: list[Constraint]
    triangles: np.ndarray
    tex_coords: np.ndarray


def grid_positions(nx: int, ny: int, dx: float, dy: float, center) -> np.ndarray:
    """
    Rest positions of the grid, row index i + nx*j.

    Grid point (i, j) sits at center + (dx*i - nx*dx/2, 0, dy*j - ny*dy/2).
    """
    idx = np.arange(nx * ny)
    i = idx % nx
    j = idx // nx
    pos = np.zeros((nx * ny, 3), dtype=np.float64)
    pos[:, 0] = dx * i - 0.5 * nx * dx
    pos[:, 2] = dy * j - 0.5 * ny * dy
    return pos + f64(center)


def build_tex_coords(nx: int, ny: int, repeats: float) -> np.ndarray:
    """Texture coordinates (i/nx, j/ny) * repeats, [N, 2]."""
    idx = np.arange(nx * ny)
    uv = np.stack([(idx % nx) / nx, (idx // nx) / ny], axis=1)
    return uv * repeats


def build_triangles(nx: int, ny: int) -> np.ndarray:
    """
    Split every grid cell into two triangles.

    For the cell with corners p1 (i, j), p2 (i+1, j), p3 (i, j+1) and
    p4 (i+1, j+1) the triangles are (p1, p3, p4) and (p1, p4, p2).
    """
    if nx < 2 or ny < 2:
        return np.zeros((0, 3), dtype=np.int64)
    j, i = np.meshgrid(np.arange(ny - 1), np.arange(nx - 1), indexing="ij")
    p1 = (i + nx * j).ravel()
    p2 = p1 + 1
    p3 = p1 + nx
    p4 = p3 + 1
    tris = np.empty((2 * len(p1), 3), dtype=np.int64)
    tris[0::2] = np.stack([p1, p3, p4], axis=1)
    tris[1::2] = np.stack([p1, p4, p2], axis=1)
    return tris


def grid_rods(nx: int, ny: int, dx: float, dy: float, span: int = 1) -> list[RodConstraint]:
    """
    Rods between grid points ``span`` cells apart.

    Per grid point (i, j): horizontal to (i+span, j), vertical to (i, j+span)
    and both diagonals of the span × span cell. span=1 gives the structural
    and shear rods; larger spans give stiffening rods.
    """
    diag = float(np.hypot(dx, dy))
    rods: list[RodConstraint] = []
    for j in range(ny):
        for i in range(nx):
            p1 = i + nx * j
            p2 = p1 + span
            p3 = p1 + nx * span
            p4 = p3 + span
            right = i < nx - span
            down = j < ny - span
            if right:
                rods.append(RodConstraint(p1, p2, dx * span))
            if down:
                rods.append(RodConstraint(p1, p3, dy * span))
            if right and down:
                rods.append(RodConstraint(p1, p4, diag * span))
                rods.append(RodConstraint(p2, p3, diag * span))
    return rods


def style_constraints(style: ClothStyle, positions: np.ndarray, nx: int) -> list[Constraint]:
    """
    Pins on the first grid row (j = 0) for the given style.

    TABLECLOTH has none. CURTAIN pins every 4th point in place. SLIDING_CURTAIN
    pins the first point and lets every other 4th point slide along X.
    PLEATED_CURTAIN pins every 10th point with X pulled in by 0.7, gathering
    the fabric into folds.
    """
    style = ClothStyle(style)
    pins: list[Constraint] = []
    if style == ClothStyle.CURTAIN:
        for i in range(0, nx, CURTAIN_PIN_STRIDE):
            pins.append(PointConstraint(i, positions[i]))
    elif style == ClothStyle.SLIDING_CURTAIN:
        for i in range(0, nx, CURTAIN_PIN_STRIDE):
            if i == 0:
                pins.append(PointConstraint(i, positions[i]))
            else:
                pins.append(SlideConstraint(i, positions[i], Axis.Y | Axis.Z))
    elif style == ClothStyle.PLEATED_CURTAIN:
        for i in range(0, nx, PLEAT_PIN_STRIDE):
            target = positions[i].copy()
            target[0] *= PLEAT_SHRINK
            pins.append(PointConstraint(i, target))
    return pins


def shuffle_constraints(constraints: list[Constraint], rng: np.random.Generator) -> list[Constraint]:
    """Return the constraints in a uniformly random order (Fisher–Yates)."""
    order = rng.permutation(len(constraints))
    return [constraints[k] for k in order]


def build_topology(config: ClothConfig, rng: np.random.Generator | None = None) -> Topology:
    """
    Build particles, constraints, triangles and UVs for ``config``.

    Args:
        config: Cloth configuration. Validated before anything is built.
        rng: Generator for the constraint shuffle. Defaults to one seeded
             from ``config.seed``.

    Returns:
        A fresh Topology; nothing from a previous build is reused.

    Raises:
        ClothConfigError: If the configuration is invalid.
    """
    config.validate()
    if rng is None:
        rng = np.random.default_rng(config.seed)

    nx, ny = config.nx, config.ny
    positions = grid_positions(nx, ny, config.dx, config.dy, config.center)
    particles = ParticleSet(nx=nx, ny=ny, positions=positions, previous=positions.copy())

    constraints: list[Constraint] = list(grid_rods(nx, ny, config.dx, config.dy))
    if config.stiffening > 1:
        constraints.extend(grid_rods(nx, ny, config.dx, config.dy, span=config.stiffening))
    constraints.extend(style_constraints(config.style, positions, nx))
    constraints = shuffle_constraints(constraints, rng)

    topo = Topology(
        particles=particles,
        constraints=constraints,
        triangles=build_triangles(nx, ny),
        tex_coords=build_tex_coords(nx, ny, config.tex_repeats),
    )
    logger.info(
        "Built %dx%d %s cloth: %d particles, %d constraints, %d triangles (stiffening=%d)",
        nx, ny, config.style.value, len(particles), len(constraints), len(topo.triangles),
        config.stiffening,
    )
    return topo
