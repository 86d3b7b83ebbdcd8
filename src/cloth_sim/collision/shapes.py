# MIT License (see LICENSE)
"""
Static collider shapes.

Colliders are immutable value objects. The only runtime change a collider
supports is a rigid translation, which returns a new instance; the collider
set swaps it in between time steps.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from ..util import f64, unit


@dataclass(frozen=True)
class Sphere:
    """
    Solid sphere that particles are pushed out of.

    Attributes:
        center: Sphere center [x, y, z].
        radius: Sphere radius (> 0).
    """
    center: np.ndarray
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", f64(self.center))
        if not self.radius > 0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")

    def translated(self, delta) -> "Sphere":
        return Sphere(center=self.center + f64(delta), radius=self.radius)


@dataclass(frozen=True)
class Aabb:
    """
    Axis-aligned box.

    Attributes:
        lo: Minimum corner [x, y, z].
        hi: Maximum corner [x, y, z].
        contain: False pushes particles out of the box ("exclude"),
                 True keeps them inside it ("include").
    """
    lo: np.ndarray
    hi: np.ndarray
    contain: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "lo", f64(self.lo))
        object.__setattr__(self, "hi", f64(self.hi))
        if np.any(self.hi < self.lo):
            raise ValueError(f"Box max corner {self.hi} is below min corner {self.lo}")

    @property
    def center(self) -> np.ndarray:
        return 0.5 * (self.lo + self.hi)

    @property
    def extent(self) -> np.ndarray:
        return self.hi - self.lo

    def contains(self, p: np.ndarray) -> np.ndarray | bool:
        """Inclusive point-in-box test. Broadcasts over [N, 3]."""
        return np.all((p >= self.lo) & (p <= self.hi), axis=-1)

    def nearest(self, p: np.ndarray) -> np.ndarray:
        """Closest point inside or on the box (clamp)."""
        return np.clip(p, self.lo, self.hi)

    def nearest_on_surface(self, p: np.ndarray) -> np.ndarray:
        """
        Closest point on the box surface for points inside the box.

        The coordinate with the smallest distance to a face is snapped to
        that face; the others are kept. Broadcasts over [N, 3].
        """
        pts = np.atleast_2d(p)
        dist = np.concatenate([pts - self.lo, self.hi - pts], axis=1)
        k = np.argmin(dist, axis=1)
        axis = k % 3
        faces = np.where(k >= 3, self.hi[axis], self.lo[axis])
        out = pts.copy()
        out[np.arange(len(out)), axis] = faces
        return out.reshape(np.shape(p))

    def translated(self, delta) -> "Aabb":
        d = f64(delta)
        return Aabb(lo=self.lo + d, hi=self.hi + d, contain=self.contain)


@dataclass(frozen=True)
class CollisionQuad:
    """
    Axis-aligned planar quad.

    Particles that come within ``band`` of the quad's plane while inside its
    2D bounds are pinned where they are (see collision.contact).

    Attributes:
        corners: Four corner points [4, 3], all in one axis-aligned plane.
        normal: Plane normal. Its dominant axis selects the plane.
        band: Half-thickness of the capture band around the plane.
    """
    corners: np.ndarray
    normal: np.ndarray
    band: float = 0.5

    def __post_init__(self) -> None:
        corners = f64(self.corners)
        if corners.shape != (4, 3):
            raise ValueError(f"Quad needs 4 corners of 3 components, got shape {corners.shape}")
        normal = unit(f64(self.normal))
        if not np.any(normal):
            raise ValueError("Quad normal must be non-zero")
        object.__setattr__(self, "corners", corners)
        object.__setattr__(self, "normal", normal)
        if not self.band > 0:
            raise ValueError(f"Quad band must be positive, got {self.band}")

    @property
    def axis(self) -> int:
        """Index of the axis the plane is perpendicular to."""
        return int(np.argmax(np.abs(self.normal)))

    @property
    def height(self) -> float:
        """Plane coordinate along ``axis``."""
        return float(self.corners[0, self.axis])

    @property
    def in_plane_axes(self) -> tuple[int, int]:
        u, v = (ax for ax in range(3) if ax != self.axis)
        return u, v

    def translated(self, delta) -> "CollisionQuad":
        return CollisionQuad(corners=self.corners + f64(delta), normal=self.normal, band=self.band)


def horizontal_quad(half_size: float, y: float, band: float = 0.5) -> CollisionQuad:
    """Square quad centred on the y axis, facing +Y."""
    h = half_size
    corners = [(-h, y, -h), (h, y, -h), (h, y, h), (-h, y, h)]
    return CollisionQuad(corners=corners, normal=(0.0, 1.0, 0.0), band=band)
