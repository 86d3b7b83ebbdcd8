# MIT License (see LICENSE)
"""
Collision projection of particles against static colliders.

Spheres and boxes correct positions directly: a penetrating particle is
moved to the nearest valid point on the collider surface. Every particle is
handled independently, so each function processes the whole position array
in one vectorised pass.

Quads work differently. A particle entering a quad's capture band is not
moved; it gets a new Point constraint holding it where it touched. Those
pins persist until the topology is rebuilt or they are cleared explicitly,
so a quad behaves like a sticky surface. ContactPins bounds the growth by
pinning each particle at most once.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

import numpy as np

from ..constants import DEGENERATE_EPS
from ..constraints.solver import PointConstraint
from ..util import norm, vec3
from .shapes import Sphere, Aabb, CollisionQuad

logger = logging.getLogger(__name__)


def collide_sphere(positions: np.ndarray, sphere: Sphere) -> int:
    """
    Push particles inside ``sphere`` onto its surface along the radius.

    A particle exactly at the center has no radial direction; it is pushed
    straight up (+Y).

    Args:
        positions: Particle positions [N, 3], modified in-place.
        sphere: The collider.

    Returns:
        Number of particles moved.
    """
    v = positions - sphere.center
    dist = norm(v)
    inside = dist < sphere.radius
    if not np.any(inside):
        return 0

    degenerate = inside & (dist < DEGENERATE_EPS)
    regular = inside & ~degenerate

    scale = sphere.radius / dist[regular]
    positions[regular] = sphere.center + v[regular] * scale[:, None]
    if np.any(degenerate):
        positions[degenerate] = sphere.center + vec3(0.0, sphere.radius, 0.0)
    return int(np.count_nonzero(inside))


def collide_box(positions: np.ndarray, box: Aabb) -> int:
    """
    Keep particles on the correct side of ``box``.

    Exclude boxes move contained particles to the nearest surface point;
    containing boxes clamp outside particles back onto the box.

    Returns:
        Number of particles moved.
    """
    inside = box.contains(positions)
    if box.contain:
        hit = ~inside
        if np.any(hit):
            positions[hit] = box.nearest(positions[hit])
    else:
        hit = inside
        if np.any(hit):
            positions[hit] = box.nearest_on_surface(positions[hit])
    return int(np.count_nonzero(hit))


def quad_contacts(positions: np.ndarray, quad: CollisionQuad) -> np.ndarray:
    """
    Indices of particles inside the quad's capture band.

    A particle is in the band when its in-plane coordinates lie within the
    quad's bounds and its distance to the plane is below ``quad.band``.
    """
    u, v = quad.in_plane_axes
    lo = quad.corners.min(axis=0)
    hi = quad.corners.max(axis=0)
    within = (
        (positions[:, u] >= lo[u]) & (positions[:, u] <= hi[u]) &
        (positions[:, v] >= lo[v]) & (positions[:, v] <= hi[v])
    )
    near = np.abs(positions[:, quad.axis] - quad.height) < quad.band
    return np.flatnonzero(within & near)


@dataclass
class ContactPins:
    """
    Permanent pins created by quad contacts.

    Each particle is pinned at most once, so the collection never grows
    beyond the particle count.

    Attributes:
        pins: Pins in creation order.
    """
    pins: list[PointConstraint] = field(default_factory=list)
    _pinned: set[int] = field(default_factory=set, repr=False)

    def __len__(self) -> int:
        return len(self.pins)

    def is_pinned(self, index: int) -> bool:
        return index in self._pinned

    def add(self, positions: np.ndarray, indices) -> int:
        """Pin each not-yet-pinned particle at its current position."""
        added = 0
        for idx in indices:
            idx = int(idx)
            if idx in self._pinned:
                continue
            self._pinned.add(idx)
            self.pins.append(PointConstraint(index=idx, target=positions[idx]))
            added += 1
        if added:
            logger.debug("Quad contact pinned %d particles (%d total)", added, len(self.pins))
        return added

    def apply(self, positions: np.ndarray) -> None:
        for c in self.pins:
            c.apply(positions)

    def clear(self) -> None:
        self.pins.clear()
        self._pinned.clear()
