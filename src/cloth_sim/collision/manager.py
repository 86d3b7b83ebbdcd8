# MIT License (see LICENSE)
"""
Collider set management.

The ColliderSet owns every collider of a scene and the mode that selects
which of them take part in the relaxation loop. Only one kind is active at a
time: spheres, exclude-boxes, contain-boxes, or quads. Moving the colliders
moves only the active kind, matching the interactive controls the set was
designed for.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from ..types import CollisionMode
from ..util import f64
from .shapes import Sphere, Aabb, CollisionQuad, horizontal_quad
from .contact import collide_sphere, collide_box, quad_contacts

if TYPE_CHECKING:
    from .contact import ContactPins

logger = logging.getLogger(__name__)


@dataclass
class ColliderSet:
    """
    All colliders of a scene plus the active collision mode.

    Attributes:
        spheres: Sphere colliders (SPHERES mode).
        boxes: Box colliders. Exclude boxes are used in BOXES mode, contain
               boxes in INSIDE_BOXES mode.
        quads: Quad colliders (QUADS mode).
        mode: Active collision mode.
    """
    spheres: list[Sphere] = field(default_factory=list)
    boxes: list[Aabb] = field(default_factory=list)
    quads: list[CollisionQuad] = field(default_factory=list)
    mode: CollisionMode = CollisionMode.SPHERES

    def __post_init__(self) -> None:
        self.mode = CollisionMode(self.mode)

    @classmethod
    def default(cls, mode: CollisionMode = CollisionMode.SPHERES) -> "ColliderSet":
        """
        The demo layout: three overlapping spheres under the cloth, a large
        containing box, a smaller exclude box, and a table-top quad at y=0.
        """
        spheres = [
            Sphere(center=(-5.0, 0.0, -4.0), radius=10.0),
            Sphere(center=(5.0, 0.0, -4.0), radius=10.0),
            Sphere(center=(0.0, 0.0, 5.0), radius=10.0),
        ]
        boxes = [
            Aabb(lo=(-35.0, -25.0, -35.0), hi=(35.0, 30.0, 35.0), contain=True),
            Aabb(lo=(-15.0, -10.0, -15.0), hi=(15.0, 10.0, 15.0), contain=False),
        ]
        quads = [horizontal_quad(half_size=15.0, y=0.0, band=0.5)]
        return cls(spheres=spheres, boxes=boxes, quads=quads, mode=mode)

    def set_mode(self, mode: CollisionMode) -> None:
        self.mode = CollisionMode(mode)
        logger.debug("Collision mode set to %s", self.mode.value)

    def active_boxes(self) -> list[Aabb]:
        """Boxes that take part in the current mode."""
        if self.mode == CollisionMode.BOXES:
            return [b for b in self.boxes if not b.contain]
        if self.mode == CollisionMode.INSIDE_BOXES:
            return [b for b in self.boxes if b.contain]
        return []

    def move(self, delta) -> None:
        """Translate the colliders of the active mode by ``delta``."""
        d = f64(delta)
        if self.mode == CollisionMode.SPHERES:
            self.spheres = [s.translated(d) for s in self.spheres]
        elif self.mode == CollisionMode.BOXES:
            self.boxes = [b.translated(d) if not b.contain else b for b in self.boxes]
        elif self.mode == CollisionMode.INSIDE_BOXES:
            self.boxes = [b.translated(d) if b.contain else b for b in self.boxes]
        elif self.mode == CollisionMode.QUADS:
            self.quads = [q.translated(d) for q in self.quads]

    def project(self, positions: np.ndarray, contact_pins: "ContactPins | None" = None) -> int:
        """
        Run one collision pass for the active mode.

        Args:
            positions: Particle positions [N, 3], modified in-place.
            contact_pins: Receives pins for quad contacts. Without it, quad
                          mode has no effect.

        Returns:
            Number of particles moved or newly pinned.
        """
        hits = 0
        if self.mode == CollisionMode.SPHERES:
            for s in self.spheres:
                hits += collide_sphere(positions, s)
        elif self.mode in (CollisionMode.BOXES, CollisionMode.INSIDE_BOXES):
            for b in self.active_boxes():
                hits += collide_box(positions, b)
        elif self.mode == CollisionMode.QUADS and contact_pins is not None:
            for q in self.quads:
                hits += contact_pins.add(positions, quad_contacts(positions, q))
        return hits
