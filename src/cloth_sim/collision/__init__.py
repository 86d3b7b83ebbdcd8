# MIT License (see LICENSE)
"""
Collision subsystem.

This subpackage provides:
    - Shapes: Sphere, Aabb (exclude or contain), CollisionQuad.
    - Projection: collide_sphere, collide_box, quad_contacts.
    - ContactPins: bounded set of pins created by quad contacts.
    - ColliderSet: all colliders plus the active collision mode.

Typical usage:
    from cloth_sim.collision import ColliderSet

    colliders = ColliderSet.default()
    colliders.project(positions)
"""
from .shapes import Sphere, Aabb, CollisionQuad, horizontal_quad
from .contact import collide_sphere, collide_box, quad_contacts, ContactPins
from .manager import ColliderSet

__all__ = [
    # Shapes
    "Sphere",
    "Aabb",
    "CollisionQuad",
    "horizontal_quad",
    # Projection
    "collide_sphere",
    "collide_box",
    "quad_contacts",
    "ContactPins",
    # Set
    "ColliderSet",
]
