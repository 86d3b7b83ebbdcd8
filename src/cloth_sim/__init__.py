# MIT License (see LICENSE)
"""
cloth_sim - A position-based cloth simulation engine.

A cloth is a grid of point masses joined by distance constraints, advanced
with Verlet integration and a fixed number of relaxation passes per step,
colliding with spheres, boxes and sticky quads.

Main entry points:
    - Cloth: The simulation controller (step, reset, colliders, grabbing).
    - ClothConfig: All simulation parameters.
    - ClothStyle, CollisionMode: Style and collider selection.

Submodules:
    - constraints: Point/Rod/Slide constraints, relaxation, grab layer.
    - collision: Collider shapes and projection.
    - core: Forces, integration and diagnostics.
    - io: JSON configuration and .tri mesh export.
    - renderer: Optional visualization adapters.

Example:
    from cloth_sim import Cloth, ClothConfig, ClothStyle

    cloth = Cloth(ClothConfig(nx=20, ny=20, style=ClothStyle.CURTAIN, seed=1))
    for _ in range(100):
        cloth.time_step()
    print(cloth.positions.mean(axis=0))
"""
from .cloth import Cloth
from .config import ClothConfig, ClothConfigError
from .types import ClothStyle, CollisionMode, Axis, ParticleSet
from .topology import build_topology, Topology

__all__ = [
    # Core simulation
    "Cloth",
    "ClothConfig",
    "ClothConfigError",
    # Enumerations
    "ClothStyle",
    "CollisionMode",
    "Axis",
    # Topology
    "ParticleSet",
    "Topology",
    "build_topology",
]
