# MIT License (see LICENSE)
"""
The cloth simulation controller.

The Cloth class owns the particle arena, the constraint topology, the
collider set and the grab layer, and advances them one frame at a time:

    1. Force accumulation (gravity).
    2. Verlet integration.
    3. Relaxation: ``iterations`` passes of collision projection, structural
       constraints, contact pins and grab pins.

Everything a front end may change (style, stiffening, iteration count,
collider mode and position, grabs) goes through methods on this class and
must not be called while a step is running. Renderers and exporters read
``positions``, ``triangles`` and ``tex_coords``.

Structure:
    - User creates a Cloth from a ClothConfig.
    - User calls cloth.time_step() once per frame.
    - Interaction methods are called between steps.
"""
from __future__ import annotations
import logging
from contextlib import nullcontext
from dataclasses import dataclass, field

import numpy as np

from .config import ClothConfig, ClothConfigError
from .types import ClothStyle, CollisionMode, ParticleSet
from .util import f64
from .profiler import Profiler
from .topology import build_topology
from .core.forces import accumulate_forces
from .core.integrators import verlet_step
from .collision.contact import ContactPins
from .collision.manager import ColliderSet
from .constraints.grab import GrabLayer
from .constraints.solver import Constraint, PackedConstraints, pack_constraints, relax

logger = logging.getLogger(__name__)


@dataclass
class Cloth:
    """
    A simulated cloth.

    Attributes:
        config: Cloth parameters. Replaced (never mutated) by the setters.
        colliders: Collider set. Defaults to the demo layout with the
                   config's collision mode.
        profiler: Optional Profiler timing 'forces', 'integrate', 'relax'.
        time: Simulated time.
        frame: Number of completed steps.
    """
    config: ClothConfig = field(default_factory=ClothConfig)
    colliders: ColliderSet | None = None
    profiler: Profiler | None = None

    # Internal state
    particles: ParticleSet = field(init=False)
    constraints: list[Constraint] = field(init=False, default_factory=list)
    contact_pins: ContactPins = field(init=False, default_factory=ContactPins)
    grab_layer: GrabLayer = field(init=False)
    time: float = field(init=False, default=0.0)
    frame: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.config.validate()
        if self.colliders is None:
            self.colliders = ColliderSet.default(self.config.collision_mode)
        else:
            self.colliders.set_mode(self.config.collision_mode)
        self._rng = np.random.default_rng(self.config.seed)
        self._g = f64(self.config.gravity)
        self._packed: PackedConstraints | None = None
        self.grab_layer = GrabLayer(radius=self.config.rest_diagonal)
        self._rebuild(self.config)

    # ------------------------------------------------------------------
    # Read-only outputs
    # ------------------------------------------------------------------

    @property
    def positions(self) -> np.ndarray:
        """Read-only view of particle positions [N, 3]."""
        view = self.particles.positions.view()
        view.flags.writeable = False
        return view

    @property
    def triangles(self) -> np.ndarray:
        """Triangle vertex indices [T, 3]; fixed until the next rebuild."""
        return self._triangles

    @property
    def tex_coords(self) -> np.ndarray:
        """Per-particle texture coordinates [N, 2]."""
        return self._tex_coords

    @property
    def num_particles(self) -> int:
        return len(self.particles)

    @property
    def num_triangles(self) -> int:
        return len(self._triangles)

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    def _rebuild(self, config: ClothConfig) -> None:
        """Replace the whole topology. Nothing from the old one survives."""
        topo = build_topology(config, self._rng)
        self.config = config
        self.particles = topo.particles
        self.constraints = topo.constraints
        self._triangles = topo.triangles
        self._tex_coords = topo.tex_coords
        self._packed = pack_constraints(self.constraints) if config.solver == "colored" else None
        self.contact_pins.clear()
        # Grab pins index the old arena
        self.grab_layer.release()
        self.grab_layer.radius = config.rest_diagonal

    def reset(self, style: ClothStyle | None = None) -> None:
        """Rebuild the cloth at rest, optionally switching style."""
        style = self.config.style if style is None else ClothStyle(style)
        self._rebuild(self.config.with_changes(style=style))
        self.time = 0.0
        self.frame = 0

    def set_stiffening(self, span: int, style: ClothStyle | None = None) -> None:
        """Change the stiffening span (1 disables it) and rebuild."""
        style = self.config.style if style is None else ClothStyle(style)
        self._rebuild(self.config.with_changes(stiffening=span, style=style))

    def set_resolution(self, nx: int, ny: int, dx: float | None = None, dy: float | None = None) -> None:
        """Change the grid resolution (and optionally spacing) and rebuild."""
        changes = {"nx": nx, "ny": ny}
        if dx is not None:
            changes["dx"] = float(dx)
        if dy is not None:
            changes["dy"] = float(dy)
        self._rebuild(self.config.with_changes(**changes))

    def set_solver(self, solver: str) -> None:
        """Switch between 'gauss_seidel' and 'colored' constraint application."""
        self.config = self.config.with_changes(solver=solver)
        self._packed = pack_constraints(self.constraints) if solver == "colored" else None
        logger.debug("Solver set to %s", solver)

    # ------------------------------------------------------------------
    # Runtime settings
    # ------------------------------------------------------------------

    def set_constraint_iterations(self, n: int) -> None:
        """Set the number of relaxation passes per step (>= 0)."""
        self.config = self.config.with_changes(iterations=n)
        logger.debug("Constraint iterations set to %d", n)

    def set_collision_mode(self, mode: CollisionMode) -> None:
        mode = CollisionMode(mode)
        self.config = self.config.with_changes(collision_mode=mode)
        self.colliders.set_mode(mode)

    def move_colliders(self, delta) -> None:
        """Translate the colliders of the active mode by ``delta``."""
        self.colliders.move(delta)

    def clear_contact_pins(self) -> None:
        """Drop every pin created by quad contacts."""
        self.contact_pins.clear()

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def grab(self, point) -> int:
        """Pin particles near ``point``; returns the number captured."""
        return self.grab_layer.grab(self.particles.positions, point)

    def move_grabbed(self, delta) -> None:
        self.grab_layer.move(delta)

    def release(self) -> None:
        self.grab_layer.release()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def _section(self, name: str):
        return self.profiler.section(name) if self.profiler else nullcontext()

    def time_step(self) -> None:
        """Advance the cloth by one frame of ``config.dt``."""
        cfg = self.config

        with self._section("forces"):
            accumulate_forces(self.particles, self._g)

        with self._section("integrate"):
            verlet_step(self.particles, cfg.dt, cfg.damping)

        with self._section("relax"):
            relax(
                self.particles.positions,
                self._packed if self._packed is not None else self.constraints,
                cfg.iterations,
                colliders=self.colliders,
                grab_constraints=self.grab_layer.constraints,
                contact_pins=self.contact_pins,
            )

        self.time += cfg.dt
        self.frame += 1
