# MIT License (see LICENSE)
"""
Position constraints and the relaxation loop.

This module provides the three constraint variants of the cloth and the
iterated relaxation that satisfies them. It follows the position-based
approach of Jakobsen's "Advanced Character Physics" (GDC 2001): there are no
impulses and no velocities, each constraint directly moves the particles it
references.

Key concepts:
- Relaxation: a single constraint application is one cheap correction, not
  an exact projection. Global agreement between constraints is approached by
  repeating every constraint a fixed number of passes per time step.
- Arena indices: constraints store particle row indices, never arrays.
- Ordering: in the reference ("gauss_seidel") mode constraints are applied
  in list order, so the topology builder shuffles that list to avoid a
  directional bias in convergence.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

import numpy as np

from ..types import Axis
from ..util import f64, norm2

if TYPE_CHECKING:
    from ..collision.contact import ContactPins
    from ..collision.manager import ColliderSet


@dataclass
class PointConstraint:
    """
    Pins a particle to a fixed position.

    Attributes:
        index: Particle row index.
        target: World position the particle is forced to [x, y, z].
    """
    index: int
    target: np.ndarray

    def __post_init__(self) -> None:
        self.target = f64(self.target)

    def apply(self, positions: np.ndarray) -> None:
        positions[self.index] = self.target


@dataclass
class RodConstraint:
    """
    Keeps two particles at a rest distance.

    Each apply() performs one relaxation step using the square-root-free
    approximation

        delta *= L² / (|delta|² + L²) - 0.5

    which is the first-order expansion of the exact half-correction around
    |delta| = L. It always reduces the length error and leaves the pair at or just
    below L: after one call d' - L = -L (d - L)² / (d² + L²).

    Attributes:
        a, b: Particle row indices.
        rest_length: Target distance L.
    """
    a: int
    b: int
    rest_length: float
    rest_length_sq: float = field(init=False)

    def __post_init__(self) -> None:
        self.rest_length = float(self.rest_length)
        self.rest_length_sq = self.rest_length * self.rest_length

    def apply(self, positions: np.ndarray) -> None:
        pa = positions[self.a]
        pb = positions[self.b]
        delta = pb - pa
        d2 = float(norm2(delta))
        # Zero-length rod between coincident particles: nothing to correct.
        if d2 + self.rest_length_sq <= 0.0:
            return
        delta *= self.rest_length_sq / (d2 + self.rest_length_sq) - 0.5
        pa -= delta
        pb += delta


@dataclass
class SlideConstraint:
    """
    Pins a particle only along the axes in ``axes``.

    Used for curtain rings that may slide along a rail: a mask of Y|Z lets
    the particle move freely in X.

    Attributes:
        index: Particle row index.
        target: Reference position; only the masked components are enforced.
        axes: Axis mask (Axis.X | Axis.Y | Axis.Z).
    """
    index: int
    target: np.ndarray
    axes: Axis

    def __post_init__(self) -> None:
        self.target = f64(self.target)
        self.axes = Axis(self.axes)

    def apply(self, positions: np.ndarray) -> None:
        p = positions[self.index]
        if self.axes & Axis.X:
            p[0] = self.target[0]
        if self.axes & Axis.Y:
            p[1] = self.target[1]
        if self.axes & Axis.Z:
            p[2] = self.target[2]

    @property
    def mask(self) -> np.ndarray:
        """Boolean [3] mask of the enforced components."""
        return np.array([bool(self.axes & Axis.X), bool(self.axes & Axis.Y), bool(self.axes & Axis.Z)])


# Closed set of constraint variants
Constraint = PointConstraint | RodConstraint | SlideConstraint


def apply_constraints(constraints: Sequence[Constraint], positions: np.ndarray) -> None:
    """Apply every constraint once, in sequence order."""
    for c in constraints:
        c.apply(positions)


@dataclass
class PackedConstraints:
    """
    Structure-of-arrays form of a constraint list for batched application.

    Rods are split into colour batches: inside one batch no particle appears
    twice, so a batch can be applied as a single vector update without any
    lost correction. Colours are assigned greedily in list order, which keeps
    the result a deterministic function of the (shuffled) constraint list.

    Attributes:
        rod_batches: List of (a, b, rest_length_sq) index/value arrays.
        point_index, point_target: Point constraints [P], [P, 3].
        slide_index, slide_target, slide_mask: Slide constraints [S], [S, 3], [S, 3].
    """
    rod_batches: list[tuple[np.ndarray, np.ndarray, np.ndarray]] = field(default_factory=list)
    point_index: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.intp))
    point_target: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=np.float64))
    slide_index: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.intp))
    slide_target: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=np.float64))
    slide_mask: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=bool))

    @property
    def num_colors(self) -> int:
        return len(self.rod_batches)

    def apply(self, positions: np.ndarray) -> None:
        """Apply every rod batch, then points, then slides."""
        for a, b, rest_sq in self.rod_batches:
            delta = positions[b] - positions[a]
            d2 = norm2(delta)
            denom = d2 + rest_sq
            scale = np.divide(rest_sq, denom, out=np.full_like(denom, 0.5), where=denom > 0.0) - 0.5
            delta *= scale[:, None]
            positions[a] -= delta
            positions[b] += delta

        if len(self.point_index):
            positions[self.point_index] = self.point_target

        if len(self.slide_index):
            rows = positions[self.slide_index]
            np.copyto(rows, self.slide_target, where=self.slide_mask)
            positions[self.slide_index] = rows


def pack_constraints(constraints: Sequence[Constraint]) -> PackedConstraints:
    """
    Convert a constraint list into colour batches and pin arrays.

    Args:
        constraints: Constraints in application order.

    Returns:
        PackedConstraints ready for PackedConstraints.apply().
    """
    batches: list[list[RodConstraint]] = []
    used: dict[int, set[int]] = {}
    points: list[PointConstraint] = []
    slides: list[SlideConstraint] = []

    for c in constraints:
        if isinstance(c, RodConstraint):
            taken = used.setdefault(c.a, set()) | used.setdefault(c.b, set())
            color = 0
            while color in taken:
                color += 1
            if color == len(batches):
                batches.append([])
            batches[color].append(c)
            used[c.a].add(color)
            used[c.b].add(color)
        elif isinstance(c, PointConstraint):
            points.append(c)
        elif isinstance(c, SlideConstraint):
            slides.append(c)
        else:
            raise TypeError(f"Unknown constraint type: {type(c)}")

    packed = PackedConstraints()
    for batch in batches:
        packed.rod_batches.append((
            np.array([r.a for r in batch], dtype=np.intp),
            np.array([r.b for r in batch], dtype=np.intp),
            np.array([r.rest_length_sq for r in batch], dtype=np.float64),
        ))
    if points:
        packed.point_index = np.array([p.index for p in points], dtype=np.intp)
        packed.point_target = np.array([p.target for p in points], dtype=np.float64)
    if slides:
        packed.slide_index = np.array([s.index for s in slides], dtype=np.intp)
        packed.slide_target = np.array([s.target for s in slides], dtype=np.float64)
        packed.slide_mask = np.array([s.mask for s in slides], dtype=bool)
    return packed


def relax(
    positions: np.ndarray,
    constraints: Sequence[Constraint] | PackedConstraints,
    passes: int,
    colliders: "ColliderSet | None" = None,
    grab_constraints: Sequence[Constraint] = (),
    contact_pins: "ContactPins | None" = None,
) -> None:
    """
    Run the fixed-count relaxation loop.

    Each pass:
        1. Projects particles out of (or into) the active colliders.
        2. Applies every structural constraint once, then the contact pins.
        3. Applies every grab constraint.

    There is no convergence test; more passes mean a stiffer cloth at a
    linear cost.

    Args:
        positions: Particle positions [N, 3], modified in-place.
        constraints: Structural constraints, as a list (applied in order)
                     or pre-packed colour batches.
        passes: Number of relaxation passes (>= 0).
        colliders: Optional collider set.
        grab_constraints: Transient pins owned by the grab layer.
        contact_pins: Collects and applies pins created by quad contacts.
    """
    packed = constraints if isinstance(constraints, PackedConstraints) else None

    for _ in range(passes):
        if colliders is not None:
            colliders.project(positions, contact_pins)

        if packed is not None:
            packed.apply(positions)
        else:
            for c in constraints:
                c.apply(positions)

        if contact_pins is not None:
            contact_pins.apply(positions)

        for c in grab_constraints:
            c.apply(positions)
