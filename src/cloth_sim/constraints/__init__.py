# MIT License (see LICENSE)
"""
Constraints and the relaxation solver.

This subpackage provides:
    - PointConstraint, RodConstraint, SlideConstraint: the constraint variants.
    - relax: the fixed-pass collision/constraint relaxation loop.
    - pack_constraints: colour batching for the vectorised solver mode.
    - GrabLayer: transient pins for interactive dragging.

Typical usage:
    from cloth_sim.constraints import RodConstraint, relax

    rods = [RodConstraint(a=0, b=1, rest_length=1.0)]
    relax(positions, rods, passes=20)
"""
from .solver import (
    PointConstraint,
    RodConstraint,
    SlideConstraint,
    Constraint,
    PackedConstraints,
    apply_constraints,
    pack_constraints,
    relax,
)
from .grab import GrabLayer

__all__ = [
    # Variants
    "PointConstraint",
    "RodConstraint",
    "SlideConstraint",
    "Constraint",
    # Solver
    "PackedConstraints",
    "apply_constraints",
    "pack_constraints",
    "relax",
    # Interaction
    "GrabLayer",
]
