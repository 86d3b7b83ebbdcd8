# MIT License (see LICENSE)
"""
Interactive grab layer.

A grab is the cloth's version of a mouse joint: on pointer-down every
particle within the capture radius of the picked point is pinned where it
currently is, pointer motion translates those pins, and pointer-up drops
them. The pins are ordinary PointConstraints, solved in every relaxation
pass after the structural constraints, but they belong to this layer and
survive topology rebuilds only as long as the caller keeps grabbing.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

import numpy as np

from ..util import f64, norm
from .solver import PointConstraint

logger = logging.getLogger(__name__)


@dataclass
class GrabLayer:
    """
    Holds the transient pins of a drag interaction.

    Attributes:
        radius: Capture radius. The cloth uses its rest diagonal spacing.
        constraints: Active grab pins (empty when nothing is held).
    """
    radius: float
    constraints: list[PointConstraint] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return bool(self.constraints)

    def grab(self, positions: np.ndarray, point) -> int:
        """
        Pin every particle strictly within ``radius`` of ``point``.

        Any previous grab is released first.

        Args:
            positions: Particle positions [N, 3].
            point: Picked world point [x, y, z].

        Returns:
            Number of particles captured.
        """
        self.constraints.clear()
        pt = f64(point)
        d = norm(positions - pt)
        for idx in np.flatnonzero(d < self.radius):
            self.constraints.append(PointConstraint(index=int(idx), target=positions[idx]))
        logger.debug("Grabbed %d particles at %s", len(self.constraints), pt)
        return len(self.constraints)

    def move(self, delta) -> None:
        """Translate every grab target by ``delta``."""
        d = f64(delta)
        for c in self.constraints:
            c.target = c.target + d

    def release(self) -> None:
        """Drop all grab pins."""
        if self.constraints:
            logger.debug("Released %d grabbed particles", len(self.constraints))
        self.constraints.clear()
