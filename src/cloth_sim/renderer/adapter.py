# MIT License (see LICENSE)
"""
Renderer adapters for cloth visualization and recording.

The simulation has no graphics dependency. A renderer receives the particle
positions and the triangle list once per frame, after the step has finished,
so every frame it sees is a consistent snapshot.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

import numpy as np

from ..util import cross, norm

if TYPE_CHECKING:
    from ..cloth import Cloth


def vertex_normals(positions: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    """
    Per-vertex normals for lighting.

    Each triangle (a, b, c) contributes its face normal (c - b) × (a - b),
    weighted by its area, to its three vertices; the sums are normalized.
    Vertices with no (or only degenerate) triangles get a zero normal.

    Args:
        positions: Vertex positions [N, 3].
        triangles: Triangle indices [T, 3].

    Returns:
        Unit normals [N, 3].
    """
    normals = np.zeros_like(positions, dtype=np.float64)
    if len(triangles) == 0:
        return normals
    a = positions[triangles[:, 0]]
    b = positions[triangles[:, 1]]
    c = positions[triangles[:, 2]]
    face = cross(c - b, a - b)
    for k in range(3):
        np.add.at(normals, triangles[:, k], face)
    length = norm(normals)[:, None]
    np.divide(normals, length, out=normals, where=length > 1e-12)
    return normals


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses hook a graphics backend (OpenGL, matplotlib, a web viewer...)
    into the three calls below.

    Usage:
        renderer.begin_frame(cloth.time)
        renderer.draw_cloth(cloth.positions, cloth.triangles, cloth.tex_coords)
        renderer.end_frame()

    Or use the convenience method:
        renderer.render_cloth(cloth)
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        """Begin a new frame at simulation time ``time``."""
        ...

    @abstractmethod
    def draw_cloth(self, positions: np.ndarray, triangles: np.ndarray, tex_coords: np.ndarray) -> None:
        """
        Draw the cloth mesh.

        Args:
            positions: Read-only particle positions [N, 3].
            triangles: Triangle indices [T, 3].
            tex_coords: Texture coordinates [N, 2].
        """
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render_cloth(self, cloth: "Cloth") -> None:
        """Render one frame of ``cloth``."""
        self.begin_frame(cloth.time)
        self.draw_cloth(cloth.positions, cloth.triangles, cloth.tex_coords)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Text renderer for development and testing.

    Writes a one-line summary of the mesh per frame.

    Example:
        renderer = DebugRenderer()
        renderer.render_cloth(cloth)

    Output:
        === Frame t=0.0300 ===
        900 particles, 1682 triangles, centroid (0.00, 29.96, -1.00)
          bounds (-30.00, 29.96, -30.00) .. (28.00, 29.96, 28.00)
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, also print the bounding box.
        """
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, time: float) -> None:
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def draw_cloth(self, positions: np.ndarray, triangles: np.ndarray, tex_coords: np.ndarray) -> None:
        if len(positions) == 0:
            self.output.write("empty cloth\n")
            return
        c = positions.mean(axis=0)
        self.output.write(
            f"{len(positions)} particles, {len(triangles)} triangles, "
            f"centroid ({c[0]:.2f}, {c[1]:.2f}, {c[2]:.2f})\n"
        )
        if self.verbose:
            lo = positions.min(axis=0)
            hi = positions.max(axis=0)
            self.output.write(
                f"  bounds ({lo[0]:.2f}, {lo[1]:.2f}, {lo[2]:.2f}) .. ({hi[0]:.2f}, {hi[1]:.2f}, {hi[2]:.2f})\n"
            )

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for timing the simulation without drawing."""

    def begin_frame(self, time: float) -> None:
        pass

    def draw_cloth(self, positions: np.ndarray, triangles: np.ndarray, tex_coords: np.ndarray) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Records a copy of every frame.

    Frames own their arrays, so later steps never alter a recorded frame.

    Example:
        renderer = BufferedRenderer(normals=True)
        for _ in range(100):
            cloth.time_step()
            renderer.render_cloth(cloth)
        last = renderer.frames[-1]["positions"]
    """

    def __init__(self, normals: bool = False):
        self.normals = normals
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, time: float) -> None:
        self._current_frame = {"time": time}

    def draw_cloth(self, positions: np.ndarray, triangles: np.ndarray, tex_coords: np.ndarray) -> None:
        if self._current_frame is None:
            return
        self._current_frame["positions"] = np.array(positions, dtype=np.float64)
        self._current_frame["triangles"] = triangles
        if self.normals:
            self._current_frame["normals"] = vertex_normals(positions, triangles)

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
