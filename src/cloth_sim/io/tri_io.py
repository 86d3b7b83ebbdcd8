# MIT License (see LICENSE)
"""
Triangle model (.tri) export.

Text format, one triangle per line after a count line:

    <T>
    ax ay az bx by bz cx cy cz RRGGBB
    ...

Vertex coordinates use printf ``%f`` formatting; the color is a 6-digit hex
RGB string (``ffffff`` for the untextured white the exporter writes by
default).
"""
from __future__ import annotations
import logging
import re
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^[0-9a-fA-F]{6}$")


def _check_color(color: str) -> str:
    if not _HEX_COLOR.match(color):
        raise ValueError(f"Color must be a 6-digit hex RGB string, got {color!r}")
    return color


def write_tri_model(
    path: str,
    positions: np.ndarray,
    triangles: np.ndarray,
    color: str | Sequence[str] = "ffffff",
) -> int:
    """
    Write the current mesh as a .tri file.

    Args:
        path: Output file path.
        positions: Particle positions [N, 3].
        triangles: Triangle indices [T, 3].
        color: One hex color for every triangle, or one per triangle.

    Returns:
        Number of triangles written.
    """
    tris = np.asarray(triangles)
    if isinstance(color, str):
        colors = [_check_color(color)] * len(tris)
    else:
        colors = [_check_color(c) for c in color]
        if len(colors) != len(tris):
            raise ValueError(f"Got {len(colors)} colors for {len(tris)} triangles")

    logger.info("Writing to %s (%d triangles)", path, len(tris))
    corners = np.asarray(positions)[tris]
    with open(path, "w", encoding="utf-8") as f:
        f.write(f"{len(tris)}\n")
        for verts, c in zip(corners, colors):
            f.write(" ".join(f"{v:f}" for v in verts.ravel()))
            f.write(f" {c}\n")
    return len(tris)


def read_tri_model(path: str) -> tuple[np.ndarray, list[str]]:
    """
    Read a .tri file.

    Returns:
        Tuple (vertices [T, 3, 3], colors [T]).

    Raises:
        ValueError: If the file is malformed.
    """
    with open(path, "r", encoding="utf-8") as f:
        lines = [ln for ln in f.read().splitlines() if ln.strip()]
    if not lines:
        raise ValueError(f"Empty triangle file: {path}")

    count = int(lines[0])
    rows = lines[1:]
    if len(rows) != count:
        raise ValueError(f"Header says {count} triangles but file has {len(rows)}")

    verts = np.zeros((count, 3, 3), dtype=np.float64)
    colors: list[str] = []
    for k, row in enumerate(rows):
        parts = row.split()
        if len(parts) != 10:
            raise ValueError(f"Line {k + 2}: expected 9 floats and a color, got {len(parts)} fields")
        verts[k] = np.array([float(p) for p in parts[:9]]).reshape(3, 3)
        colors.append(_check_color(parts[9]))
    return verts, colors
