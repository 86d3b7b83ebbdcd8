# MIT License (see LICENSE)
"""
Rendering adapters.

This subpackage provides:
    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text output for debugging.
    - NullRenderer: No-op renderer for performance testing.
    - BufferedRenderer: Records frame snapshots for playback or export.
    - vertex_normals: Smooth per-vertex normals for lighting.

The simulation has no rendering dependency; these adapters are optional.
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
    vertex_normals,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
    "vertex_normals",
]
