import logging

import numpy as np
import pytest

from cloth_sim.config import ClothConfig, ClothConfigError
from cloth_sim.constraints.solver import PointConstraint, RodConstraint, SlideConstraint
from cloth_sim.core.invariants import max_rod_error
from cloth_sim.topology import (
    build_topology,
    build_triangles,
    build_tex_coords,
    grid_positions,
    grid_rods,
)
from cloth_sim.types import Axis, ClothStyle


def key(c):
    if isinstance(c, RodConstraint):
        return ("rod", c.a, c.b, c.rest_length)
    if isinstance(c, PointConstraint):
        return ("point", c.index, tuple(c.target))
    return ("slide", c.index, tuple(c.target), int(c.axes))


@pytest.mark.parametrize("nx,ny,dx,dy", [(2, 2, 1.0, 1.0), (5, 3, 0.5, 2.0), (10, 10, 1.0, 1.0), (1, 4, 1.0, 1.0)])
def test_particle_and_triangle_counts(nx, ny, dx, dy):
    topo = build_topology(ClothConfig(nx=nx, ny=ny, dx=dx, dy=dy, seed=0))
    assert len(topo.particles) == nx * ny
    assert topo.particles.positions.shape == (nx * ny, 3)
    assert len(topo.triangles) == 2 * (nx - 1) * (ny - 1)
    assert topo.tex_coords.shape == (nx * ny, 2)


def test_rod_counts_with_and_without_stiffening():
    nx, ny = 5, 4
    plain = build_topology(ClothConfig(nx=nx, ny=ny, seed=0))
    # horizontal + vertical + 2 diagonals per cell
    assert len(plain.constraints) == 4 * 4 + 5 * 3 + 2 * 4 * 3

    stiff = build_topology(ClothConfig(nx=nx, ny=ny, stiffening=2, seed=0))
    extra = 3 * 4 + 5 * 2 + 2 * 3 * 2
    assert len(stiff.constraints) == len(plain.constraints) + extra
    spans = {round(c.rest_length, 9) for c in stiff.constraints}
    assert round(2 * 2.0, 9) in spans


def test_rest_positions_and_rods_satisfied():
    pos = grid_positions(3, 2, 1.0, 2.0, (0.0, 0.0, 0.0))
    assert np.allclose(pos[0], [-1.5, 0.0, -2.0])
    assert np.allclose(pos[1], [-0.5, 0.0, -2.0])
    assert np.allclose(pos[3], [-1.5, 0.0, 0.0])

    topo = build_topology(ClothConfig(nx=7, ny=6, dx=1.5, dy=0.5, stiffening=3, seed=1))
    assert max_rod_error(topo.particles.positions, topo.constraints) < 1e-12
    assert np.array_equal(topo.particles.positions, topo.particles.previous)
    assert np.allclose(topo.particles.positions[:, 1], 30.0)


def test_triangle_winding_faces_up():
    tris = build_triangles(3, 2)
    assert tris[0].tolist() == [0, 3, 4]
    assert tris[1].tolist() == [0, 4, 1]

    pos = grid_positions(6, 5, 1.0, 1.0, (0.0, 0.0, 0.0))
    tris = build_triangles(6, 5)
    a, b, c = pos[tris[:, 0]], pos[tris[:, 1]], pos[tris[:, 2]]
    n = np.cross(c - b, a - b)
    assert np.all(n[:, 1] > 0)
    assert np.allclose(n[:, [0, 2]], 0.0)


def test_tex_coords():
    uv = build_tex_coords(4, 2, 3.0)
    assert np.allclose(uv[0], [0.0, 0.0])
    assert np.allclose(uv[2 + 4 * 1], [1.5, 1.5])


def test_grid_rods_span_lengths():
    rods = grid_rods(3, 3, 1.0, 2.0, span=2)
    lengths = sorted({round(r.rest_length, 9) for r in rods})
    assert lengths == sorted({2.0, 4.0, round(2 * np.hypot(1.0, 2.0), 9)})


def test_curtain_styles():
    cfg = ClothConfig(nx=9, ny=3, dx=1.0, dy=1.0, seed=0)

    curtain = build_topology(cfg.with_changes(style=ClothStyle.CURTAIN))
    pins = [c for c in curtain.constraints if isinstance(c, PointConstraint)]
    assert sorted(p.index for p in pins) == [0, 4, 8]
    for p in pins:
        assert np.array_equal(p.target, curtain.particles.positions[p.index])

    sliding = build_topology(cfg.with_changes(style=ClothStyle.SLIDING_CURTAIN))
    points = [c for c in sliding.constraints if isinstance(c, PointConstraint)]
    slides = [c for c in sliding.constraints if isinstance(c, SlideConstraint)]
    assert [p.index for p in points] == [0]
    assert sorted(s.index for s in slides) == [4, 8]
    assert all(s.axes == Axis.Y | Axis.Z for s in slides)

    pleated = build_topology(ClothConfig(nx=21, ny=2, dx=1.0, dy=1.0, style="pleated_curtain", seed=0))
    pins = sorted((c for c in pleated.constraints if isinstance(c, PointConstraint)), key=lambda c: c.index)
    assert [p.index for p in pins] == [0, 10, 20]
    for p in pins:
        rest = pleated.particles.positions[p.index]
        assert p.target[0] == pytest.approx(0.7 * rest[0])
        assert p.target[1] == rest[1] and p.target[2] == rest[2]

    table = build_topology(cfg)
    assert all(isinstance(c, RodConstraint) for c in table.constraints)


def test_shuffle_is_seeded_permutation():
    cfg = ClothConfig(nx=10, ny=10, style=ClothStyle.CURTAIN, seed=3)
    a = [key(c) for c in build_topology(cfg).constraints]
    b = [key(c) for c in build_topology(cfg).constraints]
    c = [key(c) for c in build_topology(cfg.with_changes(seed=4)).constraints]
    assert a == b
    assert a != c
    assert sorted(a) == sorted(c)


@pytest.mark.parametrize("changes", [
    {"nx": 0},
    {"ny": -2},
    {"dx": 0.0},
    {"dy": -1.0},
    {"dt": 0.0},
    {"damping": 0.0},
    {"damping": 1.5},
    {"stiffening": 0},
    {"iterations": -1},
    {"solver": "jacobi"},
    {"nx": 3.0},
    {"ny": True},
    {"stiffening": 2.5},
    {"iterations": 2.5},
    {"iterations": 3.0},
])
def test_invalid_configuration_fails_at_build(changes):
    cfg = ClothConfig(**changes)
    with pytest.raises(ClothConfigError):
        build_topology(cfg)


def test_unknown_style_rejected():
    with pytest.raises(ValueError):
        ClothConfig(style="silk")


def test_build_logs_summary(caplog):
    caplog.set_level(logging.INFO, logger="cloth_sim")
    build_topology(ClothConfig(nx=4, ny=4, seed=0))
    assert "Built 4x4 tablecloth cloth" in caplog.text


def test_numpy_integer_counts_accepted():
    topo = build_topology(ClothConfig(nx=np.int64(3), ny=np.int32(2), iterations=np.int64(4), seed=0))
    assert len(topo.particles) == 6
