import numpy as np
import pytest

from cloth_sim.collision import (
    Aabb,
    ColliderSet,
    CollisionQuad,
    ContactPins,
    Sphere,
    collide_box,
    collide_sphere,
    horizontal_quad,
    quad_contacts,
)
from cloth_sim.types import CollisionMode


def test_sphere_pushes_to_surface_along_radius():
    s = Sphere(center=(0.0, 0.0, 0.0), radius=10.0)
    pos = np.array([[2.0, 0.0, 0.0], [11.0, 0.0, 0.0], [1.0, 2.0, -2.0]])
    moved = collide_sphere(pos, s)
    assert moved == 2
    assert np.allclose(pos[0], [10.0, 0.0, 0.0])
    assert np.allclose(pos[1], [11.0, 0.0, 0.0])
    assert np.linalg.norm(pos[2]) == pytest.approx(10.0)
    assert np.allclose(pos[2] / 10.0, np.array([1.0, 2.0, -2.0]) / 3.0)


def test_sphere_with_offset_center():
    s = Sphere(center=(-5.0, 0.0, -4.0), radius=10.0)
    pos = np.array([[-5.0, 3.0, -4.0]])
    collide_sphere(pos, s)
    assert np.allclose(pos[0], [-5.0, 10.0, -4.0])


def test_sphere_degenerate_center_goes_up():
    s = Sphere(center=(1.0, 2.0, 3.0), radius=4.0)
    pos = np.array([[1.0, 2.0, 3.0]])
    assert collide_sphere(pos, s) == 1
    assert np.all(np.isfinite(pos))
    assert np.allclose(pos[0], [1.0, 6.0, 3.0])


def test_exclude_box_moves_to_nearest_face():
    box = Aabb(lo=(-5.0, -5.0, -5.0), hi=(5.0, 5.0, 5.0))
    pos = np.array([[4.9, 0.0, 0.0], [6.0, 0.0, 0.0], [0.0, 0.0, -4.5]])
    assert collide_box(pos, box) == 2
    assert np.allclose(pos[0], [5.0, 0.0, 0.0])
    assert np.allclose(pos[1], [6.0, 0.0, 0.0])
    assert np.allclose(pos[2], [0.0, 0.0, -5.0])


def test_contain_box_clamps_outside_points():
    box = Aabb(lo=(-5.0, -5.0, -5.0), hi=(5.0, 5.0, 5.0), contain=True)
    pos = np.array([[7.0, 0.0, 0.0], [7.0, -8.0, 2.0], [1.0, 1.0, 1.0]])
    assert collide_box(pos, box) == 2
    assert np.allclose(pos[0], [5.0, 0.0, 0.0])
    assert np.allclose(pos[1], [5.0, -5.0, 2.0])
    assert np.allclose(pos[2], [1.0, 1.0, 1.0])


def test_box_helpers():
    box = Aabb(lo=(0.0, 0.0, 0.0), hi=(2.0, 4.0, 6.0))
    assert np.allclose(box.center, [1.0, 2.0, 3.0])
    assert np.allclose(box.extent, [2.0, 4.0, 6.0])
    assert box.contains(np.array([2.0, 4.0, 6.0]))
    assert not box.contains(np.array([2.1, 0.0, 0.0]))
    assert box.nearest_on_surface(np.array([1.0, 0.5, 3.0])).shape == (3,)
    assert np.allclose(box.nearest_on_surface(np.array([1.0, 0.5, 3.0])), [1.0, 0.0, 3.0])


def test_invalid_shapes():
    with pytest.raises(ValueError):
        Sphere(center=(0, 0, 0), radius=0.0)
    with pytest.raises(ValueError):
        Aabb(lo=(1, 1, 1), hi=(0, 2, 2))
    with pytest.raises(ValueError):
        CollisionQuad(corners=[(0, 0, 0), (1, 0, 0), (1, 0, 1)], normal=(0, 1, 0))
    with pytest.raises(ValueError):
        CollisionQuad(corners=np.zeros((4, 3)), normal=(0, 0, 0))


def test_quad_capture_band():
    quad = horizontal_quad(half_size=15.0, y=0.0, band=0.5)
    assert quad.axis == 1
    assert quad.height == 0.0
    assert quad.in_plane_axes == (0, 2)
    pos = np.array([
        [0.0, 0.3, 0.0],
        [0.0, 0.6, 0.0],
        [16.0, 0.0, 0.0],
        [-14.0, -0.2, 14.0],
    ])
    assert quad_contacts(pos, quad).tolist() == [0, 3]


def test_contact_pins_are_deduplicated():
    pins = ContactPins()
    pos = np.array([[0.0, 0.1, 0.0], [1.0, 0.2, 0.0], [2.0, 0.0, 0.0]])
    assert pins.add(pos, [0, 1]) == 2
    pos[0] = [9.0, 9.0, 9.0]
    assert pins.add(pos, [0, 1, 2]) == 1
    assert len(pins) == 3
    assert pins.is_pinned(0) and pins.is_pinned(2)

    # pins hold the first contact position
    pins.apply(pos)
    assert np.allclose(pos[0], [0.0, 0.1, 0.0])

    pins.clear()
    assert len(pins) == 0
    assert not pins.is_pinned(0)


def test_collider_set_quad_mode_bounds_pins():
    colliders = ColliderSet.default(CollisionMode.QUADS)
    pins = ContactPins()
    pos = np.zeros((20, 3))
    pos[:, 0] = np.linspace(-5.0, 5.0, 20)
    pos[:, 1] = 0.1
    before = pos.copy()
    for _ in range(5):
        colliders.project(pos, pins)
    assert len(pins) == 20
    # quads pin, they do not move particles
    assert np.array_equal(pos, before)


def test_collider_set_none_and_missing_pins():
    colliders = ColliderSet.default(CollisionMode.NONE)
    pos = np.zeros((3, 3))
    assert colliders.project(pos) == 0
    colliders.set_mode("quads")
    assert colliders.project(pos) == 0


def test_collider_set_modes_select_boxes():
    colliders = ColliderSet.default(CollisionMode.BOXES)
    assert all(not b.contain for b in colliders.active_boxes())
    colliders.set_mode(CollisionMode.INSIDE_BOXES)
    assert all(b.contain for b in colliders.active_boxes())
    colliders.set_mode(CollisionMode.SPHERES)
    assert colliders.active_boxes() == []


def test_inside_boxes_keeps_cloth_in_room():
    colliders = ColliderSet.default(CollisionMode.INSIDE_BOXES)
    pos = np.array([[0.0, -40.0, 0.0], [0.0, 0.0, 0.0]])
    assert colliders.project(pos) == 1
    assert np.allclose(pos[0], [0.0, -25.0, 0.0])
    assert np.allclose(pos[1], [0.0, 0.0, 0.0])


def test_move_only_translates_active_kind():
    colliders = ColliderSet.default(CollisionMode.SPHERES)
    sphere0 = colliders.spheres[0].center.copy()
    box_lo = [b.lo.copy() for b in colliders.boxes]
    quad0 = colliders.quads[0].corners.copy()

    colliders.move([1.0, 0.0, 0.0])
    assert np.allclose(colliders.spheres[0].center, sphere0 + [1.0, 0.0, 0.0])
    assert all(np.allclose(b.lo, lo) for b, lo in zip(colliders.boxes, box_lo))

    colliders.set_mode(CollisionMode.BOXES)
    colliders.move([0.0, 2.0, 0.0])
    contain, exclude = colliders.boxes
    assert np.allclose(contain.lo, box_lo[0])
    assert np.allclose(exclude.lo, box_lo[1] + [0.0, 2.0, 0.0])

    colliders.set_mode(CollisionMode.QUADS)
    colliders.move([0.0, -1.0, 0.0])
    assert np.allclose(colliders.quads[0].corners, quad0 + [0.0, -1.0, 0.0])
    assert colliders.quads[0].height == -1.0
    assert np.allclose(colliders.spheres[0].center, sphere0 + [1.0, 0.0, 0.0])
