import numpy as np

from cloth_sim.constraints import GrabLayer, relax
from cloth_sim.topology import grid_positions, grid_rods


def test_grab_captures_strictly_within_radius():
    pos = grid_positions(5, 5, 1.0, 1.0, (0.0, 0.0, 0.0))
    layer = GrabLayer(radius=np.sqrt(2.0))
    assert not layer.active
    # center particle plus its four direct neighbours; diagonals sit exactly on the radius
    assert layer.grab(pos, pos[12]) == 5
    assert sorted(c.index for c in layer.constraints) == [7, 11, 12, 13, 17]
    assert layer.active


def test_grab_replaces_previous_grab():
    pos = grid_positions(5, 5, 1.0, 1.0, (0.0, 0.0, 0.0))
    layer = GrabLayer(radius=0.5)
    assert layer.grab(pos, pos[0]) == 1
    assert layer.grab(pos, pos[24]) == 1
    assert [c.index for c in layer.constraints] == [24]


def test_move_translates_targets_and_relax_follows():
    pos = grid_positions(4, 4, 1.0, 1.0, (0.0, 0.0, 0.0))
    rods = grid_rods(4, 4, 1.0, 1.0)
    layer = GrabLayer(radius=0.5)
    layer.grab(pos, pos[5])
    start = pos[5].copy()
    layer.move([0.0, 0.5, 0.0])
    layer.move([0.0, 0.5, 0.0])
    relax(pos, rods, passes=10, grab_constraints=layer.constraints)
    assert np.allclose(pos[5], start + [0.0, 1.0, 0.0])
    # neighbours were dragged along
    assert pos[6, 1] > 0.0

    layer.release()
    assert layer.constraints == []
