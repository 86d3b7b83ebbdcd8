import numpy as np

from cloth_sim.util import cross, dot, f64, norm, norm2, unit, vec3


def test_f64_copies():
    src = np.array([1, 2, 3])
    v = f64(src)
    src[0] = 9
    assert v.dtype == np.float64
    assert v.tolist() == [1.0, 2.0, 3.0]


def test_vec3_and_dot():
    a = vec3(1.0, 2.0, 3.0)
    b = vec3(4.0, -5.0, 6.0)
    assert dot(a, b) == 4.0 - 10.0 + 18.0
    assert vec3().tolist() == [0.0, 0.0, 0.0]


def test_norms_broadcast_over_rows():
    v = np.array([[3.0, 4.0, 0.0], [0.0, 0.0, 2.0], [0.0, 0.0, 0.0]])
    assert np.allclose(norm2(v), [25.0, 4.0, 0.0])
    assert np.allclose(norm(v), [5.0, 2.0, 0.0])
    assert norm(vec3(1.0, 2.0, 2.0)) == 3.0


def test_unit_and_zero_guard():
    u = unit(vec3(0.0, 3.0, 4.0))
    assert np.allclose(u, [0.0, 0.6, 0.8])
    assert np.array_equal(unit(vec3()), np.zeros(3))
    assert np.array_equal(unit(vec3(1e-14, 0.0, 0.0)), np.zeros(3))


def test_cross():
    x, y, z = vec3(1.0), vec3(0.0, 1.0), vec3(0.0, 0.0, 1.0)
    assert np.allclose(cross(x, y), z)
    assert np.allclose(cross(y, x), -z)
    rows = cross(np.array([x, z]), np.array([y, x]))
    assert np.allclose(rows, [z, y])
