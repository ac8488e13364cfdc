import numpy as np
import pytest

from diffgrowth.vector import (
    Vector2D,
    cap_magnitudes,
    magnitudes,
    midpoints,
    safe_normalize,
    set_magnitudes,
)


def test_arithmetic():
    a = Vector2D(1, 2)
    b = Vector2D(3, -1)
    assert a + b == Vector2D(4, 1)
    assert a - b == Vector2D(-2, 3)
    assert a * 2 == Vector2D(2, 4)
    assert 2 * a == Vector2D(2, 4)
    assert b / 2 == Vector2D(1.5, -0.5)
    assert -a == Vector2D(-1, -2)


def test_magnitude_and_distance():
    v = Vector2D(3, 4)
    assert v.magnitude == pytest.approx(5.0)
    assert v.magnitude_squared == pytest.approx(25.0)
    assert Vector2D(0, 0).distance_to(v) == pytest.approx(5.0)
    assert Vector2D(1, 1).distance_squared_to(Vector2D(4, 5)) == pytest.approx(25.0)


def test_normalize_zero_vector_stays_zero():
    assert Vector2D(0, 0).normalize() == Vector2D(0, 0)
    assert Vector2D(0, 5).normalize() == Vector2D(0, 1)


def test_limit_clamps_but_never_grows():
    v = Vector2D(3, 4)
    assert v.limit(1.0) == Vector2D(0.6, 0.8)
    assert v.limit(10.0) == v
    assert v.limit(0.0) == Vector2D(0, 0)


def test_with_magnitude_and_dot():
    assert Vector2D(0, 2).with_magnitude(3) == Vector2D(0, 3)
    assert Vector2D(1, 2).dot(Vector2D(3, 4)) == pytest.approx(11.0)


def test_midpoint():
    assert Vector2D(0, 0).midpoint(Vector2D(4, -2)) == Vector2D(2, -1)


def test_conversions():
    v = Vector2D.from_tuple((1.5, 2.5))
    assert v.to_tuple() == (1.5, 2.5)
    np.testing.assert_array_equal(v.to_array(), [1.5, 2.5])
    assert Vector2D.from_array(np.array([7.0, 8.0])) == Vector2D(7, 8)
    c = v.copy()
    c.x = 0
    assert v.x == 1.5


def test_array_magnitudes_and_normalize():
    arr = np.array([[3.0, 4.0], [0.0, 0.0], [0.0, -2.0]])
    np.testing.assert_allclose(magnitudes(arr), [5.0, 0.0, 2.0])
    np.testing.assert_allclose(safe_normalize(arr), [[0.6, 0.8], [0.0, 0.0], [0.0, -1.0]])


def test_set_magnitudes_never_produces_nan():
    arr = np.array([[0.0, 0.0], [10.0, 0.0]])
    out = set_magnitudes(arr, 2.0)
    assert np.all(np.isfinite(out))
    np.testing.assert_allclose(out, [[0.0, 0.0], [2.0, 0.0]])


def test_cap_magnitudes():
    arr = np.array([[3.0, 4.0], [0.1, 0.0]])
    np.testing.assert_allclose(cap_magnitudes(arr, 1.0), [[0.6, 0.8], [0.1, 0.0]])
    np.testing.assert_allclose(cap_magnitudes(arr, 0.0), np.zeros((2, 2)))
    # input untouched
    np.testing.assert_array_equal(arr, [[3.0, 4.0], [0.1, 0.0]])


def test_midpoints():
    a = np.array([[0.0, 0.0], [2.0, 2.0]])
    b = np.array([[2.0, 0.0], [4.0, 6.0]])
    np.testing.assert_array_equal(midpoints(a, b), [[1.0, 0.0], [3.0, 4.0]])
