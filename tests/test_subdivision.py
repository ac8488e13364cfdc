import numpy as np

from diffgrowth import subdivide


def test_long_edge_gets_midpoint():
    positions = np.array([[0.0, 0.0], [10.0, 0.0]])
    new_pos, _, count = subdivide(positions, closed=False, max_edge_length=5.0)
    assert count == 1
    np.testing.assert_array_equal(new_pos, [[0.0, 0.0], [5.0, 0.0], [10.0, 0.0]])


def test_edge_split_only_once_per_pass():
    positions = np.array([[0.0, 0.0], [30.0, 0.0]])
    new_pos, _, count = subdivide(positions, closed=False, max_edge_length=5.0)
    assert count == 1
    assert len(new_pos) == 3


def test_closed_curve_splits_wrap_edge():
    square = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]])
    new_pos, _, count = subdivide(square, closed=True, max_edge_length=5.0)
    assert count == 4
    np.testing.assert_array_equal(new_pos, [
        [0.0, 0.0], [5.0, 0.0], [10.0, 0.0], [10.0, 5.0],
        [10.0, 10.0], [5.0, 10.0], [0.0, 10.0], [0.0, 5.0],
    ])


def test_open_curve_has_no_wrap_edge():
    positions = np.array([[0.0, 0.0], [4.0, 0.0], [4.0, 4.0]])
    new_pos, _, count = subdivide(positions, closed=False, max_edge_length=5.0)
    assert count == 0
    np.testing.assert_array_equal(new_pos, positions)

    _, _, count = subdivide(positions, closed=True, max_edge_length=5.0)
    assert count == 1


def test_short_edges_untouched():
    positions = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0]])
    new_pos, _, count = subdivide(positions, closed=True, max_edge_length=5.0)
    assert count == 0
    np.testing.assert_array_equal(new_pos, positions)


def test_zero_length_edge_not_split():
    positions = np.array([[2.0, 2.0], [2.0, 2.0], [3.0, 2.0]])
    _, _, count = subdivide(positions, closed=False, max_edge_length=0.5)
    assert count == 1  # only the (2,2)-(3,2) edge


def test_inserted_points_start_at_rest():
    positions = np.array([[0.0, 0.0], [10.0, 0.0], [20.0, 0.0]])
    velocities = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
    _, new_vel, count = subdivide(positions, closed=False, max_edge_length=5.0, velocities=velocities)
    assert count == 2
    np.testing.assert_array_equal(new_vel, [
        [1.0, 1.0], [0.0, 0.0], [2.0, 2.0], [0.0, 0.0], [3.0, 3.0],
    ])


def test_input_not_mutated():
    positions = np.array([[0.0, 0.0], [10.0, 0.0]])
    new_pos, _, _ = subdivide(positions, closed=False, max_edge_length=5.0)
    new_pos[0, 0] = 99.0
    np.testing.assert_array_equal(positions, [[0.0, 0.0], [10.0, 0.0]])


def test_point_count_never_drops():
    rng = np.random.default_rng(7)
    positions = rng.uniform(0, 20, size=(30, 2))
    new_pos, _, count = subdivide(positions, closed=True, max_edge_length=3.0)
    assert count > 0
    assert len(new_pos) == len(positions) + count
