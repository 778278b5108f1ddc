"""
Tests for map to vehicle frame transforms.
"""

import numpy as np
import pytest

from mpc_controller.transforms import to_vehicle_frame, to_world_frame


def test_point_ahead_lies_on_x_axis():
    """A waypoint straight ahead of the vehicle maps onto the x axis."""
    psi = np.pi / 3
    ptsx = [10.0 + 5.0 * np.cos(psi)]
    ptsy = [-4.0 + 5.0 * np.sin(psi)]

    xs, ys = to_vehicle_frame(ptsx, ptsy, 10.0, -4.0, psi)

    np.testing.assert_allclose(xs, [5.0])
    np.testing.assert_allclose(ys, [0.0], atol=1e-12)


def test_point_left_has_positive_y():
    xs, ys = to_vehicle_frame([0.0], [3.0], 0.0, 0.0, 0.0)
    assert xs[0] == pytest.approx(0.0)
    assert ys[0] == pytest.approx(3.0)

    # heading north, a point to the west is on the left
    xs, ys = to_vehicle_frame([-2.0], [0.0], 0.0, 0.0, np.pi / 2)
    assert xs[0] == pytest.approx(0.0, abs=1e-12)
    assert ys[0] == pytest.approx(2.0)


def test_round_trip():
    """Transforming to the vehicle frame and back returns the waypoints."""
    rng = np.random.default_rng(0)
    ptsx = rng.uniform(-200, 200, 6)
    ptsy = rng.uniform(-200, 200, 6)
    pose = (37.5, -120.25, 2.4)

    xs, ys = to_vehicle_frame(ptsx, ptsy, *pose)
    back_x, back_y = to_world_frame(xs, ys, *pose)

    np.testing.assert_allclose(back_x, ptsx, atol=1e-9)
    np.testing.assert_allclose(back_y, ptsy, atol=1e-9)


def test_distances_preserved():
    ptsx = np.array([1.0, 4.0, 9.0])
    ptsy = np.array([2.0, -1.0, 5.0])

    xs, ys = to_vehicle_frame(ptsx, ptsy, 3.0, 3.0, -0.8)

    np.testing.assert_allclose(np.hypot(xs - xs[0], ys - ys[0]),
                               np.hypot(ptsx - ptsx[0], ptsy - ptsy[0]))


def test_mismatched_lengths():
    with pytest.raises(ValueError):
        to_vehicle_frame([1.0, 2.0], [1.0], 0.0, 0.0, 0.0)
