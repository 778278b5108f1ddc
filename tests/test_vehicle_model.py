"""
Tests for the anchor state and latency projection.
"""

import math

import pytest

from mpc_controller.config import MPCConfig
from mpc_controller.vehicle_model import VehicleState, initial_state, project_latency


def test_initial_state_errors():
    """cte is f(0) and epsi is -atan(f'(0)) in the vehicle frame."""
    state = initial_state([0.8, 0.1, 0.0, 0.0], 25.0)

    assert state.x == state.y == state.psi == 0.0
    assert state.v == 25.0
    assert state.cte == pytest.approx(0.8)
    assert state.epsi == pytest.approx(-math.atan(0.1))


def test_zero_latency_is_identity():
    state = VehicleState(0.0, 0.0, 0.0, 63.2, -0.4, 0.07)
    cfg = MPCConfig(latency=0.0)

    assert project_latency(state, 0.3, -0.5, cfg) == state


def test_projection_equations():
    cfg = MPCConfig(latency=0.1)
    state = VehicleState(0.0, 0.0, 0.0, 20.0, 0.5, 0.1)

    projected = project_latency(state, 0.2, 0.5, cfg)

    yaw_rate = 20.0 / cfg.lf * (-0.2)
    assert projected.x == pytest.approx(2.0)
    assert projected.y == pytest.approx(0.0)
    assert projected.psi == pytest.approx(yaw_rate * 0.1)
    assert projected.v == pytest.approx(20.05)
    assert projected.cte == pytest.approx(0.5 + 20.0 * math.sin(0.1) * 0.1)
    assert projected.epsi == pytest.approx(0.1 + yaw_rate * 0.1)


def test_positive_steering_turns_right():
    """With the simulator convention positive steering reduces the heading."""
    state = VehicleState(v=30.0)

    assert project_latency(state, 0.1, 0.0, MPCConfig()).psi < 0
    assert project_latency(state, 0.1, 0.0, MPCConfig(steering_sign=1.0)).psi > 0
