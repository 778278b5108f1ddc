"""
Tests for the ipopt adapter and the control extraction.
"""

import math

import numpy as np
import pytest

from mpc_controller.config import MPCConfig
from mpc_controller.errors import LayoutMismatch, SolveFailed
from mpc_controller.extract import ControlExtractor
from mpc_controller.layout import VariableLayout
from mpc_controller.mpc import MPC
from mpc_controller.mpc_problem import ProblemBuilder
from mpc_controller.solver import SolverAdapter
from mpc_controller.vehicle_model import VehicleState

COEFFS = [0.5, -0.05, 0.001, 0.0]
ANCHOR = VehicleState(0.0, 0.0, 0.0, 30.0, 0.5, math.atan(0.05))


def solve(cfg, state=ANCHOR, coeffs=COEFFS):
    problem = ProblemBuilder(cfg).build(state, coeffs)
    return problem, SolverAdapter(cfg).solve(problem)


def test_solution_pins_initial_state():
    """The first step of the solved trajectory is the anchor state."""
    cfg = MPCConfig(max_solve_time=5.0)
    problem, solution = solve(cfg)

    assert solution.success, solution.status
    assert solution.x.shape == (problem.layout.n_vars,)
    for start, value in zip(problem.layout.state_starts, ANCHOR):
        assert solution.x[start] == pytest.approx(value, abs=1e-6)


def test_solution_respects_actuator_bounds():
    cfg = MPCConfig(max_solve_time=5.0)
    problem, solution = solve(cfg, VehicleState(0.0, 0.0, 0.0, 40.0, 1.5, 0.2))
    lay = problem.layout

    assert solution.success, solution.status
    assert np.all(np.abs(solution.x[lay.block("delta")]) <= cfg.max_steering + 1e-8)
    assert np.all(np.abs(solution.x[lay.block("a")]) <= cfg.max_throttle + 1e-8)


def test_time_budget_exceeded_reports_failure():
    """An unreachable time budget ends in a failed status, not an exception."""
    cfg = MPCConfig(max_solve_time=1e-9)
    problem, solution = solve(cfg)

    assert not solution.success
    assert solution.x.shape == (problem.layout.n_vars,)


def test_controller_raises_solve_failed():
    controller = MPC(MPCConfig(max_solve_time=1e-9))

    with pytest.raises(SolveFailed) as excinfo:
        controller.solve(ANCHOR, COEFFS)

    assert not excinfo.value.solution.success
    assert excinfo.value.solution.status in str(excinfo.value)


def test_extractor_reads_first_actuation_and_positions():
    layout = VariableLayout(4)
    x = np.arange(layout.n_vars, dtype=float)

    out = ControlExtractor(layout).extract(x)

    assert out.steering == layout.delta_start
    assert out.throttle == layout.a_start
    np.testing.assert_array_equal(out.mpc_x, [0, 1, 2, 3])
    np.testing.assert_array_equal(out.mpc_y, [4, 5, 6, 7])


def test_extractor_rejects_wrong_length():
    with pytest.raises(LayoutMismatch):
        ControlExtractor(VariableLayout(10)).extract(np.zeros(77))
