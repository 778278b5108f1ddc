"""Per-cycle MPC pipeline: telemetry in, actuation command out."""

import logging
from dataclasses import dataclass

import numpy as np

from mpc_controller.config import MPCConfig
from mpc_controller.errors import SolveFailed
from mpc_controller.extract import ControlExtractor
from mpc_controller.layout import VariableLayout
from mpc_controller.mpc_problem import ProblemBuilder
from mpc_controller.polynomial import polyfit, sample_path
from mpc_controller.solver import SolverAdapter
from mpc_controller.transforms import to_vehicle_frame
from mpc_controller.vehicle_model import initial_state, project_latency

logger = logging.getLogger(__name__)


@dataclass
class Telemetry:
    ptsx: list  # waypoints, map frame
    ptsy: list
    x: float  # vehicle pose, map frame
    y: float
    psi: float
    speed: float
    steering_angle: float  # command applied during the previous cycle [rad]
    throttle: float

    @classmethod
    def from_message(cls, data):
        """Build from the simulator's telemetry payload."""
        return cls(ptsx=[float(p) for p in data["ptsx"]],
                   ptsy=[float(p) for p in data["ptsy"]],
                   x=float(data["x"]),
                   y=float(data["y"]),
                   psi=float(data["psi"]),
                   speed=float(data["speed"]),
                   steering_angle=float(data["steering_angle"]),
                   throttle=float(data["throttle"]))


@dataclass
class ControlCommand:
    steering: float  # normalized to [-1, 1]
    throttle: float
    mpc_x: list  # predicted trajectory, vehicle frame
    mpc_y: list
    next_x: list  # reference path sample, vehicle frame
    next_y: list
    steering_angle: float = 0.0  # [rad]

    def to_message(self):
        return {"steering_angle": self.steering,
                "throttle": self.throttle,
                "mpc_x": list(self.mpc_x),
                "mpc_y": list(self.mpc_y),
                "next_x": list(self.next_x),
                "next_y": list(self.next_y)}


class MPC:
    '''
    Receding horizon controller

    Only the frozen config is kept between cycles; everything else is
    rebuilt by each call to step.
    '''
    def __init__(self, config=None):
        self.config = config if config is not None else MPCConfig()
        self.layout = VariableLayout(self.config.horizon)

    def solve(self, state, coeffs):
        """
        Solve one NLP
        Args:
            state: anchor VehicleState, vehicle frame
            coeffs: reference polynomial, vehicle frame
        Returns:
            ControlOutput, Solution
        Raises:
            SolveFailed: ipopt did not reach a successful status
        """
        problem = ProblemBuilder(self.config, self.layout).build(state, coeffs)
        solution = SolverAdapter(self.config).solve(problem)
        if not solution.success:
            logger.warning("MPC solve failed: %s after %.3fs",
                           solution.status, solution.solve_time)
            raise SolveFailed(solution)
        return ControlExtractor(self.layout).extract(solution.x), solution

    def step(self, telemetry):
        """
        Run one control cycle
        Args:
            telemetry: Telemetry
        Returns:
            ControlCommand
        Raises:
            InsufficientPoints, DegenerateFit: the waypoints cannot be fitted
            SolveFailed: no command could be computed this cycle
        """
        xs, ys = to_vehicle_frame(telemetry.ptsx, telemetry.ptsy,
                                  telemetry.x, telemetry.y, telemetry.psi)
        coeffs = polyfit(xs, ys, self.config.poly_order)
        logger.debug("Fitted reference polynomial %s", np.array2string(coeffs, precision=4))

        state = initial_state(coeffs, telemetry.speed)
        state = project_latency(state, telemetry.steering_angle, telemetry.throttle, self.config)

        output, _ = self.solve(state, coeffs)
        next_x, next_y = sample_path(coeffs)

        return ControlCommand(steering=output.steering / self.config.max_steering,
                              throttle=output.throttle,
                              mpc_x=output.mpc_x.tolist(),
                              mpc_y=output.mpc_y.tolist(),
                              next_x=next_x.tolist(),
                              next_y=next_y.tolist(),
                              steering_angle=output.steering)
