import logging
import math
from typing import NamedTuple

from mpc_controller.polynomial import polyderiv, polyeval

logger = logging.getLogger(__name__)


class VehicleState(NamedTuple):
    """Kinematic state plus tracking errors: x, y, psi, v, cte, epsi."""
    x: float = 0.0
    y: float = 0.0
    psi: float = 0.0
    v: float = 0.0
    cte: float = 0.0
    epsi: float = 0.0


def initial_state(coeffs, speed):
    """
    Anchor state in the vehicle frame, where x, y and psi are all zero
    Args:
        coeffs: reference polynomial, ascending degree
        speed: current vehicle speed
    Returns:
        VehicleState
    """
    # cte = f(x) - y and epsi = psi - atan(f'(x)), both at x = y = psi = 0
    cte = float(polyeval(coeffs, 0.0))
    epsi = -math.atan(float(polyderiv(coeffs, 0.0)))
    return VehicleState(0.0, 0.0, 0.0, float(speed), cte, epsi)


def project_latency(state, steering, throttle, config):
    """
    Predict the state at the moment the next command takes effect
    Args:
        state: measured VehicleState
        steering: steering angle still applied during the latency [rad]
        throttle: throttle still applied during the latency
        config: MPCConfig, provides latency, lf and steering_sign
    Returns:
        VehicleState projected config.latency seconds ahead
    """
    t = config.latency
    if t == 0:
        return state

    x, y, psi, v, cte, epsi = state
    yaw_rate = v / config.lf * (config.steering_sign * steering)

    projected = VehicleState(
        x + v * math.cos(psi) * t,
        y + v * math.sin(psi) * t,
        psi + yaw_rate * t,
        v + throttle * t,
        cte + v * math.sin(epsi) * t,
        epsi + yaw_rate * t,
    )
    logger.debug("Projected state %.3fs ahead: %s", t, projected)
    return projected
