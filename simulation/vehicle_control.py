import logging
import math

import numpy as np

from mpc_controller.errors import SolveFailed
from mpc_controller.mpc import Telemetry
from simulation import config

logger = logging.getLogger(__name__)


class State:
    def __init__(self, x=0.0, y=0.0, yaw=0.0, v=0.0):
        self.x = x
        self.y = y
        self.yaw = yaw
        self.v = v


def update_state(state, a, delta, dt=config.SIM_DT):
    """
    Advance the plant with the simulator's steering convention
    Args:
        state: current vehicle state
        a: acceleration input
        delta: steering angle input, positive turns right [rad]
        dt: integration step [s]
    Returns:
        Updated state
    """
    # Input constraints
    if delta >= config.MAX_STEER:
        delta = config.MAX_STEER
    elif delta <= -config.MAX_STEER:
        delta = -config.MAX_STEER

    state.x = state.x + state.v * math.cos(state.yaw) * dt
    state.y = state.y + state.v * math.sin(state.yaw) * dt
    state.yaw = state.yaw - state.v / config.LF * delta * dt
    state.v = state.v + a * dt

    if state.v < config.MIN_SPEED:
        state.v = config.MIN_SPEED

    return state


def calc_nearest_index(state, cx, cy, cyaw, pind, n_ind_search=config.N_IND_SEARCH):
    """
    Args:
        state: current vehicle state
        cx, cy, cyaw: road waypoints and headings
        pind: previous nearest index, the search starts there
    Returns:
        ind: index of the nearest waypoint
        lateral: offset from the road at that waypoint, positive to the left
    """
    dx = [state.x - icx for icx in cx[pind:(pind + n_ind_search)]]
    dy = [state.y - icy for icy in cy[pind:(pind + n_ind_search)]]

    d = [idx ** 2 + idy ** 2 for (idx, idy) in zip(dx, dy)]

    ind = d.index(min(d)) + pind

    dxl = state.x - cx[ind]
    dyl = state.y - cy[ind]
    lateral = -math.sin(cyaw[ind]) * dxl + math.cos(cyaw[ind]) * dyl

    return ind, lateral


def waypoints_ahead(cx, cy, ind, n_waypoints=config.N_WAYPOINTS):
    """Waypoints sent to the controller, starting one behind the nearest."""
    start = max(ind - 1, 0)
    return cx[start:start + n_waypoints], cy[start:start + n_waypoints]


def run_mpc_loop(controller, cx, cy, cyaw, state, max_steps=config.MAX_STEPS,
                 n_waypoints=config.N_WAYPOINTS):
    '''
    Drive the road with the controller in the loop

    Every cycle the command computed from the current telemetry only takes
    effect after one control period; the previous command drives the plant
    meanwhile. A failed solve keeps the previous command.

    Returns:
        dict of per-cycle histories
    '''
    delta, a = 0.0, 0.0
    target_ind, _ = calc_nearest_index(state, cx, cy, cyaw, 0)

    history = {"x": [], "y": [], "v": [], "cte": [], "steer": [], "throttle": [],
               "solve_failures": 0}

    for step in range(max_steps):
        target_ind, cte = calc_nearest_index(state, cx, cy, cyaw, target_ind)
        ptsx, ptsy = waypoints_ahead(cx, cy, target_ind, n_waypoints)
        if len(ptsx) < n_waypoints:
            print("Destination reached!")
            break

        telemetry = Telemetry(ptsx=list(ptsx), ptsy=list(ptsy), x=state.x, y=state.y,
                              psi=state.yaw, speed=state.v, steering_angle=delta, throttle=a)
        try:
            command = controller.step(telemetry)
            next_delta, next_a = command.steering_angle, command.throttle
        except SolveFailed as e:
            logger.warning("Cycle %d: %s, holding previous command", step, e)
            history["solve_failures"] += 1
            next_delta, next_a = delta, a

        history["x"].append(state.x)
        history["y"].append(state.y)
        history["v"].append(state.v)
        history["cte"].append(cte)
        history["steer"].append(delta)
        history["throttle"].append(a)

        state = update_state(state, a, delta, config.SIM_DT)
        delta, a = next_delta, next_a

    return {k: np.asarray(v) if isinstance(v, list) else v for k, v in history.items()}
