import numpy as np

from simulation import config
from simulation.vehicle_control import State


def make_road(length=config.ROAD_LENGTH, amplitude=config.ROAD_AMPLITUDE,
              wavelength=config.ROAD_WAVELENGTH, spacing=config.WAYPOINT_SPACING):
    """
    Sample a winding road as map frame waypoints
    Returns:
        cx, cy: waypoint coordinates
        cyaw: road heading at each waypoint [rad]
    """
    cx = np.arange(0.0, length + spacing, spacing)
    k = 2 * np.pi / wavelength
    cy = amplitude * np.sin(k * cx)
    cyaw = np.arctan(amplitude * k * np.cos(k * cx))
    return cx, cy, cyaw


def setup_environment(target_speed=config.TARGET_SPEED, **road_kwargs):
    """
    Build the road and place the vehicle on its first waypoint
    Returns:
        cx, cy, cyaw: reference road
        state: initial vehicle State, driving at target_speed along the road
    """
    cx, cy, cyaw = make_road(**road_kwargs)
    state = State(x=cx[0], y=cy[0], yaw=cyaw[0], v=target_speed)
    print(f"Road with {len(cx)} waypoints, start at ({cx[0]:.1f}, {cy[0]:.1f})")
    return cx, cy, cyaw, state
