import numpy as np


def to_vehicle_frame(ptsx, ptsy, px, py, psi):
    """
    Transform waypoints from the map frame to the vehicle frame
    Args:
        ptsx, ptsy: waypoint coordinates in the map frame
        px, py: vehicle position in the map frame
        psi: vehicle heading [rad]
    Returns:
        xs, ys: waypoint coordinates relative to the vehicle, x pointing forward
    """
    ptsx = np.asarray(ptsx, dtype=float)
    ptsy = np.asarray(ptsy, dtype=float)
    if ptsx.shape != ptsy.shape:
        raise ValueError(f"ptsx and ptsy differ in shape: {ptsx.shape} vs {ptsy.shape}")

    # translation of axes, then rotation of axes by -psi
    dx = ptsx - px
    dy = ptsy - py
    xs = dx * np.cos(psi) + dy * np.sin(psi)
    ys = -dx * np.sin(psi) + dy * np.cos(psi)
    return xs, ys


def to_world_frame(xs, ys, px, py, psi):
    """Inverse of to_vehicle_frame."""
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    if xs.shape != ys.shape:
        raise ValueError(f"xs and ys differ in shape: {xs.shape} vs {ys.shape}")

    ptsx = xs * np.cos(psi) - ys * np.sin(psi) + px
    ptsy = xs * np.sin(psi) + ys * np.cos(psi) + py
    return ptsx, ptsy
