import numpy as np

# Closed loop parameters
SIM_DT = 0.1  # control period [s], equal to the actuation latency
MAX_STEPS = 400  # maximum number of control cycles
TARGET_SPEED = 40.0  # [simulator speed unit]

# Road
ROAD_LENGTH = 2000.0  # longitudinal extent of the road
ROAD_AMPLITUDE = 20.0  # lateral swing of the road
ROAD_WAVELENGTH = 300.0
WAYPOINT_SPACING = 10.0  # distance between road waypoints

N_WAYPOINTS = 6  # waypoints sent with each telemetry message
N_IND_SEARCH = 10  # search window for the nearest waypoint

# Plant
LF = 2.67  # same front axle to CoG length as the controller model
MAX_STEER = np.deg2rad(25.0)  # [rad]
MIN_SPEED = 0.0
