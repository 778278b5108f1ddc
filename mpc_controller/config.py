from dataclasses import dataclass, fields

# Horizon
N = 10  # number of time steps
DT = 0.1  # time step [s]

# This is the length from front to CoG that gives the same turning radius
# as the simulator vehicle driving a circle at constant steering and speed.
LF = 2.67

REF_V = 70.0  # target speed (simulator speed unit)

# Actuator limits
MAX_STEER = 0.436332  # 25 degrees [rad]
MAX_THROTTLE = 1.0
STATE_BOUND = 1.0e19  # treated as infinite by ipopt

# The simulator turns right for positive steering while the kinematic model
# rotates counter-clockwise for positive steering.
STEERING_SIGN = -1.0

# Cost weights
W_CTE = 2000.0
W_EPSI = 2000.0
W_V = 1.0
W_DELTA = 10.0
W_A = 10.0
W_DELTA_RATE = 100.0
W_A_RATE = 100.0

LATENCY = 0.1  # actuation latency [s]

# Solver
MAX_SOLVE_TIME = 0.5  # wall clock budget per solve [s]
MAX_ITER = 500
PRINT_LEVEL = 0
SPARSE_JACOBIAN = True

POLY_ORDER = 3


@dataclass(frozen=True)
class MPCConfig:
    """Process wide controller settings, built once and never mutated."""

    horizon: int = N
    dt: float = DT
    lf: float = LF
    ref_v: float = REF_V

    max_steering: float = MAX_STEER
    max_throttle: float = MAX_THROTTLE
    state_bound: float = STATE_BOUND
    steering_sign: float = STEERING_SIGN

    weight_cte: float = W_CTE
    weight_epsi: float = W_EPSI
    weight_v: float = W_V
    weight_delta: float = W_DELTA
    weight_a: float = W_A
    weight_delta_rate: float = W_DELTA_RATE
    weight_a_rate: float = W_A_RATE

    latency: float = LATENCY

    max_solve_time: float = MAX_SOLVE_TIME
    max_iter: int = MAX_ITER
    print_level: int = PRINT_LEVEL
    sparse_jacobian: bool = SPARSE_JACOBIAN

    poly_order: int = POLY_ORDER

    def __post_init__(self):
        if self.horizon < 2:
            raise ValueError(f"horizon must be at least 2, got {self.horizon}")
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.lf <= 0:
            raise ValueError(f"lf must be positive, got {self.lf}")
        if self.latency < 0:
            raise ValueError(f"latency must be non-negative, got {self.latency}")
        if self.max_steering <= 0 or self.max_throttle <= 0:
            raise ValueError("actuator bounds must be positive")
        if self.max_solve_time <= 0:
            raise ValueError(f"max_solve_time must be positive, got {self.max_solve_time}")
        if self.steering_sign not in (-1.0, 1.0):
            raise ValueError(f"steering_sign must be +1 or -1, got {self.steering_sign}")
        if self.poly_order < 1:
            raise ValueError(f"poly_order must be at least 1, got {self.poly_order}")

    @classmethod
    def from_dict(cls, overrides):
        """
        Build a config from a mapping of field overrides
        Args:
            overrides: {field name: value}, missing fields keep their defaults
        Returns:
            MPCConfig
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown MPC config keys: {', '.join(unknown)}")
        return cls(**overrides)
