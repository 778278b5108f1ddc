from dataclasses import dataclass

import numpy as np

from mpc_controller.errors import LayoutMismatch


@dataclass
class ControlOutput:
    steering: float  # [rad]
    throttle: float
    mpc_x: np.ndarray  # predicted trajectory, vehicle frame
    mpc_y: np.ndarray


class ControlExtractor:
    def __init__(self, layout):
        self.layout = layout

    def extract(self, x):
        """
        Decode the first actuation and the predicted positions
        Args:
            x: solved variable vector
        Returns:
            ControlOutput
        """
        x = np.asarray(x, dtype=float).ravel()
        if x.size != self.layout.n_vars:
            raise LayoutMismatch(
                f"Variable vector has {x.size} entries, layout of horizon "
                f"{self.layout.horizon} expects {self.layout.n_vars}")

        lay = self.layout
        return ControlOutput(steering=float(x[lay.delta_start]),
                             throttle=float(x[lay.a_start]),
                             mpc_x=x[lay.block("x")].copy(),
                             mpc_y=x[lay.block("y")].copy())
