from dataclasses import dataclass

import casadi as ca
import numpy as np

from mpc_controller.layout import VariableLayout
from mpc_controller.polynomial import polyderiv, polyeval


class FGEval:
    '''
    Cost and constraints of one control cycle

    Holds the fitted reference polynomial of this cycle together with the
    layout it indexes the variable vector with. Calling it on a symbolic
    vector returns the objective and the constraint vector, where
    constraint i sits at the index of the variable it pins.
    '''
    def __init__(self, coeffs, layout, config):
        self.coeffs = tuple(float(c) for c in coeffs)
        self.layout = layout
        self.config = config

    def cost(self, vars):
        cfg = self.config
        lay = self.layout
        N = lay.horizon
        obj = 0

        # reference state: zero cte and epsi, target speed
        for t in range(N):
            obj = obj + cfg.weight_cte * vars[lay.cte_start + t]**2
            obj = obj + cfg.weight_epsi * vars[lay.epsi_start + t]**2
            obj = obj + cfg.weight_v * (vars[lay.v_start + t] - cfg.ref_v)**2

        # actuator use
        for t in range(N - 1):
            obj = obj + cfg.weight_delta * vars[lay.delta_start + t]**2
            obj = obj + cfg.weight_a * vars[lay.a_start + t]**2

        # gap between sequential actuations
        for t in range(N - 2):
            obj = obj + cfg.weight_delta_rate * (vars[lay.delta_start + t + 1] - vars[lay.delta_start + t])**2
            obj = obj + cfg.weight_a_rate * (vars[lay.a_start + t + 1] - vars[lay.a_start + t])**2

        return obj

    def constraints(self, vars):
        cfg = self.config
        lay = self.layout
        dt = cfg.dt
        g = [None] * lay.n_constraints

        # initial state
        for start in lay.state_starts:
            g[start] = vars[start]

        # kinematic bicycle model between steps t - 1 and t
        for t in range(1, lay.horizon):
            x1 = vars[lay.x_start + t]
            y1 = vars[lay.y_start + t]
            psi1 = vars[lay.psi_start + t]
            v1 = vars[lay.v_start + t]
            cte1 = vars[lay.cte_start + t]
            epsi1 = vars[lay.epsi_start + t]

            x0 = vars[lay.x_start + t - 1]
            y0 = vars[lay.y_start + t - 1]
            psi0 = vars[lay.psi_start + t - 1]
            v0 = vars[lay.v_start + t - 1]
            epsi0 = vars[lay.epsi_start + t - 1]

            delta0 = cfg.steering_sign * vars[lay.delta_start + t - 1]
            a0 = vars[lay.a_start + t - 1]

            f0 = polyeval(self.coeffs, x0)
            psides0 = ca.atan(polyderiv(self.coeffs, x0))

            g[lay.x_start + t] = x1 - (x0 + v0 * ca.cos(psi0) * dt)
            g[lay.y_start + t] = y1 - (y0 + v0 * ca.sin(psi0) * dt)
            g[lay.psi_start + t] = psi1 - (psi0 + v0 / cfg.lf * delta0 * dt)
            g[lay.v_start + t] = v1 - (v0 + a0 * dt)
            g[lay.cte_start + t] = cte1 - ((f0 - y0) + v0 * ca.sin(epsi0) * dt)
            g[lay.epsi_start + t] = epsi1 - ((psi0 - psides0) + v0 / cfg.lf * delta0 * dt)

        return ca.vertcat(*g)

    def __call__(self, vars):
        return self.cost(vars), self.constraints(vars)


@dataclass
class MPCProblem:
    """Everything the NLP solver needs for one cycle."""
    layout: VariableLayout
    vars: object  # casadi symbol of length layout.n_vars
    f: object
    g: object
    x0: np.ndarray
    lbx: np.ndarray
    ubx: np.ndarray
    lbg: np.ndarray
    ubg: np.ndarray


class ProblemBuilder:
    def __init__(self, config, layout=None):
        self.config = config
        self.layout = layout if layout is not None else VariableLayout(config.horizon)
        if self.layout.horizon != config.horizon:
            raise ValueError(
                f"Layout horizon {self.layout.horizon} differs from config horizon {config.horizon}")

    def initial_guess(self, state):
        """Zeros, except the first step of every state block."""
        x0 = np.zeros(self.layout.n_vars)
        for start, value in zip(self.layout.state_starts, state):
            x0[start] = value
        return x0

    def bounds(self):
        lay = self.layout
        cfg = self.config
        lbx = np.empty(lay.n_vars)
        ubx = np.empty(lay.n_vars)

        # states are left free
        lbx[:lay.delta_start] = -cfg.state_bound
        ubx[:lay.delta_start] = cfg.state_bound

        lbx[lay.block("delta")] = -cfg.max_steering
        ubx[lay.block("delta")] = cfg.max_steering

        lbx[lay.block("a")] = -cfg.max_throttle
        ubx[lay.block("a")] = cfg.max_throttle
        return lbx, ubx

    def constraint_bounds(self, state):
        """Zero residuals for the model, the anchor state for the first step."""
        lbg = np.zeros(self.layout.n_constraints)
        ubg = np.zeros(self.layout.n_constraints)
        for start, value in zip(self.layout.state_starts, state):
            lbg[start] = value
            ubg[start] = value
        return lbg, ubg

    def build(self, state, coeffs):
        """
        Pose the NLP for one cycle
        Args:
            state: anchor VehicleState (already latency projected)
            coeffs: reference polynomial in the vehicle frame
        Returns:
            MPCProblem
        """
        sym = ca.SX if self.config.sparse_jacobian else ca.MX
        vars = sym.sym('vars', self.layout.n_vars)
        f, g = FGEval(coeffs, self.layout, self.config)(vars)

        lbx, ubx = self.bounds()
        lbg, ubg = self.constraint_bounds(state)
        return MPCProblem(self.layout, vars, f, g, self.initial_guess(state),
                          lbx, ubx, lbg, ubg)
