import logging
import time
from dataclasses import dataclass

import casadi as ca
import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class Solution:
    success: bool
    status: str  # ipopt return status
    x: np.ndarray  # variable vector at termination
    cost: float
    solve_time: float  # [s]


class SolverAdapter:
    '''
    Hands an MPCProblem to ipopt through casadi

    The solve stops at the configured wall clock budget. A failed or timed
    out solve is reported through Solution.success, never retried here.
    '''
    def __init__(self, config):
        self.config = config

    def options(self):
        cfg = self.config
        return {'ipopt.print_level': cfg.print_level,
                'ipopt.sb': 'yes',
                'ipopt.max_iter': cfg.max_iter,
                'ipopt.max_wall_time': cfg.max_solve_time,
                'ipopt.acceptable_tol': 1e-8,
                'ipopt.acceptable_obj_change_tol': 1e-6,
                'print_time': 0,
                'error_on_fail': False}

    def solve(self, problem):
        nlp_prob = {'f': problem.f, 'x': problem.vars, 'g': problem.g}
        solver = ca.nlpsol('solver', 'ipopt', nlp_prob, self.options())

        start_time = time.time()
        res = solver(x0=problem.x0, lbx=problem.lbx, ubx=problem.ubx,
                     lbg=problem.lbg, ubg=problem.ubg)
        cost_time = time.time() - start_time

        stats = solver.stats()
        solution = Solution(success=bool(stats['success']),
                            status=str(stats['return_status']),
                            x=res['x'].full().ravel(),
                            cost=float(res['f']),
                            solve_time=cost_time)
        logger.debug("ipopt finished with %s in %.3fs, cost %.4f",
                     solution.status, cost_time, solution.cost)
        return solution
