class MPCError(Exception):
    """Base class for controller failures."""


class InsufficientPoints(MPCError):
    """Too few waypoints to fit the reference polynomial."""

    def __init__(self, n_points, order):
        self.n_points = n_points
        self.order = order
        super().__init__(
            f"Need at least {order + 1} waypoints for an order {order} fit, got {n_points}")


class DegenerateFit(MPCError):
    """The waypoint design matrix is rank deficient."""


class SolveFailed(MPCError):
    """The NLP solver stopped without reaching a successful status.

    The best iterate is kept on ``solution`` so the caller can decide
    what to command instead.
    """

    def __init__(self, solution):
        self.solution = solution
        super().__init__(f"MPC solve failed with status {solution.status}")


class LayoutMismatch(MPCError):
    """A variable vector does not match the layout it is decoded with."""
