import numpy as np
from scipy import linalg

from mpc_controller.errors import DegenerateFit, InsufficientPoints

# relative size below which a diagonal entry of R counts as zero
RANK_TOL = 1e-10


def polyfit(xs, ys, order=3):
    """
    Least squares polynomial fit through a Householder QR of the Vandermonde matrix
    Args:
        xs, ys: sample points
        order: polynomial order
    Returns:
        coefficients in ascending degree, length order + 1
    """
    xs = np.asarray(xs, dtype=float).ravel()
    ys = np.asarray(ys, dtype=float).ravel()
    if xs.size != ys.size:
        raise ValueError(f"xs and ys differ in length: {xs.size} vs {ys.size}")
    if xs.size < order + 1:
        raise InsufficientPoints(xs.size, order)

    A = np.vander(xs, order + 1, increasing=True)
    q, r = linalg.qr(A, mode='economic')

    col_norms = np.linalg.norm(A, axis=0)
    diag = np.abs(np.diag(r))
    if np.any(diag <= RANK_TOL * col_norms):
        raise DegenerateFit(
            f"Design matrix of {xs.size} points is rank deficient for order {order}")

    return linalg.solve_triangular(r, q.T @ ys)


def polyeval(coeffs, x):
    """
    Evaluate a polynomial with plain arithmetic, so x may be a float,
    a numpy array or a casadi symbol
    """
    result = 0.0
    for i, c in enumerate(coeffs):
        result = result + c * x ** i
    return result


def polyderiv(coeffs, x):
    """Evaluate the first derivative of the polynomial at x."""
    result = 0.0
    for i, c in enumerate(coeffs):
        if i == 0:
            continue
        result = result + i * c * x ** (i - 1)
    return result


def sample_path(coeffs, start=0.0, stop=50.0, step=2.0):
    """
    Sample the reference polynomial at a fixed longitudinal spacing
    Returns:
        xs, ys: vehicle frame points for display
    """
    xs = np.arange(start, stop, step)
    return xs, polyeval(coeffs, xs)
