"""
Closed-form least-squares solvers.

Single-predictor OLS from running sums, the explicit 2x2 normal-equation
solve, and the diagonal approximation used for more predictors.
"""

import logging
from typing import Tuple

import numpy as np

from ..constants import DENOMINATOR_TOL, SINGULAR_TOL
from ..exceptions import InsufficientVariationError, SingularMatrixError

logger = logging.getLogger(__name__)


def fit_simple_ols(x: np.ndarray, y: np.ndarray) -> Tuple[float, float]:
    """
    Ordinary least squares for y = b0 + b1 x.

    Parameters
    ----------
    x : ndarray, shape (n,)
        Predictor values
    y : ndarray, shape (n,)
        Response values (possibly transformed)

    Returns
    -------
    intercept, slope : float

    Raises
    ------
    InsufficientVariationError
        If ``n*Σx² - (Σx)²`` is below 1e-10 in magnitude.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    n = len(x)

    sum_x = np.sum(x)
    sum_y = np.sum(y)
    sum_xy = np.sum(x * y)
    sum_xx = np.sum(x * x)

    denominator = n * sum_xx - sum_x * sum_x
    if abs(denominator) < DENOMINATOR_TOL:
        raise InsufficientVariationError(
            "Cannot estimate parameters: insufficient variation in X",
            denominator=float(denominator),
        )

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return float(intercept), float(slope)


def normal_equations(X: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Form X'X and X'y."""
    X = np.asarray(X, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    return X.T @ X, X.T @ y


def solve_2x2(XtX: np.ndarray, Xty: np.ndarray) -> np.ndarray:
    """
    Solve the 2x2 normal equations by the explicit determinant formula.

    Raises
    ------
    SingularMatrixError
        If |det(X'X)| < 1e-10.
    """
    det = XtX[0, 0] * XtX[1, 1] - XtX[0, 1] * XtX[1, 0]
    if abs(det) < SINGULAR_TOL:
        raise SingularMatrixError(
            "Matrix is singular, cannot compute inverse",
            determinant=float(det),
        )

    beta0 = (XtX[1, 1] * Xty[0] - XtX[0, 1] * Xty[1]) / det
    beta1 = (XtX[0, 0] * Xty[1] - XtX[1, 0] * Xty[0]) / det
    return np.array([beta0, beta1], dtype=np.float64)


def solve_diagonal(XtX: np.ndarray, Xty: np.ndarray) -> np.ndarray:
    """
    Diagonal approximation beta[i] = Xty[i] / XtX[i, i].

    Ignores every off-diagonal term of X'X, so it is exact only for
    orthogonal columns.
    """
    diag = np.diag(XtX)
    if np.any(np.abs(diag) < SINGULAR_TOL):
        raise SingularMatrixError(
            "Matrix has a zero diagonal entry, cannot apply diagonal approximation",
            diagonal=diag.tolist(),
        )
    logger.debug("Diagonal approximation over %d coefficients", len(diag))
    return Xty / diag


__all__ = ["fit_simple_ols", "normal_equations", "solve_2x2", "solve_diagonal"]
