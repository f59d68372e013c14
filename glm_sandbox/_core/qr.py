"""
Least squares via QR decomposition with column pivoting.

Exact multi-predictor alternative to the diagonal approximation.
"""

from dataclasses import dataclass

import numpy as np
from scipy.linalg import qr, solve_triangular

from ..exceptions import SingularMatrixError


@dataclass
class QRLeastSquaresResult:
    """Result of a pivoted-QR least-squares solve."""
    coef: np.ndarray         # Coefficients (NaN for aliased columns)
    rank: int                # Determined rank
    pivot: np.ndarray        # Pivot indices (0-indexed)
    tol: float               # Tolerance used


def qr_least_squares(
    X: np.ndarray,
    y: np.ndarray,
    tol: float = 1e-7,
    singular_ok: bool = False,
) -> QRLeastSquaresResult:
    """
    Solve min ||X b - y|| by QR with column pivoting.

    Parameters
    ----------
    X : ndarray, shape (n, p)
        Design matrix (WITH intercept column)
    y : ndarray, shape (n,)
        Response vector
    tol : float, default=1e-7
        Relative tolerance for rank determination (R's lm default)
    singular_ok : bool, default=False
        If False, raise on a rank-deficient design

    Returns
    -------
    result : QRLeastSquaresResult
    """
    X = np.asarray(X, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    n, p = X.shape

    Q, R, P = qr(X, mode='economic', pivoting=True)

    # Determine rank
    R_diag = np.abs(np.diag(R))
    if R_diag.size == 0 or R_diag[0] == 0:
        rank = 0
    else:
        rank = int(np.sum(R_diag >= tol * R_diag[0]))

    if not singular_ok and rank < p:
        raise SingularMatrixError(
            f"Singular fit: rank {rank} < {p} columns",
            rank=rank,
            columns=p,
        )

    qty = Q.T @ y
    coef = np.full(p, np.nan, dtype=np.float64)
    if rank > 0:
        coef_active = solve_triangular(R[:rank, :rank], qty[:rank], lower=False)
        coef[P[:rank]] = coef_active

    return QRLeastSquaresResult(coef=coef, rank=rank, pivot=P.astype(np.int64), tol=tol)


__all__ = ["QRLeastSquaresResult", "qr_least_squares"]
