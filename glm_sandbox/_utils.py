"""
Utility functions.
"""

import numpy as np

from .exceptions import DimensionMismatchError, InvalidDataError


def check_matrix(X, name='X', dtype=np.float64, finite=True):
    """Validate matrix input."""
    X = np.asarray(X, dtype=dtype)
    if X.ndim != 2:
        raise DimensionMismatchError(f"{name} must be 2-dimensional, got {X.ndim}", name=name)
    if finite and not np.all(np.isfinite(X)):
        raise InvalidDataError(f"{name} contains NaN or Inf", name=name)
    return X


def check_vector(y, name='y', dtype=np.float64, finite=True):
    """Validate vector input."""
    y = np.asarray(y, dtype=dtype)
    if y.ndim != 1:
        raise DimensionMismatchError(f"{name} must be 1-dimensional, got {y.ndim}", name=name)
    if finite and not np.all(np.isfinite(y)):
        raise InvalidDataError(f"{name} contains NaN or Inf", name=name)
    return y
