"""
Input validation.

``validate_*`` functions collect every problem into a
:class:`ValidationResult` for display; ``check_*`` functions raise at the
engine boundary.
"""

import math
import numbers
from dataclasses import dataclass, field
from typing import List

import numpy as np

from .constants import MIN_SAMPLE_SIZE, MAX_SAMPLE_SIZE
from .exceptions import InvalidSampleSizeError, UnknownLinkError, UnknownDistributionError
from ._core.links import as_link
from ._core.random import as_distribution


@dataclass
class ValidationResult:
    """Outcome of a validation pass."""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.is_valid

    def add(self, message: str) -> None:
        self.is_valid = False
        self.errors.append(message)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        for message in other.errors:
            self.add(message)
        return self

    def to_dict(self) -> dict:
        return {'isValid': self.is_valid, 'errors': list(self.errors)}


def _is_integer(value) -> bool:
    return isinstance(value, (numbers.Integral, np.integer)) and not isinstance(value, (bool, np.bool_))


def _is_finite_number(value) -> bool:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (numbers.Real, np.number)):
        return False
    return math.isfinite(float(value))


def validate_sample_size(sample_size) -> ValidationResult:
    """Sample size must be an integer in [1, 10000]."""
    result = ValidationResult()
    if not _is_integer(sample_size) or sample_size < MIN_SAMPLE_SIZE:
        result.add("Sample size must be a positive integer")
    elif sample_size > MAX_SAMPLE_SIZE:
        result.add(f"Sample size cannot exceed {MAX_SAMPLE_SIZE:,}")
    return result


def check_sample_size(sample_size) -> None:
    """
    Raise unless ``sample_size`` is an integer in [1, 10000].

    Raises
    ------
    InvalidSampleSizeError
    """
    result = validate_sample_size(sample_size)
    if not result:
        raise InvalidSampleSizeError(result.errors[0], sample_size=sample_size)


def validate_parameters(params) -> ValidationResult:
    """Intercept and slope must be finite numbers."""
    result = ValidationResult()
    for name in ('intercept', 'slope'):
        value = getattr(params, name, None)
        if not _is_finite_number(value):
            result.add(f"{name.capitalize()} must be a finite number, got {value!r}")
    return result


def validate_matrix_parameters(params, config=None) -> ValidationResult:
    """Every β must be finite; with a config, len(β) must be num_predictors + 1."""
    result = ValidationResult()
    beta = list(getattr(params, 'beta', []))
    if not beta:
        result.add("Coefficient vector must not be empty")
    for i, value in enumerate(beta):
        if not _is_finite_number(value):
            result.add(f"beta[{i}] must be a finite number, got {value!r}")
    if config is not None:
        expected = getattr(config, 'num_predictors', None)
        if expected is not None and len(beta) != expected + 1:
            result.add(
                f"Coefficient vector has length {len(beta)} but "
                f"{expected} predictors require {expected + 1}"
            )
    return result


def validate_config(config) -> ValidationResult:
    """Distribution and link must be known; num_predictors (if present) >= 1."""
    result = ValidationResult()
    try:
        as_distribution(getattr(config, 'distribution', None))
    except UnknownDistributionError as exc:
        result.add(exc.message)
    try:
        as_link(getattr(config, 'link_function', None))
    except UnknownLinkError as exc:
        result.add(exc.message)
    if hasattr(config, 'num_predictors'):
        p = config.num_predictors
        if not _is_integer(p) or p < 1:
            result.add(f"Number of predictors must be a positive integer, got {p!r}")
    return result


def validate_data(data) -> ValidationResult:
    """Data must be non-empty with finite x and y."""
    result = ValidationResult()
    if len(data) == 0:
        result.add("No data points to estimate from")
        return result
    for i, point in enumerate(data):
        xs = np.atleast_1d(np.asarray(point.x, dtype=np.float64))
        if not np.all(np.isfinite(xs)) or not _is_finite_number(point.y):
            result.add(f"Data point {i} contains a non-finite value")
    return result


__all__ = [
    "ValidationResult",
    "validate_sample_size",
    "check_sample_size",
    "validate_parameters",
    "validate_matrix_parameters",
    "validate_config",
    "validate_data",
]
