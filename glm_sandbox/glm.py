"""
Single-predictor GLM engine.

Linear predictor, mean response, synthetic data generation and
closed-form parameter estimation for η = β₀ + β₁x.
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ._core.links import Link, as_link, inverse_link
from ._core.random import Distribution, as_distribution, make_rng, sample, sanitize
from ._core.lm_solver import fit_simple_ols
from ._utils import check_vector
from .constants import (
    X_MIN,
    X_MAX,
    POISSON_LOG_FLOOR,
    LOGIT_CLAMP_MIN,
    LOGIT_CLAMP_MAX,
)
from .exceptions import EmptyDataError, InsufficientVariationError, FallbackEstimatorWarning
from .validation import check_sample_size

logger = logging.getLogger(__name__)


@dataclass
class GLMParameters:
    """Coefficients β₀ (intercept) and β₁ (slope)."""
    intercept: float
    slope: float

    def to_dict(self) -> dict:
        return {'intercept': float(self.intercept), 'slope': float(self.slope)}

    @classmethod
    def from_dict(cls, data: dict) -> "GLMParameters":
        return cls(intercept=float(data['intercept']), slope=float(data['slope']))


@dataclass
class GLMConfig:
    """Random component and link of a GLM."""
    distribution: Distribution = Distribution.NORMAL
    link_function: Link = Link.IDENTITY

    def __post_init__(self):
        self.distribution = as_distribution(self.distribution)
        self.link_function = as_link(self.link_function)

    def to_dict(self) -> dict:
        return {
            'distribution': self.distribution.value,
            'linkFunction': self.link_function.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GLMConfig":
        link = data.get('linkFunction', data.get('link_function', Link.IDENTITY))
        return cls(distribution=data.get('distribution', Distribution.NORMAL),
                   link_function=link)


@dataclass
class DataPoint:
    """One observation (x, y)."""
    x: float
    y: float

    def to_dict(self) -> dict:
        return {'x': float(self.x), 'y': float(self.y)}

    @classmethod
    def from_dict(cls, data: dict) -> "DataPoint":
        return cls(x=float(data['x']), y=float(data['y']))


def linear_predictor(x: float, params: GLMParameters) -> float:
    """η = β₀ + β₁x."""
    return params.intercept + params.slope * x


def mean_response(x: float, params: GLMParameters, config: GLMConfig) -> float:
    """
    Mean response μ = g⁻¹(β₀ + β₁x).

    Raises
    ------
    UnknownLinkError
        If the configured link is not recognised.
    """
    eta = linear_predictor(x, params)
    return inverse_link(config.link_function, eta)


def generate_data(
    params: GLMParameters,
    config: GLMConfig,
    sample_size: int,
    rng: Union[None, int, np.random.Generator] = None,
) -> List[DataPoint]:
    """
    Generate synthetic observations from a GLM.

    Parameters
    ----------
    params : GLMParameters
        True coefficients
    config : GLMConfig
        Distribution and link
    sample_size : int
        Number of points, 1 to 10,000
    rng : Generator or int, optional
        Uniform source or seed

    Returns
    -------
    data : list of DataPoint
        ``sample_size`` points with x ~ U[-5, 5] and finite y

    Raises
    ------
    InvalidSampleSizeError
        If ``sample_size`` is not an integer in [1, 10000].
    """
    check_sample_size(sample_size)
    rng = make_rng(rng)

    data = []
    for _ in range(sample_size):
        x = X_MIN + (X_MAX - X_MIN) * rng.random()
        mean = mean_response(x, params, config)
        y = sample(config.distribution, mean, rng)
        data.append(DataPoint(x=x, y=sanitize(y)))

    logger.debug("Generated %d points from %s/%s", sample_size,
                 config.distribution.value, config.link_function.value)
    return data


def _transformed_response(y: np.ndarray, config: GLMConfig) -> Optional[np.ndarray]:
    """Working response for the supported (distribution, link) pairs, else None."""
    dist, link = config.distribution, config.link_function

    if dist is Distribution.NORMAL and link is Link.IDENTITY:
        return y
    if dist is Distribution.POISSON and link is Link.LOG:
        return np.log(np.maximum(y, POISSON_LOG_FLOOR))
    if dist is Distribution.BERNOULLI and link is Link.LOGIT:
        p = np.clip(y, LOGIT_CLAMP_MIN, LOGIT_CLAMP_MAX)
        return np.log(p / (1 - p))
    return None


def _secant_estimate(x: np.ndarray, y: np.ndarray) -> GLMParameters:
    # Line through (xMin, yMin) and (xMax, yMax); not a fit.
    x_min, x_max = float(np.min(x)), float(np.max(x))
    y_min, y_max = float(np.min(y)), float(np.max(y))
    if x_max == x_min:
        raise InsufficientVariationError(
            "Cannot estimate parameters: no variation in X values",
            x=x_min,
        )
    slope = (y_max - y_min) / (x_max - x_min)
    intercept = y_min - slope * x_min
    return GLMParameters(intercept=intercept, slope=slope)


def estimate_parameters(data: Sequence[DataPoint], config: GLMConfig) -> GLMParameters:
    """
    Estimate β₀ and β₁ from observations.

    Parameters
    ----------
    data : sequence of DataPoint
        Observations
    config : GLMConfig
        Distribution and link used to pick the estimator

    Returns
    -------
    params : GLMParameters

    Notes
    -----
    - normal/identity: OLS on (x, y)
    - poisson/log: OLS on (x, ln(max(y, 0.1)))
    - bernoulli/logit: OLS on (x, logit(clamp(y, 0.01, 0.99)))
    - anything else: secant line through the extreme x and y values, a
      crude heuristic flagged with ``FallbackEstimatorWarning``

    None of these is maximum likelihood; there is no IRLS.

    Raises
    ------
    EmptyDataError
        If ``data`` is empty.
    InvalidDataError
        If any x or y is NaN or Inf.
    InsufficientVariationError
        If the x values are (numerically) all equal.
    """
    if len(data) == 0:
        raise EmptyDataError("Cannot estimate parameters with no data")

    x = check_vector([point.x for point in data], name='x')
    y = check_vector([point.y for point in data], name='y')

    working_y = _transformed_response(y, config)
    if working_y is None:
        warnings.warn(
            f"No least-squares estimator for {config.distribution.value}/"
            f"{config.link_function.value}; using the secant-line fallback",
            FallbackEstimatorWarning,
            stacklevel=2,
        )
        logger.debug("Secant fallback on %d points", len(x))
        return _secant_estimate(x, y)

    logger.debug("OLS (%s/%s) on %d points", config.distribution.value,
                 config.link_function.value, len(x))
    intercept, slope = fit_simple_ols(x, working_y)
    return GLMParameters(intercept=intercept, slope=slope)


def linear_predictor_curve(params: GLMParameters) -> Callable[[float], float]:
    """``x -> η`` evaluator for charting."""
    def curve(x: float) -> float:
        return linear_predictor(x, params)
    return curve


def mean_response_curve(params: GLMParameters, config: GLMConfig) -> Callable[[float], float]:
    """``x -> μ`` evaluator for charting."""
    def curve(x: float) -> float:
        return mean_response(x, params, config)
    return curve


def evaluate_curve(
    fn: Callable[[float], float],
    x_min: float = X_MIN,
    x_max: float = X_MAX,
    num: int = 200,
) -> pd.DataFrame:
    """Evaluate an ``x -> y`` callable on an evenly spaced grid."""
    xs = np.linspace(x_min, x_max, num)
    return pd.DataFrame({'x': xs, 'y': [fn(float(x)) for x in xs]})


def to_frame(data: Sequence[DataPoint]) -> pd.DataFrame:
    """Observations as a DataFrame with columns ``x`` and ``y``."""
    return pd.DataFrame({
        'x': [point.x for point in data],
        'y': [point.y for point in data],
    }, columns=['x', 'y'])


def from_frame(frame: pd.DataFrame) -> List[DataPoint]:
    """Inverse of :func:`to_frame`."""
    return [DataPoint(x=float(x), y=float(y)) for x, y in zip(frame['x'], frame['y'])]


__all__ = [
    "GLMParameters",
    "GLMConfig",
    "DataPoint",
    "linear_predictor",
    "mean_response",
    "generate_data",
    "estimate_parameters",
    "linear_predictor_curve",
    "mean_response_curve",
    "evaluate_curve",
    "to_frame",
    "from_frame",
]
