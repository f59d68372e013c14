"""
Multi-predictor GLM engine.

Matrix form η = Xβ of the scalar engine: design matrix construction,
matrix-vector arithmetic, data generation and normal-equation estimation.
"""

import logging
import warnings
from dataclasses import dataclass, field
from typing import List, Sequence, Union

import numpy as np

from ._core.links import Link, as_link, inverse_link
from ._core.random import Distribution, as_distribution, make_rng, sample, sanitize
from ._core.lm_solver import normal_equations, solve_2x2, solve_diagonal
from ._core.qr import qr_least_squares
from ._utils import check_matrix, check_vector
from .constants import X_MIN, X_MAX
from .exceptions import DimensionMismatchError, EmptyDataError, FallbackEstimatorWarning
from .validation import check_sample_size

logger = logging.getLogger(__name__)

# Distributions with a noise model in the multi-predictor sampler
_NOISY_DISTRIBUTIONS = (Distribution.NORMAL, Distribution.POISSON, Distribution.BERNOULLI)

ESTIMATION_METHODS = ('diagonal', 'qr')


@dataclass
class MatrixGLMParameters:
    """Coefficient vector β = [β₀, β₁, ..., βₚ]; β₀ is the intercept."""
    beta: List[float] = field(default_factory=list)

    def __post_init__(self):
        self.beta = [float(b) for b in self.beta]

    @property
    def num_predictors(self) -> int:
        return len(self.beta) - 1

    def to_dict(self) -> dict:
        return {'beta': list(self.beta)}

    @classmethod
    def from_dict(cls, data: dict) -> "MatrixGLMParameters":
        return cls(beta=data['beta'])


@dataclass
class MatrixDataPoint:
    """One observation with predictor vector x = [x₁, ..., xₚ]."""
    x: List[float]
    y: float

    def to_dict(self) -> dict:
        return {'x': [float(v) for v in self.x], 'y': float(self.y)}

    @classmethod
    def from_dict(cls, data: dict) -> "MatrixDataPoint":
        return cls(x=[float(v) for v in data['x']], y=float(data['y']))


@dataclass
class MatrixGLMConfig:
    """Distribution, link and number of predictors p (excluding intercept)."""
    distribution: Distribution = Distribution.NORMAL
    link_function: Link = Link.IDENTITY
    num_predictors: int = 1

    def __post_init__(self):
        self.distribution = as_distribution(self.distribution)
        self.link_function = as_link(self.link_function)

    def to_dict(self) -> dict:
        return {
            'distribution': self.distribution.value,
            'linkFunction': self.link_function.value,
            'numPredictors': int(self.num_predictors),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MatrixGLMConfig":
        return cls(
            distribution=data.get('distribution', Distribution.NORMAL),
            link_function=data.get('linkFunction', data.get('link_function', Link.IDENTITY)),
            num_predictors=int(data.get('numPredictors', data.get('num_predictors', 1))),
        )


def linear_predictor(x: Sequence[float], params: MatrixGLMParameters) -> float:
    """
    η = [1, x₁, ..., xₚ] · β.

    Raises
    ------
    DimensionMismatchError
        If ``len(x) != len(beta) - 1``.
    """
    if len(x) != len(params.beta) - 1:
        raise DimensionMismatchError(
            f"Dimension mismatch: x has {len(x)} predictors but "
            f"β has {len(params.beta) - 1} coefficients",
            x_length=len(x),
            beta_length=len(params.beta),
        )

    eta = params.beta[0]
    for xi, bi in zip(x, params.beta[1:]):
        eta += xi * bi
    return float(eta)


def mean_response(x: Sequence[float], params: MatrixGLMParameters,
                  config: MatrixGLMConfig) -> float:
    """μ = g⁻¹(xᵀβ)."""
    eta = linear_predictor(x, params)
    return inverse_link(config.link_function, eta)


def create_design_matrix(data: Sequence[MatrixDataPoint]) -> np.ndarray:
    """
    Design matrix X with a leading column of ones.

    Returns
    -------
    X : ndarray, shape (n, p + 1)
        Empty (0, 0) array for empty input.
    """
    if len(data) == 0:
        return np.empty((0, 0), dtype=np.float64)

    p = len(data[0].x)
    for i, point in enumerate(data):
        if len(point.x) != p:
            raise DimensionMismatchError(
                f"Dimension mismatch: row {i} has {len(point.x)} predictors, expected {p}",
                row=i,
            )
    return np.array([[1.0, *point.x] for point in data], dtype=np.float64)


def matrix_multiply(A, b) -> np.ndarray:
    """
    Matrix-vector product A b.

    Raises
    ------
    DimensionMismatchError
        If A's column count differs from len(b).
    """
    A = check_matrix(A, name='A', finite=False)
    b = check_vector(b, name='b', finite=False)
    if A.shape[1] != b.shape[0]:
        raise DimensionMismatchError(
            f"Dimension mismatch: A has {A.shape[1]} columns but b has {b.shape[0]} elements",
            columns=A.shape[1],
            length=b.shape[0],
        )
    return A @ b


def matrix_transpose(A) -> np.ndarray:
    """Transpose; empty input gives an empty array."""
    if len(A) == 0:
        return np.empty((0, 0), dtype=np.float64)
    return check_matrix(A, name='A', finite=False).T.copy()


def generate_data(
    params: MatrixGLMParameters,
    config: MatrixGLMConfig,
    sample_size: int,
    rng: Union[None, int, np.random.Generator] = None,
) -> List[MatrixDataPoint]:
    """
    Generate synthetic multi-predictor observations.

    Each predictor is drawn independently from U[-5, 5]. Only normal,
    poisson and bernoulli responses get noise; any other distribution
    returns y = μ.

    Raises
    ------
    InvalidSampleSizeError
        If ``sample_size`` is not an integer in [1, 10000].
    DimensionMismatchError
        If ``len(beta) != num_predictors + 1``.
    """
    check_sample_size(sample_size)
    p = config.num_predictors
    if len(params.beta) != p + 1:
        raise DimensionMismatchError(
            f"Dimension mismatch: {p} predictors need {p + 1} coefficients, "
            f"β has {len(params.beta)}",
            num_predictors=p,
            beta_length=len(params.beta),
        )
    rng = make_rng(rng)

    noisy = config.distribution in _NOISY_DISTRIBUTIONS
    if not noisy:
        logger.debug("No multi-predictor sampler for %s; returning y = mean",
                     config.distribution.value)

    data = []
    for _ in range(sample_size):
        x = [X_MIN + (X_MAX - X_MIN) * rng.random() for _ in range(p)]
        mean = mean_response(x, params, config)
        y = sample(config.distribution, mean, rng) if noisy else mean
        data.append(MatrixDataPoint(x=x, y=sanitize(y)))
    return data


def estimate_parameters(
    data: Sequence[MatrixDataPoint],
    config: MatrixGLMConfig,
    method: str = 'diagonal',
    rng: Union[None, int, np.random.Generator] = None,
) -> MatrixGLMParameters:
    """
    Estimate β from multi-predictor observations.

    Parameters
    ----------
    data : sequence of MatrixDataPoint
        Observations, each with ``num_predictors`` predictor values
    config : MatrixGLMConfig
        Distribution, link and predictor count
    method : {'diagonal', 'qr'}, default='diagonal'
        Solver for p > 1 under normal/identity. ``'diagonal'`` keeps the
        historical diagonal approximation β[i] = (Xᵀy)[i] / (XᵀX)[i,i];
        ``'qr'`` solves the least-squares problem exactly.
    rng : Generator or int, optional
        Source for the random-coefficient stub

    Returns
    -------
    params : MatrixGLMParameters

    Notes
    -----
    Only normal/identity is estimated. Every other configuration returns
    random coefficients in [-1, 1): a placeholder of the right length,
    not an estimate.

    Raises
    ------
    EmptyDataError
        If ``data`` is empty.
    DimensionMismatchError
        If a row does not have ``num_predictors`` values.
    SingularMatrixError
        If XᵀX is singular.
    """
    if method not in ESTIMATION_METHODS:
        raise ValueError(
            f"Unknown estimation method: '{method}'\n"
            f"Valid options: {', '.join(repr(m) for m in ESTIMATION_METHODS)}"
        )
    if len(data) == 0:
        raise EmptyDataError("Cannot estimate parameters with no data")

    p = config.num_predictors
    for i, point in enumerate(data):
        if len(point.x) != p:
            raise DimensionMismatchError(
                f"Dimension mismatch: row {i} has {len(point.x)} predictors, expected {p}",
                row=i,
                expected=p,
            )

    if config.distribution is Distribution.NORMAL and config.link_function is Link.IDENTITY:
        X = check_matrix(create_design_matrix(data))
        y = check_vector([point.y for point in data])

        if method == 'qr':
            beta = qr_least_squares(X, y).coef
        else:
            XtX, Xty = normal_equations(X, y)
            if p == 1:
                beta = solve_2x2(XtX, Xty)
            else:
                warnings.warn(
                    "Diagonal approximation ignores predictor covariance; "
                    "use method='qr' for exact least squares",
                    FallbackEstimatorWarning,
                    stacklevel=2,
                )
                beta = solve_diagonal(XtX, Xty)
        logger.debug("Estimated %d coefficients (%s)", p + 1, method)
        return MatrixGLMParameters(beta=beta.tolist())

    warnings.warn(
        f"No estimator for {config.distribution.value}/{config.link_function.value}; "
        f"returning random coefficients",
        FallbackEstimatorWarning,
        stacklevel=2,
    )
    rng = make_rng(rng)
    return MatrixGLMParameters(beta=[rng.random() * 2 - 1 for _ in range(p + 1)])


__all__ = [
    "MatrixGLMParameters",
    "MatrixDataPoint",
    "MatrixGLMConfig",
    "ESTIMATION_METHODS",
    "linear_predictor",
    "mean_response",
    "create_design_matrix",
    "matrix_multiply",
    "matrix_transpose",
    "generate_data",
    "estimate_parameters",
]
