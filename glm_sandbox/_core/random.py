"""
Random variate generation for GLM data simulation.

Each sampler draws one value from a named distribution given its mean,
applying the fixed auxiliary-parameter policy of the sandbox. The only
source of randomness is an injected ``numpy.random.Generator`` used as a
uniform [0, 1) stream, so every draw is reproducible from a seed.
"""

import logging
import math
from enum import Enum
from typing import Optional, Union

import numpy as np

from ..constants import (
    NORMAL_VARIANCE,
    POISSON_MIN_MEAN,
    POISSON_MAX_MEAN,
    POISSON_KNUTH_CHUNK,
    GAMMA_MIN_SHAPE,
    GAMMA_SCALE,
    GAMMA_MAX_ATTEMPTS,
    NEGBINOMIAL_R,
    NEGBINOMIAL_P_MIN,
    NEGBINOMIAL_P_MAX,
    BINOMIAL_TRIALS,
    NAN_SENTINEL,
    INF_SENTINEL,
)
from ..exceptions import GenerationFailedError, UnknownDistributionError

logger = logging.getLogger(__name__)


class Distribution(str, Enum):
    """Supported response distributions."""
    NORMAL = "normal"
    POISSON = "poisson"
    BERNOULLI = "bernoulli"
    GAMMA = "gamma"
    NEGATIVE_BINOMIAL = "negativeBinomial"
    BINOMIAL = "binomial"

    def __str__(self) -> str:
        return self.value


def as_distribution(value: Union[str, Distribution]) -> Distribution:
    """Coerce a name to :class:`Distribution`, raising ``UnknownDistributionError``."""
    if isinstance(value, Distribution):
        return value
    try:
        return Distribution(value)
    except ValueError:
        valid = ", ".join(repr(d.value) for d in Distribution)
        raise UnknownDistributionError(
            f"Unknown distribution: {value!r}. Valid options: {valid}",
            distribution=value,
        ) from None


def make_rng(seed: Union[None, int, np.random.Generator] = None) -> np.random.Generator:
    """
    Build a uniform source.

    Parameters
    ----------
    seed : None, int or Generator
        ``None`` for fresh entropy, an int seed, or an existing generator
        (returned unchanged).
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def sanitize(value: float) -> float:
    """Replace a non-finite value with its bounded sentinel (NaN -> 0, ±inf -> ±1e6)."""
    value = float(value)
    if math.isnan(value):
        return NAN_SENTINEL
    if math.isinf(value):
        return INF_SENTINEL if value > 0 else -INF_SENTINEL
    return value


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def sample_normal(mean: float, rng: np.random.Generator,
                  variance: float = NORMAL_VARIANCE) -> float:
    """Box-Muller draw from N(mean, variance)."""
    u1 = 1.0 - rng.random()  # (0, 1], keeps log finite
    u2 = rng.random()
    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return sanitize(mean) + math.sqrt(variance) * z0


def _knuth_poisson(lam: float, rng: np.random.Generator) -> int:
    limit = math.exp(-lam)
    k = 0
    p = 1.0
    while True:
        k += 1
        p *= rng.random()
        if p <= limit:
            return k - 1


def sample_poisson(mean: float, rng: np.random.Generator) -> float:
    """
    Knuth product-of-uniforms draw from Poisson(mean).

    Means above the Knuth chunk size are split into independent Poisson
    pieces (additivity), because exp(-λ) underflows for large λ.

    Notes
    -----
    The mean is clamped to [0.1, 1e4]. Above ``POISSON_MAX_MEAN`` every
    draw comes from Poisson(1e4), not the requested mean (e.g. slope 2 at
    x = 5 under the log link asks for e^10 ≈ 22026). The cap keeps the
    product-of-uniforms loop bounded and is logged at DEBUG when applied.
    """
    lam = sanitize(mean)
    if lam > POISSON_MAX_MEAN:
        logger.debug("Poisson mean %.6g capped at %.6g", lam, POISSON_MAX_MEAN)
    lam = _clamp(lam, POISSON_MIN_MEAN, POISSON_MAX_MEAN)
    total = 0
    while lam > POISSON_KNUTH_CHUNK:
        total += _knuth_poisson(POISSON_KNUTH_CHUNK, rng)
        lam -= POISSON_KNUTH_CHUNK
    total += _knuth_poisson(lam, rng)
    return float(total)


def sample_bernoulli(mean: float, rng: np.random.Generator) -> float:
    """Single uniform draw against p = clamp(mean, 0, 1)."""
    p = _clamp(sanitize(mean), 0.0, 1.0)
    return 1.0 if rng.random() < p else 0.0


def sample_gamma(mean: float, rng: np.random.Generator,
                 scale: float = GAMMA_SCALE,
                 max_attempts: int = GAMMA_MAX_ATTEMPTS) -> float:
    """
    Marsaglia-Tsang draw from Gamma(shape, scale) with shape = max(mean, 0.1).

    Shapes below 1 are sampled at shape + 1 and boosted by U^(1/shape).
    Every pass through the accept/reject loop (including the v <= 0
    retries) counts against ``max_attempts``.

    Raises
    ------
    GenerationFailedError
        If no candidate is accepted within ``max_attempts``.
    """
    shape = max(sanitize(mean), GAMMA_MIN_SHAPE)
    boosted = shape < 1.0
    work_shape = shape + 1.0 if boosted else shape

    d = work_shape - 1.0 / 3.0
    c = 1.0 / math.sqrt(9.0 * d)

    for _ in range(max_attempts):
        x = sample_normal(0.0, rng)
        v = 1.0 + c * x
        if v <= 0.0:
            continue
        v = v * v * v
        u = rng.random()
        if u < 1.0 - 0.0331 * (x * x) * (x * x):
            break
        log_u = math.log(u) if u > 0.0 else -math.inf
        if log_u < 0.5 * x * x + d * (1.0 - v + math.log(v)):
            break
    else:
        raise GenerationFailedError(
            f"Gamma sampler exceeded {max_attempts} attempts (shape={shape})",
            shape=shape,
            max_attempts=max_attempts,
        )

    value = d * v * scale
    if boosted:
        value *= rng.random() ** (1.0 / shape)
    return value


def sample_negative_binomial(mean: float, rng: np.random.Generator,
                             r: int = NEGBINOMIAL_R) -> float:
    """Sum of r geometric draws with p = clamp(mean / (mean + r), 0.01, 0.99)."""
    mean = sanitize(mean)
    denom = mean + r
    ratio = mean / denom if denom != 0 else NEGBINOMIAL_P_MAX
    p = _clamp(ratio, NEGBINOMIAL_P_MIN, NEGBINOMIAL_P_MAX)
    log_q = math.log(1.0 - p)
    total = 0
    for _ in range(r):
        u = 1.0 - rng.random()
        total += math.floor(math.log(u) / log_q) + 1
    return float(total)


def sample_binomial(mean: float, rng: np.random.Generator,
                    n: int = BINOMIAL_TRIALS) -> float:
    """Sum of n Bernoulli trials with p = clamp(mean / n, 0, 1)."""
    p = _clamp(sanitize(mean) / n, 0.0, 1.0)
    successes = 0
    for _ in range(n):
        if rng.random() < p:
            successes += 1
    return float(successes)


def sample(distribution: Union[str, Distribution], mean: float,
           rng: Optional[np.random.Generator] = None) -> float:
    """
    Draw one response value for ``distribution`` given its mean.

    Parameters
    ----------
    distribution : str or Distribution
        Distribution name
    mean : float
        Mean response μ (clamped per distribution policy)
    rng : Generator, optional
        Uniform source; a fresh one is created if omitted

    Returns
    -------
    y : float
        A finite sample
    """
    dist = as_distribution(distribution)
    rng = make_rng(rng)

    if dist is Distribution.NORMAL:
        y = sample_normal(mean, rng)
    elif dist is Distribution.POISSON:
        y = sample_poisson(mean, rng)
    elif dist is Distribution.BERNOULLI:
        y = sample_bernoulli(mean, rng)
    elif dist is Distribution.GAMMA:
        y = sample_gamma(mean, rng)
    elif dist is Distribution.NEGATIVE_BINOMIAL:
        y = sample_negative_binomial(mean, rng)
    elif dist is Distribution.BINOMIAL:
        y = sample_binomial(mean, rng)
    else:
        raise UnknownDistributionError(f"Unknown distribution: {dist!r}", distribution=dist)
    return y


__all__ = [
    "Distribution",
    "as_distribution",
    "make_rng",
    "sanitize",
    "sample_normal",
    "sample_poisson",
    "sample_bernoulli",
    "sample_gamma",
    "sample_negative_binomial",
    "sample_binomial",
    "sample",
]
