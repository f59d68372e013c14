"""
GLM family definitions.

Ties each response distribution to its canonical link, variance
function, density and sampler.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union

import numpy as np
from scipy import stats

from ..constants import (
    POISSON_MIN_MEAN,
    POISSON_MAX_MEAN,
    GAMMA_MIN_SHAPE,
    GAMMA_SCALE,
    NEGBINOMIAL_R,
    NEGBINOMIAL_P_MIN,
    NEGBINOMIAL_P_MAX,
    BINOMIAL_TRIALS,
)
from .links import Link, as_link, inverse_link
from .random import Distribution, as_distribution, sample


class Family(ABC):
    """Base class for GLM families."""

    distribution: Distribution
    canonical_link: Link
    is_discrete: bool = False

    @property
    def name(self) -> str:
        """Family name."""
        return self.distribution.value

    def linkinv(self, eta, link: Optional[Union[str, Link]] = None):
        """Inverse link: μ = g⁻¹(η), canonical link unless given."""
        return inverse_link(link if link is not None else self.canonical_link, eta)

    @abstractmethod
    def variance(self, mu: np.ndarray) -> np.ndarray:
        """Variance function: V(μ)"""
        pass

    def working_weights(self, mu: np.ndarray) -> np.ndarray:
        """
        IRLS working weights under the canonical link.

        For a canonical link dμ/dη = V(μ), so w = (dμ/dη)² / V(μ) = V(μ).
        """
        return self.variance(mu)

    @abstractmethod
    def density(self, y, mu: float):
        """Probability density (or mass) of y for a draw with mean μ."""
        pass

    def sample(self, mu: float, rng=None) -> float:
        """Draw one response value with mean μ."""
        return sample(self.distribution, mu, rng)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(canonical_link='{self.canonical_link.value}')"


class Normal(Family):
    """Normal family, unit variance."""

    distribution = Distribution.NORMAL
    canonical_link = Link.IDENTITY

    def variance(self, mu: np.ndarray) -> np.ndarray:
        return np.ones_like(np.asarray(mu, dtype=np.float64))

    def density(self, y, mu: float):
        return stats.norm.pdf(y, loc=mu, scale=1.0)


class Poisson(Family):
    """Poisson family with log link."""

    distribution = Distribution.POISSON
    canonical_link = Link.LOG
    is_discrete = True

    def variance(self, mu: np.ndarray) -> np.ndarray:
        return np.asarray(mu, dtype=np.float64)

    def density(self, y, mu: float):
        lam = np.clip(mu, POISSON_MIN_MEAN, POISSON_MAX_MEAN)
        return stats.poisson.pmf(y, lam)


class Bernoulli(Family):
    """Bernoulli family with logit link."""

    distribution = Distribution.BERNOULLI
    canonical_link = Link.LOGIT
    is_discrete = True

    def variance(self, mu: np.ndarray) -> np.ndarray:
        mu = np.asarray(mu, dtype=np.float64)
        return mu * (1 - mu)

    def density(self, y, mu: float):
        return stats.bernoulli.pmf(y, np.clip(mu, 0.0, 1.0))


class Gamma(Family):
    """Gamma family with inverse link, shape = μ and unit scale."""

    distribution = Distribution.GAMMA
    canonical_link = Link.INVERSE

    def variance(self, mu: np.ndarray) -> np.ndarray:
        mu = np.asarray(mu, dtype=np.float64)
        return mu ** 2

    def density(self, y, mu: float):
        shape = np.maximum(mu, GAMMA_MIN_SHAPE)
        return stats.gamma.pdf(y, a=shape, scale=GAMMA_SCALE)


class NegativeBinomial(Family):
    """
    Negative binomial family with log link and fixed r = 5.

    Draws are counted as trials until the r-th success, so the support
    starts at r.

    Notes
    -----
    :meth:`variance` is the NB2 variance function of the nominal mean μ.
    The sampler and :meth:`density` use success probability
    p = clamp(μ / (μ + r), 0.01, 0.99), so the draws themselves have mean
    r / p and variance r(1 - p) / p²; see :meth:`draw_moments`.
    """

    distribution = Distribution.NEGATIVE_BINOMIAL
    canonical_link = Link.LOG
    is_discrete = True
    r = NEGBINOMIAL_R

    def variance(self, mu: np.ndarray) -> np.ndarray:
        """NB2 variance function V(μ) = μ + μ²/r of the nominal mean."""
        mu = np.asarray(mu, dtype=np.float64)
        return mu + mu ** 2 / self.r

    def success_probability(self, mu: float) -> float:
        return float(np.clip(mu / (mu + self.r), NEGBINOMIAL_P_MIN, NEGBINOMIAL_P_MAX))

    def draw_moments(self, mu: float):
        """
        Mean and variance of the sampled trial counts for nominal mean μ.

        Returns
        -------
        mean, variance : float
            r / p and r(1 - p) / p² with p from :meth:`success_probability`
        """
        p = self.success_probability(mu)
        return self.r / p, self.r * (1 - p) / p ** 2

    def density(self, y, mu: float):
        p = self.success_probability(mu)
        failures = np.asarray(y) - self.r
        return stats.nbinom.pmf(failures, self.r, p)


class Binomial(Family):
    """Binomial family with logit link and n = 10 trials."""

    distribution = Distribution.BINOMIAL
    canonical_link = Link.LOGIT
    is_discrete = True
    n = BINOMIAL_TRIALS

    def variance(self, mu: np.ndarray) -> np.ndarray:
        mu = np.asarray(mu, dtype=np.float64)
        return mu * (1 - mu / self.n)

    def density(self, y, mu: float):
        return stats.binom.pmf(y, self.n, np.clip(mu / self.n, 0.0, 1.0))


_FAMILIES = {
    Distribution.NORMAL: Normal(),
    Distribution.POISSON: Poisson(),
    Distribution.BERNOULLI: Bernoulli(),
    Distribution.GAMMA: Gamma(),
    Distribution.NEGATIVE_BINOMIAL: NegativeBinomial(),
    Distribution.BINOMIAL: Binomial(),
}


def get_family(distribution: Union[str, Distribution]) -> Family:
    """Family object for a distribution name."""
    return _FAMILIES[as_distribution(distribution)]


def is_canonical(distribution: Union[str, Distribution], link: Union[str, Link]) -> bool:
    """Whether ``link`` is the canonical link of ``distribution``."""
    return get_family(distribution).canonical_link is as_link(link)


__all__ = [
    "Family",
    "Normal",
    "Poisson",
    "Bernoulli",
    "Gamma",
    "NegativeBinomial",
    "Binomial",
    "get_family",
    "is_canonical",
]
