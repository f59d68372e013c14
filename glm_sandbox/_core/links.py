"""
Inverse link functions.

Maps the linear predictor η to the mean response μ = g⁻¹(η). Only the
inverse direction is needed by the engines.
"""

from enum import Enum
from typing import Callable, Union

import numpy as np

from ..exceptions import UnknownLinkError


class Link(str, Enum):
    """Supported link functions."""
    IDENTITY = "identity"
    LOG = "log"
    LOGIT = "logit"
    INVERSE = "inverse"
    PROBIT = "probit"
    CLOGLOG = "cloglog"

    def __str__(self) -> str:
        return self.value


def as_link(value: Union[str, Link]) -> Link:
    """Coerce a link name to :class:`Link`, raising ``UnknownLinkError``."""
    if isinstance(value, Link):
        return value
    try:
        return Link(value)
    except ValueError:
        valid = ", ".join(repr(l.value) for l in Link)
        raise UnknownLinkError(
            f"Unknown link function: {value!r}. Valid options: {valid}",
            link=value,
        ) from None


# Abramowitz & Stegun 7.1.26 coefficients for erf
_AS_P = 0.3275911
_AS_A1 = 0.254829592
_AS_A2 = -0.284496736
_AS_A3 = 1.421413741
_AS_A4 = -1.453152027
_AS_A5 = 1.061405429


def _identity(eta: np.ndarray) -> np.ndarray:
    return eta


def _log(eta: np.ndarray) -> np.ndarray:
    with np.errstate(over='ignore'):
        return np.exp(eta)


def _logit(eta: np.ndarray) -> np.ndarray:
    with np.errstate(over='ignore'):
        return 1.0 / (1.0 + np.exp(-eta))


def _inverse(eta: np.ndarray) -> np.ndarray:
    # η = 0 has no inverse; NaN is handed to the generator's sentinel policy
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.where(eta == 0.0, np.nan, 1.0 / eta)


def _probit(eta: np.ndarray) -> np.ndarray:
    """
    Standard normal CDF Φ(η).

    Closed-form rational approximation of erf (A&S 7.1.26, |error| < 1.5e-7
    in erf, so < 7.5e-8 in Φ).
    """
    sign = np.where(eta >= 0, 1.0, -1.0)
    z = np.abs(eta) / np.sqrt(2.0)
    t = 1.0 / (1.0 + _AS_P * z)
    poly = ((((_AS_A5 * t + _AS_A4) * t + _AS_A3) * t + _AS_A2) * t + _AS_A1) * t
    with np.errstate(over='ignore'):
        erf = 1.0 - poly * np.exp(-z * z)
    return 0.5 * (1.0 + sign * erf)


def _cloglog(eta: np.ndarray) -> np.ndarray:
    with np.errstate(over='ignore'):
        return 1.0 - np.exp(-np.exp(eta))


def _dispatch(link: Link) -> Callable[[np.ndarray], np.ndarray]:
    if link is Link.IDENTITY:
        return _identity
    elif link is Link.LOG:
        return _log
    elif link is Link.LOGIT:
        return _logit
    elif link is Link.INVERSE:
        return _inverse
    elif link is Link.PROBIT:
        return _probit
    elif link is Link.CLOGLOG:
        return _cloglog
    raise UnknownLinkError(f"Unknown link function: {link!r}", link=link)


def inverse_link(link: Union[str, Link], eta):
    """
    Apply the inverse link μ = g⁻¹(η).

    Parameters
    ----------
    link : str or Link
        Link function name
    eta : float or array_like
        Linear predictor value(s)

    Returns
    -------
    mu : float or ndarray
        Mean response; a Python float for scalar input.

    Notes
    -----
    ``inverse`` at η = 0 returns NaN rather than raising. Overflow in
    ``exp`` saturates (``log`` gives inf, ``logit`` gives 0 or 1).
    """
    fn = _dispatch(as_link(link))
    eta_arr = np.asarray(eta, dtype=np.float64)
    mu = fn(eta_arr)
    if eta_arr.ndim == 0:
        return float(mu)
    return mu


def inverse_link_function(link: Union[str, Link]) -> Callable[[float], float]:
    """Return the scalar ``η -> μ`` callable for a link (chart evaluators)."""
    resolved = as_link(link)

    def evaluate(eta: float) -> float:
        return inverse_link(resolved, eta)

    evaluate.__name__ = f"inverse_{resolved.value}"
    return evaluate


__all__ = ["Link", "as_link", "inverse_link", "inverse_link_function"]
