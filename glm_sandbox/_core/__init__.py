"""
Core algorithms (engine-agnostic).
"""

from .links import Link, as_link, inverse_link, inverse_link_function
from .random import Distribution, as_distribution, make_rng, sample
from .families import Family, get_family, is_canonical
from .lm_solver import fit_simple_ols, normal_equations, solve_2x2, solve_diagonal
from .qr import qr_least_squares

__all__ = [
    "Link",
    "as_link",
    "inverse_link",
    "inverse_link_function",
    "Distribution",
    "as_distribution",
    "make_rng",
    "sample",
    "Family",
    "get_family",
    "is_canonical",
    "fit_simple_ols",
    "normal_equations",
    "solve_2x2",
    "solve_diagonal",
    "qr_least_squares",
]
