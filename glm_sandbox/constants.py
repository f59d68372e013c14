"""
Numeric policy for the GLM sandbox.

Single source of truth for ranges, clamps and fixed auxiliary
parameters used by the samplers and estimators.
"""

__all__ = [
    # Data generation
    "X_MIN",
    "X_MAX",
    "MIN_SAMPLE_SIZE",
    "MAX_SAMPLE_SIZE",
    "DEFAULT_SAMPLE_SIZE",
    # Sampler policy
    "NORMAL_VARIANCE",
    "POISSON_MIN_MEAN",
    "POISSON_MAX_MEAN",
    "POISSON_KNUTH_CHUNK",
    "GAMMA_MIN_SHAPE",
    "GAMMA_SCALE",
    "GAMMA_MAX_ATTEMPTS",
    "NEGBINOMIAL_R",
    "NEGBINOMIAL_P_MIN",
    "NEGBINOMIAL_P_MAX",
    "BINOMIAL_TRIALS",
    # Sentinels
    "NAN_SENTINEL",
    "INF_SENTINEL",
    # Estimation
    "POISSON_LOG_FLOOR",
    "LOGIT_CLAMP_MIN",
    "LOGIT_CLAMP_MAX",
    "DENOMINATOR_TOL",
    "SINGULAR_TOL",
]

# =============================================================================
# Data generation
# =============================================================================
X_MIN = -5.0
X_MAX = 5.0
MIN_SAMPLE_SIZE = 1
MAX_SAMPLE_SIZE = 10_000
DEFAULT_SAMPLE_SIZE = 100

# =============================================================================
# Sampler policy
# =============================================================================
NORMAL_VARIANCE = 1.0
POISSON_MIN_MEAN = 0.1
POISSON_MAX_MEAN = 1e4
POISSON_KNUTH_CHUNK = 500.0  # exp(-500) is still a normal double
GAMMA_MIN_SHAPE = 0.1
GAMMA_SCALE = 1.0
GAMMA_MAX_ATTEMPTS = 1000
NEGBINOMIAL_R = 5
NEGBINOMIAL_P_MIN = 0.01
NEGBINOMIAL_P_MAX = 0.99
BINOMIAL_TRIALS = 10

# =============================================================================
# Sentinels for non-finite draws
# =============================================================================
NAN_SENTINEL = 0.0
INF_SENTINEL = 1e6

# =============================================================================
# Estimation
# =============================================================================
POISSON_LOG_FLOOR = 0.1
LOGIT_CLAMP_MIN = 0.01
LOGIT_CLAMP_MAX = 0.99
DENOMINATOR_TOL = 1e-10
SINGULAR_TOL = 1e-10
