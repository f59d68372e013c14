"""
Exceptions raised by the GLM sandbox engines.

Every error carries a stable ``code`` so callers (state actions, UI
layers) can surface it without parsing messages.
"""

__all__ = [
    "GLMSandboxError",
    "InvalidSampleSizeError",
    "EmptyDataError",
    "InvalidDataError",
    "InsufficientVariationError",
    "DimensionMismatchError",
    "SingularMatrixError",
    "GenerationFailedError",
    "UnknownLinkError",
    "UnknownDistributionError",
    "FallbackEstimatorWarning",
]


class GLMSandboxError(Exception):
    """Base exception for all GLM sandbox errors."""

    code = "GLM_SANDBOX_ERROR"

    def __init__(self, message: str = "", **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Plain representation for the UI collaborator."""
        out = {'code': self.code, 'message': self.message}
        if self.details:
            out['details'] = dict(self.details)
        return out


class InvalidSampleSizeError(GLMSandboxError, ValueError):
    """Sample size is not an integer in [1, 10000]."""

    code = "INVALID_SAMPLE_SIZE"


class EmptyDataError(GLMSandboxError, ValueError):
    """Estimation requested on zero observations."""

    code = "EMPTY_DATA"


class InvalidDataError(GLMSandboxError, ValueError):
    """Observations or operands contain NaN or Inf."""

    code = "INVALID_DATA"


class InsufficientVariationError(GLMSandboxError, ValueError):
    """
    Predictor values are too degenerate for closed-form estimation.

    Raised when ``n*sum(x^2) - sum(x)^2`` is numerically zero, i.e. all
    x values are (nearly) equal.
    """

    code = "INSUFFICIENT_VARIATION"


class DimensionMismatchError(GLMSandboxError, ValueError):
    """Vector or matrix operand shapes are incompatible."""

    code = "DIMENSION_MISMATCH"


class SingularMatrixError(GLMSandboxError, ValueError):
    """Gram matrix X'X is (numerically) singular."""

    code = "SINGULAR_MATRIX"


class GenerationFailedError(GLMSandboxError, RuntimeError):
    """
    A bounded accept/reject sampler exhausted its attempt budget.

    Try:
    - Raising ``GAMMA_MAX_ATTEMPTS``
    - Checking the random source is not degenerate
    """

    code = "GENERATION_FAILED"


class UnknownLinkError(GLMSandboxError, ValueError):
    """Configuration names an unsupported link function."""

    code = "UNKNOWN_LINK"


class UnknownDistributionError(GLMSandboxError, ValueError):
    """Configuration names an unsupported distribution."""

    code = "UNKNOWN_DISTRIBUTION"


class FallbackEstimatorWarning(UserWarning):
    """
    A weak approximate estimator was used instead of least squares.

    Issued for the secant-line scalar fallback, the diagonal approximation
    of multi-predictor OLS, and the random-coefficient stub.
    """
    pass
