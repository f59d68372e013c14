"""
GLM Sandbox: simulate and fit generalized linear models for teaching.

A truth model (distribution, link, coefficients) generates synthetic
observations; closed-form estimators recover a model to compare against
the truth.

Copyright (C) 2024 SGCX
Licensed under GPL-3.0
"""

__version__ = "1.0.0"

# Import main user-facing API
from .glm import (
    GLMParameters,
    GLMConfig,
    DataPoint,
    linear_predictor,
    mean_response,
    generate_data,
    estimate_parameters,
)
from . import matrix_glm
from .matrix_glm import MatrixGLMParameters, MatrixGLMConfig, MatrixDataPoint
from .state import AppState, Mode
from .validation import ValidationResult

# Core building blocks (for advanced users)
from ._core import Link, Distribution, inverse_link, make_rng, get_family
from .exceptions import GLMSandboxError, FallbackEstimatorWarning

__all__ = [
    'GLMParameters',
    'GLMConfig',
    'DataPoint',
    'linear_predictor',
    'mean_response',
    'generate_data',
    'estimate_parameters',
    'matrix_glm',
    'MatrixGLMParameters',
    'MatrixGLMConfig',
    'MatrixDataPoint',
    'AppState',
    'Mode',
    'ValidationResult',
    'Link',
    'Distribution',
    'inverse_link',
    'make_rng',
    'get_family',
    'GLMSandboxError',
    'FallbackEstimatorWarning',
]
