"""
Test input validation and the error hierarchy.
"""

import pytest
import numpy as np

from glm_sandbox.glm import DataPoint, GLMConfig, GLMParameters
from glm_sandbox.matrix_glm import MatrixDataPoint, MatrixGLMConfig, MatrixGLMParameters
from glm_sandbox.validation import (
    ValidationResult,
    validate_sample_size,
    check_sample_size,
    validate_parameters,
    validate_matrix_parameters,
    validate_config,
    validate_data,
)
from glm_sandbox.exceptions import GLMSandboxError, InvalidSampleSizeError


class TestSampleSize:
    """Sample size must be an integer in [1, 10000]."""

    @pytest.mark.parametrize("size", [1, 100, 10000, np.int64(50)])
    def test_valid(self, size):
        assert validate_sample_size(size).is_valid

    @pytest.mark.parametrize("size", [0, -1, 1.5, 100.0, True, "100", None])
    def test_not_positive_integer(self, size):
        result = validate_sample_size(size)
        assert not result
        assert result.errors == ["Sample size must be a positive integer"]

    def test_too_large(self):
        result = validate_sample_size(10001)
        assert result.errors == ["Sample size cannot exceed 10,000"]

    def test_check_raises(self):
        with pytest.raises(InvalidSampleSizeError) as exc_info:
            check_sample_size(0)
        assert exc_info.value.details == {'sample_size': 0}

    def test_check_passes(self):
        check_sample_size(10)


class TestParameters:
    """Coefficient validation."""

    def test_valid(self):
        assert validate_parameters(GLMParameters(intercept=1.0, slope=-2.0))

    def test_non_finite(self):
        result = validate_parameters(GLMParameters(intercept=float('nan'), slope=float('inf')))
        assert len(result.errors) == 2
        assert result.errors[0].startswith("Intercept must be a finite number")

    def test_matrix_valid(self):
        params = MatrixGLMParameters(beta=[1.0, 2.0, 3.0])
        assert validate_matrix_parameters(params, MatrixGLMConfig(num_predictors=2))

    def test_matrix_length_mismatch(self):
        params = MatrixGLMParameters(beta=[1.0, 2.0])
        result = validate_matrix_parameters(params, MatrixGLMConfig(num_predictors=3))
        assert not result
        assert "require 4" in result.errors[0]

    def test_matrix_empty_and_non_finite(self):
        assert not validate_matrix_parameters(MatrixGLMParameters(beta=[]))
        assert not validate_matrix_parameters(MatrixGLMParameters(beta=[1.0, float('inf')]))


class TestConfig:
    """Distribution, link and predictor-count validation."""

    def test_valid(self):
        assert validate_config(GLMConfig(distribution='poisson', link_function='log'))

    def test_unknown_names(self):
        class RawConfig:
            distribution = 'weibull'
            link_function = 'sqrt'

        result = validate_config(RawConfig())
        assert len(result.errors) == 2

    def test_num_predictors(self):
        config = MatrixGLMConfig(num_predictors=0)
        result = validate_config(config)
        assert not result
        assert "positive integer" in result.errors[0]


class TestData:
    """Observation validation."""

    def test_empty(self):
        result = validate_data([])
        assert result.errors == ["No data points to estimate from"]

    def test_non_finite(self):
        data = [DataPoint(x=1.0, y=2.0), DataPoint(x=float('nan'), y=1.0)]
        result = validate_data(data)
        assert result.errors == ["Data point 1 contains a non-finite value"]

    def test_matrix_points(self):
        data = [MatrixDataPoint(x=[1.0, 2.0], y=0.0), MatrixDataPoint(x=[1.0, float('inf')], y=0.0)]
        assert len(validate_data(data).errors) == 1


class TestValidationResult:
    """Result accumulation."""

    def test_merge(self):
        first = ValidationResult()
        second = ValidationResult()
        second.add("bad")
        first.merge(second)
        assert not first
        assert first.to_dict() == {'isValid': False, 'errors': ["bad"]}

    def test_default_is_valid(self):
        assert ValidationResult().to_dict() == {'isValid': True, 'errors': []}


class TestErrors:
    """Error codes and plain representation."""

    def test_to_dict(self):
        error = InvalidSampleSizeError("Sample size must be a positive integer", sample_size=0)
        assert error.to_dict() == {
            'code': 'INVALID_SAMPLE_SIZE',
            'message': "Sample size must be a positive integer",
            'details': {'sample_size': 0},
        }

    def test_hierarchy(self):
        error = InvalidSampleSizeError("x")
        assert isinstance(error, GLMSandboxError)
        assert isinstance(error, ValueError)
        assert 'details' not in error.to_dict()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
