"""
Test the single-predictor GLM engine.

Covers the linear predictor and mean response, data generation bounds and
sentinels, and the closed-form estimators for each (distribution, link).
"""

import math
import warnings

import pytest
import numpy as np
import pandas as pd

from glm_sandbox import glm
from glm_sandbox.glm import DataPoint, GLMConfig, GLMParameters
from glm_sandbox.exceptions import (
    EmptyDataError,
    FallbackEstimatorWarning,
    InsufficientVariationError,
    InvalidDataError,
    InvalidSampleSizeError,
    UnknownDistributionError,
)


class TestPredictors:
    """η and μ at known points."""

    def test_linear_predictor(self):
        params = GLMParameters(intercept=2.0, slope=1.5)
        assert glm.linear_predictor(3.0, params) == 6.5

    def test_mean_response_identity(self):
        params = GLMParameters(intercept=1.0, slope=2.0)
        assert glm.mean_response(3.0, params, GLMConfig()) == 7.0

    def test_mean_response_log(self):
        params = GLMParameters(intercept=0.0, slope=1.0)
        config = GLMConfig(distribution='poisson', link_function='log')
        assert math.isclose(glm.mean_response(2.0, params, config), math.exp(2.0))

    def test_mean_response_logit(self):
        params = GLMParameters(intercept=0.0, slope=1.0)
        config = GLMConfig(distribution='bernoulli', link_function='logit')
        assert glm.mean_response(0.0, params, config) == 0.5

    def test_curves(self):
        params = GLMParameters(intercept=1.0, slope=-1.0)
        config = GLMConfig(distribution='poisson', link_function='log')
        eta = glm.linear_predictor_curve(params)
        mu = glm.mean_response_curve(params, config)
        assert eta(1.0) == 0.0
        assert mu(1.0) == 1.0

    def test_evaluate_curve(self):
        frame = glm.evaluate_curve(glm.linear_predictor_curve(GLMParameters(0.0, 2.0)), num=11)
        assert list(frame.columns) == ['x', 'y']
        assert len(frame) == 11
        assert frame['x'].iloc[0] == -5.0 and frame['x'].iloc[-1] == 5.0
        assert np.allclose(frame['y'], 2 * frame['x'])


class TestGLMConfig:
    """Config coercion and serialisation."""

    def test_defaults(self):
        config = GLMConfig()
        assert config.distribution.value == 'normal'
        assert config.link_function.value == 'identity'

    def test_unknown_distribution(self):
        with pytest.raises(UnknownDistributionError):
            GLMConfig(distribution='lognormal')

    def test_to_dict(self):
        config = GLMConfig(distribution='negativeBinomial', link_function='log')
        assert config.to_dict() == {'distribution': 'negativeBinomial', 'linkFunction': 'log'}
        assert GLMConfig.from_dict(config.to_dict()) == config


class TestGenerateData:
    """Synthetic data generation."""

    def test_length_and_x_range(self, rng):
        params = GLMParameters(intercept=0.0, slope=1.0)
        data = glm.generate_data(params, GLMConfig(), 500, rng=rng)
        assert len(data) == 500
        assert all(-5.0 <= point.x <= 5.0 for point in data)
        assert all(math.isfinite(point.y) for point in data)

    def test_sample_size_one(self, rng):
        data = glm.generate_data(GLMParameters(0.0, 1.0), GLMConfig(), 1, rng=rng)
        assert len(data) == 1

    @pytest.mark.parametrize("size,message", [
        (0, "positive integer"),
        (-1, "positive integer"),
        (1.5, "positive integer"),
        (10001, "cannot exceed 10,000"),
    ])
    def test_invalid_sample_size(self, size, message, rng):
        with pytest.raises(InvalidSampleSizeError, match=message) as exc_info:
            glm.generate_data(GLMParameters(0.0, 1.0), GLMConfig(), size, rng=rng)
        assert exc_info.value.code == "INVALID_SAMPLE_SIZE"

    def test_reproducible(self):
        params = GLMParameters(intercept=0.5, slope=0.3)
        config = GLMConfig(distribution='poisson', link_function='log')
        a = glm.generate_data(params, config, 50, rng=11)
        b = glm.generate_data(params, config, 50, rng=11)
        assert a == b

    @pytest.mark.parametrize("distribution,link", [
        ('normal', 'identity'),
        ('poisson', 'log'),
        ('bernoulli', 'logit'),
        ('gamma', 'inverse'),
        ('negativeBinomial', 'log'),
        ('binomial', 'logit'),
        ('bernoulli', 'probit'),
        ('bernoulli', 'cloglog'),
    ])
    def test_extreme_parameters_stay_finite(self, distribution, link, rng):
        """Overflowing means are replaced by bounded sentinels."""
        config = GLMConfig(distribution=distribution, link_function=link)
        for params in (GLMParameters(1e300, 1e300), GLMParameters(-1e300, 0.0),
                       GLMParameters(0.0, 0.0)):
            data = glm.generate_data(params, config, 5, rng=rng)
            assert all(math.isfinite(point.y) for point in data)

    def test_large_opposing_coefficients(self, rng):
        data = glm.generate_data(GLMParameters(1000.0, -1000.0), GLMConfig(), 10, rng=rng)
        assert len(data) == 10
        assert all(math.isfinite(point.y) for point in data)

    def test_poisson_tiny_mean(self, rng):
        params = GLMParameters(intercept=-100.0, slope=0.0)
        config = GLMConfig(distribution='poisson', link_function='log')
        data = glm.generate_data(params, config, 100, rng=rng)
        assert all(point.y >= 0 and point.y == int(point.y) for point in data)

    def test_bernoulli_responses(self, rng):
        config = GLMConfig(distribution='bernoulli', link_function='logit')
        data = glm.generate_data(GLMParameters(0.0, 1.0), config, 200, rng=rng)
        assert {point.y for point in data} <= {0.0, 1.0}


class TestEstimateParameters:
    """Closed-form estimators."""

    def test_exact_line(self):
        data = [DataPoint(x=x, y=1.0 + 2.0 * x) for x in (-2.0, -1.0, 0.0, 1.0, 2.0)]
        estimated = glm.estimate_parameters(data, GLMConfig())
        assert math.isclose(estimated.intercept, 1.0, abs_tol=1e-12)
        assert math.isclose(estimated.slope, 2.0, abs_tol=1e-12)

    def test_four_point_line(self):
        data = [DataPoint(x=0.0, y=1.0), DataPoint(x=1.0, y=3.0),
                DataPoint(x=2.0, y=5.0), DataPoint(x=3.0, y=7.0)]
        estimated = glm.estimate_parameters(data, GLMConfig())
        assert math.isclose(estimated.intercept, 1.0, abs_tol=1e-12)
        assert math.isclose(estimated.slope, 2.0, abs_tol=1e-12)

    def test_recovers_normal_truth(self, rng):
        truth = GLMParameters(intercept=1.5, slope=-0.7)
        data = glm.generate_data(truth, GLMConfig(), 2000, rng=rng)
        estimated = glm.estimate_parameters(data, GLMConfig())
        assert abs(estimated.intercept - 1.5) < 0.1
        assert abs(estimated.slope + 0.7) < 0.05

    def test_poisson_log_transform(self):
        """Noise-free counts: OLS on ln(y) recovers the coefficients."""
        data = [DataPoint(x=x, y=math.exp(0.5 + 0.3 * x)) for x in (-1.0, 0.0, 1.0, 2.0)]
        config = GLMConfig(distribution='poisson', link_function='log')
        estimated = glm.estimate_parameters(data, config)
        assert math.isclose(estimated.intercept, 0.5, abs_tol=1e-9)
        assert math.isclose(estimated.slope, 0.3, abs_tol=1e-9)

    def test_bernoulli_logit_transform(self):
        """0/1 responses are clamped to 0.01/0.99 before the logit."""
        data = [DataPoint(x=-1.0, y=0.0), DataPoint(x=1.0, y=1.0)]
        config = GLMConfig(distribution='bernoulli', link_function='logit')
        estimated = glm.estimate_parameters(data, config)
        logit_hi = math.log(0.99 / 0.01)
        assert math.isclose(estimated.intercept, 0.0, abs_tol=1e-12)
        assert math.isclose(estimated.slope, logit_hi, rel_tol=1e-9)

    def test_equal_x_rejected(self):
        data = [DataPoint(x=2.0, y=float(i)) for i in range(5)]
        with pytest.raises(InsufficientVariationError) as exc_info:
            glm.estimate_parameters(data, GLMConfig())
        assert exc_info.value.code == "INSUFFICIENT_VARIATION"

    def test_single_point_rejected(self):
        with pytest.raises(InsufficientVariationError):
            glm.estimate_parameters([DataPoint(x=1.0, y=2.0)], GLMConfig())

    def test_empty_data(self):
        with pytest.raises(EmptyDataError, match="no data") as exc_info:
            glm.estimate_parameters([], GLMConfig())
        assert exc_info.value.code == "EMPTY_DATA"

    def test_non_finite_data(self):
        data = [DataPoint(x=0.0, y=float('inf')), DataPoint(x=1.0, y=1.0)]
        with pytest.raises(InvalidDataError, match="y contains NaN or Inf") as exc_info:
            glm.estimate_parameters(data, GLMConfig())
        assert exc_info.value.code == "INVALID_DATA"

    def test_secant_fallback_warns(self):
        data = [DataPoint(x=0.0, y=1.0), DataPoint(x=2.0, y=5.0), DataPoint(x=1.0, y=2.0)]
        config = GLMConfig(distribution='gamma', link_function='inverse')
        with pytest.warns(FallbackEstimatorWarning, match="secant"):
            estimated = glm.estimate_parameters(data, config)
        assert estimated.slope == 2.0
        assert estimated.intercept == 1.0

    def test_secant_fallback_equal_x(self):
        data = [DataPoint(x=1.0, y=1.0), DataPoint(x=1.0, y=3.0)]
        config = GLMConfig(distribution='binomial', link_function='logit')
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', FallbackEstimatorWarning)
            with pytest.raises(InsufficientVariationError, match="no variation"):
                glm.estimate_parameters(data, config)

    def test_supported_pairs_do_not_warn(self, rng):
        data = glm.generate_data(GLMParameters(0.0, 0.5), GLMConfig(), 50, rng=rng)
        with warnings.catch_warnings():
            warnings.simplefilter('error', FallbackEstimatorWarning)
            glm.estimate_parameters(data, GLMConfig())


class TestFrames:
    """DataFrame conversion."""

    def test_to_frame(self):
        data = [DataPoint(x=1.0, y=2.0), DataPoint(x=3.0, y=4.0)]
        frame = glm.to_frame(data)
        assert isinstance(frame, pd.DataFrame)
        assert frame['x'].tolist() == [1.0, 3.0]
        assert frame['y'].tolist() == [2.0, 4.0]

    def test_empty_frame(self):
        frame = glm.to_frame([])
        assert list(frame.columns) == ['x', 'y']
        assert len(frame) == 0

    def test_from_frame(self):
        frame = pd.DataFrame({'x': [0.5, -0.5], 'y': [1.0, 0.0]})
        assert glm.from_frame(frame) == [DataPoint(0.5, 1.0), DataPoint(-0.5, 0.0)]

    def test_records(self):
        params = GLMParameters(intercept=1.0, slope=2.0)
        assert GLMParameters.from_dict(params.to_dict()) == params
        point = DataPoint(x=1.0, y=0.0)
        assert DataPoint.from_dict(point.to_dict()) == point


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
