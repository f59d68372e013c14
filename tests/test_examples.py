"""
Test the worked matrix-GLM examples.
"""

import numpy as np
import pytest

from glm_sandbox import examples


class TestExamples:
    """Each example returns its results and prints a report."""

    def test_run_all(self, capsys):
        results = examples.run_all_matrix_examples(seed=42)
        assert set(results) == {'linear_regression', 'logistic_regression', 'poisson_regression',
                                'matrix_operations', 'scalar_vs_matrix'}
        captured = capsys.readouterr()
        assert 'GLM Learning Sandbox' in captured.out
        assert 'All examples completed successfully!' in captured.out

    def test_quiet(self, capsys):
        examples.run_all_matrix_examples(seed=1, verbose=False)
        assert capsys.readouterr().out == ''

    def test_linear_regression(self):
        result = examples.linear_regression_example(np.random.default_rng(0), verbose=False)
        assert np.allclose(result['estimated_params'].beta, [2.0, 1.5, -0.8], atol=0.3)
        assert result['design_matrix'].shape == (3, 3)
        assert np.all(result['design_matrix'][:, 0] == 1.0)

    def test_logistic_probabilities(self):
        result = examples.logistic_regression_example(np.random.default_rng(0), verbose=False)
        assert all(0.0 <= p <= 1.0 for p in result['probabilities'])
        assert len(result['estimated_params'].beta) == 4

    def test_poisson_rates(self):
        result = examples.poisson_regression_example(np.random.default_rng(0), verbose=False)
        assert all(r > 0 for r in result['rates'])

    def test_matrix_operations(self):
        result = examples.matrix_operations_example(verbose=False)
        assert np.allclose(result['eta'], [1.9, 2.6, 5.7])
        assert np.allclose(result['eta'], result['eta_rows'])
        assert result['Xt'].shape == (3, 3)

    def test_scalar_vs_matrix(self):
        result = examples.scalar_vs_matrix_example(verbose=False)
        assert result['eta_scalar'] == result['eta_matrix'] == 6.5


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
