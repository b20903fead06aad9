"""
test_types.py - Tests for Core Value Types

Tests cover:
- VarimaxConfig defaults and validation
- RotationCriterion gamma values
- LoadingSummary intervals
"""

import dataclasses

import pytest
import numpy as np

from factor_loadings import (
    VarimaxConfig,
    RotationCriterion,
    LoadingSummary,
    InvalidArgument,
)


class TestVarimaxConfig:
    """Tests for VarimaxConfig."""

    def test_defaults(self):
        config = VarimaxConfig()
        assert config.gamma == 1.0
        assert config.min_iterations == 20
        assert config.max_iterations == 1000
        assert config.relative_tolerance == 1e-12

    def test_frozen(self):
        config = VarimaxConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.gamma = 0.0

    def test_with_gamma(self):
        config = VarimaxConfig(max_iterations=10).with_gamma(0.0)
        assert config.gamma == 0.0
        assert config.max_iterations == 10

    def test_zero_min_iterations_allowed(self):
        assert VarimaxConfig(min_iterations=0).min_iterations == 0

    def test_numpy_integer_iterations_allowed(self):
        config = VarimaxConfig(min_iterations=np.int64(5), max_iterations=np.int32(50))
        assert config.max_iterations == 50

    @pytest.mark.parametrize("kwargs,match", [
        ({"min_iterations": -1}, "min_iterations"),
        ({"max_iterations": 0}, "max_iterations"),
        ({"relative_tolerance": 0.0}, "relative_tolerance"),
        ({"relative_tolerance": -1e-6}, "relative_tolerance"),
        ({"gamma": np.inf}, "gamma"),
        ({"gamma": np.nan}, "gamma"),
        ({"max_iterations": 100.0}, "max_iterations must be an integer"),
        ({"min_iterations": 2.5}, "min_iterations must be an integer"),
        ({"max_iterations": True}, "max_iterations must be an integer"),
    ])
    def test_invalid_values_raise(self, kwargs, match):
        with pytest.raises(InvalidArgument, match=match):
            VarimaxConfig(**kwargs)


class TestRotationCriterion:
    """Tests for RotationCriterion."""

    def test_quartimax(self):
        assert RotationCriterion.QUARTIMAX.gamma(50, 3) == 0.0

    def test_varimax(self):
        assert RotationCriterion.VARIMAX.gamma(50, 3) == 1.0

    def test_equamax(self):
        assert RotationCriterion.EQUAMAX.gamma(50, 4) == 2.0

    def test_parsimax(self):
        # d (m - 1) / (d + m - 2) = 10 * 2 / 11
        assert np.isclose(RotationCriterion.PARSIMAX.gamma(10, 3), 20 / 11)

    def test_parsimax_one_by_one(self):
        assert RotationCriterion.PARSIMAX.gamma(1, 1) == 0.0

    def test_for_criterion_from_string(self):
        config = VarimaxConfig.for_criterion("equamax", 20, 6, max_iterations=50)
        assert config.gamma == 3.0
        assert config.max_iterations == 50

    def test_unknown_criterion_raises(self):
        with pytest.raises(ValueError):
            VarimaxConfig.for_criterion("promax", 20, 6)


class TestLoadingSummary:
    """Tests for LoadingSummary."""

    def test_interval(self):
        summary = LoadingSummary(
            mean=np.array([[1.0, 0.0]]),
            std=np.array([[0.5, 0.25]]),
            n_draws=10,
        )
        lower, upper = summary.interval(width=2.0)
        assert np.array_equal(lower, [[0.0, -0.5]])
        assert np.array_equal(upper, [[2.0, 0.5]])
        assert summary.shape == (1, 2)
