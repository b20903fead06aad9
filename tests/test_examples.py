"""
Test Suite for Examples Package
===============================
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# =============================================================================
# PATH SETUP
# =============================================================================
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from examples import run_example, list_examples
from factor_loadings import LoadingSummary


class TestRunExample:
    """Test that examples run end-to-end via the wrapper."""

    def test_run_factor_model_rotation(self):
        result = run_example("factor_model_rotation", nx=10, nfactor=3, nobs=50, n_draws=5)

        assert result["truth"].shape == (10, 3)
        assert isinstance(result["summary"], LoadingSummary)
        assert result["summary"].n_draws == 5
        assert np.isfinite(result["relative_error"])
        assert 0.0 <= result["coverage"] <= 1.0

    def test_config_kwargs_forwarded(self):
        result = run_example("factor_model_rotation", nx=8, nfactor=2, nobs=20, n_draws=3, gamma=0.0)
        assert result["summary"].shape == (8, 2)

    def test_unknown_example_raises(self):
        with pytest.raises(ValueError, match="Unknown example"):
            run_example("does_not_exist")

    def test_list_examples(self):
        assert "factor_model_rotation" in list_examples()
