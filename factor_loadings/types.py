"""
types.py - Core Value Types for factor_loadings

This module defines the small value objects shared across the package:
- VarimaxConfig: Tuning knobs of the varimax iteration
- RotationCriterion: Named members of the gamma-parameterized rotation family
- LoadingSummary: Element-wise statistics over a stack of loading matrices

Design Principles:
-----------------
1. Immutability (frozen dataclasses for value objects)
2. Validation at construction time (fail-fast)
3. Numpy-style docstrings throughout

Example Usage:
-------------
    >>> from factor_loadings.types import VarimaxConfig, RotationCriterion
    >>>
    >>> config = VarimaxConfig(gamma=0.0, max_iterations=200)
    >>> equamax = VarimaxConfig.for_criterion(RotationCriterion.EQUAMAX, 50, 3)
    >>> equamax.gamma
    1.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

import numpy as np

from .errors import InvalidArgument


# =============================================================================
# ROTATION CRITERIA
# =============================================================================

class RotationCriterion(str, Enum):
    """
    Members of the orthomax family reachable through ``gamma``.

    QUARTIMAX: gamma = 0
    VARIMAX:   gamma = 1
    EQUAMAX:   gamma = m / 2
    PARSIMAX:  gamma = d (m - 1) / (d + m - 2)

    where ``d`` is the number of rows and ``m`` the number of columns of the
    matrix being rotated.
    """
    QUARTIMAX = "quartimax"
    VARIMAX = "varimax"
    EQUAMAX = "equamax"
    PARSIMAX = "parsimax"

    def gamma(self, nrows: int, ncols: int) -> float:
        """Criterion weight for a ``nrows x ncols`` matrix."""
        if self is RotationCriterion.QUARTIMAX:
            return 0.0
        if self is RotationCriterion.VARIMAX:
            return 1.0
        if self is RotationCriterion.EQUAMAX:
            return ncols / 2.0
        denom = nrows + ncols - 2
        if denom == 0:
            # 1x1 matrix: rotation is a no-op anyway
            return 0.0
        return nrows * (ncols - 1) / denom


# =============================================================================
# VARIMAX CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class VarimaxConfig:
    """
    Tuning parameters for the varimax iteration.

    Parameters
    ----------
    gamma : float, default=1.0
        Criterion weight. 0 is quartimax, 1 is varimax; see
        :class:`RotationCriterion` for the others.
    min_iterations : int, default=20
        Convergence is not honored before this many iterations.
    max_iterations : int, default=1000
        Hard cap on the number of iterations.
    relative_tolerance : float, default=1e-12
        Threshold on the relative change of the criterion value.

    Raises
    ------
    InvalidArgument
        If any field is out of range.
    """
    gamma: float = 1.0
    min_iterations: int = 20
    max_iterations: int = 1000
    relative_tolerance: float = 1e-12

    def __post_init__(self):
        """Validate ranges on construction."""
        if not math.isfinite(self.gamma):
            raise InvalidArgument(f"gamma must be finite, got {self.gamma}")
        for name in ("min_iterations", "max_iterations"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidArgument(f"{name} must be an integer, got {value!r}")
        if self.min_iterations < 0:
            raise InvalidArgument(
                f"min_iterations must be >= 0, got {self.min_iterations}"
            )
        if self.max_iterations < 1:
            raise InvalidArgument(
                f"max_iterations must be >= 1, got {self.max_iterations}"
            )
        if not self.relative_tolerance > 0:
            raise InvalidArgument(
                f"relative_tolerance must be > 0, got {self.relative_tolerance}"
            )

    @classmethod
    def for_criterion(
        cls,
        criterion: RotationCriterion,
        nrows: int,
        ncols: int,
        **overrides,
    ) -> "VarimaxConfig":
        """
        Build a config whose ``gamma`` selects a named criterion.

        Parameters
        ----------
        criterion : RotationCriterion or str
            Criterion name, e.g. ``"equamax"``.
        nrows, ncols : int
            Shape of the matrices that will be rotated.
        **overrides
            Any other VarimaxConfig field.
        """
        gamma = RotationCriterion(criterion).gamma(nrows, ncols)
        return cls(gamma=gamma, **overrides)

    def with_gamma(self, gamma: float) -> "VarimaxConfig":
        """Copy of this config with a different criterion weight."""
        return replace(self, gamma=gamma)


# =============================================================================
# SUMMARY TYPES
# =============================================================================

@dataclass(frozen=True)
class LoadingSummary:
    """
    Element-wise statistics of a stack of loading matrices.

    Parameters
    ----------
    mean : np.ndarray
        Mean over draws, shape (nrows, ncols).
    std : np.ndarray
        Sample standard deviation over draws, shape (nrows, ncols).
        Zero when only one draw is available.
    n_draws : int
        Number of matrices summarized.

    Examples
    --------
    >>> import numpy as np
    >>> from factor_loadings import summarize_loadings
    >>> summary = summarize_loadings(np.random.default_rng(0).standard_normal((20, 5, 3)))
    >>> lower, upper = summary.interval(width=2.0)
    """
    mean: np.ndarray
    std: np.ndarray
    n_draws: int

    @property
    def shape(self) -> Tuple[int, int]:
        return self.mean.shape

    def interval(self, width: float = 2.0) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(mean - width * std, mean + width * std)``."""
        return self.mean - width * self.std, self.mean + width * self.std
