"""
errors.py - Exception Types for factor_loadings

Hierarchy:
---------
    FactorLoadingsError
    ├── InvalidArgument (also a ValueError)
    │   └── InvalidDimension
    └── NumericalFailure (also a RuntimeError)

Every error is raised synchronously at the offending call. Nothing in the
package retries.
"""


class FactorLoadingsError(Exception):
    """Base class for all errors raised by factor_loadings."""


class InvalidArgument(FactorLoadingsError, ValueError):
    """An argument has the wrong length, shape, or value."""


class InvalidDimension(InvalidArgument):
    """
    A loading matrix shape is not admissible.

    Raised when there are more factors than observed dimensions
    (``ncols > nrows``) or when either dimension is not positive.
    """


class NumericalFailure(FactorLoadingsError, RuntimeError):
    """An underlying decomposition failed (e.g. SVD did not converge)."""
