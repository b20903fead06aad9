"""
factor_loadings - Constrained Loading Matrices and Varimax Rotation
"""

__version__ = "1.0.0"

# =============================================================================
# ERRORS
# =============================================================================
from .errors import (
    FactorLoadingsError,
    InvalidArgument,
    InvalidDimension,
    NumericalFailure,
)

# =============================================================================
# CORE TYPES
# =============================================================================
from .types import (
    VarimaxConfig,
    RotationCriterion,
    LoadingSummary,
)

# =============================================================================
# LOADING MATRIX LAYOUT
# =============================================================================
from .loadings import (
    nnz_loading,
    loading_mask,
    loading_matrix,
    loading_values,
    loading_matrix_gradient,
)

# =============================================================================
# ROTATION
# =============================================================================
from .rotation import (
    VarimaxRotation,
    varimax,
    normalize_signs,
)

# =============================================================================
# POSTERIOR HELPERS
# =============================================================================
from .posterior import (
    loading_matrices,
    rotate_loadings,
    summarize_loadings,
)

# PUBLIC API
# =============================================================================
__all__ = [
    "__version__",
    "FactorLoadingsError",
    "InvalidArgument",
    "InvalidDimension",
    "NumericalFailure",
    "VarimaxConfig",
    "RotationCriterion",
    "LoadingSummary",
    "nnz_loading",
    "loading_mask",
    "loading_matrix",
    "loading_values",
    "loading_matrix_gradient",
    "VarimaxRotation",
    "varimax",
    "normalize_signs",
    "loading_matrices",
    "rotate_loadings",
    "summarize_loadings",
]
