"""
rotation.py - Varimax (Orthomax) Rotation of Loading Matrices
=============================================================

Finds an orthogonal ``T`` maximizing the orthomax criterion of ``B = A @ T``
and returns ``B`` with a canonical column sign.

Mathematical Background:
-----------------------
For a ``d x m`` matrix ``A`` and weight ``gamma``, each iteration forms

    G = A.T @ (d * B**3 - gamma * B @ diag(sum(B**2, axis=0)))

and replaces ``T`` by the orthogonal Procrustes solution ``U @ Vt`` where
``G = U @ diag(s) @ Vt``. The criterion value tracked for convergence is
``sum(s)``.

gamma = 0, 1, m/2 and d(m-1)/(d+m-2) give quartimax, varimax, equamax and
parsimax respectively (see :class:`~factor_loadings.types.RotationCriterion`).

Example Usage:
-------------
    >>> import numpy as np
    >>> from factor_loadings import VarimaxRotation, VarimaxConfig, varimax, loading_matrix
    >>>
    >>> L = loading_matrix(np.random.default_rng(0).standard_normal(12), 5, 3)
    >>> rotator = VarimaxRotation(VarimaxConfig(gamma=1.0), rng=42)
    >>> B = rotator.rotate(L)
    >>>
    >>> # Or the functional form
    >>> B = varimax(L, gamma=0.0, rng=np.random.default_rng(0))
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np
import scipy.linalg
from loguru import logger

from .errors import InvalidArgument, NumericalFailure
from .types import VarimaxConfig

RandomState = Union[np.random.Generator, int, None]


# =============================================================================
# HELPERS
# =============================================================================

def normalize_signs(B: np.ndarray) -> np.ndarray:
    """
    Flip columns so that the larger-magnitude extreme is positive.

    A column is negated when ``|max(col)| < |min(col)|``. Applying this twice
    gives the same result as applying it once.

    Parameters
    ----------
    B : np.ndarray, shape (d, m)

    Returns
    -------
    np.ndarray
        New array with the same shape as ``B``.
    """
    B = np.array(B, copy=True)
    if B.ndim != 2:
        raise InvalidArgument(f"B must be 2D, got shape {B.shape}")
    if B.size == 0:
        return B
    flip = np.abs(B.max(axis=0)) < np.abs(B.min(axis=0))
    B[:, flip] = -B[:, flip]
    return B


def _has_converged(D: float, D_old: float, tol: float) -> bool:
    # Relative change is undefined at D == 0; only 0 -> 0 counts as converged
    if D == 0:
        return D_old == 0
    return abs(D - D_old) / D < tol


def _procrustes(A: np.ndarray, B: np.ndarray, gamma: float) -> Tuple[np.ndarray, float]:
    """Orthogonal update ``T`` and criterion value for the current ``B``."""
    d = A.shape[0]
    G = A.T @ (d * B ** 3 - gamma * B * np.sum(B ** 2, axis=0))
    try:
        U, s, Vt = scipy.linalg.svd(G)
    except (np.linalg.LinAlgError, ValueError) as e:
        logger.exception("SVD failed during varimax iteration. Check for NaNs or Infinite values.")
        raise NumericalFailure(f"SVD of the {G.shape} varimax gradient failed: {e}") from e
    return U @ Vt, float(np.sum(s))


# =============================================================================
# VARIMAX ROTATION
# =============================================================================

class VarimaxRotation:
    """
    Orthomax rotation with a fixed configuration and random source.

    Parameters
    ----------
    config : VarimaxConfig, optional
        Iteration settings. Defaults to ``VarimaxConfig()`` (plain varimax).
    rng : np.random.Generator or int, optional
        Source for the random restart used when the warm start lands on the
        identity. Anything with a ``standard_normal(size)`` method is used
        as-is; otherwise the value seeds ``np.random.default_rng``.

    Examples
    --------
    >>> A = np.random.default_rng(0).standard_normal((10, 3))
    >>> rotator = VarimaxRotation(rng=np.random.default_rng(1))
    >>> B = rotator.rotate(A)
    >>> B.shape == A.shape
    True

    Notes
    -----
    The object holds no per-call state. The only thing shared between calls
    is the generator, which advances only on a degenerate warm start.
    """

    def __init__(
        self,
        config: Optional[VarimaxConfig] = None,
        rng: RandomState = None,
    ):
        self.config = config if config is not None else VarimaxConfig()
        if hasattr(rng, "standard_normal"):
            self.rng = rng
        else:
            self.rng = np.random.default_rng(rng)

    def __repr__(self) -> str:
        return f"VarimaxRotation(config={self.config!r})"

    def rotate(self, A: np.ndarray) -> np.ndarray:
        """
        Rotate the columns of ``A``.

        Parameters
        ----------
        A : np.ndarray, shape (d, m)
            Matrix whose column vectors are rotated.

        Returns
        -------
        np.ndarray
            Rotated matrix ``A @ T`` with shape (d, m) and normalized signs.
            When ``m == 1`` the input is returned unchanged.

        Raises
        ------
        InvalidArgument
            If ``A`` is not 2D or has no rows.
        NumericalFailure
            If a singular value decomposition fails.
        """
        A = np.asarray(A)
        if A.ndim != 2:
            raise InvalidArgument(f"A must be 2D, got shape {A.shape}")

        d, m = A.shape
        if d == 0 or m == 0:
            raise InvalidArgument(f"A must have positive dimensions, got ({d}, {m})")
        if m == 1:
            return A

        cfg = self.config
        logger.debug(f"Starting varimax rotation | Shape: ({d}, {m}), gamma={cfg.gamma}")

        # 1. Warm start from the identity
        identity = np.eye(m)
        T, _ = _procrustes(A, A, cfg.gamma)
        B = A @ T

        # 2. A stationary start gives T == I; restart from a random orthogonal matrix
        if np.linalg.norm(T - identity) < cfg.relative_tolerance:
            logger.debug("Warm start is the identity; restarting from a random orthogonal matrix")
            T, _ = scipy.linalg.qr(self.rng.standard_normal((m, m)))
            B = A @ T

        # 3. Iterate the Procrustes update
        D = 0.0
        converged = False
        for k in range(1, cfg.max_iterations + 1):
            D_old = D
            T, D = _procrustes(A, B, cfg.gamma)
            B = A @ T
            if k >= cfg.min_iterations and _has_converged(D, D_old, cfg.relative_tolerance):
                converged = True
                break

        if converged:
            logger.debug(f"Varimax converged after {k} iterations (criterion={D:.6g})")
        else:
            logger.warning(
                f"Varimax did not converge within {cfg.max_iterations} iterations "
                f"(criterion={D:.6g}); returning current rotation"
            )

        # 4. Canonical sign per column
        return normalize_signs(B)


def varimax(
    A: np.ndarray,
    gamma: float = 1.0,
    min_iterations: int = 20,
    max_iterations: int = 1000,
    relative_tolerance: float = 1e-12,
    rng: RandomState = None,
) -> np.ndarray:
    """
    Varimax (or quartimax, equamax, parsimax) rotation of the columns of ``A``.

    Parameters
    ----------
    A : np.ndarray, shape (d, m)
        Matrix whose column vectors are rotated.
    gamma : float, default=1.0
        0, 1, m/2 and d(m-1)/(d+m-2) give quartimax, varimax, equamax and
        parsimax.
    min_iterations : int, default=20
        Minimum number of iterations, in case the stopping test passes early.
    max_iterations : int, default=1000
        Maximum number of iterations.
    relative_tolerance : float, default=1e-12
        Relative tolerance for the stopping test.
    rng : np.random.Generator or int, optional
        Random source for the degenerate-start restart.

    Returns
    -------
    np.ndarray
        Rotated matrix of the same shape as ``A``.
    """
    config = VarimaxConfig(
        gamma=gamma,
        min_iterations=min_iterations,
        max_iterations=max_iterations,
        relative_tolerance=relative_tolerance,
    )
    return VarimaxRotation(config, rng=rng).rotate(A)
