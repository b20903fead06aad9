"""
posterior.py - Batch Helpers for Sampled Loading Matrices

A sampler fitting a factor model produces one parameter vector per draw.
These helpers turn a ``(n_draws, nnz)`` array of such draws into a stack of
loading matrices, rotate every draw into a comparable orientation, and
summarize the stack element-wise.

Example Usage:
-------------
    >>> import numpy as np
    >>> from factor_loadings import nnz_loading
    >>> draws = np.random.default_rng(0).standard_normal((100, nnz_loading(50, 3)))
    >>> Ls = loading_matrices(draws, 50, 3)
    >>> rotated = rotate_loadings(Ls, rng=np.random.default_rng(0))
    >>> summary = summarize_loadings(rotated)
    >>> lower, upper = summary.interval(width=2.0)
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from loguru import logger

from .errors import InvalidArgument
from .loadings import loading_matrix, nnz_loading
from .rotation import RandomState, VarimaxRotation
from .types import LoadingSummary, VarimaxConfig


def loading_matrices(draws: np.ndarray, nrows: int, ncols: int) -> np.ndarray:
    """
    Build one loading matrix per row of ``draws``.

    Parameters
    ----------
    draws : np.ndarray, shape (n_draws, nnz_loading(nrows, ncols))
    nrows, ncols : int
        Shape of each loading matrix.

    Returns
    -------
    np.ndarray
        Stack of shape (n_draws, nrows, ncols).
    """
    draws = np.asarray(draws)
    if draws.ndim != 2:
        raise InvalidArgument(f"draws must be 2D, got shape {draws.shape}")

    expected = nnz_loading(nrows, ncols)
    if draws.shape[1] != expected:
        raise InvalidArgument(
            f"draws have {draws.shape[1]} columns, a {nrows}x{ncols} "
            f"loading matrix needs {expected}"
        )

    if draws.shape[0] == 0:
        return np.zeros((0, nrows, ncols))
    return np.stack([loading_matrix(row, nrows, ncols) for row in draws])


def rotate_loadings(
    matrices: np.ndarray,
    config: Optional[VarimaxConfig] = None,
    rng: RandomState = None,
) -> np.ndarray:
    """
    Apply the same varimax rotation settings to every matrix in a stack.

    Parameters
    ----------
    matrices : np.ndarray, shape (n_draws, d, m)
    config : VarimaxConfig, optional
    rng : np.random.Generator or int, optional
        Shared by all draws.

    Returns
    -------
    np.ndarray
        Rotated stack with the same shape.
    """
    matrices = np.asarray(matrices)
    if matrices.ndim != 3:
        raise InvalidArgument(f"matrices must be 3D, got shape {matrices.shape}")

    rotator = VarimaxRotation(config, rng=rng)
    n_draws = matrices.shape[0]
    logger.info(f"Rotating {n_draws} loading matrices of shape {matrices.shape[1:]}")

    if n_draws == 0:
        return matrices.astype(float)
    rotated = np.stack([rotator.rotate(M) for M in matrices])

    logger.success(f"Rotated {n_draws} loading matrices")
    return rotated


def summarize_loadings(matrices: np.ndarray) -> LoadingSummary:
    """
    Element-wise mean and standard deviation over a stack of matrices.

    Parameters
    ----------
    matrices : np.ndarray, shape (n_draws, d, m)
        Typically the output of :func:`rotate_loadings`.

    Returns
    -------
    LoadingSummary
    """
    matrices = np.asarray(matrices, dtype=float)
    if matrices.ndim != 3:
        raise InvalidArgument(f"matrices must be 3D, got shape {matrices.shape}")

    n_draws = matrices.shape[0]
    if n_draws == 0:
        raise InvalidArgument("Cannot summarize an empty stack of matrices")

    mean = matrices.mean(axis=0)
    if n_draws > 1:
        std = matrices.std(axis=0, ddof=1)
    else:
        std = np.zeros_like(mean)
    return LoadingSummary(mean=mean, std=std, n_draws=n_draws)
