"""
loadings.py - Lower-Triangular Loading Matrix Layout
====================================================

A loading matrix maps ``ncols`` latent factors to ``nrows`` observed
variables. Entries above the main diagonal are fixed at zero, which pins down
the rotational freedom of the factor model and keeps the loading vectors
linearly independent. The remaining (free) entries are stored as a flat
parameter vector, filled column by column from left to right and top to
bottom within each column.

For ``nrows=4, ncols=3`` the vector ``[a, b, c, d, e, f, g, h, i]`` lays out
as::

    [[a, 0, 0],
     [b, e, 0],
     [c, f, h],
     [d, g, i]]
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
from loguru import logger

from .errors import InvalidArgument, InvalidDimension

ArrayLike = Union[np.ndarray, Sequence[float]]


def _check_shape(nrows: int, ncols: int) -> None:
    if any(isinstance(n, bool) or not isinstance(n, (int, np.integer)) for n in (nrows, ncols)):
        raise InvalidDimension(
            f"nrows and ncols must be integers, got ({nrows!r}, {ncols!r})"
        )
    if nrows < 1 or ncols < 1:
        raise InvalidDimension(
            f"nrows and ncols must be positive, got ({nrows}, {ncols})"
        )
    if ncols > nrows:
        raise InvalidDimension(
            f"ncols ({ncols}) must be <= nrows ({nrows})"
        )


def nnz_loading(nrows: int, ncols: int) -> int:
    """
    Number of free entries of an ``nrows x ncols`` loading matrix.

    This is the size of the lower triangle including the diagonal,
    ``((2*nrows + 1)*ncols - ncols**2) / 2``.

    Parameters
    ----------
    nrows : int
        Data dimension (rows of the loading matrix).
    ncols : int
        Number of factors (columns of the loading matrix).

    Returns
    -------
    int
        Required length of the parameter vector.

    Raises
    ------
    InvalidDimension
        If ``ncols > nrows`` or either dimension is not positive.

    Examples
    --------
    >>> nnz_loading(5, 3)
    12
    """
    _check_shape(nrows, ncols)
    return int(((2 * nrows + 1) * ncols - ncols ** 2) // 2)


def loading_mask(nrows: int, ncols: int) -> np.ndarray:
    """Boolean ``(nrows, ncols)`` array, True on the free (i >= j) cells."""
    _check_shape(nrows, ncols)
    return np.tri(nrows, ncols, dtype=bool)


def loading_matrix(values: ArrayLike, nrows: int, ncols: int) -> np.ndarray:
    """
    Build a loading matrix from its free parameters.

    Parameters
    ----------
    values : array-like, shape (nnz_loading(nrows, ncols),)
        Entries of the lower triangle, filled down the columns from left to
        right.
    nrows : int
        Data dimension, i.e. the number of rows.
    ncols : int
        Number of factors, i.e. the number of columns.

    Returns
    -------
    np.ndarray
        Matrix of shape (nrows, ncols) with zeros above the diagonal.
        Floating inputs keep their dtype; anything else becomes float64.

    Raises
    ------
    InvalidDimension
        If ``ncols > nrows`` or either dimension is not positive.
    InvalidArgument
        If ``values`` is not 1-D or has the wrong length.
    """
    mask = loading_mask(nrows, ncols)

    values = np.asarray(values)
    if values.ndim != 1:
        raise InvalidArgument(f"values must be 1D, got shape {values.shape}")

    expected = nnz_loading(nrows, ncols)
    if values.shape[0] != expected:
        raise InvalidArgument(
            f"Wrong number of values for a {nrows}x{ncols} loading matrix: "
            f"expected {expected}, got {values.shape[0]}"
        )

    dtype = values.dtype if np.issubdtype(values.dtype, np.floating) else np.float64
    L = np.zeros((nrows, ncols), dtype=dtype)
    # Boolean indexing on the transpose walks columns of L in order
    L.T[mask.T] = values
    return L


def loading_values(matrix: np.ndarray) -> np.ndarray:
    """
    Read the free parameters back out of a loading matrix.

    Inverse of :func:`loading_matrix`. Entries above the diagonal are
    ignored.

    Parameters
    ----------
    matrix : np.ndarray, shape (nrows, ncols)

    Returns
    -------
    np.ndarray
        1-D array of length ``nnz_loading(nrows, ncols)``.
    """
    matrix = np.asarray(matrix)
    if matrix.ndim != 2:
        raise InvalidArgument(f"matrix must be 2D, got shape {matrix.shape}")
    nrows, ncols = matrix.shape
    mask = loading_mask(nrows, ncols)
    return matrix.T[mask.T]


def loading_matrix_gradient(
    cotangent: np.ndarray,
    nrows: int,
    ncols: int,
) -> np.ndarray:
    """
    Gradient of a scalar function with respect to the parameter vector.

    Given ``df/dL`` for ``L = loading_matrix(values, nrows, ncols)``, returns
    ``df/dvalues``. Each parameter lands in exactly one cell, so the
    Jacobian is a selection and the result is just the free cells of the
    cotangent in fill order.

    Parameters
    ----------
    cotangent : np.ndarray, shape (nrows, ncols)
        Gradient of the downstream function with respect to the matrix.
    nrows, ncols : int
        Shape of the loading matrix.

    Returns
    -------
    np.ndarray
        Gradient of length ``nnz_loading(nrows, ncols)``.

    Examples
    --------
    >>> v = np.arange(1.0, 13.0)
    >>> L = loading_matrix(v, 5, 3)
    >>> bool(np.allclose(loading_matrix_gradient(2 * L, 5, 3), 2 * v))
    True
    """
    _check_shape(nrows, ncols)
    cotangent = np.asarray(cotangent)
    if cotangent.shape != (nrows, ncols):
        raise InvalidArgument(
            f"cotangent shape mismatch: expected ({nrows}, {ncols}), "
            f"got {cotangent.shape}"
        )
    grad = loading_values(cotangent)
    logger.debug(f"Loading matrix gradient | shape=({nrows}, {ncols}), nnz={grad.size}")
    return grad
