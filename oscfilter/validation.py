"""Input checks shared by every OSC variant."""

from __future__ import annotations

import numbers

import numpy as np

from .exceptions import OSCInputError


def _as_float_array(A, name: str) -> np.ndarray:
    try:
        arr = np.array(A, dtype=float)
    except (TypeError, ValueError) as exc:
        raise OSCInputError(f"{name} must be numeric: {exc}") from exc
    if not np.all(np.isfinite(arr)):
        raise OSCInputError(f"{name} contains missing or non-finite values")
    return arr


def check_int(value, name: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise OSCInputError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise OSCInputError(f"{name} must be >= {minimum}, got {value}")
    return int(value)


def check_inputs(X,
                 Y,
                 n_components,
                 tol,
                 max_iter) -> tuple[np.ndarray, np.ndarray, int, float, int]:
    """Validate and coerce the arguments of an OSC call.

    Parameters
    ----------
    X : array_like of shape (n, p)
        Predictor matrix, ``n >= 2`` and ``p >= 1``.
    Y : array_like of shape (n, m) or (n,)
        Response matrix or vector; a vector becomes a single column.
    n_components : int
        Number of orthogonal components, ``0 <= n_components <= min(n, p)``.
    tol : float
        Positive convergence threshold.
    max_iter : int
        Positive iteration budget per component.

    Returns
    -------
    X, Y, n_components, tol, max_iter
        ``X`` and ``Y`` as fresh 2-D float arrays (never views of the caller's
        data) and the scalars in canonical types.

    Raises
    ------
    OSCInputError
        On any violation.
    """
    X = _as_float_array(X, "X")
    Y = _as_float_array(Y, "Y")
    if X.ndim != 2:
        raise OSCInputError(f"X must be a 2-D matrix, got {X.ndim} dimension(s)")
    if Y.ndim == 1:
        Y = Y[:, None]
    if Y.ndim != 2:
        raise OSCInputError(f"Y must be a vector or 2-D matrix, got {Y.ndim} dimensions")

    n, p = X.shape
    if n < 2 or p < 1:
        raise OSCInputError(f"X must have at least 2 rows and 1 column, got shape {X.shape}")
    if Y.shape[0] != n:
        raise OSCInputError(
            f"X and Y must have the same number of rows ({n} != {Y.shape[0]})"
        )
    if Y.shape[1] < 1:
        raise OSCInputError("Y must have at least one column")

    n_components = check_int(n_components, "n_components", 0)
    if n_components > min(n, p):
        raise OSCInputError(
            f"n_components={n_components} exceeds min(n, p)={min(n, p)}"
        )
    if isinstance(tol, bool) or not isinstance(tol, numbers.Real) or not tol > 0:
        raise OSCInputError(f"tol must be a positive number, got {tol!r}")
    max_iter = check_int(max_iter, "max_iter", 1)
    return X, Y, n_components, float(tol), max_iter
