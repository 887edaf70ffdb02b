"""Diagnostics for evaluating an orthogonal signal correction."""

from __future__ import annotations

import numpy as np
from numpy.linalg import norm


def r2_retained(X_original: np.ndarray, X_filtered: np.ndarray) -> float:
    """Percentage of the original sum of squares left after filtering.

    Parameters
    ----------
    X_original : ndarray of shape (n, p)
        Matrix before correction.
    X_filtered : ndarray of shape (n, p)
        Matrix after the orthogonal components were removed.

    Returns
    -------
    r2 : float
        ``100 * ||X_filtered||_F^2 / ||X_original||_F^2``.  Lower values mean
        more variation was removed.  An all-zero ``X_original`` gives 100.
    """
    ss0 = norm(X_original, 'fro') ** 2
    if ss0 == 0.0:
        return 100.0
    return float(100.0 * norm(X_filtered, 'fro') ** 2 / ss0)


def score_angles(T: np.ndarray, Y: np.ndarray) -> np.ndarray:
    """Angle in degrees between every score column and every response column.

    A zero-length score or response is orthogonal to everything and is
    reported as 90 degrees.

    Returns
    -------
    angles : ndarray of shape (k, m)
        ``degrees(arccos(t_i^T y_j / (||t_i|| ||y_j||)))``.
    """
    if Y.ndim == 1:
        Y = Y[:, None]
    t_norm = norm(T, axis=0)
    y_norm = norm(Y, axis=0)
    denom = np.outer(t_norm, y_norm)
    cos = np.zeros_like(denom)
    np.divide(T.T @ Y, denom, out=cos, where=denom > 0)
    return np.degrees(np.arccos(np.clip(cos, -1.0, 1.0)))


def orthogonality_angle(T: np.ndarray, Y: np.ndarray) -> float:
    """Mean angle (degrees) between the scores and ``Y``; NaN with no scores.

    Values near 90 mean the removed components are uncorrelated with the
    response.
    """
    if T.shape[1] == 0:
        return float('nan')
    return float(np.mean(score_angles(T, Y)))


def relative_change(new: np.ndarray, old: np.ndarray) -> float:
    """Convergence measure ``||new - old|| / ||new||``.

    Two vanished iterates are considered converged (0.0); a vanished ``new``
    next to a non-zero ``old`` is infinitely far.
    """
    diff = norm(new - old)
    scale = norm(new)
    if scale == 0.0:
        return 0.0 if diff == 0.0 else float('inf')
    return float(diff / scale)


def weight_norm_error(W: np.ndarray) -> float:
    """Largest deviation of a weight column's Euclidean norm from one."""
    if W.shape[1] == 0:
        return 0.0
    return float(np.max(np.abs(norm(W, axis=0) - 1.0)))


def orth_error(W: np.ndarray) -> float:
    """Compute the mutual orthogonality error ``||I - W^T W||_F``.

    OSC weights are not required to be mutually orthogonal; this is reported
    as a diagnostic only.
    """
    k = W.shape[1]
    return float(norm(np.eye(k) - W.T @ W, 'fro'))
