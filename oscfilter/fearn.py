"""Fearn's orthogonal signal correction.

Rather than iterating from an arbitrary seed, Fearn's variant builds the
residual operator

    M = I - X^T Y (Y^T X X^T Y)^+ Y^T X

once from the original ``X``.  Any weight ``w`` in the range of ``M`` gives a
score ``X w`` that is exactly orthogonal to ``Y``, so the leading right
singular vectors of ``Z = X M`` are the best candidate weights and
``X v_i = u_i sigma_i`` the corresponding scores.

Each candidate is refined on the deflated ``X`` by a power step through the
same operator, ``w <- M X^T X w / ||M X^T X w||``, until the relative change of
``w`` between two successive refined iterates drops below ``tol``; the SVD
seed itself does not count as an iterate.  With exact arithmetic the singular
vectors are already fixed points, so the loop normally stops after two steps.

``Y^T X`` is frequently rank deficient (more responses than informative
directions, collinear responses), so every inversion goes through the
pseudo-inverse.

Reference: T. Fearn, "On orthogonal signal correction", Chemometrics and
Intelligent Laboratory Systems 50 (2000) 47–52.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.linalg import norm

from .linalg import deflate, is_negligible, loading, pinv, stable_svd
from .metrics import relative_change
from .result import IterationState, OSCResult, build_result, report_convergence
from .validation import check_inputs

logger = logging.getLogger(__name__)


def residual_operator(X: np.ndarray, Y: np.ndarray) -> np.ndarray:
    """Return ``M = I - X^T Y (Y^T X X^T Y)^+ Y^T X`` of shape (p, p)."""
    XtY = X.T @ Y
    return np.eye(X.shape[1]) - XtY @ pinv(XtY.T @ XtY) @ XtY.T


def _refine_weight(X: np.ndarray,
                   M: np.ndarray,
                   state: IterationState,
                   tol: float,
                   max_iter: int) -> IterationState:
    scale = norm(X) ** 2
    for iteration in range(1, max_iter + 1):
        w_new = M @ (X.T @ (X @ state.w))
        if is_negligible(w_new, scale):
            state.iteration = iteration
            state.relative_change = 0.0
            state.converged = True
            state.t = np.zeros(X.shape[0])
            return state
        w_new = w_new / norm(w_new)
        change = relative_change(w_new, state.w)
        state.w = w_new
        state.iteration = iteration
        state.relative_change = change
        # the SVD seed is not a refined iterate, so the first step cannot confirm convergence
        if iteration > 1 and change < tol:
            state.converged = True
            break
    state.t = X @ state.w
    return state


def fearn_osc(X, Y, n_components: int = 1, tol: float = 1e-6, max_iter: int = 100) -> OSCResult:
    """Orthogonal signal correction, Fearn variant.

    Parameters
    ----------
    X : array_like of shape (n, p)
        Predictor matrix.
    Y : array_like of shape (n, m) or (n,)
        Response(s).
    n_components : int, optional
        Number of orthogonal components to remove.
    tol : float, optional
        Convergence threshold on the relative change of the weight vector.
    max_iter : int, optional
        Iteration budget per component.

    Returns
    -------
    result : OSCResult
    """
    X_original, Y, n_components, tol, max_iter = check_inputs(X, Y, n_components, tol, max_iter)
    X = X_original.copy()
    M = residual_operator(X, Y)
    U, s, Vt = stable_svd(X @ M)
    logger.debug("fearn: singular values of the Y-residualized matrix %s", s[:n_components])

    scores, loadings, weights, states = [], [], [], []
    for i in range(n_components):
        state = IterationState(t=U[:, i] * s[i], w=Vt[i, :].copy())
        if is_negligible(state.t, norm(X_original)):
            # n_components exceeds the rank of X M
            state.t = np.zeros(X.shape[0])
            state.relative_change = 0.0
            state.converged = True
        else:
            state = _refine_weight(X, M, state, tol, max_iter)
        report_convergence('fearn', i + 1, state, max_iter)

        p = loading(X, state.t)
        X = deflate(X, state.t, p)
        scores.append(state.t)
        loadings.append(p)
        weights.append(state.w)
        states.append(state)

    result = build_result('fearn', X_original, Y, scores, loadings, weights, states, tol, max_iter)
    logger.info("fearn OSC: %d component(s), R2=%.2f%%, angle=%.2f deg",
                n_components, result.R2, result.angle)
    return result
