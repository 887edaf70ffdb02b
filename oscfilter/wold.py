"""Wold's orthogonal signal correction.

For each component a score seeded from the dominant singular direction of the
current (deflated) ``X`` is repeatedly projected out of ``Y``'s column space
and pushed back through ``X`` until it stops moving:

    t <- (I - P_Y) t
    w <- X^T t / (t^T t),   w <- w / ||w||
    t <- (I - P_Y) X w

The converged score is then regressed out of ``X`` (``X <- X - t p^T`` with
``p = X^T t / t^T t``) before the next component is extracted.

Reference: S. Wold, H. Antti, F. Lindgren, J. Öhman, "Orthogonal signal
correction of near-infrared spectra", Chemometrics and Intelligent
Laboratory Systems 44 (1998) 175–185.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.linalg import norm

from .linalg import (deflate, is_negligible, leading_singular_triplet, loading,
                     orthogonalize, y_projector)
from .metrics import relative_change
from .result import IterationState, OSCResult, build_result, report_convergence
from .validation import check_inputs

logger = logging.getLogger(__name__)


def refine_score(X: np.ndarray,
                 P_Y: np.ndarray,
                 t: np.ndarray,
                 w_seed: np.ndarray,
                 tol: float,
                 max_iter: int) -> IterationState:
    """Run the bounded score/weight refinement loop shared by Wold and Sjöblom.

    Parameters
    ----------
    X : ndarray of shape (n, p)
        Current (deflated) predictor matrix.
    P_Y : ndarray of shape (n, n)
        Projector onto the column space of ``Y``.
    t : ndarray of shape (n,)
        Seed score; it is orthogonalized against ``Y`` before first use.
    w_seed : ndarray of shape (p,)
        Unit weight reported if the score vanishes.
    tol : float
        Threshold on ``||t_new - t_old|| / ||t_new||``.
    max_iter : int
        Iteration budget.

    Returns
    -------
    state : IterationState
        Final score, unit weight, iterations used and convergence flag.
    """
    scale = norm(X)
    state = IterationState(t=orthogonalize(t, P_Y), w=w_seed.copy())
    if is_negligible(state.t, scale):
        # X has nothing left outside the span of Y
        state.t = np.zeros_like(state.t)
        state.relative_change = 0.0
        state.converged = True
        return state

    for iteration in range(1, max_iter + 1):
        w = X.T @ state.t / (state.t @ state.t)
        w_norm = norm(w)
        if w_norm == 0.0:
            state.t = np.zeros_like(state.t)
            state.iteration = iteration
            state.relative_change = 0.0
            state.converged = True
            break
        w = w / w_norm
        t_new = orthogonalize(X @ w, P_Y)
        change = relative_change(t_new, state.t)
        state.t, state.w = t_new, w
        state.iteration = iteration
        state.relative_change = change
        if change < tol:
            state.converged = True
            break
        if is_negligible(t_new, scale):
            state.t = np.zeros_like(t_new)
            state.relative_change = 0.0
            state.converged = True
            break
    return state


def wold_osc(X, Y, n_components: int = 1, tol: float = 1e-6, max_iter: int = 100) -> OSCResult:
    """Orthogonal signal correction, Wold variant.

    Parameters
    ----------
    X : array_like of shape (n, p)
        Predictor matrix (already preprocessed, e.g. mean centred).
    Y : array_like of shape (n, m) or (n,)
        Response(s).
    n_components : int, optional
        Number of orthogonal components to remove.
    tol : float, optional
        Convergence threshold on the relative change of the score.
    max_iter : int, optional
        Iteration budget per component.  Running out emits a
        :class:`~oscfilter.exceptions.ConvergenceWarning`.

    Returns
    -------
    result : OSCResult
    """
    X_original, Y, n_components, tol, max_iter = check_inputs(X, Y, n_components, tol, max_iter)
    X = X_original.copy()
    P_Y = y_projector(Y)

    scores, loadings, weights, states = [], [], [], []
    for i in range(1, n_components + 1):
        u, sigma, v = leading_singular_triplet(X)
        state = refine_score(X, P_Y, u * sigma, v, tol, max_iter)
        report_convergence('wold', i, state, max_iter)

        p = loading(X, state.t)
        X = deflate(X, state.t, p)
        scores.append(state.t)
        loadings.append(p)
        weights.append(state.w)
        states.append(state)

    result = build_result('wold', X_original, Y, scores, loadings, weights, states, tol, max_iter)
    logger.info("wold OSC: %d component(s), R2=%.2f%%, angle=%.2f deg",
                n_components, result.R2, result.angle)
    return result
