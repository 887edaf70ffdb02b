"""Sjöblom's orthogonal signal correction.

Same inner loop as :mod:`oscfilter.wold`, with two differences:

* the seed score of each component is the first principal component score of
  the current ``X`` (PCA via SVD);
* once the score has converged, the weight is refit by a PLS1 regression of
  the orthogonal score on ``X``, so that the score is reproduced by the
  predictors themselves.  The reported weight is ``w = b / ||b||``; the
  reported and deflated score is ``X w`` with its projection onto ``Y``
  removed, so every removed component stays orthogonal to the response.

Reference: J. Sjöblom, O. Svensson, M. Josefson, H. Kullberg, S. Wold, "An
evaluation of orthogonal signal correction applied to calibration transfer
of near infrared spectra", Chemometrics and Intelligent Laboratory Systems
44 (1998) 229–244.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.linalg import norm

from .linalg import (deflate, is_negligible, loading, orthogonalize, pca, pls1_coefficients,
                     y_projector)
from .result import OSCResult, build_result, report_convergence
from .validation import check_inputs, check_int
from .wold import refine_score

logger = logging.getLogger(__name__)


def sjoblom_osc(X,
                Y,
                n_components: int = 1,
                tol: float = 1e-6,
                max_iter: int = 100,
                pls_components: int | None = None) -> OSCResult:
    """Orthogonal signal correction, Sjöblom variant.

    Parameters
    ----------
    X : array_like of shape (n, p)
        Predictor matrix.
    Y : array_like of shape (n, m) or (n,)
        Response(s).
    n_components : int, optional
        Number of orthogonal components to remove.
    tol : float, optional
        Convergence threshold on the relative change of the score.
    max_iter : int, optional
        Iteration budget per component.
    pls_components : int, optional
        Latent variables used by the PLS refit of the weight.  ``None`` uses
        as many as the data support (``min(n, p)``).

    Returns
    -------
    result : OSCResult
    """
    X_original, Y, n_components, tol, max_iter = check_inputs(X, Y, n_components, tol, max_iter)
    if pls_components is not None:
        pls_components = check_int(pls_components, "pls_components", 1)
    X = X_original.copy()
    P_Y = y_projector(Y)

    scores, loadings, weights, states = [], [], [], []
    for i in range(1, n_components + 1):
        pc_scores, pc_loadings, _ = pca(X, 1)
        state = refine_score(X, P_Y, pc_scores[:, 0], pc_loadings[:, 0], tol, max_iter)
        report_convergence('sjoblom', i, state, max_iter)

        if not is_negligible(state.t, norm(X)):
            b = pls1_coefficients(X, state.t, pls_components)
            b_norm = norm(b)
            if b_norm > 0.0:
                state.w = b / b_norm
                state.t = orthogonalize(X @ state.w, P_Y)
                if is_negligible(state.t, norm(X)):
                    state.t = np.zeros_like(state.t)
        logger.debug("sjoblom component %d: refit score norm %.3e", i, norm(state.t))

        p = loading(X, state.t)
        X = deflate(X, state.t, p)
        scores.append(state.t)
        loadings.append(p)
        weights.append(state.w)
        states.append(state)

    result = build_result('sjoblom', X_original, Y, scores, loadings, weights, states, tol, max_iter)
    logger.info("sjoblom OSC: %d component(s), R2=%.2f%%, angle=%.2f deg",
                n_components, result.R2, result.angle)
    return result
