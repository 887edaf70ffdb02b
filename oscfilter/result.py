"""Result containers returned by the OSC variants."""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field

import numpy as np

from .exceptions import ConvergenceWarning, OSCInputError
from .linalg import deflate
from .metrics import orth_error, orthogonality_angle, r2_retained

logger = logging.getLogger(__name__)


@dataclass
class IterationState:
    """Mutable state of one component's refinement loop."""

    t: np.ndarray
    w: np.ndarray
    iteration: int = 0
    relative_change: float = float('inf')
    converged: bool = False


@dataclass
class OSCResult:
    """Output bundle of an OSC run.

    Attributes
    ----------
    correction : ndarray of shape (n, p)
        Filtered matrix ``X - T P^T``.
    weights : ndarray of shape (p, k)
        Unit-norm weight vectors, one column per component.
    scores : ndarray of shape (n, k)
        Score vectors.
    loadings : ndarray of shape (p, k)
        Loading vectors.
    angle : float
        Mean angle in degrees between the scores and ``Y`` (NaN if ``k == 0``).
    R2 : float
        Percentage of the original sum of squares retained.
    method : str
        Name of the variant that produced the result.
    converged, n_iter : list
        Per-component convergence flag and iterations used.
    """

    correction: np.ndarray
    weights: np.ndarray
    scores: np.ndarray
    loadings: np.ndarray
    angle: float
    R2: float
    method: str
    converged: list[bool] = field(default_factory=list)
    n_iter: list[int] = field(default_factory=list)
    tol: float = 1e-6
    max_iter: int = 100

    @property
    def n_components(self) -> int:
        return self.weights.shape[1]

    @property
    def all_converged(self) -> bool:
        return all(self.converged)

    def transform(self, X_new) -> np.ndarray:
        """Remove the fitted orthogonal components from new samples."""
        return apply_correction(X_new, self.weights, self.loadings)

    def summary(self) -> dict:
        """Scalar diagnostics as plain Python types (YAML friendly)."""
        return {
            'method': self.method,
            'n_components': self.n_components,
            'R2': float(self.R2),
            'angle': float(self.angle),
            'weight_orthogonality': orth_error(self.weights),
            'converged': [bool(c) for c in self.converged],
            'n_iter': [int(i) for i in self.n_iter],
            'tol': float(self.tol),
            'max_iter': int(self.max_iter),
        }


def apply_correction(X_new, weights: np.ndarray, loadings: np.ndarray) -> np.ndarray:
    """Deflate ``X_new`` component by component with ``t = X w``.

    Parameters
    ----------
    X_new : array_like of shape (n_new, p)
        Samples to correct, same variables as the training matrix.
    weights, loadings : ndarray of shape (p, k)
        Fitted weights and loadings.

    Returns
    -------
    X_corr : ndarray of shape (n_new, p)
        Corrected copy of ``X_new``.
    """
    try:
        X = np.array(X_new, dtype=float)
    except (TypeError, ValueError) as exc:
        raise OSCInputError(f"X_new must be numeric: {exc}") from exc
    if X.ndim == 1:
        X = X[None, :]
    if X.ndim != 2 or X.shape[1] != weights.shape[0]:
        raise OSCInputError(
            f"X_new must have {weights.shape[0]} columns, got shape {X.shape}"
        )
    for i in range(weights.shape[1]):
        t = X @ weights[:, i]
        X = deflate(X, t, loadings[:, i])
    return X


def report_convergence(method: str, component: int, state: IterationState, max_iter: int) -> None:
    """Log a finished component and warn if its loop ran out of iterations."""
    logger.debug("%s component %d: %d iteration(s), relative change %.3e",
                 method, component, state.iteration, state.relative_change)
    if state.converged:
        return
    msg = (f"{method} OSC component {component} did not converge within "
           f"{max_iter} iteration(s) (last relative change "
           f"{state.relative_change:.3e}); using the last estimate")
    logger.warning(msg)
    warnings.warn(msg, ConvergenceWarning, stacklevel=3)


def build_result(method: str,
                 X_original: np.ndarray,
                 Y: np.ndarray,
                 scores: list[np.ndarray],
                 loadings: list[np.ndarray],
                 weights: list[np.ndarray],
                 states: list[IterationState],
                 tol: float,
                 max_iter: int) -> OSCResult:
    """Stack per-component vectors and compute ``X_filtered``, ``R2`` and ``angle``."""
    n, p = X_original.shape
    T = np.column_stack(scores) if scores else np.zeros((n, 0))
    P = np.column_stack(loadings) if loadings else np.zeros((p, 0))
    W = np.column_stack(weights) if weights else np.zeros((p, 0))
    X_filtered = X_original - T @ P.T
    return OSCResult(
        correction=X_filtered,
        weights=W,
        scores=T,
        loadings=P,
        angle=orthogonality_angle(T, Y),
        R2=r2_retained(X_original, X_filtered),
        method=method,
        converged=[s.converged for s in states],
        n_iter=[s.iteration for s in states],
        tol=tol,
        max_iter=max_iter,
    )
