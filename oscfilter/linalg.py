"""Linear algebra helpers shared by the OSC variants.

Everything here is a thin, deterministic layer over :mod:`numpy.linalg`:

* :func:`pinv` – Moore–Penrose inverse, used wherever a Gram matrix such as
  ``Y^T Y`` or ``Y^T X X^T Y`` has to be inverted;
* :func:`svd_flip` / :func:`leading_singular_triplet` / :func:`pca` – SVD
  based decompositions with a fixed sign convention;
* :func:`y_projector` / :func:`orthogonalize` – removal of the part of a
  score vector that lies in the column space of ``Y``;
* :func:`loading` / :func:`deflate` – rank-1 regression and deflation;
* :func:`pls1_coefficients` – NIPALS PLS1 regression of a single target.

Example
-------

```python
import numpy as np
from oscfilter.linalg import y_projector, orthogonalize

P_Y = y_projector(Y)
t_perp = orthogonalize(t, P_Y)   # Y.T @ t_perp is ~0
```
"""

from __future__ import annotations

import numpy as np
from numpy.linalg import norm, svd

# Scores/weights whose norm falls below EPS times the data scale are treated
# as vanished.
EPS = 1e-12


def pinv(A: np.ndarray, rcond: float = 1e-15) -> np.ndarray:
    """Moore–Penrose pseudo-inverse of ``A``.

    Singular and non-square matrices are accepted; no error is raised for
    rank deficiency.
    """
    return np.linalg.pinv(np.atleast_2d(A), rcond=rcond)


def svd_flip(U: np.ndarray, Vt: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Fix the sign ambiguity of an SVD.

    Each pair ``(U[:, k], Vt[k, :])`` is flipped so that the entry of
    ``Vt[k, :]`` with the largest magnitude is positive.  ``U @ diag(s) @ Vt``
    is unchanged.

    Parameters
    ----------
    U : ndarray of shape (n, r)
        Left singular vectors.
    Vt : ndarray of shape (r, p)
        Right singular vectors (transposed).

    Returns
    -------
    U, Vt : ndarray
        Sign-corrected copies.
    """
    if Vt.shape[0] == 0:
        return U.copy(), Vt.copy()
    idx = np.argmax(np.abs(Vt), axis=1)
    signs = np.sign(Vt[np.arange(Vt.shape[0]), idx])
    signs[signs == 0] = 1.0
    return U * signs, Vt * signs[:, None]


def stable_svd(X: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Thin SVD of ``X`` with the :func:`svd_flip` sign convention."""
    U, s, Vt = svd(X, full_matrices=False)
    U, Vt = svd_flip(U, Vt)
    return U, s, Vt


def leading_singular_triplet(X: np.ndarray) -> tuple[np.ndarray, float, np.ndarray]:
    """Return ``(u1, sigma1, v1)``, the dominant singular triplet of ``X``."""
    U, s, Vt = stable_svd(X)
    return U[:, 0], float(s[0]), Vt[0, :]


def pca(X: np.ndarray,
        n_components: int,
        center: bool = False) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Principal component analysis computed through the SVD.

    Parameters
    ----------
    X : ndarray of shape (n, p)
        Data matrix, observations in rows.
    n_components : int
        Number of components to keep (capped at ``min(n, p)``).
    center : bool, optional
        Subtract column means before decomposing.  The OSC variants work on
        data the caller has already preprocessed, so the default is ``False``.

    Returns
    -------
    scores : ndarray of shape (n, k)
        ``X V`` for the leading ``k`` loadings.
    loadings : ndarray of shape (p, k)
        Unit-norm principal axes.
    explained : ndarray of shape (k,)
        Fraction of the total sum of squares carried by each component.
    """
    if center:
        X = X - X.mean(axis=0)
    U, s, Vt = stable_svd(X)
    k = min(n_components, len(s))
    total = np.sum(s ** 2)
    explained = s[:k] ** 2 / total if total > 0 else np.zeros(k)
    return U[:, :k] * s[:k], Vt[:k, :].T, explained


def y_projector(Y: np.ndarray) -> np.ndarray:
    """Orthogonal projector ``Y (Y^T Y)^+ Y^T`` onto the column space of ``Y``."""
    return Y @ pinv(Y.T @ Y) @ Y.T


def orthogonalize(t: np.ndarray, P_Y: np.ndarray) -> np.ndarray:
    """Remove the least-squares projection of ``t`` onto ``Y``."""
    return t - P_Y @ t


def loading(X: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Regression of the columns of ``X`` on the score ``t``: ``X^T t / t^T t``."""
    tt = t @ t
    if tt <= 0.0:
        return np.zeros(X.shape[1])
    return X.T @ t / tt


def deflate(X: np.ndarray, t: np.ndarray, p: np.ndarray) -> np.ndarray:
    """Subtract the rank-1 component ``t p^T`` from ``X`` (returns a new array)."""
    return X - np.outer(t, p)


def is_negligible(v: np.ndarray, scale: float) -> bool:
    """True if ``v`` is zero relative to a reference magnitude ``scale``."""
    return norm(v) <= EPS * max(1.0, scale)


def pls1_coefficients(X: np.ndarray,
                      y: np.ndarray,
                      n_lv: int | None = None) -> np.ndarray:
    """Regression coefficients of a single-target NIPALS PLS.

    Parameters
    ----------
    X : ndarray of shape (n, p)
        Predictor matrix.
    y : ndarray of shape (n,)
        Target vector.
    n_lv : int, optional
        Maximum number of latent variables.  Defaults to ``min(n, p)``.
        Extraction stops early once the residual target or the residual
        predictor matrix is exhausted.

    Returns
    -------
    b : ndarray of shape (p,)
        Coefficients with ``X @ b ≈ y``, computed as ``W (P^T W)^+ q``.
    """
    n, p = X.shape
    if n_lv is None:
        n_lv = min(n, p)
    E = X.copy()
    f = y.astype(float).copy()
    scale = norm(X)

    W, P, q = [], [], []
    for _ in range(n_lv):
        w = E.T @ f
        if is_negligible(w, scale * max(1.0, norm(y))):
            break
        w = w / norm(w)
        s = E @ w
        ss = s @ s
        if ss <= EPS * max(1.0, scale ** 2):
            break
        p_a = E.T @ s / ss
        q_a = (f @ s) / ss
        E = E - np.outer(s, p_a)
        f = f - q_a * s
        W.append(w)
        P.append(p_a)
        q.append(q_a)

    if not W:
        return np.zeros(p)
    W_mat = np.column_stack(W)
    P_mat = np.column_stack(P)
    return W_mat @ pinv(P_mat.T @ W_mat) @ np.asarray(q)
