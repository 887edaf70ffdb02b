import numpy as np
from numpy.testing import assert_allclose

from oscfilter.linalg import (deflate, leading_singular_triplet, loading, orthogonalize, pca,
                              pinv, pls1_coefficients, stable_svd, svd_flip, y_projector)


def test_pinv_of_singular_matrix_does_not_raise():
    A = np.array([[1.0, 1.0], [1.0, 1.0]])
    A_plus = pinv(A)
    assert_allclose(A @ A_plus @ A, A, atol=1e-12)
    assert_allclose(A_plus, np.full((2, 2), 0.25), atol=1e-12)


def test_svd_flip_keeps_product_and_fixes_sign(rng):
    X = rng.standard_normal((8, 4))
    U, s, Vt = np.linalg.svd(X, full_matrices=False)
    U2, Vt2 = svd_flip(-U, -Vt)
    assert_allclose((U2 * s) @ Vt2, X, atol=1e-12)
    idx = np.argmax(np.abs(Vt2), axis=1)
    assert np.all(Vt2[np.arange(4), idx] > 0)


def test_stable_svd_is_sign_independent_of_input_sign(rng):
    X = rng.standard_normal((6, 3))
    _, _, Vt_pos = stable_svd(X)
    _, _, Vt_neg = stable_svd(-X)
    assert_allclose(Vt_pos, Vt_neg, atol=1e-12)


def test_leading_singular_triplet(rng):
    X = rng.standard_normal((7, 3))
    u, sigma, v = leading_singular_triplet(X)
    assert_allclose(X @ v, sigma * u, atol=1e-10)
    assert np.isclose(sigma, np.linalg.norm(X, 2))


def test_pca_scores_and_explained_variance(rng):
    X = rng.standard_normal((12, 4)) + 3.0
    scores, loadings, explained = pca(X, 2, center=True)
    Xc = X - X.mean(axis=0)
    assert scores.shape == (12, 2)
    assert loadings.shape == (4, 2)
    assert_allclose(scores, Xc @ loadings, atol=1e-10)
    assert_allclose(np.linalg.norm(loadings, axis=0), 1.0)
    assert np.all(np.diff(explained) <= 0)
    assert explained.sum() <= 1.0 + 1e-12


def test_pca_caps_components():
    X = np.eye(3)[:, :2]
    scores, loadings, explained = pca(X, 5)
    assert scores.shape[1] == 2


def test_projector_handles_rank_deficient_y(rng):
    y = rng.standard_normal(9)
    Y = np.column_stack([y, y, 2 * y])
    P = y_projector(Y)
    assert_allclose(P @ P, P, atol=1e-10)
    t = rng.standard_normal(9)
    assert_allclose(Y.T @ orthogonalize(t, P), 0.0, atol=1e-10)


def test_loading_and_deflate_remove_score_direction(rng):
    X = rng.standard_normal((10, 4))
    t = rng.standard_normal(10)
    p = loading(X, t)
    E = deflate(X, t, p)
    assert_allclose(E.T @ t, 0.0, atol=1e-10)
    assert np.linalg.norm(E) <= np.linalg.norm(X)
    assert_allclose(loading(X, np.zeros(10)), np.zeros(4))


def test_pls1_full_rank_matches_least_squares(rng):
    X = rng.standard_normal((20, 4))
    beta = np.array([1.0, -2.0, 0.5, 3.0])
    b = pls1_coefficients(X, X @ beta)
    assert_allclose(b, beta, atol=1e-8)


def test_pls1_zero_target_gives_zero_coefficients(rng):
    X = rng.standard_normal((6, 3))
    assert_allclose(pls1_coefficients(X, np.zeros(6)), np.zeros(3))


def test_pls1_respects_latent_variable_limit(rng):
    X = rng.standard_normal((15, 5))
    y = rng.standard_normal(15)
    b1 = pls1_coefficients(X, y, n_lv=1)
    w = X.T @ y
    # a single latent variable keeps the coefficients along X^T y
    assert_allclose(b1 / np.linalg.norm(b1), w / np.linalg.norm(w) * np.sign(b1 @ w), atol=1e-10)
