import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def independent_data(rng):
    """10x5 standard normal X with an unrelated response."""
    X = rng.standard_normal((10, 5))
    y = rng.standard_normal(10)
    return X, y


@pytest.fixture
def pc_aligned_data(rng):
    """X with a dominant direction and Y equal to its first principal score."""
    a = rng.standard_normal(20)
    v = rng.standard_normal(6)
    v /= np.linalg.norm(v)
    X = 5.0 * np.outer(a, v) + 0.5 * rng.standard_normal((20, 6))
    _, _, Vt = np.linalg.svd(X, full_matrices=False)
    v1 = Vt[0]
    return X, X @ v1, v1
