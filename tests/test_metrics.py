import numpy as np
import pytest

from oscfilter.metrics import (orth_error, orthogonality_angle, r2_retained, relative_change,
                               score_angles, weight_norm_error)


def test_r2_retained_is_percentage_of_sum_of_squares():
    X = np.arange(12.0).reshape(4, 3)
    assert r2_retained(X, 0.5 * X) == pytest.approx(25.0)
    assert r2_retained(X, X) == pytest.approx(100.0)


def test_r2_retained_of_zero_matrix():
    Z = np.zeros((3, 2))
    assert r2_retained(Z, Z) == 100.0


def test_score_angles():
    y = np.array([1.0, 0.0, 0.0])
    T = np.column_stack([[0.0, 1.0, 0.0], [2.0, 0.0, 0.0], [0.0, 0.0, 0.0], [-1.0, 0.0, 0.0]])
    angles = score_angles(T, y)
    assert angles.shape == (4, 1)
    assert angles[:, 0] == pytest.approx([90.0, 0.0, 90.0, 180.0])


def test_orthogonality_angle_averages_components_and_responses():
    Y = np.column_stack([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    T = np.array([[0.0], [0.0], [1.0]])
    assert orthogonality_angle(T, Y) == pytest.approx(90.0)
    T = np.array([[1.0], [0.0], [0.0]])
    assert orthogonality_angle(T, Y) == pytest.approx(45.0)


def test_orthogonality_angle_without_components_is_nan():
    assert np.isnan(orthogonality_angle(np.zeros((4, 0)), np.ones(4)))


def test_relative_change():
    a = np.array([3.0, 4.0])
    assert relative_change(a, a) == 0.0
    assert relative_change(a, np.zeros(2)) == pytest.approx(1.0)
    assert relative_change(np.zeros(2), np.zeros(2)) == 0.0
    assert relative_change(np.zeros(2), a) == float('inf')


def test_weight_diagnostics():
    W = np.column_stack([[1.0, 0.0], [0.6, 0.8]])
    assert weight_norm_error(W) == pytest.approx(0.0)
    assert weight_norm_error(np.zeros((2, 0))) == 0.0
    assert orth_error(np.eye(3)) == pytest.approx(0.0)
    assert orth_error(W) > 0.0
