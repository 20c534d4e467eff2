"""Shared fixtures and reference implementations for the sdtw_barycenter test suite."""
from __future__ import annotations

import math

import numpy as np
import pytest

from sdtw_barycenter.config import Settings


def make_test_settings(**overrides) -> Settings:
    """Settings with library defaults, independent of the process environment."""
    return Settings(**overrides)


def random_series(rng: np.random.Generator, length: int, dim: int | None = None) -> np.ndarray:
    """Univariate (dim=None) or (length, dim) standard-normal series."""
    if dim is None:
        return rng.standard_normal(length)
    return rng.standard_normal((length, dim))


def reference_soft_dtw(x: np.ndarray, y: np.ndarray, gamma: float) -> tuple[float, np.ndarray]:
    """Full-table soft-DTW (Cuturi & Blondel 2017, Algorithms 1 and 2).

    Returns the distance and the (m, n) expected-alignment matrix.  ``x`` and
    ``y`` are (length, dim) arrays.
    """
    m, n = x.shape[0], y.shape[0]
    D = ((x[:, None, :] - y[None, :, :]) ** 2).sum(axis=-1)

    R = np.full((m + 2, n + 2), np.inf)
    R[0, 0] = 0.0
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            prev = np.array([R[i - 1, j - 1], R[i - 1, j], R[i, j - 1]])
            lo = prev.min()
            R[i, j] = D[i - 1, j - 1] - gamma * math.log(np.exp(-(prev - lo) / gamma).sum()) + lo

    Dp = np.zeros((m + 2, n + 2))
    Dp[1:m + 1, 1:n + 1] = D
    E = np.zeros((m + 2, n + 2))
    E[m + 1, n + 1] = 1.0
    R[:, n + 1] = -np.inf
    R[m + 1, :] = -np.inf
    R[m + 1, n + 1] = R[m, n]
    for j in range(n, 0, -1):
        for i in range(m, 0, -1):
            a = math.exp((R[i + 1, j] - R[i, j] - Dp[i + 1, j]) / gamma)
            b = math.exp((R[i, j + 1] - R[i, j] - Dp[i, j + 1]) / gamma)
            c = math.exp((R[i + 1, j + 1] - R[i, j] - Dp[i + 1, j + 1]) / gamma)
            E[i, j] = a * E[i + 1, j] + b * E[i, j + 1] + c * E[i + 1, j + 1]
    return float(R[m, n]), E[1:m + 1, 1:n + 1]


def numerical_gradient(fn, centroid: np.ndarray, eps: float = 1e-6) -> np.ndarray:
    """Central finite differences of a scalar function of the centroid."""
    grad = np.zeros_like(centroid, dtype=np.float64)
    flat = grad.reshape(-1)
    base = np.array(centroid, dtype=np.float64)
    for k in range(base.size):
        plus = base.copy().reshape(-1)
        minus = base.copy().reshape(-1)
        plus[k] += eps
        minus[k] -= eps
        flat[k] = (fn(plus.reshape(base.shape)) - fn(minus.reshape(base.shape))) / (2 * eps)
    return grad


@pytest.fixture
def settings() -> Settings:
    return make_test_settings()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
