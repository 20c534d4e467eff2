"""Reduction of one responsibility row into the centroid gradient."""

from __future__ import annotations

import numpy as np


def accumulate_row(
    gradient: np.ndarray,
    i: int,
    weight: float,
    row: np.ndarray,
    x: np.ndarray,
    y: np.ndarray,
) -> None:
    """Add ``weight * sum_j E(i, j) * 2 * (x_i - y_j)`` to ``gradient[i-1]``.

    Args:
        gradient: (m, dim) accumulator, mutated in place.
        i:        1-based centroid row.
        weight:   Per-series weight.
        row:      Responsibility row ``E(i, .)``; interior cells are ``1..n``.
        x:        Centroid, shape (m, dim).
        y:        Series, shape (n, dim).
    """
    n = y.shape[0]
    resp = row[1:n + 1]
    # sum_j E_ij * (x_i - y_j) == x_i * sum_j E_ij - E_i . y
    gradient[i - 1] += weight * 2.0 * (resp.sum() * x[i - 1] - resp @ y)
