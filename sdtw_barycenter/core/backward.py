"""Soft-DTW backward pass fused with the centroid gradient reduction.

The responsibility ``E(i, j)`` is the derivative of the soft distance with
respect to ``D(i-1, j-1)``: the Gibbs-weighted expected number of times
centroid point ``i`` is aligned with series point ``j``.  Rows are produced
from ``i = m`` down to ``1``; each row is reduced into the gradient as soon as
it is complete, so only two rows are ever live.
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit

from sdtw_barycenter.core.gradient import accumulate_row
from sdtw_barycenter.core.workspace import Workspace


@njit(cache=False)
def _responsibility_row(
    i: int,
    n: int,
    gamma: float,
    cost: np.ndarray,
    dist: np.ndarray,
    current: np.ndarray,
    following: np.ndarray,
) -> None:
    for j in range(n, 0, -1):
        a = math.exp((cost[i + 1, j] - cost[i, j] - dist[i, j - 1]) / gamma)
        b = math.exp((cost[i, j + 1] - cost[i, j] - dist[i - 1, j]) / gamma)
        c = math.exp((cost[i + 1, j + 1] - cost[i, j] - dist[i, j]) / gamma)
        current[j] = a * following[j] + b * current[j + 1] + c * following[j + 1]


def solve_row(i: int, n: int, gamma: float, workspace: Workspace) -> np.ndarray:
    """Compute responsibility row ``i`` in place and return it."""
    rows = workspace.rows
    current = rows.current(i)
    _responsibility_row(i, n, float(gamma), workspace.cost, workspace.distance, current, rows.following(i))
    return current


def accumulate_series(
    gradient: np.ndarray,
    weight: float,
    gamma: float,
    workspace: Workspace,
    x: np.ndarray,
    y: np.ndarray,
) -> None:
    """Backward pass for one series, adding its weighted gradient into ``gradient``.

    ``workspace`` must hold the forward tables for ``(x, y)``; its boundary
    cells are re-seeded here.
    """
    m, n = x.shape[0], y.shape[0]
    workspace.reset_for_series(m, n)
    for i in range(m, 0, -1):
        row = solve_row(i, n, gamma, workspace)
        accumulate_row(gradient, i, weight, row, x, y)
        if i == m:
            # the seed is a boundary for row m only
            workspace.rows.clear_seed(m, n)
