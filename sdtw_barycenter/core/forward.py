"""Soft-DTW forward pass.

Reference:
    Cuturi, M. & Blondel, M. (2017). Soft-DTW: a Differentiable Loss Function
    for Time-Series. Proceedings of ICML 2017.

Fills the cumulative cost table ``R`` and the local distance table ``D`` of a
:class:`~sdtw_barycenter.core.workspace.Workspace` for one (centroid, series)
pair and returns the soft distance ``R(m, n)``.  The centroid is always the
first sequence (rows) and the series the second (columns).
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit

from sdtw_barycenter.constants import FORWARD_PAD, ORIGIN_COST
from sdtw_barycenter.core.points import distance_table
from sdtw_barycenter.core.workspace import Workspace


@njit(cache=False)
def _forward_kernel(cost: np.ndarray, dist: np.ndarray, m: int, n: int, gamma: float) -> float:
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            a = cost[i - 1, j - 1]
            b = cost[i - 1, j]
            c = cost[i, j - 1]
            # max-shift keeps the log-sum-exp finite for any gamma > 0
            mn = min(a, b, c)
            s = math.exp(-(a - mn) / gamma) + math.exp(-(b - mn) / gamma) + math.exp(-(c - mn) / gamma)
            cost[i, j] = dist[i - 1, j - 1] + (-gamma * math.log(s) + mn)
    return cost[m, n]


def soft_dtw(x: np.ndarray, y: np.ndarray, gamma: float, workspace: Workspace) -> float:
    """Soft-DTW between ``x`` (m, dim) and ``y`` (n, dim), written into ``workspace``.

    Inputs are assumed validated: float64 ``(length, dim)`` arrays that fit the
    workspace, and ``gamma > 0``.
    """
    m, n = x.shape[0], y.shape[0]
    cost = workspace.cost
    distance_table(x, y, workspace.distance)
    cost[0, 0] = ORIGIN_COST
    cost[0, 1:n + 1] = FORWARD_PAD
    cost[1:m + 1, 0] = FORWARD_PAD
    return float(_forward_kernel(cost, workspace.distance, m, n, float(gamma)))


def soft_dtw_distance(x: np.ndarray, y: np.ndarray, gamma: float) -> float:
    """Soft-DTW between two ``(length, dim)`` arrays using a private workspace."""
    x = np.ascontiguousarray(x, dtype=np.float64)
    y = np.ascontiguousarray(y, dtype=np.float64)
    workspace = Workspace.allocate(x.shape[0], y.shape[0])
    return soft_dtw(x, y, gamma, workspace)
