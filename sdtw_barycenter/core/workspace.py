"""Scratch buffers shared by the forward and backward passes.

A :class:`Workspace` is allocated once per batch call (or once per refinement
run) and reused for every series.  Buffers may be larger than the current
series needs; :meth:`Workspace.reset_for_series` re-seeds the boundary cells
for the actual ``(m, n)`` so nothing depends on what a previous series left
behind.  See :mod:`sdtw_barycenter.constants` for the index layout.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from sdtw_barycenter.constants import (
    BACKWARD_PAD,
    COST_PADDING,
    DISTANCE_PADDING,
    RESPONSIBILITY_SEED,
    ROW_SLOTS,
)
from sdtw_barycenter.exceptions import ShapeMismatchError


class RowPair:
    """Two live rows of the responsibility table.

    Row ``i`` of the logical ``(m+2) x (n+2)`` table lives in one slot and row
    ``i+1`` in the other; computing row ``i`` only reads ``current(i)`` and
    ``following(i)``.  This class is the only place that maps a row index to
    a slot.
    """

    def __init__(self, buffer: np.ndarray) -> None:
        self.buffer = buffer

    def _slot(self, i: int) -> np.ndarray:
        return self.buffer[i % ROW_SLOTS]

    def current(self, i: int) -> np.ndarray:
        return self._slot(i)

    def following(self, i: int) -> np.ndarray:
        return self._slot(i + 1)

    def reset(self) -> None:
        self.buffer.fill(0.0)

    def seed(self, m: int, n: int) -> None:
        self.following(m)[n + 1] = RESPONSIBILITY_SEED

    def clear_seed(self, m: int, n: int) -> None:
        self.following(m)[n + 1] = 0.0

    def seed_value(self, m: int, n: int) -> float:
        return float(self.following(m)[n + 1])


@dataclass
class Workspace:
    """Cost, distance and responsibility buffers for one centroid length."""

    cost: np.ndarray
    distance: np.ndarray
    responsibility: np.ndarray

    @property
    def rows(self) -> RowPair:
        return RowPair(self.responsibility)

    @classmethod
    def allocate(cls, centroid_length: int, max_series_length: int) -> Workspace:
        if centroid_length < 1 or max_series_length < 1:
            raise ShapeMismatchError(
                "workspace dimensions must be >= 1",
                context={"centroid_length": centroid_length, "max_series_length": max_series_length},
            )
        m, n = centroid_length, max_series_length
        return cls(
            cost=np.zeros((m + COST_PADDING, n + COST_PADDING), dtype=np.float64),
            distance=np.zeros((m + DISTANCE_PADDING, n + DISTANCE_PADDING), dtype=np.float64),
            responsibility=np.zeros((ROW_SLOTS, n + COST_PADDING), dtype=np.float64),
        )

    @property
    def max_centroid_length(self) -> int:
        return min(self.cost.shape[0] - COST_PADDING, self.distance.shape[0] - DISTANCE_PADDING)

    @property
    def max_series_length(self) -> int:
        return min(
            self.cost.shape[1] - COST_PADDING,
            self.distance.shape[1] - DISTANCE_PADDING,
            self.responsibility.shape[1] - COST_PADDING,
        )

    def check_capacity(self, m: int, n: int) -> None:
        """Raise ShapeMismatchError unless an ``(m, n)`` pair fits every buffer."""
        for name in ("cost", "distance", "responsibility"):
            buf = getattr(self, name)
            if not isinstance(buf, np.ndarray) or buf.ndim != 2:
                raise ShapeMismatchError(f"{name} buffer must be a 2-D ndarray", context={"buffer": name})
            if buf.dtype != np.float64 or not buf.flags.c_contiguous or not buf.flags.writeable:
                raise ShapeMismatchError(
                    f"{name} buffer must be a writeable C-contiguous float64 array",
                    context={"buffer": name, "dtype": str(buf.dtype)},
                )
        if self.responsibility.shape[0] != ROW_SLOTS:
            raise ShapeMismatchError(
                f"responsibility buffer must have exactly {ROW_SLOTS} rows, got {self.responsibility.shape[0]}",
                context={"shape": self.responsibility.shape},
            )
        if m > self.max_centroid_length or n > self.max_series_length:
            raise ShapeMismatchError(
                f"workspace holds at most ({self.max_centroid_length}, {self.max_series_length}), "
                f"need ({m}, {n})",
                context={
                    "centroid_length": m,
                    "series_length": n,
                    "cost_shape": self.cost.shape,
                    "distance_shape": self.distance.shape,
                    "responsibility_shape": self.responsibility.shape,
                },
            )

    def reset_for_series(self, m: int, n: int) -> None:
        """Seed the backward-pass boundary cells for a series of length ``n``.

        Must run after the forward pass has filled the cost table, since it
        overwrites the padding row/column the forward pass never touches and
        copies ``R(m, n)`` into the corner.
        """
        cost, dist = self.cost, self.distance
        dist[:m, n] = 0.0
        dist[m, :n + 1] = 0.0
        cost[1:m + 1, n + 1] = BACKWARD_PAD
        cost[m + 1, 1:n + 1] = BACKWARD_PAD
        cost[m + 1, n + 1] = cost[m, n]
        self.rows.reset()
        self.rows.seed(m, n)
