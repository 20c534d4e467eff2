"""Point elements and the squared-Euclidean distance provider.

A sequence is either univariate (1-D array, one scalar per time step) or
multivariate (2-D array of shape ``(length, dim)``).  Internally both kinds are
carried as ``(length, dim)`` float64 arrays so that the recurrences, the
distance provider and the gradient reduction share one code path; ``dim`` is 1
for univariate data.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import numpy as np

from sdtw_barycenter.exceptions import ShapeMismatchError


class PointKind(str, Enum):
    """Shape of a single point in a sequence."""

    UNIVARIATE = "univariate"
    MULTIVARIATE = "multivariate"

    @classmethod
    def resolve(cls, centroid: Any, multivariate: bool | None = None) -> PointKind:
        """Pick the kind from an explicit flag, or from the centroid's ndim."""
        if multivariate is not None:
            return cls.MULTIVARIATE if multivariate else cls.UNIVARIATE
        ndim = np.ndim(centroid)
        if ndim == 1:
            return cls.UNIVARIATE
        if ndim == 2:
            return cls.MULTIVARIATE
        raise ShapeMismatchError(
            f"centroid must be 1-D or 2-D, got ndim={ndim}",
            context={"ndim": int(ndim)},
        )

    @property
    def ndim(self) -> int:
        return 1 if self is PointKind.UNIVARIATE else 2

    def coerce(self, seq: Any, name: str = "series") -> np.ndarray:
        """Return ``seq`` as a ``(length, dim)`` float64 array.

        Raises:
            ShapeMismatchError: wrong dimensionality for this kind, or empty.
        """
        arr = np.asarray(seq, dtype=np.float64)
        if arr.ndim != self.ndim:
            raise ShapeMismatchError(
                f"{name} must be {self.ndim}-D for {self.value} data, got shape {arr.shape}",
                context={"name": name, "shape": arr.shape, "kind": self.value},
            )
        if arr.shape[0] == 0 or arr.size == 0:
            raise ShapeMismatchError(f"{name} must not be empty", context={"name": name, "shape": arr.shape})
        if self is PointKind.UNIVARIATE:
            arr = arr.reshape(-1, 1)
        return np.ascontiguousarray(arr)

    def restore(self, points: np.ndarray) -> np.ndarray:
        """Inverse of :meth:`coerce` for arrays laid out like the centroid."""
        if self is PointKind.UNIVARIATE:
            return points.reshape(-1)
        return points


def squared_euclidean(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Squared Euclidean distance reduced over the last (coordinate) axis.

    Scalars are accepted as points.  Broadcasts, so a single pair of vector
    points gives a scalar and ``x[:, None, :]`` against ``y[None, :, :]`` gives
    the full ``(m, n)`` table.
    """
    diff = np.subtract(a, b)
    if diff.ndim == 0:
        return diff * diff
    return np.sum(diff * diff, axis=-1)


def distance_table(x: np.ndarray, y: np.ndarray, out: np.ndarray) -> None:
    """Fill ``out[:m, :n]`` with pairwise squared distances between x and y points."""
    m, n = x.shape[0], y.shape[0]
    out[:m, :n] = squared_euclidean(x[:, None, :], y[None, :, :])
