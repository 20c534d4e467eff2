"""Up-front input checks for the batch call.

Everything here runs before the first scratch-buffer write, so a rejected
call leaves a caller-owned workspace untouched.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

import numpy as np

from sdtw_barycenter.core.points import PointKind
from sdtw_barycenter.exceptions import InvalidSmoothingError, ShapeMismatchError, ValidationError


def validate_gamma(gamma: float) -> float:
    try:
        value = float(gamma)
    except (TypeError, ValueError) as exc:
        raise InvalidSmoothingError(f"gamma must be a number, got {gamma!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidSmoothingError(f"gamma must be > 0, got {gamma}", context={"gamma": value})
    return value


def validate_series(
    series: Sequence[Any],
    centroid: np.ndarray,
    kind: PointKind,
) -> list[np.ndarray]:
    """Coerce every series to ``kind`` and check its dim against the centroid."""
    if isinstance(series, np.ndarray) and series.ndim == kind.ndim + 1:
        series = list(series)
    if len(series) == 0:
        raise ShapeMismatchError("at least one series is required", context={"n_series": 0})
    dim = centroid.shape[1]
    coerced: list[np.ndarray] = []
    for idx, seq in enumerate(series):
        y = kind.coerce(seq, name=f"series[{idx}]")
        if y.shape[1] != dim:
            raise ShapeMismatchError(
                f"series[{idx}] has dim {y.shape[1]}, centroid has dim {dim}",
                context={"series_index": idx, "dim": y.shape[1], "centroid_dim": dim},
            )
        coerced.append(y)
    return coerced


def validate_weights(weights: Any, n_series: int) -> np.ndarray:
    """Return weights as float64; ``None`` means weight 1 for every series."""
    if weights is None:
        return np.ones(n_series, dtype=np.float64)
    w = np.asarray(weights, dtype=np.float64).reshape(-1)
    if w.shape[0] != n_series:
        raise ShapeMismatchError(
            f"got {w.shape[0]} weights for {n_series} series",
            context={"n_weights": int(w.shape[0]), "n_series": n_series},
        )
    if not np.all(np.isfinite(w)) or np.any(w < 0):
        raise ValidationError("weights must be finite and non-negative", context={"weights": w.tolist()})
    return w
