"""Soft-DTW barycenter objective and gradient for a weighted batch of series.

Objective::

    F(z) = sum_k  w_k * sdtw_gamma(z, y_k)

where ``z`` is the centroid.  For every series the forward pass fills the
shared workspace, the weighted distance is added to the objective, and the
backward pass adds ``w_k * dF_k/dz`` into the gradient.  Series are processed
strictly in order because they share one set of scratch buffers.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from sdtw_barycenter.config import Settings, get_settings
from sdtw_barycenter.core.backward import accumulate_series
from sdtw_barycenter.core.forward import soft_dtw
from sdtw_barycenter.core.points import PointKind
from sdtw_barycenter.core.validation import validate_gamma, validate_series, validate_weights
from sdtw_barycenter.core.workspace import Workspace
from sdtw_barycenter.exceptions import NumericOverflowError

logger = logging.getLogger(__name__)


@dataclass
class BarycenterResult:
    """Objective and gradient of one batch call."""

    objective: float
    """Weighted sum of soft-DTW distances."""

    gradient: np.ndarray = field(repr=False)
    """d(objective)/d(centroid), same shape as the centroid."""


def sdtw_cent(
    series: Sequence[Any],
    centroid: Any,
    gamma: float | None = None,
    weights: Any = None,
    multivariate: bool | None = None,
    workspace: Workspace | None = None,
    settings: Settings | None = None,
) -> BarycenterResult:
    """Soft-DTW barycenter objective and its gradient w.r.t. the centroid.

    Args:
        series:       Sequences to average; 1-D arrays (univariate) or
                      ``(length, dim)`` arrays (multivariate).  Lengths may differ.
        centroid:     Candidate barycenter, same point type as ``series``.
        gamma:        Smoothing parameter (> 0).  Defaults to ``settings.default_gamma``.
        weights:      One non-negative weight per series.  Defaults to all ones.
        multivariate: Point type flag.  ``None`` infers it from ``centroid.ndim``.
        workspace:    Reusable scratch buffers.  Allocated for the longest series
                      when omitted.
        settings:     Defaults to :func:`get_settings`.

    Returns:
        BarycenterResult with the objective and a gradient shaped like ``centroid``.

    Raises:
        InvalidSmoothingError: ``gamma <= 0``.
        ShapeMismatchError:    inconsistent dims, weights or buffer sizes.
        ValidationError:       negative or non-finite weights.
        NumericOverflowError:  non-finite result with ``settings.check_finite``.
    """
    settings = settings or get_settings()
    gamma = validate_gamma(settings.default_gamma if gamma is None else gamma)
    kind = PointKind.resolve(centroid, multivariate)
    x = kind.coerce(centroid, name="centroid")
    ys = validate_series(series, x, kind)
    w = validate_weights(weights, len(ys))

    m = x.shape[0]
    n_max = max(y.shape[0] for y in ys)
    if workspace is None:
        workspace = Workspace.allocate(m, n_max)
    workspace.check_capacity(m, n_max)

    start = time.perf_counter()
    gradient = np.zeros_like(x)
    objective = 0.0
    for y, weight in zip(ys, w):
        distance = soft_dtw(x, y, gamma, workspace)
        objective += weight * distance
        accumulate_series(gradient, weight, gamma, workspace, x, y)

    logger.debug(
        "soft-DTW barycenter batch evaluated",
        extra={
            "n_series": len(ys),
            "centroid_length": m,
            "dim": x.shape[1],
            "gamma": gamma,
            "objective": objective,
            "duration_ms": round((time.perf_counter() - start) * 1000, 3),
        },
    )

    if not (np.isfinite(objective) and np.all(np.isfinite(gradient))):
        logger.warning(
            "non-finite soft-DTW barycenter result",
            extra={"gamma": gamma, "objective": objective, "error_code": "NUMERIC_OVERFLOW"},
        )
        if settings.check_finite:
            raise NumericOverflowError(
                "soft-DTW barycenter produced a non-finite objective or gradient",
                context={"gamma": gamma, "objective": objective},
            )

    return BarycenterResult(objective=float(objective), gradient=kind.restore(gradient))
