"""Iterative centroid refinement by minimising the soft-DTW barycenter objective.

Wraps :func:`~sdtw_barycenter.core.barycenter.sdtw_cent` in SciPy's L-BFGS-B.
A single workspace is allocated up front and reused by every objective
evaluation.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from scipy.optimize import minimize

from sdtw_barycenter.config import Settings, get_settings
from sdtw_barycenter.core.barycenter import sdtw_cent
from sdtw_barycenter.core.points import PointKind
from sdtw_barycenter.core.validation import validate_gamma
from sdtw_barycenter.core.workspace import Workspace
from sdtw_barycenter.exceptions import NumericOverflowError, ShapeMismatchError

logger = logging.getLogger(__name__)


@dataclass
class RefinementResult:
    centroid: np.ndarray = field(repr=False)
    objective: float
    iterations: int
    converged: bool
    message: str


def _initial_centroid(series: Sequence[Any], seed: int | None) -> np.ndarray:
    if len(series) == 0:
        raise ShapeMismatchError("at least one series is required", context={"n_series": 0})
    rng = np.random.default_rng(seed)
    pick = int(rng.integers(len(series)))
    return np.array(series[pick], dtype=np.float64, copy=True)


def refine_centroid(
    series: Sequence[Any],
    centroid: Any = None,
    gamma: float | None = None,
    weights: Any = None,
    multivariate: bool | None = None,
    max_iter: int | None = None,
    tol: float | None = None,
    seed: int | None = None,
    settings: Settings | None = None,
) -> RefinementResult:
    """Refine a centroid so it minimises the weighted soft-DTW objective.

    Args:
        series:       Sequences to average (see :func:`sdtw_cent`).
        centroid:     Starting point.  ``None`` picks one of the series at random.
        gamma:        Smoothing parameter.  Defaults to ``settings.default_gamma``.
        weights:      Per-series weights.  Defaults to all ones.
        multivariate: Point type flag, inferred when ``None``.
        max_iter:     L-BFGS-B iteration budget.  Defaults to ``settings.refine_max_iter``.
        tol:          Projected-gradient tolerance.  Defaults to ``settings.refine_tol``.
        seed:         Seed for the random initial centroid.
        settings:     Defaults to :func:`get_settings`.

    Returns:
        RefinementResult with the refined centroid (same shape as the start).
    """
    settings = settings or get_settings()
    gamma = validate_gamma(settings.default_gamma if gamma is None else gamma)
    max_iter = settings.refine_max_iter if max_iter is None else max_iter
    tol = settings.refine_tol if tol is None else tol

    start_centroid = _initial_centroid(series, seed) if centroid is None else np.array(centroid, dtype=np.float64)
    kind = PointKind.resolve(start_centroid, multivariate)
    m = kind.coerce(start_centroid, name="centroid").shape[0]
    shape = start_centroid.shape
    n_max = max(np.shape(s)[0] for s in series) if len(series) else 0
    workspace = Workspace.allocate(m, max(n_max, 1))

    def _objective(flat: np.ndarray) -> tuple[float, np.ndarray]:
        result = sdtw_cent(
            series,
            flat.reshape(shape),
            gamma=gamma,
            weights=weights,
            multivariate=kind is PointKind.MULTIVARIATE,
            workspace=workspace,
            settings=settings,
        )
        if not (np.isfinite(result.objective) and np.all(np.isfinite(result.gradient))):
            raise NumericOverflowError(
                "soft-DTW barycenter objective or gradient became non-finite during refinement",
                context={"gamma": gamma, "objective": result.objective},
            )
        return result.objective, result.gradient.reshape(-1)

    start = time.perf_counter()
    res = minimize(
        _objective,
        start_centroid.reshape(-1),
        jac=True,
        method="L-BFGS-B",
        options={"maxiter": max_iter, "gtol": tol},
    )
    refined = np.asarray(res.x, dtype=np.float64).reshape(shape)

    logger.info(
        "centroid refinement finished",
        extra={
            "n_series": len(series),
            "centroid_length": m,
            "gamma": gamma,
            "objective": float(res.fun),
            "iterations": int(res.nit),
            "converged": bool(res.success),
            "duration_ms": round((time.perf_counter() - start) * 1000, 3),
        },
    )

    return RefinementResult(
        centroid=refined,
        objective=float(res.fun),
        iterations=int(res.nit),
        converged=bool(res.success),
        message=str(res.message),
    )
