"""Soft-DTW barycenter objective and gradient for time-series averaging.

Provides:
- sdtw_cent: weighted soft-DTW objective of a centroid against a batch of
  series, plus its gradient w.r.t. every centroid point
- refine_centroid: L-BFGS-B refinement of a centroid on top of sdtw_cent
- Workspace: reusable scratch buffers for repeated batch calls
- SoftDTWBarycenterLoss: optional torch.nn.Module wrapper (requires torch)
"""

from __future__ import annotations

import importlib

from sdtw_barycenter.config import Settings, get_settings
from sdtw_barycenter.core import (
    BarycenterResult,
    PointKind,
    RefinementResult,
    Workspace,
    refine_centroid,
    sdtw_cent,
    soft_dtw_distance,
    squared_euclidean,
)
from sdtw_barycenter.exceptions import (
    BarycenterError,
    InvalidSmoothingError,
    NumericOverflowError,
    ShapeMismatchError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "BarycenterError",
    "BarycenterResult",
    "InvalidSmoothingError",
    "NumericOverflowError",
    "PointKind",
    "RefinementResult",
    "Settings",
    "ShapeMismatchError",
    "ValidationError",
    "Workspace",
    "get_settings",
    "refine_centroid",
    "sdtw_cent",
    "soft_dtw_distance",
    "squared_euclidean",
    # torch bridge
    "SoftDTWBarycenterFunction",
    "SoftDTWBarycenterLoss",
]


def __getattr__(name: str):
    """Lazy imports so environments without torch don't crash on import."""
    _map = {
        "SoftDTWBarycenterFunction": ".torch_ops",
        "SoftDTWBarycenterLoss": ".torch_ops",
    }
    if name in _map:
        mod = importlib.import_module(_map[name], __package__)
        return getattr(mod, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
