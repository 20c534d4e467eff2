"""Soft-DTW barycenter core: forward pass, fused backward pass, batch driver."""

from sdtw_barycenter.core.barycenter import BarycenterResult, sdtw_cent
from sdtw_barycenter.core.forward import soft_dtw, soft_dtw_distance
from sdtw_barycenter.core.points import PointKind, squared_euclidean
from sdtw_barycenter.core.refine import RefinementResult, refine_centroid
from sdtw_barycenter.core.workspace import RowPair, Workspace

__all__ = [
    "BarycenterResult",
    "PointKind",
    "RefinementResult",
    "RowPair",
    "Workspace",
    "refine_centroid",
    "sdtw_cent",
    "soft_dtw",
    "soft_dtw_distance",
    "squared_euclidean",
]
