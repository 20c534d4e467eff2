"""PyTorch bridge for the soft-DTW barycenter objective.

Lets a centroid tensor be optimised with any ``torch.optim`` optimizer.  The
forward pass runs the NumPy/numba core on CPU; the backward pass returns the
analytic gradient it produced.  Series are treated as constants.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
import torch
import torch.nn as nn
from torch.autograd import Function

from sdtw_barycenter.core.barycenter import sdtw_cent


def _to_numpy(seq: Any) -> np.ndarray:
    if isinstance(seq, torch.Tensor):
        return seq.detach().cpu().double().numpy()
    return np.asarray(seq, dtype=np.float64)


class SoftDTWBarycenterFunction(Function):
    @staticmethod
    def forward(ctx, centroid: torch.Tensor, series: Sequence[Any], weights: Any, gamma: float | None):
        result = sdtw_cent(
            [_to_numpy(s) for s in series],
            _to_numpy(centroid),
            gamma=gamma,
            weights=None if weights is None else _to_numpy(weights),
            multivariate=centroid.dim() == 2,
        )
        grad = torch.as_tensor(result.gradient, dtype=centroid.dtype, device=centroid.device)
        ctx.save_for_backward(grad)
        return torch.tensor(result.objective, dtype=centroid.dtype, device=centroid.device)

    @staticmethod
    def backward(ctx, grad_output: torch.Tensor):
        (grad,) = ctx.saved_tensors
        return grad_output * grad, None, None, None


class SoftDTWBarycenterLoss(nn.Module):
    """Weighted soft-DTW barycenter objective as a module.

    Args:
        gamma: Smoothing parameter (> 0).  Defaults to ``Settings.default_gamma``.
        weights: Optional per-series weights; all ones when omitted.
    """

    def __init__(self, gamma: float | None = None, weights: Any = None) -> None:
        super().__init__()
        self.gamma = None if gamma is None else float(gamma)
        self.weights = weights

    def forward(self, centroid: torch.Tensor, series: Sequence[Any]) -> torch.Tensor:
        return SoftDTWBarycenterFunction.apply(centroid, series, self.weights, self.gamma)
