"""Single source of truth for numeric defaults and table boundary values.

Index layout shared by the forward and backward passes (m = centroid length,
n = series length):

    cost table R       (m+2) x (n+2)   interior 1..m, 1..n
        R(0, 0)        = 0             forward origin
        R(0, j), R(i, 0) = +inf        forward padding, j, i >= 1
        R(i, n+1)      = -inf          backward padding, i <= m
        R(m+1, j)      = -inf          backward padding, j <= n
        R(m+1, n+1)    = R(m, n)       backward corner

    distance table D   (m+1) x (n+1)   D(i-1, j-1) = ||x_i - y_j||^2
        D(i, n) = D(m, j) = 0          backward padding

    responsibility     2 x (n+2)       rows alternate by parity of i
        E(m+1, n+1) = 1                one-shot seed, cleared after row m
"""

import math

# --- Smoothing ---
DEFAULT_GAMMA: float = 0.01

# --- Table padding ---
FORWARD_PAD: float = math.inf
BACKWARD_PAD: float = -math.inf
ORIGIN_COST: float = 0.0
RESPONSIBILITY_SEED: float = 1.0

# Extra rows/columns around the interior of each table.
COST_PADDING: int = 2
DISTANCE_PADDING: int = 1
ROW_SLOTS: int = 2

# --- Refinement ---
DEFAULT_REFINE_MAX_ITER: int = 20
DEFAULT_REFINE_TOL: float = 1e-6
