"""
Soft-DTW Barycenter Benchmark

Times one objective+gradient evaluation over a batch of series, comparing a
freshly allocated workspace per call against one reused workspace.

Usage:
    python benchmarks/benchmark_barycenter.py

Output:
    - Console table with results
    - JSON file: benchmarks/results/barycenter_benchmark_{timestamp}.json
"""
from __future__ import annotations

import json
from pathlib import Path
import time
from datetime import UTC, datetime

import numpy as np

from sdtw_barycenter import Workspace, sdtw_cent


def generate_series(n_series: int, length: int, dim: int, seed: int = 0) -> list[np.ndarray]:
    """Random-walk series, lengths jittered by up to 10%."""
    rng = np.random.default_rng(seed)
    out = []
    for _ in range(n_series):
        n = max(1, int(length * rng.uniform(0.9, 1.1)))
        out.append(np.cumsum(rng.standard_normal((n, dim)), axis=0))
    return out


def benchmark_batch(series: list[np.ndarray], centroid: np.ndarray, gamma: float,
                    reuse: bool, runs: int = 3) -> dict:
    """Time sdtw_cent with or without a shared workspace."""
    workspace = None
    if reuse:
        workspace = Workspace.allocate(centroid.shape[0], max(s.shape[0] for s in series))

    # first call compiles the numba kernels
    sdtw_cent(series, centroid, gamma=gamma, workspace=workspace)

    times = []
    for _ in range(runs):
        start = time.perf_counter()
        result = sdtw_cent(series, centroid, gamma=gamma, workspace=workspace)
        times.append(time.perf_counter() - start)

    return {
        "mean_sec": float(np.mean(times)),
        "std_sec": float(np.std(times)),
        "min_sec": float(np.min(times)),
        "objective": result.objective,
    }


def run_benchmark_suite():
    """Run full barycenter benchmark suite."""
    print("=" * 80)
    print("Soft-DTW Barycenter Benchmark")
    print("=" * 80)

    # (n_series, length, dim, label)
    test_cases = [
        (10, 50, 1, "Small univariate"),
        (50, 100, 1, "Medium univariate"),
        (20, 100, 8, "Medium multivariate"),
        (50, 300, 8, "Large multivariate"),
    ]
    gamma = 0.1

    results = {
        "timestamp": datetime.now(UTC).isoformat(),
        "gamma": gamma,
        "test_cases": [],
    }

    for n_series, length, dim, label in test_cases:
        print(f"\n{label} - {n_series} series, length ~{length}, dim {dim}")
        print("-" * 80)

        series = generate_series(n_series, length, dim)
        centroid = series[0].copy()
        if dim == 1:
            series = [s[:, 0] for s in series]
            centroid = centroid[:, 0]

        fresh = benchmark_batch(series, centroid, gamma, reuse=False)
        print(f"    Fresh workspace:  {fresh['mean_sec']:.4f}s ± {fresh['std_sec']:.4f}s")
        reused = benchmark_batch(series, centroid, gamma, reuse=True)
        print(f"    Reused workspace: {reused['mean_sec']:.4f}s ± {reused['std_sec']:.4f}s")

        results["test_cases"].append({
            "label": label,
            "n_series": n_series,
            "length": length,
            "dim": dim,
            "fresh": fresh,
            "reused": reused,
        })

    output_dir = Path(__file__).parent / "results"
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    output_file = output_dir / f"barycenter_benchmark_{timestamp}.json"

    with output_file.open("w") as f:
        json.dump(results, f, indent=2)

    print("\n" + "=" * 80)
    print(f"Results saved to: {output_file}")
    print("=" * 80)

    print("\nSummary:")
    print(f"{'Case':<22} {'Fresh (s)':<15} {'Reused (s)':<15}")
    print("-" * 52)
    for case in results["test_cases"]:
        print(f"{case['label']:<22} {case['fresh']['mean_sec']:<15.4f} {case['reused']['mean_sec']:<15.4f}")

    return results


if __name__ == "__main__":
    run_benchmark_suite()
