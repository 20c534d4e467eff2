"""Tests for core.backward and core.gradient — responsibility rows and their reduction."""

from __future__ import annotations

import numpy as np
import pytest

from conftest import random_series, reference_soft_dtw
from sdtw_barycenter.core.backward import accumulate_series, solve_row
from sdtw_barycenter.core.forward import soft_dtw
from sdtw_barycenter.core.gradient import accumulate_row
from sdtw_barycenter.core.workspace import Workspace


def _responsibility_table(x: np.ndarray, y: np.ndarray, gamma: float, ws: Workspace) -> np.ndarray:
    """Run the row-by-row solver and stack rows 1..m into an (m, n) table."""
    m, n = x.shape[0], y.shape[0]
    soft_dtw(x, y, gamma, ws)
    ws.reset_for_series(m, n)
    table = np.zeros((m, n))
    for i in range(m, 0, -1):
        table[i - 1] = solve_row(i, n, gamma, ws)[1:n + 1]
        if i == m:
            ws.rows.clear_seed(m, n)
    return table


class TestSolveRow:
    def test_last_cell_is_one(self, rng) -> None:
        x = random_series(rng, 4, 2)
        y = random_series(rng, 5, 2)
        ws = Workspace.allocate(4, 5)
        soft_dtw(x, y, 1.0, ws)
        ws.reset_for_series(4, 5)
        row = solve_row(4, 5, 1.0, ws)
        assert row[5] == 1.0

    def test_first_cell_is_one(self, rng) -> None:
        # every alignment path starts at (1, 1)
        x = random_series(rng, 5, 1)
        y = random_series(rng, 6, 1)
        table = _responsibility_table(x, y, 0.5, Workspace.allocate(5, 6))
        assert table[0, 0] == pytest.approx(1.0, rel=1e-10)

    @pytest.mark.parametrize("gamma", [0.1, 1.0, 5.0])
    def test_matches_full_table_reference(self, rng, gamma) -> None:
        x = random_series(rng, 6, 3)
        y = random_series(rng, 4, 3)
        _, expected = reference_soft_dtw(x, y, gamma)
        table = _responsibility_table(x, y, gamma, Workspace.allocate(6, 4))
        np.testing.assert_allclose(table, expected, rtol=1e-10, atol=1e-14)

    def test_values_are_probabilities(self, rng) -> None:
        x = random_series(rng, 7, 1)
        y = random_series(rng, 9, 1)
        table = _responsibility_table(x, y, 1.0, Workspace.allocate(7, 9))
        assert np.all(table >= 0.0)
        assert np.all(table <= 1.0 + 1e-12)

    def test_wide_buffer_matches_exact_buffer(self, rng) -> None:
        x = random_series(rng, 4, 2)
        y = random_series(rng, 3, 2)
        exact = _responsibility_table(x, y, 0.3, Workspace.allocate(4, 3))
        wide = _responsibility_table(x, y, 0.3, Workspace.allocate(4, 20))
        np.testing.assert_array_equal(exact, wide)


class TestAccumulateRow:
    def test_univariate(self) -> None:
        gradient = np.zeros((2, 1))
        x = np.array([[1.0], [3.0]])
        y = np.array([[0.0], [2.0], [4.0]])
        row = np.array([0.0, 0.5, 0.25, 1.0, 0.0])
        accumulate_row(gradient, 2, 2.0, row, x, y)
        # 2 * 2 * (0.5*(3-0) + 0.25*(3-2) + 1.0*(3-4))
        assert gradient[1, 0] == pytest.approx(2.0 * 2.0 * (1.5 + 0.25 - 1.0))
        assert gradient[0, 0] == 0.0

    def test_multivariate_matches_explicit_sum(self, rng) -> None:
        x = random_series(rng, 3, 4)
        y = random_series(rng, 5, 4)
        row = np.concatenate([[0.0], rng.uniform(size=5), [0.0]])
        gradient = np.zeros_like(x)
        accumulate_row(gradient, 1, 0.7, row, x, y)
        expected = 0.7 * sum(row[j + 1] * 2 * (x[0] - y[j]) for j in range(5))
        np.testing.assert_allclose(gradient[0], expected, rtol=1e-12)
        assert np.all(gradient[1:] == 0.0)

    def test_accumulates(self) -> None:
        gradient = np.ones((1, 1))
        accumulate_row(gradient, 1, 1.0, np.array([0.0, 1.0, 0.0]), np.array([[2.0]]), np.array([[0.0]]))
        assert gradient[0, 0] == 5.0


class TestAccumulateSeries:
    def test_gradient_matches_reference(self, rng) -> None:
        x = random_series(rng, 5, 2)
        y = random_series(rng, 6, 2)
        _, E = reference_soft_dtw(x, y, 0.8)
        expected = 2.0 * (E.sum(axis=1)[:, None] * x - E @ y)

        ws = Workspace.allocate(5, 6)
        soft_dtw(x, y, 0.8, ws)
        gradient = np.zeros_like(x)
        accumulate_series(gradient, 1.0, 0.8, ws, x, y)
        np.testing.assert_allclose(gradient, expected, rtol=1e-10, atol=1e-12)

    def test_seed_cleared_after_pass(self, rng) -> None:
        x = random_series(rng, 3, 1)
        y = random_series(rng, 4, 1)
        ws = Workspace.allocate(3, 4)
        soft_dtw(x, y, 1.0, ws)
        accumulate_series(np.zeros_like(x), 1.0, 1.0, ws, x, y)
        assert ws.rows.seed_value(3, 4) == 0.0

    def test_single_row_centroid(self, rng) -> None:
        x = random_series(rng, 1, 2)
        y = random_series(rng, 4, 2)
        _, E = reference_soft_dtw(x, y, 1.0)
        ws = Workspace.allocate(1, 4)
        soft_dtw(x, y, 1.0, ws)
        gradient = np.zeros_like(x)
        accumulate_series(gradient, 1.0, 1.0, ws, x, y)
        # a one-point centroid is aligned with every series point exactly once
        np.testing.assert_allclose(E, 1.0)
        np.testing.assert_allclose(gradient[0], 2.0 * (4 * x[0] - y.sum(axis=0)), rtol=1e-12)

    def test_weight_scales_gradient(self, rng) -> None:
        x = random_series(rng, 4, 1)
        y = random_series(rng, 4, 1)
        ws = Workspace.allocate(4, 4)
        unit = np.zeros_like(x)
        soft_dtw(x, y, 1.0, ws)
        accumulate_series(unit, 1.0, 1.0, ws, x, y)
        scaled = np.zeros_like(x)
        soft_dtw(x, y, 1.0, ws)
        accumulate_series(scaled, 0.25, 1.0, ws, x, y)
        np.testing.assert_allclose(scaled, 0.25 * unit, rtol=1e-14)
