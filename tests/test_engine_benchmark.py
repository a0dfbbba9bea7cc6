"""Smoke tests for the engine benchmark script."""

from __future__ import annotations

import pytest

from benchmarks.engine_benchmark import run_benchmark


def test_small_benchmark_run_reports_summary() -> None:
    summary = run_benchmark(50, 2)

    assert summary.point_count == 50
    assert summary.iterations == 2
    assert 2 <= summary.simplified_count <= 50
    assert summary.worst_total_ms >= summary.mean_total_ms > 0.0


@pytest.mark.parametrize("points,iterations", [(2, 1), (50, 0)])
def test_benchmark_rejects_invalid_arguments(points, iterations) -> None:
    with pytest.raises(ValueError):
        run_benchmark(points, iterations)
