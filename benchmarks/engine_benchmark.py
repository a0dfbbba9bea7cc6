"""Benchmark the analysis and simplification engine with large point counts."""

from __future__ import annotations

import argparse
from datetime import datetime, timedelta, timezone
import logging
import math
import statistics
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Late imports rely on the adjusted sys.path above.
from gpx_analyzer.analysis import analyze  # noqa: E402
from gpx_analyzer.config import (  # noqa: E402
    OUTLIER_ELEVATION_THRESHOLD_M,
    OUTLIER_SPEED_THRESHOLD_MS,
    SIMPLIFICATION_TOLERANCE_M,
)
from gpx_analyzer.filters import remove_outliers  # noqa: E402
from gpx_analyzer.geometry import simplify  # noqa: E402
from gpx_analyzer.models import GeoPoint  # noqa: E402


@dataclass(slots=True)
class StageDurations:
    """Timing measurements (in seconds) for one engine pass."""

    analyze: float
    outliers: float
    simplify: float

    @property
    def total(self) -> float:
        """Return the aggregate duration for this benchmark iteration."""

        return self.analyze + self.outliers + self.simplify


@dataclass(slots=True)
class BenchmarkSummary:
    """Aggregated statistics for multiple benchmark iterations."""

    point_count: int
    iterations: int
    simplified_count: int
    mean_analyze_ms: float
    mean_outliers_ms: float
    mean_simplify_ms: float
    mean_total_ms: float
    worst_total_ms: float


def _build_track(point_count: int) -> List[GeoPoint]:
    """Generate a winding, climbing track with one sample every two seconds."""

    base_lat = 45.0
    base_lon = 6.0
    step_deg = 1.2e-5
    start = datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc)
    return [
        GeoPoint(
            latitude=base_lat + idx * step_deg,
            longitude=base_lon + 2e-4 * math.sin(idx / 50.0),
            elevation=1000.0 + 150.0 * math.sin(idx / 400.0),
            time=start + timedelta(seconds=2 * idx),
        )
        for idx in range(point_count)
    ]


def _run_iteration(points: List[GeoPoint]) -> tuple[StageDurations, int]:
    """Execute one benchmark iteration and capture per-stage timings."""

    start = time.perf_counter()
    analyze([points])
    analyze_dur = time.perf_counter() - start

    start = time.perf_counter()
    cleaned = remove_outliers(
        points, OUTLIER_SPEED_THRESHOLD_MS, OUTLIER_ELEVATION_THRESHOLD_M
    )
    outliers = time.perf_counter() - start

    start = time.perf_counter()
    simplified = simplify(cleaned, SIMPLIFICATION_TOLERANCE_M)
    simplify_dur = time.perf_counter() - start

    return (
        StageDurations(analyze=analyze_dur, outliers=outliers, simplify=simplify_dur),
        len(simplified),
    )


def run_benchmark(point_count: int, iterations: int) -> BenchmarkSummary:
    """Benchmark the engine and return aggregated timings."""

    if point_count < 3:
        raise ValueError("point_count must be at least 3")
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    points = _build_track(point_count)
    durations: List[StageDurations] = []
    simplified_count = 0
    for _ in range(iterations):
        stage, simplified_count = _run_iteration(points)
        durations.append(stage)

    return BenchmarkSummary(
        point_count=point_count,
        iterations=iterations,
        simplified_count=simplified_count,
        mean_analyze_ms=statistics.fmean(item.analyze for item in durations) * 1000.0,
        mean_outliers_ms=statistics.fmean(item.outliers for item in durations)
        * 1000.0,
        mean_simplify_ms=statistics.fmean(item.simplify for item in durations)
        * 1000.0,
        mean_total_ms=statistics.fmean(item.total for item in durations) * 1000.0,
        worst_total_ms=max(item.total for item in durations) * 1000.0,
    )


def _format_summary(summary: BenchmarkSummary) -> Dict[str, float]:
    """Return a JSON-friendly representation of the benchmark summary."""

    return {
        "point_count": summary.point_count,
        "iterations": summary.iterations,
        "simplified_count": summary.simplified_count,
        "mean_analyze_ms": summary.mean_analyze_ms,
        "mean_outliers_ms": summary.mean_outliers_ms,
        "mean_simplify_ms": summary.mean_simplify_ms,
        "mean_total_ms": summary.mean_total_ms,
        "worst_total_ms": summary.worst_total_ms,
    }


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the benchmark utility."""

    parser = argparse.ArgumentParser(
        description="Benchmark analysis, outlier removal and simplification",
    )
    parser.add_argument(
        "--points",
        type=int,
        default=20000,
        help="Number of points in the synthetic track (at least 3)",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=3,
        help="Number of repetitions for averaging",
    )
    return parser.parse_args()


def main() -> None:
    """Entry point when running the module as a script."""

    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )
    args = _parse_args()
    summary = run_benchmark(args.points, args.iterations)
    formatted = _format_summary(summary)
    for key, value in formatted.items():
        if key in {"point_count", "iterations", "simplified_count"}:
            print(f"{key}: {value}")
        else:
            print(f"{key}: {value:.3f}")


if __name__ == "__main__":
    main()
