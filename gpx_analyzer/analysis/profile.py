"""Elevation profile resampling.

The profile pools every elevation-bearing point of the analysed sequences,
smooths the pooled series, measures cumulative distance along it and
resamples it to a fixed number of evenly spaced samples.
"""

from __future__ import annotations

import threading
from typing import Iterable, List, Sequence

import numpy as np
from numpy.typing import NDArray

from ..cancellation import raise_if_cancelled
from ..config import ELEVATION_PROFILE_POINTS, ELEVATION_SMOOTHING_WINDOW
from ..errors import InsufficientDataError
from ..geometry.distance import cumulative_distances
from ..models import ElevationPoint, GeoPoint
from .smoothing import smooth_elevations

FloatArray = NDArray[np.float64]


def generate_elevation_profile(
    sequences: Iterable[Sequence[GeoPoint]],
    point_count: int = ELEVATION_PROFILE_POINTS,
    *,
    smoothing_window: int = ELEVATION_SMOOTHING_WINDOW,
    cancel_event: threading.Event | None = None,
) -> List[ElevationPoint]:
    """Build the elevation profile over every elevation-bearing point.

    Points are pooled in the order given, across all sequences, before
    smoothing and distance measurement.

    Raises:
        InsufficientDataError: fewer than two points carry an elevation.
    """

    pooled: List[GeoPoint] = []
    for points in sequences:
        raise_if_cancelled(cancel_event)
        pooled.extend(point for point in points if point.elevation is not None)
    if len(pooled) < 2:
        raise InsufficientDataError(
            f"Elevation profile needs at least 2 elevation points, got {len(pooled)}"
        )
    elevations = smooth_elevations(pooled, smoothing_window)
    distances = cumulative_distances(pooled)
    return build_elevation_profile(distances, elevations, point_count)


def build_elevation_profile(
    distances: Sequence[float],
    elevations: Sequence[float],
    point_count: int = ELEVATION_PROFILE_POINTS,
) -> List[ElevationPoint]:
    """Resample ``(distance, elevation)`` samples to ``point_count`` points.

    Parameters:
        distances: Non-decreasing cumulative distances in metres.
        elevations: Elevation for each distance, in metres.
        point_count: Number of output samples, evenly spaced by distance.

    Returns:
        Profile whose first and last samples are the first and last inputs.
        Interior elevations are linearly interpolated; the grade of an
        interior sample is the slope between the elevations half an interval
        before and after it. The last sample repeats the previous grade.
    """

    if point_count < 2:
        raise ValueError("point_count must be at least 2")
    if len(distances) != len(elevations):
        raise ValueError("distances and elevations must be the same length")
    if len(distances) < 2:
        raise InsufficientDataError(
            f"Elevation profile needs at least 2 samples, got {len(distances)}"
        )
    dist = np.asarray(distances, dtype=float)
    elev = np.asarray(elevations, dtype=float)
    total = float(dist[-1])
    interval = total / (point_count - 1)

    targets = np.arange(1, point_count - 1, dtype=float) * interval
    interior_elev = _interpolate(dist, elev, targets)
    before = np.maximum(targets - interval / 2.0, 0.0)
    after = np.minimum(targets + interval / 2.0, total)
    span = after - before
    rise = _interpolate(dist, elev, after) - _interpolate(dist, elev, before)
    grades = np.zeros_like(targets)
    np.divide(rise, span, out=grades, where=span > 0)
    grades *= 100.0

    profile = [ElevationPoint(distance_m=0.0, elevation_m=float(elev[0]), grade_pct=0.0)]
    profile.extend(
        ElevationPoint(distance_m=float(d), elevation_m=float(e), grade_pct=float(g))
        for d, e, g in zip(targets, interior_elev, grades)
    )
    profile.append(
        ElevationPoint(
            distance_m=total,
            elevation_m=float(elev[-1]),
            grade_pct=profile[-1].grade_pct,
        )
    )
    return profile


def _interpolate(
    distances: FloatArray, elevations: FloatArray, targets: FloatArray
) -> FloatArray:
    """Linear elevation at each target distance.

    The bracket for a target is the first sample pair whose upper distance
    reaches it, so zero-length steps resolve to their earliest sample.
    Targets outside the sampled range return the end elevations.
    """

    upper = np.searchsorted(distances, targets, side="left")
    upper = np.clip(upper, 1, len(distances) - 1)
    lower = upper - 1
    d0 = distances[lower]
    d1 = distances[upper]
    e0 = elevations[lower]
    e1 = elevations[upper]
    fraction = np.zeros_like(targets)
    np.divide(targets - d0, d1 - d0, out=fraction, where=d1 > d0)
    result = e0 + fraction * (e1 - e0)
    result = np.where(targets >= distances[-1], elevations[-1], result)
    return np.where(targets <= 0.0, elevations[0], result)


__all__ = ["build_elevation_profile", "generate_elevation_profile"]
