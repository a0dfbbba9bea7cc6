"""Point filters: time window, speed window and outlier rejection.

Every filter returns a new list and leaves its input untouched. Speeds are
measured with the haversine distance between consecutive input points.
"""

from __future__ import annotations

from datetime import datetime
import threading
from typing import List, Sequence

from .cancellation import raise_if_cancelled
from .config import OUTLIER_ELEVATION_THRESHOLD_M, OUTLIER_SPEED_THRESHOLD_MS
from .geometry.distance import haversine_distance
from .geometry.simplify import simplify
from .models import (
    FilterCriteria,
    GeoPoint,
    OutlierThresholds,
    SimplificationTolerance,
    SpeedRange,
    TimeRange,
)


def filter_by_time_range(
    points: Sequence[GeoPoint],
    start: datetime,
    end: datetime,
    *,
    cancel_event: threading.Event | None = None,
) -> List[GeoPoint]:
    """Keep timestamped points with ``start <= time <= end``."""

    kept: List[GeoPoint] = []
    for point in points:
        raise_if_cancelled(cancel_event)
        if point.time is not None and start <= point.time <= end:
            kept.append(point)
    return kept


def filter_by_speed_range(
    points: Sequence[GeoPoint],
    min_speed_ms: float,
    max_speed_ms: float,
    *,
    cancel_event: threading.Event | None = None,
) -> List[GeoPoint]:
    """Keep points reached from their predecessor within the speed window.

    The first point is always kept. Each later point is compared with the
    point immediately before it in the input, whether or not that one was
    kept. Points whose speed cannot be computed (missing time or a
    non-positive interval) are kept.
    """

    if len(points) < 2:
        return list(points)
    kept = [points[0]]
    for previous, current in zip(points, points[1:]):
        raise_if_cancelled(cancel_event)
        speed = _speed_between(previous, current)
        if speed is None or min_speed_ms <= speed <= max_speed_ms:
            kept.append(current)
    return kept


def remove_outliers(
    points: Sequence[GeoPoint],
    speed_threshold_ms: float = OUTLIER_SPEED_THRESHOLD_MS,
    elevation_threshold_m: float = OUTLIER_ELEVATION_THRESHOLD_M,
    *,
    cancel_event: threading.Event | None = None,
) -> List[GeoPoint]:
    """Drop interior points that look like GPS glitches.

    An interior point is an outlier when it was reached from the previous
    point faster than ``speed_threshold_ms``, or when it is an elevation
    spike: both the step into it and the step out of it exceed
    ``elevation_threshold_m``. The first and last points are always kept.
    """

    if len(points) < 3:
        return list(points)
    kept = [points[0]]
    for index in range(1, len(points) - 1):
        raise_if_cancelled(cancel_event)
        previous = points[index - 1]
        current = points[index]
        following = points[index + 1]
        if _is_outlier(
            previous, current, following, speed_threshold_ms, elevation_threshold_m
        ):
            continue
        kept.append(current)
    kept.append(points[-1])
    return kept


def apply_criteria(
    points: Sequence[GeoPoint],
    criteria: FilterCriteria,
    *,
    cancel_event: threading.Event | None = None,
) -> List[GeoPoint]:
    """Run the filter matching ``criteria`` over ``points``."""

    if isinstance(criteria, TimeRange):
        return filter_by_time_range(
            points, criteria.start, criteria.end, cancel_event=cancel_event
        )
    if isinstance(criteria, SpeedRange):
        return filter_by_speed_range(
            points,
            criteria.min_speed_ms,
            criteria.max_speed_ms,
            cancel_event=cancel_event,
        )
    if isinstance(criteria, OutlierThresholds):
        return remove_outliers(
            points,
            criteria.speed_threshold_ms,
            criteria.elevation_threshold_m,
            cancel_event=cancel_event,
        )
    if isinstance(criteria, SimplificationTolerance):
        return simplify(points, criteria.tolerance_m, cancel_event=cancel_event)
    raise TypeError(f"Unsupported filter criteria: {type(criteria).__name__}")


def _speed_between(previous: GeoPoint, current: GeoPoint) -> float | None:
    """Speed in m/s between two points, or ``None`` when it is undefined."""

    if previous.time is None or current.time is None:
        return None
    seconds = (current.time - previous.time).total_seconds()
    if seconds <= 0:
        return None
    meters = haversine_distance(
        previous.latitude, previous.longitude, current.latitude, current.longitude
    )
    return meters / seconds


def _is_outlier(
    previous: GeoPoint,
    current: GeoPoint,
    following: GeoPoint,
    speed_threshold_ms: float,
    elevation_threshold_m: float,
) -> bool:
    speed = _speed_between(previous, current)
    if speed is not None and speed > speed_threshold_ms:
        return True
    if (
        previous.elevation is None
        or current.elevation is None
        or following.elevation is None
    ):
        return False
    rise_in = abs(current.elevation - previous.elevation)
    rise_out = abs(following.elevation - current.elevation)
    return rise_in > elevation_threshold_m and rise_out > elevation_threshold_m


__all__ = [
    "apply_criteria",
    "filter_by_speed_range",
    "filter_by_time_range",
    "remove_outliers",
]
