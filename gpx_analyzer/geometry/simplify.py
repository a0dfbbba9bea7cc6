"""Ramer-Douglas-Peucker simplification of point sequences."""

from __future__ import annotations

import logging
import threading
from typing import List, Sequence

from ..cancellation import raise_if_cancelled
from ..config import SIMPLIFICATION_TOLERANCE_M
from ..models import GeoPoint
from .distance import haversine_distance

_LOG = logging.getLogger(__name__)


def simplify(
    points: Sequence[GeoPoint],
    tolerance_m: float = SIMPLIFICATION_TOLERANCE_M,
    *,
    cancel_event: threading.Event | None = None,
) -> List[GeoPoint]:
    """Reduce ``points`` while keeping every vertex deviating by more than ``tolerance_m``.

    Endpoints are always kept and sequences of two points or fewer are
    returned as a copy. The output is a new list; the input is not modified.
    """

    if tolerance_m < 0:
        raise ValueError("tolerance_m must not be negative")
    count = len(points)
    if count <= 2:
        return list(points)
    keep = [False] * count
    keep[0] = True
    keep[-1] = True
    _mark_kept_points(points, tolerance_m, keep, cancel_event)
    simplified = [point for point, kept in zip(points, keep) if kept]
    _LOG.debug(
        "Simplified %d points to %d (tolerance=%.2fm)",
        count,
        len(simplified),
        tolerance_m,
    )
    return simplified


def perpendicular_distance(
    point: GeoPoint, line_start: GeoPoint, line_end: GeoPoint
) -> float:
    """Distance in metres from ``point`` to the ``line_start``-``line_end`` chord.

    The projection onto the chord is computed in planar lon/lat space and
    clamped to the chord; the distance to that projected position is then
    measured with the haversine formula.
    """

    dx = line_end.longitude - line_start.longitude
    dy = line_end.latitude - line_start.latitude
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return haversine_distance(
            point.latitude, point.longitude, line_start.latitude, line_start.longitude
        )
    factor = (
        (point.longitude - line_start.longitude) * dx
        + (point.latitude - line_start.latitude) * dy
    ) / length_sq
    factor = min(max(factor, 0.0), 1.0)
    closest_lon = line_start.longitude + factor * dx
    closest_lat = line_start.latitude + factor * dy
    return haversine_distance(point.latitude, point.longitude, closest_lat, closest_lon)


def _mark_kept_points(
    points: Sequence[GeoPoint],
    tolerance_m: float,
    keep: List[bool],
    cancel_event: threading.Event | None,
) -> None:
    """Flag the vertices RDP retains, using an explicit stack of index ranges."""

    # Ranges are pushed right half first so they pop in recursive order.
    stack = [(0, len(points) - 1)]
    while stack:
        raise_if_cancelled(cancel_event)
        start, end = stack.pop()
        if end <= start + 1:
            continue
        start_point = points[start]
        end_point = points[end]
        max_distance = 0.0
        farthest = start
        for index in range(start + 1, end):
            dist = perpendicular_distance(points[index], start_point, end_point)
            # Strictly greater: the first point reaching the maximum wins.
            if dist > max_distance:
                max_distance = dist
                farthest = index
        if max_distance > tolerance_m:
            keep[farthest] = True
            stack.append((farthest, end))
            stack.append((start, farthest))


__all__ = ["simplify", "perpendicular_distance"]
