"""Elevation smoothing to suppress GPS altimeter noise."""

from __future__ import annotations

from typing import List, Sequence

from ..config import ELEVATION_SMOOTHING_WINDOW
from ..models import GeoPoint


def moving_average(values: Sequence[float], window_size: int) -> List[float]:
    """Centred moving average clipped at both ends of ``values``.

    Edge samples average only the neighbours that exist, so the output has
    the same length as the input.
    """

    if window_size < 1:
        raise ValueError("window_size must be at least 1")
    half = window_size // 2
    count = len(values)
    smoothed: List[float] = []
    for index in range(count):
        start = max(0, index - half)
        end = min(count - 1, index + half)
        window = values[start : end + 1]
        smoothed.append(sum(window) / len(window))
    return smoothed


def smooth_elevations(
    points: Sequence[GeoPoint], window_size: int = ELEVATION_SMOOTHING_WINDOW
) -> List[float]:
    """Return smoothed elevations for ``points``, one value per point.

    Missing elevations count as 0 m in the average rather than being skipped.
    """

    raw = [point.elevation if point.elevation is not None else 0.0 for point in points]
    return moving_average(raw, window_size)


__all__ = ["moving_average", "smooth_elevations"]
