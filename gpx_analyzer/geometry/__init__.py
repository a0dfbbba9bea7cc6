"""Geodesic distance and polyline simplification for GPS point sequences."""

from .distance import (
    EARTH_RADIUS_M,
    cumulative_distances,
    distance,
    haversine_distance,
    path_length,
    vincenty_distance,
)
from .simplify import perpendicular_distance, simplify

__all__ = [
    "EARTH_RADIUS_M",
    "cumulative_distances",
    "distance",
    "haversine_distance",
    "path_length",
    "vincenty_distance",
    "perpendicular_distance",
    "simplify",
]
