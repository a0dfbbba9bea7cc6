"""Geodesic distances between GPS points.

Distances are measured on the WGS-84 ellipsoid with the Vincenty inverse
formula. When the iteration does not converge (nearly antipodal points) the
great-circle haversine distance on a spherical earth is used instead.
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

from ..config import VINCENTY_CONVERGENCE_TOLERANCE, VINCENTY_MAX_ITERATIONS
from ..models import GeoPoint

_LOG = logging.getLogger(__name__)

EARTH_RADIUS_M = 6_371_000.0

# WGS-84 ellipsoid.
WGS84_A = 6_378_137.0
WGS84_F = 1 / 298.257223563
WGS84_B = WGS84_A * (1 - WGS84_F)


def distance(first: GeoPoint, second: GeoPoint) -> float:
    """Return the geodesic distance in metres between two points."""

    return vincenty_distance(
        first.latitude, first.longitude, second.latitude, second.longitude
    )


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two lat/lon pairs in degrees."""

    sin = math.sin
    cos = math.cos
    radians = math.radians
    delta_lat = radians(lat2 - lat1)
    delta_lon = radians(lon2 - lon1)
    lat1_rad = radians(lat1)
    lat2_rad = radians(lat2)
    sin_half_lat = sin(delta_lat / 2.0)
    sin_half_lon = sin(delta_lon / 2.0)
    a = sin_half_lat * sin_half_lat + sin_half_lon * sin_half_lon * cos(lat1_rad) * cos(
        lat2_rad
    )
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_M * c


def vincenty_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    *,
    max_iterations: int = VINCENTY_MAX_ITERATIONS,
    tolerance: float = VINCENTY_CONVERGENCE_TOLERANCE,
) -> float:
    """Ellipsoidal distance in metres using the Vincenty inverse formula.

    Parameters:
        lat1, lon1: First point in degrees.
        lat2, lon2: Second point in degrees.
        max_iterations: Lambda updates attempted before giving up.
        tolerance: Convergence threshold on the lambda update.

    Returns:
        Distance in metres. Coincident points return ``0.0``; inputs for which
        the iteration does not converge return :func:`haversine_distance`.
    """

    f = WGS84_F
    b = WGS84_B
    big_l = math.radians(lon2 - lon1)
    u1 = math.atan((1 - f) * math.tan(math.radians(lat1)))
    u2 = math.atan((1 - f) * math.tan(math.radians(lat2)))
    sin_u1 = math.sin(u1)
    cos_u1 = math.cos(u1)
    sin_u2 = math.sin(u2)
    cos_u2 = math.cos(u2)

    lam = big_l
    iterations = 0
    while True:
        sin_lam = math.sin(lam)
        cos_lam = math.cos(lam)
        sin_sigma = math.sqrt(
            (cos_u2 * sin_lam) ** 2
            + (cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam) ** 2
        )
        if sin_sigma == 0:
            return 0.0
        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos_sq_alpha = 1 - sin_alpha * sin_alpha
        if cos_sq_alpha == 0:
            # Equatorial line.
            cos_2sigma_m = 0.0
        else:
            cos_2sigma_m = cos_sigma - 2 * sin_u1 * sin_u2 / cos_sq_alpha
        c = f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
        lam_prev = lam
        lam = big_l + (1 - c) * f * sin_alpha * (
            sigma
            + c
            * sin_sigma
            * (cos_2sigma_m + c * cos_sigma * (-1 + 2 * cos_2sigma_m * cos_2sigma_m))
        )
        iterations += 1
        if abs(lam - lam_prev) <= tolerance:
            break
        if iterations >= max_iterations:
            _LOG.warning(
                "Vincenty formula failed to converge for (%s, %s) -> (%s, %s); "
                "falling back to haversine",
                lat1,
                lon1,
                lat2,
                lon2,
            )
            return haversine_distance(lat1, lon1, lat2, lon2)

    u_sq = cos_sq_alpha * (WGS84_A * WGS84_A - b * b) / (b * b)
    big_a = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    big_b = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    delta_sigma = (
        big_b
        * sin_sigma
        * (
            cos_2sigma_m
            + big_b
            / 4
            * (
                cos_sigma * (-1 + 2 * cos_2sigma_m * cos_2sigma_m)
                - big_b
                / 6
                * cos_2sigma_m
                * (-3 + 4 * sin_sigma * sin_sigma)
                * (-3 + 4 * cos_2sigma_m * cos_2sigma_m)
            )
        )
    )
    return b * big_a * (sigma - delta_sigma)


def path_length(points: Sequence[GeoPoint]) -> float:
    """Sum of consecutive geodesic distances along ``points``."""

    total = 0.0
    for previous, current in zip(points, points[1:]):
        total += distance(previous, current)
    return total


def cumulative_distances(points: Sequence[GeoPoint]) -> List[float]:
    """Running distance from the first point, starting at ``0.0``."""

    if not points:
        return []
    totals = [0.0]
    for previous, current in zip(points, points[1:]):
        totals.append(totals[-1] + distance(previous, current))
    return totals


__all__ = [
    "EARTH_RADIUS_M",
    "distance",
    "haversine_distance",
    "vincenty_distance",
    "path_length",
    "cumulative_distances",
]
