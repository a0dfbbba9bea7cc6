"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable point/track factories so
the engine tests do not rebuild the same fixtures in every file.
"""
from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from gpx_analyzer.models import GeoPoint, GpsDocument, Route, Track, TrackSegment

START = datetime(2024, 5, 4, 9, 0, tzinfo=timezone.utc)


# --- Factory helpers -------------------------------------------------
def make_point(
    lat: float,
    lon: float,
    elevation: Optional[float] = None,
    seconds: Optional[float] = None,
) -> GeoPoint:
    time = START + timedelta(seconds=seconds) if seconds is not None else None
    return GeoPoint(latitude=lat, longitude=lon, elevation=elevation, time=time)


def make_equator_track(
    elevations: Sequence[Optional[float]],
    *,
    step_deg: float = 0.001,
    interval_s: Optional[float] = 10.0,
    lat: float = 0.0,
) -> List[GeoPoint]:
    """Points heading east along ``lat`` spaced ``step_deg`` of longitude apart."""

    return [
        make_point(
            lat,
            idx * step_deg,
            elevation,
            idx * interval_s if interval_s is not None else None,
        )
        for idx, elevation in enumerate(elevations)
    ]


def make_document(
    segments: Sequence[Sequence[GeoPoint]] = (),
    routes: Sequence[Sequence[GeoPoint]] = (),
    waypoints: Sequence[GeoPoint] = (),
) -> GpsDocument:
    return GpsDocument(
        name="Morning Ride",
        waypoints=list(waypoints),
        routes=[Route(name=f"Route {i}", points=list(r)) for i, r in enumerate(routes)],
        tracks=[
            Track(name="Track", segments=[TrackSegment(points=list(s)) for s in segments])
        ]
        if segments
        else [],
    )


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def peak_track() -> List[GeoPoint]:
    """Three points over a 50 m bump, ten seconds apart."""

    return [
        make_point(0.0, 0.0, 0.0, 0),
        make_point(0.0, 0.001, 50.0, 10),
        make_point(0.0, 0.002, 0.0, 20),
    ]


@pytest.fixture
def climbing_track() -> List[GeoPoint]:
    return make_equator_track([0.0, 20.0, 40.0, 60.0])


@pytest.fixture
def point_factory():
    return make_point


@pytest.fixture
def track_factory():
    return make_equator_track


@pytest.fixture
def document_factory():
    return make_document
