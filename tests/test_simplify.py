"""Tests for Ramer-Douglas-Peucker simplification."""

from __future__ import annotations

import random
import threading
from typing import List

import pytest

from gpx_analyzer.errors import CancellationRequested
from gpx_analyzer.geometry.distance import haversine_distance
from gpx_analyzer.geometry.simplify import perpendicular_distance, simplify
from gpx_analyzer.models import GeoPoint


@pytest.fixture
def zigzag() -> List[GeoPoint]:
    return [
        GeoPoint(0.0 if idx % 2 == 0 else 0.001, idx * 0.001) for idx in range(9)
    ]


def _recursive_rdp(points, tolerance):
    keep = [False] * len(points)
    keep[0] = keep[-1] = True

    def _walk(start, end):
        if end <= start + 1:
            return
        best, best_index = 0.0, start
        for index in range(start + 1, end):
            dist = perpendicular_distance(points[index], points[start], points[end])
            if dist > best:
                best, best_index = dist, index
        if best > tolerance:
            keep[best_index] = True
            _walk(start, best_index)
            _walk(best_index, end)

    _walk(0, len(points) - 1)
    return [p for p, k in zip(points, keep) if k]


def test_zero_tolerance_keeps_everything(zigzag) -> None:
    assert simplify(zigzag, 0.0) == zigzag


def test_large_tolerance_keeps_only_endpoints(zigzag) -> None:
    assert simplify(zigzag, 1e9) == [zigzag[0], zigzag[-1]]


def test_short_sequences_pass_through() -> None:
    pair = [GeoPoint(0.0, 0.0), GeoPoint(1.0, 1.0)]

    simplified = simplify(pair, 1e9)

    assert simplified == pair
    assert simplified is not pair
    assert simplify([], 5.0) == []


def test_keeps_vertex_beyond_tolerance_only() -> None:
    points = [
        GeoPoint(0.0, 0.0),
        GeoPoint(0.0, 0.001),  # ~50 m from the first sub-chord
        GeoPoint(0.001, 0.002),  # ~111 m off the baseline
        GeoPoint(0.0, 0.003),
        GeoPoint(0.0, 0.004),
    ]

    assert simplify(points, 60.0) == [points[0], points[2], points[4]]
    assert simplify(points, 40.0) == points


def test_first_of_equal_distances_wins() -> None:
    points = [
        GeoPoint(0.0, 0.0),
        GeoPoint(0.001, 0.001),
        GeoPoint(0.001, 0.002),
        GeoPoint(0.0, 0.003),
    ]

    assert simplify(points, 100.0) == [points[0], points[1], points[3]]


def test_matches_recursive_reference() -> None:
    rng = random.Random(1234)
    points = [
        GeoPoint(45.0 + rng.uniform(-0.002, 0.002), 6.0 + idx * 0.0005)
        for idx in range(300)
    ]

    for tolerance in (0.0, 5.0, 25.0, 120.0):
        assert simplify(points, tolerance) == _recursive_rdp(points, tolerance)


def test_input_is_not_modified(zigzag) -> None:
    original = list(zigzag)

    simplify(zigzag, 1e9)

    assert zigzag == original


def test_negative_tolerance_rejected(zigzag) -> None:
    with pytest.raises(ValueError):
        simplify(zigzag, -1.0)


def test_perpendicular_distance_degenerate_chord() -> None:
    start = GeoPoint(10.0, 10.0)
    point = GeoPoint(10.01, 10.0)

    assert perpendicular_distance(point, start, start) == haversine_distance(
        10.01, 10.0, 10.0, 10.0
    )


def test_perpendicular_distance_clamps_to_chord_end() -> None:
    start = GeoPoint(0.0, 0.0)
    end = GeoPoint(0.0, 0.001)
    beyond = GeoPoint(0.0, 0.003)

    assert perpendicular_distance(beyond, start, end) == pytest.approx(
        haversine_distance(0.0, 0.003, 0.0, 0.001)
    )


def test_cancellation_aborts(zigzag) -> None:
    event = threading.Event()
    event.set()

    with pytest.raises(CancellationRequested):
        simplify(zigzag, 0.0, cancel_event=event)
