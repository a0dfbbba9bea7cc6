"""Tests for the time, speed and outlier filters."""

from __future__ import annotations

import threading

import pytest

from gpx_analyzer.errors import CancellationRequested
from gpx_analyzer.filters import (
    apply_criteria,
    filter_by_speed_range,
    filter_by_time_range,
    remove_outliers,
)
from gpx_analyzer.models import (
    OutlierThresholds,
    SimplificationTolerance,
    SpeedRange,
    TimeRange,
)


@pytest.fixture
def timed_track(track_factory):
    return track_factory([100.0, 101.0, 102.0, 103.0, 104.0], interval_s=10.0)


# --- Time range ------------------------------------------------------
def test_time_range_is_inclusive(timed_track) -> None:
    start = timed_track[1].time
    end = timed_track[3].time

    kept = filter_by_time_range(timed_track, start, end)

    assert kept == timed_track[1:4]


def test_time_range_drops_untimed_points(point_factory) -> None:
    points = [point_factory(0.0, 0.0, None, 0), point_factory(0.0, 0.001)]

    kept = filter_by_time_range(points, points[0].time, points[0].time)

    assert kept == points[:1]


def test_time_range_is_idempotent(timed_track) -> None:
    start = timed_track[0].time
    end = timed_track[2].time

    once = filter_by_time_range(timed_track, start, end)
    twice = filter_by_time_range(once, start, end)

    assert twice == once


def test_time_range_returns_new_list(timed_track) -> None:
    original = list(timed_track)

    kept = filter_by_time_range(timed_track, timed_track[0].time, timed_track[-1].time)

    assert kept == timed_track
    assert kept is not timed_track
    assert timed_track == original


# --- Speed range -----------------------------------------------------
def test_speed_range_keeps_peak_scenario(peak_track) -> None:
    assert filter_by_speed_range(peak_track, 0.0, 1000.0) == peak_track


def test_speed_range_compares_with_previous_input_point(point_factory) -> None:
    points = [
        point_factory(0.0, 0.0, None, 0),
        point_factory(0.0, 0.1, None, 10),  # ~1.1 km/s, dropped
        point_factory(0.0, 0.1001, None, 20),  # ~1 m/s from the dropped point
        point_factory(0.0, 0.1002, None, 30),
    ]

    kept = filter_by_speed_range(points, 0.5, 50.0)

    assert kept == [points[0], points[2], points[3]]


def test_speed_range_keeps_points_without_usable_time(point_factory) -> None:
    points = [
        point_factory(0.0, 0.0, None, 0),
        point_factory(0.0, 0.5),  # untimed
        point_factory(0.0, 1.0, None, 0),  # previous point untimed
        point_factory(0.0, 1.5, None, 0),  # zero interval
    ]

    assert filter_by_speed_range(points, 0.0, 1.0) == points


def test_speed_range_short_sequences_pass_through(point_factory) -> None:
    single = [point_factory(0.0, 0.0, None, 0)]

    kept = filter_by_speed_range(single, 5.0, 6.0)

    assert kept == single
    assert kept is not single


# --- Outliers --------------------------------------------------------
def test_speed_spike_is_removed(point_factory) -> None:
    points = [
        point_factory(0.0, 0.0, 10.0, 0),
        point_factory(0.0, 0.1, 10.0, 10),  # ~1.1 km/s on the way in
        point_factory(0.0, 0.0002, 10.0, 1000),  # ~11 m/s back from the spike
        point_factory(0.0, 0.0004, 10.0, 1010),
    ]

    assert remove_outliers(points) == [points[0], points[2], points[3]]


def test_elevation_spike_is_removed(track_factory) -> None:
    points = track_factory([200.0, 900.0, 205.0, 210.0], interval_s=None)

    assert remove_outliers(points) == [points[0], points[2], points[3]]


def test_one_sided_elevation_jump_is_kept(track_factory) -> None:
    points = track_factory([200.0, 900.0, 950.0], interval_s=None)

    assert remove_outliers(points) == points


def test_endpoints_always_survive(track_factory) -> None:
    points = track_factory([5000.0, 0.0, 5000.0, 0.0, 5000.0], interval_s=None)

    kept = remove_outliers(points, 35.0, 100.0)

    assert kept[0] is points[0]
    assert kept[-1] is points[-1]
    assert kept == [points[0], points[-1]]


def test_outlier_thresholds_are_configurable(track_factory) -> None:
    points = track_factory([0.0, 60.0, 0.0], interval_s=None)

    assert remove_outliers(points) == points
    assert remove_outliers(points, 35.0, 50.0) == [points[0], points[2]]


def test_outliers_short_sequences_pass_through(track_factory) -> None:
    points = track_factory([0.0, 5000.0], interval_s=None)

    kept = remove_outliers(points)

    assert kept == points
    assert kept is not points


# --- Dispatch / cancellation ------------------------------------------
def test_apply_criteria_dispatches(timed_track) -> None:
    window = TimeRange(timed_track[0].time, timed_track[1].time)

    assert apply_criteria(timed_track, window) == timed_track[:2]
    assert apply_criteria(timed_track, SpeedRange(0.0, 1000.0)) == timed_track
    assert apply_criteria(timed_track, OutlierThresholds(35.0, 100.0)) == timed_track
    assert apply_criteria(timed_track, SimplificationTolerance(1000.0)) == [
        timed_track[0],
        timed_track[-1],
    ]


def test_apply_criteria_rejects_unknown_types(timed_track) -> None:
    with pytest.raises(TypeError):
        apply_criteria(timed_track, 12.5)  # type: ignore[arg-type]


def test_filters_honour_cancellation(timed_track) -> None:
    event = threading.Event()
    event.set()

    with pytest.raises(CancellationRequested):
        filter_by_time_range(
            timed_track, timed_track[0].time, timed_track[-1].time, cancel_event=event
        )
    with pytest.raises(CancellationRequested):
        filter_by_speed_range(timed_track, 0.0, 10.0, cancel_event=event)
    with pytest.raises(CancellationRequested):
        remove_outliers(timed_track, cancel_event=event)
