"""Trip statistics folded over one or more point sequences.

Each sequence (track segment or route) with at least two points contributes
to a single shared :class:`AnalysisResult`. Distance, ascent, descent and
moving time add up across sequences; total time keeps the longest single
span; max speed and max grade keep the extreme value seen so far. The
elevation profile is built once at the end over all sequences pooled.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
import logging
import threading
from typing import Iterable, List, Sequence

from ..cancellation import raise_if_cancelled
from ..config import AnalysisSettings
from ..errors import InsufficientDataError
from ..geometry.distance import distance
from ..models import AnalysisResult, GeoPoint, GpsDocument
from .profile import generate_elevation_profile
from .smoothing import smooth_elevations

_LOG = logging.getLogger(__name__)

# Added to the running distance before weighting the average grade.
_GRADE_WEIGHT_EPSILON_M = 0.1


@dataclass(slots=True)
class _ElevationSummary:
    """Per-sequence elevation figures before they are folded into the result."""

    ascent_m: float = 0.0
    descent_m: float = 0.0
    min_elevation_m: float = float("inf")
    max_elevation_m: float = float("-inf")
    max_grade_pct: float = 0.0
    weighted_grade_sum: float = 0.0
    graded_distance_m: float = 0.0


def analyze(
    sequences: Iterable[Sequence[GeoPoint]],
    *,
    settings: AnalysisSettings | None = None,
    cancel_event: threading.Event | None = None,
) -> AnalysisResult:
    """Compute aggregate statistics over ``sequences``.

    Sequences with fewer than two points are skipped entirely. Time, speed
    and elevation metrics are only computed for sequences where every point
    carries the corresponding field.

    Raises:
        CancellationRequested: ``cancel_event`` was set during the run.
    """

    settings = settings or AnalysisSettings()
    materialised = [list(points) for points in sequences]
    result = AnalysisResult()
    analysed = 0
    for points in materialised:
        raise_if_cancelled(cancel_event)
        if len(points) < 2:
            continue
        _analyze_sequence(points, result, settings, cancel_event)
        analysed += 1

    if result.total_distance_m > 0 and result.max_elevation_m > result.min_elevation_m:
        try:
            result.elevation_profile = generate_elevation_profile(
                materialised,
                settings.profile_point_count,
                smoothing_window=settings.smoothing_window,
                cancel_event=cancel_event,
            )
        except InsufficientDataError as exc:
            _LOG.debug("Skipping elevation profile: %s", exc)
    _LOG.debug(
        "Analysed %d of %d sequences: distance=%.1fm ascent=%.1fm descent=%.1fm",
        analysed,
        len(materialised),
        result.total_distance_m,
        result.total_ascent_m,
        result.total_descent_m,
    )
    return result


def analyze_document(
    document: GpsDocument,
    *,
    settings: AnalysisSettings | None = None,
    cancel_event: threading.Event | None = None,
) -> AnalysisResult:
    """Analyse every track segment and route of ``document``."""

    return analyze(document.sequences(), settings=settings, cancel_event=cancel_event)


def _analyze_sequence(
    points: List[GeoPoint],
    result: AnalysisResult,
    settings: AnalysisSettings,
    cancel_event: threading.Event | None,
) -> None:
    sequence_distance = _sequence_distance(points, cancel_event)
    result.total_distance_m += sequence_distance

    all_timed = all(point.time is not None for point in points)
    if all_timed:
        _apply_time_metrics(points, result, settings, cancel_event)
    if all(point.elevation is not None for point in points):
        _apply_elevation_metrics(points, result, settings, cancel_event)
    if all_timed and sequence_distance > 0:
        _apply_speed_metrics(points, result, settings, cancel_event)


def _sequence_distance(
    points: List[GeoPoint], cancel_event: threading.Event | None
) -> float:
    total = 0.0
    for previous, current in zip(points, points[1:]):
        raise_if_cancelled(cancel_event)
        total += distance(previous, current)
    return total


def _apply_time_metrics(
    points: List[GeoPoint],
    result: AnalysisResult,
    settings: AnalysisSettings,
    cancel_event: threading.Event | None,
) -> None:
    times = sorted(point.time for point in points)
    span = times[-1] - times[0]
    # Longest single span wins; spans of separate sequences are not summed.
    if result.total_time == timedelta(0) or span > result.total_time:
        result.total_time = span

    moving = timedelta(0)
    for previous, current in zip(points, points[1:]):
        raise_if_cancelled(cancel_event)
        delta = current.time - previous.time
        seconds = delta.total_seconds()
        if seconds <= 0:
            continue
        speed = distance(previous, current) / seconds
        if speed >= settings.moving_speed_threshold_ms:
            moving += delta
    result.moving_time += moving


def _apply_elevation_metrics(
    points: List[GeoPoint],
    result: AnalysisResult,
    settings: AnalysisSettings,
    cancel_event: threading.Event | None,
) -> None:
    smoothed = smooth_elevations(points, settings.smoothing_window)
    summary = _summarise_elevation(points, smoothed, settings, cancel_event)

    # 0.0 doubles as "unset": a genuine 0 m minimum is replaced by the next
    # sequence's minimum.
    if result.min_elevation_m == 0 or summary.min_elevation_m < result.min_elevation_m:
        result.min_elevation_m = summary.min_elevation_m
    if summary.max_elevation_m > result.max_elevation_m:
        result.max_elevation_m = summary.max_elevation_m
    result.total_ascent_m += summary.ascent_m
    result.total_descent_m += summary.descent_m
    if abs(summary.max_grade_pct) > abs(result.max_grade_pct):
        result.max_grade_pct = summary.max_grade_pct

    if summary.graded_distance_m > 0:
        sequence_grade = summary.weighted_grade_sum / summary.graded_distance_m
        # Order-dependent blend: later sequences only move the
        # average when they cover more than half of the distance so far, and
        # are weighted against the running total rather than a true mean.
        if (
            result.average_grade_pct == 0
            or summary.graded_distance_m > result.total_distance_m / 2
        ):
            weight = summary.graded_distance_m / (
                result.total_distance_m + _GRADE_WEIGHT_EPSILON_M
            )
            result.average_grade_pct = (
                result.average_grade_pct * (1 - weight) + sequence_grade * weight
            )


def _summarise_elevation(
    points: List[GeoPoint],
    smoothed: List[float],
    settings: AnalysisSettings,
    cancel_event: threading.Event | None,
) -> _ElevationSummary:
    summary = _ElevationSummary()
    for index, elevation in enumerate(smoothed):
        raise_if_cancelled(cancel_event)
        summary.min_elevation_m = min(summary.min_elevation_m, elevation)
        summary.max_elevation_m = max(summary.max_elevation_m, elevation)
        if index == 0:
            continue
        diff = elevation - smoothed[index - 1]
        if abs(diff) <= settings.elevation_noise_threshold_m:
            continue
        if diff > 0:
            summary.ascent_m += diff
        else:
            summary.descent_m += -diff

        # Grade uses the horizontal distance between the raw points.
        step_distance = distance(points[index - 1], points[index])
        if step_distance <= settings.min_grade_distance_m:
            continue
        step_grade = diff / step_distance * 100.0
        if abs(step_grade) > abs(summary.max_grade_pct):
            summary.max_grade_pct = step_grade
        summary.weighted_grade_sum += step_grade * step_distance
        summary.graded_distance_m += step_distance
    return summary


def _apply_speed_metrics(
    points: List[GeoPoint],
    result: AnalysisResult,
    settings: AnalysisSettings,
    cancel_event: threading.Event | None,
) -> None:
    speeds: List[float] = []
    for previous, current in zip(points, points[1:]):
        raise_if_cancelled(cancel_event)
        seconds = (current.time - previous.time).total_seconds()
        if seconds <= 0:
            continue
        speed = distance(previous, current) / seconds
        # Zero and implausibly fast readings are GPS artefacts.
        if 0 < speed < settings.max_reasonable_speed_ms:
            speeds.append(speed)
    if not speeds:
        return
    result.max_speed_ms = max(result.max_speed_ms, max(speeds))
    moving_seconds = result.moving_time.total_seconds()
    if moving_seconds > 0:
        result.average_speed_ms = result.total_distance_m / moving_seconds


__all__ = ["analyze", "analyze_document"]
