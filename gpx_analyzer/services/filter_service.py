"""Document filter service.

Applies the point filters and the simplifier to every route and track
segment of a document and returns a new document. Routes, segments and
tracks left without points by a filter are dropped; simplification never
empties a container so it keeps them all. Waypoints are standalone points
of interest: only the time filter applies to them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import logging
import threading
from typing import Callable, List

from ..cancellation import raise_if_cancelled
from ..config import (
    OUTLIER_ELEVATION_THRESHOLD_M,
    OUTLIER_SPEED_THRESHOLD_MS,
    SIMPLIFICATION_TOLERANCE_M,
)
from ..errors import CancellationRequested
from ..filters import (
    apply_criteria,
    filter_by_speed_range,
    filter_by_time_range,
    remove_outliers,
)
from ..geometry.simplify import simplify
from ..models import (
    FilterCriteria,
    GeoPoint,
    GpsDocument,
    Route,
    SimplificationTolerance,
    TimeRange,
    Track,
    TrackSegment,
)

PointFilter = Callable[[List[GeoPoint]], List[GeoPoint]]


@dataclass(slots=True)
class FilterServiceConfig:
    logger: logging.Logger | None = None


class FilterService:
    def __init__(self, config: FilterServiceConfig | None = None):
        self.config = config or FilterServiceConfig()
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)

    def filter_by_time_range(
        self,
        document: GpsDocument,
        start: datetime,
        end: datetime,
        cancel_event: threading.Event | None = None,
    ) -> GpsDocument:
        self._log.info("Filtering document by time range: %s to %s", start, end)
        return self._run(
            "time range filtering",
            document,
            lambda points: filter_by_time_range(
                points, start, end, cancel_event=cancel_event
            ),
            cancel_event,
            filter_waypoints=True,
        )

    def filter_by_speed_range(
        self,
        document: GpsDocument,
        min_speed_ms: float,
        max_speed_ms: float,
        cancel_event: threading.Event | None = None,
    ) -> GpsDocument:
        self._log.info(
            "Filtering document by speed range: %s m/s to %s m/s",
            min_speed_ms,
            max_speed_ms,
        )
        return self._run(
            "speed range filtering",
            document,
            lambda points: filter_by_speed_range(
                points, min_speed_ms, max_speed_ms, cancel_event=cancel_event
            ),
            cancel_event,
        )

    def remove_outliers(
        self,
        document: GpsDocument,
        speed_threshold_ms: float = OUTLIER_SPEED_THRESHOLD_MS,
        elevation_threshold_m: float = OUTLIER_ELEVATION_THRESHOLD_M,
        cancel_event: threading.Event | None = None,
    ) -> GpsDocument:
        self._log.info(
            "Removing outliers with speed threshold %s m/s and elevation threshold %s m",
            speed_threshold_ms,
            elevation_threshold_m,
        )
        return self._run(
            "outlier removal",
            document,
            lambda points: remove_outliers(
                points,
                speed_threshold_ms,
                elevation_threshold_m,
                cancel_event=cancel_event,
            ),
            cancel_event,
        )

    def simplify(
        self,
        document: GpsDocument,
        tolerance_m: float = SIMPLIFICATION_TOLERANCE_M,
        cancel_event: threading.Event | None = None,
    ) -> GpsDocument:
        self._log.info("Simplifying document with tolerance %s m", tolerance_m)
        return self._run(
            "simplification",
            document,
            lambda points: simplify(points, tolerance_m, cancel_event=cancel_event),
            cancel_event,
            drop_empty=False,
        )

    def apply(
        self,
        document: GpsDocument,
        criteria: FilterCriteria,
        cancel_event: threading.Event | None = None,
    ) -> GpsDocument:
        """Apply any :data:`FilterCriteria` value to ``document``."""

        self._log.info("Applying %s to document", type(criteria).__name__)
        return self._run(
            type(criteria).__name__,
            document,
            lambda points: apply_criteria(points, criteria, cancel_event=cancel_event),
            cancel_event,
            filter_waypoints=isinstance(criteria, TimeRange),
            drop_empty=not isinstance(criteria, SimplificationTolerance),
        )

    def _run(
        self,
        label: str,
        document: GpsDocument,
        point_filter: PointFilter,
        cancel_event: threading.Event | None,
        *,
        filter_waypoints: bool = False,
        drop_empty: bool = True,
    ) -> GpsDocument:
        try:
            filtered = _filter_document(
                document, point_filter, cancel_event, filter_waypoints, drop_empty
            )
        except CancellationRequested:
            self._log.info("Cancelled during %s", label)
            raise
        except Exception:
            self._log.error("Error during %s", label, exc_info=True)
            raise
        self._log.info(
            "Completed %s: kept %d waypoints, %d routes, %d tracks",
            label,
            len(filtered.waypoints),
            len(filtered.routes),
            len(filtered.tracks),
        )
        return filtered


def _filter_document(
    document: GpsDocument,
    point_filter: PointFilter,
    cancel_event: threading.Event | None,
    filter_waypoints: bool,
    drop_empty: bool,
) -> GpsDocument:
    waypoints = list(document.waypoints)
    if filter_waypoints:
        waypoints = point_filter(waypoints)

    routes: List[Route] = []
    for route in document.routes:
        raise_if_cancelled(cancel_event)
        points = point_filter(list(route.points))
        if points or not drop_empty:
            routes.append(
                Route(name=route.name, description=route.description, points=points)
            )

    tracks: List[Track] = []
    for track in document.tracks:
        segments: List[TrackSegment] = []
        for segment in track.segments:
            raise_if_cancelled(cancel_event)
            points = point_filter(list(segment.points))
            if points or not drop_empty:
                segments.append(TrackSegment(points=points))
        if segments or not drop_empty:
            tracks.append(
                Track(name=track.name, description=track.description, segments=segments)
            )

    return GpsDocument(
        name=document.name, waypoints=waypoints, routes=routes, tracks=tracks
    )


__all__ = ["FilterService", "FilterServiceConfig"]
