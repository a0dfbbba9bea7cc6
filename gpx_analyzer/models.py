"""Dataclasses describing GPS points, documents, filter criteria and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterator, List, Optional, Union


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Single geolocated sample: a track point, route point or waypoint."""

    latitude: float
    longitude: float
    elevation: Optional[float] = None
    time: Optional[datetime] = None
    name: Optional[str] = None
    description: Optional[str] = None
    symbol: Optional[str] = None

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")

    @property
    def has_elevation(self) -> bool:
        return self.elevation is not None

    @property
    def has_time(self) -> bool:
        return self.time is not None


# Ordered points of a track segment or route; order defines the geometry.
PointSequence = List[GeoPoint]


@dataclass(slots=True)
class TrackSegment:
    points: PointSequence = field(default_factory=list)


@dataclass(slots=True)
class Track:
    name: Optional[str] = None
    description: Optional[str] = None
    segments: List[TrackSegment] = field(default_factory=list)


@dataclass(slots=True)
class Route:
    name: Optional[str] = None
    description: Optional[str] = None
    points: PointSequence = field(default_factory=list)


@dataclass(slots=True)
class GpsDocument:
    """Parsed contents of a GPS exchange document, as supplied by a reader."""

    name: Optional[str] = None
    waypoints: PointSequence = field(default_factory=list)
    routes: List[Route] = field(default_factory=list)
    tracks: List[Track] = field(default_factory=list)

    def sequences(self) -> Iterator[PointSequence]:
        """Yield every track segment in document order, then every route."""

        for track in self.tracks:
            for segment in track.segments:
                yield segment.points
        for route in self.routes:
            yield route.points


@dataclass(slots=True)
class ElevationPoint:
    """One sample of the resampled elevation profile."""

    distance_m: float
    elevation_m: float
    grade_pct: float = 0.0


@dataclass(slots=True)
class AnalysisResult:
    """Aggregate statistics folded over every analysed sequence."""

    total_distance_m: float = 0.0
    total_time: timedelta = timedelta(0)
    moving_time: timedelta = timedelta(0)
    average_speed_ms: float = 0.0
    max_speed_ms: float = 0.0
    total_ascent_m: float = 0.0
    total_descent_m: float = 0.0
    # 0.0 doubles as "not set yet" for the running minimum.
    min_elevation_m: float = 0.0
    max_elevation_m: float = 0.0
    average_grade_pct: float = 0.0
    max_grade_pct: float = 0.0
    elevation_profile: List[ElevationPoint] = field(default_factory=list)

    @property
    def total_distance_km(self) -> float:
        return self.total_distance_m / 1000.0

    @property
    def has_elevation_profile(self) -> bool:
        return bool(self.elevation_profile)


@dataclass(frozen=True, slots=True)
class TimeRange:
    start: datetime
    end: datetime


@dataclass(frozen=True, slots=True)
class SpeedRange:
    min_speed_ms: float
    max_speed_ms: float


@dataclass(frozen=True, slots=True)
class OutlierThresholds:
    speed_threshold_ms: float
    elevation_threshold_m: float


@dataclass(frozen=True, slots=True)
class SimplificationTolerance:
    tolerance_m: float


FilterCriteria = Union[TimeRange, SpeedRange, OutlierThresholds, SimplificationTolerance]


__all__ = [
    "GeoPoint",
    "PointSequence",
    "TrackSegment",
    "Track",
    "Route",
    "GpsDocument",
    "ElevationPoint",
    "AnalysisResult",
    "TimeRange",
    "SpeedRange",
    "OutlierThresholds",
    "SimplificationTolerance",
    "FilterCriteria",
]
