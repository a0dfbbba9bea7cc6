"""GPS track analysis and simplification engine."""

from .analysis import analyze, analyze_document, smooth_elevations
from .config import AnalysisSettings
from .errors import CancellationRequested, GpsAnalysisError, InsufficientDataError
from .filters import (
    apply_criteria,
    filter_by_speed_range,
    filter_by_time_range,
    remove_outliers,
)
from .geometry import distance, simplify
from .models import (
    AnalysisResult,
    ElevationPoint,
    GeoPoint,
    GpsDocument,
    OutlierThresholds,
    Route,
    SimplificationTolerance,
    SpeedRange,
    TimeRange,
    Track,
    TrackSegment,
)
from .services import AnalysisService, FilterService

__all__ = [
    "analyze",
    "analyze_document",
    "smooth_elevations",
    "AnalysisSettings",
    "CancellationRequested",
    "GpsAnalysisError",
    "InsufficientDataError",
    "apply_criteria",
    "filter_by_speed_range",
    "filter_by_time_range",
    "remove_outliers",
    "distance",
    "simplify",
    "AnalysisResult",
    "ElevationPoint",
    "GeoPoint",
    "GpsDocument",
    "OutlierThresholds",
    "Route",
    "SimplificationTolerance",
    "SpeedRange",
    "TimeRange",
    "Track",
    "TrackSegment",
    "AnalysisService",
    "FilterService",
]
