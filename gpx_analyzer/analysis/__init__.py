"""Statistics engine: smoothing, trip metrics and elevation profiles."""

from .profile import build_elevation_profile, generate_elevation_profile
from .smoothing import moving_average, smooth_elevations
from .statistics import analyze, analyze_document

__all__ = [
    "analyze",
    "analyze_document",
    "build_elevation_profile",
    "generate_elevation_profile",
    "moving_average",
    "smooth_elevations",
]
