"""Central configuration for the GPX analysis engine.

All values are constants imported by the rest of the package. Each one can be
overridden through an environment variable of the same name (optionally via a
local `.env`). Callers needing per-call overrides pass an
:class:`AnalysisSettings` instance or explicit keyword arguments instead.
"""

from __future__ import annotations

from dataclasses import dataclass
import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except ImportError:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Geodesy
# ---------------------------------------------------------------------------
# Iteration cap for the Vincenty inverse formula before falling back to
# the haversine great-circle distance.
VINCENTY_MAX_ITERATIONS = _env_int("VINCENTY_MAX_ITERATIONS", 100)

# Convergence threshold on the lambda update (radians).
VINCENTY_CONVERGENCE_TOLERANCE = 1e-12


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------
# Smoothed elevation steps at or below this size (metres) are treated as
# altimeter noise and ignored for ascent/descent/grade.
ELEVATION_NOISE_THRESHOLD_M = _env_float("ELEVATION_NOISE_THRESHOLD_M", 2.0)

# Below this speed (m/s) an interval counts as stopped for moving time.
MOVING_SPEED_THRESHOLD_MS = _env_float("MOVING_SPEED_THRESHOLD_MS", 0.5)

# Pair speeds at or above this value (m/s, ~360 km/h) are GPS errors.
MAX_REASONABLE_SPEED_MS = _env_float("MAX_REASONABLE_SPEED_MS", 100.0)

# Horizontal distance (metres) a step must cover before a grade is derived.
MIN_GRADE_DISTANCE_M = _env_float("MIN_GRADE_DISTANCE_M", 1.0)

# Centred moving-average window used to smooth elevations.
ELEVATION_SMOOTHING_WINDOW = _env_int("ELEVATION_SMOOTHING_WINDOW", 3)

# Number of samples in the generated elevation profile.
ELEVATION_PROFILE_POINTS = _env_int("ELEVATION_PROFILE_POINTS", 100)


# ---------------------------------------------------------------------------
# Filtering / simplification
# ---------------------------------------------------------------------------
# Maximum deviation (metres) allowed when simplifying a point sequence.
SIMPLIFICATION_TOLERANCE_M = _env_float("SIMPLIFICATION_TOLERANCE_M", 10.0)

# Defaults for the outlier filter.
OUTLIER_SPEED_THRESHOLD_MS = _env_float("OUTLIER_SPEED_THRESHOLD_MS", 35.0)
OUTLIER_ELEVATION_THRESHOLD_M = _env_float("OUTLIER_ELEVATION_THRESHOLD_M", 100.0)


# ---------------------------------------------------------------------------
# Performance tuning
# ---------------------------------------------------------------------------
# Threads used when analysing several documents in parallel.
MAX_WORKERS = _env_int("MAX_WORKERS", 4)


@dataclass(slots=True)
class AnalysisSettings:
    """Tunable thresholds for the statistics engine."""

    elevation_noise_threshold_m: float = ELEVATION_NOISE_THRESHOLD_M
    moving_speed_threshold_ms: float = MOVING_SPEED_THRESHOLD_MS
    max_reasonable_speed_ms: float = MAX_REASONABLE_SPEED_MS
    min_grade_distance_m: float = MIN_GRADE_DISTANCE_M
    smoothing_window: int = ELEVATION_SMOOTHING_WINDOW
    profile_point_count: int = ELEVATION_PROFILE_POINTS

    def __post_init__(self) -> None:
        if self.smoothing_window < 1:
            raise ValueError("smoothing_window must be at least 1")
        if self.profile_point_count < 2:
            raise ValueError("profile_point_count must be at least 2")
