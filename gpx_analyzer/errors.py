"""Central error types used across the application."""

from __future__ import annotations


class GpsAnalysisError(RuntimeError):
    """Base error for GPS analysis and filtering failures."""


class CancellationRequested(GpsAnalysisError):
    """Raised when a caller signals cancellation while an operation is running.

    Always propagated; operations never return partial results after it.
    """


class InsufficientDataError(GpsAnalysisError):
    """Raised when too few elevation samples exist to build a profile."""


__all__ = [
    "GpsAnalysisError",
    "CancellationRequested",
    "InsufficientDataError",
]
