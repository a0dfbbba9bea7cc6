"""Service layer package.

Exports document-level services consumed by orchestration / presentation layers.
"""

from .analysis_service import AnalysisService, AnalysisServiceConfig
from .filter_service import FilterService, FilterServiceConfig

__all__ = [
    "AnalysisService",
    "AnalysisServiceConfig",
    "FilterService",
    "FilterServiceConfig",
]
