"""Document analysis service.

Wraps the statistics engine so callers holding whole documents (CLI, web
handlers, batch jobs) depend on a stable service API. The engine itself is
pure; this layer adds logging and optional parallelism across documents.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
import logging
import threading
from typing import List, Sequence

from ..analysis.statistics import analyze
from ..cancellation import raise_if_cancelled
from ..config import MAX_WORKERS, AnalysisSettings
from ..errors import CancellationRequested
from ..models import AnalysisResult, GpsDocument


@dataclass(slots=True)
class AnalysisServiceConfig:
    settings: AnalysisSettings = field(default_factory=AnalysisSettings)
    max_workers: int = MAX_WORKERS
    logger: logging.Logger | None = None


class AnalysisService:
    def __init__(self, config: AnalysisServiceConfig | None = None):
        self.config = config or AnalysisServiceConfig()
        if self.config.max_workers <= 0:
            raise ValueError("max_workers must be positive")
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)

    def analyze(
        self,
        document: GpsDocument,
        cancel_event: threading.Event | None = None,
    ) -> AnalysisResult:
        self._log.info(
            "Analysing document %s with %d tracks, %d routes and %d waypoints",
            document.name or "<unnamed>",
            len(document.tracks),
            len(document.routes),
            len(document.waypoints),
        )
        try:
            result = analyze(
                document.sequences(),
                settings=self.config.settings,
                cancel_event=cancel_event,
            )
        except CancellationRequested:
            self._log.info("Analysis of %s cancelled", document.name or "<unnamed>")
            raise
        except Exception:
            self._log.error(
                "Error analysing document %s",
                document.name or "<unnamed>",
                exc_info=True,
            )
            raise
        self._log.info(
            "Analysis completed. Total distance: %.2f km", result.total_distance_km
        )
        return result

    def analyze_many(
        self,
        documents: Sequence[GpsDocument],
        cancel_event: threading.Event | None = None,
    ) -> List[AnalysisResult]:
        """Analyse ``documents`` on worker threads, returning results in input order."""

        if not documents:
            return []
        raise_if_cancelled(cancel_event)
        workers = min(self.config.max_workers, len(documents))
        self._log.debug(
            "Analysing %d documents with %d workers", len(documents), workers
        )
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self.analyze, document, cancel_event)
                for document in documents
            ]
            return [future.result() for future in futures]


__all__ = ["AnalysisService", "AnalysisServiceConfig"]
