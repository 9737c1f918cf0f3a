"""Metrics service for tracking generation requests in memory."""

import logging
from typing import Any

from clairx.models.metrics import GenerationMetrics

logger = logging.getLogger(__name__)


class MetricsService:
    """
    Service for aggregating generation metrics.

    Metrics live in process memory only and are lost on restart.
    """

    def __init__(self):
        self._metrics: list[GenerationMetrics] = []

    def record(self, metrics: GenerationMetrics) -> None:
        """
        Record a generation metrics object.

        Args:
            metrics: The metrics to record
        """
        self._metrics.append(metrics)
        logger.debug(f"📊 [MetricsService] Recorded {metrics.mode} request: "
                     f"duration={metrics.duration_ms}ms, model={metrics.model_used or 'none'}")

    def get_all(self) -> list[GenerationMetrics]:
        """Get all recorded metrics."""
        return self._metrics.copy()

    def clear(self) -> None:
        """Clear all recorded metrics."""
        self._metrics.clear()

    def summary(self) -> dict[str, Any]:
        """Get a summary of recorded metrics."""
        if not self._metrics:
            return {
                "count": 0,
                "fallback_count": 0,
                "total_duration_ms": 0,
                "avg_duration_ms": 0,
            }

        total_duration = sum(m.duration_ms for m in self._metrics)

        return {
            "count": len(self._metrics),
            "fallback_count": sum(1 for m in self._metrics if m.mode == "fallback"),
            "total_duration_ms": total_duration,
            "avg_duration_ms": total_duration / len(self._metrics),
        }
