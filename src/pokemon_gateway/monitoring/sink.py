"""
Metrics recording interface used by the fetch orchestrator.

Recording is fire-and-forget: a sink must never block or raise into the
request path.
"""

from typing import Protocol

import structlog

from pokemon_gateway.monitoring.metrics import (
    external_api_request_duration_seconds,
    external_api_requests_total,
)

logger = structlog.get_logger(__name__)


class MetricsSink(Protocol):
    """Narrow recording interface for upstream call metrics."""

    def record_request(self, target: str, status: str) -> None:
        """Count one upstream outcome."""
        ...

    def observe_duration(self, target: str, seconds: float) -> None:
        """Observe the latency of one upstream attempt."""
        ...


class PrometheusMetricsSink:
    """MetricsSink backed by the process-wide prometheus-client registry."""

    def record_request(self, target: str, status: str) -> None:
        try:
            external_api_requests_total.labels(target=target, status=status).inc()
        except Exception as e:
            logger.warning("Failed to record request metric", target=target, status=status, error=str(e))

    def observe_duration(self, target: str, seconds: float) -> None:
        try:
            external_api_request_duration_seconds.labels(target=target).observe(seconds)
        except Exception as e:
            logger.warning("Failed to observe duration metric", target=target, error=str(e))


class NullMetricsSink:
    """Discards everything. Used when Prometheus is disabled."""

    def record_request(self, target: str, status: str) -> None:
        pass

    def observe_duration(self, target: str, seconds: float) -> None:
        pass
