"""Monitoring and metrics instrumentation for Pokemon Gateway.

Exports the upstream-call Prometheus metrics and the MetricsSink interface
consumed by the fetch orchestrator.
"""

from pokemon_gateway.monitoring.metrics import (
    external_api_request_duration_seconds,
    external_api_requests_total,
)
from pokemon_gateway.monitoring.sink import (
    MetricsSink,
    NullMetricsSink,
    PrometheusMetricsSink,
)

__all__ = [
    "external_api_requests_total",
    "external_api_request_duration_seconds",
    "MetricsSink",
    "NullMetricsSink",
    "PrometheusMetricsSink",
]
