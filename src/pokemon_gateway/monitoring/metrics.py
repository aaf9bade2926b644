"""Custom Prometheus metrics for Pokemon Gateway.

These metrics are exposed at /metrics next to the inbound HTTP metrics
(http_requests_total, http_request_duration_seconds) produced by
prometheus-fastapi-instrumentator.
"""

from prometheus_client import Counter, Histogram

# === Upstream Call Metrics ===

external_api_requests_total = Counter(
    "external_api_requests_total",
    "External API requests by target and outcome status",
    ["target", "status"],
)
"""
Upstream attempt outcomes.

Labels:
- target: upstream name (pokeapi)
- status: 200, 404, other numeric status for terminal errors,
  retry (retryable failure followed by another attempt), error (final
  attempt failed retryably, or permanent transport failure), parse_error (undecodable 200 body)

Alert thresholds:
- WARN: rate(status="error") > 1% of lookups
- CRITICAL: rate(status="retry") > 20% of attempts
"""

external_api_request_duration_seconds = Histogram(
    "external_api_request_duration_seconds",
    "External API call duration in seconds (per attempt)",
    ["target"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
"""
Per-attempt upstream latency, observed for every attempt regardless of outcome.

Labels:
- target: upstream name (pokeapi)
"""
