"""
Unit tests for the metrics sinks.
"""

from unittest.mock import patch

import pytest
from prometheus_client import REGISTRY

from pokemon_gateway.monitoring.sink import NullMetricsSink, PrometheusMetricsSink


def sample(name: str, labels: dict) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_prometheus_sink_counts_requests():
    sink = PrometheusMetricsSink()
    labels = {"target": "unit-test", "status": "200"}
    before = sample("external_api_requests_total", labels)

    sink.record_request("unit-test", "200")
    sink.record_request("unit-test", "200")

    assert sample("external_api_requests_total", labels) == before + 2


def test_prometheus_sink_observes_duration():
    sink = PrometheusMetricsSink()
    labels = {"target": "unit-test"}
    count_before = sample("external_api_request_duration_seconds_count", labels)
    sum_before = sample("external_api_request_duration_seconds_sum", labels)

    sink.observe_duration("unit-test", 0.25)

    assert sample("external_api_request_duration_seconds_count", labels) == count_before + 1
    assert sample("external_api_request_duration_seconds_sum", labels) == pytest.approx(sum_before + 0.25)


def test_prometheus_sink_never_raises():
    sink = PrometheusMetricsSink()

    with patch("pokemon_gateway.monitoring.sink.external_api_requests_total") as counter, patch(
        "pokemon_gateway.monitoring.sink.external_api_request_duration_seconds"
    ) as histogram:
        counter.labels.side_effect = RuntimeError("registry broken")
        histogram.labels.side_effect = RuntimeError("registry broken")

        sink.record_request("unit-test", "200")
        sink.observe_duration("unit-test", 0.1)


def test_null_sink_accepts_everything():
    sink = NullMetricsSink()

    sink.record_request("unit-test", "200")
    sink.observe_duration("unit-test", 1.0)
