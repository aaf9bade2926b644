"""
FastAPI dependency injection for Pokemon Gateway.

Provides process-wide singletons for the shared state (cache, metrics sink,
upstream transport) and a per-request factory for the fetch orchestrator.
Tests swap any of these through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from pokemon_gateway.cache.store import TTLCache
from pokemon_gateway.config import Settings, settings
from pokemon_gateway.fetch.orchestrator import FetchOrchestrator
from pokemon_gateway.monitoring.sink import MetricsSink, NullMetricsSink, PrometheusMetricsSink
from pokemon_gateway.upstream.base_client import UpstreamTransport
from pokemon_gateway.upstream.pokeapi_client import PokeAPIClient


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.
    
    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_cache() -> TTLCache:
    """
    Get the process-wide lookup cache.
    
    Lives for the whole process; entries are plain data so no teardown is needed.
    """
    return TTLCache(ttl_seconds=get_settings().POKEMON_CACHE_TTL_SEC)


@lru_cache()
def get_metrics_sink() -> MetricsSink:
    """Get the upstream metrics sink (no-op when Prometheus is disabled)."""
    if get_settings().PROMETHEUS_ENABLED:
        return PrometheusMetricsSink()
    return NullMetricsSink()


@lru_cache()
def get_transport() -> UpstreamTransport:
    """
    Get singleton PokeAPI transport with connection pooling.
    
    Returns:
        PokeAPIClient instance
    """
    current = get_settings()
    return PokeAPIClient(
        base_url=current.POKEAPI_BASE_URL,
        timeout=current.HTTP_TIMEOUT_SEC,
    )


def get_orchestrator(
    transport: UpstreamTransport = Depends(get_transport),
    metrics: MetricsSink = Depends(get_metrics_sink),
    settings: Settings = Depends(get_settings),
) -> FetchOrchestrator:
    """
    Create fetch orchestrator with injected dependencies.
    
    Note: not cached; the orchestrator is lightweight and holds no
    cross-request state. Transport and metrics sink are singletons.
    """
    return FetchOrchestrator(
        transport=transport,
        metrics=metrics,
        max_attempts=settings.FETCH_MAX_ATTEMPTS,
    )
