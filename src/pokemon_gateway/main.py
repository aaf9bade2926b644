"""
FastAPI application entry point for Pokemon Gateway.
"""

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from pokemon_gateway.api.dependencies import get_cache, get_transport
from pokemon_gateway.api.error_handlers import EXCEPTION_HANDLERS
from pokemon_gateway.api.middleware import RequestTracingMiddleware
from pokemon_gateway.api.models import ServiceInfoResponse
from pokemon_gateway.api.routes import router
from pokemon_gateway.config import settings
from pokemon_gateway.logging_config import configure_logging

# Configure structured logging before anything else logs
configure_logging(
    settings.LOG_LEVEL,
    settings.ENVIRONMENT,
    app_name=settings.APP_NAME,
    app_version=settings.APP_VERSION,
)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Pokemon Gateway",
    description="PokeAPI proxy with TTL caching, bounded retries and Prometheus metrics",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(RequestTracingMiddleware)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router)


@app.on_event("startup")
async def startup():
    """Application startup - log effective configuration."""
    cache = get_cache()
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        pokeapi_base_url=settings.POKEAPI_BASE_URL,
        cache_ttl_seconds=cache.ttl_seconds,
        max_attempts=settings.FETCH_MAX_ATTEMPTS,
        request_timeout_seconds=settings.REQUEST_TIMEOUT_SEC,
    )


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - close pooled upstream connections."""
    logger.info("Application shutdown")
    await get_transport().close()
    logger.info("Application shutdown complete")


# Prometheus metrics instrumentation (inbound requests + external_api_* metrics)
if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app, include_in_schema=False)


@app.get("/", response_model=ServiceInfoResponse)
async def root() -> ServiceInfoResponse:
    """Root endpoint with service links."""
    return ServiceInfoResponse(
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        metrics="/metrics" if settings.PROMETHEUS_ENABLED else None,
    )


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "pokemon_gateway.main:app",
        host="0.0.0.0",
        port=settings.PORT,
    )
