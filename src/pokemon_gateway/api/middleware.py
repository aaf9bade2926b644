"""FastAPI middleware for request tracing and access logging."""

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def generate_request_id() -> str:
    """New correlation ID: 16 random bytes, hex encoded (32 chars)."""
    return uuid.uuid4().hex


def get_request_id(request: Request) -> str | None:
    """Correlation ID assigned to ``request`` by RequestTracingMiddleware."""
    return getattr(request.state, "request_id", None)


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Middleware to add request ID tracing to all requests.
    
    Features:
    - Reuses the inbound X-Request-ID header, or generates a new ID
    - Stores the ID on request.state for handlers and error envelopes
    - Binds request_id to structlog context (appears in all logs)
    - Echoes X-Request-ID on the response
    - Logs request start/end with route, status and duration (access log)
    """
    
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        """Process request with tracing context."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        request.state.request_id = request_id
        
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_host=request.client.host if request.client else None,
        )
        
        logger.debug(
            "Request started",
            query_params=dict(request.query_params) if request.query_params else None,
        )
        
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000
            
            route = request.scope.get("route")
            logger.info(
                "Request completed",
                route=getattr(route, "path", request.url.path),
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
            
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
            
        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "Request failed",
                exc_info=exc,
                duration_ms=round(duration_ms, 2),
            )
            raise
        
        finally:
            # Prevent context leakage to other requests
            structlog.contextvars.clear_contextvars()
