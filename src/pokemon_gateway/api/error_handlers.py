"""
FastAPI exception handlers for structured error responses.

Maps classified fetch errors to HTTP status codes and renders the envelope:

    {"error": {"code": "...", "message": "...", "request_id": "..."}}
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pokemon_gateway.api.middleware import REQUEST_ID_HEADER, get_request_id
from pokemon_gateway.upstream.exceptions import (
    DecodeFailure,
    FetchCancelled,
    FetchError,
    PokemonNotFound,
    UpstreamStatusError,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_404_NOT_FOUND: "route_not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


def error_response(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    """Build the error envelope carrying the request's correlation ID.
    
    The ID is also echoed as a header: unhandled errors are rendered by
    ServerErrorMiddleware, outside RequestTracingMiddleware.
    """
    request_id = get_request_id(request)
    response = JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "request_id": request_id,
            },
        },
    )
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def fetch_error_handler(request: Request, exc: FetchError) -> JSONResponse:
    """
    Handle classified upstream lookup failures.
    
    Status and code come from the exception class:
    - PokemonNotFound -> 404 not_found
    - UpstreamStatusError -> 502 upstream_error
    - UpstreamUnavailable -> 502 upstream_unavailable
    - DecodeFailure -> 502 upstream_decode_error
    - FetchCancelled -> 504 upstream_timeout
    """
    log = logger.info if isinstance(exc, PokemonNotFound) else logger.warning
    log(
        "Upstream lookup failed",
        extra={
            "error_type": type(exc).__name__,
            "key": exc.key,
            "details": exc.details,
        },
    )
    
    return error_response(request, exc.http_status, exc.error_code, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle invalid request parameters.
    
    Maps to 400 Bad Request (client error).
    """
    logger.warning(
        "Invalid request",
        extra={"errors": exc.errors()},
    )
    
    return error_response(request, status.HTTP_400_BAD_REQUEST, "bad_request", "request validation failed")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown route, bad method, explicit 400s) as envelopes."""
    code = HTTP_ERROR_CODES.get(exc.status_code, "http_error")
    response = error_response(request, exc.status_code, code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.
    
    Maps to 500 Internal Server Error.
    """
    logger.exception(
        "Unexpected error",
        extra={"error_type": type(exc).__name__},
    )
    
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "an unexpected error occurred",
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    FetchError: fetch_error_handler,
    PokemonNotFound: fetch_error_handler,
    UpstreamStatusError: fetch_error_handler,
    UpstreamUnavailable: fetch_error_handler,
    DecodeFailure: fetch_error_handler,
    FetchCancelled: fetch_error_handler,
    RequestValidationError: request_validation_error_handler,
    StarletteHTTPException: http_exception_handler,
    Exception: generic_error_handler,
}
