"""
Classified errors for upstream lookups.

Only these exceptions leave the fetch orchestrator. Transient failures are
retried internally and never escape on their own; what crosses the boundary
is the final classification. Each class carries the HTTP status and stable
error code the router uses to build its response.
"""


class FetchError(Exception):
    """
    Base exception for all classified fetch failures.
    
    Attributes:
        key: Lookup key the fetch was for
        message: Human-readable description
        details: Diagnostic context (attempts, last reason, upstream status)
    """

    http_status: int = 502
    error_code: str = "upstream_error"

    def __init__(self, key: str, message: str, details: dict | None = None):
        super().__init__(message)
        self.key = key
        self.message = message
        self.details = details or {}


class PokemonNotFound(FetchError):
    """Upstream answered 404. Never retried."""

    http_status = 404
    error_code = "not_found"

    def __init__(self, key: str):
        super().__init__(key, "pokemon not found", {"upstream_status": 404})


class UpstreamStatusError(FetchError):
    """
    Upstream returned a non-retryable error status, or failed in a way that
    cannot succeed on retry.
    
    ``upstream_status`` is None when no response was received (permanent
    transport error).
    """

    error_code = "upstream_error"

    def __init__(self, key: str, upstream_status: int | None, reason: str):
        if upstream_status is not None:
            message = f"upstream returned status {upstream_status}"
        else:
            message = f"failed to call upstream: {reason}"
        super().__init__(key, message, {"upstream_status": upstream_status, "reason": reason})
        self.upstream_status = upstream_status
        self.reason = reason


class UpstreamUnavailable(FetchError):
    """
    Every attempt failed with a retryable outcome.
    
    Only the last failure is kept for diagnostics.
    """

    error_code = "upstream_unavailable"

    def __init__(
        self,
        key: str,
        last_reason: str,
        attempts: int,
        last_status: int | None = None,
    ):
        super().__init__(
            key,
            f"upstream retries exhausted after {attempts} attempts: {last_reason}",
            {"attempts": attempts, "last_reason": last_reason, "upstream_status": last_status},
        )
        self.last_reason = last_reason
        self.last_status = last_status
        self.attempts = attempts


class FetchCancelled(FetchError):
    """
    The caller's deadline fired while a request or backoff sleep was in flight.
    
    Not an upstream failure: never retried and not counted in upstream metrics.
    """

    http_status = 504
    error_code = "upstream_timeout"

    def __init__(self, key: str, timeout: float | None, attempts: int):
        super().__init__(
            key,
            f"lookup deadline of {timeout}s exceeded",
            {"timeout": timeout, "attempts": attempts},
        )
        self.timeout = timeout
        self.attempts = attempts


class DecodeFailure(FetchError):
    """A 200 response body did not match the expected shape. Never retried."""

    error_code = "upstream_decode_error"

    def __init__(self, key: str, reason: str):
        super().__init__(key, f"failed to parse response: {reason}", {"reason": reason})
        self.reason = reason
