"""
API-specific response models for FastAPI endpoints.

Successful lookups return PokemonResult directly; these models cover the
remaining endpoints and the error envelope.
"""

from typing import Optional

from pydantic import BaseModel, Field


class HelloResponse(BaseModel):
    """Response for greeting endpoint."""
    
    message: str = Field(
        description="Greeting",
        examples=["hello world"]
    )


class ServiceInfoResponse(BaseModel):
    """Response for root endpoint."""
    
    service: str
    version: str
    health: str = "/health"
    metrics: Optional[str] = None


class ErrorBody(BaseModel):
    """Error details inside the envelope."""
    
    code: str = Field(
        description="Stable machine-readable error code",
        examples=["not_found", "upstream_error", "upstream_unavailable", "upstream_timeout"]
    )
    message: str = Field(
        description="Human-readable error message"
    )
    request_id: Optional[str] = Field(
        default=None,
        description="Correlation ID of the failed request (X-Request-ID)"
    )


class ErrorResponse(BaseModel):
    """Standard error envelope: {"error": {"code", "message", "request_id"}}."""
    
    error: ErrorBody
