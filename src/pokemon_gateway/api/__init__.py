"""
FastAPI API routes and endpoints.

- routes.py: GET /health, GET /hello, GET /pokemon/{name}
- dependencies.py: Dependency injection for cache, transport, orchestrator
- middleware.py: Request ID propagation and access logging
- models.py: API-specific response models
- error_handlers.py: Exception handlers for the error envelope
"""

from pokemon_gateway.api import dependencies, error_handlers, models
from pokemon_gateway.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
