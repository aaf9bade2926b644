"""
API routes.

The lookup route owns the caching policy: read the cache first, call the
orchestrator only on a miss, and store successful results afterwards.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from pokemon_gateway.api.dependencies import get_cache, get_orchestrator, get_settings
from pokemon_gateway.api.models import ErrorResponse, HelloResponse
from pokemon_gateway.cache.store import TTLCache
from pokemon_gateway.config import Settings
from pokemon_gateway.fetch.orchestrator import FetchOrchestrator
from pokemon_gateway.models.pokemon import PokemonResult

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    response_class=PlainTextResponse,
    summary="Liveness check",
)
async def health() -> str:
    """Always ``ok`` while the process is serving requests."""
    return "ok"


@router.get(
    "/hello",
    response_model=HelloResponse,
    summary="Greeting",
)
async def hello(name: str = "") -> HelloResponse:
    return HelloResponse(message=f"hello {name or 'world'}")


@router.get(
    "/pokemon/{name}",
    response_model=PokemonResult,
    summary="Look up a pokemon",
    description="""
    Returns name, height, weight and base experience for a pokemon.
    
    Served from the in-process cache when a live entry exists; otherwise
    fetched from PokeAPI with bounded retries and cached on success.
    """,
    responses={
        200: {"description": "Lookup succeeded"},
        400: {"model": ErrorResponse, "description": "Missing name"},
        404: {"model": ErrorResponse, "description": "Pokemon not found upstream"},
        502: {"model": ErrorResponse, "description": "Upstream error, bad body or retries exhausted"},
        504: {"model": ErrorResponse, "description": "Lookup deadline exceeded"},
    },
)
async def get_pokemon(
    name: str,
    cache: TTLCache = Depends(get_cache),
    orchestrator: FetchOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings),
) -> PokemonResult:
    """
    Cache-first pokemon lookup.
    
    Args:
        name: Pokemon name (cache key and upstream path segment)
        cache: Process-wide TTL cache (injected)
        orchestrator: Fetch orchestrator (injected)
        settings: Application settings (injected)
    
    Returns:
        PokemonResult from cache or upstream
    """
    if not name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="name is required")

    cached, found = cache.get(name)
    if found:
        logger.debug("Cache hit", key=name)
        return cached

    logger.debug("Cache miss", key=name)
    # FetchError subclasses propagate to the exception handlers
    result = await orchestrator.fetch(name, timeout=settings.REQUEST_TIMEOUT_SEC)
    cache.set(name, result.pokemon)
    return result.pokemon
