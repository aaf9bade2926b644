"""
Upstream transport layer (PokeAPI).

- base_client.py: UpstreamTransport abstraction and RawResponse
- pokeapi_client.py: httpx-based PokeAPI implementation
- exceptions.py: classified fetch errors surfaced to the router
"""

from pokemon_gateway.upstream.base_client import RawResponse, UpstreamTransport
from pokemon_gateway.upstream.exceptions import (
    DecodeFailure,
    FetchCancelled,
    FetchError,
    PokemonNotFound,
    UpstreamStatusError,
    UpstreamUnavailable,
)
from pokemon_gateway.upstream.pokeapi_client import PokeAPIClient

__all__ = [
    "RawResponse",
    "UpstreamTransport",
    "PokeAPIClient",
    "FetchError",
    "PokemonNotFound",
    "UpstreamStatusError",
    "UpstreamUnavailable",
    "FetchCancelled",
    "DecodeFailure",
]
