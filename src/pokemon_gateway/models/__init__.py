"""
Pydantic data models for Pokemon Gateway.

Includes:
- PokemonResult (normalized upstream lookup result, immutable)
"""

from pokemon_gateway.models.pokemon import PokemonResult

__all__ = [
    "PokemonResult",
]
