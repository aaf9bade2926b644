"""
Normalized lookup result returned to callers and stored in the cache.

PokeAPI returns a large document per pokemon; only the four fields below
are kept. Anything else in the upstream body is ignored on decode.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PokemonResult(BaseModel):
    """
    Immutable lookup result.
    
    Frozen so that a cached instance can be handed to any number of
    concurrent requests without copying.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")
    
    name: str = Field(..., description="Pokemon name as reported upstream", examples=["pikachu"])
    height: int = Field(..., description="Height in decimetres", examples=[4])
    weight: int = Field(..., description="Weight in hectograms", examples=[60])
    base_experience: int = Field(..., description="Base experience yield", examples=[112])

    @field_validator("height", "weight", "base_experience", mode="before")
    @classmethod
    def null_stat_as_zero(cls, v: Any) -> Any:
        """PokeAPI reports unknown stats as null (e.g. base_experience of newer forms)."""
        return 0 if v is None else v
