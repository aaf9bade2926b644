"""
Fetch orchestration for upstream lookups.

The orchestrator runs up to N strictly sequential attempts against an
UpstreamTransport, classifies each through the retry policy, records
per-attempt metrics, and either returns a FetchResult or raises a classified
FetchError. It never reads or writes the cache; the router checks the cache
before calling ``fetch`` and stores successful results afterwards.

Usage:
    >>> from pokemon_gateway.fetch import FetchOrchestrator
    >>> orchestrator = FetchOrchestrator(transport, metrics, max_attempts=3)
    >>> result = await orchestrator.fetch("pikachu", timeout=10.0)
"""

from pokemon_gateway.fetch.orchestrator import FetchOrchestrator
from pokemon_gateway.fetch.outcome import AttemptOutcome, FetchResult

__all__ = [
    "AttemptOutcome",
    "FetchOrchestrator",
    "FetchResult",
]
