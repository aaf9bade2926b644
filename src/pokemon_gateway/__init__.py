"""
Pokemon Gateway: a resilient HTTP proxy in front of PokeAPI.

Adds to the upstream lookup API:
- An in-process TTL cache (safe under concurrent readers and writers)
- Bounded retry with exponential backoff and jitter
- Per-request correlation IDs (X-Request-ID)
- Prometheus metrics for inbound requests and upstream calls

Architecture: FastAPI router + cache-first lookup + fetch orchestrator over an httpx transport
"""

__version__ = "0.1.0"
