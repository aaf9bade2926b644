"""
PokeAPI transport implementation.

Communicates with PokeAPI using a pooled httpx AsyncClient:
- GET /pokemon/{name}: lookup (status and body returned as-is)
"""

from typing import Optional
from urllib.parse import quote

import httpx
import structlog

from pokemon_gateway.upstream.base_client import RawResponse, UpstreamTransport

logger = structlog.get_logger(__name__)


class PokeAPIClient(UpstreamTransport):
    """
    httpx-based PokeAPI transport.
    
    Features:
    - Connection pooling via a persistent AsyncClient (created lazily)
    - Per-attempt timeout (httpx timeouts surface as transport errors)
    - No status handling or retries: classification belongs to the retry policy
    """

    def __init__(
        self,
        base_url: str = "https://pokeapi.co/api/v2",
        timeout: float = 5,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize PokeAPI client.
        
        Args:
            base_url: PokeAPI base URL
            timeout: Per-request timeout in seconds
            connection_limits: httpx connection pool limits (default: 20 max connections)
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        
        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
                keepalive_expiry=30.0,
            )
        self._connection_limits = connection_limits
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        
        logger.info(
            "PokeAPI client initialized",
            base_url=self.base_url,
            timeout=timeout,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
                follow_redirects=True,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def do_request(self, key: str) -> RawResponse:
        client = await self._get_client()
        response = await client.get(f"/pokemon/{quote(key, safe='')}")
        return RawResponse(status_code=response.status_code, body=response.content)

    async def close(self) -> None:
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed PokeAPI client connection")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url}, timeout={self.timeout}s)"
