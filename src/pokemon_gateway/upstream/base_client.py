"""
Abstract upstream transport.

The fetch orchestrator only depends on this interface, which lets tests drive
the retry loop with in-memory stubs instead of a network.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RawResponse:
    """Status and undecoded body of one upstream response."""

    status_code: int
    body: bytes = b""


class UpstreamTransport(ABC):
    """
    Performs a single lookup call against the upstream.
    
    Implementations must:
    - Return a RawResponse for any HTTP response, whatever its status
    - Raise for transport-level failures (connect errors, timeouts, ...)
    - Not retry internally (the orchestrator owns retries)
    - Be cancellable: an asyncio cancellation must abort the in-flight call
    """

    @abstractmethod
    async def do_request(self, key: str) -> RawResponse:
        """
        Fetch the upstream resource for ``key``.
        
        Raises:
            Exception: Any transport failure; classified by the retry policy
        """
        pass

    async def close(self) -> None:
        """Release connections. Default implementation does nothing."""
        pass
