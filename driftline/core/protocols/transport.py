"""Protocol for delivering serialized events to the collector.

The client only knows how to build a request; how bytes reach the
collector is up to the transport (httpx in production, an in-memory
fake in tests).
"""

from dataclasses import dataclass
from typing import Mapping, Protocol, runtime_checkable


@dataclass(frozen=True)
class TransportResponse:
    """Status and raw body of a collector response."""

    status_code: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        """True for any 2xx status."""
        return 200 <= self.status_code < 300


@runtime_checkable
class CollectorTransport(Protocol):
    """Sends a single POST to the collector.

    Implementations raise on network-level failure (no response at all)
    and return a ``TransportResponse`` for every HTTP answer, including
    non-2xx ones. The client decides what counts as a failure.
    """

    async def post(self, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        """POST ``body`` to ``url`` with the given headers.

        Args:
            url: Fully normalized collector endpoint.
            headers: Request headers (content type and API key).
            body: UTF-8 JSON body.
        """
        ...

    async def aclose(self) -> None:
        """Release any pooled connections."""
        ...
