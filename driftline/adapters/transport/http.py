"""httpx transport for the collector.

Implements the CollectorTransport protocol. Opens a short-lived
``httpx.AsyncClient`` per request unless a long-lived client is handed in,
so it stays usable from whichever event loop the delivery runs on.
"""

from typing import Any, Dict, Mapping, Optional

import httpx

from driftline.core.protocols.transport import CollectorTransport, TransportResponse


class HttpxTransport(CollectorTransport):
    """POST events with httpx.

    Redirects are followed and the final response (2xx or not) is returned
    as a ``TransportResponse``.
    Connection failures, DNS errors and timeouts surface as
    ``httpx.HTTPError`` subclasses for the caller to handle.

    Args:
        timeout: Seconds before giving up. ``None`` keeps the httpx default.
        client: Optional long-lived client. The transport takes ownership
            and closes it in ``aclose``.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._timeout = timeout
        self._client = client

    def _client_kwargs(self) -> Dict[str, Any]:
        if self._timeout is None:
            return {}
        return {"timeout": self._timeout}

    async def post(self, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        """Send the request and return status and body."""
        if self._client is not None:
            response = await self._client.post(
                url, headers=dict(headers), content=body, follow_redirects=True
            )
        else:
            async with httpx.AsyncClient(**self._client_kwargs()) as client:
                response = await client.post(
                    url, headers=dict(headers), content=body, follow_redirects=True
                )
        return TransportResponse(status_code=response.status_code, body=response.content)

    async def aclose(self) -> None:
        """Close the long-lived client, if one was provided."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
