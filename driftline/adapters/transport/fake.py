"""Fake collector transport for testing."""

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from driftline.core.protocols.transport import TransportResponse


@dataclass
class RecordedRequest:
    """Single recorded POST."""

    url: str
    headers: Dict[str, str]
    body: bytes

    @property
    def payload(self) -> Dict[str, Any]:
        """Decoded JSON body."""
        return json.loads(self.body.decode("utf-8"))


class FakeTransport:
    """In-memory test double for CollectorTransport.

    Records every request. Can answer with a fixed status and body, raise
    a network-style exception, or hold each request until ``release()``
    is called to simulate a slow collector.

    Usage:
        transport = FakeTransport()
        client = AnalyticsClient(config, transport=transport)
        client.track_view("HomeScreen")
        await client.drain()
        assert transport.get("screen_impression").payload["screen"] == "HomeScreen"
    """

    def __init__(
        self,
        status_code: int = 202,
        body: bytes = b"",
        error: Optional[Exception] = None,
        hold: bool = False,
    ) -> None:
        """Initialize the fake transport.

        Args:
            status_code: Status returned for every request.
            body: Body returned for every request.
            error: If set, raised from ``post`` after recording the request.
            hold: If True, ``post`` blocks until ``release()`` is called.
        """
        self.requests: list[RecordedRequest] = []
        self.completed = 0
        self.closed = False
        self._status_code = status_code
        self._body = body
        self._error = error
        self._hold = hold
        self._released: Optional[asyncio.Event] = None

    async def post(self, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        """Record the request and answer as configured."""
        self.requests.append(RecordedRequest(url=url, headers=dict(headers), body=body))
        if self._hold:
            if self._released is None:
                self._released = asyncio.Event()
            await self._released.wait()
        self.completed += 1
        if self._error is not None:
            raise self._error
        return TransportResponse(status_code=self._status_code, body=self._body)

    async def aclose(self) -> None:
        """Mark the transport as closed."""
        self.closed = True

    # Test helpers

    def release(self) -> None:
        """Let held requests complete."""
        self._hold = False
        if self._released is not None:
            self._released.set()

    @property
    def payloads(self) -> list[Dict[str, Any]]:
        """Decoded JSON bodies in the order requests were received."""
        return [r.payload for r in self.requests]

    def has(self, name: str) -> bool:
        """Return True if an event with the given name was posted."""
        return any(p.get("name") == name for p in self.payloads)

    def get(self, name: str) -> RecordedRequest:
        """Return the first request whose event has the given name, or raise AssertionError."""
        for request in self.requests:
            if request.payload.get("name") == name:
                return request
        raise AssertionError(
            f"No event '{name}' posted. Posted: {[p.get('name') for p in self.payloads]}"
        )

    def clear(self) -> None:
        """Reset recorded requests."""
        self.requests.clear()
        self.completed = 0
