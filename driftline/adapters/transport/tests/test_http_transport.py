"""Unit tests for HttpxTransport.

Patches httpx.AsyncClient for the per-request client path and uses
httpx.MockTransport when a long-lived client is handed in.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from driftline.adapters.transport.http import HttpxTransport
from driftline.core.protocols.transport import CollectorTransport

URL = "https://collector.example.com/collect"
HEADERS = {"Content-Type": "application/json", "X-API-Key": "k"}
BODY = b'{"v":1}'


def _patched_client(mock_cls, response=None, side_effect=None) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.post = AsyncMock(return_value=response, side_effect=side_effect)
    mock_cls.return_value.__aenter__ = AsyncMock(return_value=mock_client)
    mock_cls.return_value.__aexit__ = AsyncMock(return_value=False)
    return mock_client


def test_satisfies_protocol():
    assert isinstance(HttpxTransport(), CollectorTransport)


class TestPerRequestClient:
    """Tests for HttpxTransport.post() without an injected client."""

    @pytest.mark.asyncio
    async def test_returns_status_and_body(self):
        mock_response = MagicMock()
        mock_response.status_code = 202
        mock_response.content = b"accepted"

        with patch("driftline.adapters.transport.http.httpx.AsyncClient") as mock_cls:
            mock_client = _patched_client(mock_cls, response=mock_response)

            response = await HttpxTransport().post(URL, HEADERS, BODY)

            assert response.status_code == 202
            assert response.body == b"accepted"
            assert response.ok
            mock_client.post.assert_called_once_with(
                URL, headers=HEADERS, content=BODY, follow_redirects=True
            )

    @pytest.mark.asyncio
    async def test_non_2xx_is_returned_not_raised(self):
        mock_response = MagicMock()
        mock_response.status_code = 500
        mock_response.content = b'{"error": "boom"}'

        with patch("driftline.adapters.transport.http.httpx.AsyncClient") as mock_cls:
            _patched_client(mock_cls, response=mock_response)

            response = await HttpxTransport().post(URL, HEADERS, BODY)

            assert response.status_code == 500
            assert not response.ok

    @pytest.mark.asyncio
    async def test_connect_error_propagates(self):
        with patch("driftline.adapters.transport.http.httpx.AsyncClient") as mock_cls:
            _patched_client(mock_cls, side_effect=httpx.ConnectError("DNS failure"))

            with pytest.raises(httpx.ConnectError):
                await HttpxTransport().post(URL, HEADERS, BODY)

    @pytest.mark.asyncio
    async def test_default_timeout_not_overridden(self):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.content = b""

        with patch("driftline.adapters.transport.http.httpx.AsyncClient") as mock_cls:
            _patched_client(mock_cls, response=mock_response)

            await HttpxTransport().post(URL, HEADERS, BODY)
            mock_cls.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_custom_timeout_passed_to_client(self):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.content = b""

        with patch("driftline.adapters.transport.http.httpx.AsyncClient") as mock_cls:
            _patched_client(mock_cls, response=mock_response)

            await HttpxTransport(timeout=10.0).post(URL, HEADERS, BODY)
            mock_cls.assert_called_once_with(timeout=10.0)


class TestInjectedClient:
    """Tests for HttpxTransport with a long-lived httpx.AsyncClient."""

    @pytest.mark.asyncio
    async def test_posts_through_injected_client(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.headers["x-api-key"] == "k"
            assert request.content == BODY
            return httpx.Response(401, json={"error": "Invalid API key"})

        transport = HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

        response = await transport.post(URL, HEADERS, BODY)

        assert response.status_code == 401
        assert b"Invalid API key" in response.body
        await transport.aclose()

    @pytest.mark.asyncio
    async def test_aclose_closes_injected_client(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        transport = HttpxTransport(client=client)

        await transport.aclose()
        await transport.aclose()

        assert client.is_closed

    @pytest.mark.asyncio
    async def test_aclose_without_client_is_noop(self):
        await HttpxTransport().aclose()

    @pytest.mark.asyncio
    async def test_follows_permanent_redirect_with_body(self):
        seen: list[tuple[str, str, bytes]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.path, request.content))
            if request.url.path == "/collect":
                return httpx.Response(308, headers={"Location": "/v2/collect"})
            return httpx.Response(202)

        transport = HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

        response = await transport.post(URL, HEADERS, BODY)

        assert response.status_code == 202
        assert seen == [("POST", "/collect", BODY), ("POST", "/v2/collect", BODY)]
        await transport.aclose()
