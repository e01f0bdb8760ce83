"""Tests for arc_raiders.client.transport.HttpTransport using httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from arc_raiders.client.transport import HttpTransport, default_headers
from arc_raiders.errors import ParseError, TransportError
from arc_raiders.models import PagedResponse

BASE = "https://api.test/arc"


def _transport(handler) -> HttpTransport:
    client = httpx.AsyncClient(
        base_url=BASE,
        headers=default_headers("secret"),
        transport=httpx.MockTransport(handler),
    )
    return HttpTransport(base_url=BASE, client=client)


def test_default_headers_with_and_without_key() -> None:
    assert default_headers() == {"Content-Type": "application/json"}
    assert default_headers("abc")["Authorization"] == "Bearer abc"


def test_get_json_sends_params_and_bearer() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    body = asyncio.run(_transport(handler).get_json("/items", {"page": 1, "type": "weapon"}))

    assert body == {"ok": True}
    assert seen[0].url.path == "/arc/items"
    assert seen[0].url.params["page"] == "1"
    assert seen[0].url.params["type"] == "weapon"
    assert seen[0].headers["Authorization"] == "Bearer secret"


def test_absolute_url_used_as_is() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={})

    asyncio.run(
        _transport(handler).get_json("https://maps.test/api/game-map-data", {"map": "dam"})
    )
    assert seen == ["https://maps.test/api/game-map-data?map=dam"]


def test_non_2xx_raises_transport_error_with_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "down"})

    with pytest.raises(TransportError) as exc_info:
        asyncio.run(_transport(handler).get_json("/items"))

    assert exc_info.value.status_code == 503
    assert "503" in str(exc_info.value)


def test_network_failure_raises_transport_error_without_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as exc_info:
        asyncio.run(_transport(handler).get_json("/items"))

    assert exc_info.value.status_code is None


def test_invalid_json_raises_parse_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>blocked</html>")

    with pytest.raises(ParseError):
        asyncio.run(_transport(handler).get_json("/items"))


def test_fetch_page_parses_envelope() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=json.dumps(
                {"data": [{"id": "1"}], "pagination": {"page": 1, "hasNextPage": True}}
            ),
        )

    page = asyncio.run(_transport(handler).fetch_page("/items", {"page": 1}))

    assert isinstance(page, PagedResponse)
    assert page.data == [{"id": "1"}]
    assert page.has_next_page is True


def test_fetch_page_rejects_non_object_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[1, 2, 3])

    with pytest.raises(ParseError):
        asyncio.run(_transport(handler).fetch_page("/items", {}))


def test_fetch_page_malformed_envelope_raises_parse_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": "not-a-list", "pagination": {"page": "x"}})

    with pytest.raises(ParseError, match="Malformed page envelope"):
        asyncio.run(_transport(handler).fetch_page("/items", {}))


def test_aclose_closes_underlying_client() -> None:
    transport = _transport(lambda request: httpx.Response(200, json={}))
    asyncio.run(transport.aclose())
    assert transport._client.is_closed
