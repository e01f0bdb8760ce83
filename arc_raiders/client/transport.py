"""
Transport capability and the direct-HTTP implementation.

``ArcRaidersClient`` never talks to the network itself: it is handed a
``Transport`` and calls ``fetch_page()`` for list endpoints and ``get_json()``
for everything else. Two implementations exist:

  HttpTransport     — httpx.AsyncClient against the JSON API (this module)
  BrowserTransport  — headless browser, for when direct HTTP is blocked
                      (``arc_raiders.client.browser``)

Paths are relative to the transport's base URL unless they start with
``http``, in which case they are used as-is (the map endpoint lives under a
different base path).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from arc_raiders.errors import ParseError, TransportError
from arc_raiders.models.response import PagedResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://metaforge.app/api/arc-raiders"
DEFAULT_TIMEOUT_SECONDS = 10.0


class Transport(ABC):
    """Executes GET requests and returns decoded JSON."""

    base_url: str

    @abstractmethod
    async def get_json(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """GET ``path`` with query ``params`` and return the decoded body.

        Raises:
            TransportError: Non-2xx status or network failure.
            ParseError: Body is not JSON.
        """

    async def fetch_page(
        self,
        endpoint: str,
        params: Mapping[str, Any],
    ) -> PagedResponse:
        """Fetch one page of a list endpoint.

        Raises:
            ParseError: Body is not an object or not a page envelope.
        """
        body = await self.get_json(endpoint, params)
        if not isinstance(body, dict):
            raise ParseError(
                f"Expected a JSON object from {endpoint}, got {type(body).__name__}."
            )
        try:
            return PagedResponse.model_validate(body)
        except ValidationError as exc:
            raise ParseError(f"Malformed page envelope from {endpoint}: {exc}") from exc

    async def aclose(self) -> None:
        """Release any held resources. Default: nothing to release."""


def default_headers(api_key: Optional[str] = None) -> dict[str, str]:
    """JSON content type plus an optional static bearer token."""
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return headers


class HttpTransport(Transport):
    """Direct JSON-over-HTTP transport built on ``httpx.AsyncClient``.

    Usage::

        transport = HttpTransport(api_key=os.environ.get("ARC_RAIDERS_API_KEY"))
        page = await transport.fetch_page("/items", {"page": 1, "pageSize": 50})
        await transport.aclose()

    Args:
        base_url: API root; relative paths are resolved against it.
        api_key: Optional static bearer token.
        timeout: Per-request timeout in seconds.
        client: Pre-built ``httpx.AsyncClient`` (tests pass one wired to
            ``httpx.MockTransport``). When given, ``base_url``/``api_key``/
            ``timeout`` are not applied to it.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            headers=default_headers(api_key),
            timeout=httpx.Timeout(timeout),
        )

    def _url(self, path: str) -> str:
        if path.startswith("http"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get_json(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        url = self._url(path)
        logger.debug("GET %s params=%s", url, dict(params) if params else {})
        try:
            resp = await self._client.get(url, params=dict(params) if params else None)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise TransportError(
                f"API request failed: {status} for {url}",
                status_code=status,
                url=url,
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(
                f"API request failed: {exc.__class__.__name__} for {url}: {exc}",
                url=url,
            ) from exc

        try:
            return resp.json()
        except ValueError as exc:
            raise ParseError(f"Response from {url} is not valid JSON.") from exc

    async def aclose(self) -> None:
        await self._client.aclose()
