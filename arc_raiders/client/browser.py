"""
Headless-browser transport — scrapes the JSON API through a real browser.

Some networks block non-browser clients from the MetaForge API. This
transport drives Playwright to load each API URL as a page and pulls the JSON
back out of whatever the browser rendered.

Extraction order:
  1. The body of the first ``<pre>`` element (how Chromium renders JSON).
  2. The raw page content parsed as JSON.
  3. ``document.body.innerText`` parsed as JSON.

Install the optional extra to use it::

    pip install "arc-raiders-client[browser]"
    playwright install chromium

One browser page is shared, so navigations are serialized with a lock.
"""

from __future__ import annotations

import asyncio
import html
import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import urlencode

from arc_raiders.client.transport import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, Transport
from arc_raiders.config import DEFAULT_USER_AGENT
from arc_raiders.errors import ParseError, TransportError

logger = logging.getLogger(__name__)

_PRE_RE = re.compile(r"<pre[^>]*>([\s\S]*?)</pre>", re.IGNORECASE)

_BODY_TEXT_JS = "() => document.body ? document.body.innerText : ''"


def json_from_content(content: str) -> Any:
    """Extract JSON from rendered page HTML.

    Returns the decoded value, or raises ``ParseError`` if neither a ``<pre>``
    block nor the raw content is valid JSON.
    """
    match = _PRE_RE.search(content)
    if match:
        try:
            return json.loads(html.unescape(match.group(1)))
        except json.JSONDecodeError as exc:
            raise ParseError("Could not parse <pre> block as JSON.") from exc
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ParseError("Page content is not JSON.") from exc


def json_from_text(text: str) -> Any:
    """Parse rendered body text as JSON, raising ``ParseError`` on failure."""
    if not text or not text.strip():
        raise ParseError("Could not parse response as JSON: page body is empty.")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError("Could not parse response as JSON.") from exc


class BrowserTransport(Transport):
    """Playwright-backed transport.

    Args:
        base_url: API root; relative paths are resolved against it.
        engine: ``"chromium"``, ``"firefox"`` or ``"webkit"``.
        headless: Run the browser without a window.
        timeout: Navigation timeout in seconds.
        settle_ms: Extra wait after network idle before reading the page.
        user_agent: Desktop user agent presented to the server.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        engine: str = "chromium",
        headless: bool = True,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        settle_ms: int = 1000,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.engine = engine
        self.headless = headless
        self.timeout = timeout
        self.settle_ms = settle_ms
        self.user_agent = user_agent
        self._playwright: Any = None
        self._browser: Any = None
        self._page: Any = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        """Launch the browser and open the shared page (idempotent)."""
        if self._page is not None:
            return
        try:
            from playwright.async_api import async_playwright
        except ImportError as exc:
            raise RuntimeError(
                "Playwright is required for the browser transport. Install it with: "
                'pip install "arc-raiders-client[browser]" && playwright install'
            ) from exc

        self._playwright = await async_playwright().start()
        browser_type = getattr(self._playwright, self.engine)
        self._browser = await browser_type.launch(headless=self.headless)
        context = await self._browser.new_context(
            user_agent=self.user_agent,
            viewport={"width": 1920, "height": 1080},
        )
        self._page = await context.new_page()
        logger.info("Browser transport started (engine=%s, headless=%s)", self.engine, self.headless)

    def build_url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        url = path if path.startswith("http") else f"{self.base_url}/{path.lstrip('/')}"
        if params:
            url = f"{url}?{urlencode({k: str(v) for k, v in params.items()})}"
        return url

    async def get_json(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        url = self.build_url(path, params)

        async with self._lock:
            await self.start()
            logger.debug("Browser GET %s", url)
            response = await self._page.goto(
                url, wait_until="networkidle", timeout=self.timeout * 1000
            )
            if response is None or not response.ok:
                status = response.status if response is not None else None
                raise TransportError(
                    f"API request failed: {status if status is not None else 'Unknown'}",
                    status_code=status,
                    url=url,
                )

            if self.settle_ms:
                await self._page.wait_for_timeout(self.settle_ms)

            content = await self._page.content()
            try:
                return json_from_content(content)
            except ParseError:
                logger.debug("No JSON in page content for %s; trying body text", url)
            body_text = await self._page.evaluate(_BODY_TEXT_JS)
            return json_from_text(body_text)

    async def aclose(self) -> None:
        if self._browser is not None:
            await self._browser.close()
        if self._playwright is not None:
            await self._playwright.stop()
        self._browser = None
        self._playwright = None
        self._page = None
