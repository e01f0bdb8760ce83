"""
Arc Raiders domain client — one method per resource, cached and auto-paginated.

Every list method goes through ``_collect()``:

  1. Strip any caller ``page``/``page_size``; build the canonical params and
     derive the cache key from (endpoint, params).
  2. Cache hit → return the cached list, no network activity.
  3. Miss → request pages 1, 2, … with ``pageSize = page_size`` until the
     server reports ``hasNextPage: false`` (or sends no pagination block),
     accumulating every page's ``data``.
  4. Cache the full accumulated list under the key and return it.

Only the final list is cached, never individual pages. A failed page request
propagates and nothing is cached. There is no page cap: a server that always
reports ``hasNextPage: true`` keeps the loop running.

``get_weapons()``/``get_armor()`` force ``type`` into the filter before the
key is derived, so their entries never collide with plain item lists.

Usage::

    from arc_raiders.client import ArcRaidersClient
    from arc_raiders.config import load_config

    async with ArcRaidersClient.from_config(load_config()) as client:
        legendaries = await client.get_weapons({"rarity": "legendary"})
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Callable, Optional, TypeVar

from pydantic import TypeAdapter

from arc_raiders.cache import TTLCache
from arc_raiders.client.params import (
    ArcRaidersFilter,
    FilterLike,
    build_params,
    coerce_filter,
    derive_cache_key,
)
from arc_raiders.client.transport import HttpTransport, Transport
from arc_raiders.config import AppConfig
from arc_raiders.models.item import AnyItem, parse_item, parse_items
from arc_raiders.models.response import SearchResults
from arc_raiders.models.world import ArcMission, MapData, Quest, Trader, TraderItem

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 50
DEFAULT_MAP_URL = "https://metaforge.app/api/game-map-data"

MAP_NAMES: tuple[str, ...] = ("dam", "spaceport", "buried-city", "blue-gate")

ITEMS_ENDPOINT = "/items"
QUESTS_ENDPOINT = "/quests"
ARCS_ENDPOINT = "/arcs"
TRADERS_ENDPOINT = "/traders"

_quest_list = TypeAdapter(list[Quest]).validate_python
_arc_list = TypeAdapter(list[ArcMission]).validate_python
_traders_by_name = TypeAdapter(dict[str, list[TraderItem]]).validate_python

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_map_name(name: str) -> str:
    """``"Buried City"`` → ``"buried-city"``."""
    return _WHITESPACE_RE.sub("-", name.lower())


def _unwrap(body: Any) -> Any:
    """Return the record from a ``{"data": {...}}`` envelope, else the body."""
    if isinstance(body, dict) and "id" not in body and isinstance(body.get("data"), dict):
        return body["data"]
    return body


class ArcRaidersClient:
    """Typed, cached client for the MetaForge Arc Raiders API.

    Args:
        transport: Executes the requests (``HttpTransport`` or
            ``BrowserTransport``). Owned by the client; closed by ``aclose()``.
        cache: Response cache. A fresh 5-minute ``TTLCache`` if omitted.
        cache_enabled: When ``False`` the cache is neither read nor written.
        page_size: ``pageSize`` sent on every list request.
        map_url: Absolute URL of the ``game-map-data`` endpoint.
    """

    def __init__(
        self,
        transport: Transport,
        cache: Optional[TTLCache] = None,
        cache_enabled: bool = True,
        page_size: int = DEFAULT_PAGE_SIZE,
        map_url: str = DEFAULT_MAP_URL,
    ) -> None:
        self.transport = transport
        self.cache = cache if cache is not None else TTLCache()
        self.cache_enabled = cache_enabled
        self.page_size = page_size
        self.map_url = map_url

    @classmethod
    def from_config(cls, config: AppConfig, use_browser: Optional[bool] = None) -> "ArcRaidersClient":
        """Build a client (transport + cache) from ``AppConfig``.

        Args:
            config: Loaded application config.
            use_browser: Override ``config.browser.enabled``.
        """
        browser = config.browser.enabled if use_browser is None else use_browser
        transport: Transport
        if browser:
            from arc_raiders.client.browser import BrowserTransport

            transport = BrowserTransport(
                base_url=config.api.base_url,
                engine=config.browser.engine,
                headless=config.browser.headless,
                timeout=config.api.timeout_seconds,
                settle_ms=config.browser.settle_ms,
                user_agent=config.browser.user_agent,
            )
        else:
            transport = HttpTransport(
                base_url=config.api.base_url,
                api_key=config.api.api_key,
                timeout=config.api.timeout_seconds,
            )
        return cls(
            transport=transport,
            cache=TTLCache(ttl_seconds=config.cache.ttl_seconds),
            cache_enabled=config.cache.enabled,
            page_size=config.api.page_size,
            map_url=config.api.map_url,
        )

    async def __aenter__(self) -> "ArcRaidersClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    def clear_cache(self) -> None:
        """Invalidate every cached response."""
        self.cache.clear()
        logger.debug("Response cache cleared")

    # ── Cache helpers ──────────────────────────────────────────────────────────

    def _cache_get(self, key: str) -> Optional[Any]:
        if not self.cache_enabled:
            return None
        return self.cache.get(key)

    def _cache_set(self, key: str, value: Any) -> None:
        if self.cache_enabled:
            self.cache.set(key, value)

    # ── Core: paginated accumulation ───────────────────────────────────────────

    async def _collect(
        self,
        endpoint: str,
        filters: ArcRaidersFilter,
        parse: Callable[[list[Any]], list[T]],
    ) -> list[T]:
        """Fetch every page of ``endpoint`` and cache the concatenated result."""
        base = filters.model_copy(update={"page": None, "page_size": None})
        key = derive_cache_key(endpoint, build_params(base))

        cached = self._cache_get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return cached

        accumulated: list[T] = []
        page = 1
        has_more = True
        while has_more:
            params = build_params(
                base.model_copy(update={"page": page, "page_size": self.page_size})
            )
            response = await self.transport.fetch_page(endpoint, params)
            accumulated.extend(parse(response.data))
            has_more = response.has_next_page
            logger.debug(
                "%s page %d: %d records (has_next=%s)",
                endpoint, page, len(response.data), has_more,
            )
            page += 1

        logger.info("Fetched %d records from %s in %d page(s)", len(accumulated), endpoint, page - 1)
        self._cache_set(key, accumulated)
        return accumulated

    async def _get_one(self, path: str, parse: Callable[[Any], T]) -> T:
        """Single-record lookup, cached under the path-only key."""
        key = derive_cache_key(path)
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        record = parse(_unwrap(await self.transport.get_json(path)))
        self._cache_set(key, record)
        return record

    # ── Items ──────────────────────────────────────────────────────────────────

    async def get_items(self, filters: FilterLike = None) -> list[AnyItem]:
        """Every item matching ``filters`` (all pages)."""
        return await self._collect(ITEMS_ENDPOINT, coerce_filter(filters), parse_items)

    async def get_item_by_id(self, item_id: str) -> AnyItem:
        return await self._get_one(f"{ITEMS_ENDPOINT}/{item_id}", parse_item)

    async def get_weapons(self, filters: FilterLike = None) -> list[AnyItem]:
        """Every weapon matching ``filters``; any caller ``type`` is replaced.

        Records are parsed through the item union, so a record the server
        returns without the ``weapon`` tag comes back as a plain ``Item``.
        """
        forced = coerce_filter(filters).model_copy(update={"type": "weapon"})
        return await self._collect(ITEMS_ENDPOINT, forced, parse_items)

    async def get_weapon_by_id(self, weapon_id: str) -> AnyItem:
        return await self.get_item_by_id(weapon_id)

    async def get_armor(self, filters: FilterLike = None) -> list[AnyItem]:
        """Every armour piece matching ``filters``; any caller ``type`` is replaced."""
        forced = coerce_filter(filters).model_copy(update={"type": "armor"})
        return await self._collect(ITEMS_ENDPOINT, forced, parse_items)

    async def get_armor_by_id(self, armor_id: str) -> AnyItem:
        return await self.get_item_by_id(armor_id)

    # ── Quests & ARCs ──────────────────────────────────────────────────────────

    async def get_quests(self, filters: FilterLike = None) -> list[Quest]:
        return await self._collect(QUESTS_ENDPOINT, coerce_filter(filters), _quest_list)

    async def get_quest_by_id(self, quest_id: str) -> Quest:
        return await self._get_one(f"{QUESTS_ENDPOINT}/{quest_id}", Quest.model_validate)

    async def get_arcs(self, filters: FilterLike = None) -> list[ArcMission]:
        return await self._collect(ARCS_ENDPOINT, coerce_filter(filters), _arc_list)

    async def get_arc_by_id(self, arc_id: str) -> ArcMission:
        return await self._get_one(f"{ARCS_ENDPOINT}/{arc_id}", ArcMission.model_validate)

    # ── Traders ────────────────────────────────────────────────────────────────

    async def get_traders(self) -> dict[str, list[TraderItem]]:
        """Trader inventories keyed by trader name.

        The endpoint answers ``{"success": true, "data": {name: [items]}}``;
        a missing ``data`` yields an empty dict.
        """
        key = derive_cache_key(TRADERS_ENDPOINT)
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        body = await self.transport.get_json(TRADERS_ENDPOINT)
        raw = body.get("data") if isinstance(body, dict) else None
        traders = _traders_by_name(raw or {})
        self._cache_set(key, traders)
        return traders

    async def get_trader_by_id(self, trader_id: str) -> Trader:
        return await self._get_one(f"{TRADERS_ENDPOINT}/{trader_id}", Trader.model_validate)

    # ── Maps ───────────────────────────────────────────────────────────────────

    async def get_map_data(self, map_name: str) -> MapData:
        """Fetch one map from the ``game-map-data`` endpoint (not cached)."""
        body = await self.transport.get_json(
            self.map_url, {"map": normalize_map_name(map_name)}
        )
        return MapData.model_validate(_unwrap(body))

    async def _get_map_or_none(self, map_name: str) -> Optional[MapData]:
        try:
            return await self.get_map_data(map_name)
        except Exception as exc:
            logger.debug("Map %s: fetch failed: %s", map_name, exc)
            return None

    async def get_maps(self) -> list[MapData]:
        """Fetch all known maps concurrently, dropping any that failed."""
        results = await asyncio.gather(*(self._get_map_or_none(m) for m in MAP_NAMES))
        return [m for m in results if m is not None]

    # ── Search ─────────────────────────────────────────────────────────────────

    async def search(self, query: str, filters: FilterLike = None) -> SearchResults:
        """Search items by free text.

        Only items are searched; ``quests``, ``arcs`` and ``traders`` on the
        result stay ``None``.
        """
        searched = coerce_filter(filters).model_copy(update={"search": query})
        return SearchResults(items=await self.get_items(searched))
