"""
Shared pytest fixtures for the Arc Raiders client test suite.

Provides:
  - ``ManualClock``: a callable clock tests advance by hand (TTL expiry).
  - ``FakeTransport``: an in-memory ``Transport`` that serves canned pages,
    records every request, and can be told to fail on a given page.
  - Raw record factories shaped like real API payloads.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

import pytest

from arc_raiders.cache import TTLCache
from arc_raiders.client.client import ArcRaidersClient
from arc_raiders.client.transport import Transport
from arc_raiders.errors import TransportError

MAP_URL = "https://fake.test/api/game-map-data"


# ── Test doubles ──────────────────────────────────────────────────────────────

class ManualClock:
    """Monotonic-style clock that only moves when ``advance()`` is called."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTransport(Transport):
    """Serves canned JSON for list endpoints, single records and maps.

    Args:
        pages: endpoint → list of pages, each page a list of raw records.
            Page N answers ``hasNextPage`` while more pages remain. When a
            request carries ``type``, records are filtered to that type.
        records: path → body for single-record lookups (``/items/w1`` etc.).
        maps: map name → body for the map endpoint; missing names 404.
        fail_on: ``(endpoint, page)`` pairs that raise ``TransportError``.
        paginate: When ``False`` responses carry no ``pagination`` block.
    """

    base_url = "https://fake.test/api/arc-raiders"

    def __init__(
        self,
        pages: Optional[dict[str, list[list[dict]]]] = None,
        records: Optional[dict[str, Any]] = None,
        maps: Optional[dict[str, Any]] = None,
        fail_on: Optional[set[tuple[str, int]]] = None,
        paginate: bool = True,
    ) -> None:
        self.pages = pages or {}
        self.records = records or {}
        self.maps = maps or {}
        self.fail_on = fail_on or set()
        self.paginate = paginate
        self.calls: list[tuple[str, dict]] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def get_json(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        params = dict(params or {})
        self.calls.append((path, params))

        if path == MAP_URL:
            name = params.get("map")
            if name not in self.maps:
                raise TransportError(f"API request failed: 404 for map {name}", status_code=404)
            return self.maps[name]

        if path in self.records:
            return self.records[path]

        if path in self.pages:
            page = int(params.get("page", 1))
            if (path, page) in self.fail_on:
                raise TransportError(f"API request failed: 500 for {path}", status_code=500)
            pages = self.pages[path]
            data = list(pages[page - 1]) if page <= len(pages) else []
            if "type" in params:
                wanted = set(str(params["type"]).split(","))
                data = [r for r in data if r.get("type") in wanted]
            body: dict[str, Any] = {"data": data}
            if self.paginate:
                body["pagination"] = {
                    "page": page,
                    "limit": params.get("pageSize", 50),
                    "total": sum(len(p) for p in pages),
                    "totalPages": len(pages),
                    "hasNextPage": page < len(pages),
                    "hasPrevPage": page > 1,
                }
            return body

        raise TransportError(f"API request failed: 404 for {path}", status_code=404)

    async def aclose(self) -> None:
        self.closed = True


# ── Raw record factories ──────────────────────────────────────────────────────

def raw_item(item_id: str, type: str = "material", rarity: Optional[str] = "Common", **extra) -> dict:
    record = {"id": item_id, "name": f"Item {item_id}", "type": type}
    if rarity is not None:
        record["rarity"] = rarity
    record.update(extra)
    return record


def raw_weapon(item_id: str, damage: Optional[float] = None, rarity: str = "Rare", **extra) -> dict:
    record = raw_item(item_id, type="weapon", rarity=rarity, **extra)
    if damage is not None:
        record["damage"] = damage
    return record


def make_client(transport: FakeTransport, **kwargs) -> ArcRaidersClient:
    kwargs.setdefault("map_url", MAP_URL)
    return ArcRaidersClient(transport=transport, **kwargs)


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def mixed_item_pages() -> list[list[dict]]:
    """Two pages of items: materials, weapons and one armour piece."""
    return [
        [
            raw_item("m1", rarity="Common"),
            raw_weapon("w1", damage=40, fireRate=600, range=50),
            raw_item("a1", type="armor", rarity="Epic", armorValue=30, slot="chest"),
        ],
        [
            raw_weapon("w2", damage=75, rarity="Legendary", fireRate=120, range=200),
            raw_item("m2", rarity=None),
        ],
    ]


@pytest.fixture
def items_transport(mixed_item_pages) -> FakeTransport:
    return FakeTransport(pages={"/items": mixed_item_pages})


@pytest.fixture
def items_client(items_transport, clock) -> ArcRaidersClient:
    return make_client(items_transport, cache=TTLCache(ttl_seconds=300, clock=clock))
