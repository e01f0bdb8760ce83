"""
Filter → query-parameter normalization and cache-key derivation.

``build_params()`` is the single place a caller's filter becomes the flat
``dict[str, str | int]`` that is both sent as the query string and hashed into
the cache key, so the two can never disagree.

Rules (each applied only when the field is present, i.e. not ``None``):
  1. ``rarity``       — case-insensitive map onto Common/Uncommon/Rare/Epic/
                        Legendary; unknown values pass through; lists are
                        normalized per element then comma-joined.
  2. ``type``,
     ``difficulty``   — lists comma-joined, scalars unchanged.
  3. ``search``       — verbatim.
  4. ``page``,
     ``pageSize``     — verbatim integers; ``0`` is kept.

Absent fields are omitted from the output entirely.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from arc_raiders.models.item import RARITIES

QueryParams = dict[str, Union[str, int]]

_RARITY_BY_LOWER: dict[str, str] = {r.lower(): r for r in RARITIES}


class ArcRaidersFilter(BaseModel):
    """Optional filters accepted by every list method.

    ``rarity``, ``type`` and ``difficulty`` take a single value or a list.
    ``page_size`` is also accepted under its wire name ``pageSize``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    rarity: Optional[Union[str, list[str]]] = None
    type: Optional[Union[str, list[str]]] = None
    difficulty: Optional[Union[str, list[str]]] = None
    search: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = Field(default=None, alias="pageSize")


FilterLike = Union[ArcRaidersFilter, Mapping[str, Any], None]


def coerce_filter(value: FilterLike) -> ArcRaidersFilter:
    """Accept a filter, a plain mapping, or ``None`` and return a filter."""
    if value is None:
        return ArcRaidersFilter()
    if isinstance(value, ArcRaidersFilter):
        return value
    return ArcRaidersFilter.model_validate(dict(value))


def normalize_rarity(value: str) -> str:
    """Map a rarity onto its canonical capitalized form.

    >>> normalize_rarity("legendary")
    'Legendary'
    >>> normalize_rarity("mythic")
    'mythic'
    """
    return _RARITY_BY_LOWER.get(value.lower(), value)


def _join(value: Union[str, list[str]]) -> str:
    if isinstance(value, list):
        return ",".join(value)
    return value


def build_params(filters: FilterLike = None) -> QueryParams:
    """Normalize a filter into the canonical query-parameter mapping."""
    f = coerce_filter(filters)
    params: QueryParams = {}

    if f.rarity is not None:
        if isinstance(f.rarity, list):
            params["rarity"] = ",".join(normalize_rarity(r) for r in f.rarity)
        else:
            params["rarity"] = normalize_rarity(f.rarity)

    if f.type is not None:
        params["type"] = _join(f.type)

    if f.difficulty is not None:
        params["difficulty"] = _join(f.difficulty)

    if f.search is not None:
        params["search"] = f.search

    if f.page is not None:
        params["page"] = f.page

    if f.page_size is not None:
        params["pageSize"] = f.page_size

    return params


def derive_cache_key(endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Return ``"<endpoint>:<canonical JSON of params>"``.

    Keys are sorted before serializing, so filters supplied in a different
    order map to the same key. With no params the suffix is empty.
    """
    if params is None:
        return f"{endpoint}:"
    canonical = json.dumps(dict(params), sort_keys=True, separators=(",", ":"))
    return f"{endpoint}:{canonical}"
