"""
API client layer — transports, parameter normalization, and the domain client.

Submodules:
  params     — ArcRaidersFilter, build_params(), normalize_rarity(), derive_cache_key()
  transport  — Transport capability + HttpTransport (httpx)
  browser    — BrowserTransport (Playwright, optional extra)
  client     — ArcRaidersClient: cached, auto-paginated resource methods

Credential placement (.env, gitignored):
  ARC_RAIDERS_API_KEY        — optional static bearer token
"""

from arc_raiders.client.client import ArcRaidersClient, normalize_map_name
from arc_raiders.client.params import (
    ArcRaidersFilter,
    build_params,
    derive_cache_key,
    normalize_rarity,
)
from arc_raiders.client.transport import HttpTransport, Transport

__all__ = [
    "ArcRaidersClient",
    "ArcRaidersFilter",
    "HttpTransport",
    "Transport",
    "build_params",
    "derive_cache_key",
    "normalize_map_name",
    "normalize_rarity",
]
