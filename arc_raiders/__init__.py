"""
arc_raiders — typed, cached client for the MetaForge Arc Raiders API.

Subpackages:
  client     — transports, filter normalization, ArcRaidersClient
  models     — item tagged union, quests, ARCs, maps, traders
  analytics  — descriptive statistics
  reporting  — JSON/CSV export
"""

from arc_raiders.cache import TTLCache
from arc_raiders.client import ArcRaidersClient, ArcRaidersFilter
from arc_raiders.errors import ArcRaidersError, ExportError, ParseError, TransportError

__version__ = "0.3.0"

__all__ = [
    "ArcRaidersClient",
    "ArcRaidersError",
    "ArcRaidersFilter",
    "ExportError",
    "ParseError",
    "TTLCache",
    "TransportError",
]
