"""
Domain records returned by the Arc Raiders API.

Modules:
  item      — Item / Weapon / Armor tagged union and parsers
  world     — Quests, ARC missions, maps, traders
  response  — Paged list envelope and search results
"""

from arc_raiders.models.item import AnyItem, Armor, Item, Weapon, parse_item, parse_items
from arc_raiders.models.response import PagedResponse, Pagination, SearchResults
from arc_raiders.models.world import (
    ArcLoot,
    ArcMission,
    Coordinates,
    MapData,
    PointOfInterest,
    Quest,
    QuestObjective,
    QuestReward,
    Trader,
    TraderItem,
    Waypoint,
)

__all__ = [
    "AnyItem",
    "ArcLoot",
    "ArcMission",
    "Armor",
    "Coordinates",
    "Item",
    "MapData",
    "PagedResponse",
    "Pagination",
    "PointOfInterest",
    "Quest",
    "QuestObjective",
    "QuestReward",
    "SearchResults",
    "Trader",
    "TraderItem",
    "Waypoint",
    "Weapon",
    "parse_item",
    "parse_items",
]
