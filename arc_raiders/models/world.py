"""
Quest, ARC mission, map and trader records.

These are plain immutable records as returned by the API. The client never
mutates them; analytics and export only read them.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from arc_raiders.models.item import RECORD_CONFIG

DIFFICULTIES = frozenset({"easy", "medium", "hard", "extreme"})

OBJECTIVE_TYPES = frozenset({"kill", "collect", "deliver", "interact", "survive", "other"})

MISSION_TYPES = frozenset({"raid", "event", "world", "boss", "other"})


# ── Quests ────────────────────────────────────────────────────────────────────


class QuestObjective(BaseModel):
    model_config = RECORD_CONFIG

    id: str
    description: str
    type: str = "other"
    target: Optional[str] = None
    count: Optional[int] = None


class QuestReward(BaseModel):
    model_config = RECORD_CONFIG

    item_id: Optional[str] = Field(default=None, alias="itemId")
    item_name: Optional[str] = Field(default=None, alias="itemName")
    quantity: Optional[int] = None
    experience: Optional[int] = None
    currency: Optional[int] = None


class Quest(BaseModel):
    """A quest with its objectives and rewards."""

    model_config = RECORD_CONFIG

    id: str
    name: str
    description: Optional[str] = None
    objectives: Optional[list[QuestObjective]] = None
    rewards: Optional[list[QuestReward]] = None
    location: Optional[str] = None
    difficulty: Optional[str] = None
    icon: Optional[str] = None


# ── ARC missions ──────────────────────────────────────────────────────────────


class ArcLoot(BaseModel):
    model_config = RECORD_CONFIG

    item_id: Optional[str] = Field(default=None, alias="itemId")
    item_name: Optional[str] = Field(default=None, alias="itemName")
    drop_chance: Optional[float] = Field(default=None, alias="dropChance")
    rarity: Optional[str] = None


class ArcMission(BaseModel):
    """An ARC (hostile machine) encounter and its loot table."""

    model_config = RECORD_CONFIG

    id: str
    name: str
    description: Optional[str] = None
    type: Optional[str] = None
    loot: Optional[list[ArcLoot]] = None
    location: Optional[str] = None
    difficulty: Optional[str] = None
    icon: Optional[str] = None


# ── Maps ──────────────────────────────────────────────────────────────────────


class Coordinates(BaseModel):
    model_config = RECORD_CONFIG

    x: float
    y: float
    z: Optional[float] = None


class Waypoint(BaseModel):
    model_config = RECORD_CONFIG

    id: str
    name: str
    coordinates: Optional[Coordinates] = None
    type: Optional[str] = None


class PointOfInterest(BaseModel):
    model_config = RECORD_CONFIG

    id: str
    name: str
    type: str = "other"
    coordinates: Optional[Coordinates] = None


class MapData(BaseModel):
    """Map geometry and markers from the ``game-map-data`` endpoint.

    The map endpoint lives outside the Arc Raiders API base path and its
    payload is looser than the other resources, so ``id`` and ``name`` are
    optional here.
    """

    model_config = RECORD_CONFIG

    id: Optional[str] = None
    name: Optional[str] = None
    coordinates: Optional[list[Coordinates]] = None
    waypoints: Optional[list[Waypoint]] = None
    pois: Optional[list[PointOfInterest]] = None


# ── Traders ───────────────────────────────────────────────────────────────────


class TraderItem(BaseModel):
    """One entry in a trader's inventory (wire names are snake_case here)."""

    model_config = RECORD_CONFIG

    id: str
    name: str
    icon: Optional[str] = None
    value: Optional[float] = None
    rarity: Optional[str] = None
    item_type: Optional[str] = None
    description: Optional[str] = None
    trader_price: Optional[float] = None


class Trader(BaseModel):
    model_config = RECORD_CONFIG

    id: str
    name: str
    location: Optional[str] = None
    inventory: Optional[list[TraderItem]] = None
    icon: Optional[str] = None
