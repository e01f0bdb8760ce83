"""
Item models — a tagged union over the ``type`` field.

The API returns weapons and armour from the same ``/items`` endpoint as every
other item; they differ only in which optional fields are populated. They are
therefore modelled as sibling variants sharing one field set, selected by the
``type`` tag:

  ``"weapon"``  → ``Weapon``
  ``"armor"``   → ``Armor``
  anything else → ``Item``

``AnyItem`` is the annotated union used for parsing; ``parse_item()`` and
``parse_items()`` are the entry points used by the client.

All records are frozen and keep unknown API fields (``extra="allow"``) so that
exports round-trip whatever the server sent.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
)

RECORD_CONFIG = ConfigDict(
    frozen=True,
    extra="allow",
    populate_by_name=True,
    coerce_numbers_to_str=True,
)

RARITIES = ("Common", "Uncommon", "Rare", "Epic", "Legendary")

ITEM_TYPES = frozenset({
    "weapon", "armor", "consumable", "material", "quest_item", "other",
})

WEAPON_TYPES = frozenset({
    "assault_rifle", "sniper_rifle", "pistol", "shotgun", "smg", "lmg", "melee",
})

ARMOR_SLOTS = frozenset({"head", "chest", "arms", "legs", "backpack"})


class _ItemFields(BaseModel):
    """Field set shared by every item variant."""

    model_config = RECORD_CONFIG

    id: str
    name: str
    description: Optional[str] = None
    rarity: Optional[str] = None
    icon: Optional[str] = None


class Item(_ItemFields):
    """Any item that is neither a weapon nor armour."""

    type: Optional[str] = None


class Weapon(_ItemFields):
    """A weapon item (``type == "weapon"``).

    Attributes:
        damage: Damage per hit.
        fire_rate: Rounds per minute (wire name ``fireRate``).
        range: Effective range.
        weapon_type: One of ``WEAPON_TYPES`` when known (wire name ``weaponType``).
    """

    type: Literal["weapon"] = "weapon"
    damage: Optional[float] = None
    fire_rate: Optional[float] = Field(default=None, alias="fireRate")
    range: Optional[float] = None
    weapon_type: Optional[str] = Field(default=None, alias="weaponType")


class Armor(_ItemFields):
    """An armour item (``type == "armor"``)."""

    type: Literal["armor"] = "armor"
    armor_value: Optional[float] = Field(default=None, alias="armorValue")
    slot: Optional[str] = None


def _item_tag(value: Any) -> str:
    """Pick the union variant from a raw dict or an already-built model."""
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    if kind in ("weapon", "armor"):
        return kind
    return "item"


AnyItem = Annotated[
    Union[
        Annotated[Weapon, Tag("weapon")],
        Annotated[Armor, Tag("armor")],
        Annotated[Item, Tag("item")],
    ],
    Discriminator(_item_tag),
]

_ITEM_ADAPTER: TypeAdapter = TypeAdapter(AnyItem)
_ITEM_LIST_ADAPTER: TypeAdapter = TypeAdapter(list[AnyItem])


def parse_item(raw: Any) -> Union[Item, Weapon, Armor]:
    """Validate one raw API object into the matching item variant."""
    return _ITEM_ADAPTER.validate_python(raw)


def parse_items(raw: list[Any]) -> list[Union[Item, Weapon, Armor]]:
    """Validate a list of raw API objects into item variants."""
    return _ITEM_LIST_ADAPTER.validate_python(raw)
