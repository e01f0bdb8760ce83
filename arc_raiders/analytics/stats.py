"""
Descriptive statistics over fetched weapons, armour and items.

All functions are pure and read only; they never touch the client or cache.
Missing numeric attributes (``None``) are skipped when summarizing and count
as ``0`` when ranking.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass
from typing import Iterable, Optional, Sequence

from arc_raiders.models.item import Armor, Weapon

WEAPON_CRITERIA = ("damage", "fire_rate", "range")


@dataclass(frozen=True)
class Stats:
    """Summary of a numeric series."""

    count: int
    average: float
    min: float
    max: float
    sum: float

    def to_dict(self) -> dict:
        return asdict(self)


def calculate_stats(values: Sequence[float]) -> Stats:
    """Count, mean (2 dp), min, max and sum of ``values``; all zero if empty."""
    if not values:
        return Stats(count=0, average=0, min=0, max=0, sum=0)
    total = sum(values)
    return Stats(
        count=len(values),
        average=round(total / len(values), 2),
        min=min(values),
        max=max(values),
        sum=total,
    )


def _numeric(values: Iterable[Optional[float]]) -> list[float]:
    return [v for v in values if isinstance(v, (int, float)) and not isinstance(v, bool)]


def weapon_stats(weapons: Sequence[Weapon]) -> dict[str, Stats]:
    """Stats for damage, fire rate and range.

    A key is only present when at least one weapon reports that attribute.
    """
    result: dict[str, Stats] = {}
    for attr in WEAPON_CRITERIA:
        values = _numeric(getattr(w, attr, None) for w in weapons)
        if values:
            result[attr] = calculate_stats(values)
    return result


def armor_stats(armor: Sequence[Armor]) -> dict[str, Stats]:
    values = _numeric(getattr(a, "armor_value", None) for a in armor)
    return {"armor": calculate_stats(values)} if values else {}


def rarity_distribution(items: Iterable) -> dict[str, int]:
    """Item count per rarity as reported by the API; unset → ``"unknown"``."""
    return dict(Counter(getattr(item, "rarity", None) or "unknown" for item in items))


def find_best_weapon(
    weapons: Sequence[Weapon],
    criteria: str = "damage",
) -> Optional[Weapon]:
    """The weapon with the highest ``criteria`` value; the first wins ties.

    Raises:
        ValueError: If ``criteria`` is not one of ``WEAPON_CRITERIA``.
    """
    if criteria not in WEAPON_CRITERIA:
        raise ValueError(
            f"Unknown weapon criteria '{criteria}'. Must be one of {list(WEAPON_CRITERIA)}."
        )
    if not weapons:
        return None
    # max() keeps the first of equal elements
    return max(weapons, key=lambda w: getattr(w, criteria, None) or 0)


def find_best_armor(armor: Sequence[Armor], criteria: str = "armor") -> Optional[Armor]:
    if criteria != "armor":
        raise ValueError(f"Unknown armor criteria '{criteria}'. Must be 'armor'.")
    if not armor:
        return None
    return max(armor, key=lambda a: getattr(a, "armor_value", None) or 0)
