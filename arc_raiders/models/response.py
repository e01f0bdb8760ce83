"""
Response envelopes: one page of a list endpoint, and search results.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from arc_raiders.models.item import AnyItem
from arc_raiders.models.world import ArcMission, Quest, Trader


class Pagination(BaseModel):
    """The ``pagination`` block of a list response."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    page: int = 1
    limit: int = 0
    total: int = 0
    total_pages: int = Field(default=0, alias="totalPages")
    has_next_page: bool = Field(default=False, alias="hasNextPage")
    has_prev_page: bool = Field(default=False, alias="hasPrevPage")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null fields fall back to their defaults; a null hasNextPage is the last page
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class PagedResponse(BaseModel):
    """One page of a list endpoint.

    ``data`` holds the raw records; the client parses them into domain models
    once they are merged into the accumulator. A missing or null ``data`` is an
    empty page.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    data: list[Any] = []
    pagination: Optional[Pagination] = None

    @field_validator("data", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def has_next_page(self) -> bool:
        return self.pagination.has_next_page if self.pagination else False


class SearchResults(BaseModel):
    """Result of ``ArcRaidersClient.search()``.

    Only ``items`` is populated today; the other collections are reserved for
    when the API exposes search on those resources.
    """

    model_config = ConfigDict(frozen=True)

    items: list[AnyItem] = []
    quests: Optional[list[Quest]] = None
    arcs: Optional[list[ArcMission]] = None
    traders: Optional[list[Trader]] = None
