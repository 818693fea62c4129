"""Visible-list node datatypes used across tree-pane modules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..entries import Entry

NodeKey = tuple[str, ...]

TIER_GROUP = 0
TIER_CATEGORY = 1
TIER_ITEM = 2


@dataclass(frozen=True)
class GroupHeader:
    """Top-tier row heading one group."""

    group: str

    @property
    def key(self) -> NodeKey:
        return ("group", self.group)

    @property
    def label(self) -> str:
        return self.group

    @property
    def tier(self) -> int:
        return TIER_GROUP


@dataclass(frozen=True)
class CategoryHeader:
    """Middle-tier row heading one category inside a group."""

    group: str
    category: str

    @property
    def key(self) -> NodeKey:
        return ("category", self.group, self.category)

    @property
    def label(self) -> str:
        return self.category

    @property
    def tier(self) -> int:
        return TIER_CATEGORY


@dataclass(frozen=True)
class Item:
    """Leaf row for one entry."""

    entry: Entry

    @property
    def key(self) -> NodeKey:
        return ("item", self.entry.group, self.entry.category, self.entry.term)

    @property
    def label(self) -> str:
        return self.entry.term

    @property
    def tier(self) -> int:
        return TIER_ITEM


VisibleNode = Union[GroupHeader, CategoryHeader, Item]
