"""Expand/collapse bookkeeping for group and category headers.

Absent keys mean "closed". Closing a group keeps its category flags so a
plain re-open restores the previous layout; only ``collapse_group_fully``
forgets them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


def category_key(group: str, category: str) -> str:
    """Return the disclosure key for one (group, category) pair."""
    return f"{group}::{category}"


@dataclass
class DisclosureState:
    """Open flags for groups and for (group, category) pairs."""

    open_groups: dict[str, bool] = field(default_factory=dict)
    open_categories: dict[str, bool] = field(default_factory=dict)

    def is_group_open(self, group: str) -> bool:
        return self.open_groups.get(group, False)

    def is_category_open(self, group: str, category: str) -> bool:
        return self.open_categories.get(category_key(group, category), False)

    def set_group_open(self, group: str, is_open: bool) -> bool:
        """Set one group's flag and return whether it changed."""
        if self.is_group_open(group) == is_open:
            return False
        self.open_groups[group] = is_open
        return True

    def set_category_open(self, group: str, category: str, is_open: bool) -> bool:
        """Set one category's flag and return whether it changed."""
        if self.is_category_open(group, category) == is_open:
            return False
        self.open_categories[category_key(group, category)] = is_open
        return True

    def toggle_group(self, group: str) -> None:
        self.open_groups[group] = not self.is_group_open(group)

    def toggle_category(self, group: str, category: str) -> None:
        key = category_key(group, category)
        self.open_categories[key] = not self.open_categories.get(key, False)

    def expand_group_fully(self, group: str, categories: Iterable[str]) -> None:
        """Open ``group`` and every category listed under it."""
        self.open_groups[group] = True
        for category in categories:
            self.open_categories[category_key(group, category)] = True

    def collapse_group_fully(self, group: str, categories: Iterable[str]) -> None:
        """Close ``group`` and drop its category flags entirely."""
        self.open_groups[group] = False
        for category in categories:
            self.open_categories.pop(category_key(group, category), None)

    def clear(self) -> None:
        self.open_groups.clear()
        self.open_categories.clear()

    def snapshot(self) -> tuple[frozenset[str], frozenset[str]]:
        """Return hashable open-key sets, used as a view cache key."""
        return (
            frozenset(group for group, is_open in self.open_groups.items() if is_open),
            frozenset(key for key, is_open in self.open_categories.items() if is_open),
        )
