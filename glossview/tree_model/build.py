"""Visible-list construction from entries, search state, and disclosure state."""

from __future__ import annotations

from collections.abc import Sequence

from ..entries import Entry
from .disclosure import DisclosureState
from .search import MatchPredicate, SearchState, term_matches
from .types import CategoryHeader, GroupHeader, Item, VisibleNode

GroupOutline = dict[str, dict[str, list[Entry]]]


def group_outline(entries: Sequence[Entry]) -> GroupOutline:
    """Group entries by group then category, keeping first-appearance order."""
    outline: GroupOutline = {}
    for entry in entries:
        outline.setdefault(entry.group, {}).setdefault(entry.category, []).append(entry)
    return outline


def categories_for_group(entries: Sequence[Entry], group: str) -> list[str]:
    """Return category names under ``group`` in dataset order."""
    return list(dict.fromkeys(entry.category for entry in entries if entry.group == group))


def build_visible_nodes(
    entries: Sequence[Entry],
    search: SearchState,
    disclosure: DisclosureState,
    matches: MatchPredicate = term_matches,
) -> list[VisibleNode]:
    """Return the ordered rows a user would see, top to bottom.

    Search mode flattens matching entries into ``Item`` rows with no headers.
    Browse mode emits headers and honors open flags; a closed group hides all
    of its categories regardless of their own flags. Inputs are never mutated.
    """
    query = search.normalized_query
    if query:
        return [Item(entry) for entry in entries if matches(query, entry)]

    nodes: list[VisibleNode] = []
    for group, categories in group_outline(entries).items():
        nodes.append(GroupHeader(group))
        if not disclosure.is_group_open(group):
            continue
        for category, category_entries in categories.items():
            nodes.append(CategoryHeader(group, category))
            if not disclosure.is_category_open(group, category):
                continue
            nodes.extend(Item(entry) for entry in category_entries)
    return nodes
