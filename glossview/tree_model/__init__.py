"""Tree-model creation, disclosure, search matching, and index navigation.

Defines the three ``VisibleNode`` variants and the pure visible-list builder.
Nothing in this package holds state between calls.
"""

from __future__ import annotations

from .build import build_visible_nodes, categories_for_group, group_outline
from .disclosure import DisclosureState, category_key
from .navigation import (
    clamp_index,
    first_group_index,
    index_of_key,
    last_group_index,
    next_category_index,
    next_group_index,
    relocate_index,
    tier_jump_index,
    type_ahead_index,
)
from .search import (
    DEFAULT_SEARCH_FIELDS,
    SEARCH_FIELDS,
    MatchPredicate,
    SearchState,
    make_matcher,
    term_matches,
)
from .types import CategoryHeader, GroupHeader, Item, NodeKey, VisibleNode

__all__ = [
    "GroupHeader",
    "CategoryHeader",
    "Item",
    "VisibleNode",
    "NodeKey",
    "SearchState",
    "MatchPredicate",
    "SEARCH_FIELDS",
    "DEFAULT_SEARCH_FIELDS",
    "term_matches",
    "make_matcher",
    "DisclosureState",
    "category_key",
    "build_visible_nodes",
    "group_outline",
    "categories_for_group",
    "clamp_index",
    "first_group_index",
    "last_group_index",
    "next_group_index",
    "next_category_index",
    "tier_jump_index",
    "type_ahead_index",
    "index_of_key",
    "relocate_index",
]
