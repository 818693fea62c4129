"""Browser controller: the one owner of navigation and disclosure state.

Every mutation goes through a method here. After each mutation the visible
list is rebuilt, the cursor is relocated onto the same logical row (or clamped
when that row disappeared), and an ``Item`` under the cursor becomes the
selection. Selection is sticky across header focus.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..entries import Entry
from ..tree_model import (
    CategoryHeader,
    GroupHeader,
    Item,
    MatchPredicate,
    NodeKey,
    SearchState,
    VisibleNode,
    build_visible_nodes,
    categories_for_group,
    clamp_index,
    first_group_index,
    last_group_index,
    relocate_index,
    term_matches,
    tier_jump_index,
    type_ahead_index,
)
from .state import FOCUS_SEARCH, FOCUS_TREE, AppState
from .type_ahead import TYPE_AHEAD_TIMEOUT_MS, DeadlineTimer, TypeAheadBuffer

logger = logging.getLogger(__name__)

ViewCacheKey = tuple[str, tuple[frozenset[str], frozenset[str]]]


class BrowserController:
    """Owns ``AppState`` and exposes the navigation operations."""

    def __init__(
        self,
        entries: Sequence[Entry],
        matches: MatchPredicate = term_matches,
        timer: DeadlineTimer | None = None,
        type_ahead_ms: int = TYPE_AHEAD_TIMEOUT_MS,
    ) -> None:
        self.state = AppState(entries=tuple(entries))
        self.matches = matches
        self.timer = timer if timer is not None else DeadlineTimer()
        self.type_ahead = TypeAheadBuffer(self.timer, type_ahead_ms)
        self._view_cache_key: ViewCacheKey | None = None
        self._rebuild_visible()

    # -- derived views ------------------------------------------------------

    @property
    def visible(self) -> list[VisibleNode]:
        return self.state.visible

    @property
    def focused_idx(self) -> int:
        return self.state.focused_idx

    @property
    def selected(self) -> Entry | None:
        return self.state.selected

    @property
    def is_search_mode(self) -> bool:
        return self.state.search.is_search_mode

    def focused_node(self) -> VisibleNode | None:
        idx = self.state.focused_idx
        if 0 <= idx < len(self.state.visible):
            return self.state.visible[idx]
        return None

    def view_cache_key(self) -> ViewCacheKey:
        return (self.state.search.normalized_query, self.state.disclosure.snapshot())

    # -- synchronization ----------------------------------------------------

    def _rebuild_visible(self) -> None:
        """Recompute the visible list unless its inputs are unchanged."""
        cache_key = self.view_cache_key()
        if cache_key == self._view_cache_key:
            return
        self.state.visible = build_visible_nodes(
            self.state.entries,
            self.state.search,
            self.state.disclosure,
            self.matches,
        )
        self._view_cache_key = cache_key
        self.state.dirty = True

    def _anchor(self) -> tuple[NodeKey | None, int]:
        node = self.focused_node()
        return (node.key if node is not None else None, self.state.focused_idx)

    def _sync(self, anchor: tuple[NodeKey | None, int], take_focus: bool = True) -> None:
        """Rebuild the view, relocate the cursor, and auto-select items."""
        self._rebuild_visible()
        previous_key, previous_idx = anchor
        new_idx = relocate_index(self.state.visible, previous_key, previous_idx)
        if previous_key is not None and new_idx >= 0 and self.state.visible[new_idx].key != previous_key:
            logger.debug("focused row %r vanished; clamped to %d", previous_key, new_idx)
        self._set_cursor(new_idx, take_focus=take_focus)

    def _set_cursor(self, idx: int, take_focus: bool = True) -> None:
        if idx != -1:
            idx = clamp_index(idx, len(self.state.visible))
        if idx != self.state.focused_idx:
            self.state.focused_idx = idx
            self.state.dirty = True
        node = self.focused_node()
        if isinstance(node, Item) and node.entry is not self.state.selected:
            self._select(node.entry)
        # Never pull input focus away from the search field on query edits.
        if take_focus and idx >= 0 and self.state.focus != FOCUS_TREE:
            self.state.focus = FOCUS_TREE
            self.state.dirty = True

    def _select(self, entry: Entry | None) -> None:
        if entry is self.state.selected:
            return
        self.state.selected = entry
        self.state.detail_start = 0
        self.state.dirty = True

    # -- input focus --------------------------------------------------------

    def focus_search(self) -> None:
        if self.state.focus != FOCUS_SEARCH:
            self.state.focus = FOCUS_SEARCH
            self.state.dirty = True
        self.type_ahead.clear()

    def focus_tree(self) -> bool:
        """Give input focus to the tree, landing on the first row if none is focused."""
        if not self.state.visible:
            return False
        self.state.focus = FOCUS_TREE
        self.state.dirty = True
        if self.state.focused_idx < 0:
            self._set_cursor(0)
        return True

    # -- search -------------------------------------------------------------

    def set_query(self, raw_query: str) -> None:
        if raw_query == self.state.search.raw_query:
            return
        anchor = self._anchor()
        self.state.search = SearchState(raw_query)
        self.state.dirty = True
        self._sync(anchor, take_focus=False)

    def insert_query_text(self, text: str) -> None:
        self.set_query(self.state.search.raw_query + text)

    def delete_query_char(self) -> None:
        self.set_query(self.state.search.raw_query[:-1])

    def delete_query_word(self) -> None:
        trimmed = self.state.search.raw_query.rstrip()
        cut = trimmed.rfind(" ")
        self.set_query(trimmed[: cut + 1] if cut >= 0 else "")

    def clear_query(self) -> None:
        self.set_query("")

    def reset(self) -> None:
        """Clear query, disclosure, cursor, selection, and focus the search field."""
        self.type_ahead.clear()
        self.state.search = SearchState()
        self.state.disclosure.clear()
        self._rebuild_visible()
        self.state.focused_idx = -1
        self.state.tree_start = 0
        self._select(None)
        self.state.focus = FOCUS_SEARCH
        self.state.dirty = True

    # -- cursor movement ----------------------------------------------------

    def move_cursor(self, delta: int) -> bool:
        """Move the cursor by ``delta`` rows, clamped to the list bounds."""
        if not self.state.visible:
            return False
        start = self.state.focused_idx
        target = clamp_index(start + delta, len(self.state.visible))
        self._set_cursor(target)
        return target != start

    def move_cursor_to(self, idx: int) -> bool:
        if not 0 <= idx < len(self.state.visible):
            return False
        previous = self.state.focused_idx
        self._set_cursor(idx)
        return idx != previous

    def jump_to_edge_group(self, direction: int) -> bool:
        """Focus the first (``direction < 0``) or last group header."""
        target = first_group_index(self.state.visible) if direction < 0 else last_group_index(self.state.visible)
        if target is None:
            return False
        return self.move_cursor_to(target)

    def tier_jump(self, direction: int) -> bool:
        target = tier_jump_index(self.state.visible, self.state.focused_idx, direction)
        if target is None:
            return False
        return self.move_cursor_to(target)

    # -- disclosure ---------------------------------------------------------

    def _categories(self, group: str) -> list[str]:
        return categories_for_group(self.state.entries, group)

    def _mutate_disclosure(self, description: str, mutation: Callable[[], object]) -> None:
        anchor = self._anchor()
        mutation()
        logger.debug("disclosure: %s", description)
        self._sync(anchor)

    def toggle_group(self, group: str) -> None:
        self._mutate_disclosure(
            f"toggle group {group!r}",
            lambda: self.state.disclosure.toggle_group(group),
        )

    def toggle_category(self, group: str, category: str) -> None:
        self._mutate_disclosure(
            f"toggle category {group!r}/{category!r}",
            lambda: self.state.disclosure.toggle_category(group, category),
        )

    def expand_group_fully(self, group: str) -> None:
        categories = self._categories(group)
        self._mutate_disclosure(
            f"expand group {group!r} fully",
            lambda: self.state.disclosure.expand_group_fully(group, categories),
        )

    def collapse_group_fully(self, group: str) -> None:
        categories = self._categories(group)
        self._mutate_disclosure(
            f"collapse group {group!r} fully",
            lambda: self.state.disclosure.collapse_group_fully(group, categories),
        )

    def set_focused_open(self, is_open: bool) -> bool:
        """Explicitly open or close the focused header; idempotent."""
        node = self.focused_node()
        disclosure = self.state.disclosure
        if isinstance(node, GroupHeader):
            if disclosure.is_group_open(node.group) == is_open:
                return True
            self._mutate_disclosure(
                f"set group {node.group!r} open={is_open}",
                lambda: disclosure.set_group_open(node.group, is_open),
            )
            return True
        if isinstance(node, CategoryHeader):
            if disclosure.is_category_open(node.group, node.category) == is_open:
                return True
            self._mutate_disclosure(
                f"set category {node.group!r}/{node.category!r} open={is_open}",
                lambda: disclosure.set_category_open(node.group, node.category, is_open),
            )
            return True
        return False

    def set_focused_group_fully(self, is_open: bool) -> bool:
        """Alt+Right/Left: fully expand a closed group or fully collapse an open one."""
        node = self.focused_node()
        if not isinstance(node, GroupHeader):
            return False
        if self.state.disclosure.is_group_open(node.group) == is_open:
            return False
        if is_open:
            self.expand_group_fully(node.group)
        else:
            self.collapse_group_fully(node.group)
        return True

    def activate(self, idx: int | None = None) -> bool:
        """Enter/Space/click: toggle a header or select an item."""
        if idx is not None and not self.move_cursor_to(idx) and idx != self.state.focused_idx:
            return False
        node = self.focused_node()
        if isinstance(node, GroupHeader):
            self.toggle_group(node.group)
            return True
        if isinstance(node, CategoryHeader):
            self.toggle_category(node.group, node.category)
            return True
        if isinstance(node, Item):
            self._select(node.entry)
            return True
        return False

    # -- type-ahead ---------------------------------------------------------

    def type_ahead_char(self, ch: str) -> bool:
        """Extend the type-ahead buffer and focus the first matching label."""
        prefix = self.type_ahead.push(ch)
        target = type_ahead_index(self.state.visible, prefix)
        if target is None:
            return False
        self.move_cursor_to(target)
        return True

    def type_ahead_backspace(self) -> bool:
        if not self.type_ahead.active:
            return False
        prefix = self.type_ahead.pop()
        target = type_ahead_index(self.state.visible, prefix)
        if target is not None:
            self.move_cursor_to(target)
        return True

    # -- lifecycle ----------------------------------------------------------

    def tick(self) -> bool:
        """Run due deferred callbacks; return whether any fired."""
        fired = self.timer.fire_due()
        if fired:
            self.state.dirty = True
        return fired

    def close(self) -> None:
        """Cancel outstanding timers so nothing fires against a closed controller."""
        self.type_ahead.clear()
        self.timer.cancel()
