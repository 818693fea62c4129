"""Visible-list index navigation helpers."""

from __future__ import annotations

from collections.abc import Sequence

from .types import CategoryHeader, GroupHeader, Item, NodeKey, VisibleNode


def clamp_index(idx: int, length: int) -> int:
    """Clamp ``idx`` into ``[0, length - 1]``, or ``-1`` for an empty list."""
    if length <= 0:
        return -1
    return max(0, min(idx, length - 1))


def first_group_index(nodes: Sequence[VisibleNode]) -> int | None:
    """Return index of the first group header."""
    for idx, node in enumerate(nodes):
        if isinstance(node, GroupHeader):
            return idx
    return None


def last_group_index(nodes: Sequence[VisibleNode]) -> int | None:
    """Return index of the last group header."""
    for idx in range(len(nodes) - 1, -1, -1):
        if isinstance(nodes[idx], GroupHeader):
            return idx
    return None


def _scan(
    nodes: Sequence[VisibleNode],
    selected_idx: int,
    direction: int,
    node_type: type,
) -> int | None:
    if not nodes or direction == 0:
        return None
    step = 1 if direction > 0 else -1
    idx = selected_idx + step
    while 0 <= idx < len(nodes):
        if isinstance(nodes[idx], node_type):
            return idx
        idx += step
    return None


def next_group_index(nodes: Sequence[VisibleNode], selected_idx: int, direction: int) -> int | None:
    """Return next group header index in the requested direction."""
    return _scan(nodes, selected_idx, direction, GroupHeader)


def next_category_index(nodes: Sequence[VisibleNode], selected_idx: int, direction: int) -> int | None:
    """Return next category header index in the requested direction."""
    return _scan(nodes, selected_idx, direction, CategoryHeader)


def tier_jump_index(nodes: Sequence[VisibleNode], selected_idx: int, direction: int) -> int | None:
    """Return the Alt+Up/Down destination from ``selected_idx``.

    Group headers hop to the neighbouring group header; other rows move to
    the nearest row one tier up in ``direction``.
    """
    if not 0 <= selected_idx < len(nodes):
        return None
    if isinstance(nodes[selected_idx], Item):
        return next_category_index(nodes, selected_idx, direction)
    # Group headers and category headers both land on group headers.
    return next_group_index(nodes, selected_idx, direction)


def type_ahead_index(nodes: Sequence[VisibleNode], prefix: str) -> int | None:
    """Return the first row whose label starts with ``prefix`` (case-insensitive)."""
    if not prefix:
        return None
    folded = prefix.lower()
    for idx, node in enumerate(nodes):
        if node.label.lower().startswith(folded):
            return idx
    return None


def index_of_key(nodes: Sequence[VisibleNode], key: NodeKey) -> int | None:
    """Return the first row carrying ``key``; duplicates resolve to the earliest."""
    for idx, node in enumerate(nodes):
        if node.key == key:
            return idx
    return None


def relocate_index(
    nodes: Sequence[VisibleNode],
    previous_key: NodeKey | None,
    previous_idx: int,
) -> int:
    """Re-find a previously focused row, falling back to a clamped index."""
    if previous_idx < 0 and previous_key is None:
        return -1
    if previous_key is not None:
        found = index_of_key(nodes, previous_key)
        if found is not None:
            return found
    return clamp_index(previous_idx, len(nodes))
