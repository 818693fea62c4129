"""Tree-pane row formatting for the visible list."""

from __future__ import annotations

from collections.abc import Sequence

from ..tree_model import CategoryHeader, DisclosureState, GroupHeader, Item, VisibleNode
from ..ui_theme import DEFAULT_THEME, UITheme
from .ansi import pad_ansi_line

OPEN_MARKER = "▼"
CLOSED_MARKER = "▶"
ITEM_MARKER = "·"


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def format_tree_row(
    node: VisibleNode,
    disclosure: DisclosureState,
    search_mode: bool = False,
    theme: UITheme = DEFAULT_THEME,
) -> str:
    """Return one styled tree row with indentation and disclosure marker."""
    reset = theme.reset
    if isinstance(node, GroupHeader):
        marker = OPEN_MARKER if disclosure.is_group_open(node.group) else CLOSED_MARKER
        return f"{theme.tree_marker}{marker}{reset} {theme.tree_group}{node.group}{reset}"
    if isinstance(node, CategoryHeader):
        is_open = disclosure.is_category_open(node.group, node.category)
        marker = OPEN_MARKER if is_open else CLOSED_MARKER
        return f"  {theme.tree_marker}{marker}{reset} {theme.tree_category}{node.category}{reset}"
    if isinstance(node, Item):
        if search_mode:
            entry = node.entry
            context = f" {theme.tree_empty}{entry.group} / {entry.category}{reset}"
            return f"{theme.tree_item}{entry.term}{reset}{context}"
        return f"    {theme.tree_marker}{ITEM_MARKER}{reset} {theme.tree_item}{node.entry.term}{reset}"
    raise TypeError(f"unsupported visible node: {node!r}")


def render_tree_rows(
    nodes: Sequence[VisibleNode],
    disclosure: DisclosureState,
    *,
    tree_start: int,
    rows: int,
    width: int,
    focused_idx: int,
    search_query: str = "",
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Return exactly ``rows`` padded rows of the tree viewport."""
    out: list[str] = []
    if not nodes:
        if search_query:
            placeholder = f"no matches for {search_query!r}"
        else:
            placeholder = "no entries"
        out.append(pad_ansi_line(f"{theme.tree_empty}{placeholder}{theme.reset}", width))
    for idx in range(tree_start, min(len(nodes), tree_start + rows)):
        text = pad_ansi_line(
            format_tree_row(nodes[idx], disclosure, bool(search_query), theme),
            width,
        )
        out.append(selected_with_ansi(text) if idx == focused_idx else text)
    while len(out) < rows:
        out.append(" " * width)
    return out[:rows]
