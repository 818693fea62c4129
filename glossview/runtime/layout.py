"""Pane-width and viewport helpers."""

from __future__ import annotations


def compute_left_width(total_width: int) -> int:
    """Choose tree-pane width from total terminal width."""
    if total_width <= 60:
        return max(16, total_width // 2)
    return max(20, min(40, total_width // 3))


def follow_cursor(tree_start: int, focused_idx: int, rows: int, total: int) -> int:
    """Return a viewport start that keeps ``focused_idx`` within ``rows`` rows."""
    rows = max(1, rows)
    if focused_idx >= 0:
        if focused_idx < tree_start:
            tree_start = focused_idx
        elif focused_idx >= tree_start + rows:
            tree_start = focused_idx - rows + 1
    return max(0, min(tree_start, max(0, total - rows)))


def clamp_scroll(start: int, total: int, rows: int) -> int:
    """Clamp a scroll offset so the last page stays full."""
    return max(0, min(start, max(0, total - max(1, rows))))
