"""Mouse handling for the search row, tree pane, and detail pane.

Screen rows are 1-based: row 1 holds the search prompt and tree rows start at
row 2. Columns up to ``state.left_width`` belong to the tree pane.
"""

from __future__ import annotations

from ..runtime.controller import BrowserController

SEARCH_ROW = 1
TREE_FIRST_ROW = 2
DETAIL_WHEEL_STEP = 3


def parse_mouse_col_row(mouse_key: str) -> tuple[int | None, int | None]:
    """Extract 1-based ``(col, row)`` from ``MOUSE_*:col:row`` tokens."""
    parts = mouse_key.split(":")
    if len(parts) < 3:
        return None, None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None, None


class TreeMouseHandler:
    """Translate mouse tokens into controller operations."""

    def __init__(self, controller: BrowserController) -> None:
        self.controller = controller

    def _tree_index_at(self, col: int, row: int) -> int | None:
        state = self.controller.state
        if col > state.left_width:
            return None
        offset = row - TREE_FIRST_ROW
        if offset < 0 or offset >= state.tree_rows:
            return None
        idx = state.tree_start + offset
        if idx >= len(state.visible):
            return None
        return idx

    def handle_click(self, mouse_key: str) -> bool:
        """Focus the search field or activate the clicked tree row."""
        if not mouse_key.startswith("MOUSE_LEFT_DOWN:"):
            # Release events are consumed so they do not reach key handling.
            return mouse_key.startswith("MOUSE_LEFT_UP:")
        col, row = parse_mouse_col_row(mouse_key)
        if col is None or row is None:
            return False
        if row == SEARCH_ROW:
            self.controller.focus_search()
            return True
        idx = self._tree_index_at(col, row)
        if idx is None:
            return False
        return self.controller.activate(idx)

    def handle_wheel(self, mouse_key: str) -> bool:
        """Move the cursor over the tree pane or scroll the detail pane."""
        direction = -1 if mouse_key.startswith("MOUSE_WHEEL_UP:") else 1
        col, _row = parse_mouse_col_row(mouse_key)
        if col is None:
            return False
        state = self.controller.state
        if col <= state.left_width:
            self.controller.move_cursor(direction)
            return True
        state.detail_start = max(0, state.detail_start + direction * DETAIL_WHEEL_STEP)
        state.dirty = True
        return True

    def handle(self, mouse_key: str) -> bool:
        if mouse_key.startswith("MOUSE_WHEEL_"):
            return self.handle_wheel(mouse_key)
        if mouse_key.startswith("MOUSE_LEFT_"):
            return self.handle_click(mouse_key)
        return False
