"""Single mutable state record owned by ``BrowserController``."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..entries import Entry
from ..tree_model import DisclosureState, SearchState, VisibleNode

FOCUS_SEARCH = "search"
FOCUS_TREE = "tree"


@dataclass
class AppState:
    entries: tuple[Entry, ...]
    search: SearchState = field(default_factory=SearchState)
    disclosure: DisclosureState = field(default_factory=DisclosureState)
    visible: list[VisibleNode] = field(default_factory=list)
    focused_idx: int = -1
    selected: Entry | None = None
    focus: str = FOCUS_SEARCH
    left_width: int = 32
    tree_rows: int = 20
    tree_start: int = 0
    detail_start: int = 0
    show_help: bool = False
    dirty: bool = True
