"""Keyboard dispatch for the search field and the tree.

One token is resolved per call, in a fixed priority order where the first
matching branch wins:

1. quit, mouse, and global shortcuts (``/``, ``Ctrl+K``, ``Esc``, help)
2. search-field text editing when the field holds input focus
3. type-ahead capture of plain printable characters
4. tree navigation: tier jumps, full expand/collapse, linear movement,
   activation, and directional disclosure
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..runtime.controller import BrowserController
from ..runtime.state import FOCUS_SEARCH
from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import KeyEvent, parse_key

QUIT_KEYS = frozenset({"CTRL_C", "CTRL_Q"})
HELP_KEYS = frozenset({"CTRL_QUESTION", "F1"})


@dataclass(frozen=True)
class KeyOutcome:
    """Result of one key: whether the default action is suppressed, and quit."""

    handled: bool
    quit: bool = False


NOT_HANDLED = KeyOutcome(handled=False)
HANDLED = KeyOutcome(handled=True)


def _default_page_rows() -> int:
    return 10


def _ignore_mouse(_key: str) -> bool:
    return False


@dataclass(frozen=True)
class KeyContext:
    """Controller plus the presentation hooks key handling needs."""

    controller: BrowserController
    page_rows: Callable[[], int] = _default_page_rows
    handle_mouse: Callable[[str], bool] = _ignore_mouse


def _toggle_help(controller: BrowserController) -> None:
    state = controller.state
    state.show_help = not state.show_help
    state.dirty = True


def _handle_global(event: KeyEvent, controller: BrowserController) -> KeyOutcome | None:
    combo = event.combo
    if combo in HELP_KEYS:
        _toggle_help(controller)
        return HANDLED
    if combo == "ESC":
        controller.reset()
        return HANDLED
    if combo == "CTRL_K":
        controller.focus_search()
        return HANDLED
    if combo == "/" and controller.state.focus != FOCUS_SEARCH:
        controller.focus_search()
        return HANDLED
    return None


def _handle_search_field(event: KeyEvent, controller: BrowserController) -> KeyOutcome:
    """Edit the query while the search field holds input focus."""
    if event.is_character and not event.has_command_modifier and (event.char or "").isprintable():
        controller.insert_query_text(event.char or "")
        return HANDLED

    registry = KeyComboRegistry().register_bindings(
        KeyComboBinding(("BACKSPACE",), controller.delete_query_char),
        KeyComboBinding(("CTRL_U",), controller.clear_query),
        KeyComboBinding(("CTRL_W",), controller.delete_query_word),
        KeyComboBinding(("DOWN", "ENTER", "TAB"), controller.focus_tree),
    )
    if event.combo not in registry:
        return NOT_HANDLED
    registry.dispatch(event.combo)
    return HANDLED


def _handle_type_ahead(event: KeyEvent, controller: BrowserController) -> KeyOutcome | None:
    """Capture plain printable characters for type-to-select."""
    if not event.is_character or event.has_command_modifier:
        return None
    ch = event.char or ""
    if not ch.isprintable():
        return None
    # Space keeps its activation meaning unless a buffer is already running.
    if ch == " " and not controller.type_ahead.active:
        return None
    controller.type_ahead_char(ch)
    return HANDLED


def _tree_registry(controller: BrowserController, page_rows: Callable[[], int]) -> KeyComboRegistry:
    def page(direction: int) -> Callable[[], bool]:
        return lambda: controller.move_cursor(direction * max(1, page_rows()))

    def edge(direction: int) -> Callable[[], bool]:
        return lambda: controller.move_cursor(direction * max(1, len(controller.visible)))

    def focus_search() -> None:
        controller.focus_search()

    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("META_UP",), lambda: controller.jump_to_edge_group(-1)),
        KeyComboBinding(("META_DOWN",), lambda: controller.jump_to_edge_group(1)),
        KeyComboBinding(("ALT_UP",), lambda: controller.tier_jump(-1)),
        KeyComboBinding(("ALT_DOWN",), lambda: controller.tier_jump(1)),
        KeyComboBinding(("ALT_RIGHT",), lambda: controller.set_focused_group_fully(True)),
        KeyComboBinding(("ALT_LEFT",), lambda: controller.set_focused_group_fully(False)),
        KeyComboBinding(("UP",), lambda: controller.move_cursor(-1)),
        KeyComboBinding(("DOWN",), lambda: controller.move_cursor(1)),
        KeyComboBinding(("PAGE_UP",), page(-1)),
        KeyComboBinding(("PAGE_DOWN",), page(1)),
        KeyComboBinding(("HOME", "CTRL_HOME"), edge(-1)),
        KeyComboBinding(("END", "CTRL_END"), edge(1)),
        KeyComboBinding(("ENTER", " "), controller.activate),
        KeyComboBinding(("RIGHT",), lambda: controller.set_focused_open(True)),
        KeyComboBinding(("LEFT",), lambda: controller.set_focused_open(False)),
        KeyComboBinding(("TAB", "SHIFT_TAB"), focus_search),
    )


def handle_key(key: str, context: KeyContext) -> KeyOutcome:
    """Resolve one key token against the current state."""
    controller = context.controller
    if key in QUIT_KEYS:
        return KeyOutcome(handled=True, quit=True)
    if key.startswith("MOUSE"):
        controller.type_ahead.clear()
        return HANDLED if context.handle_mouse(key) else NOT_HANDLED

    event = parse_key(key)
    outcome = _handle_global(event, controller)
    if outcome is not None:
        return outcome

    if controller.state.focus == FOCUS_SEARCH:
        return _handle_search_field(event, controller)

    outcome = _handle_type_ahead(event, controller)
    if outcome is not None:
        return outcome

    if event.combo == "BACKSPACE" and controller.type_ahead.active:
        controller.type_ahead_backspace()
        return HANDLED

    # Any other key ends the current type-ahead run.
    controller.type_ahead.clear()
    registry = _tree_registry(controller, context.page_rows)
    if event.combo not in registry:
        return NOT_HANDLED
    registry.dispatch(event.combo)
    return HANDLED


class KeyDispatcher:
    """Reusable dispatcher bound to one ``KeyContext``."""

    def __init__(self, context: KeyContext) -> None:
        self.context = context

    def handle(self, key: str) -> KeyOutcome:
        return handle_key(key, self.context)
