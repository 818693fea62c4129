"""Interactive session bootstrap.

Builds the controller, key and mouse handlers, and terminal controller, then
hands control to the event loop. Timers are always cancelled on exit.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from functools import partial

from ..entries import Entry
from ..input import KeyContext, KeyDispatcher, TreeMouseHandler
from ..render import write_frame
from ..tree_model import make_matcher
from ..ui_theme import resolve_theme
from .controller import BrowserController
from .loop import RenderOptions, run_main_loop
from .terminal import TerminalController
from .type_ahead import TYPE_AHEAD_TIMEOUT_MS

logger = logging.getLogger(__name__)


def build_session(
    entries: Sequence[Entry],
    search_fields: Sequence[str] = ("term",),
    type_ahead_ms: int = TYPE_AHEAD_TIMEOUT_MS,
) -> tuple[BrowserController, KeyDispatcher]:
    """Wire a controller to its key dispatcher and mouse handler."""
    controller = BrowserController(
        entries,
        matches=make_matcher(search_fields),
        type_ahead_ms=type_ahead_ms,
    )
    mouse = TreeMouseHandler(controller)
    dispatcher = KeyDispatcher(
        KeyContext(
            controller=controller,
            page_rows=lambda: controller.state.tree_rows,
            handle_mouse=mouse.handle,
        )
    )
    return controller, dispatcher


def run_browser(
    entries: Sequence[Entry],
    *,
    theme_name: str | None = None,
    style: str = "monokai",
    no_color: bool = False,
    search_fields: Sequence[str] = ("term",),
    type_ahead_ms: int = TYPE_AHEAD_TIMEOUT_MS,
) -> None:
    """Run the interactive browser on the current terminal."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    controller, dispatcher = build_session(entries, search_fields, type_ahead_ms)
    options = RenderOptions(
        theme=resolve_theme(theme_name, no_color=no_color),
        style=style,
        no_color=no_color,
    )
    terminal = TerminalController(stdin_fd, stdout_fd)
    logger.info("session start: %d entries, search fields %s", len(controller.state.entries), list(search_fields))
    try:
        run_main_loop(controller, terminal, dispatcher, options, partial(write_frame, stdout_fd))
    finally:
        controller.close()
        logger.info("session end")
