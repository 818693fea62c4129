"""Main interactive event loop for the terminal UI.

Coordinates layout bookkeeping, rendering, deferred timers, and input
dispatch. Each key is fully resolved before the next frame is drawn.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import KeyDispatcher, read_key
from ..render import RenderContext, detail_lines, layout_rows, render_frame
from ..ui_theme import DEFAULT_THEME, UITheme
from .controller import BrowserController
from .layout import clamp_scroll, compute_left_width, follow_cursor
from .terminal import TerminalController

IDLE_POLL_MS = 250


@dataclass(frozen=True)
class RenderOptions:
    """Presentation settings fixed for the lifetime of one session."""

    theme: UITheme = DEFAULT_THEME
    style: str = "monokai"
    no_color: bool = False


def update_layout(controller: BrowserController, columns: int, lines: int, options: RenderOptions) -> None:
    """Recompute pane geometry and clamp viewports against the current state."""
    state = controller.state
    body_rows, _help_rows = layout_rows(lines, state.show_help, state.focus)
    left_width = compute_left_width(columns)
    if (left_width, body_rows) != (state.left_width, state.tree_rows):
        state.left_width = left_width
        state.tree_rows = body_rows
        state.dirty = True

    tree_start = follow_cursor(state.tree_start, state.focused_idx, body_rows, len(state.visible))
    if tree_start != state.tree_start:
        state.tree_start = tree_start
        state.dirty = True

    right_width = max(1, columns - left_width - 1)
    total_detail = len(
        detail_lines(
            state.selected,
            right_width - 1,
            style=options.style,
            no_color=True,
            theme=options.theme,
        )
    )
    detail_start = clamp_scroll(state.detail_start, total_detail, body_rows)
    if detail_start != state.detail_start:
        state.detail_start = detail_start
        state.dirty = True


def build_render_context(
    controller: BrowserController,
    columns: int,
    lines: int,
    options: RenderOptions,
) -> RenderContext:
    state = controller.state
    return RenderContext(
        nodes=state.visible,
        disclosure=state.disclosure,
        focused_idx=state.focused_idx,
        selected=state.selected,
        raw_query=state.search.raw_query,
        focus=state.focus,
        width=columns,
        height=lines,
        left_width=state.left_width,
        tree_start=state.tree_start,
        detail_start=state.detail_start,
        type_ahead=controller.type_ahead.chars,
        show_help=state.show_help,
        style=options.style,
        no_color=options.no_color,
        theme=options.theme,
    )


def next_read_timeout_ms(controller: BrowserController) -> int:
    """Wait no longer than the pending type-ahead deadline."""
    remaining = controller.timer.seconds_until_due()
    if remaining is None:
        return IDLE_POLL_MS
    return max(0, min(IDLE_POLL_MS, int(remaining * 1000) + 1))


def run_main_loop(
    controller: BrowserController,
    terminal: TerminalController,
    dispatcher: KeyDispatcher,
    options: RenderOptions,
    write: Callable[[str], None],
) -> None:
    """Run the interactive loop until a quit key arrives or input ends."""
    state = controller.state
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            if (term.columns, term.lines) != last_size:
                last_size = (term.columns, term.lines)
                state.dirty = True
            update_layout(controller, term.columns, term.lines, options)

            if state.dirty:
                write(render_frame(build_render_context(controller, term.columns, term.lines, options)))
                state.dirty = False

            key = read_key(terminal.stdin_fd, timeout_ms=next_read_timeout_ms(controller))
            # Expire a stale type-ahead buffer before the new key can extend it.
            controller.tick()
            if not key:
                continue
            if dispatcher.handle(key).quit:
                return
