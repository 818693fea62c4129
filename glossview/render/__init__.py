"""Rendering engine for the split tree/detail terminal view.

Defines render context data and composes full ANSI frames.
Frames are built from state snapshots without mutating runtime state.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..entries import Entry
from ..tree_model import DisclosureState, VisibleNode
from ..ui_theme import DEFAULT_THEME, UITheme
from .ansi import clip_ansi_line, pad_ansi_line, strip_ansi
from .detail import EMPTY_DETAIL_HINT, detail_lines
from .help import help_panel_lines, help_panel_row_count
from .tree import format_tree_row, render_tree_rows, selected_with_ansi

SEARCH_PROMPT = "/ "
SEARCH_PLACEHOLDER = "search terms…"
DIVIDER = "│"


@dataclass
class RenderContext:
    nodes: Sequence[VisibleNode]
    disclosure: DisclosureState
    focused_idx: int
    selected: Entry | None
    raw_query: str
    focus: str
    width: int
    height: int
    left_width: int
    tree_start: int = 0
    detail_start: int = 0
    type_ahead: str = ""
    show_help: bool = False
    style: str = "monokai"
    no_color: bool = False
    theme: UITheme = field(default=DEFAULT_THEME)


def build_status_line(left_text: str, width: int, right_text: str = "│ Ctrl+? Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def layout_rows(height: int, show_help: bool, focus: str) -> tuple[int, int]:
    """Return ``(body_rows, help_rows)`` for a terminal ``height``.

    One row is reserved for the search prompt and one for the status line.
    """
    help_rows = help_panel_row_count(height, show_help, focus)
    body_rows = max(1, height - 2 - help_rows)
    return body_rows, help_rows


def _search_row(context: RenderContext) -> str:
    theme = context.theme
    prompt = f"{theme.search_prompt}{SEARCH_PROMPT}{theme.reset}"
    if context.raw_query:
        query = f"{theme.search_query}{context.raw_query}{theme.reset}"
    else:
        query = f"{theme.search_placeholder}{SEARCH_PLACEHOLDER}{theme.reset}"
    caret = "█" if context.focus == "search" else ""
    segments: list[str] = []
    if context.type_ahead:
        segments.append(f"{theme.type_ahead}find: {context.type_ahead}{theme.reset}")
    if context.raw_query.strip():
        count = len(context.nodes)
        label = "no matches" if count == 0 else f"{count} match" + ("" if count == 1 else "es")
        segments.append(f"{theme.search_status}{label}{theme.reset}")
    status = "  ".join(segments)
    left = f"{prompt}{query}{caret}"
    width = context.width
    status_width = len(strip_ansi(status))
    if status and status_width + 2 < width:
        return pad_ansi_line(left, width - status_width - 1) + " " + status
    return pad_ansi_line(left, width)


def _status_text(context: RenderContext) -> str:
    mode = "search" if context.raw_query.strip() else "browse"
    parts = [mode]
    if context.nodes:
        position = context.focused_idx + 1 if context.focused_idx >= 0 else 0
        parts.append(f"{position}/{len(context.nodes)}")
    if context.selected is not None:
        parts.append(context.selected.term)
    return "  ".join(parts)


def render_frame(context: RenderContext) -> str:
    """Compose one complete ANSI frame for the current state."""
    theme = context.theme
    width = max(1, context.width)
    body_rows, help_rows = layout_rows(context.height, context.show_help, context.focus)
    left_width = max(1, min(context.left_width, width - 2))
    right_width = max(1, width - left_width - 1)

    tree_rows = render_tree_rows(
        context.nodes,
        context.disclosure,
        tree_start=context.tree_start,
        rows=body_rows,
        width=left_width,
        focused_idx=context.focused_idx,
        search_query=context.raw_query.strip(),
        theme=theme,
    )
    detail = detail_lines(
        context.selected,
        right_width - 1,
        style=context.style,
        no_color=context.no_color,
        theme=theme,
    )
    detail_view = detail[context.detail_start : context.detail_start + body_rows]

    out: list[str] = ["\033[H\033[J"]
    out.append(_search_row(context))
    out.append(f"{theme.reset}\r\n")
    for row in range(body_rows):
        right = detail_view[row] if row < len(detail_view) else ""
        out.append(tree_rows[row])
        out.append(f"{theme.divider}{DIVIDER}{theme.reset} ")
        out.append(clip_ansi_line(right, right_width - 1))
        out.append(f"{theme.reset}\r\n")
    for line in help_panel_lines(context.focus, theme)[:help_rows]:
        out.append(clip_ansi_line(line, width))
        out.append(f"{theme.reset}\r\n")
    out.append(theme.reverse)
    out.append(build_status_line(_status_text(context), width))
    out.append(theme.reset)
    return "".join(out)


def write_frame(fd: int, frame: str) -> None:
    os.write(fd, frame.encode("utf-8", errors="replace"))


def render_tree_text(nodes: Sequence[VisibleNode], disclosure: DisclosureState, search_mode: bool) -> str:
    """Return plain-text tree rows, one per line, for non-interactive output."""
    lines = [strip_ansi(format_tree_row(node, disclosure, search_mode)) for node in nodes]
    return "".join(f"{line}\n" for line in lines)


__all__ = [
    "RenderContext",
    "EMPTY_DETAIL_HINT",
    "build_status_line",
    "detail_lines",
    "layout_rows",
    "render_frame",
    "render_tree_text",
    "selected_with_ansi",
    "write_frame",
]
