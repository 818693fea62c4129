"""Detail-pane rendering for the selected entry.

Paragraph definitions are word-wrapped to the pane width. Pre-formatted
definitions are kept line-for-line and syntax highlighted when one of the
entry's tags names a pygments lexer.
"""

from __future__ import annotations

import textwrap

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from ..entries import Entry
from ..ui_theme import DEFAULT_THEME, UITheme

EMPTY_DETAIL_HINT = "Select a term on the left to see its definition."
FALLBACK_STYLE = "monokai"

_FORMATTERS: dict[str, Terminal256Formatter] = {}


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = FALLBACK_STYLE
    formatter = Terminal256Formatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def lexer_for_tags(tags: frozenset[str]) -> Lexer | None:
    """Return the first pygments lexer named by a tag, in sorted tag order."""
    for tag in sorted(tags):
        try:
            return get_lexer_by_name(tag.lower(), stripnl=False)
        except ClassNotFound:
            continue
    return None


def highlight_preformatted(lines: tuple[str, ...], tags: frozenset[str], style: str) -> list[str]:
    """Return ANSI-highlighted lines, or the input lines when no lexer applies."""
    lexer = lexer_for_tags(tags)
    if lexer is None or not lines:
        return list(lines)
    rendered = pygments_highlight("\n".join(lines) + "\n", lexer, _formatter_for_style(style))
    highlighted = rendered.rstrip("\n").split("\n")
    # Lexers may strip leading blank lines; fall back to verbatim text then.
    if len(highlighted) != len(lines):
        return list(lines)
    return highlighted


def wrap_paragraphs(text: str, width: int) -> list[str]:
    """Word-wrap each source line of ``text``, keeping blank separator lines."""
    out: list[str] = []
    for paragraph in text.splitlines() or [""]:
        if not paragraph.strip():
            out.append("")
            continue
        out.extend(textwrap.wrap(paragraph, width=max(1, width)) or [""])
    return out


def detail_lines(
    entry: Entry | None,
    width: int,
    *,
    style: str = FALLBACK_STYLE,
    no_color: bool = False,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Return the full (unscrolled) detail-pane content for ``entry``."""
    reset = theme.reset
    if entry is None:
        return [f"{theme.detail_hint}{EMPTY_DETAIL_HINT}{reset}"]

    lines = [
        f"{theme.detail_term}{entry.term}{reset}",
        f"{theme.detail_hint}{entry.group} › {entry.category}{reset}",
    ]
    if entry.tags:
        lines.append(" ".join(f"{theme.detail_tag}#{tag}{reset}" for tag in sorted(entry.tags)))
    lines.append("")
    if isinstance(entry.definition, tuple):
        if no_color:
            lines.extend(entry.definition)
        else:
            lines.extend(highlight_preformatted(entry.definition, entry.tags, style))
    else:
        lines.extend(wrap_paragraphs(entry.definition, width))
    return lines
