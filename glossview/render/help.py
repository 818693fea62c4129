"""Help panel content for search-field and tree focus.

Rendering helpers here are presentation-only and side-effect free.
"""

from __future__ import annotations

from ..ui_theme import DEFAULT_THEME, UITheme

_SEARCH_BINDINGS: tuple[tuple[tuple[str, str], ...], ...] = (
    (("Type/Backspace", "edit query"), ("Ctrl+U", "clear"), ("Ctrl+W", "word")),
    (("Down/Enter/Tab", "move to results"),),
    (("Esc", "reset everything"), ("Ctrl+C", "quit")),
)

_TREE_BINDINGS: tuple[tuple[tuple[str, str], ...], ...] = (
    (("Up/Down", "move"), ("Left/Right", "close/open"), ("Enter/Space", "toggle/select")),
    (("Alt+Up/Down", "jump a tier up"), ("Cmd+Up/Down", "first/last group")),
    (("Alt+Left/Right", "collapse/expand group fully"), ("Home/End/PgUp/PgDn", "")),
    (("letters", "type to select"), ("/ or Ctrl+K", "search")),
    (("Esc", "reset"), ("Tab", "search field"), ("Ctrl+C", "quit")),
)


def _binding_line(theme: UITheme, bindings: tuple[tuple[str, str], ...]) -> str:
    parts = []
    for key, description in bindings:
        part = f"{theme.help_key}{key}{theme.reset}"
        if description:
            part += f" {theme.help_dim}{description}{theme.reset}"
        parts.append(part)
    return "  ".join(parts)


def help_panel_lines(focus: str, theme: UITheme = DEFAULT_THEME) -> tuple[str, ...]:
    """Return keybinding lines for the element holding input focus."""
    heading = f"{theme.help_heading}{'SEARCH' if focus == 'search' else 'TREE'}{theme.reset}"
    bindings = _SEARCH_BINDINGS if focus == "search" else _TREE_BINDINGS
    return (heading, *(_binding_line(theme, line) for line in bindings))


def help_panel_row_count(max_lines: int, show_help: bool, focus: str) -> int:
    """Return rows reserved for the help panel, leaving room for content."""
    if not show_help:
        return 0
    wanted = len(help_panel_lines(focus))
    return max(0, min(wanted, max_lines - 3))
