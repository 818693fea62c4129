"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (tree/detail/help/chrome). Syntax
highlighting style for pre-formatted definitions remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    tree_marker: str
    tree_group: str
    tree_category: str
    tree_item: str
    tree_empty: str
    search_prompt: str
    search_query: str
    search_placeholder: str
    search_status: str
    detail_term: str
    detail_tag: str
    detail_hint: str
    type_ahead: str
    help_heading: str
    help_key: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    tree_marker="\033[38;5;44m",
    tree_group="\033[1;34m",
    tree_category="\033[38;5;110m",
    tree_item="\033[38;5;252m",
    tree_empty="\033[2;38;5;250m",
    search_prompt="\033[1;38;5;81m",
    search_query="\033[1;38;5;81m",
    search_placeholder="\033[2;38;5;250m",
    search_status="\033[38;5;109m",
    detail_term="\033[1;38;5;229m",
    detail_tag="\033[38;5;42m",
    detail_hint="\033[2;38;5;250m",
    type_ahead="\033[38;5;214m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    tree_marker="\033[38;5;39m",
    tree_group="\033[1;38;5;45m",
    tree_category="\033[38;5;117m",
    tree_item="\033[38;5;252m",
    tree_empty="\033[2;38;5;110m",
    search_prompt="\033[1;38;5;45m",
    search_query="\033[1;38;5;45m",
    search_placeholder="\033[2;38;5;110m",
    search_status="\033[38;5;73m",
    detail_term="\033[1;38;5;153m",
    detail_tag="\033[38;5;84m",
    detail_hint="\033[2;38;5;110m",
    type_ahead="\033[38;5;215m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    tree_marker="",
    tree_group="",
    tree_category="",
    tree_item="",
    tree_empty="",
    search_prompt="",
    search_query="",
    search_placeholder="",
    search_status="",
    detail_term="",
    detail_tag="",
    detail_hint="",
    type_ahead="",
    help_heading="",
    help_key="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
