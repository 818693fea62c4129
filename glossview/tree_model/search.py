"""Search state and pluggable entry match predicates."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..entries import Entry

MatchPredicate = Callable[[str, Entry], bool]

SEARCH_FIELDS: tuple[str, ...] = ("term", "definition", "tags")
DEFAULT_SEARCH_FIELDS: tuple[str, ...] = ("term",)


@dataclass(frozen=True)
class SearchState:
    """Raw query text; mode is always derived, never stored."""

    raw_query: str = ""

    @property
    def normalized_query(self) -> str:
        return self.raw_query.lower().strip()

    @property
    def is_search_mode(self) -> bool:
        return bool(self.normalized_query)


def term_matches(query: str, entry: Entry) -> bool:
    """Return whether ``entry.term`` contains the normalized ``query``."""
    return query in entry.term.lower()


def make_matcher(fields: Iterable[str]) -> MatchPredicate:
    """Build a substring predicate over the requested entry fields.

    Unknown field names raise ``ValueError``; an empty selection falls back to
    term-only matching.
    """
    selected = tuple(dict.fromkeys(fields))
    unknown = [name for name in selected if name not in SEARCH_FIELDS]
    if unknown:
        raise ValueError(f"unknown search field(s): {', '.join(unknown)}")
    if not selected or selected == ("term",):
        return term_matches

    def matches(query: str, entry: Entry) -> bool:
        if "term" in selected and query in entry.term.lower():
            return True
        if "definition" in selected and query in entry.definition_text().lower():
            return True
        if "tags" in selected and any(query in tag.lower() for tag in entry.tags):
            return True
        return False

    return matches
