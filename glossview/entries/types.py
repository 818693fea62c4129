"""Immutable glossary entry record shared by every layer."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Entry:
    """One dictionary record: group, category, term, definition, and tags.

    ``definition`` is either one paragraph or a tuple of pre-formatted lines.
    """

    group: str
    category: str
    term: str
    definition: str | tuple[str, ...]
    tags: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_preformatted(self) -> bool:
        """Return whether the definition is a sequence of verbatim lines."""
        return isinstance(self.definition, tuple)

    def definition_text(self) -> str:
        """Return the definition as a single newline-joined string."""
        if isinstance(self.definition, tuple):
            return "\n".join(self.definition)
        return self.definition
