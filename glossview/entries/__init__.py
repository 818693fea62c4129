"""Entry Store: the immutable, ordered glossary dataset.

Exposes the ``Entry`` record and loaders that normalize both supported JSON
dataset shapes (grouped and flat) into one ordered tuple of entries.
"""

from __future__ import annotations

from .loader import DEFAULT_GROUP, DatasetError, load_entries, normalize_entries
from .types import Entry

__all__ = [
    "Entry",
    "DatasetError",
    "DEFAULT_GROUP",
    "load_entries",
    "normalize_entries",
]
