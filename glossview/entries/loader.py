"""Dataset loading and normalization into ``Entry`` records.

Two JSON shapes are accepted. The grouped shape is a list of
``{"group", "categories": [{"name", "items": [{"term", "definition", "tags"}]}]}``
records; the flat shape is a list of ``{"term", "category", "definition"}``
records with optional ``group`` and ``tags``. Either list may be wrapped in a
top-level ``{"groups": [...]}`` or ``{"entries": [...]}`` object.

Malformed input is rejected with ``DatasetError`` before any entry is built.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from .types import Entry

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "Glossary"


class DatasetError(ValueError):
    """Raised when a dataset cannot be read or does not match a known shape."""


def _require_text(record: dict, key: str, where: str) -> str:
    """Return a stripped non-empty string field or raise ``DatasetError``."""
    if key not in record:
        raise DatasetError(f'{where}: missing "{key}"')
    value = record[key]
    if not isinstance(value, str):
        raise DatasetError(f'{where}: "{key}" must be a string, got {type(value).__name__}')
    stripped = value.strip()
    if not stripped:
        raise DatasetError(f'{where}: "{key}" must not be empty')
    return stripped


def _definition(record: dict, where: str) -> str | tuple[str, ...]:
    """Normalize a paragraph or list-of-lines definition."""
    if "definition" not in record:
        raise DatasetError(f'{where}: missing "definition"')
    value = record["definition"]
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        for line_idx, line in enumerate(value):
            if not isinstance(line, str):
                raise DatasetError(f'{where}: "definition"[{line_idx}] must be a string')
        # Pre-formatted lines keep their indentation.
        return tuple(line.rstrip("\r\n") for line in value)
    raise DatasetError(f'{where}: "definition" must be a string or a list of strings')


def _tags(record: dict, where: str) -> frozenset[str]:
    """Normalize optional tags into a frozenset of stripped strings."""
    value = record.get("tags")
    if value is None:
        return frozenset()
    if not isinstance(value, list):
        raise DatasetError(f'{where}: "tags" must be a list of strings')
    tags: set[str] = set()
    for tag_idx, tag in enumerate(value):
        if not isinstance(tag, str):
            raise DatasetError(f'{where}: "tags"[{tag_idx}] must be a string')
        if tag.strip():
            tags.add(tag.strip())
    return frozenset(tags)


def _require_record(value: object, where: str) -> dict:
    if not isinstance(value, dict):
        raise DatasetError(f"{where}: expected an object, got {type(value).__name__}")
    return value


def _require_list(record: dict, key: str, where: str) -> list:
    value = record.get(key)
    if not isinstance(value, list):
        raise DatasetError(f'{where}: "{key}" must be a list')
    return value


def _entries_from_group(record: dict, where: str) -> Iterable[Entry]:
    """Yield entries of one grouped-shape record in dataset order."""
    group = _require_text(record, "group", where)
    for category_idx, raw_category in enumerate(_require_list(record, "categories", where)):
        category_where = f"{where}.categories[{category_idx}]"
        category_record = _require_record(raw_category, category_where)
        category = _require_text(category_record, "name", category_where)
        for item_idx, raw_item in enumerate(_require_list(category_record, "items", category_where)):
            item_where = f"{category_where}.items[{item_idx}]"
            item = _require_record(raw_item, item_where)
            yield Entry(
                group=group,
                category=category,
                term=_require_text(item, "term", item_where),
                definition=_definition(item, item_where),
                tags=_tags(item, item_where),
            )


def _entry_from_flat(record: dict, where: str) -> Entry:
    """Build one entry from a flat-shape record."""
    group = _require_text(record, "group", where) if "group" in record else DEFAULT_GROUP
    return Entry(
        group=group,
        category=_require_text(record, "category", where),
        term=_require_text(record, "term", where),
        definition=_definition(record, where),
        tags=_tags(record, where),
    )


def normalize_entries(data: object) -> tuple[Entry, ...]:
    """Normalize parsed JSON data of either supported shape into entries.

    Records are classified one by one: a record carrying ``categories`` is a
    grouped record, anything else is a flat record. Entry order follows the
    input order exactly.
    """
    label = "entries"
    if isinstance(data, dict):
        if "groups" in data:
            data, label = data["groups"], "groups"
        elif "entries" in data:
            data = data["entries"]
        else:
            raise DatasetError('dataset object must contain a "groups" or "entries" list')
    if not isinstance(data, list):
        raise DatasetError(f"dataset must be a list, got {type(data).__name__}")

    entries: list[Entry] = []
    for record_idx, raw_record in enumerate(data):
        where = f"{label}[{record_idx}]"
        record = _require_record(raw_record, where)
        if "categories" in record:
            entries.extend(_entries_from_group(record, where))
        else:
            entries.append(_entry_from_flat(record, where))

    seen: set[tuple[str, str, str]] = set()
    for entry in entries:
        key = (entry.group, entry.category, entry.term)
        if key in seen:
            logger.debug("duplicate term %r in %s / %s", entry.term, entry.group, entry.category)
        seen.add(key)
    return tuple(entries)


def load_entries(path: Path) -> tuple[Entry, ...]:
    """Read and normalize a JSON dataset file.

    File-system and JSON decoding failures are re-raised as ``DatasetError``
    with the offending path in the message.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DatasetError(f"{path}: cannot read dataset ({exc.strerror or exc})") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DatasetError(f"{path}: invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}") from exc
    entries = normalize_entries(data)
    logger.debug("loaded %d entries from %s", len(entries), path)
    return entries
