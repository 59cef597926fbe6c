"""Tag search and tag listing over a decoded database.

A query is a list of tags. For every (file tag, query tag) pair with the
same name the record is a *partial* match; it is a *full* match when the
query tag has no value or its value equals the file tag's value exactly.
Query tags are OR-ed: one matching pair anywhere is enough.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ftags.models import Record, Tag

logger = logging.getLogger("ftags.matcher")

_INDENT = "    "


@dataclass
class SearchResult:
    """Sorted full and partial matches. A full match is also a partial one."""

    full: list[Record] = field(default_factory=list)
    partial: list[Record] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.full or self.partial)


def classify(record: Record, query: Sequence[Tag]) -> tuple[bool, bool]:
    """Return (full, partial) for one record."""
    full = partial = False
    for file_tag in record.tags:
        for query_tag in query:
            if file_tag.name != query_tag.name:
                continue
            partial = True
            if query_tag.value is None or query_tag.value == file_tag.value:
                full = True
    return full, partial


def search(records: Iterable[Record], query: Sequence[Tag]) -> SearchResult:
    """Classify every record against query. Results keep duplicates."""
    result = SearchResult()
    for record in records:
        full, partial = classify(record, query)
        if partial:
            result.partial.append(record)
        if full:
            result.full.append(record)

    result.full.sort(key=lambda r: r.sort_key())
    result.partial.sort(key=lambda r: r.sort_key())
    logger.debug(
        "search %s: %d full, %d partial",
        [str(t) for t in query], len(result.full), len(result.partial),
    )
    return result


def _block(records: list[Record]) -> str:
    return f"\n{_INDENT}".join(str(r) for r in records)


def render_search(result: SearchResult) -> str:
    """Render results as text sections.

    The partial section is omitted when it would repeat the full section.
    """
    sections: list[str] = []
    full_block = _block(result.full)
    if result.full:
        sections.append(f"Full matches:\n{_INDENT}{full_block}")
    if result.partial:
        partial_block = _block(result.partial)
        if not (result.full and partial_block == full_block):
            sections.append(f"Partial Matches:\n{_INDENT}{partial_block}")
    return "\n\n".join(sections)


def list_tags(records: Iterable[Record]) -> list[Tag]:
    """Every tag in the database once, sorted by (name, value)."""
    tags = sorted((t for r in records for t in r.tags), key=lambda t: t.sort_key())
    unique: list[Tag] = []
    for tag in tags:
        if not unique or unique[-1] != tag:
            unique.append(tag)
    return unique
