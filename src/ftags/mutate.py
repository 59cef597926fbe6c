"""In-memory Add / Remove / lookup on a decoded database."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ftags.codec import check_path, check_tag
from ftags.errors import NotFound
from ftags.models import Record

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ftags.models import Tag

logger = logging.getLogger("ftags.mutate")


def find_record(records: Sequence[Record], path: str) -> Record | None:
    """First record for path. Later duplicates are ignored."""
    for record in records:
        if record.matches_path(path):
            return record
    return None


def add_tags(records: list[Record], path: str, tags: Sequence[Tag]) -> Record:
    """Attach tags to path, appending a new record when path is unknown.

    Tags already on the record are skipped. Raises MalformedRecord or
    MalformedTag, before touching records, for a path or tag that would
    not read back unchanged.
    """
    check_path(path)
    for tag in tags:
        check_tag(tag)

    record = find_record(records, path)
    if record is None:
        record = Record(path=path)
        records.append(record)
        logger.debug("new record for %s", path)

    for tag in tags:
        if not record.has_tag(tag):
            record.tags.append(tag)
    return record


def _removes(query_tag: Tag, file_tag: Tag) -> bool:
    # Name-only removes any value; a valued tag removes only an exact match.
    if file_tag.name != query_tag.name:
        return False
    return query_tag.value is None or query_tag.value == file_tag.value


def remove_tags(records: list[Record], path: str, tags: Sequence[Tag] = ()) -> list[Tag]:
    """Remove tags from every record for path; no tags means all of them.

    Records left without tags are deleted. Returns the removed tags.
    Raises NotFound if path is absent or none of tags is present.
    """
    targets = [r for r in records if r.matches_path(path)]
    if not targets:
        msg = f"No tags for `{path}`."
        raise NotFound(msg)

    removed: list[Tag] = []
    for record in targets:
        kept: list[Tag] = []
        for file_tag in record.tags:
            if not tags or any(_removes(q, file_tag) for q in tags):
                removed.append(file_tag)
            else:
                kept.append(file_tag)
        record.tags = kept

    if not removed:
        if not tags:
            msg = f"No tags for `{path}`."
            raise NotFound(msg)
        wanted = ", ".join(str(t) for t in tags)
        msg = f"`{path}` has none of: {wanted}"
        raise NotFound(msg)

    # Second pass: drop emptied records, highest index first.
    empty = [i for i, r in enumerate(records) if not r.tags]
    for i in reversed(empty):
        logger.debug("dropping empty record %s", records[i].path)
        del records[i]
    return removed
