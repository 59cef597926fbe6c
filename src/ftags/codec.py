"""Encode and decode the ``.ftags`` text format.

One record per line:

    <path>: <tag>, <tag>, ...

    tag   = name | name:value
    value = text | [item item ...]

Example:

    foo/b.jpg: file_type:jpg, img_tags:[1girl solo standing long_hair]
    .cargo/bin: directory, child_content_type:binary, misc_info:[rust cargo]

There is no escape mechanism: ``:``, ``,``, ``[``, ``]`` and space cannot
appear inside paths, names or list items. The first ``:`` on a line always
ends the path and the first ``:`` in a tag always ends the name.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ftags.errors import FormatError, MalformedRecord, MalformedTag, MalformedValue
from ftags.models import RESERVED_NAME_CHARS, ListValue, Record, Scalar, Tag

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ftags.models import TagValue

logger = logging.getLogger("ftags.codec")

_SEP = ":"
_TAG_SEP = ","
_RESERVED_SCALAR_CHARS = frozenset(",\n")
_RESERVED_ITEM_CHARS = frozenset("[],\n")

# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


def _strip_item(item: str) -> str:
    # Writers sometimes leave a bracket on each item; drop at most one per side.
    if item.startswith("["):
        item = item[1:]
    if item.endswith("]"):
        item = item[:-1]
    return item.strip()


def decode_value(text: str) -> TagValue:
    """Decode a scalar or ``[a b c]`` list value.

    Values that could not be written back unchanged (a ``,`` anywhere, a
    bracket inside a list item) raise MalformedValue.
    """
    if not text:
        msg = "empty tag value"
        raise MalformedValue(msg)

    if text.startswith("[") and text.endswith("]"):
        items = tuple(i for i in (_strip_item(s) for s in text[1:-1].split(" ")) if i)
        for item in items:
            bad = _RESERVED_ITEM_CHARS.intersection(item)
            if bad:
                msg = f"reserved character(s) {''.join(sorted(bad))!r} in list item {item!r}"
                raise MalformedValue(msg)
        return ListValue(items)

    bad = _RESERVED_SCALAR_CHARS.intersection(text)
    if bad:
        msg = f"reserved character(s) {''.join(sorted(bad))!r} in value"
        raise MalformedValue(msg)
    return Scalar(text)


def encode_value(value: TagValue) -> str:
    if isinstance(value, ListValue):
        return "[" + " ".join(value.items) + "]"
    return value.text


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


def decode_tag(text: str) -> Tag:
    """Decode ``name`` or ``name:value``."""
    name, sep, rest = text.partition(_SEP)
    if not name:
        msg = "empty tag name"
        raise MalformedTag(msg, line=text)
    bad = RESERVED_NAME_CHARS.intersection(name)
    if bad:
        msg = f"reserved character(s) {''.join(sorted(bad))!r} in tag name"
        raise MalformedTag(msg, line=text)

    if not sep:
        return Tag(name)

    try:
        value = decode_value(rest)
    except MalformedValue as exc:
        msg = f"bad value for tag {name!r}: {exc.message}"
        raise MalformedTag(msg, line=text) from exc
    return Tag(name, value)


def encode_tag(tag: Tag) -> str:
    if tag.value is None:
        return tag.name
    return f"{tag.name}{_SEP}{encode_value(tag.value)}"


def check_tag(tag: Tag) -> None:
    """Raise MalformedTag unless tag survives an encode/decode round trip."""
    text = encode_tag(tag)
    if decode_tag(text.strip()) != tag:
        msg = "tag would not read back unchanged"
        raise MalformedTag(msg, line=text)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


def decode_record(line: str) -> Record:
    """Decode one ``path: tag, tag`` line."""
    path, sep, tags_text = line.partition(_SEP)
    if not sep:
        msg = "missing ':' between path and tags"
        raise MalformedRecord(msg, line=line)
    path = path.strip()
    if not path:
        msg = "empty path"
        raise MalformedRecord(msg, line=line)

    tags: list[Tag] = []
    if tags_text.strip():
        for piece in tags_text.split(_TAG_SEP):
            try:
                tags.append(decode_tag(piece.strip()))
            except MalformedTag as exc:
                exc.line = line
                raise
    return Record(path=path, tags=tags)


def check_path(path: str) -> None:
    """Raise MalformedRecord for a path the format cannot store."""
    if not path or path != path.strip():
        msg = "path is empty or has surrounding whitespace"
        raise MalformedRecord(msg, line=path)
    if _SEP in path or "\n" in path:
        msg = "':' and newlines cannot appear in a path"
        raise MalformedRecord(msg, line=path)


def encode_record(record: Record) -> str:
    """Encode a record; a record without tags encodes to ``""``."""
    if not record.tags:
        return ""
    return f"{record.path}{_SEP} " + f"{_TAG_SEP} ".join(encode_tag(t) for t in record.tags)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


def decode_database(text: str) -> list[Record]:
    """Decode a whole database. Any bad line aborts the decode."""
    records: list[Record] = []
    for lineno, raw in enumerate(text.split("\n"), start=1):
        line = raw.strip()
        if not line:
            continue
        try:
            records.append(decode_record(line))
        except FormatError as exc:
            raise MalformedRecord(exc.message, line=line, lineno=lineno) from exc
    logger.debug("decoded %d record(s)", len(records))
    return records


def encode_database(records: Iterable[Record]) -> str:
    """Encode records one per line, without a trailing newline.

    Records with no tags are dropped.
    """
    lines = (encode_record(r) for r in records)
    return "\n".join(line for line in lines if line)
