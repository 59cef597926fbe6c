"""Data models for the tag database."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any

# Characters that are never allowed in a tag name (see codec for grammar).
RESERVED_NAME_CHARS = frozenset(":[],\n")


@dataclass(frozen=True)
class Scalar:
    """A single value: ``name:value``."""

    text: str

    def sort_key(self) -> tuple[Any, ...]:
        return (1, self.text)


@dataclass(frozen=True)
class ListValue:
    """A list value: ``name:[a b c]``. Empty and one-item lists stay lists."""

    items: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence but keep the instance hashable.
        object.__setattr__(self, "items", tuple(self.items))

    def sort_key(self) -> tuple[Any, ...]:
        return (2, self.items)


TagValue = Scalar | ListValue


def value_sort_key(value: TagValue | None) -> tuple[Any, ...]:
    """Total order on optional values: None < Scalar < ListValue."""
    if value is None:
        return (0,)
    return value.sort_key()


@dataclass(frozen=True)
class Tag:
    """A tag attached to a file, optionally carrying a value."""

    name: str
    value: TagValue | None = None

    def sort_key(self) -> tuple[Any, ...]:
        return (self.name, value_sort_key(self.value))

    def __lt__(self, other: Tag) -> bool:
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        from ftags.codec import encode_tag

        return encode_tag(self)


@dataclass
class Record:
    """One line of the database: a path and its ordered tags.

    Paths are compared and sorted in normalised form, so ``a//b``,
    ``a/b/`` and ``a/b`` name (and sort as) the same file.
    """

    path: str
    tags: list[Tag] = field(default_factory=list)

    def sort_key(self) -> tuple[Any, ...]:
        return (self.norm_path, tuple(t.sort_key() for t in self.tags))

    def __lt__(self, other: Record) -> bool:
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        from ftags.codec import encode_record

        return encode_record(self)

    @property
    def norm_path(self) -> str:
        return str(PurePath(self.path))

    def matches_path(self, path: str) -> bool:
        """True when path names the same file (``a/b/`` == ``a//b``)."""
        return PurePath(self.path) == PurePath(path)

    def has_tag(self, tag: Tag) -> bool:
        return tag in self.tags
