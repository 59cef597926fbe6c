"""Exception types raised by the codec, the store and the mutation helpers."""

from __future__ import annotations


class FtagsError(Exception):
    """Base class for every error raised by ftags."""


class FormatError(FtagsError):
    """Text could not be decoded.

    ``line`` is the offending database line and ``lineno`` its 1-based
    position, when known.
    """

    def __init__(self, message: str, *, line: str | None = None, lineno: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.lineno = lineno

    def __str__(self) -> str:
        if self.lineno is not None:
            return f"line {self.lineno}: {self.message}: {self.line!r}"
        if self.line is not None:
            return f"{self.message}: {self.line!r}"
        return self.message


class MalformedRecord(FormatError):
    """A line lacks the path/tag separator or failed to decode as a whole."""


class MalformedTag(FormatError):
    """A single ``name[:value]`` unit is invalid."""


class MalformedValue(FormatError):
    """A tag value is empty or otherwise undecodable."""


class StorageError(FtagsError):
    """The database file could not be read or written."""


class NotFound(FtagsError, LookupError):
    """A path (or a tag on it) is absent from the database."""
