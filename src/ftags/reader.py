"""Read and write the ``.ftags`` database file.

FileStore is the public API:
    store = FileStore("/path/to/project/.ftags")
    record = store.tags_for("foo/b.jpg")
    store.add("foo/b.jpg", [decode_tag("file_type:jpg")])
    result = store.search([decode_tag("file_type")])

Every call re-reads the file; nothing is cached between calls. Writes go to
a temp file next to the database which is then renamed over it, so a failed
decode or a failed write never leaves a half-written database behind.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ftags.codec import decode_database, encode_database
from ftags.errors import NotFound, StorageError
from ftags.matcher import list_tags, search
from ftags.mutate import add_tags, find_record, remove_tags

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ftags.matcher import SearchResult
    from ftags.models import Record, Tag

logger = logging.getLogger("ftags.reader")


class FileStore:
    """Text-file backed tag database."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    # ------------------------------------------------------------------
    # Raw text
    # ------------------------------------------------------------------

    def read_text(self) -> str:
        """Raw database text; a missing file reads as empty."""
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("%s does not exist, treating as empty", self.path)
            return ""
        except OSError as exc:
            msg = f"Cannot read {self.path}: {exc}"
            raise StorageError(msg) from exc
        except UnicodeDecodeError as exc:
            msg = f"Cannot read {self.path}: not valid UTF-8 ({exc.reason} at byte {exc.start})"
            raise StorageError(msg) from exc

    def write_text(self, text: str) -> None:
        """Atomically replace the database file with text."""
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            msg = f"Cannot write {self.path}: {exc}"
            raise StorageError(msg) from exc

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def load(self) -> list[Record]:
        """Decode the whole file. Raises MalformedRecord on any bad line."""
        records = decode_database(self.read_text())
        logger.debug("loaded %d record(s) from %s", len(records), self.path)
        return records

    def store(self, records: Sequence[Record]) -> None:
        """Encode records and write them with exactly one trailing newline."""
        text = encode_database(records)
        self.write_text(text + "\n" if text else "")
        logger.debug("stored %d record(s) to %s", len(records), self.path)

    def exists(self) -> bool:
        return self.path.exists()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def tags_for(self, path: str) -> Record:
        """The record for path. Raises NotFound."""
        record = find_record(self.load(), path)
        if record is None or not record.tags:
            msg = f"No tags for `{path}`."
            raise NotFound(msg)
        return record

    def add(self, path: str, tags: Sequence[Tag]) -> Record:
        """Add tags to path and write back. Returns the updated record."""
        records = self.load()
        record = add_tags(records, path, tags)
        self.store(records)
        logger.info("added %d tag(s) to %s", len(tags), path)
        return record

    def remove(self, path: str, tags: Sequence[Tag] = ()) -> list[Tag]:
        """Remove tags (or the whole record) for path and write back."""
        records = self.load()
        removed = remove_tags(records, path, tags)
        self.store(records)
        logger.info("removed %d tag(s) from %s", len(removed), path)
        return removed

    def search(self, query: Sequence[Tag]) -> SearchResult:
        return search(self.load(), query)

    def list_tags(self) -> list[Tag]:
        return list_tags(self.load())
