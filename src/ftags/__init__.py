"""Plain-text file tagging: one ``path: tag, tag`` line per file.

Layout:
    .ftags                  # the database (one record per line)
    ftags.toml              # optional project config

Record grammar:
    <path>: <tag>, <tag>, ...
    tag   = name | name:value | name:[item item ...]

Example:
    foo/b.jpg: file_type:jpg, img_tags:[1girl solo standing long_hair]

Single writer: there is no locking; each command reads, mutates and
rewrites the whole file.
"""

from ftags.codec import (
    decode_database,
    decode_record,
    decode_tag,
    decode_value,
    encode_database,
    encode_record,
    encode_tag,
    encode_value,
)
from ftags.config import FtagsConfig, init_config, load_config
from ftags.errors import (
    FormatError,
    FtagsError,
    MalformedRecord,
    MalformedTag,
    MalformedValue,
    NotFound,
    StorageError,
)
from ftags.matcher import SearchResult, list_tags, render_search, search
from ftags.models import ListValue, Record, Scalar, Tag
from ftags.reader import FileStore

__all__ = [
    "FileStore",
    "FormatError",
    "FtagsConfig",
    "FtagsError",
    "ListValue",
    "MalformedRecord",
    "MalformedTag",
    "MalformedValue",
    "NotFound",
    "Record",
    "Scalar",
    "SearchResult",
    "StorageError",
    "Tag",
    "decode_database",
    "decode_record",
    "decode_tag",
    "decode_value",
    "encode_database",
    "encode_record",
    "encode_tag",
    "encode_value",
    "init_config",
    "list_tags",
    "load_config",
    "render_search",
    "search",
]
