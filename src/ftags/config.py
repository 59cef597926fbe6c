"""FtagsConfig: project-local config for the tag database.

Default layout (all relative to the project root):

    ftags.toml            # optional project config
    .ftags                # the tag database

ftags.toml example:

    [ftags]
    database = ".ftags"

    [remove]
    confirm = true        # prompt before dropping a whole record

The FTAGS_DATABASE environment variable overrides the database path.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_CONFIG_FILENAME = "ftags.toml"
_DEFAULT_DATABASE = ".ftags"
_ENV_DATABASE = "FTAGS_DATABASE"


@dataclass
class RemoveConfig:
    confirm: bool = True    # ask before removing every tag of a file


@dataclass
class FtagsConfig:
    """Resolved configuration for a tagged project."""

    root: Path                      # directory holding ftags.toml / .ftags
    database_path: Path = field(default_factory=Path)
    remove: RemoveConfig = field(default_factory=RemoveConfig)

    def ensure_database(self) -> bool:
        """Create an empty database file. Returns False if it already existed."""
        if self.database_path.exists():
            return False
        self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self.database_path.touch()
        return True

    def relative_path(self, file: str) -> str:
        """FILE as typed in the current directory, relative to root.

        Records always store root-relative paths so a file keeps one name
        whichever subdirectory the command is run from.
        """
        rel = os.path.relpath(os.path.abspath(file), os.path.abspath(self.root))
        return Path(rel).as_posix()


def load_config(root: Path | str | None = None) -> FtagsConfig:
    """Load ftags.toml from root (or search upward from cwd if root is None)."""
    root_path = _find_root(Path(root) if root else Path.cwd())
    config_path = root_path / _CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("rb") as f:
            raw = tomllib.load(f)

    section = raw.get("ftags", {})
    rm_section = raw.get("remove", {})

    database = os.environ.get(_ENV_DATABASE) or section.get("database", _DEFAULT_DATABASE)

    return FtagsConfig(
        root=root_path,
        database_path=root_path / database,
        remove=RemoveConfig(
            confirm=bool(rm_section.get("confirm", True)),
        ),
    )


def _find_root(start: Path) -> Path:
    """Walk upward from start looking for ftags.toml or a .ftags database."""
    for directory in (start, *start.parents):
        if (directory / _CONFIG_FILENAME).exists() or (directory / _DEFAULT_DATABASE).is_file():
            return directory
    return start


def init_config(root: Path) -> Path:
    """Write a default ftags.toml at root. Raises if already exists."""
    config_path = root / _CONFIG_FILENAME
    if config_path.exists():
        msg = f"ftags.toml already exists at {config_path}"
        raise FileExistsError(msg)

    content = """\
[ftags]
# database = ".ftags"   # default; FTAGS_DATABASE overrides

# [remove]
# confirm = true        # prompt before removing every tag of a file
"""
    config_path.write_text(content)
    return config_path
