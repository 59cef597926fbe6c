"""ftags CLI: tag files in a plain-text database.

Commands:
    ftags init                     create ftags.toml + empty .ftags
    ftags list FILE                show the tags of FILE        (l, ls)
    ftags list-tags                every tag in the database    (t, lt)
    ftags add FILE TAG...          add tags to FILE             (a, n)
    ftags remove FILE [TAG...]     remove tags or the record    (r, d)
    ftags search TAG...            find files by tag            (s, f)

A TAG is ``name``, ``name:value`` or ``name:[a b c]``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from ftags.codec import decode_tag
from ftags.config import FtagsConfig, init_config, load_config
from ftags.errors import FtagsError, MalformedTag
from ftags.matcher import render_search
from ftags.models import Tag
from ftags.reader import FileStore

logger = logging.getLogger("ftags.cli")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TagType(click.ParamType):
    """Decode a command-line argument with the tag codec."""

    name = "tag"

    def convert(self, value: object, param: click.Parameter | None, ctx: click.Context | None) -> Tag:
        if isinstance(value, Tag):
            return value
        try:
            return decode_tag(str(value))
        except MalformedTag as exc:
            self.fail(str(exc), param, ctx)


TAG = TagType()


def _load_cfg(root: Path | None = None) -> FtagsConfig:
    try:
        return load_config(root)
    except Exception as exc:
        raise click.ClickException(str(exc)) from exc


def _store(cfg: FtagsConfig) -> FileStore:
    logger.debug("using database %s", cfg.database_path)
    return FileStore(cfg.database_path)


def _require_db(cfg: FtagsConfig) -> FileStore:
    store = _store(cfg)
    if not store.exists():
        raise click.ClickException("No `.ftags` file found! (run `ftags init`)")
    return store


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="ftags")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def cli(verbose: bool) -> None:
    """ftags: plain-text file tagging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


# ---------------------------------------------------------------------------
# ftags init
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--dir", "root", default=".", show_default=True, help="Project root")
def init(root: str) -> None:
    """Create ftags.toml and an empty .ftags in the current project."""
    root_path = Path(root).resolve()
    try:
        config_path = init_config(root_path)
        click.echo(f"Created {config_path}")
    except FileExistsError:
        click.echo("ftags.toml already exists, skipping")

    cfg = _load_cfg(root_path)
    if cfg.ensure_database():
        click.echo(f"Created {cfg.database_path}")
    else:
        click.echo(f"Database  : {cfg.database_path}")


# ---------------------------------------------------------------------------
# ftags list / list-tags
# ---------------------------------------------------------------------------


@cli.command("list")
@click.argument("file")
def list_cmd(file: str) -> None:
    """List all tags for a given file.

    \b
    ftags list foo/b.jpg
    """
    cfg = _load_cfg()
    store = _require_db(cfg)
    try:
        record = store.tags_for(cfg.relative_path(file))
    except FtagsError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(str(record))


@cli.command("list-tags")
def list_tags_cmd() -> None:
    """List every tag used in the database, sorted, without duplicates."""
    store = _require_db(_load_cfg())
    try:
        tags = store.list_tags()
    except FtagsError as exc:
        raise click.ClickException(str(exc)) from exc
    if not tags:
        click.echo("(no tags)")
        return
    click.echo(", ".join(str(t) for t in tags))


# ---------------------------------------------------------------------------
# ftags add / remove
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("file")
@click.argument("tags", nargs=-1, required=True, type=TAG)
def add(file: str, tags: tuple[Tag, ...]) -> None:
    """Add tags to a file. Creates the database if needed.

    \b
    ftags add foo/b.jpg file_type:jpg "img_tags:[solo standing]"
    """
    cfg = _load_cfg()
    store = _store(cfg)
    try:
        record = store.add(cfg.relative_path(file), tags)
    except FtagsError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(str(record))


@cli.command()
@click.argument("file")
@click.argument("tags", nargs=-1, type=TAG)
@click.option("--yes", "-y", is_flag=True, help="Do not ask before removing every tag")
def remove(file: str, tags: tuple[Tag, ...], yes: bool) -> None:
    """Remove tags from a file, or the whole entry when no tag is given.

    \b
    ftags remove foo/b.jpg file_type       # any value
    ftags remove foo/b.jpg file_type:jpg   # exact value only
    ftags remove foo/b.jpg                 # every tag
    """
    cfg = _load_cfg()
    store = _require_db(cfg)
    if not tags and cfg.remove.confirm and not yes:
        click.confirm(f"Remove all tags for `{file}`?", abort=True)
    try:
        removed = store.remove(cfg.relative_path(file), tags)
    except FtagsError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo("Removed: " + ", ".join(str(t) for t in removed))


# ---------------------------------------------------------------------------
# ftags search
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("tags", nargs=-1, required=True, type=TAG)
def search(tags: tuple[Tag, ...]) -> None:
    """Search files for the given tags.

    A name-only tag matches any value. Files where a tag name matches
    but the value differs are listed as partial matches.

    \b
    ftags search file_type
    ftags search file_type:jpg "misc_info:[rust cargo]"
    """
    store = _require_db(_load_cfg())
    try:
        result = store.search(tags)
    except FtagsError as exc:
        raise click.ClickException(str(exc)) from exc
    if not result:
        click.echo("(no matches)")
        return
    click.echo(render_search(result))


# ---------------------------------------------------------------------------
# Aliases
# ---------------------------------------------------------------------------

for _name in ("l", "ls"):
    cli.add_command(list_cmd, name=_name)
for _name in ("t", "lt"):
    cli.add_command(list_tags_cmd, name=_name)
for _name in ("a", "n"):
    cli.add_command(add, name=_name)
for _name in ("r", "d"):
    cli.add_command(remove, name=_name)
for _name in ("s", "f"):
    cli.add_command(search, name=_name)

# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    cli(standalone_mode=True)


if __name__ == "__main__":
    main()
