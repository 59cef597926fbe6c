"""Shared fixtures for the ftags test suite."""

import pytest

from ftags.reader import FileStore

SAMPLE = """\
a: tag, tag2
foo/b.jpg: file_type:jpg, img_tags:[1girl solo standing long_hair]
.cargo/bin: directory, child_content_type:binary, misc_info:[rust cargo]
"""


@pytest.fixture(autouse=True)
def _no_env_database(monkeypatch):
    """Keep a developer's FTAGS_DATABASE from leaking into tests."""
    monkeypatch.delenv("FTAGS_DATABASE", raising=False)


@pytest.fixture
def sample_text():
    return SAMPLE


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / ".ftags"
    path.write_text(SAMPLE)
    return path


@pytest.fixture
def store(db_path):
    return FileStore(db_path)


@pytest.fixture
def project(tmp_path, monkeypatch, db_path):
    """A project directory holding the sample database, used as cwd."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
