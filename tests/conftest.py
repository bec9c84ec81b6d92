"""Shared pytest fixtures for Plumb tests."""

import pytest
import tempfile
import shutil
import zlib
from pathlib import Path
from plumb.core.config import Config
from plumb.core.objects import Blob
from plumb.core.repository import Repository


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path_factory):
    """Keep the user's ~/.plumbconfig and PLUMB_* variables out of tests."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.plumbconfig')
    for key in ('PLUMB_USER_NAME', 'PLUMB_USER_EMAIL', 'PLUMB_CORE_COMPRESSION'):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(temp_dir)
    repo.init()
    return repo


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")


@pytest.fixture
def working_files(repo):
    """Create sample file structure in repository."""
    file1 = repo.work_tree / "test1.txt"
    file2 = repo.work_tree / "test2.txt"

    (repo.work_tree / "subdir").mkdir()
    file3 = repo.work_tree / "subdir" / "test3.txt"

    file1.write_text("Content 1")
    file2.write_text("Content 2")
    file3.write_text("Content 3")

    return {
        'file1': file1,
        'file2': file2,
        'file3': file3
    }


@pytest.fixture
def stored_objects():
    """Return a function listing the hashes present in a repository."""
    def _stored_objects(repo):
        return {
            path.parent.name + path.name
            for path in repo.objects_dir.glob('??/*')
        }
    return _stored_objects


@pytest.fixture
def plant_object():
    """Return a function writing raw bytes where an object would live."""
    def _plant_object(repo, obj_hash, raw, compress=True):
        path = repo.object_path(obj_hash)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(zlib.compress(raw) if compress else raw)
        return path
    return _plant_object
