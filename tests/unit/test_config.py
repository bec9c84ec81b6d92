"""Unit tests for configuration management."""

import pytest
from plumb.core.config import Config, DEFAULT_USER_NAME, DEFAULT_USER_EMAIL


def test_get_fallback(repo):
    """Test missing keys return the fallback."""
    config = Config(repo.config_file)
    assert config.get('user', 'name') is None
    assert config.get('user', 'name', 'someone') == 'someone'


def test_init_writes_format_version(repo):
    """Test init records the repository format version."""
    assert Config(repo.config_file).get('core', 'repositoryformatversion') == '0'


def test_set_and_get_repo_value(repo):
    """Test values written to the repo config are read back."""
    repo.config.set('user', 'name', 'Test User')
    assert Config(repo.config_file).get('user', 'name') == 'Test User'


def test_global_config(repo):
    """Test global values apply when the repo config is silent."""
    Config().set('user', 'email', 'global@example.com', global_config=True)
    assert Config(repo.config_file).get('user', 'email') == 'global@example.com'


def test_repo_overrides_global(repo):
    """Test repository config takes precedence over global config."""
    Config().set('user', 'name', 'Global', global_config=True)
    repo.config.set('user', 'name', 'Local')
    assert Config(repo.config_file).get('user', 'name') == 'Local'


def test_environment_overrides_files(repo, monkeypatch):
    """Test PLUMB_<SECTION>_<KEY> beats every file."""
    repo.config.set('user', 'name', 'Local')
    monkeypatch.setenv('PLUMB_USER_NAME', 'From Env')
    assert Config(repo.config_file).get('user', 'name') == 'From Env'


def test_set_without_repo_path():
    """Test repo-level writes need a repository."""
    with pytest.raises(ValueError):
        Config().set('user', 'name', 'x')


def test_get_int(repo):
    """Test integer values are parsed."""
    repo.config.set('core', 'compression', ' 9 ')
    config = Config(repo.config_file)
    assert config.get_int('core', 'compression', -1) == 9
    assert config.get_int('core', 'missing', -1) == -1


def test_get_int_invalid(repo):
    """Test garbage integer values raise ValueError."""
    repo.config.set('core', 'compression', 'fast')
    with pytest.raises(ValueError, match="core.compression"):
        Config(repo.config_file).get_int('core', 'compression', -1)


def test_user_identity_defaults(repo):
    """Test identity falls back to defaults."""
    assert repo.config.get_user_identity() == f"{DEFAULT_USER_NAME} <{DEFAULT_USER_EMAIL}>"


def test_user_identity_from_config(repo):
    """Test identity combines user.name and user.email."""
    repo.config.set('user', 'name', 'Test User')
    repo.config.set('user', 'email', 'test@example.com')
    assert repo.config.get_user_identity() == 'Test User <test@example.com>'
