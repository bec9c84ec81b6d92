"""Configuration management for Plumb.

This module provides a small interface for reading and writing
both repository-local and global configuration files.
"""

import os
import configparser
from pathlib import Path
from typing import Optional

DEFAULT_USER_NAME = 'Plumb User'
DEFAULT_USER_EMAIL = 'plumb@localhost'


class Config:
    """
    Manages Plumb configuration files.

    Configuration is stored in INI format, similar to Git:
    - Global config: ~/.plumbconfig
    - Repository config: .git/config

    Repository config takes precedence over global config.
    Environment variables take highest precedence.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.plumbconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
        """
        self.repo_config_path = repo_config_path
        self._global_config = None
        self._repo_config = None

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = configparser.ConfigParser()
            if self.GLOBAL_CONFIG_PATH.exists():
                self._global_config.read(self.GLOBAL_CONFIG_PATH)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = configparser.ConfigParser()
            if self.repo_config_path.exists():
                self._repo_config.read(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (PLUMB_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value

        Args:
            section: Config section (e.g., 'user', 'core')
            key: Config key (e.g., 'name', 'compression')
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        env_key = f"PLUMB_{section.upper()}_{key.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        return fallback

    def get_int(self, section: str, key: str, fallback: int) -> int:
        """
        Get an integer configuration value.

        Raises:
            ValueError: If the stored value is not an integer
        """
        value = self.get(section, key)
        if value is None:
            return fallback
        try:
            return int(value.strip())
        except ValueError:
            raise ValueError(f"Invalid integer for {section}.{key}: {value!r}")

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.

        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config
        """
        if global_config:
            config = self.global_config
            config_path = self.GLOBAL_CONFIG_PATH
        else:
            if not self.repo_config_path:
                raise ValueError("No repository config path available")
            config = self.repo_config
            config_path = self.repo_config_path

        if not config.has_section(section):
            config.add_section(section)

        config.set(section, key, value)

        with open(config_path, 'w') as f:
            config.write(f)

    def get_user_identity(self) -> str:
        """
        Get the ``Name <email>`` identity used for commits.

        Returns:
            Identity string, with defaults filled in for missing parts
        """
        name = self.get('user', 'name', DEFAULT_USER_NAME)
        email = self.get('user', 'email', DEFAULT_USER_EMAIL)
        return f"{name} <{email}>"
