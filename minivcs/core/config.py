"""Configuration for minivcs.

Only the commit author identity is configurable. Values are looked up in
environment variables, then the repository config, then the global config.
"""

import os
import configparser
from pathlib import Path
from typing import Optional

DEFAULT_AUTHOR_NAME = 'Unknown'
DEFAULT_AUTHOR_EMAIL = 'unknown@localhost'

DEFAULT_REPO_CONFIG = '[core]\n\trepositoryformatversion = 0\n'


class Config:
    """
    Reads minivcs configuration files.

    Configuration is stored in INI format:
    - Global config: ~/.vcsconfig
    - Repository config: .vcs/config
    """

    ENV_PREFIX = 'VCS'

    def __init__(self, repo_config_path: Optional[Path] = None,
                 global_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
            global_config_path: Override for the global config location
        """
        self.repo_config_path = repo_config_path
        self.global_config_path = global_config_path or Path.home() / '.vcsconfig'
        self._global_config = None
        self._repo_config = None

    @property
    def global_config(self) -> configparser.ConfigParser:
        if self._global_config is None:
            self._global_config = configparser.ConfigParser()
            if self.global_config_path.exists():
                self._global_config.read(self.global_config_path)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = configparser.ConfigParser()
            if self.repo_config_path.exists():
                self._repo_config.read(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (VCS_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value
        """
        env_value = os.environ.get(f"{self.ENV_PREFIX}_{section.upper()}_{key.upper()}")
        if env_value:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        return fallback

    def get_author(self) -> str:
        """
        Author identity for new commits.

        Returns:
            "Name <email>", with placeholders for missing parts
        """
        name = self.get('user', 'name', DEFAULT_AUTHOR_NAME)
        email = self.get('user', 'email', DEFAULT_AUTHOR_EMAIL)
        return f"{name} <{email}>"

