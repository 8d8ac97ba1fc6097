"""Configuration management for Twig.

This module provides a clean interface for reading and writing
both repository-local and global configuration files.
"""

import configparser
import os
from pathlib import Path
from typing import Dict, Optional, Tuple

DEFAULT_AUTHOR_NAME = 'Twig'
DEFAULT_AUTHOR_EMAIL = 'twig@localhost'


def _new_parser() -> configparser.ConfigParser:
    return configparser.ConfigParser(interpolation=None)


def _remote_section(name: str) -> str:
    return f'remote "{name}"'


def write_config_file(config: configparser.ConfigParser, config_path: Path) -> None:
    """
    Write a parsed config in Twig's layout.

    Keys are indented by two spaces and ``remote`` sections lead the file,
    so a cloned repository's origin url is always on the second line.
    """
    sections = config.sections()
    ordered = ([s for s in sections if s.startswith('remote ')] +
               [s for s in sections if not s.startswith('remote ')])

    lines = []
    for section in ordered:
        lines.append(f'[{section}]')
        for key, value in config.items(section):
            lines.append(f'  {key} = {value}')

    Path(config_path).write_text(''.join(f'{line}\n' for line in lines))


class Config:
    """
    Manages Twig configuration files.

    Configuration is stored in INI format, similar to Git:
    - Global config: ~/.twigconfig
    - Repository config: <metadata dir>/config

    Repository config takes precedence over global config.
    Environment variables take highest precedence.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.twigconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
        """
        self.repo_config_path = Path(repo_config_path) if repo_config_path else None
        self._global_config = None
        self._repo_config = None

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = _new_parser()
            if self.GLOBAL_CONFIG_PATH.exists():
                self._global_config.read(self.GLOBAL_CONFIG_PATH)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = _new_parser()
            if self.repo_config_path.exists():
                self._repo_config.read(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (TWIG_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value

        Args:
            section: Config section (e.g., 'user', 'core')
            key: Config key (e.g., 'name', 'email')
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        env_key = f"TWIG_{section.upper()}_{key.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        return fallback

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
        write_config_file(config, config_path)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Remove a configuration value.

        Returns:
            True if value was removed, False if it didn't exist
        """
        if global_config:
            config = self.global_config
            config_path = self.GLOBAL_CONFIG_PATH
        else:
            if not self.repo_config:
                return False
            config = self.repo_config
            config_path = self.repo_config_path

        if not config.has_option(section, key):
            return False

        config.remove_option(section, key)

        if not config.options(section):
            config.remove_section(section)

        write_config_file(config, config_path)
        return True

    def is_bare(self) -> bool:
        """Whether the repository config marks a bare repository."""
        if not self.repo_config or not self.repo_config.has_option('core', 'bare'):
            return False
        return self.repo_config.getboolean('core', 'bare')

    def add_remote(self, name: str, url: str) -> None:
        """Record a remote's url."""
        self.set(_remote_section(name), 'url', url)

    def list_remotes(self) -> Dict[str, str]:
        """
        List all configured remotes.

        Returns:
            Dict mapping remote names to URLs
        """
        remotes = {}
        if not self.repo_config:
            return remotes

        for section in self.repo_config.sections():
            if section.startswith('remote "') and section.endswith('"'):
                name = section[8:-1]
                remotes[name] = self.repo_config.get(section, 'url', fallback='')

        return remotes

    def get_remote_url(self, name: str) -> Optional[str]:
        """Get URL for a remote."""
        return self.list_remotes().get(name)

    def get_user_identity(self) -> Tuple[Optional[str], Optional[str]]:
        """
        Get user name and email for commits.

        Returns:
            Tuple of (name, email), either may be None
        """
        return self.get('user', 'name'), self.get('user', 'email')

    def author(self) -> str:
        """Author string for new commits, with a fixed fallback identity."""
        name, email = self.get_user_identity()
        return f"{name or DEFAULT_AUTHOR_NAME} <{email or DEFAULT_AUTHOR_EMAIL}>"


def get_config(repo=None) -> Config:
    """
    Get a Config instance.

    Args:
        repo: Repository instance, or None for global-only config

    Returns:
        Config instance
    """
    if repo:
        return Config(repo.config_file)
    return Config()
