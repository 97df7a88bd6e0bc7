"""Location of the per-user settings directory and files."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from circleci_settings.constants import CONFIG_FILENAME, SETTINGS_DIRNAME, UPDATE_CHECK_FILENAME
from circleci_settings.errors import HomeDirectoryNotFoundError


def user_home_dir(
    environ: Mapping[str, str] | None = None, platform: str | None = None
) -> Path:
    """Return the current user's home directory.

    On Windows this is ``HOMEDRIVE`` + ``HOMEPATH``, falling back to
    ``USERPROFILE``. Everywhere else it is ``HOME``.

    Args:
        environ: Environment to read (default: ``os.environ``)
        platform: Platform identifier (default: ``sys.platform``)

    Returns:
        Home directory path

    Raises:
        HomeDirectoryNotFoundError: If the relevant variables are unset or empty
    """
    env = os.environ if environ is None else environ
    platform = platform or sys.platform

    if platform.startswith("win"):
        home = env.get("HOMEDRIVE", "") + env.get("HOMEPATH", "")
        if not home:
            home = env.get("USERPROFILE", "")
        if not home:
            raise HomeDirectoryNotFoundError(("HOMEDRIVE", "HOMEPATH", "USERPROFILE"))
        return Path(home)

    home = env.get("HOME", "")
    if not home:
        raise HomeDirectoryNotFoundError(("HOME",))
    return Path(home)


def settings_path(
    environ: Mapping[str, str] | None = None, platform: str | None = None
) -> Path:
    """Return the CLI settings directory, ``<home>/.circleci``."""
    return user_home_dir(environ, platform) / SETTINGS_DIRNAME


def config_filename() -> str:
    return CONFIG_FILENAME


def update_check_filename() -> str:
    return UPDATE_CHECK_FILENAME


@dataclass(frozen=True)
class SettingsPaths:
    """Settings directory and file names.

    Stores take one of these at construction so tests (and embedding
    applications) can point them at any directory without touching the
    process environment.
    """

    directory: Path
    config_filename: str = CONFIG_FILENAME
    update_check_filename: str = UPDATE_CHECK_FILENAME

    @property
    def config_file(self) -> Path:
        return self.directory / self.config_filename

    @property
    def update_check_file(self) -> Path:
        return self.directory / self.update_check_filename

    @classmethod
    def from_directory(cls, directory: Path | str) -> SettingsPaths:
        """Create paths rooted at an explicit settings directory."""
        return cls(directory=Path(directory))

    @classmethod
    def default(
        cls, environ: Mapping[str, str] | None = None, platform: str | None = None
    ) -> SettingsPaths:
        """Create paths rooted at ``<home>/.circleci``.

        Raises:
            HomeDirectoryNotFoundError: If no home directory can be determined
        """
        return cls(directory=settings_path(environ, platform))
