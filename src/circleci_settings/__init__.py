"""Per-user settings for the CircleCI command-line client."""

from circleci_settings.env import EnvOverlay, read_from_env
from circleci_settings.errors import (
    HomeDirectoryNotFoundError,
    SettingsError,
    SettingsFormatError,
    SettingsNotLoadedError,
)
from circleci_settings.paths import SettingsPaths, user_home_dir
from circleci_settings.settings import Config, UpdateCheck

__version__ = "0.1.0"

__all__ = [
    "Config",
    "EnvOverlay",
    "HomeDirectoryNotFoundError",
    "SettingsError",
    "SettingsFormatError",
    "SettingsNotLoadedError",
    "SettingsPaths",
    "UpdateCheck",
    "read_from_env",
    "user_home_dir",
]
