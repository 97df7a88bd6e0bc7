"""Settings stores.

This package provides:
- Config: API host, endpoint and token, with environment overrides
- UpdateCheck: Time of the last update check
"""

from circleci_settings.settings.base import SettingsFile
from circleci_settings.settings.config import Config
from circleci_settings.settings.update_check import UpdateCheck

__all__ = ["Config", "SettingsFile", "UpdateCheck"]
