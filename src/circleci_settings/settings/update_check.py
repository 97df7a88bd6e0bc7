"""Timestamp of the last update check, stored in ``~/.circleci/update_check.yml``."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import ClassVar

from pydantic import Field

from circleci_settings.settings.base import SettingsFile


class UpdateCheck(SettingsFile):
    """Settings for checking for CLI updates."""

    KIND: ClassVar[str] = "update check"

    last_update_check: datetime | None = Field(
        None, description="When the last successful update check ran"
    )

    def settings_file(self) -> Path:
        return self.paths.update_check_file

    def load(self) -> None:
        """Load from disk. Update-check settings take no environment overrides."""
        self.load_from_disk()

    def record_check(self, now: datetime | None = None) -> datetime:
        """Set the last update check time.

        Args:
            now: Time of the check (default: current UTC time)

        Returns:
            The recorded time
        """
        self.last_update_check = now or datetime.now(UTC)
        return self.last_update_check
