"""Load/write lifecycle shared by the settings files."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import Any, ClassVar, Final

import yaml
from pydantic import BaseModel, ConfigDict, PrivateAttr

from circleci_settings.errors import SettingsFormatError, SettingsNotLoadedError
from circleci_settings.paths import SettingsPaths
from circleci_settings.utils.file import atomic_write, ensure_settings_file_exists

logger: Final = logging.getLogger(__name__)


class SettingsFile(BaseModel):
    """A YAML settings file under the user's settings directory.

    Fields declared with ``exclude=True`` are runtime-only: they are never
    written and are ignored when present in the file.

    An instance starts out not loaded. ``load_from_disk`` records the file it
    read in ``file_used`` and ``write_to_disk`` writes back to that same file.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    # Human-readable name used in errors and log messages
    KIND: ClassVar[str] = "settings"

    _paths: SettingsPaths | None = PrivateAttr(default=None)
    _file_used: Path | None = PrivateAttr(default=None)

    def __init__(self, paths: SettingsPaths | None = None, **data: Any) -> None:
        """Initialize an unloaded settings file.

        Args:
            paths: Settings locations (default: ``~/.circleci`` resolved at load time)
            **data: Initial field values
        """
        super().__init__(**data)
        self._paths = paths

    @classmethod
    def persisted_fields(cls) -> list[str]:
        """Names of the fields that round-trip through the YAML file."""
        return [name for name, info in cls.model_fields.items() if not info.exclude]

    @property
    def paths(self) -> SettingsPaths:
        if self._paths is None:
            self._paths = SettingsPaths.default()
        return self._paths

    @property
    def file_used(self) -> Path | None:
        """File this instance was loaded from, or None before loading."""
        return self._file_used

    @property
    def is_loaded(self) -> bool:
        return self._file_used is not None

    @abstractmethod
    def settings_file(self) -> Path:
        """Return the file this kind of settings lives in."""

    def load_from_disk(self) -> None:
        """Read the settings file into this instance, creating it if missing.

        Keys present in the file replace the current field values; absent keys
        leave them alone. Unknown and runtime-only keys are ignored.

        Raises:
            HomeDirectoryNotFoundError: If default paths are used and no home
                directory is set
            OSError: If the file cannot be created or read
            yaml.YAMLError: If the file is not valid YAML
            SettingsFormatError: If the document is not a mapping
            pydantic.ValidationError: If a value has the wrong type
        """
        path = self.settings_file()
        ensure_settings_file_exists(path)
        self._file_used = path

        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SettingsFormatError(path, type(data))

        persisted = self.persisted_fields()
        parsed = type(self).model_validate({k: v for k, v in data.items() if k in persisted})
        for name in parsed.model_fields_set:
            setattr(self, name, getattr(parsed, name))

        logger.debug("Loaded %s from %s", self.KIND, path)

    def to_yaml(self) -> str:
        """Serialize the persisted fields to YAML."""
        return yaml.safe_dump(
            self.model_dump(mode="json"), default_flow_style=False, sort_keys=False
        )

    def write_to_disk(self) -> None:
        """Write the persisted fields back to the file recorded at load time.

        Raises:
            SettingsNotLoadedError: If this instance was never loaded
            OSError: If the file cannot be written
        """
        if self._file_used is None:
            raise SettingsNotLoadedError(self.KIND)
        atomic_write(self._file_used, self.to_yaml())
        logger.debug("Saved %s to %s", self.KIND, self._file_used)
