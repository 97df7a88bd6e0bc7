"""CLI runtime configuration stored in ``~/.circleci/cli.yml``."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any, ClassVar, Final

from pydantic import Field, field_validator

from circleci_settings.constants import ENV_PREFIX
from circleci_settings.env import EnvOverlay
from circleci_settings.settings.base import SettingsFile
from circleci_settings.utils.formatting import mask_secret

logger: Final = logging.getLogger(__name__)


class Config(SettingsFile):
    """Current state of a CLI instance.

    Only ``host``, ``endpoint`` and ``token`` are persisted. The remaining
    fields are set by the CLI at runtime.

    Examples:
        cfg = Config()
        cfg.load()                # disk, then CIRCLECI_CLI_* overrides
        cfg.token = "new-token"
        cfg.write_to_disk()
    """

    KIND: ClassVar[str] = "config"

    # Fields the environment may override
    ENV_FIELDS: ClassVar[tuple[str, ...]] = ("host", "endpoint", "token")

    # Persisted
    host: str = Field("", description="API host name")
    endpoint: str = Field("", description="API path suffix")
    token: str = Field("", repr=False, description="API token")

    # Runtime-only
    github_api: str = Field("", exclude=True, description="GitHub API base URL override")
    debug: bool = Field(False, exclude=True, description="Enable debug output")
    address: str = Field("", exclude=True, description="Bind address")
    skip_update_check: bool = Field(False, exclude=True, description="Skip the update check")

    @field_validator("host", "endpoint", "token", mode="before")
    @classmethod
    def scalar_to_str(cls, v: Any) -> Any:
        """Read any YAML scalar as text.

        ``key:`` with no value is an empty string, and unquoted numbers,
        booleans and dates (``token: 1234567890123456``) become strings.
        """
        if v is None:
            return ""
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, (int, float)):
            return str(v)
        if isinstance(v, (date, datetime)):
            return v.isoformat()
        return v

    def __repr_args__(self) -> Iterator[tuple[str | None, Any]]:
        yield from super().__repr_args__()
        yield "token", mask_secret(self.token)

    def settings_file(self) -> Path:
        return self.paths.config_file

    def load(
        self, prefix: str = ENV_PREFIX, environ: Mapping[str, str] | None = None
    ) -> None:
        """Load config from disk, then apply environment overrides.

        Args:
            prefix: Environment variable prefix
            environ: Environment to read (default: ``os.environ``)
        """
        self.load_from_disk()
        self.load_from_env(prefix, environ)

    def load_from_env(
        self, prefix: str, environ: Mapping[str, str] | None = None
    ) -> list[str]:
        """Override host, endpoint and token from ``<PREFIX>_<FIELD>`` variables.

        Empty or unset variables keep the current value. Overrides only
        change this instance; they are written to disk only if the caller
        later calls ``write_to_disk``.

        Args:
            prefix: Environment variable prefix
            environ: Environment to read (default: ``os.environ``)

        Returns:
            Names of the fields that were overridden
        """
        overrides = EnvOverlay(prefix, environ).overrides(self.ENV_FIELDS)
        for name, value in overrides.items():
            setattr(self, name, value)
        if overrides:
            logger.debug("Environment overrides applied: %s", ", ".join(overrides))
        return list(overrides)
