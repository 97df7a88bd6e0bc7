"""Exception classes for settings resolution.

Only conditions detected by this package get their own type. Filesystem
errors (``OSError``), YAML syntax errors (``yaml.YAMLError``) and type
errors reported by pydantic (``ValidationError``) reach the caller unchanged.
"""

from __future__ import annotations

from pathlib import Path


class SettingsError(Exception):
    """Base class for errors raised by circleci_settings itself."""


class HomeDirectoryNotFoundError(SettingsError):
    """Raised when the platform home-directory variables are unset or empty.

    Without a home directory the settings directory would resolve to a
    root-relative path, so resolution stops here instead.
    """

    def __init__(self, variables: tuple[str, ...]) -> None:
        """Initialize the exception.

        Args:
            variables: Environment variable names that were consulted
        """
        super().__init__(
            "Unable to determine home directory: " + ", ".join(variables) + " not set"
        )
        self.variables = variables


class SettingsNotLoadedError(SettingsError):
    """Raised when writing a settings file that was never loaded."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"{kind} has not been loaded from disk; nothing to write to")
        self.kind = kind


class SettingsFormatError(SettingsError, ValueError):
    """Raised when a settings document is valid YAML but not a mapping."""

    def __init__(self, path: Path, found: type) -> None:
        """Initialize the exception.

        Args:
            path: Settings file that was read
            found: Python type of the top-level YAML node
        """
        super().__init__(f"{path}: expected a mapping at top level, got {found.__name__}")
        self.path = path
        self.found = found
