"""Settings overrides read from environment variables."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping


def env_var_name(prefix: str, field: str) -> str:
    """Join prefix and field with an underscore and upper-case the result."""
    return f"{prefix}_{field}".upper()


def read_from_env(prefix: str, field: str, environ: Mapping[str, str] | None = None) -> str:
    """Read ``<PREFIX>_<FIELD>`` from the environment.

    Args:
        prefix: Variable prefix, e.g. ``circleci_cli``
        field: Setting name, e.g. ``token``
        environ: Environment to read (default: ``os.environ``)

    Returns:
        The variable's value, or an empty string if unset
    """
    env = os.environ if environ is None else environ
    return env.get(env_var_name(prefix, field), "")


class EnvOverlay:
    """Environment reader bound to a prefix.

    An unset variable and one set to the empty string are treated the same:
    neither overrides anything.
    """

    def __init__(self, prefix: str, environ: Mapping[str, str] | None = None) -> None:
        self.prefix = prefix
        self._environ = environ

    def read(self, field: str) -> str:
        return read_from_env(self.prefix, field, self._environ)

    def present(self, fields: Iterable[str]) -> list[str]:
        """Return the fields that have a non-empty value in the environment."""
        return [field for field in fields if self.read(field)]

    def overrides(self, fields: Iterable[str]) -> dict[str, str]:
        """Return non-empty environment values keyed by field name."""
        return {field: value for field in fields if (value := self.read(field))}
