"""Filesystem and formatting helpers for the circleci_settings package."""

from circleci_settings.utils.file import (
    atomic_write,
    ensure_directory_exists,
    ensure_settings_file_exists,
)
from circleci_settings.utils.formatting import mask_secret

__all__ = [
    "atomic_write",
    "ensure_directory_exists",
    "ensure_settings_file_exists",
    "mask_secret",
]
