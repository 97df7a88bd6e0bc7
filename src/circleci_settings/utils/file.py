"""File utility functions."""

from __future__ import annotations

import logging
import os
import tempfile
from itertools import takewhile
from pathlib import Path
from typing import Final

from circleci_settings.constants import DIR_MODE, FILE_MODE

logger: Final = logging.getLogger(__name__)


def ensure_directory_exists(directory: Path, mode: int = DIR_MODE) -> None:
    """Create directory (and parents) if it doesn't exist.

    Every directory created gets ``mode``, not just the last one.

    Args:
        directory: Path to create
        mode: Permission bits for newly created directories
    """
    missing = list(takewhile(lambda p: not p.exists(), (directory, *directory.parents)))
    for parent in reversed(missing):
        parent.mkdir(mode=mode, exist_ok=True)
        logger.debug("Created directory: %s", parent)


def ensure_settings_file_exists(path: Path) -> bool:
    """Make sure a settings file exists at ``path``.

    An existing file is left as is, whatever it contains. A missing one is
    created empty with owner-only permissions, along with its parent
    directories. Nothing is rolled back if a step fails part way.

    Args:
        path: Settings file location

    Returns:
        True if the file was created, False if it already existed

    Raises:
        OSError: If the probe fails for a reason other than absence, or if
            creating the directory or file or setting its mode fails
    """
    try:
        path.stat()
    except FileNotFoundError:
        pass
    else:
        return False

    ensure_directory_exists(path.parent)
    path.touch(mode=FILE_MODE, exist_ok=True)
    # touch() honours the umask; chmod does not
    path.chmod(FILE_MODE)
    logger.debug("Created settings file: %s", path)
    return True


def atomic_write(path: Path, data: str, mode: int = FILE_MODE) -> None:
    """Replace the contents of ``path`` without exposing a partial file.

    The data goes to a temporary file in the same directory, which is then
    renamed over the target. A symlinked ``path`` is written through: the
    link stays and the file it points to is replaced.

    Args:
        path: File to replace
        data: Text to write (UTF-8)
        mode: Permission bits for the resulting file
    """
    target = path.resolve()
    fd, tmp_path = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
        logger.debug("Wrote %d bytes to %s", len(data), target)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
