from collections.abc import Iterator
from pathlib import Path

import pytest

from circleci_settings.paths import SettingsPaths

ENV_VARS = ("CIRCLECI_CLI_HOST", "CIRCLECI_CLI_ENDPOINT", "CIRCLECI_CLI_TOKEN")


@pytest.fixture
def settings_dir(tmp_path: Path) -> Path:
    """Settings directory that does not exist yet."""
    return tmp_path / "home" / ".circleci"


@pytest.fixture
def settings_paths(settings_dir: Path) -> SettingsPaths:
    return SettingsPaths.from_directory(settings_dir)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point HOME at a fresh directory and clear CIRCLECI_CLI_* overrides."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield home_dir
