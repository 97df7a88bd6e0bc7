import stat
import sys
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from circleci_settings.errors import SettingsFormatError, SettingsNotLoadedError
from circleci_settings.paths import SettingsPaths
from circleci_settings.settings import Config, SettingsFile


def _read_yaml(path: Path) -> dict:
    return yaml.safe_load(path.read_text())


def test_load_bootstraps_fresh_home(settings_paths: SettingsPaths) -> None:
    assert not settings_paths.directory.exists()

    cfg = Config(settings_paths)
    cfg.load(environ={})

    assert settings_paths.config_file.is_file()
    assert cfg.file_used == settings_paths.config_file
    assert (cfg.host, cfg.endpoint, cfg.token) == ("", "", "")


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_load_creates_owner_only_file(settings_paths: SettingsPaths) -> None:
    Config(settings_paths).load(environ={})

    assert stat.S_IMODE(settings_paths.config_file.stat().st_mode) == 0o600
    assert stat.S_IMODE(settings_paths.directory.stat().st_mode) == 0o700


def test_default_paths_follow_home(home: Path) -> None:
    cfg = Config()
    cfg.load()

    assert cfg.file_used == home / ".circleci" / "cli.yml"
    assert cfg.is_loaded


def test_write_then_load_round_trip(settings_paths: SettingsPaths) -> None:
    cfg = Config(settings_paths)
    cfg.load_from_disk()
    cfg.host = "https://circleci.example.com"
    cfg.endpoint = "graphql-unstable"
    cfg.token = "s3cr3t: with 'quotes' and # hash"
    cfg.write_to_disk()

    fresh = Config(settings_paths)
    fresh.load(environ={})

    assert fresh.host == "https://circleci.example.com"
    assert fresh.endpoint == "graphql-unstable"
    assert fresh.token == "s3cr3t: with 'quotes' and # hash"


def test_runtime_only_fields_are_not_written(settings_paths: SettingsPaths) -> None:
    cfg = Config(settings_paths)
    cfg.load_from_disk()
    cfg.host = "h"
    cfg.github_api = "https://api.github.com/"
    cfg.debug = True
    cfg.address = "127.0.0.1:8080"
    cfg.skip_update_check = True
    cfg.write_to_disk()

    assert list(_read_yaml(settings_paths.config_file)) == ["host", "endpoint", "token"]


def test_runtime_only_and_unknown_keys_are_ignored_on_load(
    settings_paths: SettingsPaths,
) -> None:
    settings_paths.directory.mkdir(parents=True)
    settings_paths.config_file.write_text(
        "host: h\ndebug: true\naddress: 0.0.0.0\nfileused: /tmp/x\nunknown: 1\n"
    )

    cfg = Config(settings_paths)
    cfg.load_from_disk()

    assert cfg.host == "h"
    assert cfg.debug is False
    assert cfg.address == ""
    assert cfg.file_used == settings_paths.config_file


def test_absent_keys_keep_current_values(settings_paths: SettingsPaths) -> None:
    settings_paths.directory.mkdir(parents=True)
    settings_paths.config_file.write_text("token: from-disk\n")

    cfg = Config(settings_paths, host="preset", debug=True)
    cfg.load_from_disk()

    assert cfg.host == "preset"
    assert cfg.token == "from-disk"
    assert cfg.debug is True


def test_unquoted_scalars_load_as_strings(settings_paths: SettingsPaths) -> None:
    settings_paths.directory.mkdir(parents=True)
    settings_paths.config_file.write_text(
        "host: 8080\nendpoint: true\ntoken: 1234567890123456\n"
    )

    cfg = Config(settings_paths)
    cfg.load(environ={})

    assert (cfg.host, cfg.endpoint, cfg.token) == ("8080", "true", "1234567890123456")

    cfg.write_to_disk()
    fresh = Config(settings_paths)
    fresh.load_from_disk()

    assert fresh.token == "1234567890123456"
    assert _read_yaml(settings_paths.config_file)["token"] == "1234567890123456"


def test_null_values_load_as_empty_strings(settings_paths: SettingsPaths) -> None:
    settings_paths.directory.mkdir(parents=True)
    settings_paths.config_file.write_text("host:\ntoken: ~\n")

    cfg = Config(settings_paths, host="preset")
    cfg.load_from_disk()

    assert cfg.host == ""
    assert cfg.token == ""


@pytest.mark.parametrize(
    "environ, expected",
    [
        ({"CIRCLECI_CLI_HOST": "b"}, "b"),
        ({"CIRCLECI_CLI_HOST": ""}, "a"),
        ({}, "a"),
    ],
)
def test_environment_takes_precedence_over_disk(
    settings_paths: SettingsPaths, environ: dict[str, str], expected: str
) -> None:
    settings_paths.directory.mkdir(parents=True)
    settings_paths.config_file.write_text("host: a\nendpoint: e\ntoken: t\n")

    cfg = Config(settings_paths)
    cfg.load(environ=environ)

    assert cfg.host == expected
    assert cfg.endpoint == "e"
    assert cfg.token == "t"


def test_load_reads_process_environment_with_prefix(
    settings_paths: SettingsPaths, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("MYCLI_ENDPOINT", "from-env")

    cfg = Config(settings_paths)
    cfg.load(prefix="mycli")

    assert cfg.endpoint == "from-env"


def test_load_from_env_reports_overridden_fields() -> None:
    cfg = Config(host="disk-host")
    overridden = cfg.load_from_env(
        "circleci_cli", {"CIRCLECI_CLI_TOKEN": "t", "CIRCLECI_CLI_ENDPOINT": ""}
    )

    assert overridden == ["token"]
    assert cfg.host == "disk-host"
    assert cfg.token == "t"


def test_token_from_env_with_no_config_file(settings_paths: SettingsPaths) -> None:
    cfg = Config(settings_paths)
    cfg.load(prefix="circleci_cli", environ={"CIRCLECI_CLI_TOKEN": "tok-123"})

    assert settings_paths.config_file.is_file()
    assert (cfg.host, cfg.endpoint, cfg.token) == ("", "", "tok-123")

    cfg.write_to_disk()

    assert _read_yaml(settings_paths.config_file) == {
        "host": "",
        "endpoint": "",
        "token": "tok-123",
    }


def test_write_before_load_raises(settings_paths: SettingsPaths) -> None:
    cfg = Config(settings_paths, host="h")

    with pytest.raises(SettingsNotLoadedError):
        cfg.write_to_disk()

    assert not settings_paths.directory.exists()


def test_file_used_is_read_only(settings_paths: SettingsPaths, tmp_path: Path) -> None:
    cfg = Config(settings_paths)

    with pytest.raises(AttributeError):
        cfg.file_used = tmp_path / "elsewhere.yml"  # type: ignore[misc]

    assert cfg.file_used is None
    assert not cfg.is_loaded


def test_write_uses_path_recorded_at_load(tmp_path: Path) -> None:
    first = SettingsPaths.from_directory(tmp_path / "first")
    cfg = Config(first)
    cfg.load_from_disk()
    cfg._paths = SettingsPaths.from_directory(tmp_path / "second")
    cfg.host = "h"

    cfg.write_to_disk()

    assert _read_yaml(first.config_file)["host"] == "h"
    assert not (tmp_path / "second").exists()


def test_failed_ensure_leaves_instance_unloaded(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    cfg = Config(SettingsPaths.from_directory(blocker / ".circleci"))

    with pytest.raises(OSError):
        cfg.load(environ={})

    assert cfg.file_used is None


def test_malformed_yaml_propagates(settings_paths: SettingsPaths) -> None:
    settings_paths.directory.mkdir(parents=True)
    settings_paths.config_file.write_text("host: [unclosed\n")

    with pytest.raises(yaml.YAMLError):
        Config(settings_paths).load(environ={})

    assert settings_paths.config_file.read_text() == "host: [unclosed\n"


def test_non_mapping_document_raises(settings_paths: SettingsPaths) -> None:
    settings_paths.directory.mkdir(parents=True)
    settings_paths.config_file.write_text("- host\n- token\n")

    with pytest.raises(SettingsFormatError) as exc_info:
        Config(settings_paths).load_from_disk()

    assert exc_info.value.found is list


def test_wrong_value_type_raises(settings_paths: SettingsPaths) -> None:
    settings_paths.directory.mkdir(parents=True)
    settings_paths.config_file.write_text("host:\n  nested: value\n")

    with pytest.raises(ValidationError):
        Config(settings_paths).load_from_disk()


def test_repr_masks_token() -> None:
    cfg = Config(host="h", token="super-secret-token")

    for text in (repr(cfg), str(cfg)):
        assert "super-secret-token" not in text
        assert "token='**************oken'" in text
        assert "host='h'" in text


def test_settings_file_base_is_abstract() -> None:
    with pytest.raises(TypeError):
        SettingsFile()


def test_persisted_fields() -> None:
    assert Config.persisted_fields() == ["host", "endpoint", "token"]
