"""Command-line helpers for inspecting and editing CLI settings."""

from __future__ import annotations

import logging
import sys
from typing import Final

import typer
import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from circleci_settings.errors import SettingsError
from circleci_settings.paths import SettingsPaths
from circleci_settings.settings import Config, UpdateCheck
from circleci_settings.utils.formatting import mask_secret

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="CircleCI CLI settings", add_completion=False)
update_check_app = typer.Typer(help="Update check state")
app.add_typer(update_check_app, name="update-check")

logger: Final = logging.getLogger(__name__)  # Will be "circleci_settings.cli"

DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
KEY_ARGUMENT = typer.Argument(..., help="Setting to change: host, endpoint or token")
VALUE_ARGUMENT = typer.Argument(..., help="New value")

LOAD_ERRORS = (SettingsError, OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError)


def _fail(exc: Exception) -> typer.Exit:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


@app.callback()
def main(debug: bool = DEBUG_OPTION) -> None:
    """Read and write ~/.circleci settings."""
    # .env values never replace variables already set in the environment
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


@app.command()
def show() -> None:
    """Show the effective config, including environment overrides."""
    cfg = Config()
    try:
        cfg.load()
    except LOAD_ERRORS as exc:
        raise _fail(exc) from exc

    typer.echo(f"Host:     {cfg.host or '(not set)'}")
    typer.echo(f"Endpoint: {cfg.endpoint or '(not set)'}")
    typer.echo(f"Token:    {mask_secret(cfg.token)}")
    typer.echo(f"File:     {cfg.file_used}")


@app.command()
def path() -> None:
    """Print the settings file locations."""
    try:
        paths = SettingsPaths.default()
    except SettingsError as exc:
        raise _fail(exc) from exc
    typer.echo(str(paths.config_file))
    typer.echo(str(paths.update_check_file))


@app.command("set")
def set_value(key: str = KEY_ARGUMENT, value: str = VALUE_ARGUMENT) -> None:
    """Persist a config value.

    Environment overrides are not applied first, so they are never written
    back to the file.
    """
    if key not in Config.ENV_FIELDS:
        typer.secho(
            f"Unknown key '{key}' (expected one of: {', '.join(Config.ENV_FIELDS)})",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    cfg = Config()
    try:
        cfg.load_from_disk()
        setattr(cfg, key, value)
        cfg.write_to_disk()
    except LOAD_ERRORS as exc:
        raise _fail(exc) from exc

    shown = mask_secret(value) if key == "token" else value
    typer.secho(f"Set {key} = {shown} in {cfg.file_used}", fg=typer.colors.GREEN)


# ───────────────────────── update-check sub-commands ─────────────────────────
@update_check_app.command("show")
def update_check_show() -> None:
    """Print when the last update check ran."""
    upd = UpdateCheck()
    try:
        upd.load()
    except LOAD_ERRORS as exc:
        raise _fail(exc) from exc

    if upd.last_update_check is None:
        typer.echo("Never checked")
    else:
        typer.echo(upd.last_update_check.isoformat())


@update_check_app.command("touch")
def update_check_touch() -> None:
    """Record that an update check ran now."""
    upd = UpdateCheck()
    try:
        upd.load()
        checked = upd.record_check()
        upd.write_to_disk()
    except LOAD_ERRORS as exc:
        raise _fail(exc) from exc
    typer.echo(checked.isoformat())


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
