# dbcreate/cli.py
# -*- coding: utf-8 -*-
import functools
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click

from common.core_utils import parse_log_level, setup_logging
from dbcreate.bootstrapper import DatabaseBootstrapper
from dbcreate.config_loader import load_app_settings
from dbcreate.config_models import AppSettings
from dbcreate.errors import ConfigError, ExecutionError

EXIT_EXECUTION_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _parse_env(ctx, param, values: Tuple[str, ...]) -> Optional[Dict[str, str]]:
    if not values:
        return None
    env: Dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'")
        env[key] = value
    return env


def database_options(func):
    """Options shared by the commands that take a database configuration."""

    @click.option(
        "--config",
        "config_file",
        type=click.Path(dir_okay=False),
        help="YAML configuration file (default: ./dbcreate.yaml if present).",
    )
    @click.option("--dlc", type=click.Path(path_type=Path), help="OpenEdge install root.")
    @click.option(
        "--dlc-bin",
        type=click.Path(path_type=Path),
        help="Directory of the OpenEdge executables (default: $DLC/bin).",
    )
    @click.option("--name", help="Database name, at most 11 characters.")
    @click.option(
        "--dest-dir",
        type=click.Path(path_type=Path),
        help="Directory the database is created in.",
    )
    @click.option(
        "--struct-file",
        type=click.Path(path_type=Path),
        help="Structure file (.st).",
    )
    @click.option("--block-size", type=int, help="Block size in KiB: 1, 2, 4 or 8.")
    @click.option("--codepage", help="Copy the empty database from $DLC/prolang/<codepage>.")
    @click.option(
        "--word-rules",
        type=click.IntRange(0, 255),
        help="Word rules number (0-255).",
    )
    @click.option("--no-init", is_flag=True, help="Do not copy the empty database.")
    @click.option("--overwrite", is_flag=True, help="Replace an existing database.")
    @click.option(
        "--schema",
        "schema_file",
        help="Comma-separated list of schema files (.df) to load.",
    )
    @click.option(
        "--propath",
        multiple=True,
        type=click.Path(path_type=Path),
        help="PROPATH entry. Can be repeated.",
    )
    @click.option(
        "--env",
        multiple=True,
        callback=_parse_env,
        help="Environment variable KEY=VALUE passed to every command. Can be repeated.",
    )
    @click.option("--log-file", type=click.Path(path_type=Path), help="Also log to this file.")
    @click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper


def _load_settings(options: Dict[str, Any]) -> AppSettings:
    overrides = dict(options)
    config_file = overrides.pop("config_file", None)
    verbose = overrides.pop("verbose", False)
    # Unset flags must not override the configuration file.
    for flag in ("no_init", "overwrite"):
        overrides[flag] = overrides.get(flag) or None
    overrides["propath"] = list(overrides.get("propath") or []) or None
    if verbose:
        overrides["log_level"] = "DEBUG"

    settings = load_app_settings(overrides, config_file)
    setup_logging(
        log_level=parse_log_level(settings.log_level),
        log_file=str(settings.log_file) if settings.log_file else None,
        log_prefix=settings.log_prefix,
        symbols=settings.symbols,
    )
    return settings


@click.group()
def cli():
    """
    Creates OpenEdge databases with the utilities of a DLC install.
    """
    pass


@cli.command(name="create")
@database_options
def create_command(**options):
    """
    Creates the configured database.

    Exits with 2 on configuration errors and 1 when a command fails.
    """
    try:
        settings = _load_settings(options)
        DatabaseBootstrapper(settings).execute(settings.database)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except ExecutionError as e:
        click.echo(f"Database creation failed: {e}", err=True)
        sys.exit(EXIT_EXECUTION_ERROR)
    click.echo(f"Database {settings.database.name} is ready.")


@cli.command(name="show-commands")
@database_options
def show_commands_command(**options):
    """
    Prints the utility command lines `create` would run, without running them.
    """
    try:
        settings = _load_settings(options)
        commands = DatabaseBootstrapper(settings).command_lines(settings.database)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    for command in commands:
        click.echo(f"{subprocess.list2cmdline(command.argv)}  (in {command.cwd})")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
