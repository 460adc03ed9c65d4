# dbcreate/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader.

Settings are resolved with the following order of precedence:
1. Pydantic model defaults
2. Environment variables (DLC, DLC_BIN, LOG_LEVEL, ... via pydantic-settings)
3. YAML configuration file
4. Command-line options
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from dbcreate import config as static_config
from dbcreate.config_models import AppSettings, BootstrapConfig
from dbcreate.errors import ConfigError

module_logger = logging.getLogger(__name__)

# Keys of the command-line overrides that belong to AppSettings itself.
# Everything else is a BootstrapConfig field.
_APP_LEVEL_KEYS = ("dlc", "dlc_bin", "log_level", "log_file", "log_prefix")


def _resolve_cli_paths(values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Makes relative paths given on the command line absolute against the
    working directory, so they do not follow the base_dir of a config file.
    """
    cwd = Path.cwd()

    def resolve(path: Any) -> str:
        candidate = Path(path)
        return str(candidate if candidate.is_absolute() else cwd / candidate)

    resolved = dict(values)
    for key in ("dest_dir", "struct_file"):
        if resolved.get(key) is not None:
            resolved[key] = resolve(resolved[key])
    if resolved.get("propath"):
        resolved["propath"] = [resolve(entry) for entry in resolved["propath"]]
    if resolved.get("schema_file"):
        resolved["schema_file"] = ",".join(
            resolve(entry.strip())
            for entry in resolved["schema_file"].split(",")
            if entry.strip()
        )
    return resolved


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates `source` with the values of `overrides`. Nested
    dictionaries are merged; None values in `overrides` never replace an
    existing value.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
        elif key not in source:
            source[key] = value
    return source


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse YAML config file '{path}': {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file '{path}': {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file '{path}' does not contain a YAML dictionary"
        )
    return data


def load_app_settings(
    cli_overrides: Optional[Dict[str, Any]] = None,
    config_file_path: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads the application settings.

    Args:
        cli_overrides: Values given on the command line. Keys are AppSettings
            fields (dlc, dlc_bin, log_level, ...) or BootstrapConfig fields
            (name, dest_dir, block_size, ...). None values are ignored.
        config_file_path: YAML file to read. When not given, the default
            file in the working directory is read if it exists.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        The resolved AppSettings.

    Raises:
        ConfigError: The configuration file is unreadable or the resulting
            settings are invalid.
    """
    logger_to_use = current_logger if current_logger else module_logger

    # ValidationError and pydantic-settings' parse errors are both ValueErrors.
    try:
        current_values_dict = AppSettings().model_dump(exclude_defaults=False)
    except ValueError as e:
        raise ConfigError(f"Invalid settings in environment: {e}") from e

    if config_file_path:
        yaml_config_path = Path(config_file_path)
        if not yaml_config_path.is_file():
            raise ConfigError(f"Configuration file '{yaml_config_path}' not found")
    else:
        yaml_config_path = Path.cwd() / static_config.DEFAULT_CONFIG_FILE

    if yaml_config_path.is_file():
        yaml_data = _read_yaml(yaml_config_path)
        database_section = yaml_data.get("database")
        if isinstance(database_section, dict) and "base_dir" not in database_section:
            # Relative paths in the file are relative to the file.
            database_section["base_dir"] = str(
                yaml_config_path.resolve().parent
            )
        current_values_dict = _deep_update(current_values_dict, yaml_data)
        logger_to_use.info(f"Loaded configuration from {yaml_config_path}")
    else:
        logger_to_use.info(
            f"Configuration file '{yaml_config_path}' not found. Using defaults, environment variables, and CLI options."
        )

    if cli_overrides:
        mapped_cli_values: Dict[str, Any] = {}
        database_cli_values: Dict[str, Any] = {}

        for cli_key, cli_value in cli_overrides.items():
            if cli_value is None:
                continue
            if cli_key in _APP_LEVEL_KEYS:
                mapped_cli_values[cli_key] = cli_value
            elif cli_key in BootstrapConfig.model_fields:
                database_cli_values[cli_key] = cli_value
            else:
                logger_to_use.debug(f"Ignoring unknown option '{cli_key}'")

        database_cli_values = _resolve_cli_paths(database_cli_values)
        if database_cli_values:
            if not isinstance(current_values_dict.get("database"), dict):
                current_values_dict["database"] = {}
            current_values_dict["database"] = _deep_update(
                current_values_dict["database"], database_cli_values
            )
        current_values_dict = _deep_update(
            current_values_dict, mapped_cli_values
        )

    try:
        return AppSettings(**current_values_dict)
    except ValueError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
