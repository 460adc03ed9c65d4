# dbcreate/bootstrapper.py
# -*- coding: utf-8 -*-
"""
Creates an OpenEdge database from a BootstrapConfig.

The sequence is: structure creation (prostrct create), initialization from
an empty template database (procopy), word rules, schema files, then schema
holders. Every external command runs in the destination directory with DLC
set. Any failure stops the sequence; nothing already done is undone.
"""

import logging
import os
from functools import partial
from pathlib import Path
from typing import List, Optional

from common.command_utils import log_message, run_command
from common.file_utils import delete_database_files
from dbcreate import config as static_config
from dbcreate.collaborators import (
    DatabaseConnection,
    ProcedureRunner,
    ProgressProcedureRunner,
    ProgressSchemaLoader,
    SchemaLoader,
)
from dbcreate.command_lines import (
    CommandLine,
    block_size_bytes,
    init_cmd_line,
    struct_cmd_line,
    word_rule_cmd_line,
)
from dbcreate.config_models import AppSettings, BootstrapConfig
from dbcreate.errors import ConfigError
from dbcreate.step_executor import run_step

module_logger = logging.getLogger(__name__)


def _is_readable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


class DatabaseBootstrapper:
    """
    Creates a database by running the OpenEdge utilities.

    Schema loading and schema holder procedures are delegated to the
    schema_loader and procedure_runner collaborators. When none are given,
    the batch-mode _progres implementations are used.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        schema_loader: Optional[SchemaLoader] = None,
        procedure_runner: Optional[ProcedureRunner] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.logger = logger or module_logger
        self.procedure_runner = procedure_runner or ProgressProcedureRunner(
            app_settings, dlc_bin=app_settings.get_dlc_bin(), logger=self.logger
        )
        self.schema_loader = schema_loader or ProgressSchemaLoader(
            self.procedure_runner, app_settings, logger=self.logger
        )

    def check_dlc_home(self) -> Path:
        dlc = self.app_settings.dlc
        if dlc is None:
            raise ConfigError("DLC install root is not set")
        if not Path(dlc).is_dir():
            raise ConfigError(f"DLC install root {dlc} is not a directory")
        return Path(dlc)

    def validate(self, config: BootstrapConfig) -> Path:
        """
        Checks the configuration and returns the destination directory.

        Raises:
            ConfigError: The configuration cannot produce a database.
        """
        if config.struct_file is None and config.no_init:
            raise ConfigError(
                "Nothing to create: no structure file given and initialization is disabled"
            )
        if not config.name:
            raise ConfigError("Database name is not set")
        if len(config.name) > static_config.DB_NAME_MAX_LENGTH:
            raise ConfigError(
                f"Database name '{config.name}' is longer than {static_config.DB_NAME_MAX_LENGTH} characters"
            )
        if config.holders:
            if config.schema_file and config.schema_file.strip():
                raise ConfigError(
                    "Schema files cannot be loaded when schema holders are defined"
                )
            if config.no_init:
                raise ConfigError(
                    "Initialization cannot be skipped when schema holders are defined"
                )
            # Holder schema files must all be readable before any command runs.
            for holder in config.holders:
                if holder.get_schema_file() is None:
                    continue
                holder_schema = config.resolve_path(holder.get_schema_file())
                if not _is_readable_file(holder_schema):
                    raise ConfigError(f"Unable to read schema file {holder_schema}")
        block_size_bytes(config.block_size)

        if config.no_schema:
            log_message(
                f"{self.app_settings.symbols.get('warning', '!')} no_schema is deprecated and has no effect",
                "warning",
                self.logger,
                self.app_settings,
            )

        if config.dest_dir is None:
            return Path(config.base_dir)
        return config.resolve_path(config.dest_dir)

    def command_lines(self, config: BootstrapConfig) -> List[CommandLine]:
        """The utility command lines the configuration runs, in order."""
        dlc = self.check_dlc_home()
        dest_dir = self.validate(config)
        return self._command_lines(config, dlc, dest_dir)

    def _command_lines(
        self, config: BootstrapConfig, dlc: Path, dest_dir: Path
    ) -> List[CommandLine]:
        dlc_bin = self.app_settings.get_dlc_bin() or dlc / "bin"
        commands: List[CommandLine] = []
        if config.struct_file is not None:
            commands.append(
                struct_cmd_line(
                    dlc,
                    dlc_bin,
                    config.name,
                    config.resolve_path(config.struct_file),
                    config.block_size,
                    dest_dir,
                    env=config.env,
                )
            )
        if not config.no_init:
            commands.append(
                init_cmd_line(
                    dlc,
                    dlc_bin,
                    config.name,
                    config.block_size,
                    dest_dir,
                    codepage=config.codepage,
                    env=config.env,
                )
            )
        if config.word_rules is not None:
            commands.append(
                word_rule_cmd_line(
                    dlc,
                    dlc_bin,
                    config.name,
                    config.word_rules,
                    dest_dir,
                    env=config.env,
                )
            )
        return commands

    def _run(self, command: CommandLine) -> None:
        run_command(
            command.argv,
            self.app_settings,
            capture_output=True,
            current_logger=self.logger,
            cwd=command.cwd,
            env=command.env,
        )

    def execute(self, config: BootstrapConfig) -> None:
        """
        Creates the database described by config.

        Raises:
            ConfigError: Invalid configuration or missing input file.
            ExecutionError: An external command or delegated task failed.
        """
        dlc = self.check_dlc_home()
        dest_dir = self.validate(config)
        symbols = self.app_settings.symbols
        db_name = config.name

        db_file = dest_dir / f"{db_name}.db"
        if db_file.exists():
            if config.overwrite:
                run_step(
                    "DELETE",
                    f"Delete existing database {db_file}",
                    partial(
                        delete_database_files,
                        dest_dir,
                        db_name,
                        self.app_settings,
                        self.logger,
                    ),
                    self.app_settings,
                    self.logger,
                )
            else:
                log_message(
                    f"{symbols.get('info', 'ℹ️')} Database {db_file} already exists, nothing to do",
                    "info",
                    self.logger,
                    self.app_settings,
                )
                return

        if config.struct_file is not None:
            struct_file = config.resolve_path(config.struct_file)
            if not struct_file.exists():
                raise ConfigError(f"Structure file {struct_file} does not exist")

        log_message(
            f"{symbols.get('rocket', '🚀')} Creating database {db_name} in {dest_dir}",
            "info",
            self.logger,
            self.app_settings,
        )

        commands = iter(self._command_lines(config, dlc, dest_dir))
        if config.struct_file is not None:
            run_step(
                "STRUCT",
                "Create database structure",
                partial(self._run, next(commands)),
                self.app_settings,
                self.logger,
            )
        if not config.no_init:
            run_step(
                "INIT",
                "Copy empty database",
                partial(self._run, next(commands)),
                self.app_settings,
                self.logger,
            )
        # Word rules go before the schema so new indexes are built with them.
        if config.word_rules is not None:
            run_step(
                "WORD_RULES",
                f"Apply word rules {config.word_rules}",
                partial(self._run, next(commands)),
                self.app_settings,
                self.logger,
            )

        propath = [config.resolve_path(p) for p in config.propath]
        connection = DatabaseConnection(db_name, dest_dir, single_user=True)

        for entry in config.schema_files():
            schema_path = config.resolve_path(entry)
            if not _is_readable_file(schema_path):
                raise ConfigError(f"Unable to read schema file {schema_path}")
            run_step(
                "SCHEMA",
                f"Load schema {schema_path}",
                partial(
                    self.schema_loader.load_schema,
                    schema_path,
                    dlc,
                    propath,
                    connection,
                    env=config.env,
                ),
                self.app_settings,
                self.logger,
            )

        for holder in config.holders:
            run_step(
                "HOLDER",
                f"Run {holder.type} schema holder procedure {holder.get_procedure()}",
                partial(
                    self.procedure_runner.run_procedure,
                    dlc,
                    propath,
                    holder.get_procedure(),
                    holder.get_parameters(),
                    connection,
                    env=config.env,
                ),
                self.app_settings,
                self.logger,
            )
            holder_schema = holder.get_schema_file()
            if holder_schema is not None:
                holder_schema = config.resolve_path(holder_schema)
                run_step(
                    "HOLDER_SCHEMA",
                    f"Load schema {holder_schema}",
                    partial(
                        self.schema_loader.load_schema,
                        holder_schema,
                        dlc,
                        propath,
                        connection,
                        env=config.env,
                    ),
                    self.app_settings,
                    self.logger,
                )

        log_message(
            f"{symbols.get('sparkles', '✨')} Database {db_name} created in {dest_dir}",
            "info",
            self.logger,
            self.app_settings,
        )
