# dbcreate/collaborators.py
# -*- coding: utf-8 -*-
"""
Tasks the bootstrapper delegates to: loading a schema file and running a
procedure against the freshly created database.

Both are described by a Protocol so callers can supply their own
implementation. The default implementations run the OpenEdge client in
batch mode through run_command.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Protocol, Sequence

from common.command_utils import log_message, run_command
from dbcreate import config as static_config
from dbcreate.command_lines import build_environment, get_exec_path
from dbcreate.config_models import AppSettings, RunParameter

module_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatabaseConnection:
    """Connection to a database by physical name."""

    db_name: str
    db_dir: Path
    single_user: bool = True

    def to_args(self) -> List[str]:
        args = ["-db", str(Path(self.db_dir) / self.db_name)]
        if self.single_user:
            args.append("-1")
        return args


class ProcedureRunner(Protocol):
    def run_procedure(
        self,
        dlc: Path,
        propath: Sequence[Path],
        procedure: str,
        parameters: Sequence[RunParameter],
        connection: DatabaseConnection,
        env: Optional[Mapping[str, str]] = None,
        param: Optional[str] = None,
    ) -> None: ...


class SchemaLoader(Protocol):
    def load_schema(
        self,
        src_file: Path,
        dlc: Path,
        propath: Sequence[Path],
        connection: DatabaseConnection,
        env: Optional[Mapping[str, str]] = None,
    ) -> None: ...


class ProgressProcedureRunner:
    """Runs a procedure with _progres in batch mode."""

    def __init__(
        self,
        app_settings: Optional[AppSettings] = None,
        dlc_bin: Optional[Path] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.dlc_bin = dlc_bin
        self.logger = logger or module_logger

    def build_command(
        self,
        dlc: Path,
        procedure: str,
        parameters: Sequence[RunParameter],
        connection: DatabaseConnection,
        param: Optional[str] = None,
    ) -> List[str]:
        dlc_bin = self.dlc_bin or Path(dlc) / "bin"
        command = [
            str(get_exec_path(dlc_bin, static_config.PROGRES_EXECUTABLE)),
            "-b",
            "-p",
            procedure,
        ]
        if param is None and parameters:
            param = ",".join(p.to_param() for p in parameters)
        if param is not None:
            command.extend(["-param", param])
        command.extend(connection.to_args())
        return command

    def run_procedure(
        self,
        dlc: Path,
        propath: Sequence[Path],
        procedure: str,
        parameters: Sequence[RunParameter],
        connection: DatabaseConnection,
        env: Optional[Mapping[str, str]] = None,
        param: Optional[str] = None,
    ) -> None:
        command = self.build_command(
            dlc, procedure, parameters, connection, param=param
        )
        run_env = build_environment(dlc, env)
        if propath:
            run_env["PROPATH"] = os.pathsep.join(str(p) for p in propath)

        log_message(
            f"Running {procedure} against {connection.db_name}",
            "debug",
            self.logger,
            self.app_settings,
        )
        run_command(
            command,
            self.app_settings,
            capture_output=True,
            current_logger=self.logger,
            cwd=str(connection.db_dir),
            env=run_env,
        )


class ProgressSchemaLoader:
    """
    Loads a .df file with prodict/load_df.p.

    load_df.p takes the file name as an INPUT parameter, so it cannot be the
    startup procedure. The packaged load_schema.p reads the name from -param
    and runs it.
    """

    def __init__(
        self,
        procedure_runner: ProcedureRunner,
        app_settings: Optional[AppSettings] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.procedure_runner = procedure_runner
        self.app_settings = app_settings
        self.logger = logger or module_logger

    def load_schema(
        self,
        src_file: Path,
        dlc: Path,
        propath: Sequence[Path],
        connection: DatabaseConnection,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        log_message(
            f"Loading schema {src_file} into {connection.db_name}",
            "info",
            self.logger,
            self.app_settings,
        )
        self.procedure_runner.run_procedure(
            dlc,
            [static_config.PROCEDURES_DIR, *propath],
            static_config.SCHEMA_LOAD_PROCEDURE,
            [],
            connection,
            env=env,
            param=str(src_file),
        )
