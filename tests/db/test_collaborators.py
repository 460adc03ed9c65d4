import os
from pathlib import Path
from unittest.mock import MagicMock

from pytest_mock import MockerFixture

from dbcreate.collaborators import (
    DatabaseConnection,
    ProgressProcedureRunner,
    ProgressSchemaLoader,
)
from dbcreate import config as static_config
from dbcreate.command_lines import get_exec_path
from dbcreate.config_models import RunParameter


def test_single_user_connection_args(tmp_path):
    connection = DatabaseConnection("mydb", tmp_path)

    assert connection.to_args() == ["-db", str(tmp_path / "mydb"), "-1"]


def test_multi_user_connection_args(tmp_path):
    connection = DatabaseConnection("mydb", tmp_path, single_user=False)

    assert connection.to_args() == ["-db", str(tmp_path / "mydb")]


def test_build_command_joins_parameters(dlc_home, tmp_path):
    runner = ProgressProcedureRunner()
    connection = DatabaseConnection("mydb", tmp_path)

    command = runner.build_command(
        dlc_home,
        "pct/pctOracleHolder.p",
        [RunParameter(name="user", value="scott"), RunParameter(name="sid", value="orcl")],
        connection,
    )

    assert command == [
        str(get_exec_path(dlc_home / "bin", "_progres")),
        "-b",
        "-p",
        "pct/pctOracleHolder.p",
        "-param",
        "user=scott,sid=orcl",
        "-db",
        str(tmp_path / "mydb"),
        "-1",
    ]


def test_build_command_without_parameters(dlc_home, tmp_path):
    runner = ProgressProcedureRunner(dlc_bin=tmp_path / "bin64")

    command = runner.build_command(
        dlc_home, "run.p", [], DatabaseConnection("mydb", tmp_path)
    )

    assert command[0] == str(get_exec_path(tmp_path / "bin64", "_progres"))
    assert "-param" not in command


def test_run_procedure_sets_environment(mocker: MockerFixture, app_settings, dlc_home, tmp_path):
    mock_run_command = mocker.patch("dbcreate.collaborators.run_command")
    runner = ProgressProcedureRunner(app_settings)
    propath = [tmp_path / "src", tmp_path / "lib"]

    runner.run_procedure(
        dlc_home,
        propath,
        "run.p",
        [],
        DatabaseConnection("mydb", tmp_path),
        env={"PROMSGS": "promsgs"},
    )

    mock_run_command.assert_called_once()
    kwargs = mock_run_command.call_args.kwargs
    assert kwargs["cwd"] == str(tmp_path)
    assert kwargs["env"]["DLC"] == str(dlc_home)
    assert kwargs["env"]["PROMSGS"] == "promsgs"
    assert kwargs["env"]["PROPATH"] == os.pathsep.join(str(p) for p in propath)


def test_schema_loader_runs_wrapper_procedure(dlc_home, tmp_path):
    procedure_runner = MagicMock()
    loader = ProgressSchemaLoader(procedure_runner)
    connection = DatabaseConnection("mydb", tmp_path)
    schema = tmp_path / "sports.df"
    propath = [tmp_path / "src"]

    loader.load_schema(schema, dlc_home, propath, connection, env={"A": "1"})

    procedure_runner.run_procedure.assert_called_once_with(
        dlc_home,
        [static_config.PROCEDURES_DIR, tmp_path / "src"],
        "load_schema.p",
        [],
        connection,
        env={"A": "1"},
        param=str(schema),
    )


def test_schema_load_wrapper_is_packaged():
    wrapper = static_config.PROCEDURES_DIR / static_config.SCHEMA_LOAD_PROCEDURE

    assert wrapper.is_file()
    source = wrapper.read_text(encoding="utf-8")
    assert "SESSION:PARAMETER" in source
    assert "RUN prodict/load_df.p (INPUT cSchemaFile)" in source


def test_schema_loader_passes_path_argument(dlc_home, tmp_path):
    procedure_runner = MagicMock()
    ProgressSchemaLoader(procedure_runner).load_schema(
        Path("a.df"), dlc_home, [], DatabaseConnection("mydb", tmp_path)
    )

    assert procedure_runner.run_procedure.call_args.kwargs["param"] == "a.df"
