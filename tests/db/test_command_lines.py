from pathlib import Path

import pytest

from dbcreate.command_lines import (
    build_environment,
    empty_database_path,
    get_exec_path,
    init_cmd_line,
    struct_cmd_line,
    word_rule_cmd_line,
)
from dbcreate.errors import ConfigError

DLC = Path("/opt/dlc")
DLC_BIN = DLC / "bin"


def test_struct_cmd_line_arguments():
    command = struct_cmd_line(
        DLC, DLC_BIN, "mydb", Path("foo.st"), 8, Path("/work/db")
    )

    assert command.args == ["prostrct", "create", "mydb", "foo.st", "-blocksize", "8192"]
    assert command.executable == str(get_exec_path(DLC_BIN, "_dbutil"))
    assert command.cwd == str(Path("/work/db"))


@pytest.mark.parametrize(
    "block_size, expected", [(1, "1024"), (2, "2048"), (4, "4096"), (8, "8192")]
)
def test_struct_cmd_line_block_sizes(block_size, expected):
    command = struct_cmd_line(DLC, DLC_BIN, "mydb", Path("foo.st"), block_size, Path("."))

    assert command.args[-2:] == ["-blocksize", expected]


def test_struct_cmd_line_rejects_unknown_block_size():
    with pytest.raises(ConfigError):
        struct_cmd_line(DLC, DLC_BIN, "mydb", Path("foo.st"), 3, Path("."))


def test_init_cmd_line_copies_empty_database():
    command = init_cmd_line(DLC, DLC_BIN, "mydb", 4, Path("/work/db"))

    assert command.args == ["procopy", str((DLC / "empty4").absolute()), "mydb"]
    assert command.executable == str(get_exec_path(DLC_BIN, "_dbutil"))


def test_init_cmd_line_with_codepage():
    command = init_cmd_line(DLC, DLC_BIN, "mydb", 8, Path("/work/db"), codepage="utf")

    assert command.args[1] == str((DLC / "prolang" / "utf" / "empty8").absolute())


def test_empty_database_path():
    assert empty_database_path(DLC, 1) == DLC / "empty1"
    assert empty_database_path(DLC, 2, "1252") == DLC / "prolang" / "1252" / "empty2"


def test_word_rule_cmd_line():
    command = word_rule_cmd_line(DLC, DLC_BIN, "mydb", 12, Path("/work/db"))

    assert command.args == ["mydb", "-C", "word-rules", "12"]
    assert command.executable == str(get_exec_path(DLC_BIN, "_proutil"))
    assert command.argv == [command.executable, "mydb", "-C", "word-rules", "12"]


def test_command_lines_carry_dlc_and_overrides():
    command = word_rule_cmd_line(
        DLC, DLC_BIN, "mydb", 0, Path("."), env={"PROMSGS": "/opt/dlc/promsgs"}
    )

    assert command.env["DLC"] == str(DLC)
    assert command.env["PROMSGS"] == "/opt/dlc/promsgs"


def test_build_environment_overrides_apply_last():
    env = build_environment(
        DLC,
        {"DLC": "/other/dlc", "TERM": "vt100"},
        base_env={"PATH": "/usr/bin", "TERM": "xterm"},
    )

    assert env == {"PATH": "/usr/bin", "TERM": "vt100", "DLC": "/other/dlc"}


def test_build_environment_inherits_process_environment(monkeypatch):
    monkeypatch.setenv("DBCREATE_TEST_VAR", "1")

    env = build_environment(DLC)

    assert env["DBCREATE_TEST_VAR"] == "1"
    assert env["DLC"] == str(DLC)


def test_get_exec_path_windows(monkeypatch):
    monkeypatch.setattr("dbcreate.command_lines.sys.platform", "win32")

    assert get_exec_path(DLC_BIN, "_dbutil") == DLC_BIN / "_dbutil.exe"
