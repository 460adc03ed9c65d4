from pathlib import Path

import pytest
from pydantic import ValidationError

from dbcreate.config_models import (
    AppSettings,
    BootstrapConfig,
    MSSHolder,
    ODBCHolder,
    OracleHolder,
    RunParameter,
)


def test_bootstrap_config_defaults(project_dir):
    config = BootstrapConfig(base_dir=project_dir)

    assert config.name is None
    assert config.block_size == 8
    assert config.word_rules is None
    assert config.no_init is False
    assert config.overwrite is False
    assert config.holders == []
    assert config.schema_files() == []


@pytest.mark.parametrize("block_size", [0, 3, 16])
def test_bootstrap_config_rejects_unknown_block_size(block_size):
    with pytest.raises(ValidationError):
        BootstrapConfig(block_size=block_size)


@pytest.mark.parametrize("word_rules", [-1, 256])
def test_bootstrap_config_rejects_out_of_range_word_rules(word_rules):
    with pytest.raises(ValidationError):
        BootstrapConfig(word_rules=word_rules)


def test_bootstrap_config_accepts_word_rule_bounds():
    assert BootstrapConfig(word_rules=0).word_rules == 0
    assert BootstrapConfig(word_rules=255).word_rules == 255


def test_schema_files_split_in_order():
    config = BootstrapConfig(schema_file="a.df, b.df,,c.df")

    assert config.schema_files() == ["a.df", "b.df", "c.df"]


def test_resolve_path_against_base_dir(project_dir, tmp_path):
    config = BootstrapConfig(base_dir=project_dir)

    assert config.resolve_path("db/a.df") == project_dir / "db" / "a.df"
    assert config.resolve_path(tmp_path / "x.st") == tmp_path / "x.st"


def test_holders_are_parsed_by_type():
    config = BootstrapConfig(
        holders=[
            {"type": "oracle", "schema_file": "ora.df"},
            {"type": "mss", "parameters": [{"name": "server", "value": "sql01"}]},
            {"type": "odbc", "procedure": "custom/odbc.p"},
        ]
    )

    oracle, mss, odbc = config.holders
    assert isinstance(oracle, OracleHolder)
    assert oracle.get_schema_file() == Path("ora.df")
    assert isinstance(mss, MSSHolder)
    assert mss.get_parameters() == [RunParameter(name="server", value="sql01")]
    assert isinstance(odbc, ODBCHolder)
    assert odbc.get_procedure() == "custom/odbc.p"


def test_holder_without_type_is_rejected():
    with pytest.raises(ValidationError):
        BootstrapConfig(holders=[{"procedure": "x.p"}])


def test_holder_default_procedures_differ():
    procedures = {
        OracleHolder().get_procedure(),
        MSSHolder().get_procedure(),
        ODBCHolder().get_procedure(),
    }

    assert len(procedures) == 3


def test_add_holder_appends_in_order():
    config = BootstrapConfig()
    first = OracleHolder()
    second = ODBCHolder()

    config.add_holder(first)
    config.add_holder(second)

    assert config.holders == [first, second]


def test_run_parameter_to_param():
    assert RunParameter(name="user", value="scott").to_param() == "user=scott"


def test_app_settings_dlc_bin_defaults_to_dlc_bin(tmp_path):
    settings = AppSettings(dlc=tmp_path)

    assert settings.get_dlc_bin() == tmp_path / "bin"


def test_app_settings_explicit_dlc_bin(tmp_path):
    settings = AppSettings(dlc=tmp_path, dlc_bin=tmp_path / "bin64")

    assert settings.get_dlc_bin() == tmp_path / "bin64"


def test_app_settings_reads_dlc_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("DLC", str(tmp_path))
    monkeypatch.delenv("DLC_BIN", raising=False)

    settings = AppSettings()

    assert settings.dlc == tmp_path
    assert settings.get_dlc_bin() == tmp_path / "bin"
