# tests/conftest.py
import logging
from unittest.mock import MagicMock

import pytest

from dbcreate.config_models import AppSettings, BootstrapConfig


@pytest.fixture(autouse=True)
def clean_settings_environment(monkeypatch):
    """Keep the caller's OpenEdge environment out of AppSettings."""
    for name in ("DLC", "DLC_BIN", "LOG_LEVEL", "LOG_FILE", "LOG_PREFIX", "DATABASE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def dlc_home(tmp_path):
    """A fake OpenEdge install root with a bin directory."""
    dlc = tmp_path / "dlc"
    (dlc / "bin").mkdir(parents=True)
    return dlc


@pytest.fixture
def project_dir(tmp_path):
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def app_settings(dlc_home):
    return AppSettings(dlc=dlc_home)


@pytest.fixture
def bootstrap_config(project_dir):
    return BootstrapConfig(name="mydb", base_dir=project_dir)


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)
