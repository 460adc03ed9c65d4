# dbcreate/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for database creation settings.

BootstrapConfig describes one database to create. AppSettings carries the
ambient settings (DLC install root, logging) and loads them from the
environment through pydantic-settings.
"""

from pathlib import Path
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dbcreate import config as static_config

SYMBOLS_DEFAULT: Dict[str, str] = dict(static_config.SYMBOLS)


class RunParameter(BaseModel):
    """A name/value pair handed to a procedure through -param."""

    name: str
    value: str

    def to_param(self) -> str:
        return f"{self.name}={self.value}"


class _SchemaHolderBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    procedure: str
    parameters: List[RunParameter] = Field(default_factory=list)
    schema_file: Optional[Path] = Field(
        default=None,
        description="Schema file loaded into the database after the holder procedure ran.",
    )

    def get_procedure(self) -> str:
        return self.procedure

    def get_parameters(self) -> List[RunParameter]:
        return list(self.parameters)

    def get_schema_file(self) -> Optional[Path]:
        return self.schema_file


class OracleHolder(_SchemaHolderBase):
    """Oracle schema holder."""

    type: Literal["oracle"] = "oracle"
    procedure: str = static_config.ORACLE_HOLDER_PROCEDURE


class MSSHolder(_SchemaHolderBase):
    """SQL Server schema holder."""

    type: Literal["mss"] = "mss"
    procedure: str = static_config.MSS_HOLDER_PROCEDURE


class ODBCHolder(_SchemaHolderBase):
    """ODBC schema holder."""

    type: Literal["odbc"] = "odbc"
    procedure: str = static_config.ODBC_HOLDER_PROCEDURE


SchemaHolder = Annotated[
    Union[OracleHolder, MSSHolder, ODBCHolder], Field(discriminator="type")
]


class BootstrapConfig(BaseModel):
    """Settings of the database to create."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, description="Database name (at most 11 characters).")
    dest_dir: Optional[Path] = Field(
        default=None,
        description="Directory the database is created in. Defaults to base_dir.",
    )
    base_dir: Path = Field(
        default_factory=Path.cwd,
        description="Project base directory. Relative paths are resolved against it.",
    )
    struct_file: Optional[Path] = Field(default=None, description="Structure file (.st).")
    block_size: int = Field(
        default=static_config.DEFAULT_BLOCK_SIZE,
        description="Block size in KiB (1, 2, 4 or 8).",
    )
    codepage: Optional[str] = Field(
        default=None,
        description="Subdirectory of $DLC/prolang holding the empty database to copy.",
    )
    word_rules: Optional[int] = Field(
        default=None,
        ge=static_config.WORD_RULES_MIN,
        le=static_config.WORD_RULES_MAX,
        description="Word rules number applied to the database. None leaves them unchanged.",
    )
    no_init: bool = Field(default=False, description="Skip copying the empty database.")
    overwrite: bool = Field(default=False, description="Replace an existing database.")
    no_schema: bool = Field(default=False, description="Deprecated, has no effect.")
    schema_file: Optional[str] = Field(
        default=None,
        description="Comma-separated list of schema files (.df) loaded after creation.",
    )
    holders: List[SchemaHolder] = Field(default_factory=list)
    propath: List[Path] = Field(default_factory=list)
    env: Dict[str, str] = Field(
        default_factory=dict,
        description="Environment variables added to every command.",
    )

    @field_validator("block_size")
    @classmethod
    def _check_block_size(cls, value: int) -> int:
        if value not in static_config.BLOCK_SIZES:
            raise ValueError(
                f"block_size must be one of {sorted(static_config.BLOCK_SIZES)}, got {value}"
            )
        return value

    def add_holder(self, holder: Union[OracleHolder, MSSHolder, ODBCHolder]) -> None:
        self.holders.append(holder)

    def schema_files(self) -> List[str]:
        """Entries of the schema file list, in order."""
        if not self.schema_file:
            return []
        return [entry.strip() for entry in self.schema_file.split(",") if entry.strip()]

    def resolve_path(self, path: Union[str, Path]) -> Path:
        """Resolves a path against the project base directory."""
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.base_dir / candidate
        return candidate.absolute()


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(extra="ignore")

    dlc: Optional[Path] = Field(default=None, description="OpenEdge install root (DLC).")
    dlc_bin: Optional[Path] = Field(
        default=None,
        description="Directory of the OpenEdge executables. Defaults to $DLC/bin.",
    )
    log_prefix: str = Field(default=static_config.LOG_PREFIX_DEFAULT, description="Prefix for log messages.")
    log_level: str = Field(default="INFO", description="Logging level.")
    log_file: Optional[Path] = Field(default=None, description="Optional log file.")

    database: BootstrapConfig = Field(default_factory=BootstrapConfig)

    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))

    def get_dlc_bin(self) -> Optional[Path]:
        if self.dlc_bin is not None:
            return self.dlc_bin
        if self.dlc is not None:
            return self.dlc / "bin"
        return None
