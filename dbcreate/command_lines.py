# dbcreate/command_lines.py
# -*- coding: utf-8 -*-
"""
Builders for the OpenEdge utility command lines used to create a database.

Each builder returns a CommandLine ready to be handed to run_command. The
command lines run in the destination directory with DLC set in their
environment.
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dbcreate import config as static_config
from dbcreate.errors import ConfigError


@dataclass(frozen=True)
class CommandLine:
    executable: str
    args: List[str]
    cwd: Optional[str] = None
    env: Dict[str, str] = field(default_factory=dict)

    @property
    def argv(self) -> List[str]:
        return [self.executable] + list(self.args)


def get_exec_path(dlc_bin: Path, name: str) -> Path:
    """Path of an executable in the DLC bin directory."""
    if sys.platform.startswith("win"):
        return dlc_bin / f"{name}.exe"
    return dlc_bin / name


def build_environment(
    dlc: Path,
    overrides: Optional[Mapping[str, str]] = None,
    base_env: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Environment for an OpenEdge utility: the inherited environment, DLC
    pointing at the install root, then the caller's overrides.
    """
    env = dict(os.environ if base_env is None else base_env)
    env["DLC"] = str(dlc)
    if overrides:
        env.update({key: str(value) for key, value in overrides.items()})
    return env


def block_size_bytes(block_size: int) -> int:
    try:
        return static_config.BLOCK_SIZES[block_size]
    except KeyError:
        raise ConfigError(
            f"Invalid block size {block_size}, expected one of {sorted(static_config.BLOCK_SIZES)}"
        ) from None


def empty_database_path(
    dlc: Path, block_size: int, codepage: Optional[str] = None
) -> Path:
    """Template database: $DLC/emptyN, or $DLC/prolang/<codepage>/emptyN."""
    src_dir = dlc
    if codepage is not None:
        src_dir = src_dir / static_config.PROLANG_DIR / codepage
    return src_dir / f"{static_config.EMPTY_DB_PREFIX}{block_size}"


def struct_cmd_line(
    dlc: Path,
    dlc_bin: Path,
    db_name: str,
    struct_file: Path,
    block_size: int,
    dest_dir: Path,
    env: Optional[Mapping[str, str]] = None,
) -> CommandLine:
    """_dbutil prostrct create <name> <structFile> -blocksize <bytes>"""
    return CommandLine(
        executable=str(get_exec_path(dlc_bin, static_config.DBUTIL_EXECUTABLE)),
        args=[
            "prostrct",
            "create",
            db_name,
            str(struct_file),
            "-blocksize",
            str(block_size_bytes(block_size)),
        ],
        cwd=str(dest_dir),
        env=build_environment(dlc, env),
    )


def init_cmd_line(
    dlc: Path,
    dlc_bin: Path,
    db_name: str,
    block_size: int,
    dest_dir: Path,
    codepage: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> CommandLine:
    """_dbutil procopy <emptyN> <name>"""
    src_db = empty_database_path(dlc, block_size, codepage)
    return CommandLine(
        executable=str(get_exec_path(dlc_bin, static_config.DBUTIL_EXECUTABLE)),
        args=["procopy", str(src_db.absolute()), db_name],
        cwd=str(dest_dir),
        env=build_environment(dlc, env),
    )


def word_rule_cmd_line(
    dlc: Path,
    dlc_bin: Path,
    db_name: str,
    word_rules: int,
    dest_dir: Path,
    env: Optional[Mapping[str, str]] = None,
) -> CommandLine:
    """_proutil <name> -C word-rules <id>"""
    return CommandLine(
        executable=str(get_exec_path(dlc_bin, static_config.PROUTIL_EXECUTABLE)),
        args=[db_name, "-C", "word-rules", str(word_rules)],
        cwd=str(dest_dir),
        env=build_environment(dlc, env),
    )
