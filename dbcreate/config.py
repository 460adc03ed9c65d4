# dbcreate/config.py
# -*- coding: utf-8 -*-
"""
Static constants for database creation.

Runtime configuration (database name, directories, DLC install root) is
handled by 'dbcreate/config_models.py' and 'dbcreate/config_loader.py'.
"""

from pathlib import Path

SYMBOLS: dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}

# Block size in KiB -> value passed to "prostrct create -blocksize".
BLOCK_SIZES: dict[int, int] = {1: 1024, 2: 2048, 4: 4096, 8: 8192}
DEFAULT_BLOCK_SIZE: int = 8

# Longer names are rejected by the database utilities.
DB_NAME_MAX_LENGTH: int = 11

WORD_RULES_MIN: int = 0
WORD_RULES_MAX: int = 255

DBUTIL_EXECUTABLE: str = "_dbutil"
PROUTIL_EXECUTABLE: str = "_proutil"
PROGRES_EXECUTABLE: str = "_progres"

EMPTY_DB_PREFIX: str = "empty"
PROLANG_DIR: str = "prolang"

# Files of database {name}, matched against the whole file name: control
# area, log, lock, before-image, data, after-image and transaction extents.
# "{name}_N.dN" are the data extents of area N.
DATABASE_FILE_PATTERNS: tuple[str, ...] = (
    r"{name}\.(db|lg|lk)",
    r"{name}\.[bdat]\d+",
    r"{name}_(?P<area>\d+)\.d\d+",
)

# ABL procedures shipped with the package, added to PROPATH when needed.
PROCEDURES_DIR: Path = Path(__file__).resolve().parent / "abl"

# Wrapper running prodict/load_df.p on the file given with -param.
SCHEMA_LOAD_PROCEDURE: str = "load_schema.p"

ORACLE_HOLDER_PROCEDURE: str = "pct/pctOracleHolder.p"
MSS_HOLDER_PROCEDURE: str = "pct/pctMSSHolder.p"
ODBC_HOLDER_PROCEDURE: str = "pct/pctODBCHolder.p"

DEFAULT_CONFIG_FILE: str = "dbcreate.yaml"
LOG_PREFIX_DEFAULT: str = "[DB-CREATE]"
