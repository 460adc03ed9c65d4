# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions for database files.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional

from dbcreate import config as static_config
from dbcreate.config_models import SYMBOLS_DEFAULT, AppSettings

from .command_utils import log_message

module_logger = logging.getLogger(__name__)


def database_files(dest_dir: Path, db_name: str) -> List[Path]:
    """
    Lists the files making up the database `db_name` in `dest_dir`: the
    control area (.db), log (.lg), lock (.lk) and the extents. Structure
    files (.st) are not part of the list.

    "<db_name>_N.dN" is left alone when "<db_name>_N.db" exists: it is then
    the schema area extent of that other database.
    """
    dest_dir = Path(dest_dir)
    patterns = [
        re.compile(pattern.format(name=re.escape(db_name)))
        for pattern in static_config.DATABASE_FILE_PATTERNS
    ]
    found: List[Path] = []
    for path in sorted(dest_dir.iterdir()):
        if not path.is_file():
            continue
        for pattern in patterns:
            match = pattern.fullmatch(path.name)
            if match is None:
                continue
            area = match.groupdict().get("area")
            if area is not None and (dest_dir / f"{db_name}_{area}.db").exists():
                continue
            found.append(path)
            break
    return found


def delete_database_files(
    dest_dir: Path,
    db_name: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> List[Path]:
    """
    Deletes an existing database from `dest_dir`.

    Parameters:
        dest_dir (Path): Directory holding the database.
        db_name (str): Database name, without extension.
        app_settings (Optional[AppSettings]): Settings providing log symbols.
        current_logger (Optional[logging.Logger]): Logger to use.

    Returns:
        List[Path]: The deleted files.

    Raises:
        OSError: A file could not be removed.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = (
        app_settings.symbols
        if app_settings and app_settings.symbols
        else SYMBOLS_DEFAULT
    )

    removed: List[Path] = []
    for path in database_files(dest_dir, db_name):
        try:
            path.unlink()
        except OSError as e:
            log_message(
                f"{symbols.get('error', '❌')} Could not delete {path}: {e}",
                "error",
                logger_to_use,
                app_settings,
            )
            raise
        log_message(f"Deleted {path}", "debug", logger_to_use, app_settings)
        removed.append(path)

    log_message(
        f"{symbols.get('info', 'ℹ️')} Deleted {len(removed)} file(s) of database {db_name} in {dest_dir}",
        "info",
        logger_to_use,
        app_settings,
    )
    return removed
