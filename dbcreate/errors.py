# dbcreate/errors.py
# -*- coding: utf-8 -*-
"""
Exceptions raised while creating a database.
"""

from typing import List, Optional


class BootstrapError(Exception):
    """Base class for database creation failures."""


class ConfigError(BootstrapError):
    """Invalid or inconsistent configuration, detected before any command runs."""


class ExecutionError(BootstrapError):
    """An external command or delegated task failed."""

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.step = step
        self.command = command
        self.returncode = returncode
        self.original_error = original_error
        super().__init__(message)
