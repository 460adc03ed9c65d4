# dbcreate/step_executor.py
# -*- coding: utf-8 -*-
"""
Runs one step of the database creation sequence.

A step either completes or raises. Failures of external commands are turned
into ExecutionError carrying the step tag and the failed command, so the
caller can tell which part of the sequence broke.
"""

import logging
import subprocess
from typing import Any, Callable, Optional

from common.command_utils import log_message
from dbcreate.config_models import AppSettings
from dbcreate.errors import BootstrapError, ExecutionError

module_logger = logging.getLogger(__name__)


def run_step(
    step_tag: str,
    step_description: str,
    step_function: Callable[[], Any],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> Any:
    """
    Execute a single step.

    Args:
        step_tag: A short identifier for the step, e.g. "STRUCT".
        step_description: A human-readable description of the step.
        step_function: Callable running the step. Its return value is
            passed back to the caller.
        app_settings: The application settings object.
        current_logger: The logger instance to use.

    Returns:
        Whatever step_function returned.

    Raises:
        BootstrapError: Raised by the step itself, propagated unchanged.
        ExecutionError: An external command failed or could not be started.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = app_settings.symbols

    log_message(
        f"--- {symbols.get('step', '➡️')} Executing: {step_description} ({step_tag}) ---",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        result = step_function()
    except BootstrapError:
        log_message(
            f"{symbols.get('error', '❌')} FAILED: {step_description} ({step_tag})",
            "error",
            logger_to_use,
            app_settings,
        )
        raise
    except subprocess.CalledProcessError as e:
        command = list(e.cmd) if isinstance(e.cmd, (list, tuple)) else [str(e.cmd)]
        log_message(
            f"{symbols.get('error', '❌')} FAILED: {step_description} ({step_tag})",
            "error",
            logger_to_use,
            app_settings,
        )
        raise ExecutionError(
            f"{step_description} failed: `{subprocess.list2cmdline(command)}` exited with code {e.returncode}",
            step=step_tag,
            command=command,
            returncode=e.returncode,
            original_error=e,
        ) from e
    except OSError as e:
        log_message(
            f"{symbols.get('error', '❌')} FAILED: {step_description} ({step_tag})",
            "error",
            logger_to_use,
            app_settings,
        )
        raise ExecutionError(
            f"{step_description} failed: {e}",
            step=step_tag,
            command=[e.filename] if e.filename else None,
            original_error=e,
        ) from e

    log_message(
        f"--- {symbols.get('success', '✅')} Successfully completed: {step_description} ({step_tag}) ---",
        "success",
        logger_to_use,
        app_settings,
    )
    return result
