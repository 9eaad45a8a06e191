import json
import logging
import os
import traceback
from typing import Any, Dict, Optional

import click

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def get_env_flag(env_var: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment.

    "1", "true" and "yes" (any case) count as set; any other non-empty
    value counts as unset.
    """
    value = os.environ.get(env_var, "").strip().lower()
    if not value:
        return default
    return value in ("1", "true", "yes")


def get_env_int(env_var: str, default: Optional[int] = None) -> Optional[int]:
    """Read an integer from the environment.

    Args:
        env_var: Name of the environment variable
        default: Value returned when the variable is unset or empty

    Raises:
        click.BadParameter: If the variable is set but is not an integer
    """
    value = os.environ.get(env_var, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise click.BadParameter(f"{env_var} must be an integer, got {value!r}")


def configure_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Route all log records to stderr, and optionally to a file.

    Stdout is never used: it carries the LSP stdio transport.

    Args:
        debug: Log at DEBUG instead of WARNING; VINTLANG_DEBUG also enables it
        log_file: Extra log destination; falls back to VINTLANG_LOG_FILE
    """
    if not debug:
        debug = get_env_flag("VINTLANG_DEBUG")
    if log_file is None:
        log_file = os.environ.get("VINTLANG_LOG_FILE") or None

    log_level = logging.DEBUG if debug else logging.WARNING
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # Loggers created at import time may carry their own level
    for logger_name in logging.root.manager.loggerDict:
        logger = logging.getLogger(logger_name)
        logger.setLevel(log_level)
        logger.propagate = True


def format_error(error: Exception, debug: bool = False) -> Dict[str, Any]:
    """Describe an error as a dict; the traceback and type are added with debug."""
    error_info: Dict[str, Any] = {"error": str(error) or error.__class__.__name__}
    if debug:
        error_info["type"] = error.__class__.__name__
        error_info["traceback"] = traceback.format_exc()
    return error_info


def output_result(result: Any, json_output: bool = False, debug: bool = False) -> None:
    """Print a command result.

    JSON output wraps the result as ``{"status": "ok", "result": ...}``;
    otherwise lists are printed one item per line.
    """
    if json_output:
        click.echo(json.dumps({"status": "ok", "result": result}, indent=2, default=str))
    elif isinstance(result, list):
        for row in result:
            click.echo(row)
    else:
        click.echo(result)


def output_error(error: Exception, json_output: bool = False, debug: bool = False) -> None:
    """Print an error and abort the command.

    Raises:
        click.Abort: Always
    """
    error_info = format_error(error, debug)

    if json_output:
        click.echo(json.dumps({"status": "error", **error_info}, indent=2))
    else:
        click.echo(f"Error: {error_info['error']}", err=True)
        if "traceback" in error_info:
            click.echo("\nTraceback:", err=True)
            click.echo(error_info["traceback"], err=True)

    raise click.Abort()
