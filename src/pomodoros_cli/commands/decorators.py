"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from pomodoros_cli.models.timer.exceptions import PomodorosError
from pomodoros_cli.services.config_service import ConfigError
from pomodoros_cli.utils import exit_codes
from pomodoros_cli.utils.logger import get_logger
from pomodoros_cli.utils.ui.formatters import format_error


def command_wrapper(func: Callable):
    """Log a command's lifetime and turn failures into exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except typer.Exit:
            raise

        except ConfigError as e:
            logger.error("command failed: %s - %s", cmd, str(e))
            format_error(str(e))
            raise typer.Exit(code=exit_codes.ERROR_INVALID_ARGS) from e

        except PomodorosError as e:
            logger.error(
                "command failed: %s - %s\n%s", cmd, str(e), traceback.format_exc()
            )
            format_error(str(e))
            raise typer.Exit(code=exit_codes.ERROR_TERMINAL) from e

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

    return wrapper
