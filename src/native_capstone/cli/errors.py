"""
CLI Error Handling
==================

Maps exceptions raised while running a CLI tool to a message on stderr and
an exit code. Every tool funnels its failures through handle_cli_exception().

Exit codes:
    0  success
    1  the engine failed (bindings missing, bad mode, decode error)
    2  bad arguments or an input/output file that cannot be used
    3  anything else (a bug); --verbose prints the traceback
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from native_capstone.errors import CapstoneError, NativeLibraryError

INSTALL_HINT = "Install the Capstone 5 bindings: pip install 'capstone>=5,<6'"


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    DISASSEMBLY_ERROR = 1
    INVALID_ARGS = 2
    INTERNAL_ERROR = 3


def exit_code_for(error: Exception) -> ExitCode:
    """Exit code a CLI tool reports for an exception."""
    if isinstance(error, CapstoneError):
        return ExitCode.DISASSEMBLY_ERROR
    if isinstance(error, (click.BadParameter, OSError)):
        # OSError covers unreadable inputs and unwritable --output paths
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception and exit.

    Args:
        error: The exception that was raised
        verbose: Print the traceback for internal errors
        error_type: Prefix for engine errors (e.g., "Disassembly")

    Raises:
        SystemExit: Always
    """
    code = exit_code_for(error)

    if isinstance(error, click.BadParameter):
        message = f"Error: {error.format_message()}"
    elif code is ExitCode.INTERNAL_ERROR:
        message = f"Internal error: {error}"
    elif error_type and not isinstance(error, NativeLibraryError):
        message = f"{error_type} error: {error}"
    else:
        message = f"Error: {error}"
    click.echo(message, err=True)

    if isinstance(error, NativeLibraryError):
        click.echo(INSTALL_HINT, err=True)
    if code is ExitCode.INTERNAL_ERROR and verbose:
        traceback.print_exc()
    sys.exit(code)
