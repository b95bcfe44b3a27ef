"""
Error kinds, exit codes and the diagnostic stream.

Every failure in the pipeline is raised as one of the ReadabilityError
subclasses below. Each one knows its sysexits-style exit code, so the
entry point only has to hand the exception to Diagnostics.fail() and
return Diagnostics.exit_code.

Exit codes:
    0   success (warnings do not count)
    64  bad usage
    65  data error
    66  no input
    68  host not found / network failure
    70  internal error in the extraction library
    77  permission denied
"""

import errno
from enum import IntEnum
from typing import Optional

from rich.console import Console
from rich.markup import escape


class ExitCode(IntEnum):
    OK = 0
    USAGE = 64
    DATA_ERROR = 65
    NO_INPUT = 66
    NO_HOST = 68
    SOFTWARE = 70
    NO_PERMISSION = 77


class ReadabilityError(Exception):
    """Base class for failures that end a run with a specific exit code."""

    exit_code = ExitCode.DATA_ERROR


class UsageError(ReadabilityError):
    exit_code = ExitCode.USAGE


class DataError(ReadabilityError):
    exit_code = ExitCode.DATA_ERROR


class InputNotFound(ReadabilityError):
    exit_code = ExitCode.NO_INPUT


class NetworkError(ReadabilityError):
    exit_code = ExitCode.NO_HOST


class PermissionDenied(ReadabilityError):
    exit_code = ExitCode.NO_PERMISSION


class ExtractionCrash(ReadabilityError):
    """The extraction library blew up, as opposed to finding no article."""

    exit_code = ExitCode.SOFTWARE


def from_os_error(exc: OSError) -> ReadabilityError:
    """Translate a file system error into one of our error kinds."""
    message = f"{exc.strerror or exc}: '{exc.filename}'" if exc.filename else str(exc)
    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        return InputNotFound(message)
    if isinstance(exc, PermissionError) or exc.errno in (errno.EACCES, errno.EPERM):
        return PermissionDenied(message)
    return DataError(message)


def classify(exc: BaseException) -> ExitCode:
    """Map any failure to the exit code it should produce."""
    if isinstance(exc, ReadabilityError):
        return exc.exit_code
    if isinstance(exc, OSError):
        return from_os_error(exc).exit_code
    return ExitCode.SOFTWARE


class Diagnostics:
    """Human-readable messages on stderr, plus the exit status of the run.

    Notes and warnings are dropped in quiet mode, errors never are. The
    first failure recorded decides the exit status.
    """

    def __init__(self, quiet: bool = False, console: Optional[Console] = None):
        self.quiet = quiet
        self.console = console or Console(stderr=True, highlight=False, soft_wrap=True)
        self.exit_code = ExitCode.OK

    def note(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def warn(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[yellow]{escape(message)}[/yellow]")

    def fail(self, exc: BaseException) -> ExitCode:
        """Report a failure and record its exit code if none was recorded yet."""
        self.console.print(f"[red]{escape(str(exc))}[/red]")
        code = classify(exc)
        if self.exit_code == ExitCode.OK:
            self.exit_code = code
        return code
