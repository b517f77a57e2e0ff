"""
Exit codes used by the buildops CLI.
"""
import subprocess

SUCCESS = 0
GENERAL_ERROR = 1
USAGE_ERROR = 2
PARTIAL_FAILURE = 3
NOT_FOUND = 4
INTERRUPTED = 130


class CommandError(Exception):
    """An error raised by a command handler that maps to a specific exit code."""

    exit_code = GENERAL_ERROR

    def __init__(self, message, exit_code=None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class NotFoundError(CommandError):
    exit_code = NOT_FOUND


class PartialSuccessError(CommandError):
    """Some items in a batch succeeded and some failed."""

    exit_code = PARTIAL_FAILURE

    def __init__(self, message, succeeded=0, failed=0):
        super().__init__(message)
        self.succeeded = succeeded
        self.failed = failed


def get_exit_code_for_exception(exc):
    """Maps an exception to the exit code the CLI should return."""
    if isinstance(exc, CommandError):
        return exc.exit_code
    if isinstance(exc, KeyboardInterrupt):
        return INTERRUPTED
    if isinstance(exc, FileNotFoundError):
        return NOT_FOUND
    if isinstance(exc, subprocess.CalledProcessError):
        return exc.returncode or GENERAL_ERROR
    return GENERAL_ERROR
