"""
Common CLI utilities and options for consistent command behavior.
"""

import functools
import json
import sys

import click

from .config import logger
from .exit_codes import (
    SUCCESS, CommandError, PartialSuccessError, get_exit_code_for_exception,
)
from .mutation import summarize


# Standard options that many commands share
common_options = {
    'dry_run': click.option('--dry-run', is_flag=True,
                            help='Preview changes without writing or running anything'),
    'pretty': click.option('--pretty', is_flag=True,
                           help='Display a formatted table instead of JSONL'),
    'backup': click.option('--backup', is_flag=True, default=None,
                           help='Write a .backup copy of each file before changing it'),
    'cwd': click.option('--cwd', default='.', type=click.Path(file_okay=False),
                        help='Working directory for the external tool'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('dry_run', 'pretty')
        def my_command(dry_run, pretty):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator


def parse_variables(pairs):
    """Turns repeated KEY=VALUE options into a dict."""
    variables = {}
    for pair in pairs:
        if '=' not in pair:
            raise click.BadParameter(f"Expected KEY=VALUE, got '{pair}'", param_hint='--var')
        key, value = pair.split('=', 1)
        variables[key.strip()] = value
    return variables


def require_pattern(pattern, config_section, config):
    """Returns the --pattern value or the configured default, or fails with a usage error."""
    pattern = pattern or config.get(config_section, {}).get('pattern')
    if not pattern:
        raise click.UsageError(f"No pattern given; pass --pattern or set {config_section}.pattern in the config")
    return pattern


def handle_errors(func):
    """
    Decorator that turns exceptions from a command into exit codes.

    CommandError subclasses carry their own exit code; anything else is
    reported as a JSON error line and mapped by get_exit_code_for_exception.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except CommandError as e:
            logger.error(str(e))
            sys.exit(e.exit_code)
        except Exception as e:
            logger.error(f"Command failed: {e}")
            click.echo(json.dumps({"error": str(e), "type": type(e).__name__}, ensure_ascii=False))
            sys.exit(get_exit_code_for_exception(e))
    return wrapper


def exit_for_results(results):
    """Logs the batch summary; raises PartialSuccessError when any file failed."""
    summary = summarize(results)
    logger.info(
        f"{summary['succeeded']} of {summary['total']} file(s) succeeded, "
        f"{summary['changed']} changed"
    )
    if summary["failed"]:
        raise PartialSuccessError(
            f"{summary['failed']} of {summary['total']} file(s) failed",
            succeeded=summary["succeeded"], failed=summary["failed"],
        )
    sys.exit(SUCCESS)


def exit_for_status(success, message="Command failed"):
    if not success:
        raise CommandError(message)
    sys.exit(SUCCESS)
