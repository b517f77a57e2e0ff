"""
Handles the 'version' and 'stamp' commands.

Both operate on a list of files with a regular expression whose first capture
group marks the value to change. Output is one JSON line per file.
"""

import click

from ..cli_utils import add_common_options, exit_for_results, handle_errors, require_pattern
from ..config import load_config
from ..render import render_mutation_results
from ..stamp import StampSource, stamp_files
from ..version_manager import bump_version_in_files, read_versions, set_version_in_files

pattern_option = click.option(
    '-p', '--pattern',
    help='Regular expression; capture group 1 marks the value (default: from config)',
)


def _backup_default(backup, config):
    return config.get('versioning', {}).get('backup', False) if backup is None else backup


@click.group('version')
def version_cmd():
    """Read, set or bump version strings in files."""
    pass


@version_cmd.command('show')
@click.argument('files', nargs=-1, required=True, type=click.Path())
@pattern_option
@add_common_options('pretty')
@handle_errors
def show_handler(files, pattern, pretty):
    """Show the version captured by PATTERN in each file."""
    config = load_config()
    results = read_versions(files, require_pattern(pattern, 'versioning', config))
    render_mutation_results(results, title="Versions", pretty=pretty)
    exit_for_results(results)


@version_cmd.command('set')
@click.argument('new_version')
@click.argument('files', nargs=-1, required=True, type=click.Path())
@pattern_option
@add_common_options('backup', 'dry_run', 'pretty')
@handle_errors
def set_handler(new_version, files, pattern, backup, dry_run, pretty):
    """Set NEW_VERSION in each file.

    \b
    The first match of PATTERN is replaced by capture group 1 followed by
    NEW_VERSION, so group 1 should capture the text in front of the version:

    \b
        buildops version set 2.0.0.0 app.csproj -p '(<Version>)[^<]*'
    """
    config = load_config()
    results = set_version_in_files(
        files, require_pattern(pattern, 'versioning', config), new_version,
        backup=_backup_default(backup, config), dry_run=dry_run,
    )
    render_mutation_results(results, title="Set Version", pretty=pretty)
    exit_for_results(results)


@version_cmd.command('bump')
@click.argument('files', nargs=-1, required=True, type=click.Path())
@pattern_option
@add_common_options('backup', 'dry_run', 'pretty')
@handle_errors
def bump_handler(files, pattern, backup, dry_run, pretty):
    """Increment the build number of the version in each file.

    \b
    Capture group 1 must be the version itself. The build number counts
    0-9 and then rolls over into patch (1.0.0.9 -> 1.0.1.0).

    \b
        buildops version bump AssemblyInfo.cs -p 'AssemblyVersion\\("([^"]+)"\\)'
    """
    config = load_config()
    results = bump_version_in_files(
        files, require_pattern(pattern, 'versioning', config),
        backup=_backup_default(backup, config), dry_run=dry_run,
    )
    render_mutation_results(results, title="Bump Version", pretty=pretty)
    exit_for_results(results)


@click.command('stamp')
@click.argument('files', nargs=-1, required=True, type=click.Path())
@pattern_option
@click.option('--mtime', is_flag=True, help='Use a file modification time instead of the current time')
@click.option('--reference', type=click.Path(), help="Use this file's modification time (implies --mtime)")
@add_common_options('backup', 'dry_run', 'pretty')
@handle_errors
def stamp_handler(files, pattern, mtime, reference, backup, dry_run, pretty):
    """Write an epoch-seconds build stamp into each file.

    \b
    --reference FILE stamps every file with FILE's modification time.
    Without it, --mtime uses each file's own modification time.
    """
    config = load_config()
    source = StampSource.FILE_MTIME if mtime or reference else StampSource.CURRENT_TIME
    results = stamp_files(
        files, require_pattern(pattern, 'stamp', config),
        source=source, reference_file=reference,
        backup=_backup_default(backup, config), dry_run=dry_run,
    )
    render_mutation_results(results, title="Build Stamp", pretty=pretty)
    exit_for_results(results)
