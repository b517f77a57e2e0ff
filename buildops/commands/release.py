"""
Handles the 'release' commands for GitHub releases.
"""

import click

from ..cli_utils import add_common_options, exit_for_status, handle_errors
from ..render import console, emit_jsonl
from ..tools import GitHubReleaser

repo_option = click.option('--repo', help='OWNER/REPO to publish to (default: the repository in --cwd)')


def _render_upload(result, pretty):
    if not pretty:
        emit_jsonl([result])
        return
    for asset in result.get("uploaded", []):
        console.print(f"[green]✓[/green] {asset}")
    for failure in result.get("failed", []):
        console.print(f"[red]✗[/red] {failure['asset']}: {failure['error']}")
    if result.get("error"):
        console.print(f"[red]✗[/red] {result['error']}")


@click.group('release')
def release_cmd():
    """Create GitHub releases and upload assets with gh."""
    pass


@release_cmd.command('create')
@click.argument('tag')
@click.option('--title', help='Release title (default: the tag)')
@click.option('--notes', help='Release notes (default: generated by GitHub)')
@click.option('--draft', is_flag=True, help='Create a draft release')
@click.option('--prerelease', is_flag=True, help='Mark as a pre-release')
@click.option('-a', '--asset', 'assets', multiple=True, type=click.Path(), help='File to attach (repeatable)')
@click.option('--clobber', is_flag=True, help='Overwrite assets with the same name')
@repo_option
@add_common_options('cwd', 'dry_run', 'pretty')
@handle_errors
def create_handler(tag, title, notes, draft, prerelease, assets, clobber, repo, cwd, dry_run, pretty):
    """Create release TAG (if missing) and upload its assets."""
    releaser = GitHubReleaser(cwd=cwd, dry_run=dry_run, repo=repo)
    result = releaser.publish(tag, assets, title=title, notes=notes, draft=draft,
                              prerelease=prerelease, clobber=clobber)
    _render_upload(result, pretty)
    exit_for_status(result["success"])


@release_cmd.command('upload')
@click.argument('tag')
@click.argument('assets', nargs=-1, required=True, type=click.Path())
@click.option('--clobber', is_flag=True, help='Overwrite assets with the same name')
@repo_option
@add_common_options('cwd', 'dry_run', 'pretty')
@handle_errors
def upload_handler(tag, assets, clobber, repo, cwd, dry_run, pretty):
    """Upload ASSETS to the existing release TAG in parallel."""
    releaser = GitHubReleaser(cwd=cwd, dry_run=dry_run, repo=repo)
    result = releaser.upload_assets(tag, assets, clobber=clobber)
    _render_upload(result, pretty)
    exit_for_status(result["success"])
