"""
Handles the thin tool commands: git, docker, dotnet and npm.

Each command runs one external tool invocation in --cwd and prints a single
JSON status line.
"""

import click

from ..cli_utils import add_common_options, exit_for_status, handle_errors, parse_variables
from ..render import render_status
from ..tools import DockerRunner, DotnetRunner, GitRunner, NodeRunner


def _report(action, outcome, pretty):
    success, message = outcome
    render_status({"action": action, "success": success, "message": message}, pretty=pretty)
    exit_for_status(success, message)


@click.group('git')
def git_cmd():
    """git helpers."""
    pass


@git_cmd.command('tag')
@click.argument('name')
@click.option('-m', '--message', help='Create an annotated tag with this message')
@click.option('--push', 'push_tag', is_flag=True, help='Push the tag to the remote')
@click.option('--remote', default='origin', show_default=True)
@add_common_options('cwd', 'dry_run', 'pretty')
@handle_errors
def git_tag_handler(name, message, push_tag, remote, cwd, dry_run, pretty):
    """Create tag NAME, optionally pushing it."""
    git = GitRunner(cwd=cwd, dry_run=dry_run)
    outcome = git.tag(name, message=message)
    if outcome[0] and push_tag:
        outcome = git.push(remote, name)
    _report("git tag", outcome, pretty)


@click.group('docker')
def docker_cmd():
    """docker helpers."""
    pass


@docker_cmd.command('build')
@click.argument('tag')
@click.option('--context', default='.', show_default=True, help='Build context, relative to --cwd')
@click.option('-f', '--file', 'dockerfile', help='Dockerfile path')
@click.option('--build-arg', 'build_args', multiple=True, metavar='KEY=VALUE', help='Build argument (repeatable)')
@click.option('--platform', help='Target platform, e.g. linux/amd64')
@click.option('--no-cache', is_flag=True)
@click.option('--push', 'push_image', is_flag=True, help='Push the image after building')
@add_common_options('cwd', 'dry_run', 'pretty')
@handle_errors
def docker_build_handler(tag, context, dockerfile, build_args, platform, no_cache, push_image, cwd, dry_run, pretty):
    """Build image TAG."""
    docker = DockerRunner(cwd=cwd, dry_run=dry_run)
    outcome = docker.build(tag, context=context, dockerfile=dockerfile,
                           build_args=parse_variables(build_args), platform=platform, no_cache=no_cache)
    if outcome[0] and push_image:
        outcome = docker.push(tag)
    _report("docker build", outcome, pretty)


@docker_cmd.command('push')
@click.argument('image')
@add_common_options('cwd', 'dry_run', 'pretty')
@handle_errors
def docker_push_handler(image, cwd, dry_run, pretty):
    """Push IMAGE to its registry."""
    _report("docker push", DockerRunner(cwd=cwd, dry_run=dry_run).push(image), pretty)


@click.group('dotnet')
def dotnet_cmd():
    """dotnet helpers."""
    pass


@dotnet_cmd.command('build')
@click.argument('project', required=False)
@click.option('-c', '--configuration', default='Release', show_default=True)
@add_common_options('cwd', 'dry_run', 'pretty')
@handle_errors
def dotnet_build_handler(project, configuration, cwd, dry_run, pretty):
    """Build PROJECT (or the solution in --cwd)."""
    _report("dotnet build", DotnetRunner(cwd=cwd, dry_run=dry_run).build(project, configuration), pretty)


@dotnet_cmd.command('pack')
@click.argument('project', required=False)
@click.option('-c', '--configuration', default='Release', show_default=True)
@click.option('-o', '--output', help='Output directory for the .nupkg')
@click.option('--version', 'package_version', help='Package version property')
@add_common_options('cwd', 'dry_run', 'pretty')
@handle_errors
def dotnet_pack_handler(project, configuration, output, package_version, cwd, dry_run, pretty):
    """Create a NuGet package for PROJECT."""
    runner = DotnetRunner(cwd=cwd, dry_run=dry_run)
    _report("dotnet pack", runner.pack(project, configuration, output=output, version=package_version), pretty)


@click.group('npm')
def npm_cmd():
    """npm / yarn / pnpm helpers."""
    pass


client_option = click.option('--client', type=click.Choice(['npm', 'yarn', 'pnpm']),
                             help='Package manager (default: from config)')


@npm_cmd.command('install')
@click.option('--frozen', is_flag=True, help='Install exactly what the lockfile says')
@client_option
@add_common_options('cwd', 'dry_run', 'pretty')
@handle_errors
def npm_install_handler(frozen, client, cwd, dry_run, pretty):
    """Install dependencies."""
    _report("install", NodeRunner(cwd=cwd, dry_run=dry_run, client=client).install(frozen=frozen), pretty)


@npm_cmd.command('publish')
@click.option('--tag', help='Distribution tag')
@click.option('--access', type=click.Choice(['public', 'restricted']))
@client_option
@add_common_options('cwd', 'dry_run', 'pretty')
@handle_errors
def npm_publish_handler(tag, access, client, cwd, dry_run, pretty):
    """Publish the package in --cwd."""
    _report("publish", NodeRunner(cwd=cwd, dry_run=dry_run, client=client).publish(tag=tag, access=access), pretty)
