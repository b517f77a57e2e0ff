#!/usr/bin/env python3

import click

from buildops import __version__
from buildops.config import configure_logging
from buildops.commands.config import config_cmd
from buildops.commands.release import release_cmd
from buildops.commands.template import template_cmd
from buildops.commands.tools import docker_cmd, dotnet_cmd, git_cmd, npm_cmd
from buildops.commands.version import stamp_handler, version_cmd


@click.group()
@click.version_option(__version__)
@click.option('-v', '--verbose', is_flag=True, help='Show debug logging')
def cli(verbose):
    """Build automation helpers."""
    configure_logging(verbose=verbose)


# Core commands
cli.add_command(version_cmd)
cli.add_command(stamp_handler, name='stamp')
cli.add_command(template_cmd)

# Tool wrappers
cli.add_command(release_cmd)
cli.add_command(git_cmd)
cli.add_command(docker_cmd)
cli.add_command(dotnet_cmd)
cli.add_command(npm_cmd)

cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
