import json

import click

from buildops.config import generate_config_example, get_config_path, load_config


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("generate")
def generate_config():
    """Generate an example configuration file."""
    generate_config_example()


@config_cmd.command("show")
def show_config():
    """Show the current configuration with all merges applied."""
    click.echo(json.dumps(load_config(), indent=2, ensure_ascii=False))


@config_cmd.command("path")
def path_config():
    """Show which configuration file is used."""
    path = get_config_path()
    click.echo(f"{path}{'' if path.exists() else ' (not created yet)'}")
