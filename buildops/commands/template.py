"""
Handles the 'template' commands for .gitignore, LICENSE and README scaffolding.
"""

import click

from ..cli_utils import add_common_options, handle_errors, parse_variables
from ..exit_codes import CommandError, NotFoundError
from ..render import console, emit_jsonl, render_status, render_template_list
from ..templates import (
    TemplateCategory, TemplateStore, create_file_from_template,
    describe_template, render_template,
)


class CategoryType(click.ParamType):
    name = 'category'

    def convert(self, value, param, ctx):
        try:
            return TemplateCategory.parse(value)
        except ValueError:
            choices = ', '.join(c.value for c in TemplateCategory)
            self.fail(f"'{value}' is not a template category ({choices})", param, ctx)


CATEGORY = CategoryType()

var_option = click.option('--var', 'variables', multiple=True, metavar='KEY=VALUE',
                          help='Set a placeholder value (repeatable)')


@click.group('template')
def template_cmd():
    """Manage and render project templates."""
    pass


@template_cmd.command('list')
@click.option('-c', '--category', type=CATEGORY, help='Only list one category')
@add_common_options('pretty')
def list_handler(category, pretty):
    """List available templates (user and built-in)."""
    render_template_list(TemplateStore().list_templates(category), pretty=pretty)


@template_cmd.command('info')
@click.argument('category', type=CATEGORY)
@click.argument('name')
def info_handler(category, name):
    """Show where a template comes from and which placeholders it uses."""
    emit_jsonl([describe_template(category, name)])


@template_cmd.command('show')
@click.argument('category', type=CATEGORY)
@click.argument('name')
@var_option
@handle_errors
def show_handler(category, name, variables):
    """Render a template to stdout.

    \b
        buildops template show license MIT --var AUTHOR="Jane Doe"
    """
    store = TemplateStore()
    raw_text = store.resolve(category, name)
    if raw_text is None and store.find(category, name) is not None:
        raise CommandError(f"Could not read template: {category.value}/{name}")
    if raw_text is None:
        raise NotFoundError(f"Template not found: {category.value}/{name}")
    click.echo(render_template(raw_text, parse_variables(variables)), nl=False)


@template_cmd.command('create')
@click.argument('category', type=CATEGORY)
@click.argument('name')
@click.option('-o', '--output', type=click.Path(), help='Target file or directory (default: current directory)')
@var_option
@click.option('--force', is_flag=True, help='Overwrite an existing file')
@add_common_options('dry_run', 'pretty')
@handle_errors
def create_handler(category, name, output, variables, force, dry_run, pretty):
    """Render a template into a project file.

    \b
        buildops template create gitignore Python
        buildops template create license MIT -o ./LICENSE --var AUTHOR=Jane
        buildops template create readme Default --var PROJECT_NAME=widget
    """
    result = create_file_from_template(
        category, name, output, parse_variables(variables), force=force, dry_run=dry_run,
    )
    if result["status"] == "error":
        if "not found" in result["message"].lower():
            raise NotFoundError(result["message"])
        raise CommandError(result["message"])
    render_status(result, pretty=pretty)


@template_cmd.command('init')
@click.option('-c', '--category', type=CATEGORY, help='Only copy one category')
@click.option('--force', is_flag=True, help='Overwrite existing user templates')
def init_handler(category, force):
    """Copy the built-in templates to the user template directory for editing."""
    store = TemplateStore()
    count = store.init_user_templates(category, force=force)
    if count:
        console.print(f"[green]✓[/green] Initialized {count} template(s) in {store.root}")
    else:
        console.print("No templates initialized (already exist, use --force to overwrite)")


@template_cmd.command('path')
def path_handler():
    """Show the template directories."""
    store = TemplateStore()
    click.echo(f"User templates:     {store.root}")
    click.echo(f"Built-in templates: {store.builtin_root}")
