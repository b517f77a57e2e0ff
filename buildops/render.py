"""
Output rendering functions for buildops.
Handles formatting and displaying data as JSONL or rich tables.
"""
import json

import click
from rich.console import Console
from rich.table import Table

console = Console()


def emit_jsonl(items):
    """Print each item as one JSON line on stdout."""
    for item in items:
        click.echo(json.dumps(item, ensure_ascii=False, default=str))


def render_mutation_results(results, title="Results", pretty=False):
    """
    Render per-file mutation results.

    Args:
        results: List of MutationResult
        title: Table title for pretty output
        pretty: If True, render a table, otherwise JSONL
    """
    if not pretty:
        emit_jsonl(r.to_dict() for r in results)
        return

    table = Table(title=title)
    table.add_column("File", style="cyan")
    table.add_column("Old", style="magenta")
    table.add_column("New", style="green")
    table.add_column("Status")

    for result in results:
        if result.success:
            status = "[green]✓ updated[/green]" if result.changed else "[dim]unchanged[/dim]"
            if result.warnings:
                status += f" [yellow]({'; '.join(result.warnings)})[/yellow]"
        else:
            status = f"[red]✗ {result.kind.value}[/red]"
        table.add_row(
            result.file,
            "" if result.old_value is None else str(result.old_value),
            "" if result.new_value is None else str(result.new_value),
            status,
        )
    console.print(table)


def render_template_list(templates, pretty=False):
    if not pretty:
        emit_jsonl({"category": cat, "name": name} for cat, names in templates.items() for name in names)
        return

    table = Table(title="Available Templates")
    table.add_column("Category", style="cyan")
    table.add_column("Name", style="magenta")
    for category, names in templates.items():
        for name in names:
            table.add_row(category, name)
    console.print(table)


def render_status(result, pretty=False):
    """Render a single status dictionary from a tool or template command."""
    if not pretty:
        emit_jsonl([result])
        return
    ok = result.get("success", result.get("status", "").startswith("success"))
    mark = "[green]✓[/green]" if ok else "[red]✗[/red]"
    message = result.get("message") or result.get("path") or result.get("reason") or ""
    console.print(f"{mark} {message}")
