"""Inspect stored task artifacts."""

import click
from rich.table import Table

from cli.utils import console, get_components, get_config, validate_date


@click.group()
def tasks():
    """Browse generated task artifacts."""
    pass


@tasks.command("list")
@click.option("--date", "date_", callback=validate_date, help="Day to list (YYYY-MM-DD, default today)")
def tasks_list(date_: str):
    """List the tasks stored for a day."""
    artifacts = get_components(get_config(), skip_llm=True)["store"].list_by_date(date_)
    if not artifacts:
        console.print(f"[yellow]No artifacts for {date_}.[/]")
        return

    table = Table(show_header=True)
    table.add_column("Category", style="cyan")
    table.add_column("Priority", style="green")
    table.add_column("Title")
    table.add_column("Estimate", style="dim")

    for artifact in artifacts:
        if artifact.is_error:
            table.add_row(artifact.category, "-", f"[red]error: {artifact.error}[/]", "")
            continue
        for task in artifact.tasks:
            table.add_row(artifact.category, str(task.priority), task.title[:60], task.estimated_time)

    console.print(table)
