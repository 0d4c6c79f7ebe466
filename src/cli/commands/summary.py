"""Daily summary command."""

import sys

import click
from rich.markdown import Markdown
from rich.table import Table

from cli.utils import console, get_components, get_config, validate_date
from observability import log_run_summary
from reports.composer import compose_summary_report

SUBJECT = "📋 AI Jarvis daily task summary"


@click.command()
@click.option("--date", "date_", callback=validate_date, help="Day to summarize (YYYY-MM-DD, default today)")
@click.option("--dry-run", is_flag=True, help="Print the report instead of sending it")
def summary(date_: str, dry_run: bool):
    """Compile all category artifacts of a day into one report."""
    c = get_components(get_config(), skip_llm=True)
    artifacts = c["store"].list_by_date(date_)
    if not artifacts:
        console.print(f"📭 No tasks generated on {date_}, skipping summary")
        return

    result = c["aggregator"].aggregate(artifacts, date=date_)
    report = compose_summary_report(result)

    table = Table(title=f"Summary {date_}")
    table.add_column("Category", style="cyan")
    table.add_column("Tasks", justify="right")
    table.add_column("Status")
    for name, data in result.categories.items():
        status = f"[red]{data.error}[/]" if data.has_error else "[green]ok[/]"
        table.add_row(name, str(data.task_count), status)
    console.print(table)
    console.print(
        f"Total {result.total_tasks} tasks, estimated {result.estimated_duration}, "
        f"{len(result.highlights)} highlights"
    )

    if dry_run:
        console.print(Markdown(report))
        log_run_summary("summary")
        return

    sent = c["notifier"].deliver(SUBJECT, report)
    log_run_summary("summary")
    if not sent:
        console.print("[red]Summary could not be delivered[/]")
        sys.exit(1)
    console.print("[green]Summary sent[/]")
