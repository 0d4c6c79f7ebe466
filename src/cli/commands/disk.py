"""Disk usage check command."""

import sys

import click
from rich.markdown import Markdown

from cli.utils import console, get_components, get_config
from monitoring.disk_check import DiskCheckJob
from observability import log_run_summary


@click.command("disk-check")
@click.option("--dry-run", is_flag=True, help="Print the report without notifying")
def disk_check(dry_run: bool):
    """Check BWG server disk usage; exits 1 on critical usage or fetch failure."""
    config = get_config()
    c = get_components(config, skip_llm=True)
    console.print(
        f"⚙️ Thresholds: warning {config.disk.warning_threshold}%, critical {config.disk.critical_threshold}%"
    )

    job = DiskCheckJob(
        c["bwg"],
        c["classifier"],
        notifier=None if dry_run else c["notifier"],
        send_daily_report=config.disk.send_daily_report,
    )
    result = job.run()

    if result.snapshot is not None:
        s = result.snapshot
        console.print(f"📊 Disk usage: {s.usage_percent}% → [bold]{s.status.value.upper()}[/]")
    else:
        console.print(f"[red]Disk check failed:[/] {result.error}")
    if dry_run:
        console.print(Markdown(result.report))

    log_run_summary("disk-check")
    if result.exit_code:
        sys.exit(result.exit_code)
