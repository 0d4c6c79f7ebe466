"""AI Jarvis command line entry point."""

import click

from cli.commands import disk_check, generate, notify_test, summary, tasks
from cli.config import load_config_model
from cli.logging_config import setup_logging
from cli.utils import console, resolve_config_path


@click.group()
@click.version_option(version="1.0.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit JSON log lines (for CI runs)")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to config.yaml")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, json_logs: bool, config_path: str | None):
    """AI Jarvis - scheduled task generation, daily summaries and server checks."""
    try:
        config = load_config_model(resolve_config_path(config_path))
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        ctx.exit(2)

    level = "DEBUG" if verbose else config.logging.level
    setup_logging(json_mode=json_logs or config.logging.json_mode, level=level, log_file=config.paths.log_file)
    ctx.obj = {"config": config}


cli.add_command(generate)
cli.add_command(summary)
cli.add_command(disk_check)
cli.add_command(notify_test)
cli.add_command(tasks)


if __name__ == "__main__":
    cli()
