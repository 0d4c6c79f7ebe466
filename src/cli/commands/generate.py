"""Task generation command: one category per scheduled run."""

import sys
from datetime import datetime

import click
import structlog

from cli.utils import console, get_components, get_config
from llm import LLMError
from observability import log_run_summary
from reports.composer import category_subject, compose_category_report, compose_failure_report
from shared_types import TaskCategory
from tasks.generator import TaskGenerator
from tasks.models import CategoryArtifact
from tasks.store import ArtifactStoreError

logger = structlog.get_logger()


@click.command()
@click.argument("category", type=click.Choice([c.value for c in TaskCategory]))
@click.option("--no-notify", is_flag=True, help="Persist only, do not send the report")
def generate(category: str, no_notify: bool):
    """Generate today's tasks for CATEGORY and send them out."""
    config = get_config()
    generator = None
    try:
        c = get_components(config)
    except LLMError as e:
        c = get_components(config, skip_llm=True)
        llm_error = str(e)
        logger.error("llm_unavailable", category=category, error=llm_error)
    else:
        generator = TaskGenerator(
            c["llm"],
            c["store"],
            github=c["github"],
            retry_config=config.retry,
            max_tokens=config.llm.max_tokens,
        )

    try:
        if generator is None:
            # Still record the failure so the daily summary can surface it
            artifact = _save_error(c["store"], category, llm_error)
        else:
            with console.status(f"Generating {category} tasks..."):
                artifact = generator.generate(category)
    except ArtifactStoreError as e:
        logger.error("artifact_store_failed", category=category, error=str(e))
        console.print(f"[red]Could not save {category} tasks:[/] {e}")
        if not no_notify:
            report = compose_failure_report(
                f"{category} task generation",
                str(e),
                [f"Check that {config.paths.tasks_dir} exists and is writable"],
            )
            c["notifier"].deliver(f"🚨 {category} task generation failed", report)
        log_run_summary(f"generate:{category}")
        sys.exit(1)

    if artifact.is_error:
        console.print(f"[red]Generation failed:[/] {artifact.error}")
    else:
        console.print(f"[green]Generated[/] {len(artifact.tasks)} {category} tasks")

    if not no_notify:
        sent = c["notifier"].deliver(category_subject(artifact), compose_category_report(artifact))
        if not sent:
            console.print("[yellow]Report was not delivered (check notification config)[/]")

    log_run_summary(f"generate:{category}")


def _save_error(store, category: str, error: str) -> CategoryArtifact:
    artifact = CategoryArtifact(category=category, generated_at=datetime.now().isoformat(), error=error)
    store.save(artifact)
    return artifact
