"""Shared CLI utilities."""

from datetime import date
from pathlib import Path
from typing import Optional

import click
import structlog
from rich.console import Console

from cli.config import load_config_model
from cli.config_models import JarvisConfig

console = Console()
logger = structlog.get_logger()


def get_config(ctx: Optional[click.Context] = None) -> JarvisConfig:
    """Config loaded once by the root command, or loaded fresh outside a CLI run."""
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.obj, dict) and "config" in ctx.obj:
        return ctx.obj["config"]
    return load_config_model()


def get_components(config: JarvisConfig, skip_llm: bool = False) -> dict:
    """Initialize pipeline components from config.

    Args:
        config: Loaded configuration
        skip_llm: If True, skip provider init (for commands that don't need LLM)
    """
    from monitoring.bwg import BWGClient
    from monitoring.classifier import MetricClassifier
    from notify import Notifier
    from tasks.aggregator import DailyAggregator
    from tasks.context import GitHubContextClient
    from tasks.store import JsonArtifactStore

    store = JsonArtifactStore(config.paths.tasks_dir)
    components = {
        "config": config,
        "store": store,
        "notifier": Notifier.from_config(config),
        "aggregator": DailyAggregator(
            minutes_per_task=config.summary.minutes_per_task,
            highlight_markers=config.summary.highlight_markers,
        ),
        "classifier": MetricClassifier(
            warning_pct=config.disk.warning_threshold,
            critical_pct=config.disk.critical_threshold,
        ),
        "bwg": BWGClient(config.disk, retry_config=config.retry),
        "github": GitHubContextClient(config.github, retry_config=config.retry),
        "llm": None,
    }

    if not skip_llm:
        from llm import create_llm_provider

        components["llm"] = create_llm_provider(
            provider=config.llm.provider,
            api_key=config.llm.api_key,
            model=config.llm.model,
        )
    return components


def today() -> str:
    return date.today().isoformat()


def validate_date(ctx, param, value: Optional[str]) -> str:
    """Click callback: default to today, reject anything but YYYY-MM-DD."""
    if value is None:
        return today()
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM-DD, got {value!r}")


def resolve_config_path(value: Optional[str]) -> Optional[Path]:
    return Path(value).expanduser() if value else None
