"""Markdown report composition and HTML rendering."""

from .composer import (
    compose_category_report,
    compose_failure_report,
    compose_metric_report,
    compose_summary_report,
    metric_subject,
)
from .html import markdown_to_html

__all__ = [
    "compose_category_report",
    "compose_failure_report",
    "compose_metric_report",
    "compose_summary_report",
    "markdown_to_html",
    "metric_subject",
]
