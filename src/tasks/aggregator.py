"""Daily summary compiler: merge one date's category artifacts into one report model."""

from dataclasses import asdict, dataclass, field
from typing import Iterable, Optional, Union

import structlog

from shared_types import Priority, normalize_priority
from tasks.models import CategoryArtifact, TaskRecord
from tasks.store import ArtifactStore

logger = structlog.get_logger()

MINUTES_PER_TASK = 25

# Case-sensitive substrings that flag a task title as urgent/important
DEFAULT_HIGHLIGHT_MARKERS = ("重要", "紧急", "urgent", "important", "Urgent", "Important")


@dataclass
class CategorySummary:
    task_count: int = 0
    tasks: list[TaskRecord] = field(default_factory=list)
    has_error: bool = False
    error: Optional[str] = None


@dataclass
class Highlight:
    category: str
    title: str
    priority: Priority


@dataclass
class DailySummary:
    date: str = ""
    total_tasks: int = 0
    categories: dict[str, CategorySummary] = field(default_factory=dict)
    priority_breakdown: dict[str, int] = field(
        default_factory=lambda: {p.value: 0 for p in Priority}
    )
    highlights: list[Highlight] = field(default_factory=list)
    estimated_duration: str = "0m"
    generation_errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["categories"] = {
            name: {**asdict(cat), "tasks": [t.to_dict() for t in cat.tasks]}
            for name, cat in self.categories.items()
        }
        return data


def format_duration(minutes: int) -> str:
    """``"Hh Mm"`` from an hour upwards, ``"Mm"`` below."""
    hours, mins = divmod(max(int(minutes), 0), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def _canonical_key(artifact: CategoryArtifact) -> tuple:
    # Full content tie-break so any input permutation folds identically
    return (
        artifact.category,
        artifact.generated_at,
        artifact.error or "",
        artifact.raw_text,
        tuple((t.id, t.title, str(t.priority)) for t in artifact.tasks),
    )


class DailyAggregator:
    """Fold one date's artifacts into a DailySummary.

    Output depends only on the set of input artifacts: they are put into a
    canonical order first, categories appear in sorted order, and when a
    category has several artifacts the latest ``generated_at`` wins.
    """

    def __init__(
        self,
        minutes_per_task: int = MINUTES_PER_TASK,
        highlight_markers: Iterable[str] = DEFAULT_HIGHLIGHT_MARKERS,
    ):
        self.minutes_per_task = minutes_per_task
        self.highlight_markers = tuple(m for m in highlight_markers if m)

    def aggregate_for_date(self, store: ArtifactStore, date: str) -> DailySummary:
        return self.aggregate(store.list_by_date(date), date=date)

    def aggregate(
        self,
        artifacts: Iterable[Union[CategoryArtifact, dict]],
        date: str = "",
    ) -> DailySummary:
        latest: dict[str, CategoryArtifact] = {}
        for artifact in sorted(self._coerce(artifacts), key=_canonical_key):
            latest[artifact.category] = artifact

        summary = DailySummary(date=date)
        for category in sorted(latest):
            self._fold(summary, latest[category])

        summary.estimated_duration = format_duration(summary.total_tasks * self.minutes_per_task)
        logger.debug(
            "daily_summary_compiled",
            date=date,
            categories=len(summary.categories),
            total_tasks=summary.total_tasks,
            errors=len(summary.generation_errors),
        )
        return summary

    @staticmethod
    def _coerce(artifacts) -> list[CategoryArtifact]:
        result = []
        for a in artifacts or []:
            if isinstance(a, CategoryArtifact):
                result.append(a)
            elif isinstance(a, dict):
                result.append(CategoryArtifact.from_dict(a))
            else:
                logger.warning("artifact_skipped", kind=type(a).__name__)
        return result

    def _fold(self, summary: DailySummary, artifact: CategoryArtifact) -> None:
        category = artifact.category
        if artifact.is_error:
            summary.categories[category] = CategorySummary(has_error=True, error=artifact.error)
            summary.generation_errors.append(f"{category}: {artifact.error}")
            return

        tasks = list(artifact.tasks)
        summary.categories[category] = CategorySummary(task_count=len(tasks), tasks=tasks)
        summary.total_tasks += len(tasks)

        for task in tasks:
            priority = normalize_priority(task.priority)
            summary.priority_breakdown[priority.value] += 1
            if self.is_highlight(task.title, priority):
                summary.highlights.append(
                    Highlight(category=category, title=task.title, priority=priority)
                )

    def is_highlight(self, title: str, priority: Priority) -> bool:
        if priority == Priority.HIGH:
            return True
        title = title or ""
        return any(marker in title for marker in self.highlight_markers)
