"""Task generation, parsing, storage and daily aggregation."""

from .aggregator import DailyAggregator, DailySummary
from .models import CategoryArtifact, TaskRecord
from .parser import ResponseParser, parse_tasks
from .store import ArtifactStore, ArtifactStoreError, JsonArtifactStore

__all__ = [
    "ArtifactStore",
    "ArtifactStoreError",
    "CategoryArtifact",
    "DailyAggregator",
    "DailySummary",
    "JsonArtifactStore",
    "ResponseParser",
    "TaskRecord",
    "parse_tasks",
]
