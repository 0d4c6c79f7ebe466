"""Shared enums and types for ai-jarvis."""

from enum import StrEnum


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MetricStatus(StrEnum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


class TaskCategory(StrEnum):
    WORK = "work"
    LEARNING = "learning"
    MARKET = "market"


def normalize_priority(value) -> Priority:
    """Map any raw priority value onto Priority, defaulting to medium."""
    if isinstance(value, str):
        try:
            return Priority(value.strip().lower())
        except ValueError:
            pass
    return Priority.MEDIUM
