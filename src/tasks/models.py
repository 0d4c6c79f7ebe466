"""Task and artifact records shared by the parser, store and aggregator."""

import itertools
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Optional

from shared_types import Priority, normalize_priority

DEFAULT_ESTIMATED_TIME = "15-30 min"
UNKNOWN_CATEGORY = "unknown"
UNTITLED_TASK = "Untitled task"


class IdFactory:
    """Generates task ids unique within one parse call.

    The sequence number keeps ids distinct even when many records are built
    within the same millisecond.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._seq = itertools.count(1)

    def __call__(self) -> str:
        millis = int(self._clock() * 1000)
        return f"{millis}-{next(self._seq)}-{uuid.uuid4().hex[:6]}"


@dataclass
class TaskRecord:
    """One actionable item extracted from a generated response."""

    id: str
    title: str
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    estimated_time: str = DEFAULT_ESTIMATED_TIME
    description: Optional[str] = None
    category: Optional[str] = None
    actionable_steps: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "priority": str(self.priority),
            "estimated_time": self.estimated_time,
        }
        if self.description is not None:
            data["description"] = self.description
        if self.category is not None:
            data["category"] = self.category
        if self.actionable_steps:
            data["actionable_steps"] = list(self.actionable_steps)
        return data

    @classmethod
    def from_dict(cls, data: dict, id_factory: Optional[IdFactory] = None) -> "TaskRecord":
        """Rebuild a record from persisted JSON. Missing fields fall back to defaults."""
        raw_id = data.get("id")
        if raw_id in (None, ""):
            raw_id = (id_factory or IdFactory())()
        steps = data.get("actionable_steps")
        description = data.get("description")
        category = data.get("category")
        return cls(
            id=str(raw_id),
            title=str(data.get("title") or "").strip() or UNTITLED_TASK,
            completed=bool(data.get("completed", False)),
            priority=normalize_priority(data.get("priority")),
            estimated_time=str(data.get("estimated_time") or DEFAULT_ESTIMATED_TIME),
            description=str(description) if description is not None else None,
            category=str(category) if category is not None else None,
            actionable_steps=[str(s) for s in steps] if isinstance(steps, list) else [],
        )


@dataclass
class CategoryArtifact:
    """One category's generation outcome for one day."""

    category: str
    generated_at: str
    raw_text: str = ""
    tasks: list[TaskRecord] = field(default_factory=list)
    error: Optional[str] = None

    def __post_init__(self):
        # A failed generation never carries tasks
        if self.error:
            self.tasks = []

    @property
    def is_error(self) -> bool:
        return bool(self.error)

    @property
    def date(self) -> str:
        return self.generated_at[:10]

    def to_dict(self) -> dict:
        data = {"category": self.category, "generated_at": self.generated_at}
        if self.is_error:
            data["error"] = self.error
        else:
            data["ai_response"] = self.raw_text
        data["tasks"] = [t.to_dict() for t in self.tasks]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CategoryArtifact":
        """Defensive load: odd shapes degrade to defaults instead of raising."""
        if not isinstance(data, dict):
            data = {}
        raw_tasks = data.get("tasks")
        if not isinstance(raw_tasks, list):
            raw_tasks = []
        id_factory = IdFactory()
        tasks = [TaskRecord.from_dict(t, id_factory) for t in raw_tasks if isinstance(t, dict)]
        error = data.get("error")
        return cls(
            category=str(data.get("category") or UNKNOWN_CATEGORY),
            generated_at=str(data.get("generated_at") or ""),
            raw_text=str(data.get("ai_response") or ""),
            tasks=tasks,
            error=str(error) if error else None,
        )
