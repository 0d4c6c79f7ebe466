"""Tolerant extraction of task records from free-form LLM output.

Parsing is an ordered cascade of strategies. Every strategy is total: it
returns a (possibly empty) list and never raises. The first strategy that
produces records wins; the fallback strategy always produces exactly one
synthetic error record, so ``parse`` always returns at least one task.
"""

import json
import re
from typing import Optional

import structlog

from observability import metrics
from shared_types import Priority, normalize_priority
from tasks.models import DEFAULT_ESTIMATED_TIME, IdFactory, TaskRecord

logger = structlog.get_logger()

PARSE_ERROR_TITLE = "AI response format could not be understood, check the raw response"
PARSE_ERROR_ESTIMATE = "5 min"

_FENCED_JSON_RE = re.compile(r"```json\s*([\s\S]*?)\s*```")
_BULLET_RE = re.compile(r"^[-*]\s+")
_NUMBERED_RE = re.compile(r"^\d+\.\s+")

# Keys under which prompts ask the model to nest its task list
_LIST_KEYS = ("tasks", "analysis_tasks")


class ParseStrategy:
    """Base strategy. Subclasses return an empty list when they do not apply."""

    name = "base"

    def extract(self, raw_text: str, new_id: IdFactory) -> list[TaskRecord]:
        raise NotImplementedError


def synthetic_error_task(new_id: IdFactory) -> TaskRecord:
    return TaskRecord(
        id=new_id(),
        title=PARSE_ERROR_TITLE,
        priority=Priority.HIGH,
        estimated_time=PARSE_ERROR_ESTIMATE,
    )


class FencedJsonStrategy(ParseStrategy):
    """Read the first ```json fenced block as a task list."""

    name = "fenced_json"

    def extract(self, raw_text: str, new_id: IdFactory) -> list[TaskRecord]:
        match = _FENCED_JSON_RE.search(raw_text)
        if not match:
            return []
        try:
            payload = json.loads(match.group(1))
        except ValueError as e:
            logger.debug("fenced_json_decode_failed", error=str(e))
            return []

        items = self._task_list(payload)
        if items is None:
            return []
        return [self._to_task(item, new_id) for item in items]

    @staticmethod
    def _task_list(payload) -> Optional[list]:
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            for key in _LIST_KEYS:
                if isinstance(payload.get(key), list):
                    return payload[key]
        return None

    @staticmethod
    def _to_task(item, new_id: IdFactory) -> TaskRecord:
        if isinstance(item, str):
            item = {"title": item}
        if not isinstance(item, dict):
            return synthetic_error_task(new_id)

        title = str(item.get("title") or item.get("name") or "").strip()
        if not title:
            return synthetic_error_task(new_id)

        steps = item.get("actionable_steps", item.get("action_items"))
        estimate = item.get("estimated_time") or item.get("time_requirement")
        description = item.get("description")
        category = item.get("category")
        raw_id = item.get("id")
        return TaskRecord(
            id=str(raw_id) if raw_id not in (None, "") else new_id(),
            title=title,
            completed=False,
            priority=normalize_priority(item.get("priority")),
            estimated_time=str(estimate) if estimate else DEFAULT_ESTIMATED_TIME,
            description=str(description) if description is not None else None,
            category=str(category) if category is not None else None,
            actionable_steps=[str(s) for s in steps] if isinstance(steps, list) else [],
        )


class ListLineStrategy(ParseStrategy):
    """One task per bullet (``-``/``*``) or numbered (``1.``) line."""

    name = "list_lines"

    def extract(self, raw_text: str, new_id: IdFactory) -> list[TaskRecord]:
        tasks = []
        for line in raw_text.splitlines():
            stripped = line.strip()
            if _BULLET_RE.match(stripped):
                title = _BULLET_RE.sub("", stripped, count=1).strip()
            elif _NUMBERED_RE.match(stripped):
                title = _NUMBERED_RE.sub("", stripped, count=1).strip()
            else:
                continue
            if title:
                tasks.append(TaskRecord(id=new_id(), title=title, priority=Priority.MEDIUM))
        return tasks


class FallbackStrategy(ParseStrategy):
    """Terminal strategy: a single high-priority placeholder."""

    name = "fallback"

    def extract(self, raw_text: str, new_id: IdFactory) -> list[TaskRecord]:
        return [synthetic_error_task(new_id)]


DEFAULT_STRATEGIES: tuple[ParseStrategy, ...] = (
    FencedJsonStrategy(),
    ListLineStrategy(),
    FallbackStrategy(),
)


class ResponseParser:
    """Turn one opaque response blob into task records."""

    def __init__(self, strategies: Optional[tuple[ParseStrategy, ...]] = None, id_factory=None):
        self.strategies = strategies or DEFAULT_STRATEGIES
        self._id_factory = id_factory

    def parse(self, raw_text) -> list[TaskRecord]:
        text = raw_text if isinstance(raw_text, str) else ""
        new_id = self._id_factory or IdFactory()
        for strategy in self.strategies:
            tasks = strategy.extract(text, new_id)
            if tasks:
                metrics.counter(f"parse_strategy.{strategy.name}")
                metrics.counter("tasks_parsed", len(tasks))
                logger.debug("response_parsed", strategy=strategy.name, tasks=len(tasks))
                return tasks
        # Custom strategy lists may omit the fallback
        metrics.counter("parse_strategy.fallback")
        return [synthetic_error_task(new_id)]


def parse_tasks(raw_text) -> list[TaskRecord]:
    """Parse with the default strategy cascade."""
    return ResponseParser().parse(raw_text)
