"""CLI command modules."""

from .disk import disk_check
from .generate import generate
from .notify_cmd import notify_test
from .summary import summary
from .tasks_cmd import tasks

__all__ = ["disk_check", "generate", "notify_test", "summary", "tasks"]
