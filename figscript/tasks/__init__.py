"""Task queue: ordered pending edits merged into one script."""

from figscript.tasks.models import TaskItem
from figscript.tasks.queue import TaskQueue
from figscript.tasks.registry import QueueRegistry

__all__ = [
    "TaskItem",
    "TaskQueue",
    "QueueRegistry",
]
