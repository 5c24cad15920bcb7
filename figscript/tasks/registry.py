"""In-memory registry of task queues keyed by session id.

Queues live only as long as the process; nothing is persisted. When
more than ``max_sessions`` queues exist the least recently used one is
dropped.
"""

import logging
from collections import OrderedDict
from collections.abc import Callable

from figscript.tasks.queue import TaskQueue

logger = logging.getLogger(__name__)


class QueueRegistry:
    """Owns one TaskQueue per client session."""

    def __init__(self, queue_factory: Callable[[], TaskQueue], max_sessions: int = 1000) -> None:
        """Initialize the registry.

        Args:
            queue_factory: Callable creating an empty queue for a new session.
            max_sessions: Upper bound on live queues before LRU eviction.
        """
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self._queue_factory = queue_factory
        self._max_sessions = max_sessions
        self._queues: OrderedDict[str, TaskQueue] = OrderedDict()

    def __len__(self) -> int:
        return len(self._queues)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._queues

    def get(self, session_id: str) -> TaskQueue:
        """Return the session's queue, creating it on first use."""
        queue = self._queues.get(session_id)
        if queue is not None:
            self._queues.move_to_end(session_id)
            return queue

        queue = self._queue_factory()
        self._queues[session_id] = queue
        logger.info(f"Created task queue for session {session_id} ({len(self._queues)} active)")

        while len(self._queues) > self._max_sessions:
            evicted, _ = self._queues.popitem(last=False)
            logger.info(f"Evicted task queue for session {evicted}")
        return queue

    def drop(self, session_id: str) -> bool:
        return self._queues.pop(session_id, None) is not None

    def clear(self) -> None:
        self._queues.clear()
