"""Ordered task queue.

Holds pending snippet edits in order and merges them into one script
body. Operations on an id that is not queued are silent no-ops; the
boolean return values only tell the caller whether anything changed.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping

from figscript.interfaces.template import BaseTemplateRenderer
from figscript.strategies.template_engine.renderer import TemplateRenderer
from figscript.tasks.models import TaskItem

logger = logging.getLogger(__name__)

MERGE_SEPARATOR = "\n\n"


class TaskQueue:
    """Explicitly owned, ordered collection of task items.

    Items are stored as private copies, so later changes to the caller's
    objects (or to the catalog entry they came from) never leak into
    the queue.
    """

    def __init__(
        self,
        renderer: BaseTemplateRenderer | None = None,
        items: Iterable[TaskItem] = (),
    ) -> None:
        self._renderer = renderer or TemplateRenderer()
        self._items: list[TaskItem] = []
        for item in items:
            self.add(item)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TaskItem]:
        return iter(self.items)

    def __contains__(self, task_id: object) -> bool:
        return self._index_of(task_id) is not None

    @property
    def items(self) -> tuple[TaskItem, ...]:
        """Copies of the queued items in order."""
        return tuple(item.snapshot() for item in self._items)

    @property
    def ids(self) -> list[str]:
        return [item.id for item in self._items]

    def get(self, task_id: str) -> TaskItem | None:
        index = self._index_of(task_id)
        return None if index is None else self._items[index].snapshot()

    def add(self, item: TaskItem) -> bool:
        """Append ``item`` unless its id is already queued.

        An existing id is left untouched; its bindings are not updated.
        """
        if item.id in self:
            logger.debug(f"Task already queued, ignoring add: {item.id}")
            return False
        self._items.append(item.snapshot())
        logger.debug(f"Task added: {item.id} (queue length {len(self._items)})")
        return True

    def remove(self, task_id: str) -> bool:
        index = self._index_of(task_id)
        if index is None:
            return False
        del self._items[index]
        logger.debug(f"Task removed: {task_id}")
        return True

    def reorder(self, from_index: int, to_index: int) -> None:
        """Move the item at ``from_index`` to ``to_index``.

        ``to_index`` addresses the sequence after removal. Both indices
        must be valid for the current length; callers validate them.
        """
        moved = self._items.pop(from_index)
        self._items.insert(to_index, moved)
        logger.debug(f"Task moved: {moved.id} {from_index} -> {to_index}")

    def update_vars(self, task_id: str, new_vars: Mapping[str, str]) -> bool:
        """Replace the bindings of a queued task wholesale."""
        index = self._index_of(task_id)
        if index is None:
            return False
        self._items[index] = self._items[index].model_copy(update={"vars": dict(new_vars)})
        logger.debug(f"Task variables replaced: {task_id}")
        return True

    def clear(self) -> None:
        self._items.clear()

    def render_merged(self) -> str:
        """Render every task in order and join the non-empty results.

        Returns:
            The merged script body, without any execution boilerplate.
        """
        rendered = (self._renderer.render(item.template, item.vars) for item in self._items)
        return MERGE_SEPARATOR.join(code for code in rendered if code.strip())

    def _index_of(self, task_id: object) -> int | None:
        for index, item in enumerate(self._items):
            if item.id == task_id:
                return index
        return None
