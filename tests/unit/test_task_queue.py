"""Unit tests for the task queue and session registry."""

import pytest

from figscript.strategies.template_engine import DIRECTIVE, TemplateRenderer
from figscript.tasks import QueueRegistry, TaskItem, TaskQueue


def make_item(task_id: str, template: str = "node.opacity = {{v}};", **vars: str) -> TaskItem:
    return TaskItem(id=task_id, name=task_id.title(), template=template, vars=vars)


# =============================================================================
# Task Queue Tests
# =============================================================================


class TestTaskQueue:
    """Test suite for TaskQueue."""

    @pytest.fixture
    def queue(self):
        """Create a queue holding three tasks."""
        return TaskQueue(items=[make_item("a", v="1"), make_item("b", v="2"), make_item("c", v="3")])

    # =========================================================================
    # Add / Remove Tests
    # =========================================================================

    def test_empty_queue(self):
        """Test a fresh queue."""
        queue = TaskQueue()
        assert len(queue) == 0
        assert queue.items == ()
        assert queue.render_merged() == ""

    def test_add_is_idempotent_on_id(self):
        """Test that adding an existing id is a no-op, not an update."""
        queue = TaskQueue()
        assert queue.add(make_item("a", v="1")) is True
        assert queue.add(make_item("a", v="changed")) is False
        assert len(queue) == 1
        assert queue.get("a").vars == {"v": "1"}

    def test_add_stores_a_copy(self):
        """Test that later changes to the added item do not leak in."""
        queue = TaskQueue()
        item = make_item("a", v="1")
        queue.add(item)
        item.vars["v"] = "mutated"
        assert queue.get("a").vars == {"v": "1"}

    def test_read_access_returns_copies(self, queue):
        """Test that callers cannot mutate queued items."""
        queue.get("a").vars["v"] = "x"
        queue.items[1].vars["v"] = "y"
        for item in queue:
            item.vars["v"] = "z"
        assert [item.vars["v"] for item in queue.items] == ["1", "2", "3"]

    def test_contains_and_ids(self, queue):
        """Test membership and id listing."""
        assert "b" in queue
        assert "z" not in queue
        assert queue.ids == ["a", "b", "c"]
        assert queue.get("z") is None

    def test_remove(self, queue):
        """Test removing a task by id."""
        assert queue.remove("b") is True
        assert queue.ids == ["a", "c"]

    def test_double_remove_is_safe(self, queue):
        """Test that removing an absent id changes nothing."""
        queue.remove("b")
        assert queue.remove("b") is False
        assert len(queue) == 2

    def test_clear(self, queue):
        """Test clearing the queue."""
        queue.clear()
        assert len(queue) == 0
        assert queue.render_merged() == ""

    # =========================================================================
    # Reorder Tests
    # =========================================================================

    @pytest.mark.parametrize(
        ("from_index", "to_index", "expected"),
        [
            (0, 2, ["b", "c", "a"]),
            (2, 0, ["c", "a", "b"]),
            (1, 1, ["a", "b", "c"]),
            (0, 1, ["b", "a", "c"]),
        ],
    )
    def test_reorder(self, queue, from_index, to_index, expected):
        """Test that reorder moves one task and keeps the rest in order."""
        queue.reorder(from_index, to_index)
        assert queue.ids == expected

    def test_reorder_preserves_ids(self, queue):
        """Test that reorder keeps length and the set of ids."""
        queue.reorder(2, 1)
        assert len(queue) == 3
        assert sorted(queue.ids) == ["a", "b", "c"]

    def test_reorder_invalid_index(self, queue):
        """Test that an out-of-range source index raises IndexError."""
        with pytest.raises(IndexError):
            queue.reorder(5, 0)

    # =========================================================================
    # Update Tests
    # =========================================================================

    def test_update_vars_replaces_bindings(self, queue):
        """Test that update_vars replaces the whole mapping."""
        queue.add(make_item("d", "{{a}}{{b}}", a="1", b="2"))
        assert queue.update_vars("d", {"a": "9"}) is True
        assert queue.get("d").vars == {"a": "9"}

    def test_update_vars_copies_mapping(self, queue):
        """Test that the caller's mapping is not shared with the queue."""
        new_vars = {"v": "7"}
        queue.update_vars("a", new_vars)
        new_vars["v"] = "8"
        assert queue.get("a").vars == {"v": "7"}

    def test_update_vars_absent_id(self, queue):
        """Test that updating an unknown id is a no-op."""
        assert queue.update_vars("z", {"v": "1"}) is False
        assert "z" not in queue

    # =========================================================================
    # Merge Tests
    # =========================================================================

    def test_render_merged(self):
        """Test that rendered tasks are joined by one blank line."""
        queue = TaskQueue()
        queue.add(make_item("a", "node.opacity = {{v}};", v="0.5"))
        queue.add(make_item("b", "node.rotation = {{r}};", r="45"))
        assert queue.render_merged() == "node.opacity = 0.5;\n\nnode.rotation = 45;"

    def test_render_merged_directive(self):
        """Test merging with the directive syntax."""
        queue = TaskQueue(renderer=TemplateRenderer(DIRECTIVE))
        queue.add(make_item("a", "node.opacity = VAR(v);", v="0.5"))
        queue.add(make_item("b", "node.rotation = VAR(r);", r="45"))
        assert queue.render_merged() == "node.opacity = 0.5;\n\nnode.rotation = 45;"

    def test_render_merged_skips_empty_results(self):
        """Test that tasks rendering to nothing leave no gap."""
        queue = TaskQueue()
        queue.add(make_item("a", "{{#if x}}node.x = {{x}};{{/if}}", x=""))
        queue.add(make_item("b", "node.rotation = {{r}};", r="45"))
        queue.add(make_item("c", "   \n"))
        assert queue.render_merged() == "node.rotation = 45;"

    def test_render_merged_follows_order(self, queue):
        """Test that merge output follows the queue order."""
        queue.reorder(2, 0)
        assert queue.render_merged() == "node.opacity = 3;\n\nnode.opacity = 1;\n\nnode.opacity = 2;"


# =============================================================================
# Queue Registry Tests
# =============================================================================


class TestQueueRegistry:
    """Test suite for QueueRegistry."""

    @pytest.fixture
    def registry(self):
        """Create a registry holding at most two sessions."""
        return QueueRegistry(TaskQueue, max_sessions=2)

    def test_get_creates_once(self, registry):
        """Test that a session keeps the same queue."""
        queue = registry.get("s1")
        assert registry.get("s1") is queue
        assert len(registry) == 1

    def test_sessions_are_isolated(self, registry):
        """Test that sessions do not share queues."""
        registry.get("s1").add(make_item("a", v="1"))
        assert len(registry.get("s2")) == 0

    def test_lru_eviction(self, registry):
        """Test that the least recently used session is evicted."""
        registry.get("s1")
        registry.get("s2")
        registry.get("s1")
        registry.get("s3")
        assert "s1" in registry
        assert "s2" not in registry
        assert "s3" in registry

    def test_drop_and_clear(self, registry):
        """Test removing sessions."""
        registry.get("s1")
        registry.get("s2")
        assert registry.drop("s1") is True
        assert registry.drop("s1") is False
        registry.clear()
        assert len(registry) == 0

    def test_invalid_max_sessions(self):
        """Test that at least one session must be allowed."""
        with pytest.raises(ValueError):
            QueueRegistry(TaskQueue, max_sessions=0)
