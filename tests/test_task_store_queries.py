"""Tests for TaskStore queries, statistics and category management."""

import pytest

from taskmirror.models.constants import DEFAULT_CATEGORIES
from taskmirror.models.task import TaskFilter
from taskmirror.store.categories import CategoryStorage
from taskmirror.store.task_store import TaskStore


async def _populate(store):
    """Four tasks: two active (one completed), one trashed completed, one trashed open."""
    a = await store.add_task({"title": "A", "category": "Work", "priority": "high"})
    b = await store.add_task({"title": "B", "category": "Work", "completed": True})
    c = await store.add_task({"title": "C", "category": "Study", "completed": True})
    d = await store.add_task({"title": "D", "priority": "low"})
    await store.delete_task(c.id)
    await store.delete_task(d.id)
    return a, b, c, d


@pytest.mark.asyncio
class TestGetTasks:
    """Owner-scoped equality filtering over the mirror."""

    async def test_no_filter_returns_all_owned_in_insertion_order(self, signed_in_store):
        a, b, c, d = await _populate(signed_in_store)
        assert [t.id for t in signed_in_store.get_tasks()] == [a.id, b.id, c.id, d.id]

    async def test_filter_fields_are_independent(self, signed_in_store):
        a, b, c, d = await _populate(signed_in_store)

        assert [t.id for t in signed_in_store.get_tasks(TaskFilter(deleted=False))] == [a.id, b.id]
        assert [t.id for t in signed_in_store.get_tasks(TaskFilter(deleted=True))] == [c.id, d.id]
        assert [t.id for t in signed_in_store.get_tasks(TaskFilter(completed=True))] == [b.id, c.id]
        assert [t.id for t in signed_in_store.get_tasks(TaskFilter(category="Work", completed=False))] == [a.id]
        assert signed_in_store.get_tasks(TaskFilter(category="Study", deleted=False)) == []

    async def test_deleted_views_are_complementary(self, signed_in_store):
        await _populate(signed_in_store)
        active = {t.id for t in signed_in_store.get_tasks(TaskFilter(deleted=False))}
        trashed = {t.id for t in signed_in_store.get_tasks(TaskFilter(deleted=True))}
        everything = {t.id for t in signed_in_store.get_tasks()}

        assert active.isdisjoint(trashed)
        assert active | trashed == everything

    async def test_no_identity_returns_empty(self, store, session):
        await store.bind(session)
        assert store.get_tasks() == []
        assert store.get_tasks(TaskFilter(deleted=False)) == []

    async def test_get_task_by_id(self, signed_in_store):
        a, _, c, _ = await _populate(signed_in_store)
        assert signed_in_store.get_task_by_id(a.id) == a
        assert signed_in_store.get_task_by_id(c.id).is_deleted is True
        assert signed_in_store.get_task_by_id("nope") is None


@pytest.mark.asyncio
class TestStats:
    """Completion statistics and aggregate wrappers."""

    async def test_stats_with_no_tasks(self, signed_in_store):
        stats = signed_in_store.get_completion_stats()
        assert (stats.completed, stats.total, stats.percentage) == (0, 0, 0)

    async def test_stats_ignore_trashed_tasks(self, signed_in_store):
        await _populate(signed_in_store)
        stats = signed_in_store.get_completion_stats()
        assert (stats.completed, stats.total, stats.percentage) == (1, 2, 50)

    async def test_stats_round_half_up(self, signed_in_store):
        for i in range(8):
            await signed_in_store.add_task({"title": f"T{i}", "completed": i == 0})
        assert signed_in_store.get_completion_stats().percentage == 13

    async def test_stats_round_two_thirds(self, signed_in_store):
        await signed_in_store.add_task({"title": "1", "completed": True})
        await signed_in_store.add_task({"title": "2", "completed": True})
        await signed_in_store.add_task({"title": "3"})
        assert signed_in_store.get_completion_stats().percentage == 67

    async def test_category_and_priority_aggregates(self, signed_in_store):
        await _populate(signed_in_store)

        by_name = {c.name: c for c in signed_in_store.get_category_stats()}
        assert (by_name["Work"].total, by_name["Work"].completed, by_name["Work"].active) == (2, 1, 1)
        assert by_name["Study"].total == 0
        assert signed_in_store.get_priority_counts() == {"low": 0, "medium": 1, "high": 1}

        overview = signed_in_store.get_overview()
        assert overview.total == 2
        assert overview.top_category == "Work"
        assert overview.category_count == len(DEFAULT_CATEGORIES)


@pytest.mark.asyncio
class TestCategories:
    """Category set management."""

    async def test_add_category_is_idempotent(self, signed_in_store, notifier):
        assert signed_in_store.add_category("Personal") is False
        assert signed_in_store.categories == list(DEFAULT_CATEGORIES)
        assert notifier.notifications == []

    async def test_add_category_appends_in_order(self, signed_in_store, notifier):
        assert signed_in_store.add_category("Hobby") is True
        assert signed_in_store.add_category("Garden") is True
        assert signed_in_store.categories == ["Personal", "Work", "Study", "Hobby", "Garden"]
        assert notifier.last.title == "Category added"

    async def test_add_empty_category_is_ignored(self, signed_in_store):
        assert signed_in_store.add_category("") is False
        assert "" not in signed_in_store.categories

    async def test_remove_category_leaves_tasks_untouched(self, signed_in_store, notifier):
        task = await signed_in_store.add_task({"title": "Tagged", "category": "Work"})

        assert signed_in_store.remove_category("Work") is True

        assert "Work" not in signed_in_store.categories
        assert signed_in_store.get_task_by_id(task.id).category == "Work"
        assert [t.id for t in signed_in_store.get_tasks(TaskFilter(category="Work"))] == [task.id]
        assert notifier.last.title == "Category removed"

    async def test_remove_missing_category_is_noop(self, signed_in_store, notifier):
        assert signed_in_store.remove_category("Nope") is False
        assert notifier.notifications == []

    async def test_categories_are_persisted_per_user(self, record_store, notifier, session, user, other_user, tmp_path):
        storage = CategoryStorage(tmp_path)
        store = TaskStore(record_store, notifier=notifier, category_storage=storage)
        await store.bind(session)
        await session.login(user)

        store.add_category("Reading")
        await session.login(other_user)
        assert "Reading" not in store.categories

        await session.login(user)
        assert store.categories[-1] == "Reading"
        assert storage.load(user.id) == ["Personal", "Work", "Study", "Reading"]
