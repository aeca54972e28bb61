"""TaskStore: the signed-in user's task mirror.

Mutations are write-through: the record store call is awaited first and the
mirror changes only once it has succeeded. Queries never leave the process.
Remote failures are logged, reported to the notifier and swallowed here; the
mirror then still holds the last confirmed state.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from taskmirror.auth.session import SessionProvider
from taskmirror.database.models import task_from_record, to_record_fields
from taskmirror.database.record_store import RecordStore, RecordStoreError
from taskmirror.engine import analytics
from taskmirror.models.constants import DEFAULT_CATEGORIES
from taskmirror.models.notification import Notification, Severity
from taskmirror.models.stats import CompletionStats, CategoryStats, TaskOverview
from taskmirror.models.task import Task, TaskDraft, TaskFilter, TaskPatch
from taskmirror.models.user import User
from taskmirror.notifications import LoggingNotifier, Notifier
from taskmirror.store.categories import CategorySet, CategoryStorage

logger = logging.getLogger(__name__)


class StoreState(str, Enum):
    """Lifecycle of the mirror."""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class TaskStore:
    """In-memory mirror of one user's tasks and categories."""

    def __init__(
        self,
        record_store: RecordStore,
        notifier: Optional[Notifier] = None,
        category_storage: Optional[CategoryStorage] = None,
        default_categories=DEFAULT_CATEGORIES,
    ):
        self.record_store = record_store
        self.notifier = notifier or LoggingNotifier()
        self.category_storage = category_storage
        self.state = StoreState.UNINITIALIZED
        self.load_failed = False
        self._user: Optional[User] = None
        # Insertion ordered; keyed by task id
        self._tasks: Dict[str, Task] = {}
        self._categories = CategorySet(default_categories)
        # Bumped on every identity change so superseded loads can be dropped
        self._generation = 0
        self._unsubscribe = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    @property
    def tasks(self) -> List[Task]:
        """Every mirrored task, including trashed ones."""
        return list(self._tasks.values())

    @property
    def categories(self) -> List[str]:
        return self._categories.as_list()

    async def bind(self, session: SessionProvider) -> None:
        """Follow ``session``'s identity and load for its current user."""
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = session.subscribe(self.on_identity_change)
        await self.on_identity_change(session.current_user)

    def unbind(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def on_identity_change(self, user: Optional[User]) -> None:
        """Discard the mirror and reload it for ``user`` (or leave it empty)."""
        self._generation += 1
        generation = self._generation
        self._user = user
        self.state = StoreState.LOADING
        self.load_failed = False
        self._tasks = {}
        self._categories.reset()

        if user is None:
            self.state = StoreState.READY
            logger.debug("Mirror cleared (no identity)")
            return

        if self.category_storage is not None:
            self._categories.union(self.category_storage.load(user.id))

        try:
            records = await self.record_store.select(user.id)
        except RecordStoreError as e:
            if generation != self._generation:
                return
            logger.error(f"Failed to load tasks for user {user.id}: {type(e).__name__}: {str(e)}")
            self.load_failed = True
            self.state = StoreState.READY
            self._notify("Error", "Failed to load your tasks", Severity.DESTRUCTIVE)
            return

        if generation != self._generation:
            logger.debug(f"Discarding superseded load for user {user.id}")
            return

        for record in records:
            try:
                task = task_from_record(record)
            except ValidationError as e:
                logger.warning(f"Skipping malformed task record {record.get('id')}: {e.error_count()} error(s)")
                continue
            if task.owner_id != user.id:
                logger.warning(f"Ignoring task {task.id} owned by another user")
                continue
            self._tasks[task.id] = task
        self._categories.union(t.category for t in self._tasks.values() if t.category)
        self._save_categories()
        self.state = StoreState.READY
        logger.info(f"Loaded {len(self._tasks)} tasks for user {user.id}")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_task(self, draft: Union[TaskDraft, Dict[str, Any]]) -> Optional[Task]:
        """Insert a new task and append the stored record to the mirror."""
        user = self._user
        if user is None:
            return None
        if not isinstance(draft, TaskDraft):
            draft = TaskDraft(**draft)

        record = to_record_fields({**draft.model_dump(), "owner_id": user.id, "is_deleted": False})
        try:
            stored = await self.record_store.insert(record)
        except RecordStoreError as e:
            logger.error(f"Failed to add task: {type(e).__name__}: {str(e)}")
            self._notify("Error", "Failed to add task", Severity.DESTRUCTIVE)
            return None

        try:
            task = task_from_record(stored)
        except ValidationError as e:
            logger.error(f"Inserted task {stored.get('id')} came back malformed: {e.error_count()} error(s)")
            self._notify("Error", "Failed to add task", Severity.DESTRUCTIVE)
            return None
        if not self._owns_result(user):
            return task
        if task.owner_id != user.id:
            logger.warning(f"Ignoring inserted task {task.id} owned by another user")
            return None
        self._tasks[task.id] = task
        logger.debug(f"Added task {task.id}: {task.title[:50]}")
        self._notify("Task added", f'"{task.title}" has been added to your tasks')
        return task

    async def update_task(self, task_id: str, patch: Union[TaskPatch, Dict[str, Any]]) -> Optional[Task]:
        """Send the set fields of ``patch`` and merge them into the local task.

        The remote update is attempted even when the id is not mirrored; the
        mirror and notifications then stay silent.
        """
        if not isinstance(patch, TaskPatch):
            patch = TaskPatch(**patch)
        changes = patch.changes()
        if not changes:
            return self._tasks.get(task_id)
        return await self._write_fields(
            task_id,
            changes,
            success=("Task updated", "Your task has been updated successfully"),
            failure="Failed to update task",
        )

    async def delete_task(self, task_id: str) -> Optional[Task]:
        """Move a task to the trash (soft delete)."""
        return await self._write_fields(
            task_id,
            {"is_deleted": True},
            success=("Task moved to trash", "You can restore it from the trash if needed"),
            failure="Failed to move task to trash",
        )

    async def restore_task(self, task_id: str) -> Optional[Task]:
        return await self._write_fields(
            task_id,
            {"is_deleted": False},
            success=("Task restored", "Your task has been restored successfully"),
            failure="Failed to restore task",
        )

    async def complete_task(self, task_id: str) -> Optional[Task]:
        """Toggle completion of a mirrored task."""
        task = self._tasks.get(task_id)
        if self._user is None or task is None:
            return None
        completed = not task.completed
        action = "completed" if completed else "marked as incomplete"
        return await self._write_fields(
            task_id,
            {"completed": completed},
            success=(f"Task {action}", f'"{task.title}" has been {action}'),
            failure="Failed to update task status",
        )

    async def permanently_delete_task(self, task_id: str) -> bool:
        """Remove a task from the record store and the mirror for good."""
        user = self._user
        if user is None:
            return False
        try:
            await self.record_store.delete(task_id)
        except RecordStoreError as e:
            logger.error(f"Failed to permanently delete task {task_id}: {type(e).__name__}: {str(e)}")
            self._notify("Error", "Failed to permanently delete task", Severity.DESTRUCTIVE)
            return False

        if not self._owns_result(user):
            return True
        removed = self._tasks.pop(task_id, None)
        if removed is not None:
            logger.debug(f"Purged task {task_id}")
            self._notify("Task permanently deleted", "The task has been permanently removed")
        return True

    async def empty_trash(self) -> int:
        """Purge every trashed task, one remote delete each; returns the count purged."""
        trashed = [t.id for t in self.get_tasks(TaskFilter(deleted=True))]
        purged = 0
        for task_id in trashed:
            if await self.permanently_delete_task(task_id) and task_id not in self._tasks:
                purged += 1
        if purged:
            self._notify("Trash emptied", "All items have been permanently deleted")
        return purged

    async def _write_fields(self, task_id: str, changes: Dict[str, Any], success, failure: str) -> Optional[Task]:
        user = self._user
        if user is None:
            return None
        try:
            await self.record_store.update(task_id, to_record_fields(changes))
        except RecordStoreError as e:
            logger.error(f"{failure} {task_id}: {type(e).__name__}: {str(e)}")
            self._notify("Error", failure, Severity.DESTRUCTIVE)
            return None

        if not self._owns_result(user):
            return None
        current = self._tasks.get(task_id)
        if current is None:
            logger.debug(f"Task {task_id} not mirrored; remote update only")
            return None
        updated = current.model_copy(update=changes)
        self._tasks[task_id] = updated
        logger.debug(f"Updated task {task_id}: {sorted(changes)}")
        self._notify(*success)
        return updated

    def _owns_result(self, user: User) -> bool:
        """True if ``user`` (captured before the await) is still the store's identity."""
        if self._user is not None and self._user.id == user.id:
            return True
        logger.info(f"Dropping result for user {user.id}; identity changed while in flight")
        return False

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def add_category(self, name: str) -> bool:
        if not name or not self._categories.add(name):
            return False
        self._save_categories()
        self._notify("Category added", f'"{name}" has been added to your categories')
        return True

    def remove_category(self, name: str) -> bool:
        """Remove ``name`` from the set; tasks keep their category string."""
        if not self._categories.remove(name):
            return False
        self._save_categories()
        self._notify("Category removed", f'"{name}" has been removed from your categories')
        return True

    def _save_categories(self) -> None:
        if self.category_storage is not None and self._user is not None:
            self.category_storage.save(self._user.id, self._categories.as_list())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_tasks(self, task_filter: Optional[TaskFilter] = None) -> List[Task]:
        if self._user is None:
            return []
        task_filter = task_filter or TaskFilter()
        result = []
        for task in self._tasks.values():
            if task.owner_id != self._user.id:
                continue
            if task_filter.deleted is not None and task.is_deleted != task_filter.deleted:
                continue
            if task_filter.completed is not None and task.completed != task_filter.completed:
                continue
            if task_filter.category is not None and task.category != task_filter.category:
                continue
            result.append(task)
        return result

    def get_task_by_id(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    def get_completion_stats(self) -> CompletionStats:
        return analytics.completion_stats(self.get_tasks(TaskFilter(deleted=False)))

    def get_category_stats(self) -> List[CategoryStats]:
        return analytics.category_breakdown(self.get_tasks(TaskFilter(deleted=False)), self.categories)

    def get_priority_counts(self) -> Dict[str, int]:
        return analytics.priority_distribution(self.get_tasks(TaskFilter(deleted=False)))

    def get_overview(self) -> TaskOverview:
        return analytics.task_overview(self.get_tasks(TaskFilter(deleted=False)), self.categories)

    # ------------------------------------------------------------------

    def _notify(self, title: str, description: str, severity: Severity = Severity.NORMAL) -> None:
        try:
            self.notifier.notify(Notification(title=title, description=description, severity=severity))
        except Exception:
            logger.exception(f"Notifier failed on {title!r}")
