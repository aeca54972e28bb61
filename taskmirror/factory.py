"""Wiring of a TaskStore from environment configuration."""

from typing import Optional

from taskmirror import config
from taskmirror.database.database import SessionLocal, init_db
from taskmirror.database.record_store import RecordStore, SqlRecordStore
from taskmirror.notifications import LoggingNotifier, Notifier
from taskmirror.store.categories import CategoryStorage
from taskmirror.store.task_store import TaskStore


def build_task_store(
    record_store: Optional[RecordStore] = None,
    notifier: Optional[Notifier] = None,
    category_dir: Optional[str] = None,
) -> TaskStore:
    """Create a TaskStore over the configured database.

    When no record store is given the schema is initialized and the
    module-level SQLAlchemy session factory is used.
    """
    if record_store is None:
        init_db()
        record_store = SqlRecordStore(SessionLocal)
    return TaskStore(
        record_store,
        notifier=notifier or LoggingNotifier(),
        category_storage=CategoryStorage(category_dir or config.CATEGORY_STORAGE_DIR),
    )
