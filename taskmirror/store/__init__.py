"""The task mirror and its category set."""

from taskmirror.store.task_store import TaskStore, StoreState
from taskmirror.store.categories import CategorySet, CategoryStorage

__all__ = ["TaskStore", "StoreState", "CategorySet", "CategoryStorage"]
