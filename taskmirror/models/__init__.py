"""Data models for taskmirror."""

from taskmirror.models.task import Task, TaskDraft, TaskPatch, TaskFilter, Priority
from taskmirror.models.user import User
from taskmirror.models.notification import Notification, Severity
from taskmirror.models.stats import CompletionStats, CategoryStats, DailyCompletion, TaskOverview

__all__ = [
    "Task",
    "TaskDraft",
    "TaskPatch",
    "TaskFilter",
    "Priority",
    "User",
    "Notification",
    "Severity",
    "CompletionStats",
    "CategoryStats",
    "DailyCompletion",
    "TaskOverview",
]
