"""Pure views and aggregates computed over mirrored tasks."""

from taskmirror.engine.analytics import (
    percent,
    completion_stats,
    category_breakdown,
    priority_distribution,
    daily_completions,
    task_overview,
)
from taskmirror.engine.views import (
    StatusFilter,
    TaskListFilters,
    filter_tasks,
    group_by_created_date,
    recent_tasks,
    due_soon,
    high_priority_tasks,
)

__all__ = [
    "percent",
    "completion_stats",
    "category_breakdown",
    "priority_distribution",
    "daily_completions",
    "task_overview",
    "StatusFilter",
    "TaskListFilters",
    "filter_tasks",
    "group_by_created_date",
    "recent_tasks",
    "due_soon",
    "high_priority_tasks",
]
