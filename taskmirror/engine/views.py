"""List views over mirrored tasks: filtering, grouping, dashboard picks."""

from datetime import date, timedelta
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from taskmirror.models.task import Task, Priority
from taskmirror.models.constants import RECENT_TASKS_LIMIT, DUE_SOON_LIMIT, HIGH_PRIORITY_LIMIT


class StatusFilter(str, Enum):
    """Completion status selector for task lists."""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class TaskListFilters(BaseModel):
    """Filters of the task list screen; defaults show everything."""

    status: StatusFilter = Field(StatusFilter.ALL, description="all / active / completed")
    category: Optional[str] = Field(None, description="Only this category")
    priority: Optional[Priority] = Field(None, description="Only this priority (None = all)")
    due_on: Optional[date] = Field(None, description="Only tasks due on this date")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


def filter_tasks(tasks: List[Task], filters: TaskListFilters) -> List[Task]:
    """Apply list filters to non-deleted tasks, keeping order."""
    result = [t for t in tasks if not t.is_deleted]
    if filters.status == StatusFilter.ACTIVE:
        result = [t for t in result if not t.completed]
    elif filters.status == StatusFilter.COMPLETED:
        result = [t for t in result if t.completed]
    if filters.category:
        result = [t for t in result if t.category == filters.category]
    if filters.priority is not None:
        result = [t for t in result if t.priority == filters.priority]
    if filters.due_on is not None:
        result = [t for t in result if t.due_date == filters.due_on]
    return result


def group_by_created_date(tasks: List[Task]) -> Dict[date, List[Task]]:
    """Group tasks by creation date; groups and members keep input order."""
    groups: Dict[date, List[Task]] = {}
    for task in tasks:
        groups.setdefault(task.created_at.date(), []).append(task)
    return groups


def recent_tasks(tasks: List[Task], limit: int = RECENT_TASKS_LIMIT) -> List[Task]:
    return [t for t in tasks if not t.is_deleted][:limit]


def due_soon(tasks: List[Task], today: date, limit: int = DUE_SOON_LIMIT) -> List[Task]:
    """Open tasks due today or tomorrow, earliest first."""
    last_day = today + timedelta(days=1)
    candidates = [
        t for t in tasks
        if not t.is_deleted and not t.completed and t.due_date is not None and today <= t.due_date <= last_day
    ]
    return sorted(candidates, key=lambda t: t.due_date)[:limit]


def high_priority_tasks(tasks: List[Task], limit: int = HIGH_PRIORITY_LIMIT) -> List[Task]:
    return [
        t for t in tasks
        if not t.is_deleted and not t.completed and t.priority == Priority.HIGH
    ][:limit]
