"""Aggregates over a list of (non-deleted) tasks.

Callers pass tasks already scoped to one owner and with trashed tasks removed;
``TaskStore`` does this via ``get_tasks(TaskFilter(deleted=False))``.
"""

from datetime import date, timedelta
from typing import Dict, Iterable, List

from taskmirror.models.task import Task, Priority
from taskmirror.models.stats import CompletionStats, CategoryStats, DailyCompletion, TaskOverview
from taskmirror.models.constants import COMPLETION_HISTORY_DAYS


def percent(part: int, whole: int) -> int:
    """Rounded percentage, half-up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)


def completion_stats(tasks: List[Task]) -> CompletionStats:
    completed = sum(1 for t in tasks if t.completed)
    total = len(tasks)
    return CompletionStats(completed=completed, total=total, percentage=percent(completed, total))


def category_breakdown(tasks: List[Task], categories: Iterable[str]) -> List[CategoryStats]:
    """Counts for every category in the set, in set order.

    Tasks whose category is not in the set are not counted anywhere here.
    """
    result = []
    for name in categories:
        in_category = [t for t in tasks if t.category == name]
        completed = sum(1 for t in in_category if t.completed)
        result.append(
            CategoryStats(
                name=name,
                total=len(in_category),
                completed=completed,
                active=len(in_category) - completed,
                completion_rate=percent(completed, len(in_category)),
            )
        )
    return result


def priority_distribution(tasks: List[Task]) -> Dict[str, int]:
    counts = {p.value: 0 for p in Priority}
    for task in tasks:
        counts[task.priority] = counts.get(task.priority, 0) + 1
    return counts


def daily_completions(tasks: List[Task], today: date, days: int = COMPLETION_HISTORY_DAYS) -> List[DailyCompletion]:
    """Completed tasks per day for the last ``days`` days, oldest first.

    Records carry no completion timestamp, so a completed task is attributed
    to the day it was created.
    """
    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    counts = {day: 0 for day in window}
    for task in tasks:
        if task.completed:
            day = task.created_at.date()
            if day in counts:
                counts[day] += 1
    return [DailyCompletion(day=day, label=day.strftime("%a"), completed=counts[day]) for day in window]


def task_overview(tasks: List[Task], categories: Iterable[str]) -> TaskOverview:
    categories = list(categories)
    completed = sum(1 for t in tasks if t.completed)
    breakdown = category_breakdown(tasks, categories)
    top_category = None
    if breakdown:
        # max() keeps the first of equal totals, i.e. set order breaks ties
        top_category = max(breakdown, key=lambda c: c.total).name
    return TaskOverview(
        total=len(tasks),
        active=len(tasks) - completed,
        completed=completed,
        completion_rate=percent(completed, len(tasks)),
        category_count=len(categories),
        top_category=top_category,
    )
