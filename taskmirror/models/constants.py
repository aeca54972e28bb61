"""Constants for taskmirror.

This module centralizes default values used throughout the application.
"""

from taskmirror.models.task import Priority


# Task defaults
DEFAULT_PRIORITY = Priority.MEDIUM

# Categories every user starts with (order is display order)
DEFAULT_CATEGORIES = ("Personal", "Work", "Study")

# Dashboard limits
RECENT_TASKS_LIMIT = 5
DUE_SOON_LIMIT = 3
HIGH_PRIORITY_LIMIT = 3

# Analytics
COMPLETION_HISTORY_DAYS = 7
