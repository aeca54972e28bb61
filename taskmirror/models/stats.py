"""Derived statistics models."""

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field


class CompletionStats(BaseModel):
    """Completion counts over the owner's non-deleted tasks."""

    completed: int = Field(0, description="Number of completed tasks")
    total: int = Field(0, description="Number of non-deleted tasks")
    percentage: int = Field(0, description="Rounded completion percentage (0 when total is 0)")


class CategoryStats(BaseModel):
    """Per-category task counts."""

    name: str
    total: int = 0
    completed: int = 0
    active: int = 0
    completion_rate: int = 0


class DailyCompletion(BaseModel):
    """Number of completed tasks attributed to one calendar day."""

    day: date
    label: str = Field(..., description="Short weekday name, e.g. 'Mon'")
    completed: int = 0


class TaskOverview(BaseModel):
    """Headline numbers for the analytics view."""

    total: int = 0
    active: int = 0
    completed: int = 0
    completion_rate: int = 0
    category_count: int = 0
    top_category: Optional[str] = None
