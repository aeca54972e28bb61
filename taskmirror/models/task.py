"""Task data model for taskmirror."""

from datetime import date, datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, field_validator


class Priority(str, Enum):
    """Task priority enumeration."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(BaseModel):
    """Canonical Task model (one entry of the local mirror)."""

    id: str = Field(..., description="Unique task identifier (assigned by the record store)")
    owner_id: str = Field(..., description="User ID who owns this task")
    title: str = Field(..., min_length=1, description="Task title")
    description: Optional[str] = Field(None, description="Free-text task description")
    completed: bool = Field(False, description="Whether the task is completed")
    category: Optional[str] = Field(None, description="Category name (may be absent from the category set)")
    priority: Priority = Field(Priority.MEDIUM, description="Task priority")
    due_date: Optional[date] = Field(None, description="Due date (date-only)")
    created_at: datetime = Field(..., description="Creation timestamp (assigned by the record store)")
    is_deleted: bool = Field(False, description="Soft-delete flag (task is in the trash)")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class TaskDraft(BaseModel):
    """Caller-supplied fields for a new task."""

    title: str = Field(..., min_length=1, description="Task title")
    description: Optional[str] = Field(None, description="Free-text task description")
    completed: bool = Field(False, description="Initial completion state")
    category: Optional[str] = Field(None, description="Category name")
    priority: Priority = Field(Priority.MEDIUM, description="Task priority")
    due_date: Optional[date] = Field(None, description="Due date (date-only)")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        validate_default = True


class TaskPatch(BaseModel):
    """Partial update of the mutable task fields.

    Only fields explicitly set by the caller are sent to the record store and
    merged into the mirror. Setting an optional field to ``None`` clears it.
    """

    title: Optional[str] = Field(None, min_length=1, description="New title")
    description: Optional[str] = Field(None, description="New description")
    completed: Optional[bool] = Field(None, description="New completion state")
    category: Optional[str] = Field(None, description="New category")
    priority: Optional[Priority] = Field(None, description="New priority")
    due_date: Optional[date] = Field(None, description="New due date")
    is_deleted: Optional[bool] = Field(None, description="New soft-delete flag")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True

    @field_validator("title", "completed", "priority", "is_deleted")
    @classmethod
    def _not_null(cls, value):
        # Required on the task itself; may be omitted from a patch but not cleared.
        if value is None:
            raise ValueError("field cannot be cleared")
        return value

    def changes(self) -> dict:
        """Return only the fields the caller set."""
        return self.model_dump(exclude_unset=True)


class TaskFilter(BaseModel):
    """Equality filter for mirror queries; omitted fields impose no constraint."""

    completed: Optional[bool] = None
    category: Optional[str] = None
    deleted: Optional[bool] = None
