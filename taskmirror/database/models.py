"""SQLAlchemy database models for taskmirror."""

from datetime import datetime
from typing import Any, Dict
import uuid
from sqlalchemy import Column, String, Boolean, Date, DateTime

from taskmirror.database.database import Base
from taskmirror.models.task import Priority, Task

# Task field name -> persisted column name. Everything else keeps its name.
FIELD_TO_COLUMN = {
    "owner_id": "user_id",
}
COLUMN_TO_FIELD = {column: field for field, column in FIELD_TO_COLUMN.items()}

RECORD_COLUMNS = (
    "id",
    "user_id",
    "title",
    "description",
    "completed",
    "category",
    "priority",
    "due_date",
    "created_at",
    "is_deleted",
)


def to_record_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Rename task field names to record column names."""
    return {FIELD_TO_COLUMN.get(name, name): value for name, value in fields.items()}


def task_from_record(record: Dict[str, Any]) -> Task:
    """Build a Task from a persisted record (column names -> field names)."""
    fields = {COLUMN_TO_FIELD.get(name, name): value for name, value in record.items()}
    return Task(**fields)


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Owner
    user_id = Column(String, nullable=False, index=True)

    # Basic fields
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    category = Column(String, nullable=True)
    priority = Column(String, nullable=False, default=Priority.MEDIUM.value)
    due_date = Column(Date, nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Soft delete
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)

    def to_record(self) -> Dict[str, Any]:
        """Convert the row to a plain record dict keyed by column name."""
        return {column: getattr(self, column) for column in RECORD_COLUMNS}
