"""User-facing notification model."""

from enum import Enum
from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Notification severity."""
    NORMAL = "normal"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """Short human-readable outcome message."""

    title: str = Field(..., description="Headline, e.g. 'Task added'")
    description: str = Field("", description="One-sentence detail")
    severity: Severity = Field(Severity.NORMAL, description="Display severity")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
