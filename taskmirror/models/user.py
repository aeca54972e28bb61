"""User data model for taskmirror."""

from typing import Optional
from pydantic import BaseModel, Field


class User(BaseModel):
    """Signed-in identity as supplied by the session provider."""

    id: str = Field(..., description="Unique user identifier")
    email: Optional[str] = Field(None, description="User email address")
    name: Optional[str] = Field(None, description="User display name")
