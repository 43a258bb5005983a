"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Stored task lists come back as untrusted text. Pydantic validates every field
on the way in (and on assignment), so a Task can never hold an empty title or
a non-boolean completion flag, whichever path produced it.
"""

from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class FilterMode(str, Enum):
    """Which slice of the task list the presentation layer is showing."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class Task(BaseModel):
    """
    A single to-do item.

    Tasks are immutable values: the store replaces a task with an updated
    copy rather than changing it, so views handed out can never alter the
    collection. Titles are trimmed on validation and must be non-empty.
    Strict mode keeps stored "true"/"1" strings from sneaking in as booleans.
    """
    model_config = ConfigDict(
        strict=True,
        frozen=True,
        str_strip_whitespace=True,
        extra='ignore',
    )

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    completed: bool = False


class UserPreferences(BaseModel):
    """
    User display preferences.

    Purely cosmetic; nothing here affects task data.
    """
    model_config = ConfigDict(from_attributes=True)

    theme: str = Field(default="light", pattern="^(light|dark)$", description="Theme: 'light' or 'dark'")
