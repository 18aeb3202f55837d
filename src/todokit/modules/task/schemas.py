"""Task schemas and status codes for the to-do list JSON contract."""

from __future__ import annotations

import datetime
from enum import IntEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class TaskStatus(IntEnum):
    """Closed set of task status codes exchanged as plain integers."""

    IN_PROGRESS = 0
    COMPLETED = 1
    TESTING = 2
    RETURNED = 3


def _date_field(name: str, description: str, **kwargs: Any) -> Any:
    """Field that accepts both camelCase and snake_case and serializes as camelCase."""
    snake = "".join(f"_{c.lower()}" if c.isupper() else c for c in name)
    return Field(
        validation_alias=AliasChoices(name, snake),
        serialization_alias=name,
        description=description,
        **kwargs,
    )


def to_calendar_date(value: Any) -> Any:
    """Truncate datetimes and ISO timestamps to a calendar date; blank strings count as missing."""
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            return datetime.date.fromisoformat(value)
        except ValueError:
            return datetime.datetime.fromisoformat(value).date()
    return value


class TaskIn(BaseModel):
    """Input schema for creating or replacing a task.

    Every field is optional at the schema level so that the business rules in
    ``TaskManager.validate`` decide which violation is reported first.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | None = Field(default=None, description="Ignored on create, overridden by the query id on update")
    text: str = Field(default="", description="Task description, 1-255 characters after trimming")
    created_date: datetime.date | None = _date_field("createdDate", "Day the task was created", default=None)
    expected_date: datetime.date | None = _date_field("expectedDate", "Day the task is expected done", default=None)
    status: int = Field(default=TaskStatus.IN_PROGRESS, description="Status code 0-3")

    @field_validator("created_date", "expected_date", mode="before")
    @classmethod
    def truncate_to_day(cls, value: Any) -> Any:
        return to_calendar_date(value)


class TaskOut(BaseModel):
    """Output schema for persisted tasks."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Store-assigned identifier")
    text: str
    created_date: datetime.date = _date_field("createdDate", "Day the task was created")
    expected_date: datetime.date = _date_field("expectedDate", "Day the task is expected done")
    status: TaskStatus
