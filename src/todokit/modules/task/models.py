"""Task ORM model for the to-do list."""

from __future__ import annotations

import datetime

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from todokit.core.models import Base

TEXT_MAX_LENGTH = 255


class Task(Base):
    """ORM model for a single to-do item with planned dates and a status code."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column("task_text", String(TEXT_MAX_LENGTH), nullable=False)
    created_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    expected_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)

    def __repr__(self) -> str:
        return f"Task(id={self.id!r}, status={self.status!r}, text={self.text!r})"
