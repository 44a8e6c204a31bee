# src/taskpad/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

NEW_TASK_ID = 0
# Sentinel id of a task that has not been stored yet; the store assigns the real one.


def _normalize_description(raw: str | None) -> str | None:
    if raw is None:
        return None
    return raw if raw.strip() else None


@dataclass(slots=True, frozen=True)
class Task:
    """
    A single to-do item.

    Optional fields are explicit:
    - description is None when absent (blank or whitespace-only text is normalized to None, other text is kept as is)
    - due_date is None when the task has no deadline (naive local wall-clock time)
    """

    id: int
    title: str
    description: str | None = None
    due_date: datetime | None = None
    is_completed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "description", _normalize_description(self.description))

    @classmethod
    def new(
        cls,
        title: str,
        description: str | None = None,
        due_date: datetime | None = None,
    ) -> Task:
        return cls(id=NEW_TASK_ID, title=title, description=description, due_date=due_date)

    @property
    def is_new(self) -> bool:
        return self.id == NEW_TASK_ID

    @property
    def has_description(self) -> bool:
        return self.description is not None

    @property
    def has_due_date(self) -> bool:
        return self.due_date is not None

    def toggled(self) -> Task:
        """Copy with the completion flag flipped; all other fields unchanged."""
        return replace(self, is_completed=not self.is_completed)
