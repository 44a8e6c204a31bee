# src/taskpad/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The screen controller depends on Protocols instead of concrete implementations.
This keeps the store and the UI host swappable and makes testing easier.
"""

from datetime import date, time
from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """Persistence gateway over the tasks table (see tasks.task_store.TaskStore)."""

    async def list_all(self) -> list[Task]: ...
    async def insert(self, task: Task) -> int: ...
    async def update(self, task: Task) -> None: ...
    async def delete(self, task_id: int) -> None: ...


class DueDatePicker(Protocol):
    """
    Host-side date and time pickers.

    Both return None when the user cancels.
    """

    async def pick_date(self, *, initial: date, first: date, last: date) -> date | None: ...
    async def pick_time(self, *, initial: time) -> time | None: ...


class Notifier(Protocol):
    """Non-blocking user-visible message (toast / status line)."""

    def notify(self, message: str) -> None: ...


class Prompter(Protocol):
    """
    Line input for dialogs.

    Returns the entered text (stripped), or None when input was cancelled (EOF / Ctrl-C).
    A blank answer returns `default`.
    """

    async def ask(self, prompt: str, default: str = "") -> str | None: ...
