# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time

from taskpad.core.screen import ScreenState
from taskpad.tasks.errors import StorageReadError, StorageWriteError
from taskpad.tasks.task_models import Task


NOW = datetime(2030, 3, 10, 12, 0)


class FixedClock:
    """Deterministic clock for the screen controller."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@dataclass(slots=True)
class FakeNotifier:
    messages: list[str] = field(default_factory=list)

    def notify(self, message: str) -> None:
        self.messages.append(message)


class FakePrompter:
    """
    Scripted Prompter: pops answers in order.

    An answer of None simulates Ctrl-D; a blank answer returns the default.
    """

    def __init__(self, answers: list[str | None] | None = None) -> None:
        self.answers: list[str | None] = list(answers or [])
        self.prompts: list[str] = []

    async def ask(self, prompt: str, default: str = "") -> str | None:
        self.prompts.append(prompt)
        if not self.answers:
            return None
        answer = self.answers.pop(0)
        if answer is None:
            return None
        answer = answer.strip()
        return answer if answer else default


class FakePicker:
    """
    Scripted DueDatePicker.

    Records the arguments it was called with and, when `screen` is set,
    the controller state observed during each call.
    """

    def __init__(self, picked_date: date | None = None, picked_time: time | None = None) -> None:
        self.picked_date = picked_date
        self.picked_time = picked_time
        self.date_calls: list[tuple[date, date, date]] = []
        self.time_calls: list[time] = []
        self.seen_states: list[ScreenState] = []
        self.screen = None

    async def pick_date(self, *, initial: date, first: date, last: date) -> date | None:
        self.date_calls.append((initial, first, last))
        if self.screen is not None:
            self.seen_states.append(self.screen.state)
        return self.picked_date

    async def pick_time(self, *, initial: time) -> time | None:
        self.time_calls.append(initial)
        if self.screen is not None:
            self.seen_states.append(self.screen.state)
        return self.picked_time


class FailingTaskRepo:
    """
    TaskRepo wrapper that can be switched to fail reads and/or writes.

    Delegates to a real store otherwise.
    """

    def __init__(self, inner, *, fail_reads: bool = False, fail_writes: bool = False) -> None:
        self.inner = inner
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def list_all(self) -> list[Task]:
        if self.fail_reads:
            raise StorageReadError("Failed to read tasks: disk I/O error")
        return await self.inner.list_all()

    async def insert(self, task: Task) -> int:
        if self.fail_writes:
            raise StorageWriteError("Failed to write task: database is locked")
        return await self.inner.insert(task)

    async def update(self, task: Task) -> None:
        if self.fail_writes:
            raise StorageWriteError("Failed to write task: database is locked")
        await self.inner.update(task)

    async def delete(self, task_id: int) -> None:
        if self.fail_writes:
            raise StorageWriteError("Failed to write task: database is locked")
        await self.inner.delete(task_id)
