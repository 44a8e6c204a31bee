# src/taskpad/core/screen.py

from __future__ import annotations

"""
Task list screen controller.

Owns:
- the current list view (re-fetched from the store after every mutation),
- the add/edit dialog and its form value,
- the date -> time picking flow for the due date.

States:
  LIST -> ADD_DIALOG | EDIT_DIALOG -> (DATE_PICKING -> TIME_PICKING) -> back to the dialog
  dialog --confirm/cancel--> LIST

The UI host (console connector) only renders `view` and forwards user actions.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from enum import Enum

from ..tasks.errors import StorageReadError, StorageWriteError
from ..tasks.formatting import DEFAULT_LOCALE, DUE_SOON_WINDOW, Subtitle, compose_subtitle
from ..tasks.task_models import Task
from .ports import DueDatePicker, Notifier, TaskRepo

logger = logging.getLogger(__name__)


class ScreenState(str, Enum):
    LIST = "list"
    ADD_DIALOG = "add_dialog"
    EDIT_DIALOG = "edit_dialog"
    DATE_PICKING = "date_picking"
    TIME_PICKING = "time_picking"


_DIALOG_STATES = (ScreenState.ADD_DIALOG, ScreenState.EDIT_DIALOG)


class ScreenStateError(RuntimeError):
    """A dialog action was requested while the screen was in another state."""


@dataclass(slots=True, frozen=True)
class TaskForm:
    """
    Dialog contents. A fresh value per dialog; committed only on confirm.

    task_id is None for the add dialog.
    """

    title: str = ""
    description: str = ""
    due_date: datetime | None = None
    task_id: int | None = None
    is_completed: bool = False

    @classmethod
    def for_task(cls, task: Task) -> TaskForm:
        return cls(
            title=task.title,
            description=task.description or "",
            due_date=task.due_date,
            task_id=task.id,
            is_completed=task.is_completed,
        )

    @property
    def is_edit(self) -> bool:
        return self.task_id is not None

    def to_task(self) -> Task:
        title = self.title.strip()
        description = self.description.strip()
        if self.task_id is None:
            return Task.new(title, description, self.due_date)
        return Task(
            id=self.task_id,
            title=title,
            description=description,
            due_date=self.due_date,
            is_completed=self.is_completed,
        )


@dataclass(slots=True, frozen=True)
class TaskRow:
    task: Task
    subtitle: Subtitle | None


@dataclass(slots=True, frozen=True)
class ListView:
    rows: tuple[TaskRow, ...] = ()
    error: str | None = None

    def task_at(self, number: int) -> Task | None:
        """Task shown at 1-based row `number`, or None."""
        if number < 1 or number > len(self.rows):
            return None
        return self.rows[number - 1].task


class ScreenController:
    def __init__(
        self,
        repo: TaskRepo,
        picker: DueDatePicker,
        notifier: Notifier,
        *,
        locale: str = DEFAULT_LOCALE,
        due_soon_window: timedelta = DUE_SOON_WINDOW,
        picker_years_ahead: int = 5,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._repo = repo
        self._picker = picker
        self._notifier = notifier
        self._locale = locale
        self._due_soon_window = due_soon_window
        self._picker_years_ahead = max(1, int(picker_years_ahead))
        self._clock = clock

        self._state = ScreenState.LIST
        self._dialog: ScreenState | None = None
        self._form: TaskForm | None = None
        self._view = ListView()

    @property
    def state(self) -> ScreenState:
        return self._state

    @property
    def form(self) -> TaskForm | None:
        return self._form

    @property
    def view(self) -> ListView:
        return self._view

    # ---- list ----

    async def refresh(self) -> ListView:
        try:
            tasks = await self._repo.list_all()
        except StorageReadError as exc:
            logger.exception("Failed to load tasks")
            self._view = ListView(error=f"Error: {exc}")
            return self._view

        now = self._clock()
        self._view = ListView(
            rows=tuple(
                TaskRow(task=t, subtitle=compose_subtitle(t, now, self._locale, self._due_soon_window))
                for t in tasks
            )
        )
        return self._view

    async def toggle_completion(self, task: Task) -> Task | None:
        """Flip completion and persist immediately. Works in any screen state."""
        updated = task.toggled()
        try:
            await self._repo.update(updated)
        except StorageWriteError as exc:
            self._report_write_error("update", task.id, exc)
            return None
        form = self._form
        if form is not None and form.task_id == task.id:
            self._form = replace(form, is_completed=updated.is_completed)
        logger.info("Task %s completed=%s", task.id, updated.is_completed)
        await self.refresh()
        return updated

    async def delete_task(self, task: Task) -> bool:
        try:
            await self._repo.delete(task.id)
        except StorageWriteError as exc:
            self._report_write_error("delete", task.id, exc)
            return False
        logger.info("Task %s deleted", task.id)
        await self.refresh()
        return True

    # ---- dialog ----

    def open_add_dialog(self) -> TaskForm:
        self._open_dialog(ScreenState.ADD_DIALOG, TaskForm())
        return self._require_form()

    def open_edit_dialog(self, task: Task) -> TaskForm:
        self._open_dialog(ScreenState.EDIT_DIALOG, TaskForm.for_task(task))
        return self._require_form()

    def set_title(self, title: str) -> TaskForm:
        self._require_dialog()
        self._form = replace(self._require_form(), title=title)
        return self._form

    def set_description(self, description: str) -> TaskForm:
        self._require_dialog()
        self._form = replace(self._require_form(), description=description)
        return self._form

    def clear_due_date(self) -> TaskForm:
        self._require_dialog()
        self._form = replace(self._require_form(), due_date=None)
        return self._form

    async def pick_due_date(self) -> TaskForm:
        """
        Run the date picker, then the time picker, and combine both into the form's due date.

        Cancelling either picker keeps the previous due date.
        """
        dialog = self._require_dialog()
        form = self._require_form()

        now = self._clock()
        first = now.date()
        last = date(first.year + self._picker_years_ahead, 1, 1)
        initial = form.due_date.date() if form.due_date is not None else first
        initial = min(max(initial, first), last)

        try:
            self._state = ScreenState.DATE_PICKING
            picked_date = await self._picker.pick_date(initial=initial, first=first, last=last)
            if picked_date is None:
                return form

            self._state = ScreenState.TIME_PICKING
            picked_time = await self._picker.pick_time(initial=now.time().replace(second=0, microsecond=0))
            if picked_time is None:
                return form

            due = datetime.combine(picked_date, picked_time.replace(second=0, microsecond=0))
            self._form = replace(form, due_date=due)
            return self._form
        finally:
            self._state = dialog

    async def confirm(self) -> bool:
        """
        Commit the dialog: insert (add) or update (edit), close it and refresh the list.

        Returns False and keeps the dialog open when the title is blank or the write fails.
        """
        dialog = self._require_dialog()
        form = self._require_form()

        if not form.title.strip():
            self._notifier.notify("Title cannot be empty.")
            return False

        task = form.to_task()
        try:
            if dialog == ScreenState.ADD_DIALOG:
                task_id = await self._repo.insert(task)
            else:
                await self._repo.update(task)
                task_id = task.id
        except StorageWriteError as exc:
            self._report_write_error("insert" if dialog == ScreenState.ADD_DIALOG else "update", task.id, exc)
            return False

        logger.info("Task %s saved (%s)", task_id, dialog.value)
        self._close_dialog()
        await self.refresh()
        return True

    def cancel(self) -> None:
        self._require_dialog()
        self._close_dialog()

    # ---- helpers ----

    def _open_dialog(self, dialog: ScreenState, form: TaskForm) -> None:
        if self._state != ScreenState.LIST:
            raise ScreenStateError(f"Cannot open {dialog.value} while in {self._state.value}")
        self._state = dialog
        self._dialog = dialog
        self._form = form

    def _close_dialog(self) -> None:
        self._state = ScreenState.LIST
        self._dialog = None
        self._form = None

    def _require_dialog(self) -> ScreenState:
        if self._state not in _DIALOG_STATES or self._dialog is None:
            raise ScreenStateError(f"No dialog is open (state={self._state.value})")
        return self._dialog

    def _require_form(self) -> TaskForm:
        if self._form is None:
            raise ScreenStateError("No dialog form")
        return self._form

    def _report_write_error(self, op: str, task_id: int, exc: StorageWriteError) -> None:
        logger.exception("Task %s failed id=%s", op, task_id, exc_info=exc)
        self._notifier.notify(f"Could not {op} task: {exc}")
