# src/taskpad/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- opens the TaskStore and wires it, with the console ports, into a ScreenController.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, ConsolePicker, ConsolePrompter
from ..core.ports import DueDatePicker, Notifier, Prompter
from ..core.screen import ScreenController
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


async def create_initial_state(
    *,
    settings=None,
    prompter: Prompter | None = None,
    picker: DueDatePicker | None = None,
    notifier: Notifier | None = None,
) -> AppState:
    """
    Create AppState from the provided settings and open the task store.

    Ports default to the console implementations; tests inject fakes.
    Raises StorageInitError when the database cannot be opened.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if prompter is None:
        prompter = ConsolePrompter()
    if picker is None:
        picker = ConsolePicker(prompter)
    if notifier is None:
        notifier = ConsoleNotifier()

    task_store = TaskStore(settings.tasks_db_path)
    await task_store.open()

    screen = ScreenController(
        task_store,
        picker,
        notifier,
        locale=settings.locale,
        due_soon_window=timedelta(days=settings.due_soon_days),
        picker_years_ahead=settings.picker_years_ahead,
    )

    return AppState(
        settings=settings,
        task_store=task_store,
        screen=screen,
        prompter=prompter,
    )
