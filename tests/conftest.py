# tests/conftest.py

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from types import SimpleNamespace

import pytest
import pytest_asyncio

from taskpad.connectors.console_connector import ConsolePicker
from taskpad.core.screen import ScreenController
from taskpad.core.state import AppState
from taskpad.tasks.task_store import TaskStore

from .fakes import NOW, FakeNotifier, FakePicker, FakePrompter, FixedClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Tasks",
        log_level="WARNING",
        locale="en",
        due_soon_days=7,
        picker_years_ahead=5,
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks_database.db",
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def picker() -> FakePicker:
    return FakePicker()


@pytest.fixture()
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest_asyncio.fixture()
async def store(settings: SimpleNamespace):
    """Real SQLite store in tmp_path; its correctness is part of what we test."""
    s = TaskStore(settings.tasks_db_path)
    await s.open()
    yield s
    await s.close()


@pytest.fixture()
def screen(store: TaskStore, picker: FakePicker, notifier: FakeNotifier, clock: FixedClock) -> ScreenController:
    controller = ScreenController(
        store,
        picker,
        notifier,
        locale="en",
        due_soon_window=timedelta(days=7),
        picker_years_ahead=5,
        clock=clock,
    )
    picker.screen = controller
    return controller


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    store: TaskStore,
    prompter: FakePrompter,
    notifier: FakeNotifier,
    clock: FixedClock,
) -> AppState:
    """
    AppState wired like the console app, with a scripted prompter.

    The picker is the real ConsolePicker so date/time parsing is exercised too.
    """
    controller = ScreenController(
        store,
        ConsolePicker(prompter),
        notifier,
        locale=settings.locale,
        due_soon_window=timedelta(days=settings.due_soon_days),
        picker_years_ahead=settings.picker_years_ahead,
        clock=clock,
    )
    return AppState(settings=settings, task_store=store, screen=controller, prompter=prompter)
