# tests/test_console_app.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskpad.cli.bootstrap import create_initial_state
from taskpad.cli.main import run_app
from taskpad.connectors.console_connector import ConsolePrompter, run_console_loop
from taskpad.core.state import AppState
from taskpad.logging_setup import _ConsoleNoiseFilter, setup_logging
from taskpad.tasks.task_models import Task

from .fakes import FakeNotifier, FakePicker, FakePrompter


@pytest.mark.asyncio
async def test_console_loop_add_toggle_exit(state: AppState, prompter: FakePrompter, capsys) -> None:
    prompter.answers = ["/add", "Read book", "", "", "/done 1", "hello", "/exit", "/never-reached"]

    await run_console_loop(state)

    out = capsys.readouterr().out
    assert "(no tasks, use /add)" in out
    assert "[x] Read book" in out
    assert "Commands start with '/'" in out
    assert prompter.answers == ["/never-reached"]


@pytest.mark.asyncio
async def test_console_loop_stops_on_eof(state: AppState, prompter: FakePrompter, capsys) -> None:
    await state.task_store.insert(Task(id=1, title="Existing"))
    prompter.answers = [""]

    await run_console_loop(state)

    out = capsys.readouterr().out
    assert out.count("1. [ ] Existing") == 2


@pytest.mark.asyncio
async def test_console_prompter_defaults_and_eof() -> None:
    answers = iter(["  typed  ", "   "])

    def fake_input(prompt: str) -> str:
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    p = ConsolePrompter(input_fn=fake_input)
    assert await p.ask("Title", "old") == "typed"
    assert await p.ask("Title", "old") == "old"
    assert await p.ask("Title") is None


@pytest.mark.asyncio
async def test_create_initial_state_opens_store(settings: SimpleNamespace) -> None:
    state = await create_initial_state(
        settings=settings,
        prompter=FakePrompter(),
        picker=FakePicker(),
        notifier=FakeNotifier(),
    )
    try:
        assert state.task_store.is_open
        assert state.task_store.db_path == settings.tasks_db_path
        assert (await state.screen.refresh()).rows == ()
    finally:
        await state.task_store.close()


@pytest.mark.asyncio
async def test_run_app_exits_1_when_store_cannot_open(settings: SimpleNamespace, tmp_path: Path, capsys) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    settings.tasks_db_path = blocker / "tasks.db"

    assert await run_app(settings) == 1
    assert "Cannot start" in capsys.readouterr().err


def test_setup_logging_writes_file_and_filters_console(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(log_dir=tmp_path / "logs", console_level=logging.INFO)
        logging.getLogger("taskpad.test").debug("debug line for the file")
        for h in root.handlers:
            h.flush()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)

    assert "debug line for the file" in (tmp_path / "logs" / "taskpad.log").read_text(encoding="utf-8")

    f = _ConsoleNoiseFilter()

    def rec(name: str, level: int) -> logging.LogRecord:
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    assert f.filter(rec("taskpad.core.screen", logging.INFO))
    assert not f.filter(rec("asyncio", logging.WARNING))
    assert f.filter(rec("asyncio", logging.ERROR))
