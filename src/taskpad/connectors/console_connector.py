# src/taskpad/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, time

from ..cli.commands import registry as command_registry
from ..cli.commands import app_title, render_view
from ..core.ports import Prompter
from ..core.state import AppState

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


class ConsolePrompter:
    """
    Prompter port over input().

    input() is called on the loop thread on purpose: the console is the only
    producer of work, and Ctrl-C must reach it as KeyboardInterrupt.
    """

    def __init__(self, input_fn: InputFn = input) -> None:
        self._input = input_fn

    async def ask(self, prompt: str, default: str = "") -> str | None:
        suffix = f" [{default}]" if default else ""
        try:
            raw = self._input(f"{prompt}{suffix}: ")
        except (EOFError, KeyboardInterrupt):
            print()
            return None
        text = raw.strip()
        return text if text else default


class ConsoleNotifier:
    """Notifier port: prints a one-line message and keeps going."""

    def notify(self, message: str) -> None:
        _print_ts(f"(!) {message}")


class ConsolePicker:
    """DueDatePicker port: asks for YYYY-MM-DD, then HH:MM, re-asking on bad input."""

    def __init__(self, prompter: Prompter) -> None:
        self._prompter = prompter

    async def pick_date(self, *, initial: date, first: date, last: date) -> date | None:
        while True:
            raw = await self._prompter.ask(
                f"Date YYYY-MM-DD ({first.isoformat()}..{last.isoformat()})",
                initial.isoformat(),
            )
            if raw is None:
                return None
            try:
                picked = date.fromisoformat(raw)
            except ValueError:
                print(f"Invalid date '{raw}'. Use YYYY-MM-DD.")
                continue
            if picked < first or picked > last:
                print(f"Pick a date between {first.isoformat()} and {last.isoformat()}.")
                continue
            return picked

    async def pick_time(self, *, initial: time) -> time | None:
        while True:
            raw = await self._prompter.ask("Time HH:MM", initial.strftime("%H:%M"))
            if raw is None:
                return None
            try:
                return datetime.strptime(raw, "%H:%M").time()
            except ValueError:
                print(f"Invalid time '{raw}'. Use HH:MM (24-hour).")


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands, /add to create a task, /exit to quit.\n")

    def emit(text: str) -> None:
        print(text, flush=True)

    await state.screen.refresh()
    print(render_view(state.screen.view, app_title(state)))

    while True:
        user_input = await state.prompter.ask(">>>")
        if user_input is None:
            logger.info("Console EOF received, exiting.")
            break

        if not user_input:
            user_input = "/list"

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = await command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."
            if state.screen.form is not None:
                state.screen.cancel()

        if response is None:
            response = "Commands start with '/'. Use /help to list them."

        print(response)

    logger.info("Console connector finished.")
