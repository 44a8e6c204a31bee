# src/taskpad/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.screen import ListView
from ..core.state import AppState
from ..tasks.errors import StorageReadError
from ..tasks.formatting import format_due_datetime

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def render_view(view: ListView, title: str = "Tasks") -> str:
    lines = [f"== {title} =="]
    if view.error is not None:
        lines.append(view.error)
        return "\n".join(lines)

    if not view.rows:
        lines.append("  (no tasks, use /add)")
        return "\n".join(lines)

    width = len(str(len(view.rows)))
    for number, row in enumerate(view.rows, start=1):
        mark = "[x]" if row.task.is_completed else "[ ]"
        lines.append(f"  {number:>{width}}. {mark} {row.task.title}")
        if row.subtitle is not None:
            indent = " " * (width + 8)
            lines.extend(f"{indent}{text}" for text in row.subtitle.lines())
    return "\n".join(lines)


def app_title(state: AppState) -> str:
    return str(getattr(state.settings, "app_name", "Tasks"))


def _locale(state: AppState) -> str:
    return str(getattr(state.settings, "locale", "en"))


def _row_number(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


async def _run_dialog(state: AppState, done_text: str) -> str:
    """
    Walk the open add/edit dialog: title, description, due date, confirm.

    A blank answer keeps the current value; EOF at any prompt cancels the dialog.
    """
    screen = state.screen
    ask = state.prompter.ask

    form = screen.form
    if form is None:
        return "No dialog is open."

    title = await ask("Title", form.title)
    if title is None:
        screen.cancel()
        return "Cancelled."
    screen.set_title(title)

    description = await ask("Description ('-' to clear)", form.description)
    if description is None:
        screen.cancel()
        return "Cancelled."
    screen.set_description("" if description == "-" else description)

    while True:
        due = screen.form.due_date if screen.form else None
        current = format_due_datetime(due, _locale(state)) if due is not None else "none"
        choice = await ask(f"Due date [{current}]: (p)ick, (c)lear, Enter to keep")
        if choice is None:
            screen.cancel()
            return "Cancelled."
        choice = choice.lower()
        if choice in ("p", "pick"):
            await screen.pick_due_date()
            break
        if choice in ("c", "clear"):
            screen.clear_due_date()
            break
        if choice == "":
            break

    while not await screen.confirm():
        form = screen.form
        if form is not None and not form.title.strip():
            title = await ask("Title")
            if title is None:
                screen.cancel()
                return "Cancelled."
            screen.set_title(title)
            continue

        again = await ask("Retry save? (y/N)", "n")
        if again is None or again.lower() not in ("y", "yes"):
            screen.cancel()
            return "Changes discarded."

    return f"{done_text}\n{render_view(screen.view, app_title(state))}"


async def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    view = await state.screen.refresh()
    return render_view(view, app_title(state))


async def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    state.screen.open_add_dialog()
    if emit:
        emit("New task (Ctrl-D cancels).")
    return await _run_dialog(state, "Task added.")


async def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /edit N -> edit the task shown at row N
    """
    number = _row_number(args)
    task = state.screen.view.task_at(number) if number is not None else None
    if task is None:
        return "Usage: /edit N (N = row number from /list)."

    state.screen.open_edit_dialog(task)
    if emit:
        emit(f"Editing: {task.title} (blank keeps the current value, Ctrl-D cancels).")
    return await _run_dialog(state, "Task saved.")


async def cmd_done(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /done N -> toggle completion of the task at row N
    """
    number = _row_number(args)
    task = state.screen.view.task_at(number) if number is not None else None
    if task is None:
        return "Usage: /done N (N = row number from /list)."

    updated = await state.screen.toggle_completion(task)
    if updated is None:
        return "Task was not changed."
    return render_view(state.screen.view, app_title(state))


async def cmd_delete(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /del N -> delete the task at row N (no confirmation)
    """
    number = _row_number(args)
    task = state.screen.view.task_at(number) if number is not None else None
    if task is None:
        return "Usage: /del N (N = row number from /list)."

    if not await state.screen.delete_task(task):
        return "Task was not deleted."
    return render_view(state.screen.view, app_title(state))


async def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    try:
        total: int | str = await state.task_store.count()
    except StorageReadError as exc:
        logger.warning("Task count failed: %s", exc)
        total = "unavailable"
    return (
        "Status:\n"
        f"  App: {app_title(state)}\n"
        f"  Database: {state.task_store.db_path}\n"
        f"  Tasks stored: {total}\n"
        f"  Locale: {_locale(state)}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task (title, description, due date).")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit N.")
registry.register("done", cmd_done, help_text="Toggle completion: /done N.", aliases=["toggle"])
registry.register("del", cmd_delete, help_text="Delete a task immediately: /del N.", aliases=["rm"])
registry.register("status", cmd_status, help_text="Show database path and task count.")
