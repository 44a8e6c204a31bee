# src/taskpad/tasks/task_store.py

from __future__ import annotations

import asyncio
import logging
import sqlite3
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, TypeVar

from .errors import StorageInitError, StorageReadError, StorageWriteError
from .task_models import Task

logger = logging.getLogger(__name__)

T = TypeVar("T")

SCHEMA_VERSION = 1

_COLUMNS = "id, title, description, dueDate, isCompleted"


def due_date_to_millis(due_date: datetime | None) -> int | None:
    """Encode a local wall-clock timestamp as epoch milliseconds (None stays None)."""
    if due_date is None:
        return None
    return round(due_date.timestamp() * 1000)


def millis_to_due_date(raw: int | None) -> datetime | None:
    if raw is None:
        return None
    millis = int(raw)
    return datetime.fromtimestamp(millis // 1000) + timedelta(milliseconds=millis % 1000)


def _task_to_row(task: Task) -> tuple[Any, ...]:
    return (
        int(task.id),
        task.title,
        task.description,
        due_date_to_millis(task.due_date),
        1 if task.is_completed else 0,
    )


def _row_to_task(row: sqlite3.Row) -> Task:
    return Task(
        id=int(row["id"]),
        title=str(row["title"] or ""),
        description=row["description"],
        due_date=millis_to_due_date(row["dueDate"]),
        is_completed=row["isCompleted"] == 1,
    )


class TaskStore:
    """
    SQLite task store (the app's single local table).

    Lifecycle:
    - construct with a path, then `await open()` once at startup
    - `await close()` at shutdown

    One connection is kept for the store's lifetime. Every public method is a
    coroutine that runs the blocking sqlite call in a worker thread; callers
    await one operation at a time, SQLite serializes the rest.
    """

    def __init__(self, db_path: str | Path = "tasks_database.db") -> None:
        self._db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

    @property
    def db_path(self) -> Path:
        return self._db_path

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def open(self) -> None:
        if self._conn is not None:
            return
        self._conn = await asyncio.to_thread(self._open_conn)
        total = await self.count()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    async def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        await asyncio.to_thread(conn.close)
        logger.info("TaskStore closed db=%s", self._db_path)

    # ---- low-level helpers ----

    def _open_conn(self) -> sqlite3.Connection:
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        except (OSError, sqlite3.Error) as exc:
            raise StorageInitError(f"Cannot open task store at {self._db_path}: {exc}") from exc

        conn.row_factory = sqlite3.Row
        try:
            self._ensure_schema(conn)
        except sqlite3.Error as exc:
            conn.close()
            raise StorageInitError(f"Cannot create schema in {self._db_path}: {exc}") from exc
        except StorageInitError:
            conn.close()
            raise
        return conn

    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        (version,) = conn.execute("PRAGMA user_version").fetchone()
        if version > SCHEMA_VERSION:
            raise StorageInitError(
                f"Task store {self._db_path} has schema version {version}, "
                f"this build understands {SCHEMA_VERSION}"
            )
        if version == SCHEMA_VERSION:
            return

        with conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY,
                    title TEXT,
                    description TEXT,
                    dueDate INTEGER,
                    isCompleted INTEGER
                )
                """
            )
            conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        logger.info("TaskStore schema created db=%s version=%s", self._db_path, SCHEMA_VERSION)

    def _require_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageInitError("TaskStore is not open; call open() first")
        return self._conn

    async def _read(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        conn = self._require_conn()
        try:
            return await asyncio.to_thread(fn, conn)
        except sqlite3.Error as exc:
            raise StorageReadError(f"Failed to read tasks: {exc}") from exc

    async def _write(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        conn = self._require_conn()
        try:
            return await asyncio.to_thread(fn, conn)
        except sqlite3.Error as exc:
            raise StorageWriteError(f"Failed to write task: {exc}") from exc

    # ---- public API ----

    async def count(self) -> int:
        def run(conn: sqlite3.Connection) -> int:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

        return await self._read(run)

    async def list_all(self) -> list[Task]:
        """All tasks in the table's natural scan order."""

        def run(conn: sqlite3.Connection) -> list[Task]:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM tasks").fetchall()
            return [_row_to_task(r) for r in rows]

        return await self._read(run)

    async def insert(self, task: Task) -> int:
        """
        Store a task and return its id.

        A new task (sentinel id) gets an id from SQLite. A task with an explicit id
        replaces any existing row with that id entirely.
        """
        row = _task_to_row(task)

        def run(conn: sqlite3.Connection) -> int:
            with conn:
                if task.is_new:
                    cur = conn.execute(
                        "INSERT INTO tasks (title, description, dueDate, isCompleted) "
                        "VALUES (?, ?, ?, ?)",
                        row[1:],
                    )
                    rowid = cur.lastrowid
                    if rowid is None:
                        raise sqlite3.DatabaseError("SQLite did not return lastrowid for tasks insert")
                    return int(rowid)

                conn.execute(
                    f"INSERT OR REPLACE INTO tasks ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
                    row,
                )
                return int(task.id)

        task_id = await self._write(run)
        logger.debug("Task inserted id=%s due=%s", task_id, row[3])
        return task_id

    async def update(self, task: Task) -> None:
        """Overwrite the row with task.id; no-op if there is none."""
        row = _task_to_row(task)

        def run(conn: sqlite3.Connection) -> int:
            with conn:
                cur = conn.execute(
                    """
                    UPDATE tasks
                    SET title = ?, description = ?, dueDate = ?, isCompleted = ?
                    WHERE id = ?
                    """,
                    (*row[1:], row[0]),
                )
                return cur.rowcount

        changed = await self._write(run)
        logger.debug("Task updated id=%s rows=%s", task.id, changed)

    async def delete(self, task_id: int) -> None:
        def run(conn: sqlite3.Connection) -> int:
            with conn:
                cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
                return cur.rowcount

        removed = await self._write(run)
        logger.debug("Task deleted id=%s rows=%s", task_id, removed)
