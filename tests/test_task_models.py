# tests/test_task_models.py

from __future__ import annotations

from datetime import datetime

from taskpad.tasks.task_models import NEW_TASK_ID, Task


def test_toggle_twice_restores_completion_and_keeps_fields() -> None:
    task = Task(id=4, title="Water plants", description="balcony", due_date=datetime(2030, 1, 2, 8, 0))

    once = task.toggled()
    twice = once.toggled()

    assert once.is_completed is True
    assert (once.id, once.title, once.description, once.due_date) == (
        task.id,
        task.title,
        task.description,
        task.due_date,
    )
    assert twice == task


def test_blank_description_is_absent() -> None:
    assert Task(id=1, title="a", description="").description is None
    assert Task(id=1, title="a", description="  \n").description is None
    assert Task(id=1, title="a", description=" keep ").description == " keep "
    assert not Task(id=1, title="a").has_description


def test_new_task_uses_sentinel_id() -> None:
    task = Task.new("Fresh", due_date=datetime(2030, 5, 1, 10, 0))
    assert task.id == NEW_TASK_ID
    assert task.is_new
    assert task.has_due_date
    assert task.is_completed is False
