# src/taskpad/tasks/formatting.py

"""
Display strings derived from a task's due date.

- format_due_date:       "14-Mar"
- format_time_remaining: "3 days remaining" / "5 hours remaining" / "30 minutes remaining",
                         or an absolute "14-Mar 09:30" once the due time has passed
- compose_subtitle:      what the list shows under a task title
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from .task_models import Task

DEFAULT_LOCALE = "en"
DUE_SOON_WINDOW = timedelta(days=7)


@dataclass(slots=True, frozen=True)
class Phrases:
    months: tuple[str, ...]
    days_remaining: str
    hours_remaining: str
    minutes_remaining: str


PHRASES: dict[str, Phrases] = {
    "en": Phrases(
        months=("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
        days_remaining="{n} days remaining",
        hours_remaining="{n} hours remaining",
        minutes_remaining="{n} minutes remaining",
    ),
    "ru": Phrases(
        months=(
            "янв.", "февр.", "мар.", "апр.", "мая", "июн.",
            "июл.", "авг.", "сент.", "окт.", "нояб.", "дек.",
        ),
        days_remaining="{n} дней осталось",
        hours_remaining="{n} часов осталось",
        minutes_remaining="{n} минут осталось",
    ),
}


def phrases_for(locale: str | None) -> Phrases:
    key = (locale or DEFAULT_LOCALE).strip().lower().replace("-", "_").split("_")[0]
    return PHRASES.get(key, PHRASES[DEFAULT_LOCALE])


def format_due_date(due_date: datetime, locale: str | None = DEFAULT_LOCALE) -> str:
    months = phrases_for(locale).months
    return f"{due_date.day:02d}-{months[due_date.month - 1]}"


def format_due_datetime(due_date: datetime, locale: str | None = DEFAULT_LOCALE) -> str:
    # 12-hour clock without an am/pm marker, matching the list's compact style.
    return f"{format_due_date(due_date, locale)} {due_date:%I:%M}"


def format_time_remaining(
    due_date: datetime,
    now: datetime,
    locale: str | None = DEFAULT_LOCALE,
) -> str:
    p = phrases_for(locale)
    diff = due_date - now

    # int() truncates toward zero, so a past due date never yields a positive unit.
    days = int(diff / timedelta(days=1))
    if days > 0:
        return p.days_remaining.format(n=days)

    hours = int(diff / timedelta(hours=1))
    if hours > 0:
        return p.hours_remaining.format(n=hours)

    minutes = int(diff / timedelta(minutes=1))
    if minutes > 0:
        return p.minutes_remaining.format(n=minutes)

    return format_due_datetime(due_date, locale)


def is_due_soon(
    due_date: datetime,
    now: datetime,
    window: timedelta = DUE_SOON_WINDOW,
) -> bool:
    """True when the due date falls before now + window (past dates included)."""
    return due_date < now + window


@dataclass(slots=True, frozen=True)
class Subtitle:
    description: str | None = None
    due_date_text: str | None = None
    remaining_text: str | None = None

    def lines(self) -> list[str]:
        if self.description is not None:
            out = [self.description]
            if self.remaining_text:
                out.append(self.remaining_text)
            return out

        parts = [t for t in (self.due_date_text, self.remaining_text) if t]
        return ["  ".join(parts)] if parts else []


def compose_subtitle(
    task: Task,
    now: datetime,
    locale: str | None = DEFAULT_LOCALE,
    window: timedelta = DUE_SOON_WINDOW,
) -> Subtitle | None:
    """
    Build the text shown under a task title.

    - description + due date: description, then remaining time if due soon
    - description only:       description
    - due date only:          formatted date, plus remaining time if due soon
    - neither:                None
    """
    due = task.due_date
    remaining = None
    if due is not None and is_due_soon(due, now, window):
        remaining = format_time_remaining(due, now, locale)

    if task.has_description and task.has_due_date:
        return Subtitle(description=task.description, remaining_text=remaining)

    if task.has_description:
        return Subtitle(description=task.description)

    if due is not None:
        return Subtitle(due_date_text=format_due_date(due, locale), remaining_text=remaining)

    return None
