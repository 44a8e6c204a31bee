# src/taskpad/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TaskStore
from .ports import Prompter
from .screen import ScreenController


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules.
    settings: object

    task_store: TaskStore
    screen: ScreenController
    prompter: Prompter
