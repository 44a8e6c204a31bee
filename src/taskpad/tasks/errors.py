# src/taskpad/tasks/errors.py

from __future__ import annotations


class StorageError(Exception):
    """Base class for task store failures."""


class StorageInitError(StorageError):
    """The store could not be opened or its schema created. Fatal for the app."""


class StorageReadError(StorageError):
    """Reading tasks failed; shown inline in place of the list."""


class StorageWriteError(StorageError):
    """Insert/update/delete failed; logged and reported as a notification."""
