# src/taskcli/tasks/task_errors.py

"""
Error taxonomy for the task store.

Every failure of the core surfaces as a TaskError subclass; the CLI is the only
place that turns one into a printed message and an exit status.
"""

from __future__ import annotations

from pathlib import Path


class TaskError(Exception):
    """Base class for all expected task store failures."""


class ReadError(TaskError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to read tasks file at {path}: {reason}")


class ParseError(TaskError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(
            f"Failed to parse tasks file at {path}: {reason}. "
            "Fix or delete the file to continue."
        )


class WriteError(TaskError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to save tasks file at {path}: {reason}")


class ValidationError(TaskError):
    pass


class NotFoundError(TaskError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"No task with id {task_id}")
