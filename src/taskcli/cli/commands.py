# src/taskcli/cli/commands.py

"""
The closed set of commands and their dispatch.

Each command is a small frozen dataclass; `execute` matches over all of them
and ends in `assert_never`, so adding a variant without handling it is a type
error rather than a silently ignored command.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import assert_never

from ..tasks.task_api import add_task, list_tasks, mark_done, remove_task
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AddCommand:
    description: str


@dataclass(frozen=True, slots=True)
class ListCommand:
    include_completed: bool = False


@dataclass(frozen=True, slots=True)
class DoneCommand:
    task_id: int


@dataclass(frozen=True, slots=True)
class RemoveCommand:
    task_id: int


Command = AddCommand | ListCommand | DoneCommand | RemoveCommand


@dataclass(frozen=True, slots=True)
class CommandResult:
    message: str
    changed: bool


def execute(command: Command, tasks: list[Task]) -> CommandResult:
    """Apply one command to the in-memory list. Errors propagate unchanged."""
    match command:
        case AddCommand(description=description):
            task = add_task(tasks, description)
            return CommandResult(f"Added task {task.id}: {task.description}", changed=True)
        case ListCommand(include_completed=include_completed):
            lines = list_tasks(tasks, include_completed)
            return CommandResult("\n".join(lines), changed=False)
        case DoneCommand(task_id=task_id):
            mark_done(tasks, task_id)
            return CommandResult(f"Marked task {task_id} as done.", changed=True)
        case RemoveCommand(task_id=task_id):
            task = remove_task(tasks, task_id)
            return CommandResult(f"Removed task {task.id}: {task.description}", changed=True)
        case _:
            assert_never(command)


def run_command(command: Command, store: TaskStore) -> str:
    """
    Load -> execute -> save (mutations only) -> message.

    Nothing is written when the command fails or only reads.
    """
    tasks = store.load()
    result = execute(command, tasks)
    if result.changed:
        store.save(tasks)
    logger.debug("%s done (changed=%s) path=%s", type(command).__name__, result.changed, store.path)
    return result.message
