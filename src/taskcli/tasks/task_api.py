# src/taskcli/tasks/task_api.py

"""
Operations on the in-memory task list.

None of these persist anything: the caller saves after a successful mutation
and must not save after a failed one (a failed call leaves the list untouched).
"""

from __future__ import annotations

import logging

from .task_errors import NotFoundError, ValidationError
from .task_models import Task

logger = logging.getLogger(__name__)

NO_TASKS_MESSAGE = "No tasks found."
NOTHING_TO_SHOW_MESSAGE = "No tasks to show (use --all to include completed)."

DONE_MARKER = "[x]"
PENDING_MARKER = "[ ]"


def next_task_id(tasks: list[Task]) -> int:
    """One more than the highest id present; gaps left by removals are never filled."""
    return max((t.id for t in tasks), default=0) + 1


def add_task(tasks: list[Task], description: str) -> Task:
    text = description.strip()
    if not text:
        raise ValidationError("Invalid task: empty description")

    task = Task(id=next_task_id(tasks), description=text, completed=False)
    tasks.append(task)
    logger.debug("Task added id=%s", task.id)
    return task


def format_task(task: Task) -> str:
    marker = DONE_MARKER if task.completed else PENDING_MARKER
    return f"{marker} {task.id}: {task.description}"


def list_tasks(tasks: list[Task], include_completed: bool = False) -> list[str]:
    """
    Render tasks in stored order, one line each.

    Two distinct single-line messages cover the empty cases:
    - the store itself is empty
    - everything is completed and completed tasks are filtered out
    """
    lines = [format_task(t) for t in tasks if include_completed or not t.completed]
    if lines:
        return lines
    if not tasks:
        return [NO_TASKS_MESSAGE]
    return [NOTHING_TO_SHOW_MESSAGE]


def find_task(tasks: list[Task], task_id: int) -> Task:
    for task in tasks:
        if task.id == task_id:
            return task
    raise NotFoundError(task_id)


def mark_done(tasks: list[Task], task_id: int) -> Task:
    # Marking an already completed task again is a silent success.
    task = find_task(tasks, task_id)
    task.completed = True
    logger.debug("Task marked done id=%s", task_id)
    return task


def remove_task(tasks: list[Task], task_id: int) -> Task:
    for index, task in enumerate(tasks):
        if task.id == task_id:
            del tasks[index]
            logger.debug("Task removed id=%s", task_id)
            return task
    raise NotFoundError(task_id)
